# SPDX-License-Identifier: MIT

from typing import TypedDict

from folio.model.container import Container
from folio.model.entity_id import EntityId
from folio.model.item import Item
from folio.model.session import Session
from folio.model.trash import TrashEntry


class StoreState(TypedDict):
    containers: list[Container]
    items: list[Item]
    trash: list[TrashEntry]
    session: Session
    favorites: list[EntityId]
