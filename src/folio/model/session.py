# SPDX-License-Identifier: MIT

from typing import Optional, TypedDict

from folio.model.entity_id import EntityId


class Session(TypedDict):
    open_ids: list[EntityId]
    active_id: Optional[EntityId]


class PaneState:
    EMPTY = "empty"
    VIEWING = "viewing"
