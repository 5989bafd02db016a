# SPDX-License-Identifier: MIT

from typing import Optional, TypedDict

from folio.model.entity_id import EntityId


class Container(TypedDict):
    id: EntityId
    name: str
    parent_id: Optional[EntityId]
