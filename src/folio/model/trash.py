# SPDX-License-Identifier: MIT

from typing import Final, Literal, Optional, TypeAlias, TypedDict

import pendulum

from folio.model.entity_id import EntityId


class TrashKind:
    CONTAINER: Final = "container"
    ITEM: Final = "item"


class ContainerTrashEntry(TypedDict):
    kind: Literal["container"]
    id: EntityId
    name: str
    parent_id: Optional[EntityId]
    deleted_at: pendulum.DateTime


class ItemTrashEntry(TypedDict):
    kind: Literal["item"]
    id: EntityId
    title: str
    content: str
    container_id: EntityId
    tags: set[str]
    deleted_at: pendulum.DateTime


TrashEntry: TypeAlias = ContainerTrashEntry | ItemTrashEntry
