# SPDX-License-Identifier: MIT

from typing import TypedDict

import pendulum

from folio.model.entity_id import EntityId


class Item(TypedDict):
    id: EntityId
    title: str
    content: str
    container_id: EntityId
    tags: set[str]
    created_at: pendulum.DateTime
    updated_at: pendulum.DateTime
