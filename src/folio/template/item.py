# SPDX-License-Identifier: MIT

from typing import Iterable, Optional

from folio.model.entity_id import EntityId, generate_entity_id
from folio.model.item import Item
from folio.time import now_utc


def get_item_template(
    title: str,
    container_id: EntityId,
    content: str = "",
    tags: Optional[Iterable[str]] = None,
) -> Item:
    now = now_utc()
    return {
        "id": generate_entity_id(),
        "title": title.strip(),
        "content": content,
        "container_id": container_id,
        "tags": set(tags) if tags is not None else set(),
        "created_at": now,
        "updated_at": now,
    }
