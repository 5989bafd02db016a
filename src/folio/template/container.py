# SPDX-License-Identifier: MIT

from typing import Iterable, Optional

from folio.model.container import Container
from folio.model.entity_id import (
    INBOX_CONTAINER_ID,
    ROOT_CONTAINER_ID,
    SYSTEM_CONTAINER_IDS,
    EntityId,
    generate_entity_id,
)

SYSTEM_CONTAINER_NAMES: dict[EntityId, str] = {
    ROOT_CONTAINER_ID: "All Notes",
    INBOX_CONTAINER_ID: "Inbox",
}


def get_container_template(
    name: str, parent_id: Optional[EntityId] = None
) -> Container:
    return {
        "id": generate_entity_id(),
        "name": name.strip(),
        "parent_id": parent_id,
    }


def get_system_container_templates(
    system_container_ids: Iterable[EntityId] = SYSTEM_CONTAINER_IDS,
) -> list[Container]:
    return [
        {
            "id": id,
            "name": SYSTEM_CONTAINER_NAMES.get(id, id.replace("_", " ").title()),
            "parent_id": None,
        }
        for id in system_container_ids
    ]
