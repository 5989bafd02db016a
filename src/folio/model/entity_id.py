# SPDX-License-Identifier: MIT

import uuid
from typing import TypeAlias

EntityId: TypeAlias = str

ROOT_CONTAINER_ID: EntityId = "root"
INBOX_CONTAINER_ID: EntityId = "inbox"

SYSTEM_CONTAINER_IDS: tuple[EntityId, ...] = (ROOT_CONTAINER_ID, INBOX_CONTAINER_ID)


def generate_entity_id() -> EntityId:
    return str(uuid.uuid4())
