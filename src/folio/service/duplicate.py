# SPDX-License-Identifier: MIT

import logging
from typing import Optional

from folio.exception import SystemContainerImmutable
from folio.model.container import Container
from folio.model.entity_id import EntityId, generate_entity_id
from folio.model.item import Item
from folio.repository.store import EntityStore
from folio.time import now_utc

logger = logging.getLogger(__name__)

COPY_SUFFIX = " (Copy)"


def duplicate_item(store: EntityStore, id: EntityId) -> EntityId:
    """Copy an item into its own container. Returns the new item's id."""
    copy = __copy_item(store.find_item(id), None)
    copy["title"] = copy["title"] + COPY_SUFFIX
    store.items.append(copy)
    store.commit(copy["id"])
    return copy["id"]


def duplicate_container(store: EntityStore, id: EntityId) -> EntityId:
    """
    Copy a container next to the original, together with its items and,
    recursively, its child containers and their items.

    Returns:
        Id of the new top container of the copy
    """
    container = store.find_container(id)
    if store.is_system_container(id):
        raise SystemContainerImmutable(id)

    new_containers: list[Container] = []
    new_items: list[Item] = []
    top: Container = {
        "id": generate_entity_id(),
        "name": container["name"] + COPY_SUFFIX,
        "parent_id": container["parent_id"],
    }
    new_containers.append(top)
    __copy_contents(store, id, top["id"], new_containers, new_items, {id})

    store.containers.extend(new_containers)
    store.items.extend(new_items)
    logger.debug(
        "duplicated container %s as %s (%d containers, %d items)",
        id,
        top["id"],
        len(new_containers),
        len(new_items),
    )
    store.commit(top["id"])
    return top["id"]


def __copy_contents(
    store: EntityStore,
    source_id: EntityId,
    copy_id: EntityId,
    new_containers: list[Container],
    new_items: list[Item],
    visited: set[EntityId],
) -> None:
    for item in store.items:
        if item["container_id"] == source_id:
            new_items.append(__copy_item(item, copy_id))

    for child in store.containers:
        if child["parent_id"] != source_id or child["id"] in visited:
            continue
        visited.add(child["id"])
        child_copy: Container = {
            "id": generate_entity_id(),
            "name": child["name"],
            "parent_id": copy_id,
        }
        new_containers.append(child_copy)
        __copy_contents(
            store, child["id"], child_copy["id"], new_containers, new_items, visited
        )


def __copy_item(item: Item, container_id: Optional[EntityId]) -> Item:
    now = now_utc()
    return {
        "id": generate_entity_id(),
        "title": item["title"],
        "content": item["content"],
        "container_id": container_id or item["container_id"],
        "tags": set(item["tags"]),
        "created_at": now,
        "updated_at": now,
    }
