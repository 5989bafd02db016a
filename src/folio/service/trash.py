# SPDX-License-Identifier: MIT

import logging

import pendulum

from folio.exception import SystemContainerImmutable
from folio.model.container import Container
from folio.model.entity_id import EntityId
from folio.model.item import Item
from folio.model.trash import (
    ContainerTrashEntry,
    ItemTrashEntry,
    TrashEntry,
    TrashKind,
)
from folio.repository.store import EntityStore, blob_key
from folio.service.session import forget_item
from folio.time import now_utc

logger = logging.getLogger(__name__)


def delete_container(store: EntityStore, id: EntityId) -> list[EntityId]:
    """
    Move a container, everything below it and all of their items to the trash.

    Trash entries are emitted depth first: the items of a container come
    before its child containers, and children come before their parent.

    Returns:
        Trash ids of the emitted entries, in emission order
    """
    container = store.find_container(id)
    if store.is_system_container(id):
        raise SystemContainerImmutable(id)

    deleted_at = now_utc()
    entries: list[TrashEntry] = []
    __collect_container(store, container, deleted_at, entries, set())

    trashed_container_ids = {
        entry["id"] for entry in entries if entry["kind"] == TrashKind.CONTAINER
    }
    trashed_item_ids = {
        entry["id"] for entry in entries if entry["kind"] == TrashKind.ITEM
    }

    store.items = [item for item in store.items if item["id"] not in trashed_item_ids]
    store.containers = [
        c for c in store.containers if c["id"] not in trashed_container_ids
    ]
    store.favorites = [
        favorite_id
        for favorite_id in store.favorites
        if favorite_id not in trashed_container_ids
    ]
    for item_id in trashed_item_ids:
        forget_item(store, item_id)
    store.trash.extend(entries)

    logger.debug(
        "trashed container %s with %d container(s) and %d item(s)",
        id,
        len(trashed_container_ids),
        len(trashed_item_ids),
    )
    trash_ids = [entry["id"] for entry in entries]
    store.commit(trash_ids)
    return trash_ids


def __collect_container(
    store: EntityStore,
    container: Container,
    deleted_at: pendulum.DateTime,
    entries: list[TrashEntry],
    visited: set[EntityId],
) -> None:
    visited.add(container["id"])

    for item in store.items:
        if item["container_id"] == container["id"]:
            entries.append(__item_entry(item, deleted_at))

    for child in store.containers:
        if child["parent_id"] == container["id"] and child["id"] not in visited:
            __collect_container(store, child, deleted_at, entries, visited)

    container_entry: ContainerTrashEntry = {
        "kind": "container",
        "id": container["id"],
        "name": container["name"],
        "parent_id": container["parent_id"],
        "deleted_at": deleted_at,
    }
    entries.append(container_entry)


def __item_entry(item: Item, deleted_at: pendulum.DateTime) -> ItemTrashEntry:
    return {
        "kind": "item",
        "id": item["id"],
        "title": item["title"],
        "content": item["content"],
        "container_id": item["container_id"],
        "tags": set(item["tags"]),
        "deleted_at": deleted_at,
    }


def delete_item(store: EntityStore, id: EntityId) -> EntityId:
    """Move an item to the trash and close its tab. Returns the trash id."""
    item = store.find_item(id)

    store.items = [other for other in store.items if other["id"] != id]
    forget_item(store, id)
    store.trash.append(__item_entry(item, now_utc()))

    logger.debug("trashed item %s", id)
    store.commit(id)
    return id


def restore(store: EntityStore, trash_id: EntityId) -> EntityId:
    """
    Bring a trashed container or item back with its original id.

    A container whose parent no longer exists is placed under the default
    container; an item whose container no longer exists goes to the default
    item container. Restored items get fresh timestamps.
    """
    entry = store.find_trash_entry(trash_id)

    if entry["kind"] == TrashKind.CONTAINER:
        parent_id = entry["parent_id"]
        if parent_id is not None and not store.container_exists(parent_id):
            parent_id = store.default_container_id
            if parent_id in store.implicit_root_ids:
                parent_id = None
        store.containers.append(
            {"id": entry["id"], "name": entry["name"], "parent_id": parent_id}
        )
    else:
        container_id = entry["container_id"]
        if not store.container_exists(container_id):
            container_id = store.default_item_container_id
        now = now_utc()
        store.items.append(
            {
                "id": entry["id"],
                "title": entry["title"],
                "content": entry["content"],
                "container_id": container_id,
                "tags": set(entry["tags"]),
                "created_at": now,
                "updated_at": now,
            }
        )

    store.trash = [other for other in store.trash if other is not entry]
    logger.debug("restored %s %s", entry["kind"], trash_id)
    store.commit(entry["id"])
    return entry["id"]


def purge(store: EntityStore, trash_id: EntityId) -> None:
    """Remove an entry from the trash for good."""
    entry = store.find_trash_entry(trash_id)

    store.trash = [other for other in store.trash if other is not entry]
    __discard_blob(store, entry)
    store.commit()


def purge_all(store: EntityStore) -> int:
    """Empty the trash. Returns the number of purged entries."""
    entries = store.trash
    store.trash = []
    for entry in entries:
        __discard_blob(store, entry)
    store.commit(len(entries))
    return len(entries)


def __discard_blob(store: EntityStore, entry: TrashEntry) -> None:
    if entry["kind"] != TrashKind.ITEM:
        return
    if blob_key(entry["content"]) is None:
        return
    still_referenced = any(
        item["content"] == entry["content"] for item in store.items
    ) or any(
        other["kind"] == TrashKind.ITEM and other["content"] == entry["content"]
        for other in store.trash
    )
    if not still_referenced:
        store.discard_blob(entry["content"])
