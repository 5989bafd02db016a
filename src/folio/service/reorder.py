# SPDX-License-Identifier: MIT

import logging
from typing import Callable, Optional, TypeVar

from folio.exception import (
    CycleDetected,
    InvalidContainer,
    InvalidParent,
    SystemContainerImmutable,
)
from folio.model.entity_id import EntityId
from folio.repository.store import EntityStore

logger = logging.getLogger(__name__)

T = TypeVar("T")


def reorder_within(
    ids: list[EntityId], dragged_id: EntityId, target_id: EntityId, insert_before: bool
) -> list[EntityId]:
    """
    Move ``dragged_id`` next to ``target_id`` in an ordered list of ids.

    The dragged id is removed first, then reinserted immediately before or
    after the target's position in the shortened list.
    """
    if dragged_id == target_id:
        return list(ids)

    reordered = [id for id in ids if id != dragged_id]
    target_index = reordered.index(target_id)
    reordered.insert(target_index if insert_before else target_index + 1, dragged_id)
    return reordered


def reorder_group(
    entities: list[T],
    in_group: Callable[[T], bool],
    get_id: Callable[[T], EntityId],
    dragged_id: EntityId,
    target_id: EntityId,
    insert_before: bool,
) -> list[T]:
    """
    Reorder one sibling group and rebuild the store order.

    The result is every entity outside the group in its original relative
    order, followed by the reordered group.
    """
    others = [entity for entity in entities if not in_group(entity)]
    group = [entity for entity in entities if in_group(entity)]

    by_id = {get_id(entity): entity for entity in group}
    order = reorder_within(
        [get_id(entity) for entity in group], dragged_id, target_id, insert_before
    )
    return others + [by_id[id] for id in order]


def __check_reparent(
    store: EntityStore, container_id: EntityId, new_parent_id: Optional[EntityId]
) -> None:
    store.find_container(container_id)
    if store.is_system_container(container_id):
        raise SystemContainerImmutable(container_id)
    if new_parent_id is None:
        return
    if new_parent_id == container_id:
        raise CycleDetected(container_id, new_parent_id)
    if not store.container_exists(new_parent_id):
        raise InvalidParent(new_parent_id)
    if new_parent_id in store.get_descendant_container_ids(container_id):
        raise CycleDetected(container_id, new_parent_id)


def reparent_container(
    store: EntityStore, container_id: EntityId, new_parent_id: Optional[EntityId]
) -> None:
    """
    Make ``new_parent_id`` the parent of a container; ``None`` moves it to
    the top level.

    Raises:
        NotFound: If the container does not exist
        SystemContainerImmutable: If the container is a system container
        CycleDetected: If the new parent is the container or a descendant
        InvalidParent: If the new parent does not exist
    """
    __check_reparent(store, container_id, new_parent_id)

    container = store.find_container(container_id)
    container["parent_id"] = new_parent_id
    logger.debug("moved container %s under %s", container_id, new_parent_id)
    store.commit()


def reorder_siblings(
    store: EntityStore, dragged_id: EntityId, target_id: EntityId, insert_before: bool
) -> None:
    """
    Place a container immediately before or after a target container.

    When the two have different parents the dragged container first moves
    to the target's parent, with the same checks as ``reparent_container``.
    """
    dragged = store.find_container(dragged_id)
    target = store.find_container(target_id)
    if dragged_id == target_id:
        return

    parent_id = target["parent_id"]
    if dragged["parent_id"] != parent_id:
        __check_reparent(store, dragged_id, parent_id)
        dragged["parent_id"] = parent_id

    store.containers = reorder_group(
        store.containers,
        lambda container: container["parent_id"] == parent_id,
        lambda container: container["id"],
        dragged_id,
        target_id,
        insert_before,
    )
    logger.debug(
        "placed container %s %s %s",
        dragged_id,
        "before" if insert_before else "after",
        target_id,
    )
    store.commit()


def move_item(store: EntityStore, item_id: EntityId, new_container_id: EntityId) -> None:
    """Move an item to the end of another container's items."""
    item = store.find_item(item_id)
    if not store.container_exists(new_container_id):
        raise InvalidContainer(new_container_id)
    if item["container_id"] == new_container_id:
        return

    item["container_id"] = new_container_id
    store.items = [other for other in store.items if other is not item] + [item]
    logger.debug("moved item %s to %s", item_id, new_container_id)
    store.commit()


def reorder_items(
    store: EntityStore, dragged_id: EntityId, target_id: EntityId, insert_before: bool
) -> None:
    """
    Place an item immediately before or after a target item.

    An item dragged onto an item of another container moves into that
    container first.
    """
    dragged = store.find_item(dragged_id)
    target = store.find_item(target_id)
    if dragged_id == target_id:
        return

    container_id = target["container_id"]
    dragged["container_id"] = container_id

    store.items = reorder_group(
        store.items,
        lambda item: item["container_id"] == container_id,
        lambda item: item["id"],
        dragged_id,
        target_id,
        insert_before,
    )
    store.commit()
