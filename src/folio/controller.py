# SPDX-License-Identifier: MIT

from typing import Callable, Optional

from folio.exception import InvalidParent, NotFound
from folio.model.entity_id import EntityId
from folio.repository.store import EntityStore
from folio.service import reorder, session, trash


class DropZone:
    BEFORE = "before"
    INSIDE = "inside"
    AFTER = "after"


def resolve_drop_zone(offset: float, height: float) -> str:
    """
    Decide what a drop at ``offset`` pixels from the top of a target means.

    The top quarter inserts before the target, the bottom quarter inserts
    after it, and the middle half drops into it.
    """
    if height <= 0:
        return DropZone.INSIDE
    ratio = offset / height
    if ratio < 0.25:
        return DropZone.BEFORE
    if ratio > 0.75:
        return DropZone.AFTER
    return DropZone.INSIDE


def always_confirm(message: str) -> bool:
    return True


class StoreController:
    """
    The layer a user interface talks to.

    Destructive operations ask the caller-supplied ``confirm`` callable
    first and do nothing when it returns False. Drops are translated into
    the matching reorder or move operation.
    """

    def __init__(
        self,
        store: EntityStore,
        confirm: Callable[[str], bool] = always_confirm,
    ) -> None:
        self.store = store
        self.confirm = confirm

    def delete_container(self, id: EntityId) -> Optional[list[EntityId]]:
        container = self.store.find_container(id)
        if not self.confirm(f"Move folder '{container['name']}' to trash?"):
            return None
        return trash.delete_container(self.store, id)

    def delete_item(self, id: EntityId) -> Optional[EntityId]:
        item = self.store.find_item(id)
        if not self.confirm(f"Move '{item['title']}' to trash?"):
            return None
        return trash.delete_item(self.store, id)

    def purge(self, trash_id: EntityId) -> bool:
        self.store.find_trash_entry(trash_id)
        if not self.confirm("Delete permanently? This cannot be undone."):
            return False
        trash.purge(self.store, trash_id)
        return True

    def purge_all(self) -> int:
        if not self.store.trash:
            return 0
        if not self.confirm(
            f"Permanently delete {len(self.store.trash)} item(s) in trash? "
            "This cannot be undone."
        ):
            return 0
        return trash.purge_all(self.store)

    def drop(self, dragged_id: EntityId, target_id: EntityId, zone: str) -> None:
        """
        Apply a drag-and-drop of a container or item onto a target.

        - container on container: reorder before/after, or nest inside
        - item on item: reorder before/after, or move into the target's
          container
        - item on container: move into the container whatever the zone
        """
        if self.store.container_exists(dragged_id):
            if not self.store.container_exists(target_id):
                raise InvalidParent(target_id)
            if zone == DropZone.INSIDE:
                reorder.reparent_container(self.store, dragged_id, target_id)
            else:
                reorder.reorder_siblings(
                    self.store, dragged_id, target_id, zone == DropZone.BEFORE
                )
            return

        if not self.store.item_exists(dragged_id):
            raise NotFound(dragged_id)

        if self.store.container_exists(target_id):
            reorder.move_item(self.store, dragged_id, target_id)
        elif zone == DropZone.INSIDE:
            target = self.store.find_item(target_id)
            reorder.move_item(self.store, dragged_id, target["container_id"])
        else:
            reorder.reorder_items(
                self.store, dragged_id, target_id, zone == DropZone.BEFORE
            )

    def open_item(self, id: EntityId) -> None:
        session.select_item(self.store, id)
