# SPDX-License-Identifier: MIT

import logging
from copy import deepcopy
from typing import Any, Callable, Iterable, Optional

from folio.exception import (
    InvalidContainer,
    InvalidParent,
    NotFound,
    PersistenceFailed,
    SystemContainerImmutable,
)
from folio.model.container import Container
from folio.model.entity_id import (
    INBOX_CONTAINER_ID,
    ROOT_CONTAINER_ID,
    SYSTEM_CONTAINER_IDS,
    EntityId,
    generate_entity_id,
)
from folio.model.item import Item
from folio.model.session import Session
from folio.model.state import StoreState
from folio.model.trash import TrashEntry
from folio.persistence.adapter import PersistenceAdapter
from folio.persistence.blob import BlobStore
from folio.repository.document import deserialize_document, serialize_state
from folio.template.container import (
    get_container_template,
    get_system_container_templates,
)
from folio.template.item import get_item_template
from folio.template.session import get_session_template
from folio.time import now_utc

logger = logging.getLogger(__name__)

BLOB_REFERENCE_PREFIX = "blob:"

UPDATABLE_ITEM_FIELDS = ("title", "content", "tags")


class EntityStore:
    """
    Authoritative in-memory state of containers, items, trash and session.

    The store owns every entity. Query methods hand out deep copies, while
    the ``containers``/``items``/``trash``/``session``/``favorites``
    properties expose the live collections to the service functions that
    mutate them. Every mutation ends with ``commit()``, which saves the
    document through the persistence adapter and notifies subscribers.
    """

    def __init__(
        self,
        adapter: PersistenceAdapter,
        blob_store: Optional[BlobStore] = None,
        system_container_ids: Iterable[EntityId] = SYSTEM_CONTAINER_IDS,
        default_container_id: EntityId = ROOT_CONTAINER_ID,
        default_item_container_id: EntityId = INBOX_CONTAINER_ID,
        implicit_root_ids: Iterable[EntityId] = (),
    ) -> None:
        self.adapter = adapter
        self.blob_store = blob_store
        self.system_container_ids = tuple(system_container_ids)
        self.default_container_id = default_container_id
        self.default_item_container_id = default_item_container_id
        self.implicit_root_ids = frozenset(implicit_root_ids)
        self.is_dirty = False

        # Restore falls back to these, so they must always exist
        if (
            default_container_id not in self.system_container_ids
            and default_container_id not in self.implicit_root_ids
        ):
            raise ValueError(
                f"default container '{default_container_id}' is neither a system "
                "container nor an implicit root"
            )
        if default_item_container_id not in self.system_container_ids:
            raise ValueError(
                f"default item container '{default_item_container_id}' is not a "
                "system container"
            )

        self._containers: list[Container] = get_system_container_templates(
            self.system_container_ids
        )
        self._items: list[Item] = []
        self._trash: list[TrashEntry] = []
        self._session: Session = get_session_template()
        self._favorites: list[EntityId] = []
        self._listeners: list[Callable[[], None]] = []

    # live collections

    @property
    def containers(self) -> list[Container]:
        return self._containers

    @containers.setter
    def containers(self, containers: list[Container]) -> None:
        self._containers = containers

    @property
    def items(self) -> list[Item]:
        return self._items

    @items.setter
    def items(self, items: list[Item]) -> None:
        self._items = items

    @property
    def trash(self) -> list[TrashEntry]:
        return self._trash

    @trash.setter
    def trash(self, trash: list[TrashEntry]) -> None:
        self._trash = trash

    @property
    def session(self) -> Session:
        return self._session

    @property
    def favorites(self) -> list[EntityId]:
        return self._favorites

    @favorites.setter
    def favorites(self, favorites: list[EntityId]) -> None:
        self._favorites = favorites

    # loading and saving

    def load(self) -> None:
        """
        Replace the in-memory state with the adapter's document.

        System containers missing from the document are re-added and session
        entries naming items that no longer exist are dropped. Parent
        references are left untouched; see ``folio.service.repair``.
        """
        document = self.adapter.load()
        if document is None:
            logger.debug("no stored document, starting with an empty store")
            return

        state = deserialize_document(document)
        self._containers = state["containers"]
        self._items = state["items"]
        self._trash = state["trash"]
        self._session = state["session"]
        self._favorites = state["favorites"]

        existing_ids = {container["id"] for container in self._containers}
        for system_container in reversed(
            get_system_container_templates(self.system_container_ids)
        ):
            if system_container["id"] not in existing_ids:
                logger.info("re-adding missing system container %s", system_container["id"])
                self._containers.insert(0, system_container)

        item_ids = {item["id"] for item in self._items}
        self._session["open_ids"] = [
            id for id in self._session["open_ids"] if id in item_ids
        ]
        if self._session["active_id"] not in self._session["open_ids"]:
            self._session["active_id"] = (
                self._session["open_ids"][0] if self._session["open_ids"] else None
            )

    def snapshot(self) -> StoreState:
        return deepcopy(
            {
                "containers": self._containers,
                "items": self._items,
                "trash": self._trash,
                "session": self._session,
                "favorites": self._favorites,
            }
        )

    def flush(self) -> bool:
        if not self.is_dirty:
            return False
        try:
            self.adapter.save(serialize_state(self.snapshot()))
        except PersistenceFailed as error:
            logger.error("store changes are applied but not saved: %s", error.reason)
            raise
        self.is_dirty = False
        return True

    def commit(self, result: Any = None) -> None:
        """
        Persist the current state and tell subscribers to redraw.

        ``result`` is what the calling operation returns. A failed save
        raises PersistenceFailed with ``result`` attached, since the
        mutation has been applied regardless.
        """
        self.is_dirty = True
        try:
            self.flush()
        except PersistenceFailed as error:
            error.result = result
            raise
        finally:
            self.__notify()

    def subscribe(self, listener: Callable[[], None]) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def __notify(self) -> None:
        for listener in list(self._listeners):
            listener()

    # queries

    def is_system_container(self, id: Optional[EntityId]) -> bool:
        return id in self.system_container_ids

    def container_exists(self, id: Optional[EntityId]) -> bool:
        return any(container["id"] == id for container in self._containers)

    def item_exists(self, id: Optional[EntityId]) -> bool:
        return any(item["id"] == id for item in self._items)

    def find_container(self, id: EntityId) -> Container:
        for container in self._containers:
            if container["id"] == id:
                return container
        raise NotFound(id, "container")

    def find_item(self, id: EntityId) -> Item:
        for item in self._items:
            if item["id"] == id:
                return item
        raise NotFound(id, "item")

    def find_trash_entry(self, id: EntityId) -> TrashEntry:
        for entry in self._trash:
            if entry["id"] == id:
                return entry
        raise NotFound(id, "trash entry")

    def get_container(self, id: EntityId) -> Optional[Container]:
        container = next((c for c in self._containers if c["id"] == id), None)
        return deepcopy(container)

    def get_item(self, id: EntityId) -> Optional[Item]:
        item = next((i for i in self._items if i["id"] == id), None)
        return deepcopy(item)

    def get_containers(self) -> list[Container]:
        return deepcopy(self._containers)

    def get_items(self) -> list[Item]:
        return deepcopy(self._items)

    def get_trash(self) -> list[TrashEntry]:
        return deepcopy(self._trash)

    def get_session(self) -> Session:
        return deepcopy(self._session)

    def get_favorites(self) -> list[EntityId]:
        return list(self._favorites)

    def get_root_containers(self) -> list[Container]:
        return self.get_children(None)

    def get_children(self, container_id: Optional[EntityId]) -> list[Container]:
        return deepcopy(
            [c for c in self._containers if c["parent_id"] == container_id]
        )

    def get_items_of(self, container_id: EntityId) -> list[Item]:
        return deepcopy(
            [item for item in self._items if item["container_id"] == container_id]
        )

    def get_descendant_container_ids(self, container_id: EntityId) -> set[EntityId]:
        """
        All containers below ``container_id``, at any depth.

        Each id is visited at most once, so a corrupted cyclic parent graph
        still terminates.
        """
        children_by_parent: dict[Optional[EntityId], list[EntityId]] = {}
        for container in self._containers:
            children_by_parent.setdefault(container["parent_id"], []).append(
                container["id"]
            )

        descendants: set[EntityId] = set()
        pending = list(children_by_parent.get(container_id, []))
        while pending:
            current = pending.pop()
            if current in descendants:
                continue
            descendants.add(current)
            pending.extend(children_by_parent.get(current, []))
        return descendants

    def get_container_path(self, container_id: EntityId) -> list[Container]:
        """Ancestors of a container from the top level down, ending with itself."""
        containers_by_id = {c["id"]: c for c in self._containers}
        path: list[Container] = []
        seen: set[EntityId] = set()
        current = containers_by_id.get(container_id)
        while current is not None and current["id"] not in seen:
            seen.add(current["id"])
            path.insert(0, current)
            parent_id = current["parent_id"]
            current = containers_by_id.get(parent_id) if parent_id else None
        return deepcopy(path)

    # mutations

    def create_container(
        self, name: str, parent_id: Optional[EntityId] = None
    ) -> Container:
        if parent_id is not None and not self.container_exists(parent_id):
            raise InvalidParent(parent_id)

        container = get_container_template(name or "", parent_id)
        if not container["name"]:
            container["name"] = "Untitled Folder"
        self._containers.append(container)
        logger.debug("created container %s under %s", container["id"], parent_id)
        created = deepcopy(container)
        self.commit(created)
        return created

    def rename_container(self, id: EntityId, name: str) -> None:
        container = self.find_container(id)
        if self.is_system_container(id):
            raise SystemContainerImmutable(id)
        if not name.strip():
            return

        container["name"] = name.strip()
        self.commit()

    def create_item(
        self,
        title: str,
        container_id: EntityId,
        content: str = "",
        tags: Optional[Iterable[str]] = None,
    ) -> Item:
        if not self.container_exists(container_id):
            raise InvalidContainer(container_id)

        item = get_item_template(title or "", container_id, content, tags)
        if not item["title"]:
            item["title"] = "Untitled Note"
        self._items.append(item)
        logger.debug("created item %s in %s", item["id"], container_id)
        created = deepcopy(item)
        self.commit(created)
        return created

    def update_item(self, id: EntityId, fields: dict[str, Any]) -> None:
        unknown_fields = set(fields) - set(UPDATABLE_ITEM_FIELDS)
        if unknown_fields:
            raise ValueError(
                f"cannot update item fields: {', '.join(sorted(unknown_fields))}"
            )

        item = self.find_item(id)
        if "title" in fields:
            item["title"] = fields["title"]
        if "content" in fields:
            item["content"] = fields["content"]
        if "tags" in fields:
            item["tags"] = set(fields["tags"])
        item["updated_at"] = now_utc()
        self.commit()

    # attachments

    def attach_blob(self, item_id: EntityId, data: bytes) -> str:
        """
        Store ``data`` in the blob store and make it the item's content.

        Returns the reference written to ``Item.content``.
        """
        if self.blob_store is None:
            raise ValueError("no blob store configured")

        item = self.find_item(item_id)
        key = generate_entity_id()
        self.blob_store.put(key, data)

        reference = f"{BLOB_REFERENCE_PREFIX}{key}"
        item["content"] = reference
        item["updated_at"] = now_utc()
        self.commit(reference)
        return reference

    def read_blob(self, reference: str) -> Optional[bytes]:
        key = blob_key(reference)
        if key is None or self.blob_store is None:
            return None
        return self.blob_store.get(key)

    def discard_blob(self, reference: str) -> None:
        key = blob_key(reference)
        if key is not None and self.blob_store is not None:
            self.blob_store.delete(key)


def blob_key(content: str) -> Optional[str]:
    if not content.startswith(BLOB_REFERENCE_PREFIX):
        return None
    return content[len(BLOB_REFERENCE_PREFIX) :]
