import unittest

from folio.exception import (
    InvalidContainer,
    InvalidParent,
    NotFound,
    PersistenceFailed,
    SystemContainerImmutable,
)
from folio.model.entity_id import INBOX_CONTAINER_ID, ROOT_CONTAINER_ID
from folio.persistence.adapter import InMemoryPersistenceAdapter
from folio.persistence.blob import InMemoryBlobStore
from folio.repository.store import EntityStore


class TestEntityStore(unittest.TestCase):
    def setUp(self) -> None:
        self.adapter = InMemoryPersistenceAdapter()
        self.store = EntityStore(self.adapter)

    def test_new_store_has_system_containers(self) -> None:
        ids = [c["id"] for c in self.store.get_containers()]
        self.assertEqual(ids, [ROOT_CONTAINER_ID, INBOX_CONTAINER_ID])
        self.assertTrue(self.store.is_system_container(ROOT_CONTAINER_ID))
        self.assertFalse(self.store.is_system_container("other"))

    def test_create_container_persists_and_notifies(self) -> None:
        calls = []
        self.store.subscribe(lambda: calls.append(True))

        container = self.store.create_container("Work", ROOT_CONTAINER_ID)

        self.assertEqual(container["parent_id"], ROOT_CONTAINER_ID)
        self.assertEqual(self.adapter.save_count, 1)
        self.assertEqual(len(calls), 1)
        saved_ids = [c["id"] for c in self.adapter.document["containers"]]
        self.assertIn(container["id"], saved_ids)

    def test_create_container_with_unknown_parent_fails(self) -> None:
        before = self.store.get_containers()
        with self.assertRaises(InvalidParent):
            self.store.create_container("Lost", "missing")
        self.assertEqual(self.store.get_containers(), before)
        self.assertEqual(self.adapter.save_count, 0)

    def test_blank_names_get_defaults(self) -> None:
        container = self.store.create_container("   ")
        item = self.store.create_item("", container["id"])
        self.assertEqual(container["name"], "Untitled Folder")
        self.assertEqual(item["title"], "Untitled Note")

    def test_create_item_with_unknown_container_fails(self) -> None:
        with self.assertRaises(InvalidContainer):
            self.store.create_item("Note", "missing")
        self.assertEqual(self.store.get_items(), [])

    def test_update_item_merges_fields(self) -> None:
        item = self.store.create_item("Note", INBOX_CONTAINER_ID, "body", ["a"])

        self.store.update_item(item["id"], {"title": "Renamed", "tags": ["b", "c"]})

        updated = self.store.get_item(item["id"])
        self.assertEqual(updated["title"], "Renamed")
        self.assertEqual(updated["content"], "body")
        self.assertEqual(updated["tags"], {"b", "c"})
        self.assertGreaterEqual(updated["updated_at"], item["updated_at"])

    def test_update_item_rejects_unknown_fields_and_ids(self) -> None:
        item = self.store.create_item("Note", INBOX_CONTAINER_ID)
        with self.assertRaises(ValueError):
            self.store.update_item(item["id"], {"container_id": ROOT_CONTAINER_ID})
        with self.assertRaises(NotFound):
            self.store.update_item("missing", {"title": "x"})

    def test_rename_system_container_fails(self) -> None:
        with self.assertRaises(SystemContainerImmutable):
            self.store.rename_container(INBOX_CONTAINER_ID, "Mail")
        self.assertEqual(self.store.get_container(INBOX_CONTAINER_ID)["name"], "Inbox")
        self.assertEqual(self.adapter.save_count, 0)

    def test_queries_return_copies(self) -> None:
        container = self.store.create_container("Work")
        copy = self.store.get_container(container["id"])
        copy["name"] = "Changed"
        self.assertEqual(self.store.get_container(container["id"])["name"], "Work")

    def test_queries_on_missing_ids_are_empty(self) -> None:
        self.assertIsNone(self.store.get_container("missing"))
        self.assertIsNone(self.store.get_item("missing"))
        self.assertEqual(self.store.get_children("missing"), [])
        self.assertEqual(self.store.get_items_of("missing"), [])
        self.assertEqual(self.store.get_descendant_container_ids("missing"), set())

    def test_children_keep_store_order(self) -> None:
        a = self.store.create_container("A", ROOT_CONTAINER_ID)
        b = self.store.create_container("B", ROOT_CONTAINER_ID)
        c = self.store.create_container("C", a["id"])

        children = [c["id"] for c in self.store.get_children(ROOT_CONTAINER_ID)]
        self.assertEqual(children, [a["id"], b["id"]])
        self.assertEqual(
            self.store.get_descendant_container_ids(ROOT_CONTAINER_ID),
            {a["id"], b["id"], c["id"]},
        )
        path = [c["name"] for c in self.store.get_container_path(c["id"])]
        self.assertEqual(path, ["All Notes", "A", "C"])

    def test_descendants_terminate_on_cycles(self) -> None:
        self.store.containers.extend(
            [
                {"id": "x", "name": "X", "parent_id": "y"},
                {"id": "y", "name": "Y", "parent_id": "x"},
            ]
        )
        self.assertEqual(self.store.get_descendant_container_ids("x"), {"x", "y"})

    def test_failed_save_keeps_mutation(self) -> None:
        self.adapter.fail_saves = True
        calls = []
        self.store.subscribe(lambda: calls.append(True))

        with self.assertRaises(PersistenceFailed) as raised:
            self.store.create_container("Unsaved")

        created = raised.exception.result
        self.assertEqual(created["name"], "Unsaved")
        self.assertEqual(self.store.get_container(created["id"]), created)
        self.assertTrue(self.store.is_dirty)
        self.assertEqual(len(calls), 1)

    def test_failed_save_reports_created_item(self) -> None:
        self.adapter.fail_saves = True
        with self.assertRaises(PersistenceFailed) as raised:
            self.store.create_item("Unsaved", INBOX_CONTAINER_ID)
        self.assertIsNotNone(self.store.get_item(raised.exception.result["id"]))

    def test_defaults_must_be_system_containers(self) -> None:
        with self.assertRaises(ValueError):
            EntityStore(self.adapter, system_container_ids=("todo",))
        with self.assertRaises(ValueError):
            EntityStore(
                self.adapter,
                system_container_ids=("todo",),
                default_container_id="todo",
            )

    def test_custom_system_containers_are_created(self) -> None:
        store = EntityStore(
            self.adapter,
            system_container_ids=("todo", "done"),
            default_container_id="todo",
            default_item_container_id="todo",
        )
        self.assertEqual(
            [(c["id"], c["name"]) for c in store.get_containers()],
            [("todo", "Todo"), ("done", "Done")],
        )

    def test_unsubscribe_stops_notifications(self) -> None:
        calls = []
        unsubscribe = self.store.subscribe(lambda: calls.append(True))
        unsubscribe()
        self.store.create_container("Quiet")
        self.assertEqual(calls, [])

    def test_load_restores_saved_state(self) -> None:
        container = self.store.create_container("Work")
        item = self.store.create_item("Note", container["id"], tags=["x"])

        reloaded = EntityStore(InMemoryPersistenceAdapter(self.adapter.document))
        reloaded.load()

        self.assertEqual(reloaded.get_item(item["id"])["tags"], {"x"})
        self.assertEqual(
            reloaded.get_item(item["id"])["created_at"], item["created_at"]
        )
        self.assertEqual(
            [c["id"] for c in reloaded.get_containers()],
            [c["id"] for c in self.store.get_containers()],
        )

    def test_load_readds_system_containers_and_prunes_session(self) -> None:
        document = {
            "schema_version": 1,
            "containers": [{"id": "a", "name": "A", "parent_id": None}],
            "items": [],
            "trash": [],
            "session": {"open_ids": ["gone"], "active_id": "gone"},
        }
        store = EntityStore(InMemoryPersistenceAdapter(document))
        store.load()

        ids = [c["id"] for c in store.get_containers()]
        self.assertEqual(ids, [ROOT_CONTAINER_ID, INBOX_CONTAINER_ID, "a"])
        self.assertEqual(store.get_session(), {"open_ids": [], "active_id": None})
        self.assertEqual(store.get_favorites(), [])


class TestEntityStoreBlobs(unittest.TestCase):
    def setUp(self) -> None:
        self.blob_store = InMemoryBlobStore()
        self.store = EntityStore(InMemoryPersistenceAdapter(), self.blob_store)

    def test_attach_blob_replaces_content_with_reference(self) -> None:
        item = self.store.create_item("Scan", INBOX_CONTAINER_ID)

        reference = self.store.attach_blob(item["id"], b"\x89PNG")

        self.assertTrue(reference.startswith("blob:"))
        self.assertEqual(self.store.get_item(item["id"])["content"], reference)
        self.assertEqual(self.store.read_blob(reference), b"\x89PNG")

    def test_read_blob_of_plain_content_is_absent(self) -> None:
        self.assertIsNone(self.store.read_blob("just text"))

    def test_attach_without_blob_store_fails(self) -> None:
        store = EntityStore(InMemoryPersistenceAdapter())
        item = store.create_item("Scan", INBOX_CONTAINER_ID)
        with self.assertRaises(ValueError):
            store.attach_blob(item["id"], b"data")


if __name__ == "__main__":
    unittest.main(verbosity=2)
