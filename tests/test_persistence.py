import tempfile
import unittest
from pathlib import Path

from folio.exception import PersistenceFailed
from folio.model.entity_id import INBOX_CONTAINER_ID
from folio.persistence.adapter import YamlFilePersistenceAdapter
from folio.persistence.blob import DirectoryBlobStore
from folio.repository.document import (
    SCHEMA_VERSION,
    deserialize_document,
    serialize_state,
)
from folio.repository.store import EntityStore
from folio.service import trash


class TestDocument(unittest.TestCase):
    def test_serialized_document_is_plain_data(self) -> None:
        store = EntityStore(YamlFilePersistenceAdapter(Path("unused.yaml")))
        store.containers.append({"id": "a", "name": "A", "parent_id": None})

        document = serialize_state(store.snapshot())

        self.assertEqual(document["schema_version"], SCHEMA_VERSION)
        self.assertEqual(document["favorites"], [])
        self.assertIn({"id": "a", "name": "A", "parent_id": None}, document["containers"])

    def test_deserialize_fills_missing_fields(self) -> None:
        state = deserialize_document(
            {
                "items": [{"id": "n", "container_id": "a", "tags": ["b", "a"]}],
                "session": {"open_ids": ["n", "n"], "active_id": "n"},
            }
        )
        item = state["items"][0]
        self.assertEqual(item["title"], "")
        self.assertEqual(item["content"], "")
        self.assertEqual(item["tags"], {"a", "b"})
        self.assertIsNotNone(item["created_at"])
        self.assertEqual(state["session"]["open_ids"], ["n"])
        self.assertEqual(state["containers"], [])
        self.assertEqual(state["trash"], [])


class TestYamlFilePersistenceAdapter(unittest.TestCase):
    def setUp(self) -> None:
        self.tempdir = tempfile.TemporaryDirectory()
        self.path = Path(self.tempdir.name) / "data" / "store.yaml"
        self.backup_path = Path(self.tempdir.name) / "data" / "store.yaml.bak"

    def tearDown(self) -> None:
        self.tempdir.cleanup()

    def test_missing_file_loads_as_absent(self) -> None:
        self.assertIsNone(YamlFilePersistenceAdapter(self.path).load())

    def test_store_round_trips_through_file(self) -> None:
        adapter = YamlFilePersistenceAdapter(self.path, self.backup_path)
        store = EntityStore(adapter)
        container = store.create_container("Work")
        item = store.create_item("Plan", container["id"], "<p>hi</p>", ["x"])
        trash.delete_item(store, item["id"])

        reloaded = EntityStore(YamlFilePersistenceAdapter(self.path))
        reloaded.load()

        self.assertEqual(reloaded.get_container(container["id"])["name"], "Work")
        entry = reloaded.get_trash()[0]
        self.assertEqual(entry["kind"], "item")
        self.assertEqual(entry["tags"], {"x"})
        self.assertEqual(entry["content"], "<p>hi</p>")

    def test_corrupt_file_is_recovered_from_backup(self) -> None:
        adapter = YamlFilePersistenceAdapter(self.path, self.backup_path)
        store = EntityStore(adapter)
        store.create_container("First")
        store.create_container("Second")

        self.path.write_text("containers: [unclosed")

        reloaded = EntityStore(adapter)
        reloaded.load()
        names = [c["name"] for c in reloaded.get_containers()]
        self.assertIn("First", names)
        self.assertNotIn("Second", names)

    def test_unwritable_path_raises_persistence_failed(self) -> None:
        blocker = Path(self.tempdir.name) / "blocker"
        blocker.write_text("")
        adapter = YamlFilePersistenceAdapter(blocker / "store.yaml")
        with self.assertRaises(PersistenceFailed):
            adapter.save({"schema_version": SCHEMA_VERSION})


class TestDirectoryBlobStore(unittest.TestCase):
    def setUp(self) -> None:
        self.tempdir = tempfile.TemporaryDirectory()
        self.blob_store = DirectoryBlobStore(Path(self.tempdir.name) / "blobs")

    def tearDown(self) -> None:
        self.tempdir.cleanup()

    def test_put_get_delete(self) -> None:
        self.blob_store.put("key-1", b"bytes")
        self.assertEqual(self.blob_store.get("key-1"), b"bytes")
        self.blob_store.delete("key-1")
        self.assertIsNone(self.blob_store.get("key-1"))

    def test_rejects_path_like_keys(self) -> None:
        with self.assertRaises(ValueError):
            self.blob_store.put("../escape", b"bytes")

    def test_attachment_through_store(self) -> None:
        store = EntityStore(
            YamlFilePersistenceAdapter(Path(self.tempdir.name) / "store.yaml"),
            self.blob_store,
        )
        item = store.create_item("Scan", INBOX_CONTAINER_ID)
        reference = store.attach_blob(item["id"], b"scan")
        self.assertEqual(store.read_blob(reference), b"scan")


if __name__ == "__main__":
    unittest.main(verbosity=2)
