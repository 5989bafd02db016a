import unittest

from folio.exception import NotFound, PersistenceFailed, SystemContainerImmutable
from folio.model.entity_id import INBOX_CONTAINER_ID, ROOT_CONTAINER_ID
from folio.persistence.adapter import InMemoryPersistenceAdapter
from folio.repository.store import EntityStore
from folio.service.duplicate import duplicate_container, duplicate_item


class TestDuplicate(unittest.TestCase):
    def setUp(self) -> None:
        self.store = EntityStore(InMemoryPersistenceAdapter())
        self.a = self.store.create_container("A", ROOT_CONTAINER_ID)["id"]
        self.b = self.store.create_container("B", self.a)["id"]
        self.n1 = self.store.create_item("n1", self.a, "one", ["t"])["id"]
        self.n2 = self.store.create_item("n2", self.b, "two")["id"]

    def test_duplicate_item(self) -> None:
        copy_id = duplicate_item(self.store, self.n1)

        copy = self.store.get_item(copy_id)
        self.assertNotEqual(copy_id, self.n1)
        self.assertEqual(copy["title"], "n1 (Copy)")
        self.assertEqual(copy["content"], "one")
        self.assertEqual(copy["tags"], {"t"})
        self.assertEqual(copy["container_id"], self.a)

    def test_duplicate_container_copies_subtree(self) -> None:
        copy_id = duplicate_container(self.store, self.a)

        copy = self.store.get_container(copy_id)
        self.assertEqual(copy["name"], "A (Copy)")
        self.assertEqual(copy["parent_id"], ROOT_CONTAINER_ID)

        children = self.store.get_children(copy_id)
        self.assertEqual([c["name"] for c in children], ["B"])
        self.assertEqual(
            [i["title"] for i in self.store.get_items_of(copy_id)], ["n1"]
        )
        self.assertEqual(
            [i["title"] for i in self.store.get_items_of(children[0]["id"])], ["n2"]
        )
        self.assertEqual(len(self.store.get_items_of(self.a)), 1)

    def test_duplicate_system_container_fails(self) -> None:
        containers = self.store.get_containers()
        items = self.store.get_items()
        with self.assertRaises(SystemContainerImmutable):
            duplicate_container(self.store, INBOX_CONTAINER_ID)
        self.assertEqual(self.store.get_containers(), containers)
        self.assertEqual(self.store.get_items(), items)

    def test_failed_save_reports_copy_id(self) -> None:
        self.store.adapter.fail_saves = True
        with self.assertRaises(PersistenceFailed) as raised:
            duplicate_container(self.store, self.a)
        copy = self.store.get_container(raised.exception.result)
        self.assertEqual(copy["name"], "A (Copy)")

    def test_duplicate_unknown_item_fails(self) -> None:
        with self.assertRaises(NotFound):
            duplicate_item(self.store, "missing")


if __name__ == "__main__":
    unittest.main(verbosity=2)
