import unittest

from folio.controller import DropZone, StoreController, resolve_drop_zone
from folio.exception import NotFound
from folio.model.entity_id import INBOX_CONTAINER_ID, ROOT_CONTAINER_ID
from folio.persistence.adapter import InMemoryPersistenceAdapter
from folio.repository.store import EntityStore


class TestResolveDropZone(unittest.TestCase):
    def test_zones(self) -> None:
        self.assertEqual(resolve_drop_zone(0, 40), DropZone.BEFORE)
        self.assertEqual(resolve_drop_zone(9, 40), DropZone.BEFORE)
        self.assertEqual(resolve_drop_zone(10, 40), DropZone.INSIDE)
        self.assertEqual(resolve_drop_zone(30, 40), DropZone.INSIDE)
        self.assertEqual(resolve_drop_zone(31, 40), DropZone.AFTER)
        self.assertEqual(resolve_drop_zone(5, 0), DropZone.INSIDE)


class TestStoreController(unittest.TestCase):
    def setUp(self) -> None:
        self.store = EntityStore(InMemoryPersistenceAdapter())
        self.answers: list[bool] = []
        self.prompts: list[str] = []
        self.controller = StoreController(self.store, self.confirm)

        self.a = self.store.create_container("A", ROOT_CONTAINER_ID)["id"]
        self.b = self.store.create_container("B", ROOT_CONTAINER_ID)["id"]
        self.n1 = self.store.create_item("n1", self.a)["id"]
        self.n2 = self.store.create_item("n2", self.a)["id"]

    def confirm(self, message: str) -> bool:
        self.prompts.append(message)
        return self.answers.pop(0)

    def test_declined_delete_changes_nothing(self) -> None:
        self.answers = [False]
        self.assertIsNone(self.controller.delete_container(self.a))
        self.assertIsNotNone(self.store.get_container(self.a))
        self.assertEqual(self.store.get_trash(), [])
        self.assertIn("A", self.prompts[0])

    def test_confirmed_delete_and_purge(self) -> None:
        self.answers = [True, True]
        self.assertEqual(self.controller.delete_item(self.n1), self.n1)
        self.assertTrue(self.controller.purge(self.n1))
        self.assertEqual(self.store.get_trash(), [])

    def test_purge_all_with_empty_trash_does_not_ask(self) -> None:
        self.assertEqual(self.controller.purge_all(), 0)
        self.assertEqual(self.prompts, [])

    def test_declined_purge_all(self) -> None:
        self.answers = [True, False]
        self.controller.delete_item(self.n1)
        self.assertEqual(self.controller.purge_all(), 0)
        self.assertEqual(len(self.store.get_trash()), 1)

    def test_drop_container_inside_container_nests_it(self) -> None:
        self.controller.drop(self.a, self.b, DropZone.INSIDE)
        self.assertEqual(self.store.get_container(self.a)["parent_id"], self.b)

    def test_drop_container_before_sibling_reorders(self) -> None:
        self.controller.drop(self.b, self.a, DropZone.BEFORE)
        self.assertEqual(
            [c["id"] for c in self.store.get_children(ROOT_CONTAINER_ID)],
            [self.b, self.a],
        )

    def test_drop_item_on_container_moves_it(self) -> None:
        self.controller.drop(self.n1, INBOX_CONTAINER_ID, DropZone.AFTER)
        self.assertEqual(self.store.get_item(self.n1)["container_id"], INBOX_CONTAINER_ID)

    def test_drop_item_after_item_reorders(self) -> None:
        self.controller.drop(self.n1, self.n2, DropZone.AFTER)
        self.assertEqual(
            [i["id"] for i in self.store.get_items_of(self.a)], [self.n2, self.n1]
        )

    def test_drop_unknown_entity_fails(self) -> None:
        with self.assertRaises(NotFound):
            self.controller.drop("missing", self.a, DropZone.INSIDE)

    def test_open_item(self) -> None:
        self.controller.open_item(self.n2)
        self.assertEqual(self.store.get_session()["active_id"], self.n2)


if __name__ == "__main__":
    unittest.main(verbosity=2)
