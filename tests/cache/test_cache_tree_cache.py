import unittest

from gdrivenav.cache import TreeCache
from gdrivenav.models import Item


def _items() -> list[Item]:
    return [
        Item(name="Saves", id="D1", parent_id="R", is_directory=True),
        Item(name="a.txt", id="F1", parent_id="R"),
        Item(name="Saves", id="D2", parent_id="D1", is_directory=True),
        Item(name="Saves", id="F2", parent_id="R"),
    ]


class TestTreeCache(unittest.TestCase):
    def test_children_filters_by_parent_in_order(self) -> None:
        cache = TreeCache.from_items(_items())
        self.assertEqual([i.id for i in cache.children("R")], ["D1", "F1", "F2"])
        self.assertEqual([i.id for i in cache.children("D1")], ["D2"])
        self.assertEqual(cache.children("missing"), [])

    def test_find_distinguishes_kind_and_parent(self) -> None:
        cache = TreeCache.from_items(_items())
        self.assertEqual(cache.find_directory("R", "Saves").id, "D1")
        self.assertEqual(cache.find_file("R", "Saves").id, "F2")
        self.assertEqual(cache.find_directory("D1", "Saves").id, "D2")
        self.assertIsNone(cache.find_file("D1", "Saves"))
        self.assertIsNone(cache.find_directory("R", "a.txt"))

    def test_find_directory_by_id(self) -> None:
        cache = TreeCache.from_items(_items())
        self.assertEqual(cache.find_directory_by_id("D2").parent_id, "D1")
        self.assertIsNone(cache.find_directory_by_id("F1"))
        self.assertIsNone(cache.find_directory_by_id("R"))

    def test_at_bounds(self) -> None:
        cache = TreeCache.from_items(_items())
        self.assertEqual(cache.at(0).id, "D1")
        self.assertEqual(cache.at(3).id, "F2")
        self.assertIsNone(cache.at(4))
        self.assertIsNone(cache.at(-1))

    def test_remove_requires_matching_parent(self) -> None:
        cache = TreeCache.from_items(_items())
        self.assertIsNone(cache.remove("F1", "D1"))
        removed = cache.remove("F1", "R")
        self.assertEqual(removed.name, "a.txt")
        self.assertEqual(len(cache), 3)
        self.assertIsNone(cache.find_file("R", "a.txt"))

    def test_snapshot_and_restore(self) -> None:
        cache = TreeCache.from_items(_items())
        snap = cache.snapshot()

        cache.items[0].name = "renamed"
        cache.clear()
        cache.add(Item(name="x", id="X", parent_id="R"))

        self.assertEqual(snap[0].name, "Saves")
        cache.restore(snap)
        self.assertEqual([i.id for i in cache], ["D1", "F1", "D2", "F2"])


if __name__ == "__main__":
    unittest.main()
