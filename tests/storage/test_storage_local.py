import os
import shutil
import tempfile
import unittest
from pathlib import Path

from gdrivenav.errors import ConfigError
from gdrivenav.storage import LocalStorage, RemoteStorage, create_storage


class TestLocalStorage(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name)
        (self.root / "Saves").mkdir()
        (self.root / "Saves" / "slot1.dat").write_bytes(b"1")
        (self.root / "a.txt").write_text("a", encoding="utf-8")

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def _storage(self) -> LocalStorage:
        return LocalStorage(str(self.root))

    def test_initial_listing(self) -> None:
        storage = self._storage()

        self.assertEqual(storage.cursor, os.path.abspath(str(self.root)))
        self.assertEqual([i.name for i in storage.list_contents()], ["Saves", "a.txt"])
        self.assertTrue(storage.directory_exists("Saves"))
        self.assertTrue(storage.file_exists("a.txt"))
        self.assertFalse(storage.file_exists("Saves"))
        self.assertEqual(storage.get_file_id("a.txt"), "a.txt")
        self.assertNotIsInstance(storage, RemoteStorage)

    def test_navigation_round_trip(self) -> None:
        storage = self._storage()
        start = storage.cursor

        self.assertTrue(storage.change_directory("Saves"))
        self.assertEqual(storage.cursor, os.path.join(start, "Saves"))
        self.assertTrue(storage.file_exists("slot1.dat"))

        self.assertTrue(storage.change_directory(".."))
        self.assertEqual(storage.cursor, start)
        self.assertTrue(storage.file_exists("a.txt"))

    def test_parent_at_root_is_clamped(self) -> None:
        storage = self._storage()
        start = storage.cursor

        self.assertFalse(storage.change_directory(".."))
        self.assertEqual(storage.cursor, start)

    def test_change_into_missing_or_file(self) -> None:
        storage = self._storage()

        self.assertFalse(storage.change_directory("nope"))
        self.assertFalse(storage.change_directory("a.txt"))
        self.assertEqual(storage.cursor, storage.root)

    def test_return_to_root_reloads(self) -> None:
        storage = self._storage()
        storage.change_directory("Saves")

        storage.return_to_root()

        self.assertEqual(storage.cursor, storage.root)
        self.assertTrue(storage.directory_exists("Saves"))

    def test_create_directory_needs_reload_to_show(self) -> None:
        storage = self._storage()

        self.assertTrue(storage.create_directory("New"))
        self.assertTrue((self.root / "New").is_dir())
        self.assertFalse(storage.directory_exists("New"))

        storage.reload()
        self.assertTrue(storage.directory_exists("New"))
        self.assertFalse(storage.create_directory("New"))

    def test_delete_file_requires_cached_entry(self) -> None:
        storage = self._storage()
        (self.root / "late.txt").write_text("x", encoding="utf-8")

        self.assertFalse(storage.delete_file("late.txt"))
        self.assertTrue((self.root / "late.txt").exists())

        self.assertTrue(storage.delete_file("a.txt"))
        self.assertFalse((self.root / "a.txt").exists())

        storage.reload()
        self.assertFalse(storage.file_exists("a.txt"))

    def test_delete_directory_is_recursive(self) -> None:
        storage = self._storage()

        self.assertTrue(storage.delete_directory("Saves"))
        self.assertFalse((self.root / "Saves").exists())
        self.assertFalse(storage.delete_directory("Saves"))
        self.assertFalse(storage.delete_directory("a.txt"))

    def test_missing_root(self) -> None:
        with self.assertRaises(ConfigError):
            LocalStorage(str(self.root / "missing"))
        with self.assertRaises(ConfigError):
            LocalStorage(str(self.root / "a.txt"))

    def test_create_directory_rejects_names_that_escape(self) -> None:
        storage = self._storage()

        for name in ("", ".", "..", "Saves/Inner", os.path.join(str(self.root), "abs")):
            self.assertFalse(storage.create_directory(name), name)
        self.assertFalse((self.root / "Saves" / "Inner").exists())
        self.assertFalse((self.root / "abs").exists())

    def test_entering_vanished_directory_falls_back_to_root(self) -> None:
        storage = self._storage()
        (self.root / "Saves" / "Inner").mkdir()
        storage.change_directory("Saves")
        self.assertTrue(storage.directory_exists("Inner"))

        shutil.rmtree(self.root / "Saves")

        self.assertFalse(storage.change_directory("Inner"))
        self.assertEqual(storage.cursor, storage.root)
        self.assertTrue(storage.file_exists("a.txt"))

    def test_display_name(self) -> None:
        storage = self._storage()
        self.assertEqual(storage.display_name, f"{storage.root} (local)")


class TestCreateStorage(unittest.TestCase):
    def test_local_uri(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            storage = create_storage(f"local:{tmp}")
            self.assertIsInstance(storage, LocalStorage)
            self.assertEqual(storage.root, os.path.abspath(tmp))

    def test_invalid_uri(self) -> None:
        with self.assertRaises(ValueError):
            create_storage("s3://bucket")

    def test_drive_uri_with_missing_config(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            with self.assertRaises(ConfigError):
                create_storage(f"drive:{os.path.join(tmp, 'client_secret.json')}")


class TestLocalStorageStaysInsideRoot(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.base = Path(self._tmp.name)
        self.root = self.base / "root"
        (self.root / "Saves").mkdir(parents=True)
        self.outside = self.base / "outside.txt"
        self.outside.write_text("keep", encoding="utf-8")
        self.storage = LocalStorage(str(self.root))

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def test_delete_directory_parent_is_refused(self) -> None:
        self.assertFalse(self.storage.delete_directory(".."))
        self.assertTrue(self.outside.exists())
        self.assertTrue(self.root.is_dir())

    def test_delete_directory_absolute_path_is_refused(self) -> None:
        victim = self.base / "victim"
        victim.mkdir()

        self.assertFalse(self.storage.delete_directory(str(victim)))
        self.assertTrue(victim.is_dir())

    def test_delete_directory_current_is_refused(self) -> None:
        self.assertFalse(self.storage.delete_directory("."))
        self.assertTrue((self.root / "Saves").is_dir())

    def test_delete_listed_directory(self) -> None:
        self.assertTrue(self.storage.delete_directory("Saves"))
        self.assertFalse((self.root / "Saves").exists())
        self.assertTrue(self.outside.exists())


if __name__ == "__main__":
    unittest.main()
