import unittest

import gdrivenav


class TestPublicApi(unittest.TestCase):
    def test_top_level_exports_exist(self) -> None:
        self.assertTrue(hasattr(gdrivenav, "Storage"))
        self.assertTrue(hasattr(gdrivenav, "RemoteStorage"))
        self.assertTrue(hasattr(gdrivenav, "LocalStorage"))
        self.assertTrue(hasattr(gdrivenav, "GoogleDriveStorage"))
        self.assertTrue(hasattr(gdrivenav, "create_storage"))

        self.assertTrue(hasattr(gdrivenav, "Item"))
        self.assertTrue(hasattr(gdrivenav, "TreeCache"))
        self.assertTrue(hasattr(gdrivenav, "OAuthClient"))
        self.assertTrue(hasattr(gdrivenav, "ClientConfig"))

        self.assertTrue(hasattr(gdrivenav, "GDriveNavError"))
        self.assertTrue(hasattr(gdrivenav, "InvalidStateError"))

    def test___all___is_defined(self) -> None:
        self.assertTrue(hasattr(gdrivenav, "__all__"))
        for name in gdrivenav.__all__:
            self.assertTrue(hasattr(gdrivenav, name), name)
        self.assertIn("GoogleDriveStorage", gdrivenav.__all__)
        self.assertIn("GDriveNavError", gdrivenav.__all__)


if __name__ == "__main__":
    unittest.main()
