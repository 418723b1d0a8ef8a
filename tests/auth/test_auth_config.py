import json
import tempfile
import unittest
from pathlib import Path

from gdrivenav.auth import ClientConfig
from gdrivenav.errors import ConfigError


def _write(path: Path, document) -> str:
    path.write_text(json.dumps(document), encoding="utf-8")
    return str(path)


class TestClientConfig(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.tmp_path = Path(self._tmp.name)

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def test_load_reads_installed_block(self) -> None:
        path = _write(
            self.tmp_path / "client_secret.json",
            {"installed": {"client_id": "cid", "client_secret": "secret", "refresh_token": "RT"}},
        )
        config = ClientConfig.load(path)
        self.assertEqual(config.client_id, "cid")
        self.assertEqual(config.client_secret, "secret")
        self.assertEqual(config.refresh_token, "RT")
        self.assertEqual(config.path, path)

    def test_blank_refresh_token_is_none(self) -> None:
        path = _write(
            self.tmp_path / "c.json",
            {"installed": {"client_id": "cid", "client_secret": "s", "refresh_token": ""}},
        )
        self.assertIsNone(ClientConfig.load(path).refresh_token)

    def test_missing_file(self) -> None:
        with self.assertRaises(ConfigError):
            ClientConfig.load(str(self.tmp_path / "nope.json"))

    def test_invalid_json(self) -> None:
        path = self.tmp_path / "bad.json"
        path.write_text("{not json", encoding="utf-8")
        with self.assertRaises(ConfigError):
            ClientConfig.load(str(path))

    def test_missing_installed_object(self) -> None:
        path = _write(self.tmp_path / "c.json", {"web": {"client_id": "cid"}})
        with self.assertRaises(ConfigError):
            ClientConfig.load(path)

    def test_missing_client_secret(self) -> None:
        path = _write(self.tmp_path / "c.json", {"installed": {"client_id": "cid"}})
        with self.assertRaises(ConfigError) as ctx:
            ClientConfig.load(path)
        self.assertIn("client_secret", str(ctx.exception))

    def test_save_refresh_token_preserves_other_fields(self) -> None:
        path = _write(
            self.tmp_path / "c.json",
            {
                "installed": {
                    "client_id": "cid",
                    "client_secret": "s",
                    "redirect_uris": ["http://localhost"],
                },
                "extra": 1,
            },
        )
        config = ClientConfig.load(path)
        updated = config.save_refresh_token("NEW")

        self.assertEqual(updated.refresh_token, "NEW")
        self.assertIsNone(config.refresh_token)

        document = json.loads(Path(path).read_text(encoding="utf-8"))
        self.assertEqual(document["extra"], 1)
        self.assertEqual(document["installed"]["redirect_uris"], ["http://localhost"])
        self.assertEqual(document["installed"]["refresh_token"], "NEW")
        self.assertEqual(ClientConfig.load(path).refresh_token, "NEW")

        leftovers = [p.name for p in self.tmp_path.iterdir() if p.name != "c.json"]
        self.assertEqual(leftovers, [])


if __name__ == "__main__":
    unittest.main()
