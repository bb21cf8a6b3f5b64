import json
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from vc_release_helper.config.loader import (
    CONFIG_FILENAME,
    ConfigError,
    clear_language,
    get_configured_language,
    load_config,
    save_config,
    set_language,
)


class TestConfigLoader(unittest.TestCase):
    """Tests for the configuration loader."""

    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.config_path = Path(self._tmp.name) / CONFIG_FILENAME
        patcher = patch(
            "vc_release_helper.config.loader._get_config_path", return_value=self.config_path
        )
        patcher.start()
        self.addCleanup(patcher.stop)
        self.addCleanup(self._tmp.cleanup)

    def test_load_config_missing_file(self) -> None:
        self.assertEqual(load_config(), {})
        self.assertIsNone(get_configured_language())

    def test_load_config_success(self) -> None:
        self.config_path.write_text(json.dumps({"language": "fr"}))
        self.assertEqual(load_config(), {"language": "fr"})
        self.assertEqual(get_configured_language(), "fr")

    def test_load_config_invalid_json(self) -> None:
        self.config_path.write_text("{invalid}")
        with self.assertRaises(ConfigError) as ctx:
            load_config()
        self.assertIn("Invalid JSON", str(ctx.exception))

    def test_load_config_not_an_object(self) -> None:
        self.config_path.write_text("[]")
        with self.assertRaises(ConfigError):
            load_config()

    def test_load_config_unsupported_language(self) -> None:
        self.config_path.write_text(json.dumps({"language": "de"}))
        with self.assertRaises(ConfigError):
            load_config()

    def test_set_language_writes_file(self) -> None:
        set_language("pt")
        self.assertEqual(json.loads(self.config_path.read_text()), {"language": "pt"})
        self.assertTrue(self.config_path.read_text().endswith("\n"))

    def test_set_language_keeps_other_keys(self) -> None:
        self.config_path.write_text(json.dumps({"language": "en", "extra": 1}))
        set_language("es")
        self.assertEqual(json.loads(self.config_path.read_text()), {"language": "es", "extra": 1})

    def test_set_language_rejects_unknown_code(self) -> None:
        with self.assertRaises(ConfigError):
            set_language("xx")
        self.assertFalse(self.config_path.exists())

    def test_clear_language(self) -> None:
        set_language("pt")
        clear_language()
        self.assertIsNone(get_configured_language())

    def test_save_config_write_failure(self) -> None:
        with patch.object(Path, "write_text", side_effect=PermissionError("denied")):
            with self.assertRaises(ConfigError):
                save_config({"language": "en"})


if __name__ == "__main__":
    unittest.main()
