"""Configuration merge, validation, and user-file loading."""

import json
import tempfile
import unittest
from pathlib import Path
from unittest import mock

import foldpeek.config as config_mod
from foldpeek.border import BorderShift
from foldpeek.errors import ConfigurationError


class ResolveConfigTests(unittest.TestCase):
    def test_defaults_use_padded_border_without_top_edge(self) -> None:
        config = config_mod.resolve_config()
        self.assertEqual(config.border, config_mod.DEFAULT_BORDER)
        self.assertTrue(config.default_keybindings)
        self.assertEqual(config.border_shift, BorderShift(0, -1, -1, -1))

    def test_later_layers_override_earlier_ones(self) -> None:
        config = config_mod.resolve_config({"border": "single"}, {"border": "shadow"})
        self.assertEqual(config.border, "shadow")
        self.assertEqual(config.border_shift.as_tuple(), (0, -1, -1, 0))

    def test_list_border_is_stored_as_tuple(self) -> None:
        config = config_mod.resolve_config({"border": [""] * 8})
        self.assertEqual(config.border, ("",) * 8)
        self.assertEqual(config.border_shift.as_tuple(), (0, 0, 0, 0))

    def test_unknown_keys_are_ignored(self) -> None:
        config = config_mod.resolve_config({"colour": "red", "default_keybindings": False})
        self.assertFalse(config.default_keybindings)

    def test_invalid_border_raises(self) -> None:
        with self.assertRaises(ConfigurationError):
            config_mod.resolve_config({"border": 42})

    def test_non_boolean_keybindings_flag_raises(self) -> None:
        with self.assertRaises(ConfigurationError) as ctx:
            config_mod.resolve_config({"default_keybindings": "yes"})
        self.assertIn("default_keybindings", str(ctx.exception))

    def test_defaults_are_not_mutated_by_merging(self) -> None:
        config_mod.resolve_config({"border": "double"})
        self.assertEqual(config_mod.DEFAULT_CONFIG["border"], config_mod.DEFAULT_BORDER)


class LoadConfigTests(unittest.TestCase):
    def test_missing_file_yields_empty_dict(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            self.assertEqual(config_mod.load_config(Path(tmp) / "absent.json"), {})

    def test_malformed_and_non_object_files_yield_empty_dict(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "config.json"
            path.write_text("{not json", encoding="utf-8")
            self.assertEqual(config_mod.load_config(path), {})
            path.write_text("[1, 2]", encoding="utf-8")
            self.assertEqual(config_mod.load_config(path), {})

    def test_reads_default_path(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "config.json"
            path.write_text(json.dumps({"border": "rounded"}), encoding="utf-8")
            with mock.patch.object(config_mod, "CONFIG_PATH", path):
                self.assertEqual(config_mod.load_config(), {"border": "rounded"})


if __name__ == "__main__":
    unittest.main()
