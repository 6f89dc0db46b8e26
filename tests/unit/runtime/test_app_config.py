"""Tests for read-only config loading.

Malformed files and wrong-typed keys must fall back to defaults without raising.
"""

from __future__ import annotations

import json
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from changelogger.runtime import config


class ConfigLoadingTests(unittest.TestCase):
    def _load(self, content: str | None) -> config.AppConfig:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "config.json"
            if content is not None:
                config_path.write_text(content, encoding="utf-8")
            with mock.patch("changelogger.runtime.config.CONFIG_PATH", config_path):
                return config.load_config()

    def test_missing_file_yields_defaults(self) -> None:
        self.assertEqual(self._load(None), config.AppConfig())

    def test_malformed_json_yields_defaults(self) -> None:
        self.assertEqual(self._load("{not json"), config.AppConfig())

    def test_non_object_json_yields_defaults(self) -> None:
        self.assertEqual(self._load("[1, 2, 3]"), config.AppConfig())

    def test_valid_values_override_defaults(self) -> None:
        loaded = self._load(
            json.dumps(
                {
                    "major": 2,
                    "minor_start": 0,
                    "base_patch": 100,
                    "output": "docs/CHANGES.md",
                    "style": "friendly",
                    "left_pane_min": 30,
                    "right_pane_min": 40,
                    "fit_full_block": False,
                }
            )
        )

        self.assertEqual(loaded.major, 2)
        self.assertEqual(loaded.minor_start, 0)
        self.assertEqual(loaded.base_patch, 100)
        self.assertEqual(loaded.output, "docs/CHANGES.md")
        self.assertEqual(loaded.style, "friendly")
        self.assertEqual((loaded.left_pane_min, loaded.right_pane_min), (30, 40))
        self.assertFalse(loaded.fit_full_block)

    def test_invalid_values_are_ignored_individually(self) -> None:
        loaded = self._load(
            json.dumps({"major": -1, "base_patch": 0, "minor_start": True, "output": "", "fit_full_block": "yes", "x": 1})
        )

        self.assertEqual(loaded, config.AppConfig())

    def test_loading_never_writes(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "nested" / "config.json"
            with mock.patch("changelogger.runtime.config.CONFIG_PATH", config_path):
                config.load_config()
            self.assertFalse(config_path.parent.exists())

    def test_explicit_path_argument(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "custom.json"
            config_path.write_text('{"base_patch": 4}', encoding="utf-8")

            self.assertEqual(config.load_config(config_path).base_patch, 4)


if __name__ == "__main__":
    unittest.main()
