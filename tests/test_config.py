from __future__ import annotations

import json
import tempfile
import unittest
from pathlib import Path

from macos_maid.config import (
    Settings,
    SettingsError,
    load_settings,
    load_settings_or_defaults,
    save_settings,
    write_default_settings,
)


class SettingsTestCase(unittest.TestCase):
    def test_defaults(self) -> None:
        settings = Settings.from_dict({})
        self.assertEqual(settings.scroll_tolerance, 10.0)
        self.assertEqual(settings.scan_duration_sec, 5.0)
        self.assertEqual(settings.scan_tick_sec, 0.1)
        self.assertEqual(settings.language, "en")

    def test_rejects_negative_tolerance(self) -> None:
        with self.assertRaises(SettingsError):
            Settings.from_dict({"scroll_tolerance": -1})

    def test_rejects_non_numeric_values(self) -> None:
        with self.assertRaises(SettingsError):
            Settings.from_dict({"scan_duration_sec": "5"})
        with self.assertRaises(SettingsError):
            Settings.from_dict({"scroll_tolerance": True})

    def test_rejects_tick_longer_than_duration(self) -> None:
        with self.assertRaises(SettingsError):
            Settings.from_dict({"scan_duration_sec": 1, "scan_tick_sec": 2})

    def test_rejects_unknown_language(self) -> None:
        with self.assertRaises(SettingsError):
            Settings.from_dict({"language": "xx"})

    def test_save_and_load(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            path = Path(temp_dir) / "nested" / "settings.json"
            save_settings(path, Settings(scroll_tolerance=4.0, scan_duration_sec=2.0))
            loaded = load_settings(path)
            self.assertEqual(loaded.scroll_tolerance, 4.0)
            self.assertEqual(loaded.scan_duration_sec, 2.0)

    def test_write_default_settings_keeps_existing_file(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            path = Path(temp_dir) / "settings.json"
            save_settings(path, Settings(scroll_tolerance=3.0))
            write_default_settings(path)
            self.assertEqual(load_settings(path).scroll_tolerance, 3.0)
            write_default_settings(path, overwrite=True)
            self.assertEqual(load_settings(path).scroll_tolerance, 10.0)

    def test_write_default_settings_fills_empty_file(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            path = Path(temp_dir) / "settings.json"
            path.write_text("", encoding="utf-8")
            write_default_settings(path)
            self.assertEqual(json.loads(path.read_text(encoding="utf-8"))["scroll_tolerance"], 10.0)

    def test_load_missing_or_malformed_file(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            path = Path(temp_dir) / "settings.json"
            with self.assertRaises(SettingsError):
                load_settings(path)
            path.write_text("{not json", encoding="utf-8")
            with self.assertRaises(SettingsError):
                load_settings(path)
            path.write_text("[]", encoding="utf-8")
            with self.assertRaises(SettingsError):
                load_settings(path)

    def test_load_rejects_invalid_utf8(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            path = Path(temp_dir) / "settings.json"
            path.write_bytes(b'{"language": "\xff"}')
            with self.assertRaises(SettingsError):
                load_settings(path)

    def test_missing_file_falls_back_to_defaults_without_writing(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            path = Path(temp_dir) / "settings.json"
            self.assertEqual(load_settings_or_defaults(path), Settings())
            self.assertFalse(path.exists())
            save_settings(path, Settings(scroll_tolerance=2.0))
            self.assertEqual(load_settings_or_defaults(path).scroll_tolerance, 2.0)


if __name__ == "__main__":
    unittest.main()
