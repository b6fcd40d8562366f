from __future__ import annotations

import tempfile
import unittest
from pathlib import Path
from unittest import mock

from macos_maid import event_log as event_log_mod


class EventLogTestCase(unittest.TestCase):
    def test_write_event_log_appends_stamped_json_lines(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            path = Path(temp_dir) / "state" / "events.log"
            with mock.patch.object(event_log_mod, "iso_utc_now", return_value="2026-01-01T00:00:00+00:00"):
                event_log_mod.write_event_log(path, "stage_changed", previous_stage="welcome", stage="terms")
                event_log_mod.write_event_log(path, "advance_rejected", stage="terms")

            self.assertEqual(
                event_log_mod.read_event_log(path),
                [
                    {
                        "timestamp": "2026-01-01T00:00:00+00:00",
                        "event": "stage_changed",
                        "previous_stage": "welcome",
                        "stage": "terms",
                    },
                    {"timestamp": "2026-01-01T00:00:00+00:00", "event": "advance_rejected", "stage": "terms"},
                ],
            )

    def test_write_event_log_rotates_when_size_limit_reached(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            path = Path(temp_dir) / "events.log"

            with mock.patch.object(event_log_mod, "MAX_EVENT_LOG_BYTES", 120), mock.patch.object(
                event_log_mod, "ROTATED_EVENT_LOG_FILES", 2
            ):
                for idx in range(20):
                    event_log_mod.write_event_log(path, "tick", id=idx, payload="x" * 30)

            self.assertTrue(path.exists())
            self.assertTrue(path.with_name("events.log.1").exists())
            self.assertTrue(path.with_name("events.log.2").exists())
            self.assertFalse(path.with_name("events.log.3").exists())
            self.assertTrue(path.with_name("events.log.lock").exists())
            self.assertEqual(event_log_mod.read_event_log(path)[-1]["id"], 19)

    def test_event_logger_forwards_to_file(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            path = Path(temp_dir) / "events.log"
            event_log_mod.EventLogger(path)("scan_started", duration_sec=5.0)

            entries = event_log_mod.read_event_log(path)
            self.assertEqual(len(entries), 1)
            self.assertEqual(entries[0]["event"], "scan_started")
            self.assertEqual(entries[0]["duration_sec"], 5.0)

    def test_event_logger_without_path_drops_events(self) -> None:
        with mock.patch.object(event_log_mod, "write_event_log") as write:
            event_log_mod.EventLogger(None)("scan_started")
        write.assert_not_called()

    def test_read_missing_event_log_is_empty(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            self.assertEqual(event_log_mod.read_event_log(Path(temp_dir) / "missing.log"), [])


if __name__ == "__main__":
    unittest.main()
