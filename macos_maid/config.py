from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path

from .gui_geometry import DEFAULT_SCROLL_TOLERANCE

APP_NAME = "macos-maid"
DEFAULT_SCAN_DURATION_SEC = 5.0
DEFAULT_SCAN_TICK_SEC = 0.1
SUPPORTED_LANGUAGES = ("en",)


class SettingsError(Exception):
    pass


def _number(data: dict, key: str, default: float) -> float:
    value = data.get(key, default)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise SettingsError(f"'{key}' must be a number")
    return float(value)


@dataclass(frozen=True)
class Settings:
    scroll_tolerance: float = DEFAULT_SCROLL_TOLERANCE
    scan_duration_sec: float = DEFAULT_SCAN_DURATION_SEC
    scan_tick_sec: float = DEFAULT_SCAN_TICK_SEC
    language: str = "en"

    @classmethod
    def from_dict(cls, data: dict) -> "Settings":
        tolerance = _number(data, "scroll_tolerance", DEFAULT_SCROLL_TOLERANCE)
        if tolerance < 0:
            raise SettingsError("'scroll_tolerance' must not be negative")
        duration = _number(data, "scan_duration_sec", DEFAULT_SCAN_DURATION_SEC)
        if duration <= 0:
            raise SettingsError("'scan_duration_sec' must be greater than 0")
        tick = _number(data, "scan_tick_sec", DEFAULT_SCAN_TICK_SEC)
        if tick <= 0:
            raise SettingsError("'scan_tick_sec' must be greater than 0")
        if tick > duration:
            raise SettingsError("'scan_tick_sec' must not exceed 'scan_duration_sec'")
        language = data.get("language", "en")
        if language not in SUPPORTED_LANGUAGES:
            raise SettingsError(f"'language' must be one of: {', '.join(SUPPORTED_LANGUAGES)}")
        return cls(
            scroll_tolerance=tolerance,
            scan_duration_sec=duration,
            scan_tick_sec=tick,
            language=language,
        )

    def to_dict(self) -> dict[str, object]:
        return {
            "scroll_tolerance": self.scroll_tolerance,
            "scan_duration_sec": self.scan_duration_sec,
            "scan_tick_sec": self.scan_tick_sec,
            "language": self.language,
        }


def default_settings_path() -> Path:
    return Path.home() / ".config" / APP_NAME / "settings.json"


def default_event_log_path() -> Path:
    return Path.home() / ".local" / "state" / APP_NAME / "events.log"


def save_settings(path: Path, settings: Settings) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(settings.to_dict(), indent=2) + "\n", encoding="utf-8")


def write_default_settings(path: Path, overwrite: bool = False) -> None:
    if path.exists() and not overwrite:
        if path.stat().st_size > 0:
            return
    save_settings(path, Settings())


def load_settings(path: Path) -> Settings:
    if not path.exists():
        raise SettingsError(f"Settings file was not found: {path}")
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise SettingsError(f"Settings file is not valid UTF-8 JSON: {path}") from exc
    if not isinstance(raw, dict):
        raise SettingsError("Settings file must contain a JSON object")
    return Settings.from_dict(raw)


def load_settings_or_defaults(path: Path) -> Settings:
    if not path.exists():
        return Settings()
    return load_settings(path)
