from __future__ import annotations

import json
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Iterator

import fcntl

MAX_EVENT_LOG_BYTES = 2 * 1024 * 1024
ROTATED_EVENT_LOG_FILES = 3


def iso_utc_now() -> str:
    return datetime.now(timezone.utc).replace(microsecond=0).isoformat()


def _generation(path: Path, index: int) -> Path:
    return path.with_name(f"{path.name}.{index}")


@contextmanager
def _locked(path: Path) -> Iterator[None]:
    """Exclusive lock on ``<log>.lock`` held for one append."""
    with open(path.with_name(f"{path.name}.lock"), "a", encoding="utf-8") as handle:
        fcntl.flock(handle.fileno(), fcntl.LOCK_EX)
        try:
            yield
        finally:
            fcntl.flock(handle.fileno(), fcntl.LOCK_UN)


def _shift_generations(path: Path) -> None:
    if not path.exists() or path.stat().st_size < MAX_EVENT_LOG_BYTES:
        return
    _generation(path, ROTATED_EVENT_LOG_FILES).unlink(missing_ok=True)
    # events.log.2 -> .3, events.log.1 -> .2, events.log -> .1
    sources = [_generation(path, index) for index in range(ROTATED_EVENT_LOG_FILES - 1, 0, -1)] + [path]
    for source in sources:
        if not source.exists():
            continue
        index = 1 if source == path else int(source.suffix[1:]) + 1
        source.replace(_generation(path, index))


def write_event_log(path: Path, event: str, **fields: Any) -> None:
    record = {"timestamp": iso_utc_now(), "event": event, **fields}
    path.parent.mkdir(parents=True, exist_ok=True)
    with _locked(path):
        _shift_generations(path)
        with open(path, "a", encoding="utf-8") as log:
            log.write(json.dumps(record, ensure_ascii=True) + "\n")


def read_event_log(path: Path) -> list[dict[str, Any]]:
    if not path.exists():
        return []
    return [json.loads(line) for line in path.read_text(encoding="utf-8").splitlines() if line.strip()]


class EventLogger:
    """Event sink for the controller and the scan; a ``None`` path drops events."""

    def __init__(self, path: Path | None):
        self.path = path

    def __call__(self, event: str, **fields: Any) -> None:
        if self.path is not None:
            write_event_log(self.path, event, **fields)
