from __future__ import annotations

import math
import time
from dataclasses import dataclass
from typing import Any, Callable

from .config import DEFAULT_SCAN_DURATION_SEC, DEFAULT_SCAN_TICK_SEC


@dataclass(frozen=True)
class ScanStatus:
    message: str
    tone: str


STATUS_IDLE = ScanStatus("System Health: Good", "good")
STATUS_SCANNING = ScanStatus("Scanning...", "busy")
STATUS_COMPLETE = ScanStatus("Scan Complete: Optimised!", "good")


def format_progress(progress: float) -> str:
    return f"Working... {int(round(progress * 100, 6))}%"


class SimulatedScan:
    """Quick-scan placeholder: progress climbs from 0 to 1, nothing is read from disk."""

    def __init__(
        self,
        duration_sec: float = DEFAULT_SCAN_DURATION_SEC,
        tick_sec: float = DEFAULT_SCAN_TICK_SEC,
        on_event: Callable[..., Any] | None = None,
    ):
        if duration_sec <= 0 or tick_sec <= 0:
            raise ValueError("duration_sec and tick_sec must be greater than 0")
        self.duration_sec = duration_sec
        self.tick_sec = tick_sec
        self.total_ticks = max(1, math.ceil(round(duration_sec / tick_sec, 6)))
        self._on_event = on_event
        self._ticks = 0
        self.running = False
        self.status = STATUS_IDLE

    @property
    def progress(self) -> float:
        return min(self._ticks / self.total_ticks, 1.0)

    def progress_label(self) -> str:
        return format_progress(self.progress)

    def start(self) -> bool:
        if self.running:
            return False
        self._ticks = 0
        self.running = True
        self.status = STATUS_SCANNING
        if self._on_event is not None:
            self._on_event("scan_started", duration_sec=self.duration_sec)
        return True

    def tick(self) -> float:
        if not self.running:
            return self.progress
        self._ticks += 1
        if self._ticks < self.total_ticks:
            return self.progress
        self.running = False
        self.status = STATUS_COMPLETE
        self._ticks = 0
        if self._on_event is not None:
            self._on_event("scan_finished", status=self.status.message)
        return 1.0


def run_blocking(
    scan: SimulatedScan,
    sleep: Callable[[float], None] | None = None,
    on_tick: Callable[[float], None] | None = None,
) -> ScanStatus:
    sleep = sleep or time.sleep
    scan.start()
    while scan.running:
        sleep(scan.tick_sec)
        progress = scan.tick()
        if on_tick is not None:
            on_tick(progress)
    return scan.status
