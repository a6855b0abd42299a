"""Monotonic tick clock and a scoped duration reporter."""

from __future__ import annotations

import sys
import time
from typing import Callable, TextIO


class Clock:
    """Measures elapsed microseconds between successive ticks."""

    def __init__(self, now: Callable[[], int] = time.perf_counter_ns) -> None:
        self._now = now
        self._last_tick = now()

    def tick(self) -> int:
        """Return microseconds elapsed since the previous tick (or creation)."""
        current = self._now()
        elapsed = current // 1000 - self._last_tick // 1000
        self._last_tick = current
        return elapsed


class InstrumentationTimer:
    """Reports how long an operation took, once, when stopped or on leaving a ``with`` block."""

    def __init__(
        self,
        operation: str,
        stream: TextIO | None = None,
        now: Callable[[], int] = time.perf_counter_ns,
    ) -> None:
        self.operation = operation
        self._stream = stream
        self._now = now
        self._start = now()
        self._running = True

    def stop(self) -> None:
        """Write the elapsed time; later calls do nothing."""
        if not self._running:
            return
        end = self._now()
        duration = end // 1000 - self._start // 1000
        ms = duration * 0.001
        stream = self._stream if self._stream is not None else sys.stdout
        stream.write(f"{self.operation}: {duration}us ({ms:g}ms)\n")
        self._running = False

    def __enter__(self) -> InstrumentationTimer:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.stop()