"""Conversion between milliseconds and frame delays for the selected console."""

from __future__ import annotations

import math

from eontimer.settings import TimerSettings


def _round_half_away(value: float) -> int:
    if value >= 0:
        return int(math.floor(value + 0.5))
    return -int(math.floor(-value + 0.5))


class CalibrationService:
    """Converts between milliseconds and delays using the configured console's frame rate."""

    def __init__(self, timer_settings: TimerSettings) -> None:
        self.timer_settings = timer_settings

    def _framerate(self) -> float:
        return self.timer_settings.console.framerate()

    def to_delays(self, milliseconds: int) -> int:
        """Number of frames closest to ``milliseconds``."""
        return _round_half_away(milliseconds / self._framerate())

    def to_milliseconds(self, delays: int) -> int:
        """Milliseconds closest to ``delays`` frames."""
        return _round_half_away(delays * self._framerate())

    def calibrate_to_delays(self, milliseconds: int) -> int:
        """Express a calibration in delays, unless precision calibration keeps milliseconds."""
        if self.timer_settings.precision_calibration_enabled:
            return milliseconds
        return self.to_delays(milliseconds)

    def calibrate_to_milliseconds(self, delays: int) -> int:
        """Express a calibration in milliseconds, unless precision calibration already does."""
        if self.timer_settings.precision_calibration_enabled:
            return delays
        return self.to_milliseconds(delays)

    def create_calibration(self, delays: int, seconds: int) -> int:
        """Calibration in milliseconds from a calibrated delay and second."""
        return self.to_milliseconds(delays - self.to_delays(seconds * 1000))