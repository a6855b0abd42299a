"""Stage builders and calibration rules for each kind of timer."""

from __future__ import annotations

from eontimer.calibration import CalibrationService, _round_half_away
from eontimer.functions import to_minimum_length

_CLOSE_THRESHOLD = 167
_UPDATE_FACTOR = 1.0
_CLOSE_UPDATE_FACTOR = 0.75
_ENTRALINK_STAGE1_OFFSET = 250
_ENTRALINK_FRAME_RATE = 0.837148929


class SecondTimer:
    """Times a single stage that ends on a target second."""

    def create_stages(self, target_second: int, calibration: int) -> list[int]:
        """Stage lengths in milliseconds."""
        return [self.create_stage1(target_second, calibration)]

    def create_stage1(self, target_second: int, calibration: int) -> int:
        """Length of the only stage, at least the minimum stage length."""
        return to_minimum_length(target_second * 1000 + calibration + 200)

    def calibrate(self, target_second: int, second_hit: int) -> int:
        """Calibration adjustment in milliseconds after hitting ``second_hit``."""
        if second_hit < target_second:
            return (target_second - second_hit) * 1000 - 500
        if second_hit > target_second:
            return (target_second - second_hit) * 1000 + 500
        return 0


class DelayTimer:
    """Times a target second followed by a target delay."""

    def __init__(
        self, second_timer: SecondTimer, calibration_service: CalibrationService
    ) -> None:
        self.second_timer = second_timer
        self.calibration_service = calibration_service

    def create_stages(
        self, target_delay: int, target_second: int, calibration: int
    ) -> list[int]:
        """Stage lengths in milliseconds."""
        return [
            self.create_stage1(target_delay, target_second, calibration),
            self.create_stage2(target_delay, calibration),
        ]

    def create_stage1(
        self, target_delay: int, target_second: int, calibration: int
    ) -> int:
        """Length of the stage before the delay starts."""
        return to_minimum_length(
            self.second_timer.create_stage1(target_second, calibration)
            - self.calibration_service.to_milliseconds(target_delay)
        )

    def create_stage2(self, target_delay: int, calibration: int) -> int:
        """Length of the delay stage."""
        return self.calibration_service.to_milliseconds(target_delay) - calibration

    def calibrate(self, target_delay: int, delay_hit: int) -> int:
        """Calibration adjustment in milliseconds, damped when the hit was close."""
        delta = self.calibration_service.to_milliseconds(
            delay_hit
        ) - self.calibration_service.to_milliseconds(target_delay)
        if abs(delta) <= _CLOSE_THRESHOLD:
            return int(_CLOSE_UPDATE_FACTOR * delta)
        return int(_UPDATE_FACTOR * delta)


class EntralinkTimer:
    """Delay timer adjusted for the Entralink."""

    def __init__(self, delay_timer: DelayTimer) -> None:
        self.delay_timer = delay_timer

    def create_stages(
        self,
        target_delay: int,
        target_second: int,
        calibration: int,
        entralink_calibration: int,
    ) -> list[int]:
        """Stage lengths in milliseconds."""
        return [
            self.create_stage1(target_delay, target_second, calibration),
            self.create_stage2(target_delay, calibration, entralink_calibration),
        ]

    def create_stage1(
        self, target_delay: int, target_second: int, calibration: int
    ) -> int:
        """Length of the first stage."""
        return (
            self.delay_timer.create_stage1(target_delay, target_second, calibration)
            + _ENTRALINK_STAGE1_OFFSET
        )

    def create_stage2(
        self, target_delay: int, calibration: int, entralink_calibration: int
    ) -> int:
        """Length of the second stage."""
        return (
            self.delay_timer.create_stage2(target_delay, calibration)
            - entralink_calibration
        )

    def calibrate(self, target_delay: int, delay_hit: int) -> int:
        """Calibration adjustment in milliseconds."""
        return self.delay_timer.calibrate(target_delay, delay_hit)


class EnhancedEntralinkTimer:
    """Entralink timer with a third stage for frame advances."""

    def __init__(self, entralink_timer: EntralinkTimer) -> None:
        self.entralink_timer = entralink_timer

    def create_stages(
        self,
        target_delay: int,
        target_second: int,
        target_advances: int,
        calibration: int,
        entralink_calibration: int,
        frame_calibration: int,
    ) -> list[int]:
        """Stage lengths in milliseconds."""
        return [
            self.create_stage1(target_delay, target_second, calibration),
            self.create_stage2(target_delay, calibration, entralink_calibration),
            self.create_stage3(target_advances, frame_calibration),
        ]

    def create_stage1(
        self, target_delay: int, target_second: int, calibration: int
    ) -> int:
        """Length of the first stage."""
        return self.entralink_timer.create_stage1(
            target_delay, target_second, calibration
        )

    def create_stage2(
        self, target_delay: int, calibration: int, entralink_calibration: int
    ) -> int:
        """Length of the second stage."""
        return self.entralink_timer.create_stage2(
            target_delay, calibration, entralink_calibration
        )

    def create_stage3(self, target_advances: int, frame_calibration: int) -> int:
        """Length of the advances stage."""
        return (
            _round_half_away(target_advances / _ENTRALINK_FRAME_RATE) * 1000
            + frame_calibration
        )

    def calibrate(self, target_advances: int, actual_advances: int) -> int:
        """Frame calibration adjustment in milliseconds."""
        return int((target_advances - actual_advances) / _ENTRALINK_FRAME_RATE) * 1000


class FrameTimer:
    """Times a pre-timer followed by a target frame."""

    def __init__(self, calibration_service: CalibrationService) -> None:
        self.calibration_service = calibration_service

    def create_stages(
        self, pre_timer: int, target_frame: int, calibration: int
    ) -> list[int]:
        """Stage lengths in milliseconds."""
        return [
            self.create_stage1(pre_timer),
            self.create_stage2(target_frame, calibration),
        ]

    def create_stage1(self, pre_timer: int) -> int:
        """Length of the pre-timer stage."""
        return pre_timer

    def create_stage2(self, target_frame: int, calibration: int) -> int:
        """Length of the frame stage."""
        return self.calibration_service.to_milliseconds(target_frame) + calibration

    def calibrate(self, target_frame: int, frame_hit: int) -> int:
        """Calibration adjustment in milliseconds after hitting ``frame_hit``."""
        return self.calibration_service.to_milliseconds(target_frame - frame_hit)