"""Controllers that turn third- and fourth-generation timer models into stages."""

from __future__ import annotations

from eontimer.calibration import CalibrationService
from eontimer.models import Signal
from eontimer.timer_models import Gen3TimerModel, Gen4TimerModel
from eontimer.timers import DelayTimer, FrameTimer


class Gen3TimerController:
    """Builds and calibrates frame-timer stages from a Gen3TimerModel."""

    def __init__(
        self,
        model: Gen3TimerModel,
        frame_timer: FrameTimer,
        calibration_service: CalibrationService,
    ) -> None:
        self.model = model
        self.frame_timer = frame_timer
        self.calibration_service = calibration_service
        self.timer_changed = Signal()
        for signal in (
            model.calibration_changed,
            model.pre_timer_changed,
            model.target_frame_changed,
        ):
            signal.connect(self._on_timer_field_changed)

    def _on_timer_field_changed(self, _value: int) -> None:
        self.timer_changed.emit(self.create_stages())

    def create_stages(self) -> list[int]:
        """Stage lengths in milliseconds for the current model."""
        return self.frame_timer.create_stages(
            self.model.pre_timer, self.model.target_frame, self.model.calibration
        )

    def calibrate(self) -> None:
        """Fold the frame hit into the calibration and clear the hit."""
        adjustment = self.frame_timer.calibrate(self.model.target_frame, self.model.frame_hit)
        self.model.calibration = self.model.calibration + adjustment
        self.model.frame_hit = 0


class Gen4TimerController:
    """Builds and calibrates delay-timer stages from a Gen4TimerModel."""

    def __init__(
        self,
        model: Gen4TimerModel,
        delay_timer: DelayTimer,
        calibration_service: CalibrationService,
    ) -> None:
        self.model = model
        self.delay_timer = delay_timer
        self.calibration_service = calibration_service
        self.timer_changed = Signal()
        for signal in (
            model.calibrated_delay_changed,
            model.calibrated_second_changed,
            model.target_delay_changed,
            model.target_second_changed,
        ):
            signal.connect(self._on_timer_field_changed)

    def _on_timer_field_changed(self, _value: int) -> None:
        self.timer_changed.emit(self.create_stages())

    def _calibration(self) -> int:
        return self.calibration_service.create_calibration(
            self.model.calibrated_delay, self.model.calibrated_second
        )

    def create_stages(self) -> list[int]:
        """Stage lengths in milliseconds for the current model."""
        return self.delay_timer.create_stages(
            self.model.target_delay, self.model.target_second, self._calibration()
        )

    def calibrate(self) -> None:
        """Fold the delay hit into the calibrated delay and clear the hit."""
        adjustment = self.delay_timer.calibrate(self.model.target_delay, self.model.delay_hit)
        self.model.calibrated_delay = (
            self.model.calibrated_delay + self.calibration_service.to_delays(adjustment)
        )
        self.model.delay_hit = 0