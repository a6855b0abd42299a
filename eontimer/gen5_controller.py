"""Controller that turns the fifth-generation timer model into stages."""

from __future__ import annotations

from eontimer.calibration import CalibrationService
from eontimer.gen5_model import Gen5TimerModel
from eontimer.models import Gen5TimerMode, Signal
from eontimer.timers import (
    DelayTimer,
    EnhancedEntralinkTimer,
    EntralinkTimer,
    SecondTimer,
)


class Gen5TimerController:
    """Builds and calibrates the stages of every fifth-generation timer mode."""

    def __init__(
        self,
        model: Gen5TimerModel,
        delay_timer: DelayTimer,
        second_timer: SecondTimer,
        entralink_timer: EntralinkTimer,
        enhanced_entralink_timer: EnhancedEntralinkTimer,
        calibration_service: CalibrationService,
    ) -> None:
        self.model = model
        self.delay_timer = delay_timer
        self.second_timer = second_timer
        self.entralink_timer = entralink_timer
        self.enhanced_entralink_timer = enhanced_entralink_timer
        self.calibration_service = calibration_service
        self.timer_changed = Signal()
        for signal in (
            model.mode_changed,
            model.calibration_changed,
            model.target_delay_changed,
            model.target_second_changed,
            model.entralink_calibration_changed,
            model.frame_calibration_changed,
            model.target_advances_changed,
        ):
            signal.connect(self._on_timer_field_changed)

    def _on_timer_field_changed(self, _value: object) -> None:
        self.timer_changed.emit(self.create_stages())

    def _to_ms(self, value: int) -> int:
        return self.calibration_service.calibrate_to_milliseconds(value)

    def _to_delays(self, value: int) -> int:
        return self.calibration_service.calibrate_to_delays(value)

    def create_stages(self) -> list[int]:
        """Stage lengths in milliseconds for the current mode."""
        model = self.model
        mode = model.mode
        if mode is Gen5TimerMode.STANDARD:
            return self.second_timer.create_stages(
                model.target_second, self._to_ms(model.calibration)
            )
        if mode is Gen5TimerMode.C_GEAR:
            return self.delay_timer.create_stages(
                model.target_delay, model.target_second, self._to_ms(model.calibration)
            )
        if mode is Gen5TimerMode.ENTRALINK:
            return self.entralink_timer.create_stages(
                model.target_delay,
                model.target_second,
                self._to_ms(model.calibration),
                self._to_ms(model.entralink_calibration),
            )
        return self.enhanced_entralink_timer.create_stages(
            model.target_delay,
            model.target_second,
            model.target_advances,
            self._to_ms(model.calibration),
            self._to_ms(model.entralink_calibration),
            model.frame_calibration,
        )

    def calibrate(self) -> None:
        """Fold the recorded hits into the calibrations and clear the hits."""
        model = self.model
        mode = model.mode
        if mode is Gen5TimerMode.C_GEAR:
            model.calibration = model.calibration + self._to_delays(
                self._delay_calibration()
            )
        else:
            second_adjustment = self._to_delays(self._second_calibration())
            if mode is Gen5TimerMode.STANDARD:
                model.calibration = model.calibration + second_adjustment
            else:
                entralink_adjustment = self._to_delays(self._entralink_calibration())
                model.calibration = model.calibration + second_adjustment
                model.entralink_calibration = (
                    model.entralink_calibration + entralink_adjustment
                )
                if mode is Gen5TimerMode.ENTRALINK_PLUS:
                    model.frame_calibration = (
                        model.frame_calibration + self._advances_calibration()
                    )
        model.delay_hit = 0
        model.second_hit = 0
        model.advances_hit = 0

    def _delay_calibration(self) -> int:
        return self.delay_timer.calibrate(self.model.target_delay, self.model.delay_hit)

    def _second_calibration(self) -> int:
        return self.second_timer.calibrate(
            self.model.target_second, self.model.second_hit
        )

    def _entralink_calibration(self) -> int:
        return self.entralink_timer.calibrate(
            self.model.target_delay,
            self.model.delay_hit - self._second_calibration(),
        )

    def _advances_calibration(self) -> int:
        return self.enhanced_entralink_timer.calibrate(
            self.model.target_advances, self.model.advances_hit
        )