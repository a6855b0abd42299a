"""Observable, persisted parameters of the third- and fourth-generation timers."""

from __future__ import annotations

from typing import Any

from eontimer.models import Signal
from eontimer.settings import SettingsStore, _to_int

_UNSET = object()


class _Notifying:
    """Attribute that emits ``<name>_changed`` on its owner whenever its value changes."""

    def __set_name__(self, owner: type, name: str) -> None:
        self._attr = "_" + name
        self._signal = name + "_changed"

    def __get__(self, obj: Any, objtype: type | None = None) -> Any:
        if obj is None:
            return self
        return getattr(obj, self._attr)

    def __set__(self, obj: Any, value: Any) -> None:
        if getattr(obj, self._attr, _UNSET) != value:
            setattr(obj, self._attr, value)
            getattr(obj, self._signal).emit(value)


class Gen3TimerModel:
    """Pre-timer, target frame and calibration of the frame timer."""

    pre_timer = _Notifying()
    target_frame = _Notifying()
    calibration = _Notifying()
    frame_hit = _Notifying()

    def __init__(self, store: SettingsStore) -> None:
        self.pre_timer_changed = Signal()
        self.target_frame_changed = Signal()
        self.calibration_changed = Signal()
        self.frame_hit_changed = Signal()
        with store.group("gen3"):
            self.pre_timer = _to_int(store.value("preTimer", 5000))
            self.target_frame = _to_int(store.value("targetFrame", 1000))
            self.calibration = _to_int(store.value("calibration", 0))
        self.frame_hit = 0

    def sync(self, store: SettingsStore) -> None:
        """Write the persisted fields into ``store``."""
        with store.group("gen3"):
            store.set_value("preTimer", self.pre_timer)
            store.set_value("targetFrame", self.target_frame)
            store.set_value("calibration", self.calibration)


class Gen4TimerModel:
    """Calibrated and target delay and second of the delay timer."""

    calibrated_delay = _Notifying()
    calibrated_second = _Notifying()
    target_delay = _Notifying()
    target_second = _Notifying()
    delay_hit = _Notifying()

    def __init__(self, store: SettingsStore) -> None:
        self.calibrated_delay_changed = Signal()
        self.calibrated_second_changed = Signal()
        self.target_delay_changed = Signal()
        self.target_second_changed = Signal()
        self.delay_hit_changed = Signal()
        with store.group("gen4"):
            self.calibrated_delay = _to_int(store.value("calibratedDelay", 500))
            self.calibrated_second = _to_int(store.value("calibratedSecond", 14))
            self.target_delay = _to_int(store.value("targetDelay", 600))
            self.target_second = _to_int(store.value("targetSecond", 50))
        self.delay_hit = 0

    def sync(self, store: SettingsStore) -> None:
        """Write the persisted fields into ``store``."""
        with store.group("gen4"):
            store.set_value("calibratedDelay", self.calibrated_delay)
            store.set_value("calibratedSecond", self.calibrated_second)
            store.set_value("targetDelay", self.target_delay)
            store.set_value("targetSecond", self.target_second)