"""The application: wires settings, timer models, controllers and the timer together."""

from __future__ import annotations

import argparse
import threading
import time
from enum import IntEnum
from pathlib import Path
from typing import Callable, Sequence

from eontimer.calibration import CalibrationService
from eontimer.clock import Clock
from eontimer.controllers import Gen3TimerController, Gen4TimerController
from eontimer.gen5_controller import Gen5TimerController
from eontimer.gen5_model import Gen5TimerModel
from eontimer.models import ActionMode, Sound, TimerState
from eontimer.settings import ActionSettings, SettingsStore, TimerSettings, _to_int
from eontimer.timer_models import Gen3TimerModel, Gen4TimerModel
from eontimer.timer_service import SoundService, TimerService
from eontimer.timers import (
    DelayTimer,
    EnhancedEntralinkTimer,
    EntralinkTimer,
    FrameTimer,
    SecondTimer,
)

_SELECTED_TAB = "selectedTab"
_CUSTOM_STAGE_MS = 10000
_VISUAL_CUE_SECONDS = 0.075
_DEFAULT_SETTINGS_PATH = Path.home() / ".config" / "eontimer" / "settings.json"


class Tab(IntEnum):
    """The timer tabs, in the order they are persisted."""

    GEN5 = 0
    GEN4 = 1
    GEN3 = 2
    CUSTOM = 3


def format_time(milliseconds: int) -> str:
    """Render milliseconds as ``seconds:millis``; negative values are unknown."""
    if milliseconds > 0:
        return f"{milliseconds // 1000}:{milliseconds % 1000:03d}"
    if milliseconds < 0:
        return "?:???"
    return "0:000"


class _TimerDisplay:
    """Text shown for the running timer and the state of its visual cue."""

    def __init__(self, timer_service: TimerService, action_settings: ActionSettings) -> None:
        self._action_settings = action_settings
        self.current_stage = "0:000"
        self.minutes_before_target = "0"
        self.next_stage = "0:000"
        self.active = False
        self.color = action_settings.color
        self._lock = threading.Lock()
        timer_service.state_changed.connect(self._on_state)
        timer_service.minutes_before_target_changed.connect(self._on_minutes)
        timer_service.next_stage_changed.connect(self._on_next_stage)
        timer_service.action_triggered.connect(self._activate)
        action_settings.color_changed.connect(self._on_color)

    def _on_state(self, state: TimerState) -> None:
        self.current_stage = format_time(state.remaining)

    def _on_minutes(self, minutes: int) -> None:
        self.minutes_before_target = str(minutes)

    def _on_next_stage(self, milliseconds: int) -> None:
        self.next_stage = format_time(milliseconds)

    def _on_color(self, color: tuple[int, int, int]) -> None:
        self.color = color

    def _visual_cue_enabled(self) -> bool:
        return self._action_settings.mode in (ActionMode.VISUAL, ActionMode.AV)

    def _activate(self) -> None:
        with self._lock:
            if not self._visual_cue_enabled() or self.active:
                return
            self.active = True
        timer = threading.Timer(_VISUAL_CUE_SECONDS, self._deactivate)
        timer.daemon = True
        timer.start()

    def _deactivate(self) -> None:
        with self._lock:
            if self._visual_cue_enabled() and self.active:
                self.active = False

    def lines(self) -> list[str]:
        return [
            self.current_stage,
            f"Minutes Before Target: {self.minutes_before_target}",
            f"Next Stage: {self.next_stage}",
        ]


class Application:
    """Holds every model and service and exposes the actions a user can take."""

    def __init__(
        self,
        store: SettingsStore | None = None,
        *,
        sound_player: Callable[[Sound], object] | None = None,
        sleep: Callable[[float], object] = time.sleep,
        clock_factory: Callable[[], Clock] = Clock,
    ) -> None:
        self.store = store if store is not None else SettingsStore()
        self.action_settings = ActionSettings(self.store)
        self.timer_settings = TimerSettings(self.store)
        self.gen5_model = Gen5TimerModel(self.store)
        self.gen4_model = Gen4TimerModel(self.store)
        self.gen3_model = Gen3TimerModel(self.store)

        calibration = CalibrationService(self.timer_settings)
        second_timer = SecondTimer()
        frame_timer = FrameTimer(calibration)
        delay_timer = DelayTimer(second_timer, calibration)
        entralink_timer = EntralinkTimer(delay_timer)
        enhanced_timer = EnhancedEntralinkTimer(entralink_timer)
        self.calibration_service = calibration

        self.timer_service = TimerService(
            self.timer_settings,
            self.action_settings,
            SoundService(self.action_settings, sound_player),
            sleep=sleep,
            clock_factory=clock_factory,
        )
        self.display = _TimerDisplay(self.timer_service, self.action_settings)

        self.gen5 = Gen5TimerController(
            self.gen5_model,
            delay_timer,
            second_timer,
            entralink_timer,
            enhanced_timer,
            calibration,
        )
        self.gen4 = Gen4TimerController(self.gen4_model, delay_timer, calibration)
        self.gen3 = Gen3TimerController(self.gen3_model, frame_timer, calibration)
        for controller in (self.gen5, self.gen4, self.gen3):
            controller.timer_changed.connect(self.timer_service.set_stages)

        self.controls_enabled = True
        self.timer_service.activated.connect(self._on_activated)
        self.update_timer()

    def _on_activated(self, activated: bool) -> None:
        self.controls_enabled = not activated

    def _require_idle(self, action: str) -> None:
        if self.timer_service.running:
            raise RuntimeError(f"cannot {action} while the timer is running")

    def selected_tab(self) -> Tab:
        """The persisted tab, the fifth-generation timer by default."""
        return Tab(_to_int(self.store.value(_SELECTED_TAB, Tab.GEN5)))

    def select_tab(self, tab: Tab | int) -> None:
        """Select and persist ``tab``, then rebuild the timer's stages."""
        self._require_idle("change tab")
        tab = Tab(tab)
        self.store.set_value(_SELECTED_TAB, int(tab))
        self.update_timer()

    def update_timer(self) -> None:
        """Give the timer the stages of the selected tab."""
        tab = self.selected_tab()
        if tab is Tab.GEN5:
            stages = self.gen5.create_stages()
        elif tab is Tab.GEN4:
            stages = self.gen4.create_stages()
        elif tab is Tab.GEN3:
            stages = self.gen3.create_stages()
        else:
            stages = [_CUSTOM_STAGE_MS]
        self.timer_service.set_stages(stages)

    def calibrate(self) -> None:
        """Fold the recorded hits of the selected tab into its calibration."""
        self._require_idle("calibrate")
        tab = self.selected_tab()
        if tab is Tab.GEN5:
            self.gen5.calibrate()
        elif tab is Tab.GEN4:
            self.gen4.calibrate()
        elif tab is Tab.GEN3:
            self.gen3.calibrate()

    def toggle(self) -> bool:
        """Start the timer if it is idle, otherwise stop it; return whether it runs."""
        if self.timer_service.running:
            self.timer_service.stop()
        else:
            self.timer_service.start()
        return self.timer_service.running

    def close(self) -> None:
        """Stop the timer and persist every setting."""
        if self.timer_service.running:
            self.timer_service.stop()
        self.action_settings.sync(self.store)
        self.timer_settings.sync(self.store)
        self.gen5_model.sync(self.store)
        self.gen4_model.sync(self.store)
        self.gen3_model.sync(self.store)
        self.store.sync()


_TAB_CHOICES = {"5": Tab.GEN5, "4": Tab.GEN4, "3": Tab.GEN3, "custom": Tab.CUSTOM}


def main(argv: Sequence[str] | None = None) -> int:
    """Show the selected timer's stages and optionally run it."""
    parser = argparse.ArgumentParser(prog="eontimer", description="Stage timer for RNG manipulation.")
    parser.add_argument(
        "--settings",
        type=Path,
        default=_DEFAULT_SETTINGS_PATH,
        help="settings file (default: %(default)s)",
    )
    parser.add_argument("--tab", choices=sorted(_TAB_CHOICES), help="timer tab to select")
    parser.add_argument("--start", action="store_true", help="run the timer")
    args = parser.parse_args(argv)

    app = Application(SettingsStore(args.settings))
    try:
        if args.tab is not None:
            app.select_tab(_TAB_CHOICES[args.tab])
        print("Stages: " + ", ".join(format_time(s) for s in app.timer_service.stages))
        for line in app.display.lines():
            print(line)
        if args.start:
            app.toggle()
            try:
                app.timer_service.wait()
            except KeyboardInterrupt:
                app.timer_service.stop()
            print(app.display.current_stage)
    finally:
        app.close()
    return 0