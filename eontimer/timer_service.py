"""Runs a sequence of timed stages on a worker thread and signals its progress."""

from __future__ import annotations

import sys
import threading
import time
from typing import Callable, Iterable

from eontimer.clock import Clock
from eontimer.models import ActionMode, Signal, Sound, TimerState
from eontimer.settings import ActionSettings, TimerSettings

_US_PER_MS = 1000
_MS_PER_MINUTE = 60000
_TICKS_PER_STATE_UPDATE = 4


def _trunc_div(numerator: int, denominator: int) -> int:
    """Integer division rounding toward zero."""
    quotient = abs(numerator) // abs(denominator)
    return quotient if (numerator >= 0) == (denominator > 0) else -quotient


def _terminal_bell(sound: Sound) -> None:
    sys.stdout.write("\a")
    sys.stdout.flush()


class SoundService:
    """Plays the configured sound when the action mode includes audio."""

    def __init__(
        self,
        action_settings: ActionSettings,
        player: Callable[[Sound], object] | None = None,
    ) -> None:
        self.action_settings = action_settings
        self._player = player if player is not None else _terminal_bell

    def play(self) -> Sound | None:
        """Play the selected sound if audio cues are on; return the sound played, if any."""
        if self.action_settings.mode in (ActionMode.AUDIO, ActionMode.AV):
            sound = self.action_settings.sound
            self._player(sound)
            return sound
        return None


class TimerService:
    """Counts down stages in milliseconds, firing actions as each stage nears its end."""

    def __init__(
        self,
        timer_settings: TimerSettings,
        action_settings: ActionSettings,
        sound_service: SoundService | None = None,
        *,
        sleep: Callable[[float], object] = time.sleep,
        clock_factory: Callable[[], Clock] = Clock,
    ) -> None:
        self.timer_settings = timer_settings
        self.action_settings = action_settings
        self.activated = Signal()
        self.action_triggered = Signal()
        self.state_changed = Signal()
        self.minutes_before_target_changed = Signal()
        self.next_stage_changed = Signal()
        self._sleep = sleep
        self._clock_factory = clock_factory
        self._running = False
        self._thread: threading.Thread | None = None
        self._stages: list[int] | None = None
        sounds = sound_service if sound_service is not None else SoundService(action_settings)
        self.action_triggered.connect(sounds.play)

    @property
    def stages(self) -> tuple[int, ...]:
        """The current stage lengths in milliseconds."""
        return tuple(self._stages or ())

    @property
    def running(self) -> bool:
        """Whether the timer is counting down."""
        return self._running

    def set_stages(self, stages: Iterable[int]) -> None:
        """Replace the stages, unless the timer is running."""
        new_stages = [int(stage) for stage in stages]
        if not new_stages:
            raise ValueError("a timer needs at least one stage")
        if self._running:
            return
        self._stages = new_stages
        self._reset()

    def start(self) -> None:
        """Start counting down on a worker thread; does nothing if already running."""
        if self._running:
            return
        if self._stages is None:
            raise RuntimeError("no stages have been set")
        self._running = True
        self._thread = threading.Thread(target=self._run, name="timer", daemon=True)
        self.activated.emit(True)
        self._thread.start()

    def stop(self) -> None:
        """Stop the countdown and wait for the worker to finish."""
        if not self._running:
            return
        self._running = False
        thread = self._thread
        if thread is not None and thread is not threading.current_thread():
            thread.join()

    def wait(self, timeout: float | None = None) -> bool:
        """Wait for the worker to finish; return whether it has."""
        thread = self._thread
        if thread is None:
            return True
        thread.join(timeout)
        return not thread.is_alive()

    def _reset(self) -> None:
        stages = self._stages or []
        total = sum(stages)
        current = stages[0]
        self.state_changed.emit(TimerState(current, current))
        self.minutes_before_target_changed.emit(_trunc_div(total, _MS_PER_MINUTE))
        self.next_stage_changed.emit(stages[1] if len(stages) >= 2 else 0)

    def _run(self) -> None:
        pre_elapsed = 0
        for stage_ms in list(self._stages or []):
            if not self._running:
                break
            stage = stage_ms * _US_PER_MS
            pre_elapsed = self._run_stage(stage, pre_elapsed) - stage
        self._running = False
        self.activated.emit(False)
        self._reset()

    def _run_stage(self, stage: int, pre_elapsed: int) -> int:
        """Run one stage of ``stage`` microseconds; return the microseconds elapsed."""
        clock = self._clock_factory()
        period = int(self.timer_settings.refresh_interval) * _US_PER_MS
        interval = int(self.action_settings.interval) * _US_PER_MS
        actions = [interval * i for i in range(int(self.action_settings.count))]
        next_action = actions[-1] if actions else None

        ticks = 0
        elapsed = pre_elapsed
        adjusted_period = period
        while self._running and elapsed < stage:
            if next_action is not None:
                adjusted_period = min(adjusted_period, stage - elapsed - next_action)
            self._sleep(max(adjusted_period, 0) / 1_000_000)

            delta = clock.tick()
            remaining = stage - elapsed - delta
            if next_action is not None and remaining <= next_action:
                self.action_triggered.emit()
                actions.pop()
                next_action = actions[-1] if actions else None
            if ticks % _TICKS_PER_STATE_UPDATE == 0:
                self.state_changed.emit(
                    TimerState(
                        _trunc_div(stage, _US_PER_MS), _trunc_div(remaining, _US_PER_MS)
                    )
                )
            adjusted_period -= delta - period
            elapsed += delta
            ticks += 1
        return elapsed