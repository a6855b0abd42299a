"""Persistent key/value settings and the action and timer preference models."""

from __future__ import annotations

import json
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Iterator

from eontimer.models import ActionMode, Console, Signal, Sound

Color = tuple[int, int, int]

_ACTION_GROUP = "action"
_ACTION_MODE = "mode"
_ACTION_SOUND = "sound"
_ACTION_COLOR = "color"
_ACTION_INTERVAL = "interval"
_ACTION_COUNT = "count"

DEFAULT_ACTION_MODE = 0
DEFAULT_SOUND = 0
DEFAULT_COLOR: Color = (0, 0, 255)
DEFAULT_INTERVAL = 500
DEFAULT_COUNT = 6

_TIMER_GROUP = "timer"
_TIMER_CONSOLE = "console"
_TIMER_REFRESH_INTERVAL = "refreshInterval"
_TIMER_PRECISION = "precisionCalibrationEnabled"

DEFAULT_CONSOLE = 1
DEFAULT_REFRESH_INTERVAL = 8
DEFAULT_PRECISION_CALIBRATION_ENABLED = False


class SettingsStore:
    """Hierarchical settings addressed by slash-separated keys, optionally backed by a JSON file."""

    def __init__(self, path: str | Path | None = None) -> None:
        self.path = Path(path) if path is not None else None
        self._values: dict[str, Any] = {}
        self._prefix: list[str] = []
        if self.path is not None and self.path.exists():
            with self.path.open(encoding="utf-8") as handle:
                data = json.load(handle)
            if not isinstance(data, dict):
                raise ValueError(f"settings file {self.path} does not hold an object")
            self._values.update(data)

    def _full_key(self, key: str) -> str:
        return "/".join([*self._prefix, key])

    def value(self, key: str, default: Any = None) -> Any:
        """Return the stored value for ``key`` in the current group, or ``default``."""
        return self._values.get(self._full_key(key), default)

    def set_value(self, key: str, value: Any) -> None:
        """Store ``value`` under ``key`` in the current group."""
        self._values[self._full_key(key)] = value

    @contextmanager
    def group(self, name: str) -> Iterator[SettingsStore]:
        """Prefix every key used inside the block with ``name``."""
        self._prefix.append(name)
        try:
            yield self
        finally:
            self._prefix.pop()

    def sync(self) -> None:
        """Write all values to the backing file, if there is one."""
        if self.path is None:
            return
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(
            json.dumps(self._values, indent=2, sort_keys=True), encoding="utf-8"
        )


def _to_int(value: Any) -> int:
    if isinstance(value, str):
        return int(value.strip())
    return int(value)


def _to_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("true", "1", "yes")
    return bool(value)


def _parse_color(value: Any) -> Color:
    if isinstance(value, str):
        text = value.lstrip("#")
        if len(text) != 6:
            raise ValueError(f"invalid colour: {value!r}")
        return (int(text[0:2], 16), int(text[2:4], 16), int(text[4:6], 16))
    red, green, blue = value
    return (int(red), int(green), int(blue))


def _format_color(color: Color) -> str:
    return "#{:02x}{:02x}{:02x}".format(*color)


class ActionSettings:
    """How and when the user is alerted as a stage ends."""

    def __init__(self, store: SettingsStore) -> None:
        self.color_changed = Signal()
        with store.group(_ACTION_GROUP):
            self.mode = ActionMode.from_index(
                _to_int(store.value(_ACTION_MODE, DEFAULT_ACTION_MODE))
            )
            self.sound = Sound.from_index(_to_int(store.value(_ACTION_SOUND, DEFAULT_SOUND)))
            self._color = _parse_color(store.value(_ACTION_COLOR, DEFAULT_COLOR))
            self.interval = _to_int(store.value(_ACTION_INTERVAL, DEFAULT_INTERVAL))
            self.count = _to_int(store.value(_ACTION_COUNT, DEFAULT_COUNT))

    @property
    def color(self) -> Color:
        """The visual cue colour as an (r, g, b) tuple."""
        return self._color

    @color.setter
    def color(self, value: Color) -> None:
        color = _parse_color(value)
        if color != self._color:
            self._color = color
            self.color_changed.emit(color)

    def sync(self, store: SettingsStore) -> None:
        """Write these settings into ``store``."""
        with store.group(_ACTION_GROUP):
            store.set_value(_ACTION_MODE, self.mode.index())
            store.set_value(_ACTION_SOUND, self.sound.index())
            store.set_value(_ACTION_INTERVAL, self.interval)
            store.set_value(_ACTION_COUNT, self.count)
            store.set_value(_ACTION_COLOR, _format_color(self._color))


class TimerSettings:
    """Console, refresh rate and calibration preferences."""

    def __init__(self, store: SettingsStore) -> None:
        with store.group(_TIMER_GROUP):
            self.console = Console.from_index(
                _to_int(store.value(_TIMER_CONSOLE, DEFAULT_CONSOLE))
            )
            self.refresh_interval = _to_int(
                store.value(_TIMER_REFRESH_INTERVAL, DEFAULT_REFRESH_INTERVAL)
            )
            self.precision_calibration_enabled = _to_bool(
                store.value(_TIMER_PRECISION, DEFAULT_PRECISION_CALIBRATION_ENABLED)
            )

    def sync(self, store: SettingsStore) -> None:
        """Write these settings into ``store``."""
        with store.group(_TIMER_GROUP):
            store.set_value(_TIMER_CONSOLE, self.console.index())
            store.set_value(_TIMER_REFRESH_INTERVAL, int(self.refresh_interval))
            store.set_value(_TIMER_PRECISION, self.precision_calibration_enabled)