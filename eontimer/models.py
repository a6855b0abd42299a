"""Core value types: signals, enumerations and the timer state snapshot."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, TypeVar

_E = TypeVar("_E", bound=Enum)


class Signal:
    """A list of callbacks that are all invoked when the signal is emitted."""

    def __init__(self) -> None:
        self._callbacks: list[Callable[..., Any]] = []

    def connect(self, callback: Callable[..., Any]) -> None:
        """Register ``callback`` to be called on every emission."""
        self._callbacks.append(callback)

    def disconnect(self, callback: Callable[..., Any]) -> None:
        """Remove a previously connected callback.

        Raises ValueError if the callback is not connected.
        """
        try:
            self._callbacks.remove(callback)
        except ValueError:
            raise ValueError("callback is not connected to this signal") from None

    def emit(self, *args: Any) -> None:
        """Call every connected callback with ``args``, in connection order."""
        for callback in tuple(self._callbacks):
            callback(*args)


def _member_at(enum_cls: type[_E], index: int) -> _E:
    members = list(enum_cls)
    if not 0 <= index < len(members):
        raise IndexError(f"{enum_cls.__name__} index out of range: {index}")
    return members[index]


def _position_of(member: Enum) -> int:
    return list(type(member)).index(member)


class _DisplayEnum(Enum):
    """Enum whose string form is its display name."""

    def __str__(self) -> str:
        return self.value


class ActionMode(_DisplayEnum):
    """How the user is alerted when an action fires."""

    AUDIO = "Audio"
    VISUAL = "Visual"
    AV = "A/V"

    @classmethod
    def from_index(cls, index: int) -> ActionMode:
        """Return the member stored at position ``index``."""
        return _member_at(cls, index)

    def index(self) -> int:
        """Return the position of this member."""
        return _position_of(self)


_GBA_FPS = 59.7275
_NDS_FPS = 59.8261
_NDS_GBA_FPS = 59.6555


class Console(_DisplayEnum):
    """The console a game is played on, which fixes its frame rate."""

    GBA = "GBA"
    NDS = "NDS"
    NDS_GBA = "NDS-GBA"
    DSI = "DSI"
    THREE_DS = "3DS"

    @classmethod
    def from_index(cls, index: int) -> Console:
        """Return the member stored at position ``index``."""
        return _member_at(cls, index)

    def index(self) -> int:
        """Return the position of this member."""
        return _position_of(self)

    def fps(self) -> float:
        """Frames per second of this console."""
        if self is Console.GBA:
            return _GBA_FPS
        if self is Console.NDS_GBA:
            return _NDS_GBA_FPS
        return _NDS_FPS

    def framerate(self) -> float:
        """Duration of one frame in milliseconds."""
        return 1000 / self.fps()


class Gen5TimerMode(_DisplayEnum):
    """The kinds of fifth-generation timers."""

    STANDARD = "Standard"
    C_GEAR = "C-Gear"
    ENTRALINK = "Entralink"
    ENTRALINK_PLUS = "Entralink+"

    @classmethod
    def from_index(cls, index: int) -> Gen5TimerMode:
        """Return the member stored at position ``index``."""
        return _member_at(cls, index)

    def index(self) -> int:
        """Return the position of this member."""
        return _position_of(self)


class Sound(_DisplayEnum):
    """The sounds that can be played for an action."""

    BEEP = "Beep"
    DING = "Ding"
    TICK = "Tick"
    POP = "Pop"

    @classmethod
    def from_index(cls, index: int) -> Sound:
        """Return the member stored at position ``index``."""
        return _member_at(cls, index)

    def index(self) -> int:
        """Return the position of this member."""
        return _position_of(self)


@dataclass(frozen=True)
class TimerState:
    """Snapshot of the running stage: its length and the time left, in milliseconds."""

    duration: int
    remaining: int