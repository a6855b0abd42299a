"""Small helpers shared by the timers."""

_MINIMUM_LENGTH = 14000
_MINUTE_MS = 60000

_ASCII_LOWER = str.maketrans(
    "ABCDEFGHIJKLMNOPQRSTUVWXYZ", "abcdefghijklmnopqrstuvwxyz"
)


def to_minimum_length(value: int) -> int:
    """Add whole minutes to ``value`` until it is at least the minimum stage length."""
    while value < _MINIMUM_LENGTH:
        value += _MINUTE_MS
    return value


def equals_ignore_case(s1: str, s2: str) -> bool:
    """Compare two strings, ignoring the case of ASCII letters only."""
    return s1.translate(_ASCII_LOWER) == s2.translate(_ASCII_LOWER)