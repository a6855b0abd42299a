"""Multi-stage calibrated countdown timer for handheld-console RNG manipulation."""

__version__ = "0.1.0"