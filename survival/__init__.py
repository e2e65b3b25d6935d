"""Deterministic survival-wave combat simulation core."""

__version__ = "0.1.0"
