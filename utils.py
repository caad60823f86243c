# utils.py
"""
utils.py - Common utility functions for the compost simulation

Provides shared, stateless helper functions used across different modules.
"""
from __future__ import annotations

from typing import Any, Dict, Optional


def clamp(val: float, low: float, high: float) -> float:
    """Clamp a value between low and high bounds."""
    return max(low, min(high, val))


def clamp01(val: float) -> float:
    """Clamp a value to the unit interval used by moisture and aeration."""
    return clamp(val, 0.0, 1.0)


def hours_since(now: float, then: Optional[float]) -> float:
    """Hours elapsed between two game-clock timestamps.

    An unset timestamp (None) or a clock that went backwards yields 0.0,
    which every hourly gate treats as "no update due".
    """
    if then is None:
        return 0.0
    return max(0.0, now - then)


def format_hours(hours: float) -> str:
    """Format a duration in game hours: '3d 4h' or '7h'."""
    whole = int(hours)
    days, rem = divmod(whole, 24)
    if days:
        return f"{days}d {rem}h"
    return f"{rem}h"


def get_float(record: Dict[str, Any], key: str, default: float) -> float:
    """Read a numeric field from a saved record, falling back when absent or null."""
    value = record.get(key)
    if value is None:
        return default
    return float(value)


def get_optional_float(record: Dict[str, Any], key: str) -> Optional[float]:
    """Read an optional timestamp from a saved record."""
    value = record.get(key)
    return None if value is None else float(value)
