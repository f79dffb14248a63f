"""
Formatting utilities for display.

Used by the API responses and by aggregates that need consistent output.
"""

import math
from datetime import date

from .constants import UNAVAILABLE


def format_duration(seconds: float | None) -> str:
    """
    Format seconds as 'H:MM:SS.sss' or 'M:SS.sss'.

    Args:
        seconds: Duration in seconds (e.g., 62.345)

    Returns:
        Formatted string (e.g., '1:02.345'), '—' when not displayable
    """
    if seconds is None or not math.isfinite(seconds) or seconds < 0:
        return UNAVAILABLE
    millis = seconds * 1000
    if not math.isfinite(millis):
        return UNAVAILABLE

    total_ms = int(math.floor(millis + 0.5))
    hours, rest = divmod(total_ms, 3_600_000)
    minutes, rest = divmod(rest, 60_000)
    secs = rest / 1000

    if hours > 0:
        return f"{hours}:{minutes:02d}:{secs:06.3f}"
    return f"{minutes}:{secs:06.3f}"


def round_for_display(value: float) -> float | int:
    """
    Round with precision adapted to magnitude.

    Args:
        value: Any number

    Returns:
        0 decimals from 1000, 1 from 100, 2 from 10, else 3.
        Non-finite input is returned unchanged.
    """
    if not math.isfinite(value):
        return value

    magnitude = abs(value)
    if magnitude >= 1000:
        return int(math.floor(value + 0.5))
    if magnitude >= 100:
        return round(value, 1)
    if magnitude >= 10:
        return round(value, 2)
    return round(value, 3)


def format_number(value: float | None, decimals: int | None = None) -> str:
    """Adaptive-precision text for a number (or fixed ``decimals``), '—' when unknown."""
    if value is None or not math.isfinite(value):
        return UNAVAILABLE
    if decimals is not None:
        return f"{value:.{decimals}f}"
    rounded = round_for_display(value)
    if isinstance(rounded, float) and rounded.is_integer():
        return str(int(rounded))
    return str(rounded)


def format_date(d: date | None) -> str:
    """
    Format a date as 'DD-MM-YYYY'.

    Args:
        d: Date or None

    Returns:
        Formatted string (e.g., '02-11-2019'), '—' when missing
    """
    if d is None:
        return UNAVAILABLE
    return d.strftime("%d-%m-%Y")
