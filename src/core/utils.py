# core/utils.py
from __future__ import annotations

import math
from urllib.parse import unquote


def _is_number(value) -> bool:
    try:
        float(value)
    except (TypeError, ValueError):
        return False
    return True


def format_time(seconds) -> str:
    """
    Seconds -> "mm:ss".
    NaN, negative or non-numeric input gives "00:00". Minutes are not wrapped
    at an hour, so 3600 formats as "60:00".
    """
    if not _is_number(seconds):
        return "00:00"
    seconds = float(seconds)
    if math.isnan(seconds) or seconds < 0:
        return "00:00"
    if math.isinf(seconds):
        return "00:00"

    minutes = int(seconds // 60)
    remaining = int(seconds % 60)
    return f"{minutes:02d}:{remaining:02d}"


def format_progress(elapsed, duration) -> str:
    return f"{format_time(elapsed)} / {format_time(duration)}"


def progress_ratio(elapsed, duration) -> float | None:
    """
    elapsed / duration, or None when the result would not be a finite number
    (duration NaN before metadata loads, zero, infinite for streams).
    """
    if not _is_number(elapsed) or not _is_number(duration):
        return None
    try:
        ratio = float(elapsed) / float(duration)
    except ZeroDivisionError:
        return None
    if not math.isfinite(ratio):
        return None
    return min(1.0, max(0.0, ratio))


def decode_name(s: str | None) -> str:
    """Undo URL escaping (%20 etc.) in a listing entry."""
    if not s:
        return ""
    return unquote(s)
