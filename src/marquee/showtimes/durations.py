"""Human-readable durations for "starts in" / "started ago" replies."""

import math
from datetime import timedelta


def _plural(count: int, unit: str) -> str:
    if count == 1:
        return f"1 {unit}"
    return f"{count} {unit}s"


def _whole_seconds(delta: timedelta) -> int:
    # Round away sub-second noise so replies don't flicker
    return math.floor(delta.total_seconds() + 0.5)


def _clauses(total_seconds: int) -> list[str]:
    hours, remainder = divmod(total_seconds, 3600)
    minutes, seconds = divmod(remainder, 60)

    parts: list[str] = []
    if hours > 0:
        parts.append(_plural(hours, "hour"))
    if minutes > 0:
        parts.append(_plural(minutes, "minute"))
    if seconds > 0 and hours == 0:
        parts.append(_plural(seconds, "second"))
    return parts


def format_until(delta: timedelta) -> str:
    """Format time remaining until an event.

    >>> format_until(timedelta(seconds=90))
    'In 1 minute, 30 seconds'
    >>> format_until(timedelta(seconds=3661))
    'In 1 hour, 1 minute'
    """
    total_seconds = _whole_seconds(delta)
    if total_seconds <= 0:
        return "Now"
    if total_seconds < 60:
        return "In " + _plural(total_seconds, "second")
    return "In " + ", ".join(_clauses(total_seconds))


def format_since(delta: timedelta) -> str:
    """Format time elapsed since an event started."""
    total_seconds = _whole_seconds(delta)
    if total_seconds <= 0:
        return "Just started"
    if total_seconds < 60:
        return _plural(total_seconds, "second")
    return ", ".join(_clauses(total_seconds))
