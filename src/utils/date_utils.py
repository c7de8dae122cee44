# src/utils/date_utils.py

"""Utility functions for turning Unix timestamps into relative time phrases.

Two flavours are used on the card:
    relative_time_from_now(ts)   -> "3 days ago", "in an hour"
    relative_time_imprecise(ts)  -> "5 years", "2 months", "12 days"

The first follows the thresholds of the popular moment.js ``fromNow``
helper so phrases match what users see elsewhere on the web. The second is
used for the "Joined ... ago" line and only names the largest whole unit.
"""

from __future__ import annotations

import time

__all__ = ["relative_time_from_now", "relative_time_imprecise"]

_MINUTE = 60
_HOUR = 60 * _MINUTE
_DAY = 24 * _HOUR
_MONTH = 30 * _DAY
_YEAR = 365 * _DAY

# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def relative_time_from_now(timestamp: float, now: float | None = None) -> str:
    """Describes a timestamp relative to now ("a few seconds ago", "2 years ago").

    Thresholds (in order): <45s seconds, <90s a minute, <45m minutes,
    <90m an hour, <22h hours, <36h a day, <26d days, <45d a month,
    <320d months, <548d a year, years.

    Args:
        timestamp: Unix timestamp in seconds.
        now: Reference time; defaults to the current time.

    Returns:
        A phrase suffixed with "ago" for the past or prefixed with "in" for
        the future.
    """
    if now is None:
        now = time.time()

    delta = now - timestamp
    phrase = _humanize_seconds(abs(delta))
    if delta < 0:
        return f"in {phrase}"
    return f"{phrase} ago"


def relative_time_imprecise(timestamp: float, now: float | None = None) -> str:
    """Names the largest whole unit elapsed since ``timestamp``.

    Args:
        timestamp: Unix timestamp in seconds.
        now: Reference time; defaults to the current time.

    Returns:
        "N years", "N months" or "N days" (singular for 1), or
        "less than a day" when under 24 hours have passed.
    """
    if now is None:
        now = time.time()

    elapsed = max(0.0, now - timestamp)

    for unit_seconds, unit_name in ((_YEAR, "year"), (_MONTH, "month"), (_DAY, "day")):
        count = int(elapsed // unit_seconds)
        if count >= 1:
            return _plural(count, unit_name)

    return "less than a day"


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _plural(count: int, unit: str) -> str:
    return f"{count} {unit}" if count == 1 else f"{count} {unit}s"


def _humanize_seconds(seconds: float) -> str:
    minutes = seconds / _MINUTE
    hours = seconds / _HOUR
    days = seconds / _DAY

    if seconds < 45:
        return "a few seconds"
    if seconds < 90:
        return "a minute"
    if minutes < 45:
        return f"{round(minutes)} minutes"
    if minutes < 90:
        return "an hour"
    if hours < 22:
        return f"{round(hours)} hours"
    if hours < 36:
        return "a day"
    if days < 26:
        return f"{round(days)} days"
    if days < 45:
        return "a month"
    if days < 320:
        return f"{max(2, round(days / 30.4))} months"
    if days < 548:
        return "a year"
    return f"{max(2, round(days / 365))} years"
