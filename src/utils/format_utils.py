# src/utils/format_utils.py

"""Number formatting helpers for the stat card.

Prices arrive from the Steam store in cents; playtimes arrive from the Web
API in minutes. Everything shown on the card is formatted here:
    format_usd(123456)                  -> "$1,234.56"
    minutes_to_hours_compact(74_040)    -> "1.2K"
    minutes_to_hours_precise(754)       -> "12.6"
"""

from __future__ import annotations

from typing import Iterable

__all__ = [
    "average",
    "compact_number",
    "format_usd",
    "minutes_to_hours_compact",
    "minutes_to_hours_precise",
    "price_per_hour",
]

_COMPACT_SUFFIXES: list[tuple[float, str]] = [
    (1_000_000_000_000, "T"),
    (1_000_000_000, "B"),
    (1_000_000, "M"),
    (1_000, "K"),
]


def format_usd(cents: float) -> str:
    """Formats an amount in cents as US dollars with two decimals."""
    return f"${cents / 100:,.2f}"


def average(values: Iterable[float]) -> float:
    """Arithmetic mean, 0.0 for an empty input."""
    values = list(values)
    if not values:
        return 0.0
    return sum(values) / len(values)


def compact_number(value: float) -> str:
    """Formats a number in short notation ("1.2K", "12K", "345", "1.5").

    Values below 10 in the chosen unit keep one decimal (dropped when it is
    zero); larger values are rounded to an integer.

    Args:
        value: A non-negative number.

    Returns:
        The compact representation.
    """
    suffix = ""
    for scale, scale_suffix in _COMPACT_SUFFIXES:
        if abs(value) >= scale:
            value = value / scale
            suffix = scale_suffix
            break

    if abs(value) < 10:
        text = f"{value:.1f}"
        if text.endswith(".0"):
            text = text[:-2]
    else:
        text = str(int(round(value)))

    # Rounding 999.6 up must roll over to the next unit
    if suffix == "" and text == "1000":
        return "1K"
    return f"{text}{suffix}"


def minutes_to_hours_compact(minutes: float) -> str:
    """Converts minutes to hours in compact notation."""
    return compact_number(minutes / 60)


def minutes_to_hours_precise(minutes: float) -> str:
    """Converts minutes to hours with one decimal and thousands separators."""
    return f"{minutes / 60:,.1f}"


def price_per_hour(total_cents: float, total_minutes: float) -> str:
    """Current library value divided by hours played, "$0.00" if never played."""
    if total_minutes <= 0:
        return format_usd(0)
    return format_usd(total_cents / (total_minutes / 60))
