"""Pure layout helpers for the card renderer.

Nothing in here touches Pillow; shapes are returned as plain values and
drawn by the renderer.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Callable

__all__ = [
    "ELLIPSIS",
    "ProgressBar",
    "RoundedRect",
    "circle_clip",
    "fit_within",
    "progress_bar",
    "progress_fill_width",
    "rounded_rect",
    "truncate_chars",
    "truncate_to_width",
]

ELLIPSIS = "…"


@dataclass(frozen=True)
class RoundedRect:
    """Axis-aligned rectangle with uniformly rounded corners."""

    x: float
    y: float
    width: float
    height: float
    radius: float = 0

    @property
    def box(self) -> tuple[float, float, float, float]:
        """Returns the (x0, y0, x1, y1) bounding box."""
        return (self.x, self.y, self.x + self.width, self.y + self.height)


@dataclass(frozen=True)
class ProgressBar:
    """Track and optional fill of a horizontal progress bar."""

    track: RoundedRect
    fill: RoundedRect | None


def rounded_rect(x: float, y: float, width: float, height: float, radius: float = 0) -> RoundedRect:
    """Builds a RoundedRect with the radius clamped to half the shorter side."""
    limit = max(0.0, min(width, height) / 2)
    return RoundedRect(x, y, width, height, min(max(radius, 0), limit))


def progress_fill_width(bar_width: int, played: int, total: int) -> int | None:
    """Width of the filled part of the bar.

    Args:
        bar_width: Full width of the track.
        played: Games with playtime.
        total: Games owned.

    Returns:
        ``floor(bar_width * played / total)``, or None when ``total`` is 0.
    """
    if total <= 0:
        return None
    return math.floor(bar_width * played / total)


def progress_bar(
    x: float,
    y: float,
    width: int,
    height: int,
    played: int,
    total: int,
    radius: float = 0,
) -> ProgressBar | None:
    """Computes the track and fill rectangles of a progress bar.

    Returns None when there are no games, in which case nothing is drawn.
    A zero-width fill is dropped.
    """
    fill_width = progress_fill_width(width, played, total)
    if fill_width is None:
        return None

    track = rounded_rect(x, y, width, height, radius)
    fill = rounded_rect(x, y, fill_width, height, radius) if fill_width > 0 else None
    return ProgressBar(track=track, fill=fill)


def fit_within(width: float, height: float, max_width: float, max_height: float) -> tuple[float, float]:
    """Scales (width, height) to fit inside a box, preserving aspect ratio.

    Images smaller than the box are scaled up.
    """
    if width <= 0 or height <= 0:
        return (0.0, 0.0)
    ratio = min(max_width / width, max_height / height)
    return (width * ratio, height * ratio)


def circle_clip(x: float, y: float, width: float, height: float) -> RoundedRect:
    """Returns the clip shape for an avatar: a rectangle rounded by half its width."""
    return rounded_rect(x, y, width, height, width / 2)


def truncate_to_width(text: str, max_width: float, measure: Callable[[str], float]) -> str:
    """Shortens text to fit ``max_width`` by appending an ellipsis.

    Text that already fits is returned unchanged. Otherwise the longest
    prefix whose width together with the ellipsis fits is used; when even
    the first character does not fit, only the ellipsis is returned.

    Args:
        text: Text to shorten.
        max_width: Available width in pixels.
        measure: Returns the rendered width of a string.

    Returns:
        The unchanged text, or a truncated version ending in an ellipsis.
    """
    if measure(text) <= max_width:
        return text

    for length in range(len(text) - 1, 0, -1):
        candidate = text[:length] + ELLIPSIS
        if measure(candidate) <= max_width:
            return candidate
    return ELLIPSIS


def truncate_chars(text: str, limit: int) -> str:
    """Keeps at most ``limit`` characters, adding an ellipsis when cut."""
    if len(text) <= limit:
        return text
    return text[:limit] + ELLIPSIS
