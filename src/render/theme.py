"""Card color configuration and theme presets.

Two-layer color system:
  Layer 1 (Defaults): the built-in color for every slot on the card.
  Layer 2 (Overrides): query parameters, then the named theme.

A named theme is applied last and replaces its colors unconditionally, so a
``theme`` parameter always wins over individual color parameters.

Colors are hex strings without the leading ``#`` in any of the CSS forms
``rgb``, ``rgba``, ``rrggbb`` or ``rrggbbaa``.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, fields, replace
from typing import Mapping

from PIL import ImageColor

logger = logging.getLogger("steamcard.theme")

__all__ = [
    "COLOR_FIELDS",
    "MAX_BORDER_WIDTH",
    "RenderConfig",
    "THEMES",
    "clamp_border_width",
    "parse_color",
]

MAX_BORDER_WIDTH = 10

RGBA = tuple[int, int, int, int]

THEMES: dict[str, dict[str, str]] = {
    "dark": {
        "bg_color": "0b0b0b",
        "title_color": "fff",
        "sub_title_color": "adadad",
        "text_color": "fff",
        "username_color": "fff",
        "id_color": "adadad",
        "div_color": "ffffff30",
        "border_color": "ffffff30",
        "progbar_bg": "ffffff30",
        "progbar_color": "006fee",
    },
    "light": {
        "bg_color": "fff",
        "title_color": "000",
        "sub_title_color": "000",
        "text_color": "000",
        "username_color": "000",
        "id_color": "adadad",
        "div_color": "00000030",
        "border_color": "00000030",
        "progbar_bg": "00000050",
        "progbar_color": "60a5fa",
    },
}

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


@dataclass(frozen=True)
class RenderConfig:
    """Colors and border options for one card.

    Attributes mirror the query parameters of the HTTP endpoint.
    """

    bg_color: str = "0b0b0b"
    title_color: str = "fff"
    sub_title_color: str = "adadad"
    text_color: str = "fff"
    username_color: str = "fff"
    id_color: str = "adadad"
    cp_color: str = "f87171"
    ip_color: str = "4ade80"
    div_color: str = "ffffff30"
    border_color: str = "ffffff30"
    border_width: str | int = 1
    progbar_bg: str = "313131"
    progbar_color: str = "006fee"
    hide_border: bool = False
    theme: str | None = None

    @classmethod
    def from_query(cls, args: Mapping[str, str]) -> RenderConfig:
        """Builds a config from request query parameters.

        Missing or empty parameters keep their defaults. The border is only
        hidden for the exact value ``hide_border=true``.

        Args:
            args: Query parameter mapping (e.g. ``request.args``).

        Returns:
            The unresolved RenderConfig; call ``resolved()`` before drawing.
        """
        values: dict[str, object] = {}
        for name in (*COLOR_FIELDS, "border_width", "theme"):
            raw = args.get(name)
            if raw:
                values[name] = raw
        values["hide_border"] = args.get("hide_border") == "true"
        return cls(**values)

    def resolved(self) -> RenderConfig:
        """Returns a copy with the named theme applied on top of all overrides."""
        preset = THEMES.get(self.theme or "")
        if preset is None:
            return self
        return replace(self, **preset)

    def color(self, name: str) -> RGBA:
        """Parses the color slot ``name``, falling back to its default."""
        default = _DEFAULTS[name]
        return parse_color(getattr(self, name), parse_color(default))


COLOR_FIELDS: tuple[str, ...] = tuple(
    f.name for f in fields(RenderConfig) if f.name.endswith("_color") or f.name == "progbar_bg"
)

_DEFAULTS: dict[str, str] = {f.name: f.default for f in fields(RenderConfig) if f.name in COLOR_FIELDS}


def parse_color(value: str, fallback: RGBA | None = None) -> RGBA:
    """Parses a hex color without ``#`` into an RGBA tuple.

    Args:
        value: Hex color such as ``"fff"`` or ``"ffffff30"``.
        fallback: Returned for unparsable input.

    Returns:
        The (r, g, b, a) tuple.

    Raises:
        ValueError: If the value is invalid and no fallback was given.
    """
    try:
        rgb = ImageColor.getrgb(f"#{str(value).lstrip('#')}")
    except ValueError:
        if fallback is None:
            raise
        logger.debug("Invalid color %r, using fallback", value)
        return fallback

    if len(rgb) == 3:
        return (rgb[0], rgb[1], rgb[2], 255)
    return rgb


def clamp_border_width(value: str | int | float | None) -> int | None:
    """Clamps the border stroke width to at most 10.

    Values of 10 or more become 10, including unit-suffixed strings such
    as ``"12px"``. Smaller values are truncated to their
    integer prefix and kept as-is, including negatives. Unparsable input
    yields None (the caller keeps its previous stroke width).

    Args:
        value: Raw ``border_width`` parameter.

    Returns:
        The stroke width, or None.
    """
    if value is None:
        return None

    try:
        if float(value) >= MAX_BORDER_WIDTH:
            return MAX_BORDER_WIDTH
    except (TypeError, ValueError):
        pass

    if isinstance(value, (int, float)):
        return int(value)

    match = _LEADING_INT.match(str(value))
    if match is None:
        return None
    return min(int(match.group(1)), MAX_BORDER_WIDTH)
