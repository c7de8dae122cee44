# src/render/card_renderer.py

"""Draws the 705x385 profile card as a PNG.

The renderer is a pure function of the profile, the library totals, the
color configuration and the pre-loaded assets. It performs no network I/O;
the avatar and icons are loaded beforehand by the AssetService.

Text positions are left/baseline coordinates.
"""

from __future__ import annotations

import logging
import math
import time
from io import BytesIO
from typing import TYPE_CHECKING

from PIL import Image, ImageChops, ImageDraw

from src.core.library import LibraryTotals, RestrictedLibrary, is_restricted
from src.core.profile import UNKNOWN_LOCATION, Profile
from src.render.geometry import (
    RoundedRect,
    circle_clip,
    fit_within,
    progress_bar,
    truncate_chars,
    truncate_to_width,
)
from src.render.theme import RGBA, RenderConfig, clamp_border_width
from src.utils.date_utils import relative_time_from_now, relative_time_imprecise
from src.utils.format_utils import price_per_hour

if TYPE_CHECKING:
    from src.services.asset_service import CardAssets

logger = logging.getLogger("steamcard.renderer")

__all__ = ["CANVAS_HEIGHT", "CANVAS_WIDTH", "DEFAULT_WATERMARK", "CardRenderer", "render_card", "render_card_image"]

CANVAS_WIDTH = 705
CANVAS_HEIGHT = 385

DEFAULT_WATERMARK = "steeeam.vercel.app"
WATERMARK_COLOR: RGBA = (0x73, 0x73, 0x73, 255)
WATERMARK_OPACITY = 0.4

USERNAME_MAX_WIDTH = 180
LOCATION_MAX_CHARS = 22
AVATAR_BOX = (130, 130)
AVATAR_POSITION = (35, 20)

PROGRESS_BAR_X = 215
PROGRESS_BAR_Y = 330
PROGRESS_BAR_WIDTH = 220
PROGRESS_BAR_HEIGHT = 12
PROGRESS_BAR_RADIUS = 6

# Previous stroke width used when border_width cannot be parsed
DEFAULT_STROKE_WIDTH = 1


class CardRenderer:
    """Draws one card onto a fresh canvas.

    Attributes:
        config: Resolved RenderConfig (theme already applied).
        assets: Fonts and pre-loaded images.
        image: The RGB canvas being drawn.
    """

    def __init__(self, config: RenderConfig, assets: CardAssets, watermark_text: str = DEFAULT_WATERMARK):
        self.config = config
        self.assets = assets
        self.watermark_text = watermark_text
        self.image = Image.new("RGB", (CANVAS_WIDTH, CANVAS_HEIGHT), (0, 0, 0))
        # RGBA draw mode on an RGB image blends translucent colors
        self.draw = ImageDraw.Draw(self.image, "RGBA")

    # ------------------------------------------------------------------
    # Primitives
    # ------------------------------------------------------------------

    def _color(self, name: str) -> RGBA:
        return self.config.color(name)

    def _text(self, position: tuple[float, float], text: str, color: RGBA, size: int, weight: int = 400) -> None:
        if not text:
            return
        font = self.assets.fonts.get(size, weight)
        self.draw.text(position, text, fill=color, font=font, anchor="ls")

    def _measure(self, text: str, size: int, weight: int = 400) -> float:
        return self.draw.textlength(text, font=self.assets.fonts.get(size, weight))

    def _paste(self, image: Image.Image | None, position: tuple[int, int], opacity: float = 1.0) -> None:
        if image is None:
            return
        mask = image.getchannel("A")
        if opacity < 1.0:
            mask = mask.point(lambda alpha: int(alpha * opacity))
        self.image.paste(image, position, mask)

    def _rounded(self, rect: RoundedRect, color: RGBA) -> None:
        x0, y0, x1, y1 = rect.box
        if x1 <= x0 or y1 <= y0:
            return
        # Pillow boxes are inclusive
        self.draw.rounded_rectangle((x0, y0, x1 - 1, y1 - 1), radius=rect.radius, fill=color)

    # ------------------------------------------------------------------
    # Sections
    # ------------------------------------------------------------------

    def draw_background(self) -> None:
        self.draw.rectangle((0, 0, CANVAS_WIDTH, CANVAS_HEIGHT), fill=self._color("bg_color"))

    def draw_watermark(self) -> None:
        r, g, b, a = WATERMARK_COLOR
        color = (r, g, b, int(a * WATERMARK_OPACITY))
        if self.watermark_text:
            font = self.assets.fonts.display(16)
            position = (CANVAS_WIDTH - 155, CANVAS_HEIGHT - 17)
            self.draw.text(position, self.watermark_text, fill=color, font=font, anchor="ls")
        self._paste(self.assets.watermark, (CANVAS_WIDTH - 180, CANVAS_HEIGHT - 32), WATERMARK_OPACITY)

    def draw_identity(self, profile: Profile, now: float) -> None:
        """Draws the left column: name, SteamID, location, last seen and join date."""
        name = truncate_to_width(
            profile.display_name,
            USERNAME_MAX_WIDTH,
            lambda text: self._measure(text, 20, 700),
        )
        self._text((20, 180), name, self._color("username_color"), 20, 700)
        self._text((20, 195), profile.steam_id, self._color("id_color"), 10)

        text_color = self._color("text_color")

        location = truncate_chars(profile.location or UNKNOWN_LOCATION, LOCATION_MAX_CHARS)
        self._paste(self.assets.location_icon, (20, 220))
        self._text((43, 232), location, text_color, 12)

        if profile.last_logoff:
            last_seen = f"Last seen {relative_time_from_now(profile.last_logoff, now)}"
        else:
            last_seen = "Last seen never"
        self._paste(self.assets.seen_icon, (20, 245))
        self._text((43, 257), last_seen, text_color, 12)

        if profile.created_at:
            joined = f"Joined {relative_time_imprecise(profile.created_at, now)} ago"
        else:
            joined = "Unknown"
        self._paste(self.assets.join_icon, (20, 270))
        self._text((43, 283), joined, text_color, 12)

    def draw_dividers(self) -> None:
        div = self._color("div_color")
        self.draw.line(((200, 15), (200, CANVAS_HEIGHT - 15)), fill=div, width=1)

        self._paste(self.assets.stats_icon, (215, 20))
        self._text((245, 37), "Account Statistics", self._color("title_color"), 16, 600)

        self.draw.line(((215, 50), (CANVAS_WIDTH - 15, 50)), fill=div, width=1)

    def _stat(self, position: tuple[int, int], label: str, value: str, value_color: RGBA) -> None:
        x, y = position
        self._text((x, y), label, self._color("sub_title_color"), 16)
        self._text((x, y + 30), value, value_color, 26, 600)

    def draw_stats(self, library: LibraryTotals) -> None:
        """Draws the seven stat blocks, the played counter and the progress bar."""
        text_color = self._color("text_color")

        self._stat((215, 80), "Current Price", library.total_final_formatted or "$0", self._color("cp_color"))
        self._stat((370, 80), "Initial Price", library.total_initial_formatted or "$0", self._color("ip_color"))
        self._stat((215, 160), "Total Games", str(library.total_games or 0), text_color)
        self._stat((370, 160), "Avg. Price", library.average_price_formatted or "$0", text_color)
        self._stat(
            (510, 160),
            "Price Per Hour",
            price_per_hour(library.total_final_cents, library.total_playtime_minutes),
            text_color,
        )
        self._stat((215, 240), "Avg. Playtime", f"{library.average_playtime_hours or '0'}h", text_color)
        self._stat((370, 240), "Total Playtime", f"{library.total_playtime_hours or '0'}h", text_color)

        percent = library.progress_percent
        if math.isnan(percent):
            return

        self.draw_progress_counter(library.played_count, library.total_games, percent)

        bar = progress_bar(
            PROGRESS_BAR_X,
            PROGRESS_BAR_Y,
            PROGRESS_BAR_WIDTH,
            PROGRESS_BAR_HEIGHT,
            library.played_count,
            library.total_games,
            PROGRESS_BAR_RADIUS,
        )
        if bar is None:
            return
        self._rounded(bar.track, self._color("progbar_bg"))
        if bar.fill is not None:
            self._rounded(bar.fill, self._color("progbar_color"))

    def draw_progress_counter(self, played: int, total: int, percent: float) -> None:
        """Draws ``<played> / <total> games played`` and the percentage at y=324."""
        played_text = str(played)
        total_text = str(total)
        accent = self._color("progbar_color")
        text_color = self._color("text_color")

        played_width = self._measure(played_text, 14, 700)
        total_width = self._measure(total_text, 14, 700)

        self._text((215, 324), played_text, accent, 14, 700)
        self._text((played_width + 215 + 5, 324), "/", text_color, 14)
        self._text((played_width + 215 + 15, 324), total_text, accent, 14, 700)
        self._text((played_width + total_width + 215 + 20, 324), "games played", text_color, 14)
        self._text((405, 324), f"{math.floor(percent + 0.5)}%", text_color, 14, 700)

    def draw_restricted(self) -> None:
        self._text((390, 200), "Private Games List", self._color("sub_title_color"), 16)

    def draw_avatar(self) -> None:
        """Draws the avatar scaled into 130x130 and clipped to a circle."""
        avatar = self.assets.avatar
        if avatar is None:
            return

        width, height = fit_within(avatar.width, avatar.height, *AVATAR_BOX)
        size = (max(1, round(width)), max(1, round(height)))
        scaled = avatar.resize(size, Image.Resampling.LANCZOS)

        clip = circle_clip(0, 0, size[0], size[1])
        mask = Image.new("L", size, 0)
        ImageDraw.Draw(mask).rounded_rectangle(
            (clip.x, clip.y, clip.x + clip.width - 1, clip.y + clip.height - 1),
            radius=clip.radius,
            fill=255,
        )
        mask = ImageChops.multiply(mask, scaled.getchannel("A"))
        self.image.paste(scaled, AVATAR_POSITION, mask)

    def draw_border(self) -> None:
        if self.config.hide_border:
            return

        width = clamp_border_width(self.config.border_width)
        if width is None:
            width = DEFAULT_STROKE_WIDTH
        if width <= 0:
            return

        # A stroke centered on the canvas edge only shows its inner half
        visible = max(1, (width + 1) // 2)
        self.draw.rectangle(
            (0, 0, CANVAS_WIDTH - 1, CANVAS_HEIGHT - 1),
            outline=self._color("border_color"),
            width=visible,
        )

    # ------------------------------------------------------------------
    # Entry point
    # ------------------------------------------------------------------

    def render(self, profile: Profile, library: LibraryTotals | RestrictedLibrary, now: float) -> Image.Image:
        self.draw_background()
        self.draw_watermark()
        self.draw_identity(profile, now)
        self.draw_dividers()

        if is_restricted(library):
            self.draw_restricted()
        else:
            self.draw_stats(library)

        self.draw_avatar()
        self.draw_border()
        return self.image


def render_card_image(
    profile: Profile,
    library: LibraryTotals | RestrictedLibrary,
    config: RenderConfig,
    assets: CardAssets,
    watermark_text: str = DEFAULT_WATERMARK,
    now: float | None = None,
) -> Image.Image:
    """Renders the card and returns the Pillow image.

    Args:
        profile: Merged profile data.
        library: Library totals, or RESTRICTED for a private games list.
        config: Color configuration; its theme is applied here.
        assets: Fonts and pre-loaded images (missing images are skipped).
        watermark_text: Text drawn in the lower right corner.
        now: Reference time for the relative dates.

    Returns:
        The 705x385 RGB image.
    """
    if now is None:
        now = time.time()
    renderer = CardRenderer(config.resolved(), assets, watermark_text)
    return renderer.render(profile, library, now)


def render_card(
    profile: Profile,
    library: LibraryTotals | RestrictedLibrary,
    config: RenderConfig,
    assets: CardAssets,
    watermark_text: str = DEFAULT_WATERMARK,
    now: float | None = None,
) -> bytes:
    """Renders the card as PNG bytes. See ``render_card_image``."""
    image = render_card_image(profile, library, config, assets, watermark_text, now)
    buffer = BytesIO()
    image.save(buffer, format="PNG")
    logger.debug("Rendered card for %s (%d bytes)", profile.steam_id, buffer.tell())
    return buffer.getvalue()
