"""Service for loading card assets (fonts, icons, watermark, avatars).

This module provides the AssetService class which decodes static images from
the resources directory and avatars from their Steam CDN URL, keeping the
decoded images in the shared cache. Fonts are loaded once per size/weight.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from io import BytesIO
from pathlib import Path

import requests
from PIL import Image, ImageFont, UnidentifiedImageError

from src.core.cache import CacheStore, make_key
from src.core.errors import AssetLoadError
from src.core.profile import Profile

logger = logging.getLogger("steamcard.assets")

__all__ = ["AssetService", "CardAssets", "FontBook"]

WATERMARK_IMAGE = "steeeam-canvas.png"
LOCATION_ICON = "loc-icon.png"
SEEN_ICON = "seen-icon.png"
JOIN_ICON = "join-icon.png"
STATS_ICON = "game-stats-icon.png"

PRIMARY_FONT = "GeistVF.ttf"
DISPLAY_FONT = "Elgraine-Black-Italic.ttf"


class FontBook:
    """Loads and memoizes fonts by (size, weight).

    The primary font is a variable font; weights are applied through its
    ``wght`` axis. When the font file is missing or has no variation support
    Pillow's built-in scalable font is used instead.

    Attributes:
        primary_path: Path to the primary (variable) font file.
        display_path: Path to the display font file.
    """

    def __init__(self, primary_path: Path, display_path: Path | None = None) -> None:
        self.primary_path = primary_path
        self.display_path = display_path
        self._fonts: dict[tuple[str, int, int], ImageFont.FreeTypeFont | ImageFont.ImageFont] = {}
        self._lock = threading.Lock()
        self._warned: set[Path] = set()

    def get(self, size: int, weight: int = 400) -> ImageFont.FreeTypeFont | ImageFont.ImageFont:
        """Returns the primary font at ``size`` px and ``weight``."""
        return self._load("primary", self.primary_path, size, weight)

    def display(self, size: int) -> ImageFont.FreeTypeFont | ImageFont.ImageFont:
        """Returns the display font at ``size`` px."""
        if self.display_path is None:
            return self.get(size, 700)
        return self._load("display", self.display_path, size, 400)

    def _load(self, family: str, path: Path, size: int, weight: int):
        key = (family, size, weight)
        with self._lock:
            font = self._fonts.get(key)
            if font is not None:
                return font

            try:
                font = ImageFont.truetype(str(path), size)
            except OSError:
                if path not in self._warned:
                    logger.warning("Font %s unavailable, using built-in font", path)
                    self._warned.add(path)
                font = ImageFont.load_default(size=size)
            else:
                if weight != 400:
                    self._apply_weight(font, weight)

            self._fonts[key] = font
            return font

    @staticmethod
    def _apply_weight(font: ImageFont.FreeTypeFont, weight: int) -> None:
        try:
            font.set_variation_by_axes([weight])
        except (OSError, ValueError) as exc:
            logger.debug("Font %s has no weight axis: %s", font.path, exc)


@dataclass(frozen=True)
class CardAssets:
    """Everything the renderer draws that does not come from Steam data.

    Attributes:
        fonts: Font provider.
        watermark: Watermark image, or None if it failed to load.
        location_icon: Icon for the location line.
        seen_icon: Icon for the "Last seen" line.
        join_icon: Icon for the "Joined" line.
        stats_icon: Icon for the statistics header.
        avatar: Decoded avatar, or None when absent or undecodable.
    """

    fonts: FontBook
    watermark: Image.Image | None = None
    location_icon: Image.Image | None = None
    seen_icon: Image.Image | None = None
    join_icon: Image.Image | None = None
    stats_icon: Image.Image | None = None
    avatar: Image.Image | None = None


class AssetService:
    """Service for loading and caching card assets.

    Handles decoding the static canvas images from the resources directory,
    downloading avatars, and providing the shared FontBook.

    Attributes:
        canvas_dir: Directory holding the icon and watermark PNGs.
        fonts: Shared FontBook.
    """

    def __init__(
        self,
        resources_dir: Path,
        cache: CacheStore,
        timeout: float | None = None,
    ) -> None:
        """Initializes the AssetService.

        Args:
            resources_dir: Root of the bundled resources.
            cache: Shared cache store for decoded images.
            timeout: Optional timeout for avatar downloads.
        """
        self.canvas_dir = resources_dir / "canvas"
        self.fonts = FontBook(resources_dir / "fonts" / PRIMARY_FONT, resources_dir / "fonts" / DISPLAY_FONT)
        self._cache = cache
        self._timeout = timeout

    def load_image(self, source: str, is_avatar: bool = False) -> Image.Image:
        """Loads an image from a path or URL through the image cache.

        Avatars are cached for the ``avatar`` TTL (24 hours), static images
        for the ``image`` TTL (1 hour).

        Args:
            source: Filesystem path or http(s) URL.
            is_avatar: Selects the avatar TTL.

        Returns:
            The decoded RGBA image.

        Raises:
            AssetLoadError: If the image cannot be read or decoded.
        """
        ttl = self._cache.ttl("avatar" if is_avatar else "image")
        return self._cache.with_dedup(make_key("img", source), ttl, lambda: self._decode(source))

    def try_load_image(self, source: str, is_avatar: bool = False) -> Image.Image | None:
        """Like load_image, but logs and returns None on failure."""
        try:
            return self.load_image(source, is_avatar=is_avatar)
        except AssetLoadError as exc:
            logger.warning("Skipping image: %s", exc)
            return None

    def _decode(self, source: str) -> Image.Image:
        try:
            if source.startswith(("http://", "https://")):
                response = requests.get(source, timeout=self._timeout)
                response.raise_for_status()
                image = Image.open(BytesIO(response.content))
            else:
                image = Image.open(source)
            image.load()
        except (requests.RequestException, OSError, UnidentifiedImageError) as exc:
            raise AssetLoadError(f"Failed to load image {source}: {exc}") from exc
        return image.convert("RGBA")

    def card_assets(self, profile: Profile | None = None) -> CardAssets:
        """Collects static images and the profile's avatar for one render.

        Args:
            profile: Profile whose avatar should be loaded, if any.

        Returns:
            CardAssets with None for every image that failed to load.
        """
        avatar = None
        if profile is not None and profile.avatar_url:
            avatar = self.try_load_image(profile.avatar_url, is_avatar=True)

        return CardAssets(
            fonts=self.fonts,
            watermark=self.try_load_image(str(self.canvas_dir / WATERMARK_IMAGE)),
            location_icon=self.try_load_image(str(self.canvas_dir / LOCATION_ICON)),
            seen_icon=self.try_load_image(str(self.canvas_dir / SEEN_ICON)),
            join_icon=self.try_load_image(str(self.canvas_dir / JOIN_ICON)),
            stats_icon=self.try_load_image(str(self.canvas_dir / STATS_ICON)),
            avatar=avatar,
        )
