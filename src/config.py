"""
Configuration - environment, .env and optional JSON settings file.
Holds the Steam API key, asset locations, cache TTLs and server options.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

logger = logging.getLogger("steamcard.config")


__all__ = ["Config", "DEFAULT_CACHE_TTLS"]

# Seconds
DEFAULT_CACHE_TTLS: dict[str, int] = {
    "profile": 60 * 60,
    "avatar": 24 * 60 * 60,
    "steam_id": 7 * 24 * 60 * 60,
    "library": 6 * 60 * 60,
    "image": 60 * 60,
}


def _default_resources_dir() -> Path:
    from src.utils.paths import get_resources_dir

    try:
        return get_resources_dir()
    except FileNotFoundError:
        return Path(__file__).parent.parent / "resources"


@dataclass
class Config:
    """
    Central configuration handling for the card service.
    Manages the API key, asset paths, cache TTLs and HTTP server options.
    """

    APP_DIR: Path = Path(__file__).parent.parent
    DATA_DIR: Path = APP_DIR / "data"
    SETTINGS_FILE: Path = DATA_DIR / "settings.json"
    RESOURCES_DIR: Path | None = None

    # API KEYS
    STEAM_API_KEY: str | None = None

    # HTTP server
    HOST: str = "127.0.0.1"
    PORT: int = 3000
    LOG_LEVEL: str = "INFO"
    LOG_FILE: Path | None = None

    # Upstream behaviour
    PRICE_CHUNK_SIZE: int = 200
    PRICE_TIMEOUT: float = 10.0
    UPSTREAM_TIMEOUT: float | None = None
    MAX_WORKERS: int = 16

    # Card
    WATERMARK_TEXT: str = "steeeam.vercel.app"

    CACHE_TTLS: dict[str, int] = field(default_factory=lambda: dict(DEFAULT_CACHE_TTLS))

    load_environment: bool = True

    def __post_init__(self):
        """Resolve paths and load environment and settings after instantiation."""
        if self.RESOURCES_DIR is None:
            self.RESOURCES_DIR = _default_resources_dir()

        if not self.load_environment:
            return

        load_dotenv()
        self._load_env()
        self._load_settings()

    def _load_env(self) -> None:
        """Apply environment variable overrides."""
        env_key = os.getenv("STEAM_API_KEY")
        if env_key:
            self.STEAM_API_KEY = env_key

        assets_dir = os.getenv("STEAMCARD_ASSETS_DIR")
        if assets_dir:
            self.RESOURCES_DIR = Path(assets_dir)

        self.HOST = os.getenv("STEAMCARD_HOST", self.HOST)
        self.LOG_LEVEL = os.getenv("STEAMCARD_LOG_LEVEL", self.LOG_LEVEL)
        self.WATERMARK_TEXT = os.getenv("STEAMCARD_WATERMARK", self.WATERMARK_TEXT)

        for attr, env_name in (("PORT", "STEAMCARD_PORT"), ("MAX_WORKERS", "STEAMCARD_MAX_WORKERS")):
            raw = os.getenv(env_name)
            if not raw:
                continue
            try:
                setattr(self, attr, int(raw))
            except ValueError:
                logger.warning("Ignoring invalid %s=%r", env_name, raw)

    def _load_settings(self) -> None:
        """Load optional overrides from the JSON settings file."""
        if not self.SETTINGS_FILE.exists():
            return

        try:
            with open(self.SETTINGS_FILE, "r", encoding="utf-8") as f:
                data = json.load(f)

                self.STEAM_API_KEY = data.get("steam_api_key", self.STEAM_API_KEY)
                self.WATERMARK_TEXT = data.get("watermark_text", self.WATERMARK_TEXT)
                self.PRICE_CHUNK_SIZE = data.get("price_chunk_size", self.PRICE_CHUNK_SIZE)
                self.PRICE_TIMEOUT = data.get("price_timeout", self.PRICE_TIMEOUT)
                self.UPSTREAM_TIMEOUT = data.get("upstream_timeout", self.UPSTREAM_TIMEOUT)

                for name, ttl in data.get("cache_ttls", {}).items():
                    if name in self.CACHE_TTLS:
                        self.CACHE_TTLS[name] = int(ttl)

        except (OSError, json.JSONDecodeError, ValueError) as e:
            logger.error("Failed to load settings from %s: %s", self.SETTINGS_FILE, e)
