# tests/conftest.py
from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from io import BytesIO
from pathlib import Path
from typing import Callable, Generator
from unittest.mock import MagicMock

import pytest
from PIL import Image

from src.config import Config
from src.core.cache import CacheStore
from src.core.library import LibraryTotals
from src.core.profile import Profile
from src.services.asset_service import CardAssets, FontBook

# Fixed "now" used by the relative time and cache tests
NOW = 1_700_000_000.0


class FakeClock:
    """Manually advanced time source for CacheStore."""

    def __init__(self, start: float = NOW) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def cache(clock: FakeClock) -> CacheStore:
    """Empty cache store driven by the fake clock."""
    return CacheStore(clock=clock)


@pytest.fixture
def executor() -> Generator[ThreadPoolExecutor, None, None]:
    pool = ThreadPoolExecutor(max_workers=4)
    yield pool
    pool.shutdown(wait=True)


@pytest.fixture
def test_config(tmp_path: Path) -> Config:
    """Config that ignores .env, the environment and the settings file."""
    return Config(
        SETTINGS_FILE=tmp_path / "settings.json",
        RESOURCES_DIR=tmp_path / "resources",
        STEAM_API_KEY="test_key",
        load_environment=False,
    )


@pytest.fixture
def sample_profile() -> Profile:
    return Profile(
        steam_id="76561197960287930",
        display_name="Rabscuttle",
        visibility=3,
        avatar_url="https://avatars.example.com/full.jpg",
        last_logoff=int(NOW) - 3 * 24 * 3600,
        created_at=int(NOW) - 5 * 365 * 24 * 3600,
        country_code="US",
        online_state="offline",
        location="Bellevue, Washington, United States",
    )


@pytest.fixture
def sample_totals() -> LibraryTotals:
    return LibraryTotals(
        total_final_formatted="$1,234.56",
        total_initial_formatted="$2,345.67",
        average_price_formatted="$19.99",
        total_playtime_hours="1.2K",
        average_playtime_hours="12.3",
        total_games=120,
        played_count=90,
        unplayed_count=30,
        total_playtime_minutes=74_040,
        total_final_cents=123_456,
        total_initial_cents=234_567,
    )


@pytest.fixture
def font_book(tmp_path: Path) -> FontBook:
    """FontBook pointing at missing files, so Pillow's default font is used."""
    return FontBook(tmp_path / "missing.ttf", tmp_path / "missing-display.ttf")


@pytest.fixture
def card_assets(font_book: FontBook) -> CardAssets:
    """Assets with no images at all."""
    return CardAssets(fonts=font_book)


@pytest.fixture
def png_bytes() -> Callable[..., bytes]:
    """Factory returning encoded PNG bytes of a solid color."""

    def _make(size: tuple[int, int] = (8, 8), color: tuple[int, ...] = (255, 0, 0, 255)) -> bytes:
        buffer = BytesIO()
        Image.new("RGBA", size, color).save(buffer, format="PNG")
        return buffer.getvalue()

    return _make


@pytest.fixture
def json_response() -> Callable[..., MagicMock]:
    """Factory for a mocked ``requests`` response with a JSON body."""

    def _make(payload: object, status_code: int = 200) -> MagicMock:
        response = MagicMock()
        response.status_code = status_code
        response.json.return_value = payload
        response.raise_for_status = MagicMock()
        return response

    return _make
