"""Tests for configuration loading."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from src.config import DEFAULT_CACHE_TTLS, Config


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    for name in (
        "STEAM_API_KEY",
        "STEAMCARD_ASSETS_DIR",
        "STEAMCARD_HOST",
        "STEAMCARD_PORT",
        "STEAMCARD_LOG_LEVEL",
        "STEAMCARD_WATERMARK",
        "STEAMCARD_MAX_WORKERS",
    ):
        monkeypatch.delenv(name, raising=False)
    # Keep a developer's .env out of the tests
    monkeypatch.setattr("src.config.load_dotenv", lambda *args, **kwargs: False)
    return monkeypatch


class TestDefaults:
    def test_defaults_without_environment(self, tmp_path: Path) -> None:
        config = Config(SETTINGS_FILE=tmp_path / "settings.json", load_environment=False)

        assert config.HOST == "127.0.0.1"
        assert config.PORT == 3000
        assert config.PRICE_CHUNK_SIZE == 200
        assert config.PRICE_TIMEOUT == 10.0
        assert config.UPSTREAM_TIMEOUT is None
        assert config.WATERMARK_TEXT == "steeeam.vercel.app"
        assert config.CACHE_TTLS == DEFAULT_CACHE_TTLS
        assert config.RESOURCES_DIR is not None

    def test_cache_ttls_are_not_shared(self, tmp_path: Path) -> None:
        first = Config(load_environment=False)
        first.CACHE_TTLS["profile"] = 1
        assert Config(load_environment=False).CACHE_TTLS["profile"] == 3600


class TestEnvironment:
    def test_environment_overrides(self, clean_env: pytest.MonkeyPatch, tmp_path: Path) -> None:
        clean_env.setenv("STEAM_API_KEY", "env_key")
        clean_env.setenv("STEAMCARD_ASSETS_DIR", str(tmp_path))
        clean_env.setenv("STEAMCARD_HOST", "0.0.0.0")
        clean_env.setenv("STEAMCARD_PORT", "8080")
        clean_env.setenv("STEAMCARD_LOG_LEVEL", "DEBUG")
        clean_env.setenv("STEAMCARD_WATERMARK", "cards.example.com")
        clean_env.setenv("STEAMCARD_MAX_WORKERS", "4")

        config = Config(SETTINGS_FILE=tmp_path / "missing.json")

        assert config.STEAM_API_KEY == "env_key"
        assert config.RESOURCES_DIR == tmp_path
        assert config.HOST == "0.0.0.0"
        assert config.PORT == 8080
        assert config.LOG_LEVEL == "DEBUG"
        assert config.WATERMARK_TEXT == "cards.example.com"
        assert config.MAX_WORKERS == 4

    def test_invalid_port_is_ignored(self, clean_env: pytest.MonkeyPatch, tmp_path: Path) -> None:
        clean_env.setenv("STEAMCARD_PORT", "eighty")

        config = Config(SETTINGS_FILE=tmp_path / "missing.json")

        assert config.PORT == 3000


class TestSettingsFile:
    def test_settings_file_overrides(self, clean_env: pytest.MonkeyPatch, tmp_path: Path) -> None:
        settings = tmp_path / "settings.json"
        settings.write_text(
            json.dumps(
                {
                    "steam_api_key": "file_key",
                    "price_chunk_size": 100,
                    "upstream_timeout": 15,
                    "cache_ttls": {"profile": 60, "unknown": 5},
                }
            ),
            encoding="utf-8",
        )

        config = Config(SETTINGS_FILE=settings)

        assert config.STEAM_API_KEY == "file_key"
        assert config.PRICE_CHUNK_SIZE == 100
        assert config.UPSTREAM_TIMEOUT == 15
        assert config.CACHE_TTLS["profile"] == 60
        assert "unknown" not in config.CACHE_TTLS

    def test_broken_settings_file_is_ignored(self, clean_env: pytest.MonkeyPatch, tmp_path: Path) -> None:
        settings = tmp_path / "settings.json"
        settings.write_text("{not json", encoding="utf-8")

        config = Config(SETTINGS_FILE=settings)

        assert config.PRICE_CHUNK_SIZE == 200
