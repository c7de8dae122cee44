"""Tests for ProfileResolver."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest
import requests

from src.core.cache import CacheStore
from src.core.errors import ProfileUnavailableError, SteamIdResolutionError
from src.integrations.steam_community import CommunityProfileInfo
from src.services.profile_service import ProfileResolver

STEAM_ID = "76561197960287930"

SUMMARY = {
    "steamid": STEAM_ID,
    "personaname": "Rabscuttle",
    "communityvisibilitystate": 3,
    "avatarfull": "https://avatars.example.com/full.jpg",
    "avatarmedium": "https://avatars.example.com/medium.jpg",
    "lastlogoff": 1_699_000_000,
    "timecreated": 1_063_407_589,
    "loccountrycode": "US",
    "locstatecode": "WA",
}


@pytest.fixture
def api() -> MagicMock:
    mock = MagicMock()
    mock.resolve_vanity_url.return_value = STEAM_ID
    mock.get_player_summary.return_value = dict(SUMMARY)
    return mock


@pytest.fixture
def community() -> MagicMock:
    mock = MagicMock()
    mock.fetch_profile_info.return_value = CommunityProfileInfo(online_state="online", location="Bellevue, WA")
    return mock


@pytest.fixture
def resolver(api, community, cache, executor) -> ProfileResolver:
    return ProfileResolver(api, community, cache, executor)


class TestResolveSteamId:
    """Tests for identifier resolution."""

    def test_steam_id64_is_used_as_is(self, resolver: ProfileResolver, api: MagicMock) -> None:
        assert resolver.resolve_steam_id(STEAM_ID) == STEAM_ID
        api.resolve_vanity_url.assert_not_called()

    def test_vanity_is_resolved_once(self, resolver: ProfileResolver, api: MagicMock, cache: CacheStore) -> None:
        assert resolver.resolve_steam_id("gabe") == STEAM_ID
        assert resolver.resolve_steam_id("gabe") == STEAM_ID

        api.resolve_vanity_url.assert_called_once_with("gabe")
        assert cache.get("steamid_gabe").value == STEAM_ID

    def test_resolution_failure_is_not_cached(self, resolver: ProfileResolver, api, cache: CacheStore) -> None:
        api.resolve_vanity_url.side_effect = SteamIdResolutionError("no match")

        with pytest.raises(SteamIdResolutionError):
            resolver.resolve_steam_id("nobody")
        assert "steamid_nobody" not in cache


class TestGetProfile:
    """Tests for building merged profiles."""

    def test_merges_summary_and_community(self, resolver: ProfileResolver) -> None:
        profile = resolver.get_profile("gabe")

        assert profile.steam_id == STEAM_ID
        assert profile.display_name == "Rabscuttle"
        assert profile.visibility == 3
        assert profile.avatar_url == "https://avatars.example.com/full.jpg"
        assert profile.last_logoff == 1_699_000_000
        assert profile.created_at == 1_063_407_589
        assert profile.country_code == "US"
        assert profile.state_code == "WA"
        assert profile.online_state == "online"
        assert profile.location == "Bellevue, WA"

    def test_profile_is_cached(self, resolver: ProfileResolver, api: MagicMock, community: MagicMock) -> None:
        first = resolver.get_profile("gabe")
        second = resolver.get_profile("gabe")

        assert first is second
        api.get_player_summary.assert_called_once_with(STEAM_ID)
        community.fetch_profile_info.assert_called_once_with(STEAM_ID)

    def test_profile_refetched_after_ttl(self, resolver: ProfileResolver, api: MagicMock, clock) -> None:
        resolver.get_profile(STEAM_ID)
        clock.advance(3601)
        resolver.get_profile(STEAM_ID)

        assert api.get_player_summary.call_count == 2

    def test_community_failure_degrades_to_unknown_location(
        self, resolver: ProfileResolver, community: MagicMock
    ) -> None:
        community.fetch_profile_info.side_effect = requests.ConnectionError("down")

        profile = resolver.get_profile(STEAM_ID)

        assert profile.location == "Unknown"
        assert profile.online_state is None
        assert profile.display_name == "Rabscuttle"

    def test_medium_avatar_fallback(self, resolver: ProfileResolver, api: MagicMock) -> None:
        summary = dict(SUMMARY)
        del summary["avatarfull"]
        api.get_player_summary.return_value = summary

        assert resolver.get_profile(STEAM_ID).avatar_url == "https://avatars.example.com/medium.jpg"

    def test_hidden_timestamps_become_none(self, resolver: ProfileResolver, api: MagicMock) -> None:
        api.get_player_summary.return_value = {"personaname": "Private", "communityvisibilitystate": 1}

        profile = resolver.get_profile(STEAM_ID)

        assert profile.last_logoff is None
        assert profile.created_at is None
        assert profile.avatar_url == ""

    def test_unresolvable_identifier(self, resolver: ProfileResolver, api: MagicMock, cache: CacheStore) -> None:
        api.resolve_vanity_url.side_effect = SteamIdResolutionError("no match")

        with pytest.raises(ProfileUnavailableError):
            resolver.get_profile("nobody")
        assert "user_nobody" not in cache

    def test_summary_failure_is_not_cached(self, resolver: ProfileResolver, api: MagicMock, cache) -> None:
        api.get_player_summary.side_effect = ProfileUnavailableError("503")

        with pytest.raises(ProfileUnavailableError):
            resolver.get_profile(STEAM_ID)
        assert f"user_{STEAM_ID}" not in cache
