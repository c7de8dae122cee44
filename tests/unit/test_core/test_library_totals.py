"""Tests for LibraryTotals and the RESTRICTED marker."""

from __future__ import annotations

import math

import pytest

from src.core.library import RESTRICTED, LibraryTotals, RestrictedLibrary, is_restricted
from src.core.profile import UNKNOWN_LOCATION, Profile, privacy_settings_url


class TestLibraryTotals:
    """Tests for the LibraryTotals dataclass."""

    def test_defaults(self) -> None:
        totals = LibraryTotals()
        assert totals.total_final_formatted == "$0.00"
        assert totals.total_games == 0
        assert totals.average_playtime_hours == "0"

    def test_frozen(self) -> None:
        totals = LibraryTotals()
        with pytest.raises(AttributeError):
            totals.total_games = 5  # type: ignore[misc]

    def test_progress_percent(self) -> None:
        totals = LibraryTotals(total_games=8, played_count=2)
        assert totals.progress_percent == 25.0

    def test_progress_percent_empty_library_is_nan(self) -> None:
        assert math.isnan(LibraryTotals().progress_percent)


class TestRestricted:
    """Tests for the RESTRICTED marker."""

    def test_singleton(self) -> None:
        assert RestrictedLibrary() is RESTRICTED

    def test_falsy_and_repr(self) -> None:
        assert not RESTRICTED
        assert repr(RESTRICTED) == "RESTRICTED"

    def test_is_restricted(self) -> None:
        assert is_restricted(RESTRICTED) is True
        assert is_restricted(LibraryTotals()) is False


class TestProfile:
    """Tests for the Profile dataclass."""

    def test_location_defaults_to_unknown(self) -> None:
        profile = Profile(steam_id="76561197960287930", display_name="x")
        assert profile.location == UNKNOWN_LOCATION == "Unknown"
        assert profile.last_logoff is None

    def test_privacy_settings_url(self) -> None:
        url = privacy_settings_url("76561197960287930")
        assert url == "https://steamcommunity.com/profiles/76561197960287930/edit/settings"
