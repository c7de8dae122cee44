# src/core/profile.py

"""Profile dataclass merged from the player summary and community lookups."""

from __future__ import annotations

from dataclasses import dataclass

__all__ = ["Profile", "UNKNOWN_LOCATION", "privacy_settings_url"]

UNKNOWN_LOCATION = "Unknown"


@dataclass(frozen=True)
class Profile:
    """A Steam user's public profile as shown on the card.

    Attributes:
        steam_id: Resolved SteamID64.
        display_name: Persona name.
        visibility: Community visibility state (1 private, 3 public).
        avatar_url: URL of the full-size avatar, empty if none.
        last_logoff: Unix timestamp of the last logoff, if public.
        created_at: Unix timestamp of account creation, if public.
        country_code: ISO country code from the profile, if set.
        state_code: State/region code from the profile, if set.
        online_state: Community online state ("online", "offline", ...).
        location: Free-text location from the community profile.
    """

    steam_id: str
    display_name: str
    visibility: int = 0
    avatar_url: str = ""
    last_logoff: int | None = None
    created_at: int | None = None
    country_code: str | None = None
    state_code: str | None = None
    online_state: str | None = None
    location: str = UNKNOWN_LOCATION


def privacy_settings_url(steam_id: str) -> str:
    """Returns the Steam Community page where a user can change privacy settings."""
    return f"https://steamcommunity.com/profiles/{steam_id}/edit/settings"
