"""Steam Web API client for identity and library lookups.

Covers the three api.steampowered.com endpoints the card needs:
ResolveVanityURL, GetPlayerSummaries and GetOwnedGames. Calls carry no
timeout unless one is configured, matching the behaviour of the hosted
service; only store price lookups are bounded (see steam_store.py).
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Any

import requests

from src.core.errors import LibraryRestrictedError, ProfileUnavailableError, SteamIdResolutionError

logger = logging.getLogger("steamcard.steam_web_api")

__all__ = ["OwnedGame", "SteamWebAPI", "is_steam_id64"]

_API_BASE = "https://api.steampowered.com"
_RESOLVE_VANITY_URL = f"{_API_BASE}/ISteamUser/ResolveVanityURL/v1/"
_PLAYER_SUMMARIES_URL = f"{_API_BASE}/ISteamUser/GetPlayerSummaries/v2/"
_OWNED_GAMES_URL = f"{_API_BASE}/IPlayerService/GetOwnedGames/v1/"

_STEAM_ID64_PATTERN = re.compile(r"^7656119\d{10}$")


def is_steam_id64(identifier: str) -> bool:
    """Checks whether ``identifier`` already is a 17-digit SteamID64."""
    return bool(_STEAM_ID64_PATTERN.match(identifier))


@dataclass(frozen=True)
class OwnedGame:
    """One entry of the GetOwnedGames response.

    Attributes:
        app_id: Steam application ID.
        name: Display name (empty when app info was not returned).
        playtime_forever: Total playtime in minutes.
    """

    app_id: int
    name: str = ""
    playtime_forever: int = 0


class SteamWebAPI:
    """Thin client for the Steam Web API endpoints used by the card.

    Attributes:
        api_key: Steam Web API key for authentication.
        timeout: Per-request timeout in seconds, or None for no limit.
    """

    def __init__(self, api_key: str, timeout: float | None = None) -> None:
        """Initializes the SteamWebAPI client.

        Args:
            api_key: Steam Web API key. Must not be empty.
            timeout: Optional per-request timeout in seconds.

        Raises:
            ValueError: If api_key is empty or whitespace-only.
        """
        if not api_key or not api_key.strip():
            raise ValueError("Steam API key must not be empty")
        self.api_key: str = api_key.strip()
        self.timeout = timeout

    def _get(self, url: str, params: dict[str, Any]) -> dict[str, Any]:
        """Performs an authenticated GET and decodes the JSON body.

        Raises:
            requests.RequestException: On network or HTTP errors.
            ValueError: If the body is not JSON.
        """
        response = requests.get(url, params={"key": self.api_key, **params}, timeout=self.timeout)
        response.raise_for_status()
        return response.json()

    def resolve_vanity_url(self, vanity: str) -> str:
        """Maps a vanity name to a SteamID64.

        Args:
            vanity: The custom profile URL name.

        Returns:
            The SteamID64 as a string.

        Raises:
            SteamIdResolutionError: If Steam reports no match or the call fails.
        """
        try:
            data = self._get(_RESOLVE_VANITY_URL, {"vanityurl": vanity})
        except (requests.RequestException, ValueError) as exc:
            raise SteamIdResolutionError(f"ResolveVanityURL failed for '{vanity}': {exc}") from exc

        response = data.get("response", {})
        steam_id = response.get("steamid")
        if response.get("success") != 1 or not steam_id:
            raise SteamIdResolutionError(f"No SteamID found for vanity '{vanity}'")
        return str(steam_id)

    def get_player_summary(self, steam_id: str) -> dict[str, Any]:
        """Fetches the public player summary for a SteamID64.

        Args:
            steam_id: 64-bit Steam ID.

        Returns:
            The raw player dict (personaname, avatarfull, timecreated, ...).

        Raises:
            ProfileUnavailableError: If the call fails or returns no player.
        """
        try:
            data = self._get(_PLAYER_SUMMARIES_URL, {"steamids": steam_id})
        except (requests.RequestException, ValueError) as exc:
            raise ProfileUnavailableError(f"GetPlayerSummaries failed for {steam_id}: {exc}") from exc

        players = data.get("response", {}).get("players", [])
        if not players:
            raise ProfileUnavailableError(f"No player data returned for {steam_id}")
        return players[0]

    def get_owned_games(self, steam_id: str) -> list[OwnedGame]:
        """Fetches the full owned-games list including free games.

        Args:
            steam_id: 64-bit Steam ID.

        Returns:
            List of OwnedGame entries (may be empty for an empty library).

        Raises:
            LibraryRestrictedError: If the call fails or the library is private
                (Steam answers with an empty ``response`` object).
        """
        params = {
            "steamid": steam_id,
            "include_appinfo": 1,
            "include_extended_appinfo": 1,
            "include_played_free_games": 1,
            "include_free_sub": 1,
            "skip_unvetted_apps": 0,
        }
        try:
            data = self._get(_OWNED_GAMES_URL, params)
        except (requests.RequestException, ValueError) as exc:
            raise LibraryRestrictedError(f"GetOwnedGames failed for {steam_id}: {exc}") from exc

        response = data.get("response", {})
        if "games" not in response:
            if response.get("game_count") == 0:
                return []
            raise LibraryRestrictedError(f"Games list of {steam_id} is not visible")

        return [self._parse_game(raw) for raw in response["games"]]

    @staticmethod
    def _parse_game(raw: dict[str, Any]) -> OwnedGame:
        return OwnedGame(
            app_id=int(raw.get("appid", 0)),
            name=raw.get("name", ""),
            playtime_forever=int(raw.get("playtime_forever", 0) or 0),
        )
