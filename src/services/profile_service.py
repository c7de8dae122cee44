"""Profile resolution service.

Turns the identifier from the request (vanity name or SteamID64) into a
``Profile`` by merging the Web API player summary with the community XML
profile. Both lookups run concurrently; only the summary is mandatory.
"""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ElementTree
from concurrent.futures import Executor, Future
from typing import Any

import requests

from src.core.cache import CacheStore, make_key
from src.core.errors import ProfileUnavailableError, SteamIdResolutionError
from src.core.profile import UNKNOWN_LOCATION, Profile
from src.integrations.steam_community import CommunityProfileInfo, SteamCommunityClient
from src.integrations.steam_web_api import SteamWebAPI, is_steam_id64

logger = logging.getLogger("steamcard.profile_service")

__all__ = ["ProfileResolver"]


class ProfileResolver:
    """Resolves identifiers and builds cached Profile records.

    Cache namespaces used:
        steamid_<identifier>: resolved SteamID64 (``steam_id`` TTL, 7 days).
        user_<identifier>: merged Profile (``profile`` TTL, 1 hour).

    Args:
        api: Steam Web API client.
        community: Community XML client for the optional fields.
        cache: Shared cache store.
        executor: Pool running the community lookup next to the summary call.
    """

    def __init__(
        self,
        api: SteamWebAPI,
        community: SteamCommunityClient,
        cache: CacheStore,
        executor: Executor,
    ) -> None:
        self._api = api
        self._community = community
        self._cache = cache
        self._executor = executor

    def resolve_steam_id(self, identifier: str) -> str:
        """Maps an identifier to a SteamID64, cached for the ``steam_id`` TTL.

        Args:
            identifier: Vanity name or SteamID64.

        Returns:
            The SteamID64 string.

        Raises:
            SteamIdResolutionError: If the vanity name cannot be resolved.
        """
        key = make_key("steamid", identifier)
        return self._cache.with_dedup(key, self._cache.ttl("steam_id"), lambda: self._resolve(identifier))

    def _resolve(self, identifier: str) -> str:
        if is_steam_id64(identifier):
            return identifier
        steam_id = self._api.resolve_vanity_url(identifier)
        logger.debug("Resolved '%s' to %s", identifier, steam_id)
        return steam_id

    def get_profile(self, identifier: str) -> Profile:
        """Returns the merged Profile for an identifier.

        Concurrent calls for the same identifier share one upstream fetch.

        Args:
            identifier: Vanity name or SteamID64.

        Returns:
            The Profile.

        Raises:
            ProfileUnavailableError: If the identifier cannot be resolved or
                the player summary cannot be fetched. Nothing is cached.
        """
        key = make_key("user", identifier)
        return self._cache.with_dedup(key, self._cache.ttl("profile"), lambda: self._build_profile(identifier))

    def _build_profile(self, identifier: str) -> Profile:
        try:
            steam_id = self.resolve_steam_id(identifier)
        except SteamIdResolutionError as exc:
            logger.warning("Could not resolve '%s': %s", identifier, exc)
            raise ProfileUnavailableError(str(exc)) from exc

        community_future = self._executor.submit(self._community.fetch_profile_info, steam_id)

        try:
            summary = self._api.get_player_summary(steam_id)
        except ProfileUnavailableError as exc:
            logger.warning("Player summary unavailable for %s: %s", steam_id, exc)
            raise

        info = self._collect_community_info(steam_id, community_future)
        return self._merge(steam_id, summary, info)

    @staticmethod
    def _collect_community_info(steam_id: str, future: Future) -> CommunityProfileInfo:
        """Waits for the community lookup, degrading to empty info on failure."""
        try:
            return future.result()
        except (requests.RequestException, ElementTree.ParseError, ValueError) as exc:
            logger.warning("Community profile lookup failed for %s: %s", steam_id, exc)
            return CommunityProfileInfo()

    @staticmethod
    def _merge(steam_id: str, summary: dict[str, Any], info: CommunityProfileInfo) -> Profile:
        return Profile(
            steam_id=steam_id,
            display_name=summary.get("personaname", ""),
            visibility=int(summary.get("communityvisibilitystate", 0) or 0),
            avatar_url=summary.get("avatarfull") or summary.get("avatarmedium") or "",
            last_logoff=summary.get("lastlogoff") or None,
            created_at=summary.get("timecreated") or None,
            country_code=summary.get("loccountrycode"),
            state_code=summary.get("locstatecode"),
            online_state=info.online_state,
            location=info.location or UNKNOWN_LOCATION,
        )
