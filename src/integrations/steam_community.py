"""Steam Community XML profile lookup.

The community profile XML (``/profiles/<id>?xml=1``) carries two fields the
Web API summary lacks: the textual online state and the free-text location.
Both are optional extras on the card, so callers treat any failure here as
a soft miss.
"""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ElementTree
from dataclasses import dataclass

import requests

logger = logging.getLogger("steamcard.steam_community")

__all__ = ["CommunityProfileInfo", "SteamCommunityClient"]


@dataclass(frozen=True)
class CommunityProfileInfo:
    """Fields scraped from the community profile XML.

    Attributes:
        online_state: "online", "offline", "in-game" or None if absent.
        location: Location text, or None if the user has not set one.
    """

    online_state: str | None = None
    location: str | None = None


class SteamCommunityClient:
    """Reads the public community profile XML for a SteamID64."""

    PROFILE_XML_URL = "https://steamcommunity.com/profiles/{steam_id}?xml=1"

    def __init__(self, timeout: float | None = None) -> None:
        self.timeout = timeout

    def fetch_profile_info(self, steam_id: str) -> CommunityProfileInfo:
        """Fetches online state and location for a profile.

        Args:
            steam_id: 64-bit Steam ID.

        Returns:
            The parsed CommunityProfileInfo.

        Raises:
            requests.RequestException: On network or HTTP errors.
            ElementTree.ParseError: If the body is not valid XML.
        """
        url = self.PROFILE_XML_URL.format(steam_id=steam_id)
        response = requests.get(url, timeout=self.timeout)
        response.raise_for_status()

        tree = ElementTree.fromstring(response.content)
        return CommunityProfileInfo(
            online_state=self._text(tree, "onlineState"),
            location=self._text(tree, "location"),
        )

    @staticmethod
    def _text(tree: ElementTree.Element, tag: str) -> str | None:
        element = tree.find(tag)
        if element is None or not element.text or not element.text.strip():
            return None
        return element.text.strip()
