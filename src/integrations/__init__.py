from __future__ import annotations

__all__: list[str] = [
    "AppPrice",
    "CommunityProfileInfo",
    "OwnedGame",
    "SteamCommunityClient",
    "SteamWebAPI",
    "StorePriceClient",
]

from src.integrations.steam_community import CommunityProfileInfo, SteamCommunityClient
from src.integrations.steam_store import AppPrice, StorePriceClient
from src.integrations.steam_web_api import OwnedGame, SteamWebAPI
