from __future__ import annotations

from src.services.asset_service import AssetService, CardAssets, FontBook
from src.services.card_service import CardResult, CardService
from src.services.library_service import LibraryAggregator
from src.services.profile_service import ProfileResolver

__all__: list[str] = [
    "AssetService",
    "CardAssets",
    "CardResult",
    "CardService",
    "FontBook",
    "LibraryAggregator",
    "ProfileResolver",
]
