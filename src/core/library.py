# src/core/library.py

"""Library totals computed from the owned-games list and store prices."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Final

__all__ = ["LibraryTotals", "RESTRICTED", "RestrictedLibrary", "is_restricted"]


@dataclass(frozen=True)
class LibraryTotals:
    """Aggregated spend and playtime figures for one library.

    Attributes:
        total_final_formatted: Sum of current prices, e.g. "$1,234.56".
        total_initial_formatted: Sum of undiscounted prices.
        average_price_formatted: Mean undiscounted price of priced games.
        total_playtime_hours: Total playtime in compact hours ("1.2K").
        average_playtime_hours: Mean playtime of played games ("12.3").
        total_games: Number of owned games.
        played_count: Games with any recorded playtime.
        unplayed_count: Games with zero playtime.
        total_playtime_minutes: Raw total playtime.
        total_final_cents: Raw sum of current prices in cents.
        total_initial_cents: Raw sum of undiscounted prices in cents.
    """

    total_final_formatted: str = "$0.00"
    total_initial_formatted: str = "$0.00"
    average_price_formatted: str = "$0.00"
    total_playtime_hours: str = "0"
    average_playtime_hours: str = "0"
    total_games: int = 0
    played_count: int = 0
    unplayed_count: int = 0
    total_playtime_minutes: int = 0
    total_final_cents: int = 0
    total_initial_cents: int = 0

    @property
    def progress_percent(self) -> float:
        """Share of played games in percent, NaN for an empty library."""
        if self.total_games == 0:
            return math.nan
        return self.played_count / self.total_games * 100


class RestrictedLibrary:
    """Marker type for a library whose game list cannot be read."""

    _instance: RestrictedLibrary | None = None

    def __new__(cls) -> RestrictedLibrary:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "RESTRICTED"

    def __bool__(self) -> bool:
        return False


RESTRICTED: Final = RestrictedLibrary()


def is_restricted(library: LibraryTotals | RestrictedLibrary) -> bool:
    return library is RESTRICTED
