"""Library aggregation service.

Reduces a user's owned-games list and regional store prices into the
``LibraryTotals`` shown on the card:

1. Fetch the owned-games list (a failure means the library is restricted).
2. Split games into played / unplayed and sum playtime.
3. Look up prices in chunks of at most 200 app IDs, all chunks concurrently,
   each bounded by the store client's timeout. A failed chunk only loses
   its own prices.
4. Sum and average the prices of games with a non-zero initial price.
"""

from __future__ import annotations

import logging
from concurrent.futures import Executor, as_completed
from dataclasses import dataclass, field

import requests

from src.core.cache import CacheStore, make_key
from src.core.errors import LibraryRestrictedError, SteamIdResolutionError
from src.core.library import RESTRICTED, LibraryTotals, RestrictedLibrary
from src.core.profile import privacy_settings_url
from src.integrations.steam_store import AppPrice, StorePriceClient
from src.integrations.steam_web_api import OwnedGame, SteamWebAPI
from src.services.profile_service import ProfileResolver
from src.utils.format_utils import (
    average,
    format_usd,
    minutes_to_hours_compact,
    minutes_to_hours_precise,
)

logger = logging.getLogger("steamcard.library_service")

__all__ = [
    "LibraryAggregator",
    "PlaytimeSummary",
    "PriceTotals",
    "chunk_app_ids",
    "summarize_playtime",
    "summarize_prices",
]

DEFAULT_CHUNK_SIZE = 200


@dataclass(frozen=True)
class PlaytimeSummary:
    """Played/unplayed split of an owned-games list."""

    played_count: int = 0
    unplayed_count: int = 0
    total_minutes: int = 0
    played_minutes: tuple[int, ...] = ()


@dataclass
class PriceTotals:
    """Running price totals in cents. Unpriced apps (initial of 0) are ignored."""

    initial_prices: list[int] = field(default_factory=list)
    total_initial: int = 0
    total_final: int = 0

    def add(self, price: AppPrice) -> None:
        if price.initial <= 0:
            return
        self.initial_prices.append(price.initial)
        self.total_initial += price.initial
        self.total_final += price.final


def chunk_app_ids(app_ids: list[int], size: int = DEFAULT_CHUNK_SIZE) -> list[list[int]]:
    """Splits app IDs into consecutive chunks of at most ``size`` entries."""
    if size <= 0:
        raise ValueError("Chunk size must be positive")
    return [app_ids[i : i + size] for i in range(0, len(app_ids), size)]


def summarize_playtime(games: list[OwnedGame]) -> PlaytimeSummary:
    """Counts played and unplayed games and sums playtime minutes."""
    played = [game.playtime_forever for game in games if game.playtime_forever > 0]
    unplayed = sum(1 for game in games if game.playtime_forever == 0)
    return PlaytimeSummary(
        played_count=len(played),
        unplayed_count=unplayed,
        total_minutes=sum(played),
        played_minutes=tuple(played),
    )


def summarize_prices(prices: list[AppPrice]) -> PriceTotals:
    """Accumulates totals over prices with a non-zero initial price."""
    accumulator = PriceTotals()
    for price in prices:
        accumulator.add(price)
    return accumulator


class LibraryAggregator:
    """Builds cached LibraryTotals for an identifier and store region.

    Cache namespace used:
        games_<identifier>_<country_code>: LibraryTotals (``library`` TTL, 6 hours).

    Args:
        api: Steam Web API client for the owned-games list.
        store: Store price client (carries the per-chunk timeout).
        resolver: Profile resolver, shared so resolved IDs are cached once.
        cache: Shared cache store.
        executor: Pool running the price chunks concurrently.
        chunk_size: Maximum app IDs per store request.
    """

    def __init__(
        self,
        api: SteamWebAPI,
        store: StorePriceClient,
        resolver: ProfileResolver,
        cache: CacheStore,
        executor: Executor,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
    ) -> None:
        self._api = api
        self._store = store
        self._resolver = resolver
        self._cache = cache
        self._executor = executor
        self._chunk_size = chunk_size

    def get_totals(self, identifier: str, country_code: str = "US") -> LibraryTotals | RestrictedLibrary:
        """Returns library totals, or RESTRICTED if the games list is unreadable.

        Args:
            identifier: Vanity name or SteamID64.
            country_code: ISO country code selecting the store region.

        Returns:
            LibraryTotals, or the RESTRICTED marker. RESTRICTED is never cached.
        """
        key = make_key("games", identifier, country_code)
        try:
            return self._cache.with_dedup(
                key,
                self._cache.ttl("library"),
                lambda: self._aggregate(identifier, country_code),
            )
        except (LibraryRestrictedError, SteamIdResolutionError) as exc:
            logger.warning("Library of '%s' is restricted: %s", identifier, exc)
            return RESTRICTED

    def _aggregate(self, identifier: str, country_code: str) -> LibraryTotals:
        steam_id = self._resolver.resolve_steam_id(identifier)

        try:
            games = self._api.get_owned_games(steam_id)
        except LibraryRestrictedError:
            logger.info("Games list private, settings at %s", privacy_settings_url(steam_id))
            raise

        playtime = summarize_playtime(games)
        prices = self._fetch_prices([game.app_id for game in games], country_code)
        accumulator = summarize_prices(prices)

        if accumulator.initial_prices:
            average_price = format_usd(average(accumulator.initial_prices))
        else:
            average_price = "$0.00"

        if playtime.played_minutes:
            average_playtime = minutes_to_hours_precise(average(playtime.played_minutes))
        else:
            average_playtime = "0"

        return LibraryTotals(
            total_final_formatted=format_usd(accumulator.total_final),
            total_initial_formatted=format_usd(accumulator.total_initial),
            average_price_formatted=average_price,
            total_playtime_hours=minutes_to_hours_compact(playtime.total_minutes),
            average_playtime_hours=average_playtime,
            total_games=len(games),
            played_count=playtime.played_count,
            unplayed_count=playtime.unplayed_count,
            total_playtime_minutes=playtime.total_minutes,
            total_final_cents=accumulator.total_final,
            total_initial_cents=accumulator.total_initial,
        )

    def _fetch_prices(self, app_ids: list[int], country_code: str) -> list[AppPrice]:
        """Runs one store request per chunk concurrently, skipping failed chunks."""
        chunks = chunk_app_ids(app_ids, self._chunk_size)
        if not chunks:
            return []

        futures = {
            self._executor.submit(self._store.fetch_prices, chunk, country_code): idx
            for idx, chunk in enumerate(chunks)
        }

        prices: list[AppPrice] = []
        for future in as_completed(futures):
            idx = futures[future]
            try:
                prices.extend(future.result())
            except (requests.RequestException, ValueError) as exc:
                logger.warning("Failed to fetch pricing for chunk %d/%d: %s", idx + 1, len(chunks), exc)
        return prices
