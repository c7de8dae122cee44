"""Card generation pipeline shared by the HTTP route and the CLI.

For one request the profile and the library totals are fetched
concurrently, the avatar is loaded, and the card is rendered. Two thread
pools are used: the request pool runs the library aggregation next to the
profile lookup, and the I/O pool runs leaf HTTP calls (community profile,
price chunks). Leaf tasks never wait on other tasks, so the pools cannot
starve each other.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass

from src.config import Config
from src.core.cache import CacheStore
from src.core.library import LibraryTotals, RestrictedLibrary, is_restricted
from src.core.profile import Profile
from src.integrations.steam_community import SteamCommunityClient
from src.integrations.steam_store import StorePriceClient
from src.integrations.steam_web_api import SteamWebAPI
from src.render.card_renderer import render_card
from src.render.theme import RenderConfig
from src.services.asset_service import AssetService
from src.services.library_service import LibraryAggregator
from src.services.profile_service import ProfileResolver

logger = logging.getLogger("steamcard.card_service")

__all__ = ["CardResult", "CardService"]


@dataclass(frozen=True)
class CardResult:
    """A rendered card and the data it was drawn from.

    Attributes:
        png: Encoded PNG bytes.
        profile: Profile shown on the card.
        library: Library totals, or RESTRICTED.
    """

    png: bytes
    profile: Profile
    library: LibraryTotals | RestrictedLibrary

    @property
    def restricted(self) -> bool:
        return is_restricted(self.library)


class CardService:
    """Orchestrates profile, library, assets and rendering for one card.

    Args:
        resolver: Profile resolver.
        aggregator: Library aggregator.
        assets: Asset service for fonts, icons and avatars.
        request_executor: Pool running the library aggregation.
        watermark_text: Text drawn in the card's lower right corner.
        io_executor: Leaf pool owned by this service, shut down with it.
    """

    def __init__(
        self,
        resolver: ProfileResolver,
        aggregator: LibraryAggregator,
        assets: AssetService,
        request_executor: ThreadPoolExecutor,
        watermark_text: str,
        io_executor: ThreadPoolExecutor | None = None,
    ) -> None:
        self.resolver = resolver
        self.aggregator = aggregator
        self.assets = assets
        self._request_executor = request_executor
        self._io_executor = io_executor
        self.watermark_text = watermark_text

    @classmethod
    def build(cls, config: Config, cache: CacheStore | None = None) -> CardService:
        """Creates all clients and pools from the configuration.

        Args:
            config: Application configuration.
            cache: Shared cache; a fresh one with the configured TTLs if None.

        Returns:
            A ready CardService.

        Raises:
            ValueError: If no Steam API key is configured.
        """
        if cache is None:
            cache = CacheStore(config.CACHE_TTLS)

        api = SteamWebAPI(config.STEAM_API_KEY or "", timeout=config.UPSTREAM_TIMEOUT)
        community = SteamCommunityClient(timeout=config.UPSTREAM_TIMEOUT)
        store = StorePriceClient(timeout=config.PRICE_TIMEOUT)

        request_executor = ThreadPoolExecutor(max_workers=config.MAX_WORKERS, thread_name_prefix="steamcard-req")
        io_executor = ThreadPoolExecutor(max_workers=config.MAX_WORKERS, thread_name_prefix="steamcard-io")

        resolver = ProfileResolver(api, community, cache, io_executor)
        aggregator = LibraryAggregator(
            api,
            store,
            resolver,
            cache,
            io_executor,
            chunk_size=config.PRICE_CHUNK_SIZE,
        )
        assets = AssetService(config.RESOURCES_DIR, cache, timeout=config.UPSTREAM_TIMEOUT)

        logger.info("Card service ready (workers=%d, assets=%s)", config.MAX_WORKERS, config.RESOURCES_DIR)
        return cls(resolver, aggregator, assets, request_executor, config.WATERMARK_TEXT, io_executor)

    def generate(
        self,
        uid: str,
        country_code: str = "US",
        render_config: RenderConfig | None = None,
    ) -> CardResult:
        """Fetches everything for ``uid`` and renders the card.

        Args:
            uid: Vanity name or SteamID64.
            country_code: Store region for prices.
            render_config: Colors and border options; defaults if None.

        Returns:
            The CardResult.

        Raises:
            ProfileUnavailableError: If the profile cannot be fetched.
        """
        if render_config is None:
            render_config = RenderConfig()

        library_future = self._request_executor.submit(self.aggregator.get_totals, uid, country_code)
        profile = self.resolver.get_profile(uid)
        library = library_future.result()

        assets = self.assets.card_assets(profile)
        png = render_card(profile, library, render_config, assets, self.watermark_text)

        logger.info(
            "Generated card for %s (%s, restricted=%s)",
            uid,
            profile.steam_id,
            is_restricted(library),
        )
        return CardResult(png=png, profile=profile, library=library)

    def shutdown(self) -> None:
        """Stops the thread pools."""
        self._request_executor.shutdown(wait=False)
        if self._io_executor is not None:
            self._io_executor.shutdown(wait=False)
