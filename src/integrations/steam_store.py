# src/integrations/steam_store.py

"""
Steam Store integration for fetching regional prices.

The store ``appdetails`` endpoint accepts a comma-separated list of app IDs
when the response is limited to ``filters=price_overview``. Steam rejects
overly long lists, so callers split their IDs into chunks (200 per call by
default) and may run the chunks concurrently.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

import requests

logger = logging.getLogger("steamcard.steam_store")


__all__ = ["AppPrice", "StorePriceClient"]


@dataclass(frozen=True)
class AppPrice:
    """Price information for one app, in the currency of the requested region.

    Attributes:
        app_id: Steam application ID.
        initial: Undiscounted price in cents.
        final: Current price in cents (after any discount).
        currency: ISO currency code reported by the store.
    """

    app_id: int
    initial: int
    final: int
    currency: str = ""


class StorePriceClient:
    """
    Fetches ``price_overview`` data from the Steam Store for batches of apps.
    """

    APP_DETAILS_URL = "https://store.steampowered.com/api/appdetails"

    def __init__(self, timeout: float = 10.0):
        """
        Initializes the StorePriceClient.

        Args:
            timeout (float): Timeout in seconds for each batch request.
        """
        self.timeout = timeout

    def fetch_prices(self, app_ids: list[int], country_code: str = "US") -> list[AppPrice]:
        """
        Fetches prices for a batch of apps in one store request.

        Apps without a price (free, delisted or region-locked) are omitted.

        Args:
            app_ids (list[int]): App IDs to look up (one chunk).
            country_code (str): ISO country code selecting the store region.

        Returns:
            list[AppPrice]: Prices for the apps the store returned.

        Raises:
            requests.RequestException: On network errors, timeouts or HTTP errors.
            ValueError: If the response is not JSON.
        """
        if not app_ids:
            return []

        params = {
            "appids": ",".join(str(app_id) for app_id in app_ids),
            "filters": "price_overview",
            "cc": country_code,
        }
        response = requests.get(self.APP_DETAILS_URL, params=params, timeout=self.timeout)
        response.raise_for_status()
        payload = response.json() or {}

        prices: list[AppPrice] = []
        for app_id, entry in payload.items():
            price = self._parse_entry(app_id, entry)
            if price is not None:
                prices.append(price)
        return prices

    @staticmethod
    def _parse_entry(app_id: str, entry: Any) -> AppPrice | None:
        """Parses one ``appdetails`` entry, returning None when it has no price."""
        if not isinstance(entry, dict):
            return None
        data = entry.get("data")
        # Free apps come back with "data": []
        if not isinstance(data, dict):
            return None
        overview = data.get("price_overview")
        if not isinstance(overview, dict):
            return None

        try:
            numeric_id = int(app_id)
        except ValueError:
            return None

        return AppPrice(
            app_id=numeric_id,
            initial=int(overview.get("initial") or 0),
            final=int(overview.get("final") or 0),
            currency=overview.get("currency", ""),
        )
