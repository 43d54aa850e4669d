"""CoinGecko public API client.

Rate limits on the free tier are roughly 10-30 calls/minute; no API key is
needed for the endpoints used here.
"""

import logging
from typing import Any

import requests

from chat_api.core.config import get_coingecko_base_url, get_http_timeout
from chat_api.domain.exceptions import FetchError

logger = logging.getLogger(__name__)


class CoinGeckoClient:
    """Thin wrapper over the CoinGecko endpoints the assistant uses.

    Every method raises FetchError on transport, HTTP or JSON errors, and on
    bodies whose shape does not match the endpoint.
    """

    def __init__(self, base_url: str | None = None, timeout: float | None = None):
        self.base_url = base_url or get_coingecko_base_url()
        self.timeout = timeout if timeout is not None else get_http_timeout()
        if self.timeout <= 0:
            raise ValueError(f"timeout must be positive, got {self.timeout}")

    def _get(self, path: str, params: dict[str, Any], expected: type) -> Any:
        url = f"{self.base_url}{path}"
        try:
            response = requests.get(url, params=params, timeout=self.timeout)
            response.raise_for_status()
            data = response.json()
        except (requests.RequestException, ValueError) as e:
            logger.error(f"CoinGecko request to {path} failed: {e}")
            raise FetchError(f"CoinGecko request failed: {e}", service="coingecko") from e

        if not isinstance(data, expected):
            logger.error(f"CoinGecko {path} returned {type(data).__name__}, expected {expected.__name__}")
            raise FetchError(f"Unexpected CoinGecko response from {path}", service="coingecko")
        return data

    def _records(self, path: str, items: Any) -> list[dict[str, Any]]:
        if not isinstance(items, list):
            raise FetchError(f"Unexpected CoinGecko response from {path}", service="coingecko")
        return [item for item in items if isinstance(item, dict)]

    def search(self, query: str) -> list[dict[str, Any]]:
        """Search coins by name or symbol, best match first.

        Returns:
            List of {"id", "name", "symbol", ...} dicts
        """
        data = self._get("/search", {"query": query}, expected=dict)
        return self._records("/search", data.get("coins") or [])

    def simple_price(self, token_ids: list[str]) -> dict[str, dict[str, float]]:
        """Get USD price and 24h change for token ids.

        Returns:
            Mapping of id -> {"usd": ..., "usd_24h_change": ...}; unknown ids
            are absent
        """
        data = self._get(
            "/simple/price",
            {
                "ids": ",".join(token_ids),
                "vs_currencies": "usd",
                "include_24hr_change": "true",
            },
            expected=dict,
        )
        return {token_id: prices for token_id, prices in data.items() if isinstance(prices, dict)}

    def markets(
        self,
        order: str = "market_cap_desc",
        per_page: int = 100,
        page: int = 1,
        price_change_percentage: str | None = None,
    ) -> list[dict[str, Any]]:
        """List coins with market data (price, market cap, 24h change)."""
        params: dict[str, Any] = {
            "vs_currency": "usd",
            "order": order,
            "per_page": per_page,
            "page": page,
            "sparkline": "false",
        }
        if price_change_percentage:
            params["price_change_percentage"] = price_change_percentage
            params["locale"] = "en"
        data = self._get("/coins/markets", params, expected=list)
        return self._records("/coins/markets", data)
