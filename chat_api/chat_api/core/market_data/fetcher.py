"""Token resolution and price lookup with fail-soft semantics."""

import logging
from dataclasses import dataclass
from typing import Any, Protocol

from chat_api.domain.exceptions import ExternalServiceError

logger = logging.getLogger(__name__)


@dataclass
class MarketSnapshot:
    """Current USD price and 24h change for a token."""

    token_id: str
    usd: float
    usd_24h_change: float | None

    def to_dict(self) -> dict[str, Any]:
        """Price data as injected into the chat context."""
        return {"usd": self.usd, "usd_24h_change": self.usd_24h_change}


class MarketDataClient(Protocol):
    """Protocol for the market data collaborator."""

    def search(self, query: str) -> list[dict[str, Any]]: ...

    def simple_price(self, token_ids: list[str]) -> dict[str, dict[str, float]]: ...


class MarketDataFetcher:
    """Resolves free-text token names and fetches their prices.

    Collaborator failures are logged and surface as None.
    """

    def __init__(self, client: MarketDataClient):
        self.client = client

    def resolve_token_id(self, query: str) -> str | None:
        """Return the id of the top search result for a query, if any."""
        try:
            coins = self.client.search(query)
        except ExternalServiceError as e:
            logger.error(f"Error searching token {query!r}: {e}")
            return None
        if not coins:
            logger.info(f"No token found for query: {query!r}")
            return None
        top = coins[0]
        if not isinstance(top, dict):
            logger.warning(f"Unexpected search result for {query!r}: {top!r}")
            return None
        return top.get("id") or None

    def fetch_price(self, token_id: str) -> MarketSnapshot | None:
        """Return the current price snapshot for a token id, if available."""
        try:
            prices = self.client.simple_price([token_id])
        except ExternalServiceError as e:
            logger.error(f"Error fetching token price for {token_id}: {e}")
            return None

        data = prices.get(token_id) if isinstance(prices, dict) else None
        if not isinstance(data, dict) or data.get("usd") is None:
            logger.info(f"No price data for token: {token_id}")
            return None
        return MarketSnapshot(
            token_id=token_id,
            usd=data["usd"],
            usd_24h_change=data.get("usd_24h_change"),
        )

    def lookup(self, query: str) -> MarketSnapshot | None:
        """Resolve a token name and fetch its price in one step."""
        token_id = self.resolve_token_id(query)
        if token_id is None:
            return None
        return self.fetch_price(token_id)
