"""Market data from CoinGecko."""

from chat_api.core.market_data.coingecko import CoinGeckoClient
from chat_api.core.market_data.fetcher import (
    MarketDataClient,
    MarketDataFetcher,
    MarketSnapshot,
)

__all__ = ["CoinGeckoClient", "MarketDataClient", "MarketDataFetcher", "MarketSnapshot"]
