"""Tests for the CoinGecko client and the fail-soft market data fetcher."""

from unittest.mock import MagicMock, patch

import pytest
import requests

from chat_api.core.market_data import CoinGeckoClient, MarketDataFetcher, MarketSnapshot
from chat_api.domain.exceptions import FetchError


@pytest.fixture
def client():
    return MagicMock(spec=CoinGeckoClient)


class TestResolveTokenId:
    def test_returns_top_result(self, client):
        client.search.return_value = [
            {"id": "bitcoin", "name": "Bitcoin", "symbol": "BTC"},
            {"id": "wrapped-bitcoin", "name": "Wrapped Bitcoin", "symbol": "WBTC"},
        ]
        assert MarketDataFetcher(client).resolve_token_id("bitcoin") == "bitcoin"
        client.search.assert_called_once_with("bitcoin")

    def test_no_results(self, client):
        client.search.return_value = []
        assert MarketDataFetcher(client).resolve_token_id("notacoin") is None

    def test_fetch_error_is_soft(self, client):
        client.search.side_effect = FetchError("timeout", service="coingecko")
        assert MarketDataFetcher(client).resolve_token_id("bitcoin") is None


class TestFetchPrice:
    def test_snapshot(self, client):
        client.simple_price.return_value = {"bitcoin": {"usd": 50000, "usd_24h_change": 2.5}}
        snapshot = MarketDataFetcher(client).fetch_price("bitcoin")
        assert snapshot == MarketSnapshot(token_id="bitcoin", usd=50000, usd_24h_change=2.5)
        assert snapshot.to_dict() == {"usd": 50000, "usd_24h_change": 2.5}

    def test_unknown_id(self, client):
        client.simple_price.return_value = {}
        assert MarketDataFetcher(client).fetch_price("nope") is None

    def test_fetch_error_is_soft(self, client):
        client.simple_price.side_effect = FetchError("500", service="coingecko")
        assert MarketDataFetcher(client).fetch_price("bitcoin") is None


class TestLookup:
    def test_resolves_then_prices(self, client):
        client.search.return_value = [{"id": "dogecoin"}]
        client.simple_price.return_value = {"dogecoin": {"usd": 0.12, "usd_24h_change": -1.0}}
        snapshot = MarketDataFetcher(client).lookup("doge")
        assert snapshot.token_id == "dogecoin"
        client.simple_price.assert_called_once_with(["dogecoin"])

    def test_unresolved_skips_price(self, client):
        client.search.return_value = []
        assert MarketDataFetcher(client).lookup("nothing") is None
        client.simple_price.assert_not_called()


class TestCoinGeckoClient:
    @patch("chat_api.core.market_data.coingecko.requests.get")
    def test_search(self, mock_get):
        mock_get.return_value.json.return_value = {"coins": [{"id": "solana"}]}
        coins = CoinGeckoClient(base_url="https://cg.test/api/v3").search("sol")

        assert coins == [{"id": "solana"}]
        assert mock_get.call_args.args[0] == "https://cg.test/api/v3/search"
        assert mock_get.call_args.kwargs["params"] == {"query": "sol"}

    @patch("chat_api.core.market_data.coingecko.requests.get")
    def test_simple_price_params(self, mock_get):
        mock_get.return_value.json.return_value = {"bitcoin": {"usd": 1.0}}
        CoinGeckoClient().simple_price(["bitcoin", "ethereum"])

        params = mock_get.call_args.kwargs["params"]
        assert params["ids"] == "bitcoin,ethereum"
        assert params["vs_currencies"] == "usd"
        assert params["include_24hr_change"] == "true"

    def test_base_url_from_env(self, monkeypatch):
        monkeypatch.setenv("COINGECKO_BASE_URL", "http://localhost:9999/")
        assert CoinGeckoClient().base_url == "http://localhost:9999"

    @patch("chat_api.core.market_data.coingecko.requests.get")
    def test_transport_error_raises_fetch_error(self, mock_get):
        mock_get.side_effect = requests.Timeout("slow")
        with pytest.raises(FetchError):
            CoinGeckoClient().search("bitcoin")

    @patch("chat_api.core.market_data.coingecko.requests.get")
    def test_invalid_json_raises_fetch_error(self, mock_get):
        mock_get.return_value.json.side_effect = ValueError("not json")
        with pytest.raises(FetchError):
            CoinGeckoClient().markets()

    @patch("chat_api.core.market_data.coingecko.requests.get")
    def test_list_body_from_search_raises_fetch_error(self, mock_get):
        mock_get.return_value.json.return_value = ["unexpected"]
        with pytest.raises(FetchError, match="Unexpected CoinGecko response"):
            CoinGeckoClient().search("bitcoin")

    @patch("chat_api.core.market_data.coingecko.requests.get")
    def test_list_body_from_simple_price_raises_fetch_error(self, mock_get):
        mock_get.return_value.json.return_value = ["unexpected"]
        with pytest.raises(FetchError):
            CoinGeckoClient().simple_price(["bitcoin"])

    @patch("chat_api.core.market_data.coingecko.requests.get")
    def test_object_body_from_markets_raises_fetch_error(self, mock_get):
        mock_get.return_value.json.return_value = {"error": "rate limited"}
        with pytest.raises(FetchError):
            CoinGeckoClient().markets()

    @patch("chat_api.core.market_data.coingecko.requests.get")
    def test_malformed_records_are_dropped(self, mock_get):
        mock_get.return_value.json.return_value = {"coins": ["bitcoin", {"id": "bitcoin"}]}
        assert CoinGeckoClient().search("bitcoin") == [{"id": "bitcoin"}]

    @patch("chat_api.core.market_data.coingecko.requests.get")
    def test_unexpected_body_degrades_to_no_snapshot(self, mock_get):
        mock_get.return_value.json.return_value = ["unexpected"]
        assert MarketDataFetcher(CoinGeckoClient()).lookup("bitcoin") is None

    def test_explicit_timeout_is_kept(self, monkeypatch):
        monkeypatch.setenv("HTTP_TIMEOUT_SECONDS", "30")
        assert CoinGeckoClient(timeout=2.0).timeout == 2.0

    def test_non_positive_timeout_rejected(self):
        with pytest.raises(ValueError, match="timeout must be positive"):
            CoinGeckoClient(timeout=0)


class TestFetcherShapes:
    def test_non_dict_top_result(self, client):
        client.search.return_value = ["bitcoin"]
        assert MarketDataFetcher(client).resolve_token_id("bitcoin") is None

    def test_non_dict_price_entry(self, client):
        client.simple_price.return_value = {"bitcoin": 50000}
        assert MarketDataFetcher(client).fetch_price("bitcoin") is None
