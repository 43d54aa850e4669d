"""Tests for the chat and feedback endpoints."""

import logging
from datetime import UTC, datetime
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from chat_api.core.chat import SessionStore
from chat_api.core.feedback import get_feedback_store
from chat_api.core.llm import LLMProvider, LLMResponse
from chat_api.core.market_data import CoinGeckoClient, MarketDataFetcher
from chat_api.core.news_api import NewsApiArticle, NewsApiClient
from chat_api.core.sentiment import LexiconSentimentScorer
from chat_api.domain.exceptions import FetchError, NewsApiKeyMissingError
from chat_api.main import app
from chat_api.routes.dependencies import (
    get_llm,
    get_market_fetcher,
    get_news_searcher,
    get_sentiment_scorer,
    get_sessions,
)

# ============================================================================
# Mock implementations for testing
# ============================================================================


class MockNewsSearcher:
    """Mock news searcher with a configurable key state."""

    def __init__(self, articles: list[NewsApiArticle] | None = None, configured: bool = True):
        self.articles = articles or []
        self.configured = configured
        self.queries: list[str] = []

    @property
    def is_configured(self) -> bool:
        return self.configured

    def search_news(self, query: str, page_size: int = 10, sort_by: str = "publishedAt"):
        self.queries.append(query)
        if not self.configured:
            raise NewsApiKeyMissingError()
        return self.articles


@pytest.fixture
def llm():
    mock = MagicMock(spec=LLMProvider)
    mock.complete.return_value = LLMResponse(
        content="Bitcoin looks strong.", model="mock-model", tokens_used=42
    )
    return mock


@pytest.fixture
def coingecko():
    client = MagicMock(spec=CoinGeckoClient)
    client.search.return_value = [{"id": "bitcoin"}]
    client.simple_price.return_value = {"bitcoin": {"usd": 50000, "usd_24h_change": 2.5}}
    return client


@pytest.fixture
def searcher():
    return MockNewsSearcher()


@pytest.fixture
def sessions():
    return SessionStore(max_turns=0)


@pytest.fixture
def client(llm, coingecko, searcher, sessions):
    app.dependency_overrides[get_llm] = lambda: llm
    app.dependency_overrides[get_market_fetcher] = lambda: MarketDataFetcher(coingecko)
    app.dependency_overrides[get_news_searcher] = lambda: searcher
    app.dependency_overrides[get_sentiment_scorer] = lambda: LexiconSentimentScorer()
    app.dependency_overrides[get_sessions] = lambda: sessions
    return TestClient(app)


def sent_messages(llm: MagicMock) -> list[dict[str, str]]:
    return llm.complete.call_args.args[0]


# ============================================================================
# POST /api/chat
# ============================================================================


class TestChatEndpoint:
    def test_price_question_injects_market_data(self, client, llm, sessions):
        response = client.post("/api/chat", json={"message": "price of bitcoin"})

        assert response.status_code == 200
        data = response.json()
        assert data["response"] == "Bitcoin looks strong."
        assert data["messageId"]
        assert data["sessionId"]

        messages = sent_messages(llm)
        assert len(messages) == 3
        assert messages[1] == {
            "role": "system",
            "content": 'Current market data: {"usd": 50000, "usd_24h_change": 2.5}',
        }
        assert messages[2] == {"role": "user", "content": "price of bitcoin"}

        session = sessions.get(data["sessionId"])
        assert len(session.messages) == 3
        assert [m["role"] for m in session.messages] == ["system", "user", "assistant"]

    def test_trading_question_without_articles_adds_no_news(self, client, llm, searcher):
        response = client.post("/api/chat", json={"message": "should I buy dogecoin"})

        assert response.status_code == 200
        assert searcher.queries == ["dogecoin cryptocurrency"]
        messages = sent_messages(llm)
        assert len(messages) == 2
        assert messages[-1]["content"] == "should I buy dogecoin"

    def test_trading_question_with_articles_adds_news_analysis(self, client, llm, searcher):
        searcher.articles = [
            NewsApiArticle(
                title="Dogecoin surge continues",
                description="Bullish momentum",
                source="CoinDesk",
                published_at=datetime(2025, 1, 5, 14, 30, tzinfo=UTC),
                url="https://example.com/doge",
            )
        ]

        client.post("/api/chat", json={"message": "should I buy dogecoin"})

        news_entry = sent_messages(llm)[1]["content"]
        assert news_entry.startswith(
            "Recent market sentiment analysis for your trading question about dogecoin:"
        )
        assert "Recent News Analysis:" in news_entry
        assert "Dogecoin surge continues (Source: CoinDesk)" in news_entry

    def test_missing_news_key_adds_notice(self, client, llm, searcher):
        searcher.configured = False

        response = client.post("/api/chat", json={"message": "look up solana"})

        assert response.status_code == 200
        notice = sent_messages(llm)[1]["content"]
        assert "NEWS_API_KEY is not configured" in notice
        assert '"solana"' in notice

    def test_portfolio_context(self, client, llm):
        portfolio = {
            "totalValue": 1234.5,
            "totalChange": -1.234,
            "assetCount": 1,
            "totalTokens": 0.5,
            "assets": [
                {"id": "ethereum", "amount": 0.5, "price": 2469.0, "value": 1234.5, "change_24h": -1.234}
            ],
        }

        client.post("/api/chat", json={"message": "how am I doing?", "portfolio": portfolio})

        entry = sent_messages(llm)[1]["content"]
        assert entry.startswith("User's Portfolio Information:")
        assert "- Total Value: $1,234.50" in entry
        assert "- 24h Change: -1.23%" in entry
        assert "- Number of Assets: 1" in entry
        assert "- ethereum: 0.5 tokens ($1,234.50) - 24h: -1.23%" in entry

    def test_sub_cent_holdings_keep_full_precision(self, client, llm):
        portfolio = {
            "totalValue": 25.0,
            "totalChange": 1.0,
            "assetCount": 1,
            "totalTokens": 0.0005,
            "assets": [{"id": "bitcoin", "amount": 0.0005, "value": 25.0, "change_24h": 1.0}],
        }

        client.post("/api/chat", json={"message": "hi", "portfolio": portfolio})

        entry = sent_messages(llm)[1]["content"]
        assert "- bitcoin: 0.0005 tokens ($25.00) - 24h: 1.00%" in entry
        assert "- Total Tokens: 0" in entry

    def test_malformed_news_body_still_answers(self, client, llm, monkeypatch):
        monkeypatch.setattr(
            "chat_api.core.news_api.newsapi.requests.get",
            MagicMock(return_value=MagicMock(**{"json.return_value": ["unexpected"]})),
        )
        app.dependency_overrides[get_news_searcher] = lambda: NewsApiClient(api_key="k")

        response = client.post("/api/chat", json={"message": "should I buy bitcoin"})

        assert response.status_code == 200
        assert len(sent_messages(llm)) == 2

    def test_empty_portfolio_is_ignored(self, client, llm):
        client.post("/api/chat", json={"message": "hi", "portfolio": {"assets": []}})
        assert len(sent_messages(llm)) == 2

    def test_session_continuity(self, client, llm, sessions):
        first = client.post("/api/chat", json={"message": "hi"}).json()
        second = client.post(
            "/api/chat", json={"message": "and again", "sessionId": first["sessionId"]}
        ).json()

        assert second["sessionId"] == first["sessionId"]
        assert len(sessions) == 1
        messages = sent_messages(llm)
        assert [m["content"] for m in messages[1:]] == ["hi", "Bitcoin looks strong.", "and again"]

    def test_sessions_are_isolated(self, client, sessions):
        a = client.post("/api/chat", json={"message": "a"}).json()
        b = client.post("/api/chat", json={"message": "b"}).json()

        assert a["sessionId"] != b["sessionId"]
        assert sessions.get(a["sessionId"]).history[0]["content"] == "a"
        assert sessions.get(b["sessionId"]).history[0]["content"] == "b"

    def test_llm_failure_returns_503_and_keeps_session(self, client, llm, sessions):
        first = client.post("/api/chat", json={"message": "hi"}).json()
        session = sessions.get(first["sessionId"])
        before = list(session.messages)

        llm.complete.side_effect = RuntimeError("upstream timeout")
        response = client.post(
            "/api/chat", json={"message": "price of bitcoin", "sessionId": first["sessionId"]}
        )

        assert response.status_code == 503
        assert response.json()["detail"].startswith("LLM service unavailable")
        assert session.messages == before

    def test_market_failure_still_answers(self, client, llm, coingecko):
        coingecko.search.side_effect = FetchError("timeout", service="coingecko")

        response = client.post("/api/chat", json={"message": "price of bitcoin"})

        assert response.status_code == 200
        assert len(sent_messages(llm)) == 2

    def test_llm_not_configured_returns_503(self, searcher, sessions):
        app.dependency_overrides[get_news_searcher] = lambda: searcher
        app.dependency_overrides[get_sessions] = lambda: sessions

        response = TestClient(app).post("/api/chat", json={"message": "hi"})

        assert response.status_code == 503
        assert "OPENAI_API_KEY" in response.json()["detail"]

    @pytest.mark.parametrize("payload", [{}, {"message": ""}, {"message": "x" * 4001}])
    def test_invalid_message_returns_422(self, client, payload):
        assert client.post("/api/chat", json=payload).status_code == 422


# ============================================================================
# POST /api/feedback
# ============================================================================


class TestFeedbackEndpoint:
    def test_records_feedback(self):
        response = TestClient(app).post(
            "/api/feedback", json={"messageId": "1700000000000", "feedback": "thumbs_up"}
        )

        assert response.status_code == 200
        assert response.json() == {"success": True}
        (item,) = get_feedback_store().items()
        assert item.message_id == "1700000000000"
        assert item.feedback == "thumbs_up"

    def test_missing_message_id_returns_422(self):
        response = TestClient(app).post("/api/feedback", json={"feedback": "thumbs_up"})
        assert response.status_code == 422

    def test_feedback_is_logged_as_record(self, caplog):
        with caplog.at_level(logging.INFO, logger="chat_api.core.feedback"):
            TestClient(app).post("/api/feedback", json={"messageId": "42", "feedback": "down"})

        (item,) = get_feedback_store().items()
        assert f"Feedback received: {item.to_dict()}" in caplog.text
        assert item.to_dict()["timestamp"] == item.timestamp.isoformat()
