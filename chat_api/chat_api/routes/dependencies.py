"""Dependency injection for API endpoints."""

from typing import Annotated

from fastapi import Depends, HTTPException

from chat_api.core.chat import SessionStore, get_session_store
from chat_api.core.feedback import FeedbackStore, get_feedback_store
from chat_api.core.llm import LLMProvider, get_llm_provider
from chat_api.core.market_data import CoinGeckoClient, MarketDataFetcher
from chat_api.core.news_api import NewsApiClient
from chat_api.core.sentiment import LexiconSentimentScorer, NewsSearcher, SentimentScorer


def get_llm() -> LLMProvider:
    """Get the configured LLM provider, or 503 if it cannot be built."""
    try:
        return get_llm_provider()
    except ValueError as e:
        raise HTTPException(status_code=503, detail=f"LLM service unavailable: {e}") from e


def get_coingecko_client() -> CoinGeckoClient:
    """Get the market data client."""
    return CoinGeckoClient()


def get_market_fetcher(
    client: Annotated[CoinGeckoClient, Depends(get_coingecko_client)],
) -> MarketDataFetcher:
    """Get the fail-soft market data fetcher."""
    return MarketDataFetcher(client)


def get_news_searcher() -> NewsSearcher:
    """Get the news search implementation."""
    return NewsApiClient()


def get_sentiment_scorer() -> SentimentScorer:
    """Get the sentiment scorer implementation."""
    return LexiconSentimentScorer()


def get_sessions() -> SessionStore:
    return get_session_store()


def get_feedback() -> FeedbackStore:
    return get_feedback_store()
