"""Main chat pipeline: classify, gather data, run the turn."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from chat_api.core.chat.assembler import ContextEnrichment, run_chat_turn
from chat_api.core.chat.portfolio import format_portfolio_context
from chat_api.core.intents import IntentKind, classify_message, find_intent, news_intent
from chat_api.core.sentiment import analyze_token_news

if TYPE_CHECKING:
    from chat_api.core.chat.session import ConversationSession
    from chat_api.core.llm import LLMProvider
    from chat_api.core.market_data import MarketDataFetcher
    from chat_api.core.sentiment import NewsSearcher, SentimentScorer

logger = logging.getLogger(__name__)


@dataclass
class ChatTurnResult:
    """Outcome of a chat turn."""

    response: str
    message_id: str
    session_id: str


def new_message_id() -> str:
    """Millisecond timestamp id for client feedback."""
    return str(time.time_ns() // 1_000_000)


def gather_enrichment(
    message: str,
    market_fetcher: MarketDataFetcher,
    news_searcher: NewsSearcher,
    scorer: SentimentScorer,
    portfolio: dict[str, Any] | None = None,
) -> ContextEnrichment:
    """Classify the message and fetch whatever data it calls for.

    Args:
        message: Raw user message
        market_fetcher: Token resolution and price lookup
        news_searcher: NewsSearcher implementation
        scorer: SentimentScorer implementation
        portfolio: Optional portfolio snapshot sent by the client

    Returns:
        ContextEnrichment; fetch failures simply leave fields empty
    """
    intents = classify_message(message)
    logger.info(f"Detected intents: {[f'{i.kind.value}({i.token})' for i in intents]}")

    enrichment = ContextEnrichment(
        portfolio_context=format_portfolio_context(portfolio),
        news_intent=news_intent(intents),
        news_configured=news_searcher.is_configured,
    )

    if enrichment.news_intent is not None:
        enrichment.news = analyze_token_news(enrichment.news_intent.token, news_searcher, scorer)

    price_intent = find_intent(intents, IntentKind.PRICE_LOOKUP)
    if price_intent is not None:
        enrichment.market = market_fetcher.lookup(price_intent.token)

    return enrichment


def handle_chat_message(
    message: str,
    session: ConversationSession,
    llm: LLMProvider,
    market_fetcher: MarketDataFetcher,
    news_searcher: NewsSearcher,
    scorer: SentimentScorer,
    portfolio: dict[str, Any] | None = None,
) -> ChatTurnResult:
    """Answer a chat message with market and news data in context.

    Raises:
        UpstreamUnavailableError: If the LLM call fails
    """
    logger.info(f"Message received for session {session.session_id}: {message!r}")

    enrichment = gather_enrichment(message, market_fetcher, news_searcher, scorer, portfolio)
    llm_response = run_chat_turn(session, message, enrichment, llm)

    message_id = new_message_id()
    logger.info(f"Response {message_id} generated with model={llm_response.model}")

    return ChatTurnResult(
        response=llm_response.content,
        message_id=message_id,
        session_id=session.session_id,
    )
