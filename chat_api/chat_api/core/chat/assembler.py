"""Conversation context assembly around a single LLM call.

A chat turn moves a session through IDLE -> ENRICHING -> INVOKING ->
SETTLING -> IDLE. Ephemeral system entries (market data, portfolio, news)
exist only while the LLM is being called; afterwards the session holds the
persona plus durable user/assistant pairs, whether or not the call succeeded.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from chat_api.core.chat.prompts import (
    render_market_data,
    render_news_analysis,
    render_news_unavailable,
)
from chat_api.core.chat.session import ChatPhase, ConversationSession
from chat_api.domain.exceptions import UpstreamUnavailableError

if TYPE_CHECKING:
    from chat_api.core.intents import Intent
    from chat_api.core.llm import LLMProvider, LLMResponse
    from chat_api.core.market_data import MarketSnapshot
    from chat_api.core.sentiment import NewsAnalysis

logger = logging.getLogger(__name__)


@dataclass
class ContextEnrichment:
    """Data gathered for one turn, before it is rendered into the context."""

    market: MarketSnapshot | None = None
    portfolio_context: str | None = None
    news: NewsAnalysis | None = None
    news_intent: Intent | None = None  # Set when the message asked for news
    news_configured: bool = True

    @property
    def news_unavailable(self) -> bool:
        """News was asked for but cannot be fetched for lack of a credential."""
        return self.news is None and self.news_intent is not None and not self.news_configured


def build_ephemeral_entries(enrichment: ContextEnrichment) -> list[dict[str, str]]:
    """Render the system entries for a turn in fixed order.

    Market data, then portfolio, then news analysis (or the missing
    credential notice in its place).
    """
    entries = []
    if enrichment.market is not None:
        entries.append({"role": "system", "content": render_market_data(enrichment.market)})
    if enrichment.portfolio_context:
        entries.append({"role": "system", "content": enrichment.portfolio_context})
    if enrichment.news is not None:
        entries.append(
            {
                "role": "system",
                "content": render_news_analysis(enrichment.news, enrichment.news_intent),
            }
        )
    elif enrichment.news_unavailable:
        entries.append(
            {"role": "system", "content": render_news_unavailable(enrichment.news_intent.token)}
        )
    return entries


def _set_phase(session: ConversationSession, phase: ChatPhase) -> None:
    session.phase = phase
    logger.debug(f"Session {session.session_id}: {phase.value}")


def _enrich(
    session: ConversationSession, message: str, entries: list[dict[str, Any]]
) -> int:
    _set_phase(session, ChatPhase.ENRICHING)
    for entry in entries:
        session.messages.append(entry)
    session.messages.append({"role": "user", "content": message})
    if entries:
        logger.info(f"Session {session.session_id}: added {len(entries)} ephemeral entries")
    return len(entries) + 1


def _settle(session: ConversationSession, pushed: int) -> None:
    _set_phase(session, ChatPhase.SETTLING)
    for _ in range(pushed):
        session.messages.pop()


def run_chat_turn(
    session: ConversationSession,
    message: str,
    enrichment: ContextEnrichment,
    llm: LLMProvider,
) -> LLMResponse:
    """Run one chat turn against a session.

    Args:
        session: Conversation to extend
        message: The user's message
        enrichment: Market, portfolio and news data for this turn
        llm: Chat-completion provider

    Returns:
        The LLM response. The session gains exactly the user and assistant
        messages.

    Raises:
        UpstreamUnavailableError: If the LLM call fails. The session is left
            exactly as it was before the turn.
    """
    entries = build_ephemeral_entries(enrichment)

    with session.lock:
        pushed = _enrich(session, message, entries)
        try:
            _set_phase(session, ChatPhase.INVOKING)
            response = llm.complete(list(session.messages))
        except Exception as e:
            logger.error(f"LLM call failed: {e}")
            raise UpstreamUnavailableError(f"LLM service unavailable: {e}") from e
        finally:
            _settle(session, pushed)
            _set_phase(session, ChatPhase.IDLE)

        session.messages.append({"role": "user", "content": message})
        session.messages.append({"role": "assistant", "content": response.content})
        session.trim_history()

    return response
