"""Conversation handling: sessions, context assembly and the chat pipeline."""

from chat_api.core.chat.assembler import (
    ContextEnrichment,
    build_ephemeral_entries,
    run_chat_turn,
)
from chat_api.core.chat.pipeline import (
    ChatTurnResult,
    gather_enrichment,
    handle_chat_message,
)
from chat_api.core.chat.portfolio import format_portfolio_context
from chat_api.core.chat.session import (
    ChatPhase,
    ConversationSession,
    SessionStore,
    get_session_store,
)

__all__ = [
    "ChatPhase",
    "ChatTurnResult",
    "ContextEnrichment",
    "ConversationSession",
    "SessionStore",
    "build_ephemeral_entries",
    "format_portfolio_context",
    "gather_enrichment",
    "get_session_store",
    "handle_chat_message",
    "run_chat_turn",
]
