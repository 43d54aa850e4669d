"""Chat endpoints: conversation turns and message feedback."""

from chat_api.routes.chat.endpoints import router
from chat_api.routes.chat.models import (
    ChatRequest,
    ChatResponse,
    FeedbackRequest,
    FeedbackResponse,
    PortfolioAsset,
    PortfolioSnapshot,
)

__all__ = [
    "router",
    "ChatRequest",
    "ChatResponse",
    "FeedbackRequest",
    "FeedbackResponse",
    "PortfolioAsset",
    "PortfolioSnapshot",
]
