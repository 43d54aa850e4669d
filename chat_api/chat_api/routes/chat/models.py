"""Request and response models for chat endpoints.

Field aliases keep the camelCase names the browser client sends.
"""

from pydantic import BaseModel, ConfigDict, Field

MAX_MESSAGE_LENGTH = 4000


# ============================================================================
# Portfolio snapshot (computed client-side)
# ============================================================================


class PortfolioAsset(BaseModel):
    """A single holding in the client's portfolio."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    amount: float
    price: float | None = None
    value: float
    change_24h: float = 0.0


class PortfolioSnapshot(BaseModel):
    """Portfolio totals and holdings sent along with a chat message."""

    model_config = ConfigDict(populate_by_name=True)

    total_value: float = Field(0.0, alias="totalValue")
    total_change: float = Field(0.0, alias="totalChange")
    asset_count: int = Field(0, alias="assetCount")
    total_tokens: float = Field(0.0, alias="totalTokens")
    assets: list[PortfolioAsset] = Field(default_factory=list)


# ============================================================================
# Chat
# ============================================================================


class ChatRequest(BaseModel):
    """Request model for POST /api/chat."""

    model_config = ConfigDict(populate_by_name=True)

    message: str = Field(..., min_length=1, max_length=MAX_MESSAGE_LENGTH)
    portfolio: PortfolioSnapshot | None = None
    session_id: str | None = Field(
        None,
        alias="sessionId",
        description="Conversation key; a new session is started when omitted",
    )


class ChatResponse(BaseModel):
    """Response model for POST /api/chat."""

    model_config = ConfigDict(populate_by_name=True)

    response: str
    message_id: str = Field(..., alias="messageId")
    session_id: str = Field(..., alias="sessionId")


# ============================================================================
# Feedback
# ============================================================================


class FeedbackRequest(BaseModel):
    """Request model for POST /api/feedback."""

    model_config = ConfigDict(populate_by_name=True)

    message_id: str = Field(..., alias="messageId")
    feedback: str


class FeedbackResponse(BaseModel):
    success: bool
