"""Chat and feedback route handlers."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException

from chat_api.core.chat import SessionStore, handle_chat_message
from chat_api.core.feedback import FeedbackStore
from chat_api.core.llm import LLMProvider
from chat_api.core.market_data import MarketDataFetcher
from chat_api.core.sentiment import NewsSearcher, SentimentScorer
from chat_api.domain.exceptions import UpstreamUnavailableError
from chat_api.routes.chat.models import (
    ChatRequest,
    ChatResponse,
    FeedbackRequest,
    FeedbackResponse,
)
from chat_api.routes.dependencies import (
    get_feedback,
    get_llm,
    get_market_fetcher,
    get_news_searcher,
    get_sentiment_scorer,
    get_sessions,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/chat", response_model=ChatResponse)
def chat(
    request: ChatRequest,
    llm: Annotated[LLMProvider, Depends(get_llm)],
    market_fetcher: Annotated[MarketDataFetcher, Depends(get_market_fetcher)],
    news_searcher: Annotated[NewsSearcher, Depends(get_news_searcher)],
    scorer: Annotated[SentimentScorer, Depends(get_sentiment_scorer)],
    sessions: Annotated[SessionStore, Depends(get_sessions)],
) -> ChatResponse:
    """Answer a chat message.

    This endpoint:
    1. Detects price, trading-advice and news-search intents in the message
    2. Fetches token prices and analyzes recent news as needed
    3. Adds that data (and the client's portfolio) to the conversation for
       one LLM call only
    4. Keeps the user message and the answer in the session history

    Raises:
        HTTPException: 503 if the LLM call fails
    """
    session = sessions.get(request.session_id)
    portfolio = request.portfolio.model_dump() if request.portfolio else None

    try:
        result = handle_chat_message(
            message=request.message,
            session=session,
            llm=llm,
            market_fetcher=market_fetcher,
            news_searcher=news_searcher,
            scorer=scorer,
            portfolio=portfolio,
        )
    except UpstreamUnavailableError as e:
        raise HTTPException(status_code=503, detail=str(e)) from e

    return ChatResponse(
        response=result.response,
        message_id=result.message_id,
        session_id=result.session_id,
    )


@router.post("/feedback", response_model=FeedbackResponse)
def submit_feedback(
    request: FeedbackRequest,
    store: Annotated[FeedbackStore, Depends(get_feedback)],
) -> FeedbackResponse:
    """Record thumbs-up/down style feedback for an assistant message."""
    store.add(request.message_id, request.feedback)
    return FeedbackResponse(success=True)
