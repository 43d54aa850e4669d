"""Health check endpoints."""

from fastapi import APIRouter

from chat_api.core.config import is_llm_configured, is_news_api_configured

router = APIRouter()


@router.get("")
def health_check() -> dict:
    """Generic health check."""
    return {"status": "healthy"}


@router.get("/live")
def liveness() -> dict:
    """Liveness probe - is the process running?"""
    return {"status": "alive"}


@router.get("/ready")
def readiness() -> dict:
    """Readiness probe - is the service ready to accept traffic?

    Always ready; the checks report which optional credentials are present.
    Without a news key, news requests get an in-chat notice instead of analysis.
    """
    return {
        "status": "ready",
        "checks": {
            "llm_configured": is_llm_configured(),
            "news_api_configured": is_news_api_configured(),
        },
    }
