"""FastAPI application entrypoint."""

import logging
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI

from chat_api.core.config import get_log_level, is_news_api_configured
from chat_api.routes import chat, health, market, root

load_dotenv()

logging.basicConfig(
    level=get_log_level(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI):
    if not is_news_api_configured():
        logger.warning("NEWS_API_KEY not found in environment variables")
        logger.warning("News analysis will not work until an API key is configured")
        logger.warning("Get a free API key from https://newsapi.org/ and add it to your .env file")
    yield


app = FastAPI(
    title="Chat API",
    description="DeFi chat assistant with live market data and news sentiment",
    version="0.1.0",
    lifespan=lifespan,
)

app.include_router(root.router)
app.include_router(health.router, prefix="/health", tags=["health"])
app.include_router(chat.router, prefix="/api", tags=["chat"])
app.include_router(market.router, prefix="/api", tags=["market"])
