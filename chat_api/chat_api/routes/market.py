"""Market data endpoints backed by CoinGecko."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel

from chat_api.core.market_data import CoinGeckoClient
from chat_api.domain.exceptions import FetchError
from chat_api.routes.dependencies import get_coingecko_client

logger = logging.getLogger(__name__)

router = APIRouter()

TOP_TOKENS_LIMIT = 5
AVAILABLE_TOKENS_LIMIT = 100
DEFAULT_PRICE_TOKENS = "bitcoin,ethereum"


class TopTokenResponse(BaseModel):
    symbol: str
    price: float | None
    change_24h: float | None
    fdv: float | None


class TokenInfoResponse(BaseModel):
    id: str
    symbol: str
    name: str
    market_cap_rank: int | None = None


@router.get("/top-tokens", response_model=list[TopTokenResponse])
def top_tokens(
    client: Annotated[CoinGeckoClient, Depends(get_coingecko_client)],
) -> list[TopTokenResponse]:
    """Top tokens by 24h price change."""
    try:
        data = client.markets(
            order="price_change_percentage_24h_desc",
            per_page=TOP_TOKENS_LIMIT,
            price_change_percentage="24h",
        )
    except FetchError as e:
        raise HTTPException(status_code=500, detail="Failed to fetch top tokens") from e

    return [
        TopTokenResponse(
            symbol=token["symbol"].upper(),
            price=token.get("current_price"),
            change_24h=token.get("price_change_percentage_24h"),
            fdv=token.get("fully_diluted_valuation"),
        )
        for token in data
    ]


@router.get("/market-prices")
def market_prices(
    client: Annotated[CoinGeckoClient, Depends(get_coingecko_client)],
    tokens: str = Query(DEFAULT_PRICE_TOKENS, description="Comma-separated token ids"),
) -> dict:
    """USD price and 24h change for the given token ids."""
    token_ids = [t.strip() for t in tokens.split(",") if t.strip()]
    try:
        return client.simple_price(token_ids)
    except FetchError as e:
        raise HTTPException(status_code=500, detail="Failed to fetch market prices") from e


@router.get("/available-tokens", response_model=list[TokenInfoResponse])
def available_tokens(
    client: Annotated[CoinGeckoClient, Depends(get_coingecko_client)],
) -> list[TokenInfoResponse]:
    """Top tokens by market cap, for the client's token picker."""
    try:
        data = client.markets(order="market_cap_desc", per_page=AVAILABLE_TOKENS_LIMIT)
    except FetchError as e:
        raise HTTPException(status_code=500, detail="Failed to fetch available tokens") from e

    return [
        TokenInfoResponse(
            id=token["id"],
            symbol=token["symbol"].upper(),
            name=token["name"],
            market_cap_rank=token.get("market_cap_rank"),
        )
        for token in data
    ]


@router.get("/search-tokens", response_model=list[TokenInfoResponse])
def search_tokens(
    client: Annotated[CoinGeckoClient, Depends(get_coingecko_client)],
    query: str | None = None,
) -> list[TokenInfoResponse]:
    """Search tokens by name or symbol."""
    if not query:
        raise HTTPException(status_code=400, detail="Query parameter is required")

    try:
        coins = client.search(query)
    except FetchError as e:
        raise HTTPException(status_code=500, detail="Failed to search tokens") from e

    return [
        TokenInfoResponse(id=coin["id"], symbol=coin["symbol"].upper(), name=coin["name"])
        for coin in coins
    ]
