"""News analysis pipeline: search, score, aggregate, summarize."""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING

from chat_api.core.sentiment.aggregation import aggregate_sentiment, sort_by_recency
from chat_api.core.sentiment.models import Article, NewsAnalysis
from chat_api.core.sentiment.summary import generate_sentiment_summary
from chat_api.domain.exceptions import ExternalServiceError

if TYPE_CHECKING:
    from chat_api.core.sentiment.protocols import NewsSearcher, SentimentScorer

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 10


def analyze_token_news(
    token_query: str,
    searcher: NewsSearcher,
    scorer: SentimentScorer,
    page_size: int = DEFAULT_PAGE_SIZE,
) -> NewsAnalysis | None:
    """Fetch and analyze recent news for a token.

    Args:
        token_query: Token name as extracted from the user message
        searcher: NewsSearcher implementation
        scorer: SentimentScorer implementation
        page_size: Maximum articles to fetch

    Returns:
        NewsAnalysis, or None if no articles were found or the search failed
    """
    logger.info(f"Starting news analysis for token: {token_query}")

    try:
        raw_articles = searcher.search_news(
            f"{token_query} cryptocurrency", page_size=page_size, sort_by="publishedAt"
        )
    except ExternalServiceError as e:
        logger.error(f"Error analyzing news for {token_query}: {e}")
        return None

    if not raw_articles:
        logger.warning(f"No articles found for query: {token_query}")
        return None

    texts = [f"{raw.title} {raw.description}" for raw in raw_articles]
    scores = scorer.score_batch(texts)

    articles = [
        Article(
            title=raw.title,
            description=raw.description,
            source=raw.source,
            published_at=raw.published_at,
            url=raw.url,
            sentiment=sentiment,
        )
        for raw, sentiment in zip(raw_articles, scores, strict=True)
    ]

    for i, article in enumerate(articles, start=1):
        logger.debug(
            f"Article {i} sentiment: {article.sentiment.sentiment} "
            f"(score: {article.sentiment.score}) - {article.title[:50]}"
        )

    aggregated = aggregate_sentiment(articles)
    logger.info(
        f"Overall sentiment for {token_query}: {aggregated.sentiment} "
        f"(score: {aggregated.score:.3f}, trend: {aggregated.trend})"
    )

    analysis = NewsAnalysis(
        token=token_query,
        sentiment=aggregated,
        article_count=len(articles),
        articles=sort_by_recency(articles),
        summary=generate_sentiment_summary(aggregated, articles),
    )
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug(f"News analysis for {token_query}: {json.dumps(analysis.to_dict())}")
    return analysis
