"""Sentiment aggregation logic."""

from __future__ import annotations

from datetime import UTC, datetime

from chat_api.core.sentiment.models import AggregatedSentiment, Article

# Weight of the most recent article and the per-position decay
TOP_WEIGHT = 1.0
WEIGHT_STEP = 0.1
MIN_WEIGHT = 0.2

# Aggregate label deadband on the weighted average
SENTIMENT_THRESHOLD = 0.2

# Trend needs at least this many articles
MIN_TREND_ARTICLES = 3
TREND_THRESHOLD = 1.0


def _recency_key(article: Article) -> tuple[bool, datetime]:
    published = article.published_at
    if published is None:
        return (False, datetime.min.replace(tzinfo=UTC))
    if published.tzinfo is None:
        published = published.replace(tzinfo=UTC)
    return (True, published)


def sort_by_recency(articles: list[Article]) -> list[Article]:
    """Return a copy sorted most recent first; undated articles go last."""
    return sorted(articles, key=_recency_key, reverse=True)


def compute_position_weight(position: int) -> float:
    """Compute recency weight for the article at a sorted position.

    The most recent article (position 0) weighs 1.0, each older one 0.1 less,
    never below 0.2.

    Args:
        position: 0-indexed position in most-recent-first order

    Returns:
        Weight in range [0.2, 1.0]
    """
    return max(TOP_WEIGHT - position * WEIGHT_STEP, MIN_WEIGHT)


def compute_trend(sorted_articles: list[Article]) -> str:
    """Compare the most recent third of articles against the oldest third.

    Args:
        sorted_articles: Articles in most-recent-first order

    Returns:
        "improving" if the recent mean raw score exceeds the oldest mean by
        more than 1, "deteriorating" if it trails by more than 1, otherwise
        "stable". Fewer than 3 articles is always "stable".
    """
    if len(sorted_articles) < MIN_TREND_ARTICLES:
        return "stable"

    third_size = max(1, len(sorted_articles) // 3)
    recent = sorted_articles[:third_size]
    oldest = sorted_articles[-third_size:]

    recent_avg = sum(a.sentiment.score for a in recent) / len(recent)
    oldest_avg = sum(a.sentiment.score for a in oldest) / len(oldest)

    difference = recent_avg - oldest_avg
    if difference > TREND_THRESHOLD:
        return "improving"
    if difference < -TREND_THRESHOLD:
        return "deteriorating"
    return "stable"


def aggregate_sentiment(articles: list[Article]) -> AggregatedSentiment:
    """Compute recency-weighted sentiment and trend for a set of articles.

    Args:
        articles: Scored articles in any order

    Returns:
        AggregatedSentiment; neutral/stable with zero strength when empty
    """
    if not articles:
        return AggregatedSentiment(score=0.0, sentiment="neutral", strength=0.0, trend="stable")

    sorted_articles = sort_by_recency(articles)

    total_weight = 0.0
    weighted_sum = 0.0
    for position, article in enumerate(sorted_articles):
        weight = compute_position_weight(position)
        weighted_sum += article.sentiment.score * weight
        total_weight += weight

    average = weighted_sum / total_weight if total_weight > 0 else 0.0

    if average > SENTIMENT_THRESHOLD:
        label = "positive"
    elif average < -SENTIMENT_THRESHOLD:
        label = "negative"
    else:
        label = "neutral"

    return AggregatedSentiment(
        score=average,
        sentiment=label,
        strength=abs(average),
        trend=compute_trend(sorted_articles),
    )
