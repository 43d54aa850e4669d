"""Narrative summary of an aggregated news sentiment result."""

from datetime import datetime

from chat_api.core.sentiment.aggregation import sort_by_recency
from chat_api.core.sentiment.models import AggregatedSentiment, Article

MIXED_STRENGTH = 0.3
STRONG_STRENGTH = 0.6
KEY_POINT_MIN_SCORE = 1
MAX_KEY_POINTS = 5

DISCLAIMER = (
    "Note: This sentiment analysis is based on recent news and should not be "
    "considered financial advice."
)


def format_article_date(published: datetime | None) -> str:
    """Format a publication time in local time, e.g. "Jan 5, 02:30 PM"."""
    if published is None:
        return "unknown date"
    local = published.astimezone()
    return f"{local:%b} {local.day}, {local:%I:%M %p}"


def _outlook(aggregated: AggregatedSentiment) -> tuple[str, str]:
    """Return (sentiment line, price outlook) for the aggregate."""
    strength = aggregated.strength
    confidence = f"{strength * 100:.1f}% confidence"

    if strength < MIXED_STRENGTH:
        return (
            "The market sentiment is mixed with no clear direction.",
            "The token price may remain relatively stable in the short term due to balanced sentiment.",
        )
    if aggregated.sentiment == "positive":
        if strength > STRONG_STRENGTH:
            return (
                f"The market sentiment is strongly positive ({confidence}).",
                "This highly positive sentiment could potentially drive price increases in the short term.",
            )
        return (
            f"The market sentiment is moderately positive ({confidence}).",
            "This positive sentiment may contribute to gradual price appreciation.",
        )
    if aggregated.sentiment == "negative":
        if strength > STRONG_STRENGTH:
            return (
                f"The market sentiment is strongly negative ({confidence}).",
                "This highly negative sentiment could potentially lead to price decreases in the short term.",
            )
        return (
            f"The market sentiment is moderately negative ({confidence}).",
            "This negative sentiment may contribute to gradual price depreciation.",
        )
    return ("", "")


def _trend_analysis(aggregated: AggregatedSentiment) -> str:
    if aggregated.trend == "improving":
        text = "The sentiment trend is improving, with more recent news being more positive than older articles."
        if aggregated.sentiment == "negative":
            return text + " This could indicate a potential recovery or reversal of negative sentiment."
        return text + " This reinforces the positive outlook."
    if aggregated.trend == "deteriorating":
        text = "The sentiment trend is deteriorating, with more recent news being more negative than older articles."
        if aggregated.sentiment == "positive":
            return text + " This might indicate a weakening of the previously positive outlook."
        return text + " This reinforces the negative outlook."
    return "The sentiment trend is stable with no significant changes between recent and older articles."


def key_points(articles: list[Article]) -> list[str]:
    """Render up to five strongly scored articles, most recent first."""
    points = []
    for article in sort_by_recency(articles):
        if abs(article.sentiment.score) > KEY_POINT_MIN_SCORE:
            date_str = format_article_date(article.published_at)
            points.append(f"- [{date_str}] {article.title} (Source: {article.source})")
        if len(points) == MAX_KEY_POINTS:
            break
    return points


def generate_sentiment_summary(
    aggregated: AggregatedSentiment, articles: list[Article]
) -> str:
    """Generate the human-readable news analysis injected into the chat context.

    Args:
        aggregated: Output of aggregate_sentiment for the articles
        articles: The scored articles (any order)

    Returns:
        Multi-line summary ending with a financial-advice disclaimer
    """
    sentiment_line, price_outlook = _outlook(aggregated)

    summary = "Recent News Analysis:\n"
    if sentiment_line:
        summary += sentiment_line + "\n"
    summary += price_outlook + "\n\n" + _trend_analysis(aggregated) + "\n\n"

    points = key_points(articles)
    if points:
        summary += "Key recent developments:\n" + "\n".join(points)

    summary += "\n\n" + DISCLAIMER
    return summary
