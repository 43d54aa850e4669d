"""Data models for news sentiment module."""

from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from chat_api.core.sentiment.scorer import SentimentScore


@dataclass
class Article:
    """A news article with its keyword sentiment score."""

    title: str
    description: str
    source: str
    published_at: datetime | None  # May not be available
    url: str
    sentiment: "SentimentScore"

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "title": self.title,
            "description": self.description,
            "source": self.source,
            "published_at": self.published_at.isoformat() if self.published_at else None,
            "url": self.url,
            "sentiment": self.sentiment.to_dict(),
        }


@dataclass(frozen=True)
class AggregatedSentiment:
    """Recency-weighted sentiment across a set of articles."""

    score: float  # Weighted average of article scores
    sentiment: str  # "positive" / "negative" / "neutral" with a +/-0.2 deadband
    strength: float  # abs(score)
    trend: str  # "improving", "deteriorating" or "stable"

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "score": self.score,
            "sentiment": self.sentiment,
            "strength": self.strength,
            "trend": self.trend,
        }


@dataclass
class NewsAnalysis:
    """Full news sentiment analysis for one token query."""

    token: str
    sentiment: AggregatedSentiment
    article_count: int
    articles: list[Article]  # Most recent first
    summary: str

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "token": self.token,
            "sentiment": self.sentiment.to_dict(),
            "article_count": self.article_count,
            "articles": [a.to_dict() for a in self.articles],
            "summary": self.summary,
        }
