"""Protocol definitions for dependency injection."""

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from chat_api.core.news_api.newsapi import NewsApiArticle
    from chat_api.core.sentiment.scorer import SentimentScore


class NewsSearcher(Protocol):
    """Protocol for searching news articles."""

    @property
    def is_configured(self) -> bool:
        """True if the search credential is available."""
        ...

    def search_news(
        self, query: str, page_size: int = 10, sort_by: str = "publishedAt"
    ) -> list["NewsApiArticle"]:
        """Search news articles matching a query."""
        ...


class SentimentScorer(Protocol):
    """Protocol for scoring article sentiment."""

    def score(self, text: str) -> "SentimentScore":
        """Score the sentiment of a text."""
        ...

    def score_batch(self, texts: list[str]) -> list["SentimentScore"]:
        """Score sentiment for a batch of texts."""
        ...
