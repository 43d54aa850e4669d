"""NewsAPI client.

Searches recent articles through https://newsapi.org/v2/everything.
Requires NEWS_API_KEY; a free key is available from newsapi.org.
"""

import logging
from dataclasses import dataclass
from datetime import datetime

import requests

from chat_api.core.config import (
    get_http_timeout,
    get_news_api_base_url,
    get_news_api_key,
)
from chat_api.domain.exceptions import FetchError, NewsApiKeyMissingError

logger = logging.getLogger(__name__)


@dataclass
class NewsApiArticle:
    """A news article as returned by NewsAPI."""

    title: str
    description: str
    source: str
    published_at: datetime | None
    url: str


def _parse_published(value: object) -> datetime | None:
    if not value or not isinstance(value, str):
        return None
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        logger.warning(f"Unparseable publishedAt: {value!r}")
        return None


class NewsApiClient:
    """Client for the NewsAPI "everything" endpoint."""

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        timeout: float | None = None,
        language: str = "en",
    ):
        """Initialize the client.

        Args:
            api_key: NewsAPI key (defaults to env var)
            base_url: API root (defaults to env var or newsapi.org)
            timeout: Request timeout in seconds
            language: Article language filter
        """
        self.api_key = api_key if api_key is not None else get_news_api_key()
        self.base_url = base_url or get_news_api_base_url()
        self.timeout = timeout if timeout is not None else get_http_timeout()
        if self.timeout <= 0:
            raise ValueError(f"timeout must be positive, got {self.timeout}")
        self.language = language

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    def search_news(
        self, query: str, page_size: int = 10, sort_by: str = "publishedAt"
    ) -> list[NewsApiArticle]:
        """Search articles matching a query.

        Args:
            query: Free-text search query
            page_size: Maximum articles to return
            sort_by: NewsAPI sort order ("publishedAt", "relevancy", "popularity")

        Returns:
            List of NewsApiArticle, possibly empty

        Raises:
            NewsApiKeyMissingError: If no API key is configured
            FetchError: On transport, HTTP or JSON errors, or a body that is
                not a NewsAPI article listing
        """
        if not self.is_configured:
            raise NewsApiKeyMissingError()

        url = f"{self.base_url}/everything"
        params = {
            "q": query,
            "language": self.language,
            "sortBy": sort_by,
            "pageSize": page_size,
            "apiKey": self.api_key,
        }
        logger.info(f"Searching news at {url} for q={query!r} (API_KEY_HIDDEN)")

        try:
            response = requests.get(url, params=params, timeout=self.timeout)
            response.raise_for_status()
            data = response.json()
        except requests.HTTPError as e:
            logger.error(f"News API responded with status {e.response.status_code}")
            raise FetchError(
                f"News API error: {e.response.status_code}", service="newsapi", query=query
            ) from e
        except (requests.RequestException, ValueError) as e:
            logger.error(f"News API request failed: {type(e).__name__}")
            raise FetchError(f"News API request failed: {e}", service="newsapi", query=query) from e

        items = (data.get("articles") or []) if isinstance(data, dict) else None
        if not isinstance(items, list):
            logger.error(f"Unexpected News API response: {type(data).__name__}")
            raise FetchError("Unexpected News API response", service="newsapi", query=query)

        logger.info(f"Received news data: {data.get('totalResults', 0)} results")

        articles = []
        for item in items:
            if not isinstance(item, dict):
                logger.warning(f"Skipping malformed article: {item!r}")
                continue
            source = item.get("source")
            if not isinstance(source, dict):
                source = {}
            articles.append(
                NewsApiArticle(
                    title=str(item.get("title") or ""),
                    description=str(item.get("description") or ""),
                    source=str(source.get("name") or "Unknown"),
                    published_at=_parse_published(item.get("publishedAt")),
                    url=str(item.get("url") or ""),
                )
            )
        return articles
