"""News API clients for fetching crypto news."""

from chat_api.core.news_api.newsapi import NewsApiArticle, NewsApiClient

__all__ = ["NewsApiArticle", "NewsApiClient"]
