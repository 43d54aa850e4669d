"""News sentiment analysis module.

This module handles news sentiment for chat turns:
- Scores article text with a keyword lexicon (negation and phrase aware)
- Aggregates per-article scores with position-based recency weighting
- Renders a narrative summary for the LLM context
"""

# Aggregation
from chat_api.core.sentiment.aggregation import (
    aggregate_sentiment,
    compute_position_weight,
    compute_trend,
    sort_by_recency,
)

# Pipeline
from chat_api.core.sentiment.analyzer import analyze_token_news

# Models
from chat_api.core.sentiment.models import AggregatedSentiment, Article, NewsAnalysis

# Protocols
from chat_api.core.sentiment.protocols import NewsSearcher, SentimentScorer

# Scorer
from chat_api.core.sentiment.scorer import LexiconSentimentScorer, SentimentScore

# Summary
from chat_api.core.sentiment.summary import generate_sentiment_summary

__all__ = [
    "AggregatedSentiment",
    "Article",
    "LexiconSentimentScorer",
    "NewsAnalysis",
    "NewsSearcher",
    "SentimentScore",
    "SentimentScorer",
    "aggregate_sentiment",
    "analyze_token_news",
    "compute_position_weight",
    "compute_trend",
    "generate_sentiment_summary",
    "sort_by_recency",
]
