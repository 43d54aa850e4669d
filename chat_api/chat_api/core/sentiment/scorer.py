"""Lexicon-based sentiment scorer.

Usage:
    scorer = LexiconSentimentScorer()
    result = scorer.score("Bitcoin hits all time high as adoption grows")
    result.score      # 5
    result.sentiment  # "positive"
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any

from chat_api.core.sentiment.lexicon import (
    NEGATION_WEIGHT,
    NEGATIVE_WORDS,
    NEGATORS,
    PHRASE_BONUSES,
    POSITIVE_WORDS,
)

WORD_PATTERN = re.compile(r"\b(\w+)\b")


def label_for_score(score: float) -> str:
    """Map a raw per-text score to a label (strict > 0 / < 0)."""
    if score > 0:
        return "positive"
    if score < 0:
        return "negative"
    return "neutral"


@dataclass(frozen=True)
class SentimentScore:
    """Sentiment of a single text span.

    Attributes:
        score: Net keyword score (lexicon hits, phrase bonuses, negation)
        sentiment: "positive", "negative" or "neutral", derived from score
        positive_matches: Distinct positive lexicon words found
        negative_matches: Distinct negative lexicon words found
    """

    score: int
    sentiment: str
    positive_matches: frozenset[str] = field(default_factory=frozenset)
    negative_matches: frozenset[str] = field(default_factory=frozenset)

    @classmethod
    def neutral(cls) -> SentimentScore:
        return cls(score=0, sentiment="neutral")

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "score": self.score,
            "sentiment": self.sentiment,
            "positive_matches": sorted(self.positive_matches),
            "negative_matches": sorted(self.negative_matches),
        }


def _negation_pattern(negator: str, words: frozenset[str]) -> re.Pattern[str]:
    alternation = "|".join(re.escape(word) for word in sorted(words))
    return re.compile(rf"{re.escape(negator)} \w+ ({alternation})", re.IGNORECASE)


class LexiconSentimentScorer:
    """Deterministic keyword scorer with phrase bonuses and negation handling.

    Each token scores +1 if it is a positive word and -1 if it is a negative
    word; a token in both lexicons counts both ways. Phrase bonuses are plain
    substring checks and stack with the token score.
    """

    def __init__(
        self,
        positive_words: frozenset[str] = POSITIVE_WORDS,
        negative_words: frozenset[str] = NEGATIVE_WORDS,
    ):
        self.positive_words = positive_words
        self.negative_words = negative_words
        self._negations = [
            (
                _negation_pattern(negator, positive_words),
                _negation_pattern(negator, negative_words),
            )
            for negator in NEGATORS
        ]

    def score(self, text: str) -> SentimentScore:
        """Score the sentiment of a text."""
        if not text:
            return SentimentScore.neutral()

        lower_text = text.lower()
        score = 0
        pos_matches: set[str] = set()
        neg_matches: set[str] = set()

        for word in WORD_PATTERN.findall(lower_text):
            if word in self.positive_words:
                score += 1
                pos_matches.add(word)
            if word in self.negative_words:
                score -= 1
                neg_matches.add(word)

        for phrase, bonus in PHRASE_BONUSES:
            if phrase in lower_text:
                score += bonus

        for positive_pattern, negative_pattern in self._negations:
            score -= len(positive_pattern.findall(lower_text)) * NEGATION_WEIGHT
            score += len(negative_pattern.findall(lower_text)) * NEGATION_WEIGHT

        return SentimentScore(
            score=score,
            sentiment=label_for_score(score),
            positive_matches=frozenset(pos_matches),
            negative_matches=frozenset(neg_matches),
        )

    def score_batch(self, texts: list[str]) -> list[SentimentScore]:
        """Score sentiment for a batch of texts."""
        return [self.score(text) for text in texts]
