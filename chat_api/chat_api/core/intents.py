"""Intent detection for chat messages.

Messages are matched against a small set of regular expressions; each
recognized intent carries the token phrase it refers to. Several intents can
fire on the same message.
"""

import re
from dataclasses import dataclass
from enum import Enum


class IntentKind(str, Enum):
    TRADING_ADVICE = "trading_advice"
    NEWS_SEARCH = "news_search"
    PRICE_LOOKUP = "price_lookup"


@dataclass(frozen=True)
class Intent:
    """A recognized request and the token phrase it is about."""

    kind: IntentKind
    token: str


# The quantity word is optional so "should I buy dogecoin" is recognized too,
# but a quantity word with no token after it is never the token.
TRADING_ADVICE_PATTERN = re.compile(
    r"(?:should|would|do you think) (?:i|you) (?:buy|sell|invest in|trade) "
    r"(?:(?:more|some|any) )?(?!(?:more|some|any)\b(?!\s+[a-z]))([a-zA-Z\s]+)"
)

NEWS_SEARCH_PATTERN = re.compile(
    r"(?:google\s*search|look\s*up|search\s*for|research|check|find|news\s*about|information\s*about)"
    r"\s+(?:about\s+|info\s+|information\s+|news\s+|)(?:on\s+|about\s+|for\s+|)([a-zA-Z0-9\s]+)",
    re.IGNORECASE,
)

PRICE_LOOKUP_PATTERN = re.compile(r"price (?:of |for )?([a-zA-Z\s]+)")

_PATTERNS: tuple[tuple[IntentKind, re.Pattern[str]], ...] = (
    (IntentKind.TRADING_ADVICE, TRADING_ADVICE_PATTERN),
    (IntentKind.NEWS_SEARCH, NEWS_SEARCH_PATTERN),
    (IntentKind.PRICE_LOOKUP, PRICE_LOOKUP_PATTERN),
)

NEWS_INTENTS = (IntentKind.TRADING_ADVICE, IntentKind.NEWS_SEARCH)


def classify_message(message: str) -> list[Intent]:
    """Classify a message into zero or more intents.

    Args:
        message: Raw user message

    Returns:
        Intents in fixed order: trading advice, news search, price lookup.
        A pattern whose token phrase is blank is treated as not matching.
    """
    if not message:
        return []

    lower_message = message.lower()
    intents = []
    for kind, pattern in _PATTERNS:
        match = pattern.search(lower_message)
        if match is None:
            continue
        token = match.group(1).strip()
        if token:
            intents.append(Intent(kind=kind, token=token))
    return intents


def find_intent(intents: list[Intent], kind: IntentKind) -> Intent | None:
    return next((intent for intent in intents if intent.kind == kind), None)


def news_intent(intents: list[Intent]) -> Intent | None:
    """Pick the intent whose token drives news analysis.

    Trading advice takes precedence over an explicit news search.
    """
    for kind in NEWS_INTENTS:
        intent = find_intent(intents, kind)
        if intent is not None:
            return intent
    return None
