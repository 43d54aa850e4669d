"""Keyword lexicons for crypto news sentiment.

Words are lower-case single tokens as produced by ``\\w+`` tokenization.
Hyphenated entries such as "sell-off" never match a token but still take
part in the negation patterns.
"""

POSITIVE_WORDS: frozenset[str] = frozenset(
    {
        "surge", "rise", "gain", "up", "high", "bullish", "growth", "positive",
        "increase", "rally", "soar", "climb", "jump", "spike", "breakthrough",
        "outperform", "beat", "exceed", "moon", "rocket", "adoption",
        "partnership", "launch", "success", "profit", "win", "recover",
        "support", "upgrade", "innovation", "potential", "opportunity",
        "milestone", "progress", "revolutionize", "disrupt", "mainstream",
        "institutional", "hodl", "hold", "buy", "accumulate",
    }
)

NEGATIVE_WORDS: frozenset[str] = frozenset(
    {
        "drop", "fall", "down", "low", "bearish", "decline", "negative",
        "decrease", "crash", "risk", "plunge", "tumble", "sink", "slide",
        "slump", "dip", "correction", "sell-off", "dump", "panic", "fear",
        "uncertain", "concern", "worry", "warning", "threat", "problem",
        "issue", "trouble", "scam", "hack", "fraud", "attack", "vulnerability",
        "regulation", "ban", "restrict", "illegal", "fine", "penalty",
        "investigation", "litigation", "lawsuit", "short", "sell",
    }
)

# Substring phrases and their score adjustments. Each phrase fires on its own,
# so "ath" and "all time high" in the same text add +4 together.
PHRASE_BONUSES: tuple[tuple[str, int], ...] = (
    ("all time high", 2),
    ("ath", 2),
    ("all time low", -2),
    ("atl", -2),
    ("to the moon", 2),
    ("massive gain", 2),
    ("massive drop", -2),
    ("massive loss", -2),
)

NEGATORS: tuple[str, ...] = ("not", "no", "n't", "never", "without")

# A negated lexicon hit swings the score by 2: cancel the +/-1, add the opposite.
NEGATION_WEIGHT = 2
