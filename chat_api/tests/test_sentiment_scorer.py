"""Tests for the lexicon sentiment scorer."""

from chat_api.core.sentiment import LexiconSentimentScorer, SentimentScore
from chat_api.core.sentiment.lexicon import NEGATIVE_WORDS, POSITIVE_WORDS

scorer = LexiconSentimentScorer()


class TestBasicScoring:
    def test_empty_text_is_neutral(self):
        result = scorer.score("")
        assert result.score == 0
        assert result.sentiment == "neutral"
        assert result.positive_matches == frozenset()
        assert result.negative_matches == frozenset()

    def test_positive_words_count_one_each(self):
        """Only positive words, no negation or phrases: score equals word count."""
        result = scorer.score("surge rally profit")
        assert result.score == 3
        assert result.sentiment == "positive"
        assert result.positive_matches == {"surge", "rally", "profit"}

    def test_negative_words_count_minus_one_each(self):
        result = scorer.score("Exchange hack sparks panic")
        assert result.score == -2
        assert result.sentiment == "negative"
        assert result.negative_matches == {"hack", "panic"}

    def test_case_insensitive(self):
        assert scorer.score("BULLISH Rally").score == 2

    def test_matches_are_deduplicated(self):
        result = scorer.score("gain gain gain")
        assert result.score == 3
        assert result.positive_matches == {"gain"}

    def test_unknown_words_are_neutral(self):
        result = scorer.score("Developers publish quarterly report")
        assert result.score == 0
        assert result.sentiment == "neutral"

    def test_word_in_both_lexicons_counts_both_ways(self):
        overlapping = LexiconSentimentScorer(
            positive_words=frozenset({"hold"}),
            negative_words=frozenset({"hold"}),
        )
        result = overlapping.score("hold")
        assert result.score == 0
        assert result.positive_matches == {"hold"}
        assert result.negative_matches == {"hold"}

    def test_builtin_lexicons_are_disjoint(self):
        assert POSITIVE_WORDS.isdisjoint(NEGATIVE_WORDS)


class TestPhraseBonuses:
    def test_all_time_high(self):
        # "high" +1, phrase +2
        assert scorer.score("all time high").score == 3

    def test_ath_and_all_time_high_stack(self):
        # "high" +1, "all time high" +2, "ath" +2
        assert scorer.score("ath all time high").score == 5

    def test_to_the_moon(self):
        # "moon" +1, phrase +2
        assert scorer.score("to the moon").score == 3

    def test_massive_loss(self):
        result = scorer.score("massive loss")
        assert result.score == -2
        assert result.sentiment == "negative"

    def test_massive_drop(self):
        # "drop" -1, phrase -2
        assert scorer.score("massive drop").score == -3


class TestNegation:
    def test_negation_inverts_positive(self):
        plain = scorer.score("really gain").score
        negated = scorer.score("not really gain").score
        assert plain == 1
        assert negated == -1
        assert negated <= plain - 1

    def test_negation_inverts_negative(self):
        result = scorer.score("never really crash")
        assert result.score == 1
        assert result.sentiment == "positive"

    def test_contraction_negation(self):
        # "bullish" +1, "n't look bullish" -2
        assert scorer.score("Analyst doesn't look bullish").score == -1

    def test_negation_needs_one_word_between(self):
        # "not gain" has no intervening word, so only the lexicon hit counts
        assert scorer.score("not gain").score == 1


class TestSerialization:
    def test_to_dict_sorts_matches(self):
        result = scorer.score("rally surge crash")
        data = result.to_dict()
        assert data["score"] == 1
        assert data["sentiment"] == "positive"
        assert data["positive_matches"] == ["rally", "surge"]
        assert data["negative_matches"] == ["crash"]

    def test_score_batch(self):
        results = scorer.score_batch(["gain", "crash", ""])
        assert [r.score for r in results] == [1, -1, 0]
        assert results[2] == SentimentScore.neutral()
