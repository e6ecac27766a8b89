from math import exp, log

import pytest

from postag import (
    START_TAG,
    STOP_TAG,
    LocalContext,
    MostFrequentTagScorer,
    TrigramHMMScorer,
    extract_labeled_contexts,
    make_scorer,
)
from postag.scorers import deleted_interpolation


def training_contexts(sentences):
    return [c for sentence in sentences for c in extract_labeled_contexts(sentence)]


def probability_mass(scores: dict[str, float]) -> float:
    return sum(exp(score) for score in scores.values())


def unknown_contexts():
    return [
        LocalContext(("zyzzyva",), 0, START_TAG, START_TAG),
        LocalContext(("the", "zyzzyva"), 1, "DT", START_TAG),
        LocalContext(("the", "dog", "zyzzyva"), 2, "NN", "DT"),
    ]


class TestMostFrequentTagScorer:
    def test_known_word_distribution(self, ambiguous_corpus):
        """
        Test that the scores for a known word are the log of the relative frequency
        of each tag for that word, and sum to 1.
        """
        scorer = MostFrequentTagScorer()
        scorer.train(training_contexts(ambiguous_corpus))

        scores = scorer.log_scores(LocalContext(("runs",), 0, START_TAG, START_TAG))
        assert scores == pytest.approx({"VB": log(0.5), "NN": log(0.5)})
        assert probability_mass(scores) == pytest.approx(1.0)

    def test_unknown_word_distribution(self, ambiguous_corpus):
        """
        Test that an unknown word is scored with the distribution of tags over the
        first occurrence of each word type.
        """
        scorer = MostFrequentTagScorer()
        scorer.train(training_contexts(ambiguous_corpus))

        scores = scorer.log_scores(LocalContext(("zyzzyva",), 0, START_TAG, START_TAG))
        # the -> DT, dog -> NN, runs -> VB, </S> -> </S>
        assert scores == pytest.approx(
            {"DT": log(0.25), "NN": log(0.25), "VB": log(0.25), STOP_TAG: log(0.25)}
        )

    def test_restrict_trigrams(self, ambiguous_corpus):
        """
        Test that tags forming an unseen trigram are removed.
        """
        scorer = MostFrequentTagScorer(restrict_trigrams=True)
        scorer.train(training_contexts(ambiguous_corpus))

        scores = scorer.log_scores(LocalContext(("the", "dog", "runs"), 2, "NN", "DT"))
        assert set(scores) == {"VB"}

    def test_restrict_trigrams_fallback(self, ambiguous_corpus):
        """
        Test that if no candidate forms a seen trigram, no candidates are removed.
        """
        scorer = MostFrequentTagScorer(restrict_trigrams=True)
        scorer.train(training_contexts(ambiguous_corpus))

        scores = scorer.log_scores(LocalContext(("runs",), 0, "VB", "VB"))
        assert set(scores) == {"VB", "NN"}

    def test_allowed_following_tags(self, ambiguous_corpus):
        scorer = MostFrequentTagScorer()
        scorer.train(training_contexts(ambiguous_corpus))

        assert scorer.allowed_following_tags({"NN", "VB"}, START_TAG, "DT") == {"NN"}

    def test_retrain_discards_previous(self, ambiguous_corpus, corpus):
        scorer = MostFrequentTagScorer()
        scorer.train(training_contexts(corpus))
        scorer.train(training_contexts(ambiguous_corpus))

        assert "cat" not in scorer.words_to_tags

    def test_untrained(self):
        scorer = MostFrequentTagScorer()
        assert scorer.log_scores(LocalContext(("the",), 0, START_TAG, START_TAG)) == {}


class TestTrigramHMMScorer:
    @pytest.mark.parametrize("restrict_trigrams", [False, True])
    def test_probability_mass_at_most_one(self, corpus, restrict_trigrams):
        """
        Test that the scores for every training context and some unknown word
        contexts are valid log probabilities.
        """
        scorer = TrigramHMMScorer(restrict_trigrams=restrict_trigrams)
        contexts = training_contexts(corpus)
        scorer.train(contexts)

        for context in contexts + unknown_contexts():
            scores = scorer.log_scores(context)
            assert scores
            assert probability_mass(scores) <= 1.0 + 1e-9

    def test_known_word_score(self, ambiguous_corpus):
        """
        Test the score of a known word with only the unigram transition.

        There are 9 tags in training: DT x2, NN x2, VB x1 and </S> x4.
        """
        scorer = TrigramHMMScorer(lambda1=0.0, lambda2=0.0, estimate_lambdas=False)
        scorer.train(training_contexts(ambiguous_corpus))

        scores = scorer.log_scores(LocalContext(("the",), 0, START_TAG, START_TAG))
        # P(DT) * P(the|DT) = 2/9 * 1
        assert scores == pytest.approx({"DT": log(2 / 9)})

    def test_unknown_word_score(self, ambiguous_corpus):
        """
        Test the score of an unknown word with only the unigram transition.

        P(tag) * P(unknown|tag) = P(tag|unknown) * P(unknown), where P(unknown) is
        4 word types over 9 tokens, and each of the 4 tags is the first tag of one
        word type.
        """
        scorer = TrigramHMMScorer(lambda1=0.0, lambda2=0.0, estimate_lambdas=False)
        scorer.train(training_contexts(ambiguous_corpus))

        scores = scorer.log_scores(LocalContext(("zyzzyva",), 0, START_TAG, START_TAG))
        expected = log(0.25 * 4 / 9)
        assert scores == pytest.approx(
            {"DT": expected, "NN": expected, "VB": expected, STOP_TAG: expected}
        )

    def test_restrict_trigrams_negative_infinity(self, ambiguous_corpus):
        """
        Test that a disallowed tag is kept with a score of -inf, not removed.
        """
        scorer = TrigramHMMScorer(restrict_trigrams=True)
        scorer.train(training_contexts(ambiguous_corpus))

        scores = scorer.log_scores(LocalContext(("the", "dog", "runs"), 2, "NN", "DT"))
        assert set(scores) == {"VB", "NN"}
        assert scores["NN"] == -float("inf")
        assert scores["VB"] > -float("inf")

    def test_no_restriction(self, ambiguous_corpus):
        scorer = TrigramHMMScorer(restrict_trigrams=False)
        scorer.train(training_contexts(ambiguous_corpus))

        scores = scorer.log_scores(LocalContext(("the", "dog", "runs"), 2, "NN", "DT"))
        assert all(score > -float("inf") for score in scores.values())

    def test_estimated_lambdas(self, corpus):
        scorer = TrigramHMMScorer()
        scorer.train(training_contexts(corpus))

        assert scorer.lambda1 >= 0
        assert scorer.lambda2 >= 0
        assert scorer.lambda3 >= 0
        assert scorer.lambda1 + scorer.lambda2 + scorer.lambda3 == pytest.approx(1.0)

    def test_fixed_lambdas(self, corpus):
        scorer = TrigramHMMScorer(lambda1=0.5, lambda2=0.25, estimate_lambdas=False)
        scorer.train(training_contexts(corpus))

        assert scorer.lambda1 == 0.5
        assert scorer.lambda2 == 0.25
        assert scorer.lambda3 == pytest.approx(0.25)

    def test_no_training_data_keeps_lambdas(self):
        scorer = TrigramHMMScorer(lambda1=0.5, lambda2=0.25)
        scorer.train([])

        assert scorer.lambda1 == 0.5
        assert scorer.lambda2 == 0.25

    @pytest.mark.parametrize(
        "lambda1,lambda2", [(-0.1, 0.5), (0.5, -0.1), (0.7, 0.5)]
    )
    def test_invalid_lambdas(self, lambda1, lambda2):
        with pytest.raises(ValueError):
            TrigramHMMScorer(lambda1=lambda1, lambda2=lambda2)


class TestDeletedInterpolation:
    def test_trigram_wins(self):
        """
        Trigram estimate (4-1)/(5-1) = 0.75 beats bigram estimate (5-1)/(10-1) and
        unigram estimate (10-1)/(20-1).
        """
        lambdas = deleted_interpolation(
            tag_counts={"A": 10, "B": 10},
            bigram_counts={"A": {"B": 5}, "B": {"A": 5}},
            trigram_counts={("A", "B"): {"A": 4}},
        )
        assert lambdas == pytest.approx((1.0, 0.0, 0.0))

    def test_bigram_wins(self):
        lambdas = deleted_interpolation(
            tag_counts={"A": 10, "B": 10},
            bigram_counts={"A": {"B": 9}, "B": {"A": 9}},
            trigram_counts={("A", "B"): {"A": 2}},
        )
        assert lambdas == pytest.approx((0.0, 1.0, 0.0))

    def test_ties_go_to_unigram(self):
        """
        Test that singleton counts, where every leave-one-out estimate is 0, are
        attributed to the unigram.
        """
        lambdas = deleted_interpolation(
            tag_counts={"A": 1, "B": 1},
            bigram_counts={"A": {"B": 1}},
            trigram_counts={("A", "A"): {"B": 1}},
        )
        assert lambdas == pytest.approx((0.0, 0.0, 1.0))

    def test_weighted_by_count(self):
        lambdas = deleted_interpolation(
            tag_counts={"A": 10, "B": 10},
            bigram_counts={"A": {"B": 5}, "B": {"A": 5}},
            trigram_counts={("A", "B"): {"A": 4}, ("B", "B"): {"B": 1}},
        )
        assert lambdas == pytest.approx((0.8, 0.0, 0.2))

    def test_no_trigrams(self):
        assert deleted_interpolation({}, {}, {}) is None


class TestMakeScorer:
    def test_most_frequent(self):
        scorer = make_scorer("most_frequent", restrict_trigrams=True)
        assert type(scorer) is MostFrequentTagScorer
        assert scorer.restrict_trigrams

    def test_trigram_hmm(self):
        scorer = make_scorer("trigram_hmm", lambda1=0.5, lambda2=0.2)
        assert isinstance(scorer, TrigramHMMScorer)
        assert scorer.lambda1 == 0.5

    def test_unknown_scorer(self):
        with pytest.raises(ValueError):
            make_scorer("crf")
