#!/usr/bin/env python3

import logging
from collections import defaultdict
from typing import Iterable, Mapping

from postag.sentence import LabeledLocalContext, LocalContext

from ._counts import conditional_normalize, nested_counts, normalize, safe_log
from .most_frequent import MostFrequentTagScorer

logger = logging.getLogger(__name__)


def _leave_one_out(numerator: float, denominator: float) -> float:
    """Relative frequency with the current event removed from both counts.

    Returns 0 if there is nothing left to estimate from.
    """
    if denominator - 1 <= 0:
        return 0.0
    return (numerator - 1) / (denominator - 1)


def deleted_interpolation(
    tag_counts: Mapping[str, int],
    bigram_counts: Mapping[str, Mapping[str, int]],
    trigram_counts: Mapping[tuple[str, str], Mapping[str, int]],
) -> tuple[float, float, float] | None:
    """Estimate trigram, bigram and unigram interpolation weights by deleted
    interpolation.

    For each tag trigram seen in training, the trigram, bigram and unigram relative
    frequencies are computed with that occurrence removed. The count of the trigram
    is attributed to whichever estimate is largest. If no estimate is strictly the
    largest, the count goes to the unigram.

    Parameters
    ----------
    tag_counts : Mapping[str, int]
        Count of each tag.
    bigram_counts : Mapping[str, Mapping[str, int]]
        Count of each tag, given the previous tag.
    trigram_counts : Mapping[tuple[str, str], Mapping[str, int]]
        Count of each tag, given the previous two tags.

    Returns
    -------
    tuple[float, float, float] | None
        (trigram_weight, bigram_weight, unigram_weight), summing to 1.
        None if there are no trigrams to estimate from.
    """
    total = sum(tag_counts.values())
    trigram_weight, bigram_weight, unigram_weight = 0.0, 0.0, 0.0

    for (t1, t2), following in trigram_counts.items():
        for t3, count in following.items():
            trigram = _leave_one_out(count, bigram_counts.get(t1, {}).get(t2, 0))
            bigram = _leave_one_out(
                bigram_counts.get(t2, {}).get(t3, 0), tag_counts.get(t2, 0)
            )
            unigram = _leave_one_out(tag_counts.get(t3, 0), total)

            if trigram > bigram and trigram > unigram:
                trigram_weight += count
            elif bigram > trigram and bigram > unigram:
                bigram_weight += count
            else:
                unigram_weight += count

    weight_sum = trigram_weight + bigram_weight + unigram_weight
    if weight_sum == 0:
        return None

    return (
        trigram_weight / weight_sum,
        bigram_weight / weight_sum,
        unigram_weight / weight_sum,
    )


class TrigramHMMScorer(MostFrequentTagScorer):
    """Score tags using a trigram hidden Markov model.

    The score for a tag is the log of the interpolated transition probability

        lambda1 * P(tag|prev_prev, prev) + lambda2 * P(tag|prev) + lambda3 * P(tag)

    plus the log of the emission probability P(word|tag).

    For a word not seen in training, the emission probability is replaced with
    P(unknown|tag), computed from the distribution of tags over the first
    occurrence of each word type in training.

    Attributes
    ----------
    restrict_trigrams : bool
        If True, tags that form an unseen tag trigram with the previous two tags are
        given a score of -inf, unless that would be every candidate tag.
    lambda1 : float
        Trigram interpolation weight.
    lambda2 : float
        Bigram interpolation weight.
    estimate_lambdas : bool
        If True, estimate lambda1 and lambda2 by deleted interpolation when training.
        The values given at construction are only used if there is nothing to
        estimate from.
    """

    def __init__(
        self,
        restrict_trigrams: bool = False,
        lambda1: float = 0.6,
        lambda2: float = 0.3,
        estimate_lambdas: bool = True,
    ):
        super().__init__(restrict_trigrams)

        if lambda1 < 0 or lambda2 < 0 or lambda1 + lambda2 > 1:
            raise ValueError(
                "Interpolation weights must be non-negative and sum to at most 1, "
                f"got lambda1={lambda1}, lambda2={lambda2}."
            )

        self.lambda1 = lambda1
        self.lambda2 = lambda2
        self.estimate_lambdas = estimate_lambdas

        self.tag_probs: dict[str, float] = {}
        self.bigram_probs: dict[str, dict[str, float]] = {}
        self.trigram_probs: dict[tuple[str, str], dict[str, float]] = {}
        self.emission_probs: dict[str, dict[str, float]] = {}

        # Fraction of training tokens that were the first occurrence of a word type.
        self.unknown_word_rate: float = 0.0

    def __repr__(self):
        return (
            f"TrigramHMMScorer(restrict_trigrams={self.restrict_trigrams}, "
            f"lambda1={self.lambda1:.3f}, lambda2={self.lambda2:.3f})"
        )

    @property
    def lambda3(self) -> float:
        # Clamp rounding error when lambda1 + lambda2 is 1.
        return max(0.0, 1.0 - self.lambda1 - self.lambda2)

    def train(self, contexts: Iterable[LabeledLocalContext]) -> None:
        contexts = list(contexts)
        # Word to tag distributions, unknown word tag distribution and seen trigrams.
        super().train(contexts)

        tag_counts = defaultdict(int)
        bigram_counts = nested_counts()
        trigram_counts = nested_counts()
        emission_counts = nested_counts()

        for context in contexts:
            tag = context.current_tag
            prev = context.previous_tag
            prev_prev = context.previous_previous_tag

            tag_counts[tag] += 1
            bigram_counts[prev][tag] += 1
            trigram_counts[(prev_prev, prev)][tag] += 1
            emission_counts[tag][context.current_word] += 1

        # Every word type contributes one unknown word occurrence.
        if contexts:
            self.unknown_word_rate = len(self.words_to_tags) / len(contexts)
        else:
            self.unknown_word_rate = 0.0

        # Deleted interpolation works with the raw counts, so must be done before
        # normalizing.
        if self.estimate_lambdas:
            lambdas = deleted_interpolation(tag_counts, bigram_counts, trigram_counts)
            if lambdas is None:
                logger.warning(
                    "No tag trigrams to estimate interpolation weights from, "
                    "using initial weights."
                )
            else:
                self.lambda1, self.lambda2, _ = lambdas

        logger.info(
            f"Interpolation weights: trigram={self.lambda1:.3f}, "
            f"bigram={self.lambda2:.3f}, unigram={self.lambda3:.3f}."
        )

        self.tag_probs = normalize(tag_counts)
        self.bigram_probs = conditional_normalize(bigram_counts)
        self.trigram_probs = conditional_normalize(trigram_counts)
        self.emission_probs = conditional_normalize(emission_counts)

    def log_scores(self, context: LocalContext) -> dict[str, float]:
        word = context.current_word
        prev_prev = context.previous_previous_tag
        prev = context.previous_tag

        known_word = word in self.words_to_tags
        if known_word:
            candidates = self.words_to_tags[word].keys()
        else:
            candidates = self.unknown_word_tags.keys()

        allowed = self.allowed_following_tags(candidates, prev_prev, prev)
        # If no candidate forms a seen trigram, do not restrict.
        restrict = self.restrict_trigrams and bool(allowed)

        scores = {}
        for tag in candidates:
            if restrict and tag not in allowed:
                scores[tag] = -float("inf")
                continue

            if known_word:
                emission = self.emission_probs[tag].get(word, 0.0)
            else:
                emission = self._unknown_word_emission(tag)

            scores[tag] = safe_log(self._transition(prev_prev, prev, tag)) + safe_log(
                emission
            )

        return scores

    def _transition(self, prev_prev: str, prev: str, tag: str) -> float:
        """Interpolated probability of tag following prev_prev, prev."""
        trigram = self.trigram_probs.get((prev_prev, prev), {}).get(tag, 0.0)
        bigram = self.bigram_probs.get(prev, {}).get(tag, 0.0)
        unigram = self.tag_probs.get(tag, 0.0)
        return self.lambda1 * trigram + self.lambda2 * bigram + self.lambda3 * unigram

    def _unknown_word_emission(self, tag: str) -> float:
        """P(unknown|tag) = P(tag|unknown) * P(unknown) / P(tag)."""
        tag_prob = self.tag_probs.get(tag, 0.0)
        if tag_prob == 0:
            return 0.0
        return self.unknown_word_tags[tag] * self.unknown_word_rate / tag_prob
