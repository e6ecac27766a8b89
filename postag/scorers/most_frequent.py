#!/usr/bin/env python3

import logging
from collections import defaultdict
from math import log
from typing import Iterable

from postag.sentence import LabeledLocalContext, LocalContext

from ._counts import conditional_normalize, nested_counts, normalize
from .base import LocalTrigramScorer

logger = logging.getLogger(__name__)


class MostFrequentTagScorer(LocalTrigramScorer):
    """Score each tag by how often it was seen with the current word in training.

    Words not seen in training are scored with the distribution of tags over the
    first occurrence of each word type in training, which approximates the tags
    of rare words.

    If constructed with restrict_trigrams=True, tags that would form a tag trigram
    never seen in training are removed. Otherwise no use is made of the tag
    history.

    Attributes
    ----------
    restrict_trigrams : bool
        If True, remove tags that form an unseen tag trigram with the previous two
        tags, unless that would remove every tag.
    words_to_tags : dict[str, dict[str, float]]
        P(tag|word) for each word seen in training.
    unknown_word_tags : dict[str, float]
        P(tag|unknown word).
    seen_tag_trigrams : set[tuple[str, str, str]]
        (previous_previous_tag, previous_tag, tag) trigrams seen in training.
    """

    def __init__(self, restrict_trigrams: bool = False):
        self.restrict_trigrams = restrict_trigrams

        self.words_to_tags: dict[str, dict[str, float]] = {}
        self.unknown_word_tags: dict[str, float] = {}
        self.seen_tag_trigrams: set[tuple[str, str, str]] = set()

    def __repr__(self):
        return (
            f"{type(self).__name__}(restrict_trigrams={self.restrict_trigrams})"
        )

    def train(self, contexts: Iterable[LabeledLocalContext]) -> None:
        word_tag_counts = nested_counts()
        unknown_tag_counts = defaultdict(int)
        seen_tag_trigrams = set()

        for context in contexts:
            word = context.current_word
            tag = context.current_tag
            if word not in word_tag_counts:
                # First time this word has been seen, so tally its tag as an unknown
                # word tag.
                unknown_tag_counts[tag] += 1

            word_tag_counts[word][tag] += 1
            seen_tag_trigrams.add(
                (context.previous_previous_tag, context.previous_tag, tag)
            )

        self.words_to_tags = conditional_normalize(word_tag_counts)
        self.unknown_word_tags = normalize(unknown_tag_counts)
        self.seen_tag_trigrams = seen_tag_trigrams

        logger.debug(
            f"Trained on {len(self.words_to_tags):,} word types and "
            f"{len(self.seen_tag_trigrams):,} tag trigrams."
        )

    def log_scores(self, context: LocalContext) -> dict[str, float]:
        tag_probs = self.words_to_tags.get(context.current_word, self.unknown_word_tags)

        if self.restrict_trigrams:
            allowed = self.allowed_following_tags(
                tag_probs, context.previous_previous_tag, context.previous_tag
            )
            # Never leave a context without candidates.
            if allowed:
                tag_probs = {tag: p for tag, p in tag_probs.items() if tag in allowed}

        return {tag: log(p) for tag, p in tag_probs.items()}

    def allowed_following_tags(
        self, tags: Iterable[str], previous_previous_tag: str, previous_tag: str
    ) -> set[str]:
        """Return the subset of tags that form a tag trigram seen in training with
        the previous two tags.

        Parameters
        ----------
        tags : Iterable[str]
            Candidate tags.
        previous_previous_tag : str
            Tag two positions before candidate.
        previous_tag : str
            Tag one position before candidate.

        Returns
        -------
        set[str]
            Tags that can follow previous_previous_tag, previous_tag.
        """
        return {
            tag
            for tag in tags
            if (previous_previous_tag, previous_tag, tag) in self.seen_tag_trigrams
        }
