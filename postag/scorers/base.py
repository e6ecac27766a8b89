#!/usr/bin/env python3

from abc import ABC, abstractmethod
from typing import Iterable

from postag.sentence import LabeledLocalContext, LocalContext


class LocalTrigramScorer(ABC):
    """Assign scores to the tags that can occur in a LocalContext."""

    @abstractmethod
    def train(self, contexts: Iterable[LabeledLocalContext]) -> None:
        """Train the scorer from labeled contexts.

        Any previous training is discarded.

        Parameters
        ----------
        contexts : Iterable[LabeledLocalContext]
            Labeled context for every position of every training sentence.
        """

    @abstractmethod
    def log_scores(self, context: LocalContext) -> dict[str, float]:
        """Score the candidate tags for the current word of context.

        The scores are log probabilities: exponentiating and summing them gives at
        most 1. Only tags the model considers as candidates are included, so a tag
        missing from the returned dict has zero probability.

        Parameters
        ----------
        context : LocalContext
            Context to score tags for.

        Returns
        -------
        dict[str, float]
            Dict of {tag: log_probability}.
        """
