from typing import Literal

from .base import LocalTrigramScorer
from .most_frequent import MostFrequentTagScorer
from .trigram_hmm import TrigramHMMScorer, deleted_interpolation

ScorerName = Literal["most_frequent", "trigram_hmm"]


def make_scorer(
    name: ScorerName,
    restrict_trigrams: bool = False,
    lambda1: float = 0.6,
    lambda2: float = 0.3,
    estimate_lambdas: bool = True,
) -> LocalTrigramScorer:
    """Create a local trigram scorer from its name.

    Parameters
    ----------
    name : ScorerName
        "most_frequent" or "trigram_hmm".
    restrict_trigrams : bool, optional
        If True, do not allow tags that form tag trigrams unseen in training.
        Default is False.
    lambda1 : float, optional
        Initial trigram interpolation weight. Only used by "trigram_hmm".
    lambda2 : float, optional
        Initial bigram interpolation weight. Only used by "trigram_hmm".
    estimate_lambdas : bool, optional
        If True, estimate interpolation weights by deleted interpolation during
        training. Only used by "trigram_hmm".

    Returns
    -------
    LocalTrigramScorer
        Untrained scorer.

    Raises
    ------
    ValueError
        Raised if name is not a known scorer.
    """
    if name == "most_frequent":
        return MostFrequentTagScorer(restrict_trigrams)
    elif name == "trigram_hmm":
        return TrigramHMMScorer(
            restrict_trigrams,
            lambda1=lambda1,
            lambda2=lambda2,
            estimate_lambdas=estimate_lambdas,
        )
    else:
        raise ValueError(f"{name} is unknown scorer type.")


__all__ = [
    "LocalTrigramScorer",
    "MostFrequentTagScorer",
    "ScorerName",
    "TrigramHMMScorer",
    "deleted_interpolation",
    "make_scorer",
]
