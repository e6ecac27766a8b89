#!/usr/bin/env python3

from collections import defaultdict
from math import log
from typing import Hashable, Mapping, TypeVar

K = TypeVar("K", bound=Hashable)
V = TypeVar("V", bound=Hashable)


def nested_counts() -> defaultdict:
    """Return an empty {key: {value: count}} table."""
    return defaultdict(lambda: defaultdict(int))


def normalize(counts: Mapping[K, float]) -> dict[K, float]:
    """Normalize counts into a probability distribution.

    Parameters
    ----------
    counts : Mapping[K, float]
        Count for each key.

    Returns
    -------
    dict[K, float]
        Probability for each key. Empty if there are no counts.
    """
    total = sum(counts.values())
    if total == 0:
        return {}
    return {key: count / total for key, count in counts.items()}


def conditional_normalize(
    counts: Mapping[K, Mapping[V, float]],
) -> dict[K, dict[V, float]]:
    """Normalize each row of a table of counts into a conditional distribution.

    Parameters
    ----------
    counts : Mapping[K, Mapping[V, float]]
        Table of {condition: {value: count}}.

    Returns
    -------
    dict[K, dict[V, float]]
        Table of {condition: {value: P(value|condition)}}.
    """
    return {condition: normalize(row) for condition, row in counts.items()}


def safe_log(p: float) -> float:
    """Return log(p), or -inf if p is zero."""
    if p <= 0:
        return -float("inf")
    return log(p)
