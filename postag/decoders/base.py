#!/usr/bin/env python3

from abc import ABC, abstractmethod
from typing import Generic, Sequence

from postag.trellis import S, Trellis


class TrellisDecoder(ABC, Generic[S]):
    """Find a path through a trellis.

    The returned path starts with trellis.start_state, ends with trellis.end_state,
    and each adjacent pair of states in the path is a transition in the trellis.
    """

    def __repr__(self):
        return f"{type(self).__name__}()"

    @abstractmethod
    def best_path(self, trellis: Trellis[S]) -> list[S]:
        """Return the best path from the start state to the end state of trellis.

        Parameters
        ----------
        trellis : Trellis[S]
            Trellis to decode.

        Returns
        -------
        list[S]
            States in path, from start state to end state.

        Raises
        ------
        DecodingError
            Raised if no path to the end state can be found.
        """

    @staticmethod
    def _check_endpoints(trellis: Trellis[S]) -> None:
        if trellis.start_state is None or trellis.end_state is None:
            raise ValueError("Trellis must have a start state and an end state.")


def path_weight(trellis: Trellis[S], path: Sequence[S]) -> float:
    """Calculate the total log weight of a path through a trellis.

    Parameters
    ----------
    trellis : Trellis[S]
        Trellis containing path.
    path : Sequence[S]
        Sequence of states.

    Returns
    -------
    float
        Sum of the log weights of the transitions in path.
        -inf if any transition in path is illegal.
    """
    total = 0.0
    for start, end in zip(path, path[1:]):
        weight = trellis.transition_weight(start, end)
        if weight is None:
            return -float("inf")
        total += weight

    return total
