#!/usr/bin/env python3

from collections import defaultdict
from types import MappingProxyType
from typing import Generic, Hashable, Mapping, TypeVar

S = TypeVar("S", bound=Hashable)

_NO_TRANSITIONS: Mapping = MappingProxyType({})


class Trellis(Generic[S]):
    """Weighted directed graph with a single start state and a single end state.

    Transitions are stored twice: forward, from each state to its successors, and
    backward, from each state to its predecessors. Each weight is a log
    probability.

    A pair of states with no transition between them is illegal and must be
    treated as having a weight of -inf. It is never a transition with weight 0.
    transition_weight() returns None for these pairs so the two cases cannot be
    confused.

    Attributes
    ----------
    start_state : S | None
        Unique start state for the trellis.
    end_state : S | None
        Unique end state for the trellis.
    """

    def __init__(self, start_state: S | None = None, end_state: S | None = None):
        self.start_state = start_state
        self.end_state = end_state

        # Keys are states, the value for each key is a dict where the keys are the
        # neighbouring states and the values are the log weight of the transition.
        self._forward: defaultdict[S, dict[S, float]] = defaultdict(dict)
        self._backward: defaultdict[S, dict[S, float]] = defaultdict(dict)

    def __repr__(self):
        return (
            f"Trellis(start_state={self.start_state}, end_state={self.end_state}, "
            f"transitions={self.num_transitions})"
        )

    def __contains__(self, state: S) -> bool:
        return (
            state in self._forward
            or state in self._backward
            or state == self.start_state
            or state == self.end_state
        )

    @property
    def num_transitions(self) -> int:
        return sum(len(successors) for successors in self._forward.values())

    @property
    def num_states(self) -> int:
        states = self._forward.keys() | self._backward.keys()
        states |= {s for s in (self.start_state, self.end_state) if s is not None}
        return len(states)

    def set_start(self, state: S) -> None:
        self.start_state = state

    def set_end(self, state: S) -> None:
        self.end_state = state

    def forward_transitions(self, state: S) -> Mapping[S, float]:
        """Return the states that can follow state, with the log weight of each
        transition.

        Parameters
        ----------
        state : S
            State to get successors of.

        Returns
        -------
        Mapping[S, float]
            Read only mapping of {next_state: log_weight}.
            Empty if state has no successors or is not in the trellis.
        """
        if state not in self._forward:
            return _NO_TRANSITIONS
        return MappingProxyType(self._forward[state])

    def backward_transitions(self, state: S) -> Mapping[S, float]:
        """Return the states that can precede state, with the log weight of each
        transition.

        Parameters
        ----------
        state : S
            State to get predecessors of.

        Returns
        -------
        Mapping[S, float]
            Read only mapping of {previous_state: log_weight}.
            Empty if state has no predecessors or is not in the trellis.
        """
        if state not in self._backward:
            return _NO_TRANSITIONS
        return MappingProxyType(self._backward[state])

    def transition_weight(self, start: S, end: S) -> float | None:
        """Return the log weight of the transition from start to end.

        Parameters
        ----------
        start : S
            State the transition leaves from.
        end : S
            State the transition arrives at.

        Returns
        -------
        float | None
            Log weight of transition, or None if the transition is illegal.
        """
        if start not in self._forward:
            return None
        return self._forward[start].get(end)

    def set_transition(self, start: S, end: S, log_weight: float) -> None:
        """Set the log weight of the transition from start to end, overwriting any
        existing weight.

        Parameters
        ----------
        start : S
            State the transition leaves from.
        end : S
            State the transition arrives at.
        log_weight : float
            Log weight of transition. May be -inf.
        """
        self._forward[start][end] = log_weight
        self._backward[end][start] = log_weight
