#!/usr/bin/env python3

import logging
from dataclasses import dataclass
from typing import Generic, Mapping

from postag.errors import UnreachableEndError
from postag.trellis import S, Trellis

from .base import TrellisDecoder

logger = logging.getLogger(__name__)


@dataclass
class LatticeElement(Generic[S]):
    """Dataclass for holding the score and backpointer for an element in the Viterbi
    lattice.

    Attributes
    ----------
    score : float
        The best cumulative log weight of any path from the start state to this
        state.
    backpointer : S | None
        The previous state that yielded the best score. None for the start state.
    """

    score: float
    backpointer: S | None


class ViterbiDecoder(TrellisDecoder[S]):
    """Decode a trellis by finding the maximum weight path from the start state to
    the end state.

    The lattice is indexed by the number of hops from the start state. This is
    exact provided the trellis is layered, i.e. every transition moves from one
    position to the next, which is true of any trellis built from State objects.

    If two predecessors give exactly the same best score, the first one encountered
    is kept.
    """

    def best_path(self, trellis: Trellis[S]) -> list[S]:
        self._check_endpoints(trellis)
        start, end = trellis.start_state, trellis.end_state

        # Define the lattice.
        # For each hop from the start state, we define a dictionary. The dict keys
        # are the states reachable in that number of hops. The values are the
        # LatticeElement dataclass which stores the best score for that state and a
        # backpointer to the previous state that resulted in that score.
        lattice: list[dict[S, LatticeElement[S]]] = [
            {start: LatticeElement(0.0, None)}
        ]

        # A path with more hops than there are states must contain a cycle, so the
        # end state cannot first be reached after that many hops.
        max_hops = trellis.num_states

        # Forward pass
        while end not in lattice[-1]:
            previous = lattice[-1]
            frontier = self._frontier(trellis, previous)
            if not frontier or len(lattice) > max_hops:
                raise UnreachableEndError(
                    f"End state {end} is not reachable from start state {start}."
                )

            if end in frontier:
                # Multiple hop depths may reach the end state, so only score it at
                # the first one and stop.
                frontier = [end]

            lattice.append(
                {
                    state: self._best_predecessor(trellis, previous, state)
                    for state in frontier
                }
            )

        # Back tracking
        # Iterate backwards through the lattice, following the backpointers from the
        # end state. Note that the resultant path will be in reverse.
        path = [end]
        state = end
        for column in reversed(lattice[1:]):
            state = column[state].backpointer
            path.append(state)

        logger.debug(
            f"Viterbi path of {len(path)} states with score {lattice[-1][end].score}."
        )
        return list(reversed(path))

    def _frontier(
        self, trellis: Trellis[S], previous: Mapping[S, LatticeElement[S]]
    ) -> list[S]:
        """Return the states reachable in one hop from any state in previous,
        in the order they are first encountered.
        """
        frontier = {}
        for state in previous:
            for next_state in trellis.forward_transitions(state):
                frontier.setdefault(next_state, None)

        return list(frontier)

    def _best_predecessor(
        self,
        trellis: Trellis[S],
        previous: Mapping[S, LatticeElement[S]],
        state: S,
    ) -> LatticeElement[S]:
        """Select the predecessor of state in the previous lattice column that gives
        the best cumulative score.

        Only legal transitions into state are considered. An illegal transition has a
        weight of -inf and so can never be the best choice.

        Parameters
        ----------
        trellis : Trellis[S]
            Trellis being decoded.
        previous : Mapping[S, LatticeElement[S]]
            Previous column of lattice.
        state : S
            State to score. Must be reachable from at least one state in previous.

        Returns
        -------
        LatticeElement[S]
            Best score and backpointer for state.
        """
        best = None
        for prev_state, weight in trellis.backward_transitions(state).items():
            element = previous.get(prev_state)
            if element is None:
                continue

            score = element.score + weight
            if best is None or score > best.score:
                best = LatticeElement(score, prev_state)

        return best
