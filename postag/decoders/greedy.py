#!/usr/bin/env python3

import logging

from postag.errors import DecodingError, NoLegalContinuationError
from postag.trellis import S, Trellis

from .base import TrellisDecoder

logger = logging.getLogger(__name__)


class GreedyDecoder(TrellisDecoder[S]):
    """Decode a trellis by always following the highest weight transition out of
    the current state.

    This is fast, but is not guaranteed to find the highest weight path.
    """

    def best_path(self, trellis: Trellis[S]) -> list[S]:
        self._check_endpoints(trellis)

        state = trellis.start_state
        path = [state]
        visited = {state}
        while state != trellis.end_state:
            transitions = trellis.forward_transitions(state)
            if not transitions:
                raise NoLegalContinuationError(
                    f"No legal continuation from state {state} before reaching "
                    f"end state {trellis.end_state}."
                )

            # max returns the first state with the highest weight, so ties are
            # resolved by insertion order.
            state = max(transitions, key=transitions.__getitem__)
            if state in visited:
                raise DecodingError(f"Greedy walk revisited state {state}.")

            path.append(state)
            visited.add(state)

        logger.debug(f"Greedy path of {len(path)} states.")
        return path
