#!/usr/bin/env python3

from dataclasses import dataclass
from typing import Sequence

from ._constants import START_TAG, STOP_TAG


@dataclass(frozen=True)
class State:
    """Order 2 Markov state: the two tags preceding a position in a sentence.

    The start state is [START, START, 0]. There is no single stop state because
    sentence lengths vary, so State.stop() takes the length of the sentence.

    Attributes
    ----------
    previous_previous_tag : str
        Tag at position - 2.
    previous_tag : str
        Tag at position - 1.
    position : int
        Position in the sentence, counting the START boundary at 0.
    """

    previous_previous_tag: str
    previous_tag: str
    position: int

    @classmethod
    def start(cls) -> "State":
        return cls(START_TAG, START_TAG, 0)

    @classmethod
    def stop(cls, sentence_length: int) -> "State":
        # Two boundary positions either side of the sentence.
        return cls(STOP_TAG, STOP_TAG, sentence_length + 2)

    @classmethod
    def build(
        cls, previous_previous_tag: str, previous_tag: str, position: int
    ) -> "State":
        return cls(previous_previous_tag, previous_tag, position)

    def next(self, tag: str) -> "State":
        """Return the state that follows this one if tag is chosen at position."""
        return State(self.previous_tag, tag, self.position + 1)

    def previous(self, tag: str) -> "State":
        """Return the state that precedes this one, where tag is the tag before
        previous_previous_tag.
        """
        return State(tag, self.previous_previous_tag, self.position - 1)

    @staticmethod
    def to_tag_list(states: Sequence["State"]) -> list[str]:
        """Convert a path of states into the sequence of tags it encodes.

        Parameters
        ----------
        states : Sequence[State]
            Path of states, starting with the start state.

        Returns
        -------
        list[str]
            Tags, including the boundary tags.
        """
        if not states:
            return []
        return [states[0].previous_previous_tag] + [s.previous_tag for s in states]

    def __str__(self) -> str:
        return f"[{self.previous_previous_tag}, {self.previous_tag}, {self.position}]"


class StateInterner:
    """Cache of canonical State instances.

    Each logically equal state built through the interner is returned as the same
    object, so the trellis for a sentence does not hold duplicate nodes.
    An interner is owned by a single trellis build and discarded with it.
    """

    def __init__(self) -> None:
        self._canonical: dict[State, State] = {}

    def __len__(self) -> int:
        return len(self._canonical)

    def __repr__(self):
        return f"StateInterner(size={len(self)})"

    def intern(self, state: State) -> State:
        return self._canonical.setdefault(state, state)

    def build(
        self, previous_previous_tag: str, previous_tag: str, position: int
    ) -> State:
        return self.intern(State(previous_previous_tag, previous_tag, position))

    def start(self) -> State:
        return self.intern(State.start())

    def stop(self, sentence_length: int) -> State:
        return self.intern(State.stop(sentence_length))

    def next(self, state: State, tag: str) -> State:
        return self.intern(state.next(tag))

    def previous(self, state: State, tag: str) -> State:
        return self.intern(state.previous(tag))

    def clear(self) -> None:
        self._canonical.clear()
