#!/usr/bin/env python3

from dataclasses import dataclass
from typing import Sequence

from ._constants import START_TAG, START_WORD, STOP_TAG, STOP_WORD
from .errors import InputShapeMismatchError


def bounded(sequence: Sequence[str], index: int, start: str, stop: str) -> str:
    """Return the element of sequence at index, padding either end with boundary
    symbols.

    Parameters
    ----------
    sequence : Sequence[str]
        Sequence of words or tags.
    index : int
        Position to look up. May be outside the bounds of sequence.
    start : str
        Symbol returned for any index before the start of sequence.
    stop : str
        Symbol returned for any index at or beyond the end of sequence.

    Returns
    -------
    str
        Element at index, or boundary symbol.
    """
    if index < 0:
        return start
    if index >= len(sequence):
        return stop
    return sequence[index]


@dataclass(frozen=True)
class TaggedSentence:
    """Sentence of words and the tag for each word.

    Attributes
    ----------
    words : tuple[str, ...]
        Words of sentence.
    tags : tuple[str, ...]
        Tag for each word. Must be the same length as words.

    Raises
    ------
    InputShapeMismatchError
        Raised if words and tags have different lengths.
    """

    words: tuple[str, ...]
    tags: tuple[str, ...]

    def __post_init__(self):
        # Store as tuples so the sentence is hashable regardless of input type.
        object.__setattr__(self, "words", tuple(self.words))
        object.__setattr__(self, "tags", tuple(self.tags))

        if len(self.words) != len(self.tags):
            raise InputShapeMismatchError(
                f"Sentence has {len(self.words)} words but {len(self.tags)} tags."
            )

    def __len__(self) -> int:
        return len(self.words)

    def __str__(self) -> str:
        return " ".join(f"{word}_{tag}" for word, tag in zip(self.words, self.tags))


@dataclass(frozen=True)
class LocalContext:
    """A position in a sentence along with the previous two tags.

    Attributes
    ----------
    words : tuple[str, ...]
        Words of sentence, without boundary symbols.
    position : int
        Position of the current word. Positions len(words) and len(words) + 1 refer
        to the STOP boundary symbols.
    previous_tag : str
        Tag at position - 1.
    previous_previous_tag : str
        Tag at position - 2.
    """

    words: tuple[str, ...]
    position: int
    previous_tag: str
    previous_previous_tag: str

    @property
    def current_word(self) -> str:
        return bounded(self.words, self.position, START_WORD, STOP_WORD)

    def __str__(self) -> str:
        return (
            f"[{self.previous_previous_tag}, {self.previous_tag}, {self.current_word}]"
        )


@dataclass(frozen=True)
class LabeledLocalContext(LocalContext):
    """A LocalContext with the correct tag for the current position.

    Attributes
    ----------
    current_tag : str
        Gold tag at position.
    """

    current_tag: str

    def __str__(self) -> str:
        return (
            f"[{self.previous_previous_tag}, {self.previous_tag}, "
            f"{self.current_word}_{self.current_tag}]"
        )


def extract_labeled_contexts(sentence: TaggedSentence) -> list[LabeledLocalContext]:
    """Chop a tagged sentence into one labeled local context per position.

    This includes the two STOP positions after the last word, so a sentence of n
    words yields n + 2 contexts.

    Parameters
    ----------
    sentence : TaggedSentence
        Sentence to extract contexts from.

    Returns
    -------
    list[LabeledLocalContext]
        Labeled context for each position.
    """
    tags = sentence.tags
    return [
        LabeledLocalContext(
            words=sentence.words,
            position=position,
            previous_tag=bounded(tags, position - 1, START_TAG, STOP_TAG),
            previous_previous_tag=bounded(tags, position - 2, START_TAG, STOP_TAG),
            current_tag=bounded(tags, position, START_TAG, STOP_TAG),
        )
        for position in range(len(sentence) + 2)
    ]
