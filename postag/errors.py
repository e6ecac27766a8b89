#!/usr/bin/env python3


class DecodingError(Exception):
    """Raised when no path can be found through a trellis."""


class NoLegalContinuationError(DecodingError):
    """Raised when a state reached during decoding has no outgoing transitions
    before the end state of the trellis is reached.
    """


class UnreachableEndError(DecodingError):
    """Raised when the end state of a trellis is never scored."""


class InputShapeMismatchError(ValueError):
    """Raised when the words and tags of a tagged sentence differ in length."""
