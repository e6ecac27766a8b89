from typing import Literal

from .base import TrellisDecoder, path_weight
from .greedy import GreedyDecoder
from .viterbi import LatticeElement, ViterbiDecoder

DecoderName = Literal["greedy", "viterbi"]

DECODERS: dict[str, type[TrellisDecoder]] = {
    "greedy": GreedyDecoder,
    "viterbi": ViterbiDecoder,
}


def make_decoder(name: DecoderName) -> TrellisDecoder:
    """Create a trellis decoder from its name.

    Parameters
    ----------
    name : DecoderName
        "greedy" or "viterbi".

    Returns
    -------
    TrellisDecoder
        Decoder instance.

    Raises
    ------
    ValueError
        Raised if name is not a known decoder.
    """
    if name not in DECODERS:
        raise ValueError(f"{name} is unknown decoder type.")
    return DECODERS[name]()


__all__ = [
    "DECODERS",
    "DecoderName",
    "GreedyDecoder",
    "LatticeElement",
    "TrellisDecoder",
    "ViterbiDecoder",
    "make_decoder",
    "path_weight",
]
