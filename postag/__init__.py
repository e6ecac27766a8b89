from ._constants import START_TAG, START_WORD, STOP_TAG, STOP_WORD
from .config import TaggerConfig, build_tagger, default_config
from .decoders import GreedyDecoder, TrellisDecoder, ViterbiDecoder, make_decoder
from .errors import (
    DecodingError,
    InputShapeMismatchError,
    NoLegalContinuationError,
    UnreachableEndError,
)
from .pos_tagger import POSTagger
from .scorers import (
    LocalTrigramScorer,
    MostFrequentTagScorer,
    TrigramHMMScorer,
    make_scorer,
)
from .sentence import (
    LabeledLocalContext,
    LocalContext,
    TaggedSentence,
    extract_labeled_contexts,
)
from .state import State, StateInterner
from .trellis import Trellis

__all__ = [
    "DecodingError",
    "GreedyDecoder",
    "InputShapeMismatchError",
    "LabeledLocalContext",
    "LocalContext",
    "LocalTrigramScorer",
    "MostFrequentTagScorer",
    "NoLegalContinuationError",
    "POSTagger",
    "START_TAG",
    "START_WORD",
    "STOP_TAG",
    "STOP_WORD",
    "State",
    "StateInterner",
    "TaggedSentence",
    "TaggerConfig",
    "Trellis",
    "TrellisDecoder",
    "TrigramHMMScorer",
    "UnreachableEndError",
    "ViterbiDecoder",
    "build_tagger",
    "default_config",
    "extract_labeled_contexts",
    "make_decoder",
    "make_scorer",
]
