#!/usr/bin/env python3

from dataclasses import dataclass

from .decoders import DecoderName, make_decoder
from .pos_tagger import POSTagger
from .scorers import ScorerName, make_scorer


@dataclass
class TaggerConfig:
    """Configuration for building a POSTagger.

    Attributes
    ----------
    scorer : ScorerName
        Local trigram scorer to use: "most_frequent" or "trigram_hmm".
    decoder : DecoderName
        Trellis decoder to use: "greedy" or "viterbi".
    restrict_trigrams : bool
        If True, do not allow tags that form tag trigrams unseen in training.
    lambda1 : float
        Initial trigram interpolation weight.
    lambda2 : float
        Initial bigram interpolation weight. The unigram weight is
        1 - lambda1 - lambda2.
    estimate_lambdas : bool
        If True, estimate the interpolation weights by deleted interpolation.
    """

    scorer: ScorerName = "trigram_hmm"
    decoder: DecoderName = "viterbi"
    restrict_trigrams: bool = True
    lambda1: float = 0.6
    lambda2: float = 0.3
    estimate_lambdas: bool = True


def default_config() -> TaggerConfig:
    # Create object with defaults
    return TaggerConfig()


def build_tagger(config: TaggerConfig) -> POSTagger:
    """Build an untrained POSTagger from configuration.

    Parameters
    ----------
    config : TaggerConfig
        Tagger configuration.

    Returns
    -------
    POSTagger
        Untrained tagger.

    Raises
    ------
    ValueError
        Raised if the configured scorer or decoder is unknown, or the interpolation
        weights are invalid.
    """
    scorer = make_scorer(
        config.scorer,
        restrict_trigrams=config.restrict_trigrams,
        lambda1=config.lambda1,
        lambda2=config.lambda2,
        estimate_lambdas=config.estimate_lambdas,
    )
    return POSTagger(scorer, make_decoder(config.decoder))
