#!/usr/bin/env python3

import logging
from typing import Iterable, Sequence

from tqdm import tqdm

from .decoders import TrellisDecoder
from .scorers import LocalTrigramScorer
from .sentence import (
    LabeledLocalContext,
    LocalContext,
    TaggedSentence,
    extract_labeled_contexts,
)
from .state import State, StateInterner
from .trellis import Trellis

logger = logging.getLogger(__name__)


class POSTagger:
    """Part of speech tagger that combines a local trigram scorer with a trellis
    decoder.

    Attributes
    ----------
    scorer : LocalTrigramScorer
        Scorer giving the log probability of each candidate tag in a local context.
    decoder : TrellisDecoder[State]
        Decoder used to find the best path through the trellis for a sentence.
    """

    def __init__(self, scorer: LocalTrigramScorer, decoder: TrellisDecoder[State]):
        self.scorer = scorer
        self.decoder = decoder

    def __repr__(self):
        return f"POSTagger(scorer={self.scorer}, decoder={self.decoder})"

    def train(
        self, sentences: Iterable[TaggedSentence], show_progress: bool = False
    ) -> None:
        """Train the tagger from tagged sentences.

        The sentences are chopped up into labeled local contexts, which are passed on
        to the scorer.

        Parameters
        ----------
        sentences : Iterable[TaggedSentence]
            Training sentences.
        show_progress : bool, optional
            If True, show progress bar while extracting contexts.
            Default is False.
        """
        contexts: list[LabeledLocalContext] = []
        n_sentences = 0
        for sentence in tqdm(sentences, disable=not show_progress, unit="sentence"):
            contexts.extend(extract_labeled_contexts(sentence))
            n_sentences += 1

        logger.info(
            f"Training on {len(contexts):,} contexts from {n_sentences:,} sentences."
        )
        self.scorer.train(contexts)

    def tag(self, words: Sequence[str]) -> list[str]:
        """Tag a sentence.

        Parameters
        ----------
        words : Sequence[str]
            Words of sentence, without boundary symbols.

        Returns
        -------
        list[str]
            Tag for each word.

        Raises
        ------
        DecodingError
            Raised if the decoder cannot find a path through the sentence trellis.
        """
        trellis = self._build_trellis(tuple(words))
        path = self.decoder.best_path(trellis)
        tags = State.to_tag_list(path)
        # Remove the two START tags and the two STOP tags.
        return tags[2:-2]

    def score_tagging(self, sentence: TaggedSentence) -> float:
        """Calculate the log probability of the tags of sentence under the trained
        model.

        A tag sequence the model does not allow has a log probability of -inf.

        Parameters
        ----------
        sentence : TaggedSentence
            Sentence and tagging to score.

        Returns
        -------
        float
            Log probability of tagging.
        """
        log_score = 0.0
        for context in extract_labeled_contexts(sentence):
            scores = self.scorer.log_scores(context)
            log_score += scores.get(context.current_tag, -float("inf"))

        return log_score

    def _build_trellis(self, words: tuple[str, ...]) -> Trellis[State]:
        """Build the trellis over a sentence.

        Starting from the start state, every state at the current position is
        advanced by each tag the scorer gives for the context of that state. The
        states created form the set of states for the next position.

        Parameters
        ----------
        words : tuple[str, ...]
            Words of sentence, without boundary symbols.

        Returns
        -------
        Trellis[State]
            Trellis from the start state to the stop state for the sentence.
        """
        states = StateInterner()
        start = states.start()
        stop = states.stop(len(words))
        trellis = Trellis(start, stop)

        # dict keys rather than a set so the order of states is deterministic.
        frontier = {start: None}
        for position in range(len(words) + 2):
            next_frontier = {}
            for state in frontier:
                if state == stop:
                    continue

                context = LocalContext(
                    words, position, state.previous_tag, state.previous_previous_tag
                )
                for tag, score in self.scorer.log_scores(context).items():
                    next_state = states.next(state, tag)
                    trellis.set_transition(state, next_state, score)
                    next_frontier[next_state] = None

            frontier = next_frontier

        logger.debug(
            f"Built trellis with {len(states):,} states and "
            f"{trellis.num_transitions:,} transitions for {len(words)} words."
        )
        return trellis
