#!/usr/bin/env python3

import argparse
import logging
import random
from pathlib import Path

from sklearn.model_selection import train_test_split

from postag import TaggedSentence, TaggerConfig, build_tagger

from .training_utils import (
    Stats,
    confusion_matrix,
    evaluate,
    extract_vocabulary,
    load_tagged_sentences,
    write_tagged_sentences,
)

DEFAULT_TAGGED_OUTPUT = "test.tagged"

logger = logging.getLogger(__name__)


def split_sentences(
    sentences: list[TaggedSentence], split: float, seed: int | None
) -> tuple[list[TaggedSentence], list[TaggedSentence], int]:
    """Split sentences into a training set and an evaluation set.

    Parameters
    ----------
    sentences : list[TaggedSentence]
        Sentences to split.
    split : float
        Fraction of sentences to use for evaluation.
    seed : int | None
        Integer used as seed for splitting the sentences between the training and
        evaluation sets. If None, a random seed is generated within this function.

    Returns
    -------
    tuple[list[TaggedSentence], list[TaggedSentence], int]
        Training sentences, evaluation sentences and the seed used.
    """
    # Generate random seed for the train/test split if none provided.
    if seed is None:
        seed = random.randint(0, 1_000_000_000)

    logger.info(f"{seed} is the random seed used for the train/test split.")
    train_sentences, eval_sentences = train_test_split(
        sentences, test_size=split, random_state=seed
    )
    return train_sentences, eval_sentences, seed


def train_model(
    train_sentences: list[TaggedSentence],
    eval_sentences: list[TaggedSentence],
    config: TaggerConfig,
    seed: int | None = None,
    verbose: bool = False,
    plot_confusion_matrix: bool = False,
    blind_sentences: list[TaggedSentence] | None = None,
    tagged_output: Path | None = None,
    show_progress: bool = True,
) -> Stats:
    """Train a tagger on train_sentences and evaluate it on eval_sentences.

    Parameters
    ----------
    train_sentences : list[TaggedSentence]
        Sentences to train tagger with.
    eval_sentences : list[TaggedSentence]
        Sentences to evaluate tagger with.
    config : TaggerConfig
        Configuration of tagger.
    seed : int | None, optional
        Seed used to split train and evaluation sentences, if they were split.
    verbose : bool, optional
        If True, log the gold and guessed tags for every evaluation sentence.
    plot_confusion_matrix : bool, optional
        If True, plot a confusion matrix of the evaluation tags.
    blind_sentences : list[TaggedSentence] | None, optional
        Untagged sentences to tag and write to tagged_output.
    tagged_output : Path | None, optional
        Path to write tagged blind_sentences to.
    show_progress : bool, optional
        If True, show progress bars.
        Default is True.

    Returns
    -------
    Stats
        Statistics evaluating the tagger.
    """
    logger.info(f"{len(train_sentences):,} training sentences.")
    logger.info(f"{len(eval_sentences):,} evaluation sentences.")

    tagger = build_tagger(config)
    logger.info(f"Training {tagger} with training data.")
    tagger.train(train_sentences, show_progress=show_progress)

    logger.info("Evaluating tagger with evaluation data.")
    vocabulary = extract_vocabulary(train_sentences)
    stats, truth, predicted = evaluate(
        tagger,
        eval_sentences,
        vocabulary,
        seed=seed,
        verbose=verbose,
        show_progress=show_progress,
    )

    if plot_confusion_matrix:
        confusion_matrix(predicted, truth)

    if blind_sentences:
        write_tagged_sentences(
            tagger, blind_sentences, tagged_output or DEFAULT_TAGGED_OUTPUT
        )

    return stats


def config_from_args(args: argparse.Namespace) -> TaggerConfig:
    return TaggerConfig(
        scorer=args.scorer,
        decoder=args.decoder,
        restrict_trigrams=args.restrict_trigrams,
        lambda1=args.lambda1,
        lambda2=args.lambda2,
        estimate_lambdas=args.estimate_lambdas,
    )


def train_single(args: argparse.Namespace) -> None:
    """Train tagger once and print evaluation results.

    Parameters
    ----------
    args : argparse.Namespace
        Model training configuration
    """
    sentences = load_tagged_sentences(args.train)
    seed = args.seed
    if args.dev is None:
        train_sentences, eval_sentences, seed = split_sentences(
            sentences, args.split, seed
        )
    else:
        train_sentences, eval_sentences = sentences, load_tagged_sentences(args.dev)

    blind_sentences = None
    if args.blind is not None:
        blind_sentences = load_tagged_sentences(args.blind, has_tags=False)

    stats = train_model(
        train_sentences,
        eval_sentences,
        config_from_args(args),
        seed=seed,
        verbose=args.verbose > 1,
        plot_confusion_matrix=args.confusion,
        blind_sentences=blind_sentences,
        tagged_output=args.output,
        show_progress=True,
    )

    print("Sentence-level results:")
    print(f"\tAccuracy: {100 * stats.sentence.accuracy:.2f}%")

    print()
    print("Word-level results:")
    print(f"\tAccuracy {100 * stats.token.accuracy:.2f}%")
    print(f"\tUnknown word accuracy {100 * stats.token.unknown_accuracy:.2f}%")
    print(f"\tPrecision (weighted) {100 * stats.token.weighted_avg.precision:.2f}%")
    print(f"\tRecall (weighted) {100 * stats.token.weighted_avg.recall:.2f}%")
    print(f"\tF1 score (weighted) {100 * stats.token.weighted_avg.f1_score:.2f}%")

    print()
    print(f"Decoder suboptimalities detected: {stats.suboptimalities}")
    print(f"Sentences skipped: {stats.skipped}")
