#!/usr/bin/env python3

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Sequence

import matplotlib.pyplot as plt
from sklearn.metrics import ConfusionMatrixDisplay, classification_report
from tqdm import tqdm

from postag import DecodingError, POSTagger, TaggedSentence

logger = logging.getLogger(__name__)


@dataclass
class Metrics:
    precision: float
    recall: float
    f1_score: float


@dataclass
class TokenStats:
    accuracy: float
    unknown_accuracy: float
    weighted_avg: Metrics


@dataclass
class SentenceStats:
    accuracy: float


@dataclass
class Stats:
    """Statistics from evaluating a tagger.

    Attributes
    ----------
    token : TokenStats
        Token level accuracy, accuracy for tokens not seen in training and
        weighted average precision, recall and F1 score over all tags.
    sentence : SentenceStats
        Fraction of sentences with every token tagged correctly.
    suboptimalities : int
        Number of sentences where the gold tagging scored higher than the guessed
        tagging. A non-zero value for an exact decoder indicates a decoding bug.
    skipped : int
        Number of sentences that could not be decoded.
    seed : int | None
        Seed used for train/evaluation split, if any.
    """

    token: TokenStats
    sentence: SentenceStats
    suboptimalities: int
    skipped: int
    seed: int | None = None


def load_tagged_sentences(
    path: str | Path, has_tags: bool = True
) -> list[TaggedSentence]:
    """Read tagged sentences from file.

    Each line contains a word and, optionally, its tag separated by whitespace.
    Sentences are separated by a blank line.

    Parameters
    ----------
    path : str | Path
        Path to file.
    has_tags : bool, optional
        If False, the file only contains words and each tag is set to "".
        Default is True.

    Returns
    -------
    list[TaggedSentence]
        Sentences read from file.

    Raises
    ------
    ValueError
        Raised if has_tags is True and a line has no tag.
    """
    sentences = []
    words, tags = [], []
    with open(path, "r", encoding="utf-8") as f:
        for line_no, line in enumerate(f, 1):
            fields = line.split()
            if not fields:
                if words:
                    sentences.append(TaggedSentence(words, tags))
                words, tags = [], []
                continue

            if has_tags and len(fields) < 2:
                raise ValueError(f"Line {line_no} of {path} has no tag.")

            words.append(fields[0])
            tags.append(fields[1] if has_tags else "")

    # File may not end with a blank line.
    if words:
        sentences.append(TaggedSentence(words, tags))

    logger.info(f"Read {len(sentences):,} sentences from {path}.")
    return sentences


def write_tagged_sentences(
    tagger: POSTagger, sentences: Iterable[TaggedSentence], path: str | Path
) -> None:
    """Tag sentences and write them to file, in the same format read by
    load_tagged_sentences.

    Sentences that cannot be decoded are written with empty tags.

    Parameters
    ----------
    tagger : POSTagger
        Trained tagger.
    sentences : Iterable[TaggedSentence]
        Sentences to tag. Any existing tags are ignored.
    path : str | Path
        Path to write tagged sentences to.
    """
    with open(path, "w", encoding="utf-8") as f:
        for sentence in sentences:
            try:
                guessed_tags = tagger.tag(sentence.words)
            except DecodingError as e:
                logger.warning(f"Could not tag sentence '{sentence}': {e}")
                guessed_tags = [""] * len(sentence)

            for word, tag in zip(sentence.words, guessed_tags):
                f.write(f"{word}\t{tag}\n")
            f.write("\n")

    logger.info(f"Wrote tagged sentences to {path}.")


def extract_vocabulary(sentences: Iterable[TaggedSentence]) -> set[str]:
    vocabulary = set()
    for sentence in sentences:
        vocabulary.update(sentence.words)
    return vocabulary


def aligned_taggings(
    words: Sequence[str],
    gold_tags: Sequence[str],
    guessed_tags: Sequence[str],
    suppress_correct_tags: bool = True,
) -> str:
    """Pretty print the gold and guessed tags for a sentence, aligned with the words.

    Parameters
    ----------
    words : Sequence[str]
        Words of sentence.
    gold_tags : Sequence[str]
        Correct tags.
    guessed_tags : Sequence[str]
        Predicted tags.
    suppress_correct_tags : bool, optional
        If True, only print tags where the guessed tag is incorrect.
        Default is True.

    Returns
    -------
    str
        Three lines: gold tags, guessed tags and words.
    """
    gold_line = "Gold Tags: "
    guessed_line = "Guessed Tags: "
    word_line = "Words: "
    for word, gold, guessed in zip(words, gold_tags, guessed_tags):
        width = max(len(gold_line), len(guessed_line), len(word_line))
        gold_line = gold_line.ljust(width)
        guessed_line = guessed_line.ljust(width)
        word_line = word_line.ljust(width) + word + " "

        if gold == guessed and suppress_correct_tags:
            continue

        gold_line += gold
        guessed_line += guessed

    return "\n".join((gold_line, guessed_line, word_line.rstrip()))


def evaluate(
    tagger: POSTagger,
    sentences: Sequence[TaggedSentence],
    vocabulary: set[str],
    seed: int | None = None,
    verbose: bool = False,
    show_progress: bool = False,
) -> tuple[Stats, list[list[str]], list[list[str]]]:
    """Tag sentences and compare the predicted tags with the gold tags.

    Sentences that cannot be decoded are logged and skipped.

    Parameters
    ----------
    tagger : POSTagger
        Trained tagger.
    sentences : Sequence[TaggedSentence]
        Evaluation sentences with gold tags.
    vocabulary : set[str]
        Words seen in training. Other words are counted as unknown.
    seed : int | None, optional
        Seed used for train/evaluation split, recorded in returned Stats.
    verbose : bool, optional
        If True, log the aligned gold and guessed tags for each sentence.
        Default is False.
    show_progress : bool, optional
        If True, show progress bar.
        Default is False.

    Returns
    -------
    tuple[Stats, list[list[str]], list[list[str]]]
        Evaluation statistics, then the gold tags and the predicted tags for each
        sentence that was not skipped.
    """
    n_tokens, n_correct = 0, 0
    n_unknown, n_unknown_correct = 0, 0
    n_sentences, n_sentences_correct = 0, 0
    suboptimalities, skipped = 0, 0
    truth, predicted = [], []

    for sentence in tqdm(sentences, disable=not show_progress, unit="sentence"):
        try:
            guessed_tags = tagger.tag(sentence.words)
        except DecodingError as e:
            logger.warning(f"Skipping sentence '{sentence}': {e}")
            skipped += 1
            continue

        for word, gold, guessed in zip(sentence.words, sentence.tags, guessed_tags):
            n_tokens += 1
            n_correct += gold == guessed
            if word not in vocabulary:
                n_unknown += 1
                n_unknown_correct += gold == guessed

        n_sentences += 1
        n_sentences_correct += list(sentence.tags) == guessed_tags
        truth.append(list(sentence.tags))
        predicted.append(guessed_tags)

        gold_score = tagger.score_tagging(sentence)
        guessed_score = tagger.score_tagging(
            TaggedSentence(sentence.words, guessed_tags)
        )
        if gold_score > guessed_score:
            suboptimalities += 1
            if verbose:
                logger.warning(
                    "Decoder suboptimality detected. "
                    "Gold tagging has higher score than guessed tagging."
                )

        if verbose:
            logger.info(
                "\n" + aligned_taggings(sentence.words, sentence.tags, guessed_tags)
            )

    flat_truth = [tag for tags in truth for tag in tags]
    flat_predicted = [tag for tags in predicted for tag in tags]
    if flat_truth:
        report = classification_report(
            flat_truth, flat_predicted, output_dict=True, zero_division=0
        )
        weighted_avg = Metrics(
            precision=report["weighted avg"]["precision"],
            recall=report["weighted avg"]["recall"],
            f1_score=report["weighted avg"]["f1-score"],
        )
    else:
        weighted_avg = Metrics(0.0, 0.0, 0.0)

    stats = Stats(
        token=TokenStats(
            accuracy=n_correct / n_tokens if n_tokens else 0.0,
            unknown_accuracy=n_unknown_correct / n_unknown if n_unknown else 0.0,
            weighted_avg=weighted_avg,
        ),
        sentence=SentenceStats(
            accuracy=n_sentences_correct / n_sentences if n_sentences else 0.0
        ),
        suboptimalities=suboptimalities,
        skipped=skipped,
        seed=seed,
    )
    return stats, truth, predicted


def confusion_matrix(
    predicted: list[list[str]],
    truth: list[list[str]],
    path: str | Path = "confusion_matrix.svg",
) -> None:
    """Plot and save a confusion matrix of predicted tags against true tags.

    Parameters
    ----------
    predicted : list[list[str]]
        Predicted tags for each sentence.
    truth : list[list[str]]
        True tags for each sentence.
    path : str | Path, optional
        Path to save figure to.
    """
    flat_truth = [tag for tags in truth for tag in tags]
    flat_predicted = [tag for tags in predicted for tag in tags]
    labels = sorted(set(flat_truth) | set(flat_predicted))

    size = max(6, len(labels) // 2)
    fig, ax = plt.subplots(figsize=(size, size))
    ConfusionMatrixDisplay.from_predictions(
        flat_truth,
        flat_predicted,
        labels=labels,
        ax=ax,
        xticks_rotation="vertical",
        include_values=False,
        colorbar=False,
    )
    fig.tight_layout()
    fig.savefig(path)
    plt.close(fig)
    logger.info(f"Confusion matrix saved to {path}.")
