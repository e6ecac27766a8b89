#!/usr/bin/env python3

import argparse
import json
import logging
import sys

from train import (
    grid_search,
    train_single,
)

LOGGING_LEVEL = {
    0: logging.INFO,
    1: logging.DEBUG,
}


def add_data_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--train",
        help="Path to tagged training sentences, one 'word tag' pair per line",
        type=str,
        dest="train",
        required=True,
    )
    parser.add_argument(
        "--dev",
        help="Path to tagged evaluation sentences. "
        "If not given, the training sentences are split.",
        type=str,
        dest="dev",
        default=None,
    )
    parser.add_argument(
        "--split",
        default=0.20,
        type=float,
        help="Fraction of training sentences to be used for evaluation, "
        "if --dev is not given",
    )
    parser.add_argument(
        "--seed",
        default=None,
        type=int,
        help="Seed value used for train/evaluation split.",
    )
    parser.add_argument(
        "-v",
        help="Enable verbose output. Use twice to print every evaluation sentence.",
        action="count",
        default=0,
        dest="verbose",
    )


if __name__ == "__main__":
    parser = argparse.ArgumentParser(
        description="Train a trigram HMM part of speech tagger."
    )
    subparsers = parser.add_subparsers(dest="command", help="Training commands")

    train_parser = subparsers.add_parser("train", help="Train tagger.")
    add_data_arguments(train_parser)
    train_parser.add_argument(
        "--scorer",
        choices=["most_frequent", "trigram_hmm"],
        default="trigram_hmm",
        help="Local trigram scorer used to score tags.",
    )
    train_parser.add_argument(
        "--decoder",
        choices=["greedy", "viterbi"],
        default="viterbi",
        help="Decoder used to find the best tag sequence.",
    )
    train_parser.add_argument(
        "--no-restrict-trigrams",
        action="store_false",
        dest="restrict_trigrams",
        help="Allow tag trigrams not seen in training.",
    )
    train_parser.add_argument(
        "--lambda1",
        default=0.6,
        type=float,
        help="Initial trigram interpolation weight.",
    )
    train_parser.add_argument(
        "--lambda2",
        default=0.3,
        type=float,
        help="Initial bigram interpolation weight.",
    )
    train_parser.add_argument(
        "--no-deleted-interpolation",
        action="store_false",
        dest="estimate_lambdas",
        help="Use --lambda1 and --lambda2 instead of estimating interpolation weights.",
    )
    train_parser.add_argument(
        "--blind",
        help="Path to untagged sentences to tag with the trained tagger",
        type=str,
        default=None,
    )
    train_parser.add_argument(
        "--output",
        help="Path to write tagged --blind sentences to",
        type=str,
        default=None,
    )
    train_parser.add_argument(
        "--confusion",
        action="store_true",
        help="Plot confusion matrix of token tags.",
    )

    gridsearch_parser_help = "Grid search over tagger hyperparameters."
    gridsearch_parser = subparsers.add_parser(
        "gridsearch", help=gridsearch_parser_help
    )
    add_data_arguments(gridsearch_parser)
    gridsearch_parser.add_argument(
        "--hyperparameters",
        help="JSON dict of TaggerConfig field to list of values, e.g. "
        '\'{"scorer": ["most_frequent", "trigram_hmm"], "decoder": ["viterbi"]}\'',
        type=json.loads,
        required=True,
    )

    args = parser.parse_args()

    logging.basicConfig(
        stream=sys.stdout,
        level=LOGGING_LEVEL[min(args.verbose, 1)],
        format="[%(levelname)s] (%(module)s) %(message)s",
    )

    if args.command == "train":
        train_single(args)
    elif args.command == "gridsearch":
        grid_search(args)
