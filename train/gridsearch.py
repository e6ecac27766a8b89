#!/usr/bin/env python3

import argparse
import logging
import time
from dataclasses import asdict, fields
from datetime import timedelta
from itertools import product

from tabulate import tabulate
from tqdm import tqdm

from postag import TaggedSentence, TaggerConfig, build_tagger, default_config

from .train_model import split_sentences
from .training_utils import (
    Stats,
    evaluate,
    extract_vocabulary,
    load_tagged_sentences,
)

logger = logging.getLogger(__name__)


def param_combos(params: dict) -> list[TaggerConfig]:
    """Generate list of TaggerConfig covering all possible combinations of parameters
    and their values given in the params input.

    Parameters
    ----------
    params : dict
        dict of parameters with list of values for each parameter

    Returns
    -------
    list[TaggerConfig]
        list of configurations, where each configuration has a single value for each
        parameter. The configurations cover all possible combinations of the input
        parameters.

    Raises
    ------
    KeyError
        Raised if a parameter is not a field of TaggerConfig.
    """
    config_fields = {f.name for f in fields(TaggerConfig)}
    combinations = []
    for combo in product(*params.values()):
        iteration = dict(zip(params.keys(), combo))

        config = default_config()
        # modify fields of config for combination of params in iteration
        for key, value in iteration.items():
            if key not in config_fields:
                raise KeyError(
                    f"'{key}' is not a hyper-parameter that can be searched over."
                )
            setattr(config, key, value)

        combinations.append(config)

    return combinations


def train_model_grid_search(
    config: TaggerConfig,
    train_sentences: list[TaggedSentence],
    eval_sentences: list[TaggedSentence],
    vocabulary: set[str],
    seed: int,
) -> dict:
    """Train tagger using given configuration, returning tagger performance
    statistics, configuration and elapsed training time.

    Parameters
    ----------
    config : TaggerConfig
        Configuration to train tagger with.
    train_sentences : list[TaggedSentence]
        Sentences to train tagger with.
    eval_sentences : list[TaggedSentence]
        Sentences to evaluate tagger with.
    vocabulary : set[str]
        Words in train_sentences.
    seed : int
        Seed used to split training and evaluation sentences.

    Returns
    -------
    dict
        Statistics from evaluating the tagger
    """
    start_time = time.monotonic()

    tagger = build_tagger(config)
    tagger.train(train_sentences)
    stats, _, _ = evaluate(tagger, eval_sentences, vocabulary, seed=seed)

    return {
        "params": config,
        "stats": stats,
        "time": time.monotonic() - start_time,
    }


def format_results(eval_results: list[dict]) -> str:
    """Format grid search results as a table, best token accuracy first.

    Parameters
    ----------
    eval_results : list[dict]
        Results returned by train_model_grid_search.

    Returns
    -------
    str
        Table of results.
    """
    eval_results = sorted(
        eval_results, key=lambda x: x["stats"].token.accuracy, reverse=True
    )

    headers = [
        "Scorer",
        "Decoder",
        "Parameters",
        "Token accuracy",
        "Unknown accuracy",
        "Sentence accuracy",
        "Suboptimal",
        "Time",
    ]
    table = []
    for result in eval_results:
        params = asdict(result["params"])
        scorer = params.pop("scorer")
        decoder = params.pop("decoder")
        stats: Stats = result["stats"]
        elapsed = timedelta(seconds=int(result["time"]))
        table.append(
            [
                scorer,
                decoder,
                ", ".join([f"{k}={v}" for k, v in params.items()]),
                f"{100 * stats.token.accuracy:.2f}%",
                f"{100 * stats.token.unknown_accuracy:.2f}%",
                f"{100 * stats.sentence.accuracy:.2f}%",
                stats.suboptimalities,
                str(elapsed),
            ]
        )

    return tabulate(
        table,
        headers=headers,
        tablefmt="fancy_grid",
        maxcolwidths=[None, None, 80, None, None, None, None, None],
    )


def grid_search(args: argparse.Namespace):
    """Perform a grid search over the specified hyperparameters and print the tagger
    performance statistics for each combination of parameters.

    Parameters
    ----------
    args : argparse.Namespace
        Grid search configuration
    """
    configs = param_combos(args.hyperparameters)

    sentences = load_tagged_sentences(args.train)
    seed = args.seed
    if args.dev is None:
        train_sentences, eval_sentences, seed = split_sentences(
            sentences, args.split, seed
        )
    else:
        train_sentences, eval_sentences = sentences, load_tagged_sentences(args.dev)
    vocabulary = extract_vocabulary(train_sentences)

    logger.info(f"Grid search over {len(configs)} hyperparameters combinations.")

    # Disable logging below WARNING level while training each configuration
    log_level = logging.root.manager.disable
    logging.disable(logging.INFO)
    try:
        eval_results = [
            train_model_grid_search(
                config, train_sentences, eval_sentences, vocabulary, seed
            )
            for config in tqdm(configs)
        ]
    finally:
        # Restore logging to previous setting
        logging.disable(log_level)

    print(format_results(eval_results))
