import pytest

from postag import TaggedSentence

# Every word has a single tag.
UNAMBIGUOUS_CORPUS = [
    (["the", "dog", "runs"], ["DT", "NN", "VB"]),
    (["a", "cat", "sleeps"], ["DT", "NN", "VB"]),
    (["the", "old", "dog", "barks"], ["DT", "JJ", "NN", "VB"]),
    (["dogs", "run", "fast"], ["NNS", "VBP", "RB"]),
    (["the", "cat", "runs", "fast"], ["DT", "NN", "VB", "RB"]),
]

# "runs" is tagged VB after a noun and NN after a determiner.
AMBIGUOUS_CORPUS = [
    (["the", "dog", "runs"], ["DT", "NN", "VB"]),
    (["the", "runs"], ["DT", "NN"]),
]


@pytest.fixture
def corpus() -> list[TaggedSentence]:
    return [TaggedSentence(words, tags) for words, tags in UNAMBIGUOUS_CORPUS]


@pytest.fixture
def ambiguous_corpus() -> list[TaggedSentence]:
    return [TaggedSentence(words, tags) for words, tags in AMBIGUOUS_CORPUS]
