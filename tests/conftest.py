import pytest

from wordle_engine import GameContext, Histogram, Lexicon, Pool, wordle_words


@pytest.fixture(scope="session")
def words():
    return wordle_words()


@pytest.fixture(scope="session")
def lexicon(words):
    return Lexicon(words)


@pytest.fixture(scope="session")
def context(lexicon):
    return GameContext(lexicon)


@pytest.fixture
def pool(lexicon):
    return Pool.full(lexicon)


@pytest.fixture
def histogram(lexicon):
    return Histogram.for_lexicon(lexicon)
