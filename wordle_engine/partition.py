"""
Partition counting
==================

A guess splits the pool into classes by the feedback code each member
would produce. The class sizes go in a histogram indexed by code, and
histogram[c] is at once the number of targets that would answer c and the
size of the pool left if c is observed. That is all the optimizer needs.

The histogram is an owned buffer: allocate it once and pass it to every
evaluation. populate() zeroes it before counting.
"""

import numpy as np
from numba import jit

from .errors import ContractViolation
from .feedback import n_codes, score


@jit(nopython=True, cache=True)
def bin_sizes(sizes: np.ndarray, chars: np.ndarray, guess: np.ndarray,
              rule: int, counts: np.ndarray) -> np.ndarray:
    """
    Count how many rows of ``chars`` fall into each feedback code for ``guess``.

    Args:
        sizes: histogram buffer of length 3**L, overwritten
        chars: shape (n, L) pool symbol codes
        guess: shape (L,) guess symbol codes
        rule: FeedbackRule value
        counts: per-symbol scratch buffer for the scoring kernel

    Returns:
        ``sizes``
    """
    for c in range(sizes.shape[0]):
        sizes[c] = 0
    for i in range(chars.shape[0]):
        sizes[score(guess, chars[i], rule, counts)] += 1
    return sizes


class Histogram:
    """
    Reusable per-code count buffers.

    Row 0 is the buffer used by populate() and the sequential optimizer.
    With ``workers > 1`` the optimizer evaluates candidates in parallel and
    hands each worker its own row; rows are never shared between
    concurrent evaluations.
    """

    def __init__(self, length: int, n_symbols: int, workers: int = 1):
        if workers < 1:
            raise ContractViolation(f"workers must be positive, got {workers}")
        self.length = length
        self.buffers = np.zeros((workers, n_codes(length)), dtype=np.int64)
        self.scratch = np.zeros((workers, max(n_symbols, 1)), dtype=np.int64)
        self.counts = self.buffers[0]

    @classmethod
    def for_lexicon(cls, lexicon, workers: int = 1) -> "Histogram":
        return cls(lexicon.length, lexicon.n_symbols, workers)

    def __len__(self) -> int:
        return self.buffers.shape[1]

    def __repr__(self) -> str:
        return f"Histogram(length={self.length}, codes={len(self)}, workers={self.workers})"

    @property
    def workers(self) -> int:
        return self.buffers.shape[0]

    def check(self, pool) -> None:
        """Raise unless this histogram fits the words of ``pool``."""
        if pool.length != self.length:
            raise ContractViolation(
                f"histogram sized for length {self.length}, pool words have length {pool.length}"
            )
        if pool.lexicon.n_symbols > self.scratch.shape[1]:
            raise ContractViolation(
                f"histogram scratch holds {self.scratch.shape[1]} symbols, "
                f"pool alphabet has {pool.lexicon.n_symbols}"
            )


def populate(histogram: Histogram, pool, guess) -> np.ndarray:
    """
    Fill ``histogram`` with the partition of ``pool`` induced by ``guess``.

    Afterwards histogram.counts.sum() == len(pool).

    Returns:
        histogram.counts
    """
    histogram.check(pool)
    guess_row = pool.lexicon.encode_word(guess)
    return bin_sizes(histogram.counts, pool.chars, guess_row,
                     int(pool.rule), histogram.scratch[0])
