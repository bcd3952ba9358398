"""
Guess selection
===============

If the target is uniform over a pool of n words and a guess splits the pool
into classes of sizes h[c], the code c is observed with probability h[c]/n
and leaves h[c] words. The expected pool size after the guess is therefore

    sum(h[c]**2) / n

and the best guess is the candidate minimising it. Candidates are compared
on the exact integer sum of squares and visited in lexicographic order, so
the first candidate reaching the minimum wins.

Cost is O(candidates * pool * L); candidates default to the pool itself.
"""

import logging
from typing import List, Optional, Sequence, Tuple

import numpy as np
from numba import jit, prange

from .errors import ContractViolation
from .partition import Histogram, bin_sizes, populate
from .pool import Pool
from .words import _as_word

logger = logging.getLogger(__name__)


# ============================================================================
# NUMBA-ACCELERATED SCORING
# ============================================================================

@jit(nopython=True, cache=True)
def sum_squares(sizes: np.ndarray) -> int:
    total = 0
    for c in range(sizes.shape[0]):
        s = sizes[c]
        total += s * s
    return total


@jit(nopython=True, cache=True)
def best_candidate(sizes: np.ndarray, chars: np.ndarray, cand_chars: np.ndarray,
                   rule: int, counts: np.ndarray) -> Tuple[int, int]:
    """
    Index of the candidate with the smallest sum of squared class sizes.

    One histogram buffer is reused for every candidate. Ties keep the
    earliest candidate.

    Returns:
        (best index, its sum of squares)
    """
    best = -1
    best_total = 0
    for k in range(cand_chars.shape[0]):
        bin_sizes(sizes, chars, cand_chars[k], rule, counts)
        total = sum_squares(sizes)
        if best < 0 or total < best_total:
            best = k
            best_total = total
    return best, best_total


@jit(nopython=True, parallel=True, cache=True)
def candidate_totals(buffers: np.ndarray, chars: np.ndarray, cand_chars: np.ndarray,
                     rule: int, scratch: np.ndarray) -> np.ndarray:
    """
    Sum of squared class sizes for every candidate, in parallel.

    Worker w owns buffers[w] and scratch[w] and evaluates candidates
    w, w + n_workers, w + 2*n_workers, ...
    """
    n_workers = buffers.shape[0]
    m = cand_chars.shape[0]
    totals = np.zeros(m, dtype=np.int64)
    for w in prange(n_workers):
        for k in range(w, m, n_workers):
            bin_sizes(buffers[w], chars, cand_chars[k], rule, scratch[w])
            totals[k] = sum_squares(buffers[w])
    return totals


# ============================================================================
# PUBLIC API
# ============================================================================

def _check_pool(histogram: Histogram, pool: Pool) -> None:
    if len(pool) == 0:
        raise ContractViolation("cannot evaluate guesses against an empty pool")
    histogram.check(pool)


def _candidate_chars(pool: Pool, candidates) -> Tuple[List, np.ndarray]:
    """Candidate words in canonical order and their symbol codes."""
    if candidates is None:
        candidates = pool
    if isinstance(candidates, Pool) and candidates.lexicon is pool.lexicon:
        return candidates.words, candidates.chars
    words = sorted({_as_word(w) for w in candidates})
    return words, pool.lexicon.words_to_chars(words)


def expected_size(histogram: Histogram, pool: Pool, guess: Sequence) -> float:
    """Expected pool size after guessing ``guess``, target uniform over ``pool``."""
    _check_pool(histogram, pool)
    sizes = populate(histogram, pool, guess)
    return sum_squares(sizes) / len(pool)


def score_candidates(histogram: Histogram, pool: Pool,
                     candidates=None) -> Tuple[List, np.ndarray]:
    """
    Sum of squared class sizes for each candidate guess.

    Divide by len(pool) to get expected sizes.

    Returns:
        (candidate words in canonical order, int64 array of sums)
    """
    _check_pool(histogram, pool)
    words, cand_chars = _candidate_chars(pool, candidates)
    totals = candidate_totals(histogram.buffers, pool.chars, cand_chars,
                              int(pool.rule), histogram.scratch)
    return words, totals


def best_guess(histogram: Histogram, pool: Pool, candidates: Optional[Sequence] = None):
    """
    The candidate minimising the expected pool size.

    Args:
        histogram: buffer sized for the pool's word length
        pool: current candidate pool, non-empty
        candidates: words to consider as guesses (default: the pool).
            Visited in lexicographic order; the first minimiser wins.

    Raises:
        ContractViolation: empty pool or no candidates
    """
    _check_pool(histogram, pool)
    words, cand_chars = _candidate_chars(pool, candidates)
    if not words:
        raise ContractViolation("no candidate guesses to choose from")

    if histogram.workers > 1:
        totals = candidate_totals(histogram.buffers, pool.chars, cand_chars,
                                  int(pool.rule), histogram.scratch)
        best = int(np.argmin(totals))
        best_total = int(totals[best])
    else:
        best, best_total = best_candidate(histogram.counts, pool.chars, cand_chars,
                                          int(pool.rule), histogram.scratch[0])

    logger.debug(f"best_guess: {words[best]!r} over {len(words)} candidates, "
                 f"expected size {best_total / len(pool):.2f} of {len(pool)}")
    return words[best]
