"""
Feedback codes
==============

The response to a guess classifies every position as absent (0), present
elsewhere (1) or exact (2). The per-position digits are read as a base-3
number, most significant digit first, so for words of length L the codes
are the integers 0 .. 3**L - 1 and 3**L - 1 means "all exact".

    arise vs rebus -> 0 1 0 1 1 -> 31
    route vs rebus -> 2 0 1 0 1 -> 172

Two rules for repeated symbols are supported:

MEMBERSHIP (default)
    A non-exact guess symbol scores 1 if it occurs anywhere in the target.
    Repeated guess letters can all score 1 against a single occurrence.

COUNTED
    The official game's rule. Exact matches are taken first, then each
    remaining target occurrence can mark at most one guess symbol as
    present, allocated left to right.

    speed vs abide -> MEMBERSHIP 0 0 1 1 1 (13), COUNTED 0 0 1 0 1 (10)
"""

from enum import IntEnum
from itertools import chain
from typing import Sequence, Tuple

import numpy as np
from numba import jit

from .errors import ContractViolation


# ============================================================================
# CONSTANTS
# ============================================================================

N_OUTCOMES = 3


class Outcome(IntEnum):
    ABSENT = 0
    PRESENT = 1
    EXACT = 2


class FeedbackRule(IntEnum):
    MEMBERSHIP = 0
    COUNTED = 1


_COUNTED = int(FeedbackRule.COUNTED)


def n_codes(length: int) -> int:
    """Number of distinct feedback codes for words of ``length`` symbols."""
    return N_OUTCOMES ** length


def max_code(length: int) -> int:
    """The all-exact code."""
    return n_codes(length) - 1


# ============================================================================
# NUMBA-ACCELERATED FEEDBACK COMPUTATION
# ============================================================================

@jit(nopython=True, cache=True)
def score(guess: np.ndarray, target: np.ndarray, rule: int, counts: np.ndarray) -> int:
    """
    Compute the feedback code for a guess against a target.

    Args:
        guess: shape (L,) array of symbol codes
        target: shape (L,) array of symbol codes
        rule: FeedbackRule value
        counts: scratch buffer, one zeroed slot per symbol; only used by
            the COUNTED rule and left zeroed on return

    Returns:
        Integer feedback code (0 .. 3**L - 1)
    """
    n = guess.shape[0]
    code = 0

    if rule == _COUNTED:
        # Target symbols not consumed by an exact match
        for i in range(n):
            if guess[i] != target[i]:
                counts[target[i]] += 1

        for i in range(n):
            g = guess[i]
            code *= 3
            if g == target[i]:
                code += 2
            elif counts[g] > 0:
                code += 1
                counts[g] -= 1

        for i in range(n):
            counts[target[i]] = 0
    else:
        for i in range(n):
            g = guess[i]
            code *= 3
            if g == target[i]:
                code += 2
            else:
                for j in range(n):
                    if target[j] == g:
                        code += 1
                        break

    return code


# ============================================================================
# WORD-LEVEL API
# ============================================================================

def encode(guess: Sequence, target: Sequence,
           rule: FeedbackRule = FeedbackRule.MEMBERSHIP) -> int:
    """
    Feedback code for ``guess`` against ``target``.

    Words may be strings or any sequences of hashable symbols; both must
    have the same length.
    """
    if len(guess) != len(target):
        raise ContractViolation(
            f"guess {guess!r} and target {target!r} differ in length "
            f"({len(guess)} != {len(target)})"
        )
    symbols = {s: i for i, s in enumerate(dict.fromkeys(chain(guess, target)))}
    g = np.array([symbols[s] for s in guess], dtype=np.intp)
    t = np.array([symbols[s] for s in target], dtype=np.intp)
    counts = np.zeros(max(len(symbols), 1), dtype=np.int64)
    return int(score(g, t, int(rule), counts))


def decode(code: int, length: int) -> Tuple[Outcome, ...]:
    """
    Split a feedback code back into its per-position outcomes.

    This inverts the digit layout only; a code does not identify a target.
    """
    if not 0 <= code < n_codes(length):
        raise ContractViolation(
            f"code {code} out of range for length {length} (0..{max_code(length)})"
        )
    digits = []
    for _ in range(length):
        code, r = divmod(code, N_OUTCOMES)
        digits.append(Outcome(r))
    return tuple(reversed(digits))
