"""
Game driver
===========

A game is a loop of guess -> oracle -> refine until the oracle answers with
the all-exact code:

    ACTIVE(pool) --guess, code != max--> ACTIVE(refine(pool, guess, code))
    ACTIVE(pool) --guess, code == max--> SOLVED

Guesses are always drawn from the current pool, and a wrong guess drops
itself from the pool, so every game terminates. An optional opening guess
replaces the optimizer on turn one.
"""

import logging
from enum import Enum
from typing import Hashable, List, NamedTuple, Optional, Tuple

from .errors import ContractViolation
from .feedback import Outcome, decode, max_code
from .optimizer import best_guess
from .oracle import Oracle, random_oracle
from .partition import Histogram
from .pool import Pool, oracle_code, refine

logger = logging.getLogger(__name__)


class GameState(Enum):
    ACTIVE = "active"
    SOLVED = "solved"


class Turn(NamedTuple):
    """One row of the turn history."""
    guess: Hashable
    code: int
    feedback: Tuple[Outcome, ...]
    pool_size: int


class Solver:
    """
    Plays one game against an oracle.

    The histogram is borrowed, not owned: several solvers may share one
    buffer as long as they step one at a time.
    """

    def __init__(self, pool: Pool, oracle: Oracle,
                 histogram: Optional[Histogram] = None, opening=None):
        """
        Args:
            pool: initial candidate pool
            oracle: answers guesses for the hidden target
            histogram: buffer for the optimizer (default: a new one)
            opening: precomputed first guess; skips the optimizer on turn one
        """
        self.pool = pool
        self.oracle = oracle
        self.histogram = histogram if histogram is not None else Histogram.for_lexicon(pool.lexicon)
        self.opening = opening
        self.state = GameState.ACTIVE
        self.history: List[Turn] = []
        self._solved_code = max_code(pool.length)

    def next_guess(self):
        if not self.history and self.opening is not None:
            return self.opening
        return best_guess(self.histogram, self.pool)

    def step(self) -> Turn:
        """Play one turn and return its record."""
        if self.state is GameState.SOLVED:
            raise ContractViolation("game is already solved")

        guess = self.next_guess()
        code = oracle_code(self.oracle, guess, self.pool.length)

        turn = Turn(guess, code, decode(code, self.pool.length), len(self.pool))
        self.history.append(turn)
        logger.debug(f"Turn {len(self.history)}: {guess} (pattern {code}, "
                     f"{len(self.pool)} candidates)")

        if code == self._solved_code:
            self.state = GameState.SOLVED
        else:
            self.pool = refine(self.pool, guess, code)
        return turn

    def play(self) -> List[Turn]:
        """Play until solved and return the turn history."""
        while self.state is GameState.ACTIVE:
            self.step()
        return list(self.history)


def _as_pool(pool) -> Pool:
    return pool if isinstance(pool, Pool) else Pool.from_words(pool)


def play_game(oracle: Oracle, pool, histogram: Optional[Histogram] = None,
              opening=None) -> List[Turn]:
    """
    Play a full game against ``oracle``.

    Args:
        oracle: answers guesses for the hidden target
        pool: a Pool or a collection of equal-length words
        histogram: buffer to reuse (default: a new one)
        opening: precomputed first guess

    Returns:
        Turn history, one Turn per guess
    """
    return Solver(_as_pool(pool), oracle, histogram, opening).play()


def play_random_game(pool, rng=None, histogram: Optional[Histogram] = None,
                     opening=None) -> List[Turn]:
    """Play a game whose target is drawn uniformly from ``pool``."""
    pool = _as_pool(pool)
    return play_game(random_oracle(pool, rng, pool.rule), pool, histogram, opening)
