"""
Game contexts
=============

The opening guess depends only on the dictionary, and it is by far the most
expensive guess to compute because the pool is largest on turn one. A
GameContext computes it once and shares it, together with one histogram
buffer, with every game played against that dictionary.
"""

import logging
import time
from collections import Counter
from typing import Dict, Iterable, List, Optional, Sequence

from .errors import ContractViolation
from .feedback import FeedbackRule
from .optimizer import best_guess, expected_size
from .oracle import FixedTargetOracle, Oracle, random_oracle
from .partition import Histogram
from .pool import Pool
from .solver import Solver, Turn
from .words import Lexicon

logger = logging.getLogger(__name__)


class GameContext:
    """
    A dictionary bundled with its cached opening guess and a histogram buffer.

    Games built from one context must be played one at a time since they
    share the histogram.
    """

    def __init__(self, words, rule: FeedbackRule = FeedbackRule.MEMBERSHIP,
                 workers: int = 1, alphabet: Optional[Sequence] = None):
        """
        Args:
            words: the full dictionary, a Lexicon or a collection of
                equal-length words
            rule: feedback rule for every game of this context
            workers: histogram rows for the parallel optimizer (1 = sequential)
            alphabet: symbols allowed in words and guesses (default: inferred)

        Raises:
            ContractViolation: empty dictionary, mixed lengths or duplicates
        """
        self.lexicon = words if isinstance(words, Lexicon) else Lexicon(words, alphabet)
        self.rule = FeedbackRule(rule)
        self.pool = Pool.full(self.lexicon, self.rule)
        self.histogram = Histogram.for_lexicon(self.lexicon, workers)

        logger.info(f"Computing opening guess over {len(self.lexicon)} words...")
        start = time.time()
        self.opening = best_guess(self.histogram, self.pool)
        self.opening_size = expected_size(self.histogram, self.pool, self.opening)
        logger.info(f"Opening guess: {self.opening} (expected pool {self.opening_size:.2f}), "
                    f"done in {time.time() - start:.1f}s")

    def __repr__(self) -> str:
        return (f"GameContext({len(self.lexicon)} words, length={self.length}, "
                f"opening={self.opening!r})")

    @property
    def length(self) -> int:
        return self.lexicon.length

    @property
    def words(self):
        return self.lexicon.words

    def solver(self, oracle: Oracle) -> Solver:
        """A fresh game against ``oracle`` that starts with the cached opening."""
        return Solver(self.pool, oracle, self.histogram, self.opening)

    def play(self, oracle: Oracle) -> List[Turn]:
        return self.solver(oracle).play()

    def play_target(self, target) -> List[Turn]:
        """Play against a known target from the dictionary."""
        if target not in self.lexicon:
            raise ContractViolation(f"target {target!r} is not in the dictionary")
        return self.play(FixedTargetOracle(target, self.rule))

    def play_random(self, rng=None) -> List[Turn]:
        """Play against a target drawn uniformly from the dictionary."""
        return self.play(random_oracle(self.lexicon.words, rng, self.rule))


def benchmark(context: GameContext, targets: Optional[Iterable] = None) -> Dict:
    """
    Play one game per target and summarise the number of guesses.

    Args:
        context: game context to play with
        targets: words to use as targets (default: the whole dictionary)

    Returns:
        Dict with results
    """
    targets = list(context.words if targets is None else targets)
    if not targets:
        raise ContractViolation("no targets to benchmark")

    dist = Counter()
    total_guesses = 0

    start = time.time()
    for i, word in enumerate(targets):
        if i and i % 500 == 0:
            elapsed = time.time() - start
            rate = i / elapsed if elapsed > 0 else 0
            logger.info(f"[{i}/{len(targets)}] {rate:.1f} w/s, avg={total_guesses / i:.4f}")

        n = len(context.play_target(word))
        dist[n] += 1
        total_guesses += n

    elapsed = time.time() - start

    return {
        'total': len(targets),
        'total_guesses': total_guesses,
        'average': total_guesses / len(targets),
        'distribution': dict(sorted(dist.items())),
        'max_guesses': max(dist),
        'time': elapsed,
        'rate': len(targets) / elapsed if elapsed > 0 else float('inf'),
    }
