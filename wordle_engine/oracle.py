"""Oracles: the hidden side of the game, answering guesses with feedback codes."""

from abc import ABC, abstractmethod
from typing import Iterable, Sequence

import numpy as np

from .errors import ContractViolation
from .feedback import FeedbackRule, encode


class Oracle(ABC):
    """Anything that can score a guess against a target the player cannot see."""

    @abstractmethod
    def evaluate(self, guess: Sequence) -> int:
        """Return the feedback code for ``guess``."""


class FixedTargetOracle(Oracle):
    """Oracle backed by a known target word."""

    def __init__(self, target: Sequence, rule: FeedbackRule = FeedbackRule.MEMBERSHIP):
        self._target = target if isinstance(target, str) else tuple(target)
        self._rule = FeedbackRule(rule)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(rule={self._rule.name})"

    def evaluate(self, guess: Sequence) -> int:
        return encode(guess, self._target, self._rule)

    def reveal(self):
        """The hidden target."""
        return self._target


def random_oracle(words: Iterable[Sequence], rng=None,
                  rule: FeedbackRule = FeedbackRule.MEMBERSHIP) -> FixedTargetOracle:
    """
    Oracle whose target is drawn uniformly from ``words``.

    Args:
        words: candidate targets (a list, a Pool, ...)
        rng: numpy Generator or seed (default: fresh entropy)
        rule: feedback rule the oracle scores with
    """
    words = list(words)
    if not words:
        raise ContractViolation("cannot draw a target from an empty collection")
    rng = np.random.default_rng(rng)
    return FixedTargetOracle(words[int(rng.integers(len(words)))], rule)
