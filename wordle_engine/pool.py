"""
Candidate pools
===============

A Pool is the set of dictionary words still consistent with every
(guess, code) pair seen so far. It is stored as a sorted index array into
a Lexicon, so iteration order is always lexicographic.
"""

import logging
from typing import Iterator, List, Optional, Sequence

import numpy as np
from numba import jit

from .errors import ContractViolation, EnvironmentInconsistency
from .feedback import FeedbackRule, max_code, score
from .oracle import Oracle
from .words import Lexicon, _as_word

logger = logging.getLogger(__name__)


@jit(nopython=True, cache=True)
def match_mask(chars: np.ndarray, guess: np.ndarray, code: int,
               rule: int, counts: np.ndarray) -> np.ndarray:
    """Boolean mask of the rows of ``chars`` that give ``code`` for ``guess``."""
    n = chars.shape[0]
    keep = np.zeros(n, dtype=np.bool_)
    for i in range(n):
        keep[i] = score(guess, chars[i], rule, counts) == code
    return keep


def is_code(code, length: int) -> bool:
    """True for an integer (not a bool) in 0 .. 3**length - 1."""
    return (isinstance(code, (int, np.integer)) and not isinstance(code, bool)
            and 0 <= code <= max_code(length))


def oracle_code(oracle: Oracle, guess: Sequence, length: int) -> int:
    """Ask ``oracle`` for the code of ``guess`` and check the answer."""
    code = oracle.evaluate(guess)
    if not is_code(code, length):
        raise EnvironmentInconsistency(
            f"oracle returned {code!r} for {guess!r}, expected a code in 0..{max_code(length)}"
        )
    return int(code)


class Pool:
    """
    Words of a lexicon still possible as the target.

    Pools are immutable; refining returns a new pool. The feedback rule
    travels with the pool so every consumer scores words the same way.
    """

    def __init__(self, lexicon: Lexicon, indices: Optional[np.ndarray] = None,
                 rule: FeedbackRule = FeedbackRule.MEMBERSHIP):
        """
        Args:
            lexicon: dictionary the pool draws from
            indices: row indices of the members (default: all words);
                sorted and de-duplicated on construction
            rule: feedback rule used to score words against each other
        """
        self.lexicon = lexicon
        if indices is None:
            indices = np.arange(len(lexicon), dtype=np.intp)
        indices = np.unique(np.asarray(indices, dtype=np.intp))
        if len(indices) and (indices[0] < 0 or indices[-1] >= len(lexicon)):
            raise ContractViolation(
                f"pool indices must lie in 0..{len(lexicon) - 1}, got {indices[0]}..{indices[-1]}"
            )
        self.indices = indices
        self.rule = FeedbackRule(rule)
        self._chars = None

    @classmethod
    def full(cls, lexicon: Lexicon, rule: FeedbackRule = FeedbackRule.MEMBERSHIP) -> "Pool":
        return cls(lexicon, rule=rule)

    @classmethod
    def from_words(cls, words: Sequence[Sequence],
                   rule: FeedbackRule = FeedbackRule.MEMBERSHIP) -> "Pool":
        """Build a lexicon from ``words`` and return its full pool."""
        return cls(Lexicon(words), rule=rule)

    def __len__(self) -> int:
        return len(self.indices)

    def __iter__(self) -> Iterator:
        words = self.lexicon.words
        for i in self.indices:
            yield words[i]

    def __contains__(self, word) -> bool:
        idx = self.lexicon.word_to_idx.get(_as_word(word))
        if idx is None:
            return False
        pos = np.searchsorted(self.indices, idx)
        return pos < len(self.indices) and self.indices[pos] == idx

    def __repr__(self) -> str:
        return f"Pool({len(self)} of {len(self.lexicon)} words)"

    @property
    def length(self) -> int:
        """Common word length L."""
        return self.lexicon.length

    @property
    def words(self) -> List:
        return list(self)

    @property
    def chars(self) -> np.ndarray:
        """Symbol codes of the members, shape (len(pool), L)."""
        if self._chars is None:
            self._chars = self.lexicon.chars[self.indices]
        return self._chars

    def new_counts(self) -> np.ndarray:
        """Zeroed per-symbol scratch buffer for the scoring kernel."""
        return np.zeros(max(self.lexicon.n_symbols, 1), dtype=np.int64)

    def refine(self, guess: Sequence, code: int) -> "Pool":
        """Members that would have produced ``code`` for ``guess``."""
        if not is_code(code, self.length):
            raise ContractViolation(
                f"code {code!r} is not a code for length {self.length} (0..{max_code(self.length)})"
            )
        code = int(code)
        guess_row = self.lexicon.encode_word(guess)
        keep = match_mask(self.chars, guess_row, code, int(self.rule), self.new_counts())
        indices = self.indices[keep]

        if len(indices) == 0:
            raise EnvironmentInconsistency(
                f"no word in the pool of {len(self)} gives code {code} for guess {guess!r}"
            )

        logger.debug(f"refine: {guess!r}/{code}: {len(self)} -> {len(indices)} candidates")
        return Pool(self.lexicon, indices, self.rule)


def refine(pool: Pool, guess: Sequence, response) -> Pool:
    """
    Narrow ``pool`` to the words consistent with ``guess`` and its response.

    Args:
        pool: current candidate pool
        guess: the guessed word
        response: either the observed feedback code, or an Oracle that is
            asked once for the code of ``guess``

    Raises:
        EnvironmentInconsistency: the oracle answered with something that is
            not a code, or no member of the pool gives that code
    """
    if isinstance(response, Oracle):
        response = oracle_code(response, guess, pool.length)
    return pool.refine(guess, response)
