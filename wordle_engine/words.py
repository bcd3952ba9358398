"""
Word representation
===================

Words enter the engine as strings (or tuples of symbols) and are converted
once, when a Lexicon is built, into rows of a uint8 matrix of symbol codes.
Every kernel in the hot loop works on those fixed-length rows only.

Also home to the word-list helpers: plain text files, the bundled original
Wordle target pool (2315 words) and the Primel pool of zero-padded primes.
"""

import logging
from importlib import resources
from itertools import chain
from typing import Dict, Hashable, Iterable, List, Optional, Sequence, Tuple

import numpy as np

from .errors import ContractViolation

logger = logging.getLogger(__name__)

# Symbol codes are stored as uint8
MAX_SYMBOLS = 256


def _as_word(word) -> Hashable:
    return word if isinstance(word, str) else tuple(word)


class Lexicon:
    """
    An immutable, sorted dictionary of equal-length words.

    Words are kept in lexicographic order so that row order is the
    canonical candidate order used for tie-breaking.

    Attributes:
        words: tuple of words, sorted
        length: common word length L
        alphabet: sorted tuple of distinct symbols; a symbol's code is its index
        chars: read-only array of shape (n_words, L), dtype uint8
    """

    def __init__(self, words: Iterable[Sequence], alphabet: Optional[Sequence] = None):
        """
        Args:
            words: non-empty collection of equal-length words
            alphabet: symbols that may appear in words and guesses
                (default: the symbols occurring in ``words``)
        """
        words = [_as_word(w) for w in words]
        if not words:
            raise ContractViolation("dictionary is empty")

        length = len(words[0])
        if length == 0:
            raise ContractViolation("dictionary words must not be empty")
        mismatched = [w for w in words if len(w) != length]
        if mismatched:
            raise ContractViolation(
                f"lengths of dictionary words are not consistent: expected {length}, "
                f"got {mismatched[:5]}"
            )

        ordered = sorted(words)
        duplicates = sorted({a for a, b in zip(ordered, ordered[1:]) if a == b})
        if duplicates:
            raise ContractViolation(f"dictionary contains duplicates: {duplicates[:5]}")

        if alphabet is None:
            alphabet = sorted(set(chain.from_iterable(ordered)))
        self.alphabet: Tuple = tuple(alphabet)
        if len(self.alphabet) > MAX_SYMBOLS:
            raise ContractViolation(
                f"alphabet has {len(self.alphabet)} symbols, at most {MAX_SYMBOLS} supported"
            )
        self.symbol_to_code: Dict = {s: i for i, s in enumerate(self.alphabet)}

        self.words: Tuple = tuple(ordered)
        self.length = length
        self.word_to_idx = {w: i for i, w in enumerate(self.words)}

        self.chars = self.words_to_chars(self.words)
        self.chars.flags.writeable = False

        logger.debug(f"Lexicon: {len(self.words)} words of length {length}, "
                     f"{len(self.alphabet)} symbols")

    def __len__(self) -> int:
        return len(self.words)

    def __contains__(self, word) -> bool:
        return _as_word(word) in self.word_to_idx

    def __repr__(self) -> str:
        return f"Lexicon({len(self.words)} words, length={self.length})"

    @property
    def n_symbols(self) -> int:
        return len(self.alphabet)

    def encode_word(self, word: Sequence) -> np.ndarray:
        """Convert one word to its row of symbol codes, shape (L,)."""
        if len(word) != self.length:
            raise ContractViolation(
                f"word {word!r} has length {len(word)}, expected {self.length}"
            )
        row = np.empty(self.length, dtype=np.uint8)
        for j, s in enumerate(word):
            code = self.symbol_to_code.get(s)
            if code is None:
                raise ContractViolation(f"symbol {s!r} in {word!r} is not in the alphabet")
            row[j] = code
        return row

    def words_to_chars(self, words: Sequence[Sequence]) -> np.ndarray:
        """Convert words to a symbol-code array of shape (len(words), L)."""
        arr = np.zeros((len(words), self.length), dtype=np.uint8)
        for i, w in enumerate(words):
            arr[i] = self.encode_word(w)
        return arr


# ============================================================================
# WORD LISTS
# ============================================================================

def load_words(filepath: str) -> List[str]:
    """Load word list from file, one word per line."""
    with open(filepath, 'r') as f:
        return [line.strip().lower() for line in f if line.strip()]


def wordle_words() -> List[str]:
    """The original 2315-word Wordle target pool."""
    text = resources.files(__package__).joinpath("data").joinpath("words.txt").read_text()
    return [line.strip() for line in text.splitlines() if line.strip()]


def primel_words(length: int = 5) -> List[str]:
    """
    Target pool for Primel: every prime below 10**length, zero-padded.

    There are 9592 such words for the default length of 5.
    """
    if length < 1:
        raise ContractViolation(f"length must be positive, got {length}")
    limit = 10 ** length
    sieve = np.ones(limit, dtype=np.bool_)
    sieve[:2] = False
    for p in range(2, int(limit ** 0.5) + 1):
        if sieve[p]:
            sieve[p * p::p] = False
    return [str(p).zfill(length) for p in np.flatnonzero(sieve)]
