"""
Wordle Engine - Expected-Size Solver
====================================

Plays Wordle-like games (any fixed word length, letters or digits) by
guessing, each turn, the pool word that minimises the expected size of the
pool after the response. Opens with "raise" on the original 2315-word list.
"""

__version__ = "1.0.0"

from .errors import ContractViolation, EngineError, EnvironmentInconsistency
from .feedback import FeedbackRule, Outcome, decode, encode, max_code, n_codes
from .words import Lexicon, load_words, primel_words, wordle_words
from .oracle import FixedTargetOracle, Oracle, random_oracle
from .pool import Pool, refine
from .partition import Histogram, populate
from .optimizer import best_guess, expected_size, score_candidates
from .solver import GameState, Solver, Turn, play_game, play_random_game
from .context import GameContext, benchmark
