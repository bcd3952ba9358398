"""Exceptions raised by the engine."""


class EngineError(Exception):
    """Base class for all engine errors."""


class ContractViolation(EngineError, ValueError):
    """
    A caller broke a precondition.

    Mismatched word lengths, a dictionary with mixed lengths or duplicates,
    symbols outside the alphabet, an empty pool handed to the optimizer.
    """


class EnvironmentInconsistency(EngineError, RuntimeError):
    """The oracle and the dictionary disagree (e.g. a response empties the pool)."""
