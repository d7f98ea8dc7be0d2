"""
Custom exception hierarchy for the Shawapoli engine.

Provides typed errors for the few misuse paths the engine treats as
programming errors. Ordinary game outcomes (declined purchases, rolls
outside the roll phase) are reported as messages, not exceptions.
"""


class ShawapoliError(Exception):
    """Base exception for all game-related errors."""


class DecisionError(ShawapoliError):
    """A decision gateway was used outside its single-decision contract."""


class DecisionPendingError(DecisionError):
    """A second decision was requested while one is still outstanding."""


class InvalidChoiceError(DecisionError):
    """The answer is not one of the offered choices."""
