"""
Exceptions raised by the twentyone engine.

Rule-level rejections (raising beyond the balance, splitting an unsplittable
hand and so on) are never exceptions; actions report them by returning False.
The classes here signal broken invariants that the game cannot recover from.
"""


class TwentyOneError(Exception):
    """Base class for twentyone errors."""

    pass


class EmptyDeckError(TwentyOneError, IndexError):
    """Raised when a card is drawn from an exhausted deck."""

    pass


class SettlementError(TwentyOneError):
    """Raised when a bet is settled without a dealer hand to settle against."""

    pass


class ActionQueueFault(TwentyOneError):
    """Raised by the action queue once a queued action has failed."""

    pass
