"""Exceptions raised by the rules engine."""


class SolitaireError(Exception):
    """Base class for rules engine errors."""


class PreconditionError(SolitaireError, ValueError):
    """
    An operation was called while its precondition did not hold.

    Examples are drawing from an empty deck, peeking at an empty pile or
    moving a card that fails its legality check. Callers avoid these by
    checking the matching predicate first.
    """


class InvariantError(SolitaireError, RuntimeError):
    """The game state is internally inconsistent (e.g. a card is in no zone)."""
