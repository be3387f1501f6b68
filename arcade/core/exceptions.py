"""
Custom exceptions shared by all layers.

Everything raised on purpose derives from GameError, so callers higher up can catch one top-level type.
"""


class GameError(Exception):
    """Base class for all errors raised by the arcade."""


class IllegalMoveError(GameError):
    """The action violates the current state of the match (occupied cell, not your turn, game over, ...)."""


class OutOfRangeError(GameError):
    """A guess outside of the allowed domain."""


class GameStateError(GameError):
    """Operation requested in the wrong phase of the match lifecycle."""


class InvariantViolationError(GameError):
    """
    A programming-logic fault, e.g. the opponent being asked to move on a full board.

    NOTE never caught by the service layer: this indicates a scheduling bug.
    """


class RepositoryError(GameError):
    """Requested record / session does not exist."""


class InvalidRequestError(GameError):
    """Request model failed validation at the boundary."""
