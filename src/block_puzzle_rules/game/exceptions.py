"""Exceptions raised by the rules engine.

Only precondition violations are raised. Rejected placements, missing legal
moves and unavailable items are ordinary return values.
"""


class RulesError(Exception):
    """Base class for rules engine errors."""


class EmptyCollectionError(RulesError):
    """Raised when sampling from an empty catalog or palette."""


class MalformedShapeError(RulesError, ValueError):
    """Raised for empty, jagged or non-binary shape input."""


class InvalidMoveError(RulesError):
    """Raised when a game session is asked to act on a piece it cannot use."""
