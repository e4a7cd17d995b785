"""Exceptions shared by all layers"""


class GameError(Exception):
    """Base class for everything the chess backend raises on purpose."""


class InvalidPositionError(GameError):
    """Coordinates outside of the 8x8 board, or a square name that cannot be parsed."""


class BoardStateError(GameError):
    """
    Invariant violation: the Board / Player registries got out of sync.

    NOTE: Never caught inside the domain layer. If this is raised, the orchestrator called a primitive without
    checking its precondition first, and continuing would corrupt the game.
    """


class InvalidRequestError(GameError):
    """Raised by the request model validators (not a ValueError, so pydantic lets it through unchanged)."""
