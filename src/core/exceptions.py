"""
Custom exceptions.

Every error raised by the game derives from GameError, so the console session can catch one type,
report the message and ask for the next command. Nothing in here is fatal except RepositoryError.
"""

from src.core.shared_types import IllegalMoveReason


class GameError(Exception):
    """Top level exception for anything going wrong while playing."""


class InvalidPositionError(GameError):
    """Square outside of a-h / 1-8"""


class ParseError(GameError):
    """Command text could not be understood"""


class IllegalMoveError(GameError):
    """The move breaks the movement rules. The reason is kept for the user-facing message."""

    def __init__(self, reason: IllegalMoveReason, message: str | None = None) -> None:
        self.reason = reason
        super().__init__(message or f"Illegal move: {reason.value}.")


class EmptySourceError(GameError):
    """There is no piece on the square you want to move from"""


class GameNotRunningError(GameError):
    """Moves are only accepted while a game is running"""


class GameStateError(GameError):
    """State (or snapshot to restore from) is inconsistent"""


class RepositoryError(GameError):
    """Persistence layer failed"""
