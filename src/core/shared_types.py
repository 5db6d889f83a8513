"""
Type definitions used across layers
"""

from __future__ import annotations

from enum import StrEnum


class Side(StrEnum):
    LIGHT = "light"
    DARK = "dark"

    @property
    def opponent(self) -> Side:
        return Side.DARK if self == Side.LIGHT else Side.LIGHT


class Phase(StrEnum):
    NOT_STARTED = "not started"
    RUNNING = "running"
    ENDED = "ended"


class EndReason(StrEnum):
    CHECKMATE = "checkmate"
    STALEMATE = "stalemate"
    KING_CAPTURED = "king captured"
    USER_ENDED = "ended by user"


class IllegalMoveReason(StrEnum):
    """Why the validator refused a move. Values are shown to the user as-is."""

    WRONG_TURN = "it is not this side's turn"
    BLOCKED_PATH = "the path is blocked"
    PATTERN_MISMATCH = "the piece cannot move like that"
    OWN_PIECE_AT_DESTINATION = "the destination holds a piece of the same side"
    SELF_CHECK = "the move would leave the king in check"
