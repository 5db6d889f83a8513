"""Defines the types of chess pieces"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Self

from src.core.shared_types import Side

Vector = tuple[int, int]


class PieceKind(Enum):
    PAWN = auto()
    KNIGHT = auto()
    BISHOP = auto()
    ROOK = auto()
    QUEEN = auto()
    KING = auto()


FEN_TO_PIECE: dict[str, PieceKind] = {
    "p": PieceKind.PAWN,
    "n": PieceKind.KNIGHT,
    "b": PieceKind.BISHOP,
    "r": PieceKind.ROOK,
    "q": PieceKind.QUEEN,
    "k": PieceKind.KING,
}

PIECE_TO_FEN: dict[PieceKind, str] = {value: key for key, value in FEN_TO_PIECE.items()}


# --- GEOMETRY ---
STRAIGHTS: tuple[Vector, ...] = ((1, 0), (-1, 0), (0, 1), (0, -1))
DIAGONALS: tuple[Vector, ...] = ((1, 1), (-1, 1), (1, -1), (-1, -1))
KNIGHT_JUMPS: tuple[Vector, ...] = (
    (2, 1),
    (2, -1),
    (-2, 1),
    (-2, -1),
    (1, 2),
    (1, -2),
    (-1, 2),
    (-1, -2),
)


@dataclass(frozen=True)
class MovementPattern:
    """
    Directions a piece travels along.
    Sliding pieces (bishop, rook, queen) keep going along a direction until blocked, the others take a single step.

    NOTE: Pawns are the odd one out (direction depends on the side, captures differ from pushes), see moves.py
    """

    directions: tuple[Vector, ...]
    sliding: bool


MOVEMENT_PATTERNS: dict[PieceKind, MovementPattern] = {
    PieceKind.KNIGHT: MovementPattern(KNIGHT_JUMPS, sliding=False),
    PieceKind.BISHOP: MovementPattern(DIAGONALS, sliding=True),
    PieceKind.ROOK: MovementPattern(STRAIGHTS, sliding=True),
    PieceKind.QUEEN: MovementPattern(STRAIGHTS + DIAGONALS, sliding=True),
    PieceKind.KING: MovementPattern(STRAIGHTS + DIAGONALS, sliding=False),
}


def pawn_direction(side: Side) -> int:
    """Light moves UP the board, Dark moves DOWN"""
    return 1 if side == Side.LIGHT else -1


def pawn_starting_rank(side: Side) -> int:
    return 1 if side == Side.LIGHT else 6


@dataclass(frozen=True)
class Piece:
    kind: PieceKind
    side: Side

    @classmethod
    def from_fen(cls, character: str) -> Self:
        # lower case: Dark pieces, upper case: Light pieces
        side = Side.LIGHT if character.isupper() else Side.DARK
        kind = FEN_TO_PIECE[character.lower()]
        return cls(kind, side)

    def to_fen(self) -> str:
        return (
            PIECE_TO_FEN[self.kind].upper()
            if self.side == Side.LIGHT
            else PIECE_TO_FEN[self.kind].lower()
        )

    @property
    def pattern(self) -> MovementPattern:
        """Geometric attack pattern for this kind. For pawns these are the two forward diagonals (pushes live in moves.py)."""
        if self.kind == PieceKind.PAWN:
            direction = pawn_direction(self.side)
            return MovementPattern(((-1, direction), (1, direction)), sliding=False)
        return MOVEMENT_PATTERNS[self.kind]
