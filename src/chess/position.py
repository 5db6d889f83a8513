"""
A square on the board

(placed in its own module as multiple other modules need to import it)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from src.core.exceptions import InvalidPositionError
from src.core.shared_types import Side

# Chess board is always 8x8. Just in case we want to try some funky stuff, make it adjustable
BOARD_DIMENSIONS = (8, 8)
FILE_NAMES = "abcdefgh"


def is_within_bounds(file: int, rank: int) -> bool:
    return (0 <= file < BOARD_DIMENSIONS[0]) and (0 <= rank < BOARD_DIMENSIONS[1])


@dataclass(frozen=True)
class Position:
    """Zero based coordinates: a1 is (0, 0), h8 is (7, 7)"""

    file: int
    rank: int

    def __post_init__(self) -> None:
        if not is_within_bounds(self.file, self.rank):
            raise InvalidPositionError(
                f"Square ({self.file}, {self.rank}) is not on the board."
            )

    @classmethod
    def from_algebraic(cls, sq: str) -> Position:
        """Algebraic notation: 'a1' - 'h8' get converted to (0,0) - (7,7). The file letter may be upper case."""
        sq = sq.strip().lower()
        if len(sq) != 2 or sq[0] not in FILE_NAMES or not sq[1].isdigit():
            raise InvalidPositionError(f"Cannot interpret {sq!r} as a square name.")
        return cls(FILE_NAMES.index(sq[0]), int(sq[1]) - 1)

    def to_algebraic(self) -> str:
        return f"{FILE_NAMES[self.file]}{self.rank + 1}"

    def shifted(self, df: int, dr: int) -> Optional[Position]:
        """The square `df` files and `dr` ranks away, or None when that falls off the board"""
        file = self.file + df
        rank = self.rank + dr
        if not is_within_bounds(file, rank):
            return None
        return Position(file, rank)

    @property
    def square_color(self) -> Side:
        """a1 is a dark square"""
        return Side.DARK if (self.file + self.rank) % 2 == 0 else Side.LIGHT

    def __str__(self) -> str:
        return self.to_algebraic()


ALL_POSITIONS: tuple[Position, ...] = tuple(
    Position(file, rank)
    for rank in range(BOARD_DIMENSIONS[1])
    for file in range(BOARD_DIMENSIONS[0])
)
