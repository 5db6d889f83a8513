"""The Game board holds the `position` (in chess: the configuration of pieces on the board). It applies no rules itself."""

from typing import Optional, Self

from src.chess.pieces import Piece, PieceKind
from src.chess.position import ALL_POSITIONS, BOARD_DIMENSIONS, Position
from src.core.exceptions import EmptySourceError, GameStateError
from src.core.shared_types import Side

STARTING_POSITION_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR"
EMPTY_FEN = "/".join(["8"] * BOARD_DIMENSIONS[1])


class Board:
    """Only occupied squares are stored. A square missing from `position` is empty."""

    def __init__(self, position: Optional[dict[Position, Piece]] = None) -> None:
        self.position: dict[Position, Piece] = dict(position or {})

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self.position == other.position

    def __repr__(self) -> str:
        return f"Board({self.to_fen()!r})"

    # -- CREATION LOGIC ---
    @classmethod
    def empty(cls) -> Self:
        return cls()

    @classmethod
    def starting_position(cls) -> Self:
        return cls.from_fen(STARTING_POSITION_FEN)

    @classmethod
    def from_fen(cls, fen_str: str) -> Self:
        """Construct a board using the piece placement part of a FEN string.

        ex. standard starting position:
        rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR
        means:
        * dark pieces are on the 8th rank, starting with rook on a8, knight on b8, etc.
        * pawns cover 7th rank entirely
        * ranks 6 through 3 have 8 consecutive empty squares
        * rank 2 are the light pawns (capital letters)
        * 1st rank are the light pieces.
        """
        position: dict[Position, Piece] = {}
        fen_by_ranks = fen_str.split("/")
        if len(fen_by_ranks) != BOARD_DIMENSIONS[1]:
            raise GameStateError(f"Expected {BOARD_DIMENSIONS[1]} ranks in {fen_str!r}")

        for rank_idx, fen_one_rank in enumerate(fen_by_ranks):
            # FEN string is read from top rank (8th) to bottom rank (1st)
            rank = BOARD_DIMENSIONS[1] - 1 - rank_idx
            # ... but the first character is the a-file, so reads in normal direction
            file = 0
            for character in fen_one_rank:
                if character.isdigit():
                    # A number denotes the amount of empty squares after each other
                    file += int(character)
                    continue
                if file >= BOARD_DIMENSIONS[0]:
                    raise GameStateError(f"Too many squares on a rank in {fen_str!r}")
                try:
                    position[Position(file, rank)] = Piece.from_fen(character)
                except KeyError:
                    raise GameStateError(f"Unknown piece {character!r} in {fen_str!r}")
                file += 1
            if file != BOARD_DIMENSIONS[0]:
                raise GameStateError(f"Rank {fen_one_rank!r} does not have 8 squares")
        return cls(position)

    def to_fen(self) -> str:
        """Ranks are separated by slashes in FEN string."""
        return "/".join(
            self._rank_to_fen(rank) for rank in range(BOARD_DIMENSIONS[1] - 1, -1, -1)
        )

    def _rank_to_fen(self, rank: int) -> str:
        """FEN string of a single rank"""
        fen_characters: list[str] = []
        empty_count = 0
        for file in range(BOARD_DIMENSIONS[0]):
            piece = self.piece_at(Position(file, rank))

            if piece is not None:
                if empty_count > 0:
                    fen_characters.append(str(empty_count))
                    empty_count = 0
                fen_characters.append(piece.to_fen())
            else:
                empty_count += 1

        # if the entire rank is empty, then we still place this number in the string
        if empty_count > 0:
            fen_characters.append(str(empty_count))
        return "".join(fen_characters)

    @classmethod
    def from_snapshot(cls, squares: dict[str, Optional[str]]) -> Self:
        """Rebuild from the 64-square mapping used by the persistence layer ("e1" -> "K", "e4" -> None)"""
        position: dict[Position, Piece] = {}
        for name, letter in squares.items():
            if letter is None:
                continue
            try:
                piece = Piece.from_fen(letter)
            except KeyError:
                raise GameStateError(f"Unknown piece {letter!r} on {name}")
            position[Position.from_algebraic(name)] = piece
        return cls(position)

    def to_snapshot(self) -> dict[str, Optional[str]]:
        """All 64 squares, empty ones included"""
        return {
            square.to_algebraic(): (
                piece.to_fen() if (piece := self.piece_at(square)) else None
            )
            for square in ALL_POSITIONS
        }

    def copy(self) -> Self:
        """Scratch copy. Pieces and positions are immutable, so a shallow copy of the mapping is enough."""
        return type(self)(self.position)

    # -- LOOKUPS ---
    def piece_at(self, square: Position) -> Optional[Piece]:
        return self.position.get(square)

    def is_empty(self, square: Position) -> bool:
        return square not in self.position

    def locate_side(self, side: Side) -> list[Position]:
        return [square for square, piece in self.position.items() if piece.side == side]

    def locate_pieces(self, piece: Piece) -> list[Position]:
        return [square for square, found in self.position.items() if found == piece]

    def pieces(self, side: Side) -> list[Piece]:
        """find all pieces of a given side"""
        return [piece for piece in self.position.values() if piece.side == side]

    def king_position(self, side: Side) -> Optional[Position]:
        kings = self.locate_pieces(Piece(PieceKind.KING, side))
        return kings[0] if kings else None

    # -- UPDATES ---
    def place(self, square: Position, piece: Piece) -> None:
        """Overwrites whatever stands on the square. No rules are checked (setup / restore only)."""
        self.position[square] = piece

    def remove(self, square: Position) -> Optional[Piece]:
        return self.position.pop(square, None)

    def move(self, from_square: Position, to_square: Position) -> Optional[Piece]:
        """Relocate a piece. Anything on the target square is captured (and returned)."""
        piece_that_moved = self.position.pop(from_square, None)
        if piece_that_moved is None:
            raise EmptySourceError(f"There is no piece on {from_square}.")
        captured = self.position.get(to_square)
        self.position[to_square] = piece_that_moved
        return captured
