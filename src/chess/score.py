"""Material count per side"""

from collections import Counter
from dataclasses import dataclass
from typing import Optional

from src.chess.board import Board
from src.chess.pieces import PieceKind
from src.core.shared_types import Side

PIECE_POINTS: dict[PieceKind, float] = {
    PieceKind.PAWN: 1.0,
    PieceKind.KNIGHT: 2.5,
    PieceKind.BISHOP: 3.0,
    PieceKind.ROOK: 5.0,
    PieceKind.QUEEN: 9.0,
}
# Two (or more) bishops of the same side running on the same square color cover the same squares
REDUNDANT_BISHOP_POINTS = 2.5


@dataclass(frozen=True)
class ScoreSnapshot:
    light: float
    dark: float

    def for_side(self, side: Side) -> float:
        return self.light if side == Side.LIGHT else self.dark


class ScoreCalculator:
    """
    Tally the points of material each player has on the board.

    NOTE: The King's worth is undefined, so it does not count towards the total
    """

    def calculate(self, board: Board) -> ScoreSnapshot:
        return ScoreSnapshot(
            light=self.side_score(board, Side.LIGHT),
            dark=self.side_score(board, Side.DARK),
        )

    def side_score(self, board: Board, side: Side) -> float:
        score = 0.0
        bishop_square_colors: Counter[Side] = Counter()
        for square in board.locate_side(side):
            piece = board.piece_at(square)
            assert piece is not None
            if piece.kind == PieceKind.BISHOP:
                bishop_square_colors[square.square_color] += 1
                continue
            score += PIECE_POINTS.get(piece.kind, 0.0)

        for count in bishop_square_colors.values():
            points = PIECE_POINTS[PieceKind.BISHOP] if count == 1 else REDUNDANT_BISHOP_POINTS
            score += count * points
        return score

    def winner(self, snapshot: ScoreSnapshot) -> Optional[Side]:
        """Side with strictly more material. Equal material is a draw (None)."""
        if snapshot.light > snapshot.dark:
            return Side.LIGHT
        if snapshot.dark > snapshot.light:
            return Side.DARK
        return None
