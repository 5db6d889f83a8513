"""Console input/output. All text the player sees is produced here."""

from typing import Callable, Optional

from src.chess.board import Board
from src.chess.position import BOARD_DIMENSIONS, FILE_NAMES, Position
from src.chess.score import ScoreSnapshot
from src.core.shared_types import EndReason, Side

EMPTY_SQUARE = "."

GUIDE = """> Chess game
> start a game: start
> move a piece: move <from> <to>  (e.g. move b2 b3)
> show the score: status
> end the game: end
> Upper case pieces are light, lower case pieces are dark."""


class InputView:
    def __init__(self, reader: Optional[Callable[[str], str]] = None) -> None:
        self.reader = reader or input

    def read_command(self) -> str:
        return self.reader("> ")

    def read_restart(self) -> str:
        return self.reader("A game is already in progress. Restart the game? (y/n) ")


class OutputView:
    def __init__(self, writer: Optional[Callable[[str], None]] = None) -> None:
        self.writer = writer or print

    def print_guide(self) -> None:
        self.writer(GUIDE)

    def print_resumed(self) -> None:
        self.writer("Resumed the previous game. Keep moving, or type 'start' to restart.")

    def print_board(self, board: Board) -> None:
        self.writer(render_board(board))

    def print_turn(self, side: Side, in_check: bool) -> None:
        suffix = " (check!)" if in_check else ""
        self.writer(f"{side.value} to move{suffix}")

    def print_scores(self, scores: ScoreSnapshot) -> None:
        self.writer(f"{Side.LIGHT.value}: {scores.light:g}")
        self.writer(f"{Side.DARK.value}: {scores.dark:g}")

    def print_game_over(self, reason: Optional[EndReason]) -> None:
        if reason is not None:
            self.writer(f"Game over: {reason.value}.")

    def print_winner(self, winner: Optional[Side]) -> None:
        if winner is None:
            self.writer("Draw: nobody wins.")
        else:
            self.writer(f"Winner: {winner.value}")

    def print_error(self, error: Exception) -> None:
        self.writer(f"[ERROR] {error}")


def render_board(board: Board) -> str:
    """Rank 8 on top, a-file on the left"""
    rows: list[str] = []
    for rank in range(BOARD_DIMENSIONS[1] - 1, -1, -1):
        cells = []
        for file in range(BOARD_DIMENSIONS[0]):
            piece = board.piece_at(Position(file, rank))
            cells.append(piece.to_fen() if piece else EMPTY_SQUARE)
        rows.append(f"{''.join(cells)}  {rank + 1}")
    rows.append("")
    rows.append(FILE_NAMES[: BOARD_DIMENSIONS[0]])
    return "\n".join(rows)
