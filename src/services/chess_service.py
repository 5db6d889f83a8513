"""Orchestration of the rules engine behind one façade used by the console session (and persistence glue)."""

import logging
from typing import Optional

from src.chess.board import Board
from src.chess.game_state import GameState
from src.chess.move_validator import check_move, is_in_check, legal_moves
from src.chess.moves import Move
from src.chess.pieces import PieceKind
from src.chess.position import ALL_POSITIONS, Position
from src.chess.score import ScoreCalculator, ScoreSnapshot
from src.core.exceptions import GameStateError
from src.core.models import GameModel
from src.core.shared_types import EndReason, Phase, Side

logger = logging.getLogger(__name__)


class ChessGameService:
    """
    Single owner of the Board and the GameState. Nothing else mutates them.

    Everything handed out (board, snapshot) is a copy, so callers can keep it around without it changing under their feet.
    """

    def __init__(self, score_calculator: Optional[ScoreCalculator] = None) -> None:
        self.score_calculator = score_calculator or ScoreCalculator()
        self.board = Board.empty()
        self.state = GameState()

    # -- GAME LIFECYCLE ---
    def init_new_game(self) -> None:
        """Start (or restart) from the standard initial position. Any current position is discarded."""
        self.board = Board.starting_position()
        self.state.start()
        logger.info("New game started")

    def is_first_game(self) -> bool:
        """Nothing has been played (or restored) yet, so 'start' does not need to ask about restarting."""
        return self.state.phase == Phase.NOT_STARTED

    def handle_move(self, from_square: Position, to_square: Position) -> None:
        """
        Attempt a move
        -----

        1. make sure the game is running
        2. validate the move (raises IllegalMoveError / EmptySourceError)
        3. update the board
        4. hand over the turn / check for end of game

        Validation happens before anything is touched: a rejected move leaves board and state as they were.
        """
        self.state.assert_running()
        mover = self.state.turn
        check_move(self.board, from_square, to_square, mover)

        captured = self.board.move(from_square, to_square)
        self.state.apply_move(self.board)
        logger.info(
            "%s moved %s%s%s",
            mover.value,
            from_square,
            to_square,
            f" capturing {captured.kind.name.lower()}" if captured else "",
        )
        if self.state.is_over:
            logger.info("Game over: %s", self.end_reason)

    def is_game_over(self) -> bool:
        return self.state.is_over

    def handle_end_game(self) -> None:
        self.state.end()
        logger.info("Game ended: %s", self.end_reason)

    # -- QUERIES ---
    @property
    def side_to_move(self) -> Side:
        return self.state.turn

    @property
    def phase(self) -> Phase:
        return self.state.phase

    @property
    def end_reason(self) -> Optional[EndReason]:
        return self.state.end_reason

    def get_board(self) -> Board:
        return self.board.copy()

    def is_check(self) -> bool:
        """Is the side to move in check?"""
        return is_in_check(self.board, self.state.turn)

    def legal_moves(self) -> list[Move]:
        if not self.state.is_running:
            return []
        return legal_moves(self.board, self.state.turn)

    def calculate_score(self) -> ScoreSnapshot:
        return self.score_calculator.calculate(self.board)

    def calculate_winner(self) -> Optional[Side]:
        """
        Only a finished game has a winner.

        * checkmate / king captured: the opponent of the checkmated side (or of the side without a king)
        * stalemate / ended by the user: the side with more material. Equal material is a draw (None)
        """
        if not self.state.is_over:
            return None
        loser = self.state.checkmated_side
        if loser is not None:
            return loser.opponent
        return self.score_calculator.winner(self.calculate_score())

    # -- SNAPSHOTS ---
    def snapshot(self) -> GameModel:
        """Encode into the format the persistence layer uses"""
        return GameModel(
            squares=self.board.to_snapshot(),
            side_to_move=self.state.turn.value,
            phase=self.state.phase.value,
            end_reason=self.state.end_reason.value if self.state.end_reason else None,
        )

    def restore(self, model: GameModel) -> None:
        """
        Resume from a snapshot.
        Everything is validated before anything is replaced, so a broken snapshot leaves the current game alone.
        """
        try:
            turn = Side(model.side_to_move)
            phase = Phase(model.phase)
            end_reason = EndReason(model.end_reason) if model.end_reason else None
        except ValueError as e:
            raise GameStateError(f"Invalid snapshot: {e}") from e

        expected_squares = {square.to_algebraic() for square in ALL_POSITIONS}
        if set(model.squares) != expected_squares:
            raise GameStateError("Invalid snapshot: expected all 64 squares a1-h8.")

        board = Board.from_snapshot(model.squares)
        for side in Side:
            kings = [piece for piece in board.pieces(side) if piece.kind == PieceKind.KING]
            if len(kings) > 1:
                raise GameStateError(
                    f"Invalid snapshot: {side.value} has {len(kings)} kings."
                )

        state = GameState()
        state.restore(turn, phase, end_reason, board)
        self.board = board
        self.state = state
        logger.info("Game restored (%s, %s to move)", state.phase.value, turn.value)
        if state.is_over and phase == Phase.RUNNING:
            logger.info("Restored position is already over: %s", state.end_reason)
