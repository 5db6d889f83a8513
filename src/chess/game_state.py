"""
Turn sequencing.

GameState knows whose turn it is and whether the game is still going. It does not own the Board:
after the service applied a move to the board, `apply_move(board)` hands the turn over and looks for the end of the game.

    NOT_STARTED --start()--> RUNNING --apply_move()--> ENDED (checkmate / stalemate / king captured)
         |                      |
         +-------end()----------+-----end()----------> ENDED (user ended)

start() from ENDED is a restart.
"""

from dataclasses import dataclass, field
from typing import Optional

from src.chess.board import Board
from src.chess.move_validator import has_legal_move, is_in_check
from src.core.exceptions import GameNotRunningError, GameStateError
from src.core.shared_types import EndReason, Phase, Side


@dataclass
class GameState:
    turn: Side = field(default=Side.LIGHT)
    phase: Phase = field(default=Phase.NOT_STARTED)
    end_reason: Optional[EndReason] = field(default=None)
    # side that lost by the rules (mated, or left without a king). None for every other ending
    checkmated_side: Optional[Side] = field(default=None)

    @property
    def is_running(self) -> bool:
        return self.phase == Phase.RUNNING

    @property
    def is_over(self) -> bool:
        return self.phase == Phase.ENDED

    def start(self) -> None:
        """(Re)start: light moves first. Resetting the board is done by the owner of the board."""
        self.turn = Side.LIGHT
        self.phase = Phase.RUNNING
        self.end_reason = None
        self.checkmated_side = None

    def assert_running(self) -> None:
        if not self.is_running:
            raise GameNotRunningError(
                f"No game is running (game is {self.phase.value}). Type 'start' to begin."
            )

    def apply_move(self, board: Board) -> None:
        """
        The move has been made on the board. Hand over the turn and check for end condition.

        NOTE the turn is switched BEFORE the checks: checkmate / stalemate are about the side that has to move next.
        """
        self.assert_running()
        self.turn = self.turn.opponent
        self._check_for_end(board)

    def end(self) -> None:
        """Explicit end command. Ending a game that already ended keeps the original reason."""
        if self.is_over:
            return
        self._change_status(EndReason.USER_ENDED)

    def restore(
        self,
        turn: Side,
        phase: Phase,
        end_reason: Optional[EndReason],
        board: Optional[Board] = None,
    ) -> None:
        """
        Resume from a snapshot.
        Given the board, a running game is checked for its end right away: a saved position can already be mate.
        """
        if (phase == Phase.ENDED) != (end_reason is not None):
            raise GameStateError(
                f"Inconsistent snapshot: phase {phase.value!r} with end reason {end_reason!r}"
            )
        self.turn = turn
        self.phase = phase
        self.end_reason = end_reason
        self.checkmated_side = None

        if end_reason == EndReason.CHECKMATE:
            self.checkmated_side = turn
        elif end_reason == EndReason.KING_CAPTURED:
            kingless = self._kingless_side(board) if board is not None else None
            self.checkmated_side = kingless or turn
        elif phase == Phase.RUNNING and board is not None:
            self._check_for_end(board)

    # --- CHECKS FOR ENDING THE GAME ---
    def _check_for_end(self, board: Board) -> None:
        kingless = self._kingless_side(board)
        if kingless is not None:
            self._change_status(EndReason.KING_CAPTURED, kingless)
        elif self._is_checkmate(board):
            self._change_status(EndReason.CHECKMATE, self.turn)
        elif self._is_stalemate(board):
            self._change_status(EndReason.STALEMATE)

    def _change_status(self, reason: EndReason, loser: Optional[Side] = None) -> None:
        self.phase = Phase.ENDED
        self.end_reason = reason
        self.checkmated_side = loser

    def _kingless_side(self, board: Board) -> Optional[Side]:
        """Either side may be missing its king (only from a position set up without one). The side to move is checked first."""
        for side in (self.turn, self.turn.opponent):
            if board.king_position(side) is None:
                return side
        return None

    def _is_checkmate(self, board: Board) -> bool:
        return is_in_check(board, self.turn) and not has_legal_move(board, self.turn)

    def _is_stalemate(self, board: Board) -> bool:
        return not is_in_check(board, self.turn) and not has_legal_move(board, self.turn)
