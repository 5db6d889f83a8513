"""
Session control loop.

Reads a command, lets the service act on it, prints the result and asks for the next one.
Any GameError is reported and the player is asked again; only a failing repository stops the session.
"""

import logging
from enum import Enum, auto
from typing import Callable, Optional

from src.console.commands import Command, CommandRequest, parse_command, parse_restart_answer
from src.console.views import InputView, OutputView
from src.core.exceptions import GameError, RepositoryError
from src.services.chess_service import ChessGameService
from src.services.game_recorder import GameRecorder

logger = logging.getLogger(__name__)


class SessionState(Enum):
    RUNNING = auto()
    END = auto()


CommandExecutor = Callable[[CommandRequest], SessionState]


class CommandController:
    def __init__(
        self,
        input_view: InputView,
        output_view: OutputView,
        service: Optional[ChessGameService] = None,
        recorder: Optional[GameRecorder] = None,
    ) -> None:
        self.input_view = input_view
        self.output_view = output_view
        self.service = service or ChessGameService()
        self.recorder = recorder
        self.executors: dict[Command, CommandExecutor] = {
            Command.START: self.handle_start_command,
            Command.MOVE: self.handle_move_command,
            Command.STATUS: self.handle_status_command,
            Command.END: self.handle_end_command,
        }

    def run(self) -> None:
        self.output_view.print_guide()
        self._resume()

        while True:
            try:
                text = self.input_view.read_command()
            except EOFError:
                logger.info("Input closed, leaving the session")
                return

            try:
                state = self.handle_command(parse_command(text))
            except EOFError:
                # closed while answering the restart prompt: the game is kept as it is
                logger.info("Input closed, leaving the session")
                return
            except RepositoryError:
                raise
            except GameError as e:
                logger.debug("Rejected %r: %s", text, e)
                self.output_view.print_error(e)
                continue

            self._save()
            if state == SessionState.END:
                self.handle_end()
                return

    def handle_command(self, request: CommandRequest) -> SessionState:
        executor = self.executors[request.command]
        return executor(request)

    # -- COMMANDS ---
    def handle_start_command(self, request: CommandRequest) -> SessionState:
        if self.service.is_first_game() or self._is_restart():
            self.service.init_new_game()
        self._print_position()
        return SessionState.RUNNING

    def handle_move_command(self, request: CommandRequest) -> SessionState:
        from_square, to_square = request.positions()
        self.service.handle_move(from_square, to_square)
        if self.service.is_game_over():
            self.output_view.print_board(self.service.get_board())
            return SessionState.END
        self._print_position()
        return SessionState.RUNNING

    def handle_status_command(self, request: CommandRequest) -> SessionState:
        self.output_view.print_scores(self.service.calculate_score())
        return SessionState.RUNNING

    def handle_end_command(self, request: CommandRequest) -> SessionState:
        self.service.handle_end_game()
        return SessionState.END

    def handle_end(self) -> None:
        """Final report once the game is over"""
        self.output_view.print_game_over(self.service.end_reason)
        self.output_view.print_scores(self.service.calculate_score())
        self.output_view.print_winner(self.service.calculate_winner())

    # -- Internal helpers --
    def _resume(self) -> None:
        """Pick up an unfinished game from the store. A broken record is reported and skipped."""
        if self.recorder is None:
            return
        try:
            resumed = self.recorder.resume(self.service)
        except RepositoryError:
            raise
        except GameError as e:
            logger.warning("Could not resume saved game: %s", e)
            self.output_view.print_error(e)
            return
        if not resumed:
            return
        if self.service.is_game_over():
            # the saved position turned out to be mate / stalemate already
            self.output_view.print_board(self.service.get_board())
            self.handle_end()
            self._save()
            return
        self.output_view.print_resumed()
        self._print_position()

    def _is_restart(self) -> bool:
        """Ask until we get a y/n answer"""
        while True:
            try:
                return parse_restart_answer(self.input_view.read_restart())
            except GameError as e:
                self.output_view.print_error(e)

    def _print_position(self) -> None:
        self.output_view.print_board(self.service.get_board())
        self.output_view.print_turn(self.service.side_to_move, self.service.is_check())

    def _save(self) -> None:
        if self.recorder is not None:
            self.recorder.save(self.service)
