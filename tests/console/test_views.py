"""Unit tests for src/console/views.py"""

import pytest

from src.chess.board import Board
from src.chess.score import ScoreSnapshot
from src.console.views import InputView, OutputView, render_board
from src.core.exceptions import ParseError
from src.core.shared_types import EndReason, Side


@pytest.fixture
def lines() -> list[str]:
    return []


@pytest.fixture
def output(lines: list[str]) -> OutputView:
    return OutputView(writer=lines.append)


def test_render_starting_position() -> None:
    assert render_board(Board.starting_position()).splitlines() == [
        "rnbqkbnr  8",
        "pppppppp  7",
        "........  6",
        "........  5",
        "........  4",
        "........  3",
        "PPPPPPPP  2",
        "RNBQKBNR  1",
        "",
        "abcdefgh",
    ]


def test_print_turn(output: OutputView, lines: list[str]) -> None:
    output.print_turn(Side.LIGHT, in_check=False)
    output.print_turn(Side.DARK, in_check=True)
    assert lines == ["light to move", "dark to move (check!)"]


def test_print_scores(output: OutputView, lines: list[str]) -> None:
    output.print_scores(ScoreSnapshot(light=38.0, dark=35.5))
    assert lines == ["light: 38", "dark: 35.5"]


def test_print_game_over(output: OutputView, lines: list[str]) -> None:
    output.print_game_over(EndReason.CHECKMATE)
    output.print_game_over(None)
    assert lines == ["Game over: checkmate."]


def test_print_winner(output: OutputView, lines: list[str]) -> None:
    output.print_winner(Side.DARK)
    output.print_winner(None)
    assert lines == ["Winner: dark", "Draw: nobody wins."]


def test_print_error(output: OutputView, lines: list[str]) -> None:
    output.print_error(ParseError("Unknown command: 'x'."))
    assert lines == ["[ERROR] Unknown command: 'x'."]


def test_input_view_prompts() -> None:
    prompts: list[str] = []

    def reader(prompt: str) -> str:
        prompts.append(prompt)
        return "start"

    view = InputView(reader)
    assert view.read_command() == "start"
    view.read_restart()
    assert prompts[0] == "> "
    assert "(y/n)" in prompts[1]
