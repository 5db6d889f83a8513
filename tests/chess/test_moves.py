"""Unit tests for /src/chess/moves.py"""

import pytest

from src.chess.board import EMPTY_FEN, Board
from src.chess.moves import (
    MOVEMENT_RULES,
    PATTERN_RULES,
    Move,
    candidate_pawn_moves,
    candidate_piece_moves,
    is_attacked_by_bishop,
    is_attacked_by_king,
    is_attacked_by_knight,
    is_attacked_by_pawn,
    is_attacked_by_queen,
    is_attacked_by_rook,
    squares_between,
)
from src.chess.pieces import Piece, PieceKind
from src.chess.position import Position
from src.core.shared_types import IllegalMoveReason, Side


def sq(name: str) -> Position:
    return Position.from_algebraic(name)


def targets(moves: list[Move]) -> set[str]:
    return {move.to_square.to_algebraic() for move in moves}


def single_piece_board(letter: str, square: str) -> Board:
    board = Board.from_fen(EMPTY_FEN)
    board.place(sq(square), Piece.from_fen(letter))
    return board


# -- MOVE CREATION ---
def test_move_from_algebraic() -> None:
    move = Move.from_algebraic("e2", "e4")
    assert move.from_square == sq("e2")
    assert move.to_square == sq("e4")
    assert str(move) == "e2e4"


# -- SQUARES IN BETWEEN ---
@pytest.mark.parametrize(
    "from_name, to_name, expected",
    [
        ("a1", "a4", ["a2", "a3"]),
        ("h1", "e1", ["g1", "f1"]),
        ("c1", "f4", ["d2", "e3"]),
        ("f8", "d6", ["e7"]),
        ("d4", "d5", []),
    ],
)
def test_squares_between(from_name: str, to_name: str, expected: list[str]) -> None:
    found = squares_between(sq(from_name), sq(to_name))
    assert [square.to_algebraic() for square in found] == expected


def test_squares_between_requires_a_line() -> None:
    with pytest.raises(ValueError):
        squares_between(sq("a1"), sq("b3"))


# -- PATTERN RULES ---
@pytest.mark.parametrize(
    "letter, to_name, expected",
    [
        ("R", "d8", None),
        ("R", "a4", None),
        ("R", "e5", IllegalMoveReason.PATTERN_MISMATCH),
        ("B", "h8", None),
        ("B", "a1", None),
        ("B", "d6", IllegalMoveReason.PATTERN_MISMATCH),
        ("Q", "h8", None),
        ("Q", "d1", None),
        ("Q", "e6", IllegalMoveReason.PATTERN_MISMATCH),
        ("N", "e6", None),
        ("N", "b3", None),
        ("N", "d6", IllegalMoveReason.PATTERN_MISMATCH),
        ("K", "e5", None),
        ("K", "d3", None),
        ("K", "d6", IllegalMoveReason.PATTERN_MISMATCH),
    ],
)
def test_patterns_on_empty_board(
    letter: str, to_name: str, expected: IllegalMoveReason | None
) -> None:
    """Piece on d4, nothing else on the board"""
    board = single_piece_board(letter, "d4")
    kind = Piece.from_fen(letter).kind
    assert PATTERN_RULES[kind](sq("d4"), sq(to_name), board) == expected


@pytest.mark.parametrize(
    "letter, from_name, to_name",
    [("R", "a1", "a3"), ("B", "c1", "e3"), ("Q", "d1", "d3"), ("Q", "d1", "b3")],
)
def test_sliding_pieces_are_blocked(letter: str, from_name: str, to_name: str) -> None:
    """Starting position: the pawns on the 2nd rank are in the way"""
    board = Board.starting_position()
    kind = Piece.from_fen(letter).kind
    reason = PATTERN_RULES[kind](sq(from_name), sq(to_name), board)
    assert reason == IllegalMoveReason.BLOCKED_PATH


def test_knight_jumps_over_pieces() -> None:
    board = Board.starting_position()
    assert PATTERN_RULES[PieceKind.KNIGHT](sq("b1"), sq("c3"), board) is None


@pytest.mark.parametrize(
    "fen, from_name, to_name, expected",
    [
        # single and double step from the starting rank
        ("8/8/8/8/8/8/P7/8", "a2", "a3", None),
        ("8/8/8/8/8/8/P7/8", "a2", "a4", None),
        ("8/8/8/8/8/8/P7/8", "a2", "a5", IllegalMoveReason.PATTERN_MISMATCH),
        # double step only from the starting rank
        ("8/8/8/8/8/P7/8/8", "a3", "a5", IllegalMoveReason.PATTERN_MISMATCH),
        # no moving backwards or sideways
        ("8/8/8/8/8/P7/8/8", "a3", "a2", IllegalMoveReason.PATTERN_MISMATCH),
        ("8/8/8/8/8/P7/8/8", "a3", "b3", IllegalMoveReason.PATTERN_MISMATCH),
        # pushes need empty squares
        ("8/8/8/8/8/p7/P7/8", "a2", "a3", IllegalMoveReason.BLOCKED_PATH),
        ("8/8/8/8/8/p7/P7/8", "a2", "a4", IllegalMoveReason.BLOCKED_PATH),
        ("8/8/8/8/p7/8/P7/8", "a2", "a4", IllegalMoveReason.BLOCKED_PATH),
        # diagonal only when capturing
        ("8/8/8/8/8/8/P7/8", "a2", "b3", IllegalMoveReason.PATTERN_MISMATCH),
        ("8/8/8/8/8/1p6/P7/8", "a2", "b3", None),
        ("8/8/8/8/8/1P6/P7/8", "a2", "b3", IllegalMoveReason.PATTERN_MISMATCH),
        # dark pawns move down the board
        ("8/3p4/8/8/8/8/8/8", "d7", "d5", None),
        ("8/3p4/8/8/8/8/8/8", "d7", "d6", None),
        ("8/3p4/8/8/8/8/8/8", "d7", "d8", IllegalMoveReason.PATTERN_MISMATCH),
        ("8/3p4/4P3/8/8/8/8/8", "d7", "e6", None),
    ],
)
def test_pawn_pattern(
    fen: str, from_name: str, to_name: str, expected: IllegalMoveReason | None
) -> None:
    board = Board.from_fen(fen)
    assert PATTERN_RULES[PieceKind.PAWN](sq(from_name), sq(to_name), board) == expected


# -- MOVEMENT RULES ---
def test_every_kind_has_rules() -> None:
    assert set(MOVEMENT_RULES) == set(PieceKind)
    assert set(PATTERN_RULES) == set(PieceKind)


def test_rook_raycasting_stops_at_pieces() -> None:
    """Rook on d4, own pawn on d6, opponent pawn on f4: can take f4, cannot reach d6"""
    board = Board.from_fen("8/8/3P4/8/3R1p2/8/8/8")
    found = targets(candidate_piece_moves(sq("d4"), board))
    assert found == {"d5", "e4", "f4", "a4", "b4", "c4", "d3", "d2", "d1"}


def test_knight_moves_in_the_corner() -> None:
    board = single_piece_board("N", "a1")
    assert targets(candidate_piece_moves(sq("a1"), board)) == {"b3", "c2"}


def test_king_moves_in_the_middle() -> None:
    board = single_piece_board("k", "e5")
    found = targets(candidate_piece_moves(sq("e5"), board))
    assert found == {"d4", "d5", "d6", "e4", "e6", "f4", "f5", "f6"}


def test_candidate_pawn_moves_from_starting_rank() -> None:
    board = Board.starting_position()
    assert targets(candidate_pawn_moves(sq("e2"), board)) == {"e3", "e4"}
    assert targets(candidate_pawn_moves(sq("e7"), board)) == {"e6", "e5"}


def test_candidate_pawn_moves_with_captures_and_blockers() -> None:
    board = Board.from_fen("8/8/8/8/3p1p2/4p3/4P3/8")
    assert targets(candidate_pawn_moves(sq("e2"), board)) == set()

    board = Board.from_fen("8/8/8/8/8/3p1P2/4P3/8")
    assert targets(candidate_pawn_moves(sq("e2"), board)) == {"e3", "e4", "d3"}


def test_candidate_moves_agree_with_pattern_rules() -> None:
    """Whatever raycasting finds must pass the displacement based rules, and vice versa."""
    board = Board.from_fen("r3k2r/pppq1ppp/2npbn2/4p3/2B1P3/2NP1N2/PPP2PPP/R1BQ1RK1")
    for square, piece in board.position.items():
        generated = targets(MOVEMENT_RULES[piece.kind](square, board))
        for target_square in [Position(f, r) for f in range(8) for r in range(8)]:
            if target_square == square:
                continue
            occupant = board.piece_at(target_square)
            if occupant is not None and occupant.side == piece.side:
                continue
            matches = PATTERN_RULES[piece.kind](square, target_square, board) is None
            assert matches == (target_square.to_algebraic() in generated), (
                f"{piece} {square} -> {target_square}"
            )


# -- ATTACK RULES ---
def test_pawn_attacks() -> None:
    """A light pawn on d4 attacks c5 and e5, a dark pawn on d4 attacks c3 and e3"""
    board = Board.from_fen("8/8/8/8/3P4/8/8/8")
    assert is_attacked_by_pawn(sq("c5"), Side.LIGHT, board)
    assert is_attacked_by_pawn(sq("e5"), Side.LIGHT, board)
    assert not is_attacked_by_pawn(sq("d5"), Side.LIGHT, board)
    assert not is_attacked_by_pawn(sq("c3"), Side.LIGHT, board)

    board = Board.from_fen("8/8/8/8/3p4/8/8/8")
    assert is_attacked_by_pawn(sq("c3"), Side.DARK, board)
    assert is_attacked_by_pawn(sq("e3"), Side.DARK, board)
    assert not is_attacked_by_pawn(sq("e5"), Side.DARK, board)


def test_sliding_attacks_are_blocked() -> None:
    """Rook on a1 attacks a-file up to the blocking piece on a5"""
    board = Board.from_fen("8/8/8/n7/8/8/8/R7")
    assert is_attacked_by_rook(sq("a4"), Side.LIGHT, board)
    assert is_attacked_by_rook(sq("a5"), Side.LIGHT, board)
    assert not is_attacked_by_rook(sq("a6"), Side.LIGHT, board)
    assert not is_attacked_by_rook(sq("a4"), Side.DARK, board)


def test_bishop_and_queen_attacks() -> None:
    board = Board.from_fen("8/8/8/8/8/8/8/B6q")
    assert is_attacked_by_bishop(sq("h8"), Side.LIGHT, board)
    assert is_attacked_by_queen(sq("a8"), Side.DARK, board)
    assert is_attacked_by_queen(sq("b1"), Side.DARK, board)
    assert not is_attacked_by_queen(sq("a1"), Side.LIGHT, board)


def test_knight_and_king_attacks() -> None:
    board = Board.from_fen("8/8/8/8/3N4/8/8/6k1")
    assert is_attacked_by_knight(sq("e6"), Side.LIGHT, board)
    assert not is_attacked_by_knight(sq("e5"), Side.LIGHT, board)
    assert is_attacked_by_king(sq("h2"), Side.DARK, board)
    assert not is_attacked_by_king(sq("e3"), Side.DARK, board)
