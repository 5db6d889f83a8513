"""
Legality of moves under the full movement rules.

A move is checked in three layers, each short-circuiting on failure:

1. Ownership/turn: there must be a piece of the side to move on the starting square, and the destination may not hold one of its own pieces.
2. Geometry: the displacement must match the PATTERN_RULES of the piece (including blocked paths for sliding pieces and pawn pushes).
3. Self-check: the move is made on a scratch copy of the board. If the king of the moving side is attacked afterwards, the move is illegal.

Nothing in here mutates the board that is passed in.
"""

from typing import Optional

from src.chess.board import Board
from src.chess.moves import ATTACK_RULES, MOVEMENT_RULES, PATTERN_RULES, Move
from src.chess.position import Position
from src.core.exceptions import EmptySourceError, IllegalMoveError
from src.core.shared_types import IllegalMoveReason, Side


def validate_move(
    board: Board, from_square: Position, to_square: Position, side_to_move: Side
) -> Optional[IllegalMoveReason]:
    """Returns None for a legal move, otherwise the reason why it is illegal.

    Raises EmptySourceError if there is nothing to move.
    """
    # 1. ownership / turn
    piece = board.piece_at(from_square)
    if piece is None:
        raise EmptySourceError(f"There is no piece on {from_square}.")
    if piece.side != side_to_move:
        return IllegalMoveReason.WRONG_TURN

    # Standing still is not a move (and should not be reported as 'own piece at destination')
    if from_square == to_square:
        return IllegalMoveReason.PATTERN_MISMATCH

    target = board.piece_at(to_square)
    if target is not None and target.side == side_to_move:
        return IllegalMoveReason.OWN_PIECE_AT_DESTINATION

    # 2. geometry
    reason = PATTERN_RULES[piece.kind](from_square, to_square, board)
    if reason is not None:
        return reason

    # 3. self-check
    if leaves_king_in_check(board, Move(from_square, to_square), side_to_move):
        return IllegalMoveReason.SELF_CHECK
    return None


def is_legal_move(
    board: Board, from_square: Position, to_square: Position, side_to_move: Side
) -> bool:
    """Boolean flavour of validate_move(). A move from an empty square is simply not legal."""
    try:
        return validate_move(board, from_square, to_square, side_to_move) is None
    except EmptySourceError:
        return False


def check_move(
    board: Board, from_square: Position, to_square: Position, side_to_move: Side
) -> None:
    """Raise IllegalMoveError (carrying the reason) if the move is not legal."""
    reason = validate_move(board, from_square, to_square, side_to_move)
    if reason is not None:
        raise IllegalMoveError(
            reason, f"Cannot move {from_square} to {to_square}: {reason.value}."
        )


# --- CHECKS ---
def is_square_attacked(board: Board, square: Position, by_side: Side) -> bool:
    """Is the square in the line of sight of any piece of `by_side`?"""
    return any(
        is_attacked(square, by_side, board) for is_attacked in ATTACK_RULES.values()
    )


def is_in_check(board: Board, side: Side) -> bool:
    """A side without a king on the board cannot be in check"""
    king_square = board.king_position(side)
    if king_square is None:
        return False
    return is_square_attacked(board, king_square, side.opponent)


def leaves_king_in_check(board: Board, move: Move, side: Side) -> bool:
    """
    Return True if the move puts (or leaves) you in check

    plan:
    1. Copy the board
    2. make the candidate move
    3. determine if king is in check on the new board
    """
    scratch = board.copy()
    scratch.move(move.from_square, move.to_square)
    return is_in_check(scratch, side)


# --- ENUMERATING MOVES ---
def candidate_moves(board: Board, side: Side) -> list[Move]:
    """Moves following the movement rules of every piece of the side, before testing for self-check."""
    moves: list[Move] = []
    for square in board.locate_side(side):
        piece = board.piece_at(square)
        assert piece is not None
        moves.extend(MOVEMENT_RULES[piece.kind](square, board))
    return moves


def legal_moves(board: Board, side: Side) -> list[Move]:
    """Keep those candidate moves that do not put (or leave) you in check"""
    return [
        move
        for move in candidate_moves(board, side)
        if not leaves_king_in_check(board, move, side)
    ]


def has_legal_move(board: Board, side: Side) -> bool:
    return any(
        not leaves_king_in_check(board, move, side)
        for move in candidate_moves(board, side)
    )
