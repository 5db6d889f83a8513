"""
Geometry/Base movement and capturing/attacking rules

Key idea: Use strategy pattern to define the move sets for each piece kind.
Three tables, all keyed by PieceKind:

* PATTERN_RULES: does a given displacement match the way the piece moves (and is the path clear)?
* MOVEMENT_RULES: which squares can the piece reach (raycasting)? Used to enumerate moves.
* ATTACK_RULES: is a square attacked by a piece of this kind?

None of them care about leaving your own king in check. That is checked later by move_validator.py
"""

from dataclasses import dataclass
from typing import Callable, Optional, Protocol, Self

from src.chess.pieces import (
    DIAGONALS,
    KNIGHT_JUMPS,
    STRAIGHTS,
    Piece,
    PieceKind,
    Vector,
    pawn_direction,
    pawn_starting_rank,
)
from src.chess.position import Position
from src.core.shared_types import IllegalMoveReason, Side


class Board(Protocol):
    """Just the parts the movement strategies need"""

    def piece_at(self, square: Position) -> Optional[Piece]: ...
    def is_empty(self, square: Position) -> bool: ...


@dataclass(frozen=True)
class Move:
    """basic definition of a move to be made"""

    from_square: Position
    to_square: Position

    @classmethod
    def from_algebraic(cls, from_sq: str, to_sq: str) -> Self:
        return cls(Position.from_algebraic(from_sq), Position.from_algebraic(to_sq))

    def __str__(self) -> str:
        return f"{self.from_square}{self.to_square}"


# --- PATTERN RULES ---
def sign(value: int) -> int:
    return (value > 0) - (value < 0)


def squares_between(from_square: Position, to_square: Position) -> list[Position]:
    """
    The squares strictly in between two squares on the same file, rank or diagonal.
    Needed to find out if a sliding piece is blocked.
    """
    df = to_square.file - from_square.file
    dr = to_square.rank - from_square.rank
    if not (df == 0 or dr == 0 or abs(df) == abs(dr)):
        raise ValueError(
            f"squares_between requires both squares to share a line. \n from: {from_square}\n to:{to_square}"
        )

    step_f, step_r = sign(df), sign(dr)
    squares_found: list[Position] = []
    for step in range(1, max(abs(df), abs(dr))):
        squares_found.append(
            Position(from_square.file + step * step_f, from_square.rank + step * step_r)
        )
    return squares_found


def sliding_pattern(
    from_square: Position, to_square: Position, board: Board, directions: tuple[Vector, ...]
) -> Optional[IllegalMoveReason]:
    """The displacement must point along one of the directions, and nothing may stand in between."""
    df = to_square.file - from_square.file
    dr = to_square.rank - from_square.rank
    if (sign(df), sign(dr)) not in directions:
        return IllegalMoveReason.PATTERN_MISMATCH
    if df != 0 and dr != 0 and abs(df) != abs(dr):
        return IllegalMoveReason.PATTERN_MISMATCH

    if any(not board.is_empty(square) for square in squares_between(from_square, to_square)):
        return IllegalMoveReason.BLOCKED_PATH
    return None


def single_step_pattern(
    from_square: Position, to_square: Position, deltas: tuple[Vector, ...]
) -> Optional[IllegalMoveReason]:
    """Knights and kings: the displacement must be one of the fixed steps. Nothing can block them."""
    delta = (to_square.file - from_square.file, to_square.rank - from_square.rank)
    if delta not in deltas:
        return IllegalMoveReason.PATTERN_MISMATCH
    return None


def pawn_pattern(
    from_square: Position, to_square: Position, board: Board
) -> Optional[IllegalMoveReason]:
    """
    A pawn:
    - moves by a single square forward, onto an empty square.
    - can move by two from its starting rank, if both squares are empty.
    - takes diagonally (one square), and only moves diagonally when taking.
    """
    pawn = board.piece_at(from_square)
    assert pawn is not None
    direction = pawn_direction(pawn.side)
    df = to_square.file - from_square.file
    dr = to_square.rank - from_square.rank

    # pawns take diagonally
    if abs(df) == 1 and dr == direction:
        target = board.piece_at(to_square)
        if target is None or target.side == pawn.side:
            return IllegalMoveReason.PATTERN_MISMATCH
        return None

    if df != 0:
        return IllegalMoveReason.PATTERN_MISMATCH

    # pawn pushes
    if dr == direction:
        return None if board.is_empty(to_square) else IllegalMoveReason.BLOCKED_PATH

    if dr == 2 * direction and from_square.rank == pawn_starting_rank(pawn.side):
        in_between = Position(from_square.file, from_square.rank + direction)
        if not (board.is_empty(in_between) and board.is_empty(to_square)):
            return IllegalMoveReason.BLOCKED_PATH
        return None

    return IllegalMoveReason.PATTERN_MISMATCH


def knight_pattern(
    from_square: Position, to_square: Position, board: Board
) -> Optional[IllegalMoveReason]:
    """Knights always move such that |delta_rank| + |delta_file| = 3, and jump over anything"""
    return single_step_pattern(from_square, to_square, KNIGHT_JUMPS)


def bishop_pattern(
    from_square: Position, to_square: Position, board: Board
) -> Optional[IllegalMoveReason]:
    """Bishops move diagonally: |delta_rank| = |delta_file|"""
    return sliding_pattern(from_square, to_square, board, DIAGONALS)


def rook_pattern(
    from_square: Position, to_square: Position, board: Board
) -> Optional[IllegalMoveReason]:
    """Rooks move either horizontally or vertically"""
    return sliding_pattern(from_square, to_square, board, STRAIGHTS)


def queen_pattern(
    from_square: Position, to_square: Position, board: Board
) -> Optional[IllegalMoveReason]:
    """The Queen combines the rook moves and bishop moves"""
    return sliding_pattern(from_square, to_square, board, STRAIGHTS + DIAGONALS)


def king_pattern(
    from_square: Position, to_square: Position, board: Board
) -> Optional[IllegalMoveReason]:
    """The king can move by a single square at the time."""
    return single_step_pattern(from_square, to_square, STRAIGHTS + DIAGONALS)


# -- STRATEGY PATTERN: PATTERN RULES ---
PatternFn = Callable[[Position, Position, Board], Optional[IllegalMoveReason]]
PATTERN_RULES: dict[PieceKind, PatternFn] = {
    PieceKind.PAWN: pawn_pattern,
    PieceKind.KNIGHT: knight_pattern,
    PieceKind.BISHOP: bishop_pattern,
    PieceKind.ROOK: rook_pattern,
    PieceKind.QUEEN: queen_pattern,
    PieceKind.KING: king_pattern,
}


# --- MOVEMENT RULES ---
def raycasting_move(
    square: Position, board: Board, directions: tuple[Vector, ...]
) -> list[Move]:
    """
    Raycasting algorithm
    -----

    The main trick we use to check the 'line of sight of a piece'.
    We define move directions and move along them until we hit another piece or
    the edge of the board.
    """
    piece = board.piece_at(square)
    assert piece is not None

    moves: list[Move] = []
    for df, dr in directions:
        target_square = square.shifted(df, dr)
        while target_square is not None:
            occupant = board.piece_at(target_square)
            if occupant is not None:
                # only need to add the first occupied square found if it is the opponent's: then it can be captured.
                if occupant.side != piece.side:
                    moves.append(Move(square, target_square))
                break

            moves.append(Move(square, target_square))
            target_square = target_square.shifted(df, dr)
    return moves


def single_step_move(
    square: Position, board: Board, deltas: tuple[Vector, ...]
) -> list[Move]:
    """Raycasting is for sliding pieces. This is the equivalent for kings and knights that just take a single step along a direction"""
    piece = board.piece_at(square)
    assert piece is not None

    moves: list[Move] = []
    for df, dr in deltas:
        target_square = square.shifted(df, dr)
        if target_square is None:
            continue

        occupant = board.piece_at(target_square)
        if occupant is None or occupant.side != piece.side:
            moves.append(Move(square, target_square))
    return moves


def candidate_pawn_moves(square: Position, board: Board) -> list[Move]:
    """Pushes (one, or two from the starting rank) onto empty squares plus diagonal captures"""
    pawn = board.piece_at(square)
    assert pawn is not None
    direction = pawn_direction(pawn.side)

    moves: list[Move] = []
    one_step = square.shifted(0, direction)
    if one_step is not None and board.is_empty(one_step):
        moves.append(Move(square, one_step))
        two_steps = one_step.shifted(0, direction)
        if (
            square.rank == pawn_starting_rank(pawn.side)
            and two_steps is not None
            and board.is_empty(two_steps)
        ):
            moves.append(Move(square, two_steps))

    for df in (-1, 1):
        target_square = square.shifted(df, direction)
        if target_square is None:
            continue
        occupant = board.piece_at(target_square)
        if occupant is not None and occupant.side != pawn.side:
            moves.append(Move(square, target_square))
    return moves


def candidate_piece_moves(square: Position, board: Board) -> list[Move]:
    """Everything but the pawn follows its MovementPattern: raycast for sliding pieces, single steps otherwise"""
    piece = board.piece_at(square)
    assert piece is not None
    pattern = piece.pattern
    if pattern.sliding:
        return raycasting_move(square, board, pattern.directions)
    return single_step_move(square, board, pattern.directions)


# -- STRATEGY PATTERN: MOVEMENT RULES ---
CandidateMovesFn = Callable[[Position, Board], list[Move]]
MOVEMENT_RULES: dict[PieceKind, CandidateMovesFn] = {
    PieceKind.PAWN: candidate_pawn_moves,
    PieceKind.KNIGHT: candidate_piece_moves,
    PieceKind.BISHOP: candidate_piece_moves,
    PieceKind.ROOK: candidate_piece_moves,
    PieceKind.QUEEN: candidate_piece_moves,
    PieceKind.KING: candidate_piece_moves,
}


# --- CAPTURING RULES / ATTACKING RULES ---
def raycasting_attack(
    square: Position,
    by_side: Side,
    by_kind: PieceKind,
    board: Board,
    directions: tuple[Vector, ...],
) -> bool:
    """
    Raycasting algorithm for attacks.
    ---

    Where `raycasting_move()` determines
    _"What is the line-of-sight of the piece standing on the specified square?"_

    This function determines:
    _"Is the specified square in the line-of-sight of a piece of the specified side and kind
    that is allowed to move along the given directions?"_

    ---
    Returns TRUE if the first piece encountered along any direction is such a piece.
    """
    attacker = Piece(by_kind, by_side)
    for df, dr in directions:
        target_square = square.shifted(df, dr)
        while target_square is not None:
            piece_found = board.piece_at(target_square)
            if piece_found is not None:
                if piece_found == attacker:
                    return True
                break
            target_square = target_square.shifted(df, dr)
    return False


def single_step_attack(
    square: Position,
    by_side: Side,
    by_kind: PieceKind,
    board: Board,
    deltas: tuple[Vector, ...],
) -> bool:
    """Equivalent of raycasting for pieces that only take a single step along a direction."""
    attacker = Piece(by_kind, by_side)
    for df, dr in deltas:
        target_square = square.shifted(df, dr)
        if target_square is not None and board.piece_at(target_square) == attacker:
            return True
    return False


def is_attacked_by_pawn(square: Position, by_side: Side, board: Board) -> bool:
    """
    Pawns take diagonally
    ----

    NOTE: Pawn moves are not symmetric, so to check IF a light pawn could take on your square -->
    Must look one rank DOWN the board. Hence, vectors are exactly opposite to the ones a pawn of that side captures with.
    """
    direction = pawn_direction(by_side)
    inverse_pawn_take_deltas: tuple[Vector, ...] = ((1, -direction), (-1, -direction))
    return single_step_attack(
        square, by_side, PieceKind.PAWN, board, inverse_pawn_take_deltas
    )


def is_attacked_by_knight(square: Position, by_side: Side, board: Board) -> bool:
    return single_step_attack(square, by_side, PieceKind.KNIGHT, board, KNIGHT_JUMPS)


def is_attacked_by_bishop(square: Position, by_side: Side, board: Board) -> bool:
    return raycasting_attack(square, by_side, PieceKind.BISHOP, board, DIAGONALS)


def is_attacked_by_rook(square: Position, by_side: Side, board: Board) -> bool:
    return raycasting_attack(square, by_side, PieceKind.ROOK, board, STRAIGHTS)


def is_attacked_by_queen(square: Position, by_side: Side, board: Board) -> bool:
    return raycasting_attack(
        square, by_side, PieceKind.QUEEN, board, STRAIGHTS + DIAGONALS
    )


def is_attacked_by_king(square: Position, by_side: Side, board: Board) -> bool:
    return single_step_attack(
        square, by_side, PieceKind.KING, board, STRAIGHTS + DIAGONALS
    )


# --- STRATEGY PATTERN: ATTACKING RULES ---
IsAttackedFn = Callable[[Position, Side, Board], bool]
ATTACK_RULES: dict[PieceKind, IsAttackedFn] = {
    PieceKind.PAWN: is_attacked_by_pawn,
    PieceKind.KNIGHT: is_attacked_by_knight,
    PieceKind.BISHOP: is_attacked_by_bishop,
    PieceKind.ROOK: is_attacked_by_rook,
    PieceKind.QUEEN: is_attacked_by_queen,
    PieceKind.KING: is_attacked_by_king,
}
