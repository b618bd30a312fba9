"""
Attacking rules
----

The squares a piece threatens. This is a restricted form of move generation:
* it does not matter what stands on the attacked square (own pieces are "defended", so attacked as well)
* pawns only attack diagonally forward

Only used to answer "is this square attacked by that color?" (check detection / castling through attacked squares).
"""

from typing import Callable

from chess_rules.core.shared_types import Color, PieceType
from chess_rules.engine.board import Board
from chess_rules.engine.pieces import Piece
from chess_rules.engine.square import SquarePosition

Vector = tuple[int, int]

STRAIGHTS: list[Vector] = [(-1, 0), (1, 0), (0, -1), (0, 1)]
DIAGONALS: list[Vector] = [(-1, -1), (-1, 1), (1, -1), (1, 1)]
KNIGHT_DELTAS: list[Vector] = [
    (-2, -1),
    (-2, 1),
    (-1, -2),
    (-1, 2),
    (1, -2),
    (1, 2),
    (2, -1),
    (2, 1),
]
KING_DELTAS: list[Vector] = STRAIGHTS + DIAGONALS


def pawn_direction(color: Color) -> int:
    """White pawns move UP the board (towards row 0), black pawns move DOWN"""
    return -1 if color == Color.WHITE else 1


def raycasting_attack(
    square: SquarePosition, board: Board, directions: list[Vector]
) -> set[SquarePosition]:
    """
    Walk along each direction until the edge of the board or the first occupied square.
    The occupied square is included: whatever stands there is under attack.
    """
    attacked: set[SquarePosition] = set()
    for d_row, d_col in directions:
        target = square.shifted(d_row, d_col)
        while target.is_within_bounds():
            attacked.add(target)
            if not board.is_empty(target):
                break
            target = target.shifted(d_row, d_col)
    return attacked


def single_step_attack(
    square: SquarePosition, deltas: list[Vector]
) -> set[SquarePosition]:
    """Knights and kings: every offset that stays on the board, occupied or not"""
    return {
        target
        for target in (square.shifted(d_row, d_col) for d_row, d_col in deltas)
        if target.is_within_bounds()
    }


def pawn_attacks(square: SquarePosition, color: Color, board: Board) -> set[SquarePosition]:
    """Pawns take diagonally (never straight ahead)"""
    direction = pawn_direction(color)
    return single_step_attack(square, [(direction, -1), (direction, 1)])


def knight_attacks(square: SquarePosition, color: Color, board: Board) -> set[SquarePosition]:
    return single_step_attack(square, KNIGHT_DELTAS)


def bishop_attacks(square: SquarePosition, color: Color, board: Board) -> set[SquarePosition]:
    return raycasting_attack(square, board, DIAGONALS)


def rook_attacks(square: SquarePosition, color: Color, board: Board) -> set[SquarePosition]:
    return raycasting_attack(square, board, STRAIGHTS)


def queen_attacks(square: SquarePosition, color: Color, board: Board) -> set[SquarePosition]:
    return raycasting_attack(square, board, STRAIGHTS + DIAGONALS)


def king_attacks(square: SquarePosition, color: Color, board: Board) -> set[SquarePosition]:
    return single_step_attack(square, KING_DELTAS)


# --- STRATEGY PATTERN: ATTACKING RULES ---
AttackFn = Callable[[SquarePosition, Color, Board], set[SquarePosition]]
ATTACK_RULES: dict[PieceType, AttackFn] = {
    PieceType.PAWN: pawn_attacks,
    PieceType.KNIGHT: knight_attacks,
    PieceType.BISHOP: bishop_attacks,
    PieceType.ROOK: rook_attacks,
    PieceType.QUEEN: queen_attacks,
    PieceType.KING: king_attacks,
}


def attacks_of(board: Board, piece: Piece, row: int, col: int) -> set[SquarePosition]:
    """The set of squares the piece standing on (row, col) threatens"""
    return ATTACK_RULES[piece.type](SquarePosition(row, col), piece.color, board)


def is_square_attacked(board: Board, row: int, col: int, attacker_color: Color) -> bool:
    """True if any piece of the attacking color has the square in its line of sight"""
    target = SquarePosition(row, col)
    return any(
        target in attacks_of(board, piece, square.row, square.col)
        for square, piece in board.pieces(attacker_color)
    )


def is_king_in_check(board: Board, king_color: Color) -> bool:
    """
    Is the king of the given color attacked by the opponent?

    NOTE: A board without this king is treated as 'not in check' rather than an error.
    """
    king_square = board.find_king(king_color)
    if king_square is None:
        return False
    return is_square_attacked(
        board, king_square.row, king_square.col, king_color.opponent
    )
