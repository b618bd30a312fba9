"""
Geometry/Base movement rules

Key idea: Use strategy pattern to define candidate move sets for each piece type.

Legality (not leaving your own king in check) is checked later by legality.py
"""

from typing import Callable

from chess_rules.core.shared_types import Color, PieceType
from chess_rules.engine.attacks import (
    DIAGONALS,
    KING_DELTAS,
    KNIGHT_DELTAS,
    STRAIGHTS,
    Vector,
    is_king_in_check,
    is_square_attacked,
    pawn_direction,
)
from chess_rules.engine.board import Board
from chess_rules.engine.castling import (
    HOME_ROW,
    KING_SIDE_ROOK_COL,
    KING_START_COL,
    QUEEN_SIDE_ROOK_COL,
    CastlingRights,
)
from chess_rules.engine.pieces import Piece
from chess_rules.engine.square import SquarePosition

PAWN_START_ROW: dict[Color, int] = {
    Color.WHITE: 6,
    Color.BLACK: 1,
}


def _is_free_or_enemy(board: Board, target: SquarePosition, color: Color) -> bool:
    piece = board.piece_at(target)
    return piece is None or piece.color != color


# --- MOVEMENT RULES ---
def raycasting_move(
    square: SquarePosition, color: Color, board: Board, directions: list[Vector]
) -> list[SquarePosition]:
    """
    Raycasting algorithm
    -----

    We define move directions and move along them until we hit another piece or
    the edge of the board. The first occupied square is only a move if it holds an opponent's piece (capture).
    """
    moves: list[SquarePosition] = []
    for d_row, d_col in directions:
        target = square.shifted(d_row, d_col)
        while target.is_within_bounds():
            piece = board.piece_at(target)
            if piece is not None:
                if piece.color != color:
                    moves.append(target)
                break
            moves.append(target)
            target = target.shifted(d_row, d_col)
    return moves


def single_step_move(
    square: SquarePosition, color: Color, board: Board, deltas: list[Vector]
) -> list[SquarePosition]:
    """Raycasting is for sliding pieces. This is the equivalent for kings and knights that just move a single step along a direction"""
    return [
        target
        for target in (square.shifted(d_row, d_col) for d_row, d_col in deltas)
        if target.is_within_bounds() and _is_free_or_enemy(board, target, color)
    ]


def candidate_pawn_moves(
    square: SquarePosition, color: Color, board: Board
) -> list[SquarePosition]:
    """
    A pawn:
    - moves by a single square forward (onto an empty square only).
    - It can move by two in their first move (so when on their starting rank), if both squares are empty
    - takes diagonally (only onto an opponent's piece)

    NOTE: No en passant.
    """
    moves: list[SquarePosition] = []
    direction = pawn_direction(color)

    one_step = square.shifted(direction, 0)
    if one_step.is_within_bounds() and board.is_empty(one_step):
        moves.append(one_step)
        two_steps = square.shifted(2 * direction, 0)
        if (
            square.row == PAWN_START_ROW[color]
            and two_steps.is_within_bounds()
            and board.is_empty(two_steps)
        ):
            moves.append(two_steps)

    for d_col in (-1, 1):
        target = square.shifted(direction, d_col)
        if not target.is_within_bounds():
            continue
        piece = board.piece_at(target)
        if piece is not None and piece.color != color:
            moves.append(target)
    return moves


def candidate_knight_moves(
    square: SquarePosition, color: Color, board: Board
) -> list[SquarePosition]:
    """Knights always move such that |delta_row| + |delta_col| = 3"""
    return single_step_move(square, color, board, KNIGHT_DELTAS)


def candidate_bishop_moves(
    square: SquarePosition, color: Color, board: Board
) -> list[SquarePosition]:
    """Bishops move diagonally: |delta_row| = |delta_col|"""
    return raycasting_move(square, color, board, DIAGONALS)


def candidate_rook_moves(
    square: SquarePosition, color: Color, board: Board
) -> list[SquarePosition]:
    """Rooks move either horizontally or vertically"""
    return raycasting_move(square, color, board, STRAIGHTS)


def candidate_queen_moves(
    square: SquarePosition, color: Color, board: Board
) -> list[SquarePosition]:
    """
    The Queen combines the rook moves (horizontal + vertical movements) and bishop moves (diagonal movement)
    """
    return candidate_rook_moves(square, color, board) + candidate_bishop_moves(
        square, color, board
    )


def candidate_king_moves(
    square: SquarePosition, color: Color, board: Board
) -> list[SquarePosition]:
    """
    The king can move by a single square at the time, but never steps into check:
    every step is tried out on a scratch board.

    Castling is modelled as a special king move (see `castling_moves()`).
    """
    moves: list[SquarePosition] = []
    for target in single_step_move(square, color, board, KING_DELTAS):
        scratch = board.copy()
        scratch.move_piece(square, target)
        if not is_king_in_check(scratch, color):
            moves.append(target)
    return moves


# -- STRATEGY PATTERN: MOVEMENT RULES ---
CandidateMovesFn = Callable[[SquarePosition, Color, Board], list[SquarePosition]]
MOVEMENT_RULES: dict[PieceType, CandidateMovesFn] = {
    PieceType.PAWN: candidate_pawn_moves,
    PieceType.KNIGHT: candidate_knight_moves,
    PieceType.BISHOP: candidate_bishop_moves,
    PieceType.ROOK: candidate_rook_moves,
    PieceType.QUEEN: candidate_queen_moves,
    PieceType.KING: candidate_king_moves,
}


# -- CASTLING MOVES ---
def squares_between_on_row(
    from_square: SquarePosition, to_square: SquarePosition
) -> list[SquarePosition]:
    """
    Find the squares strictly in between the two squares specified that are on the same row

    Needed for checking if you can still castle.
    """
    if from_square.row != to_square.row:
        raise ValueError(
            f"squares_between_on_row requires both squares to lie on the same row. \n from: {from_square}\n to:{to_square}"
        )
    low, high = sorted([from_square.col, to_square.col])
    return [SquarePosition(from_square.row, col) for col in range(low + 1, high)]


def castling_moves(
    square: SquarePosition,
    color: Color,
    board: Board,
    castling_rights: CastlingRights,
) -> list[SquarePosition]:
    """
    Castling destinations for the king standing on the square
    ---

    **you are allowed to castle if**

    * You are not currently in check (you cannot castle out of check).
    * Castling rights are not yet revoked (and king and rook still stand on their starting squares).
    * All squares in between the king and the rook are empty.
    * The square the king passes over is not under attack.

    The destination itself is checked by the legality filter, like any other king move.
    """
    opponent_color = color.opponent
    if is_square_attacked(board, square.row, square.col, opponent_color):
        return []

    rights = castling_rights.for_color(color)
    own_rook = Piece(PieceType.ROOK, color)
    home_row = HOME_ROW[color]
    king_home = SquarePosition(home_row, KING_START_COL)
    moves: list[SquarePosition] = []
    for allowed, rook_col, step, tag in [
        (rights.king_side, KING_SIDE_ROOK_COL, 1, "is_castle_kingside"),
        (rights.queen_side, QUEEN_SIDE_ROOK_COL, -1, "is_castle_queenside"),
    ]:
        if not allowed:
            continue

        rook_square = SquarePosition(home_row, rook_col)
        if square != king_home or board.piece_at(rook_square) != own_rook:
            continue

        path = squares_between_on_row(square, rook_square)
        if not all(board.is_empty(between) for between in path):
            continue

        passed_over = square.shifted(0, step)
        if is_square_attacked(board, passed_over.row, passed_over.col, opponent_color):
            continue

        moves.append(SquarePosition(square.row, square.col + 2 * step, **{tag: True}))
    return moves


def moves_of(
    board: Board,
    piece: Piece,
    row: int,
    col: int,
    castling_rights: CastlingRights,
) -> list[SquarePosition]:
    """
    Candidate destinations of the piece standing on (row, col). Not yet filtered for legality.
    No particular ordering is guaranteed.
    """
    square = SquarePosition(row, col)
    movement_rule = MOVEMENT_RULES[piece.type]
    moves = movement_rule(square, piece.color, board)
    if piece.type == PieceType.KING:
        moves.extend(castling_moves(square, piece.color, board, castling_rights))
    return moves
