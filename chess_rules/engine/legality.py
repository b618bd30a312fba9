"""
Legal moves: candidate moves that do not put (or leave) your own king in check.

This is the single source of truth for legality. The king's own step filter in moves.py does not cover
discovered checks when other pieces move.
"""

from chess_rules.engine.attacks import is_king_in_check
from chess_rules.engine.board import Board
from chess_rules.engine.castling import CastlingRights
from chess_rules.engine.moves import moves_of
from chess_rules.engine.pieces import Piece
from chess_rules.engine.square import SquarePosition


def simulate_move(
    board: Board, from_square: SquarePosition, to_square: SquarePosition
) -> Board:
    """The board after the move (rook included when castling). The given board is not touched."""
    return board.after_move(from_square, to_square)


def is_putting_yourself_in_check(
    board: Board, piece: Piece, from_square: SquarePosition, to_square: SquarePosition
) -> bool:
    """
    plan:
    1. Copy the board
    2. make the candidate move
    3. determine if your king is in check on the new board
    """
    return is_king_in_check(simulate_move(board, from_square, to_square), piece.color)


def filter_legal(
    board: Board,
    piece: Piece,
    row: int,
    col: int,
    candidates: list[SquarePosition],
) -> list[SquarePosition]:
    """keep those moves that do not put (or leave) you in check"""
    from_square = SquarePosition(row, col)
    return [
        move
        for move in candidates
        if not is_putting_yourself_in_check(board, piece, from_square, move)
    ]


def legal_moves(
    board: Board,
    piece: Piece,
    row: int,
    col: int,
    castling_rights: CastlingRights,
) -> list[SquarePosition]:
    """
    Legal destinations of the piece on (row, col)
    ----

    1. generate candidate moves using the movement rules (castling included)
    2. remove the ones that would leave your king in check
    """
    candidates = moves_of(board, piece, row, col, castling_rights)
    return filter_legal(board, piece, row, col, candidates)
