"""
Standard algebraic notation for a half-move that has been made (ex. 'e4', 'Nf3', 'exd5', 'e8=Q', 'O-O', 'Qh4#')

NOTE: No disambiguation between two pieces of the same type that can reach the same square ('Rad1' is written 'Rd1').
"""

from typing import Optional

from chess_rules.core.shared_types import PieceType
from chess_rules.engine.board import Board
from chess_rules.engine.castling import CastlingRights
from chess_rules.engine.evaluator import classify
from chess_rules.engine.pieces import PIECE_LETTERS, Piece
from chess_rules.engine.square import SquarePosition

KING_SIDE_CASTLE = "O-O"
QUEEN_SIDE_CASTLE = "O-O-O"
CHECK_MARKER = "+"
CHECKMATE_MARKER = "#"


def notate(
    board: Board,
    mover: Piece,
    from_square: SquarePosition,
    to_square: SquarePosition,
    captured: Optional[Piece],
    promoted_type: Optional[PieceType],
    is_kingside_castle: bool,
    is_queenside_castle: bool,
) -> str:
    """
    Notation of the move, given the board *before* the move was made.

    The check(mate) marker is found by replaying the move on a copy of the board and classifying the opponent's position.
    """
    if is_kingside_castle:
        return KING_SIDE_CASTLE
    if is_queenside_castle:
        return QUEEN_SIDE_CASTLE

    notation = PIECE_LETTERS[mover.type]
    if captured is not None:
        if mover.type == PieceType.PAWN:
            # pawn capture: "exd5"
            notation += from_square.to_algebraic()[0]
        notation += "x"

    notation += to_square.to_algebraic()

    if promoted_type is not None:
        notation += f"={PIECE_LETTERS[promoted_type]}"

    return notation + _check_marker(board, mover, from_square, to_square, promoted_type)


def _check_marker(
    board: Board,
    mover: Piece,
    from_square: SquarePosition,
    to_square: SquarePosition,
    promoted_type: Optional[PieceType],
) -> str:
    after = board.copy()
    after.remove_piece(from_square)
    moved = mover.promoted_to(promoted_type) if promoted_type is not None else mover
    after.place_piece(moved, to_square)

    # castling can never get you out of check, so the opponent's rights do not matter here
    status = classify(after, mover.color.opponent, CastlingRights.none())
    if status.is_checkmate:
        return CHECKMATE_MARKER
    if status.in_check:
        return CHECK_MARKER
    return ""
