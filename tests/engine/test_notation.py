"""Unit tests for chess_rules/engine/notation.py"""

from typing import Callable, Optional

import pytest

from chess_rules.engine.board import Board, create_initial_board
from chess_rules.engine.notation import notate
from chess_rules.engine.pieces import Piece, PieceType
from chess_rules.engine.square import SquarePosition

BoardFactory = Callable[[dict[str, str]], Board]


def sq(name: str) -> SquarePosition:
    return SquarePosition.from_algebraic(name)


def notate_move(
    board: Board, move: str, promoted_type: Optional[PieceType] = None
) -> str:
    """Notation for a plain (non castling) move given as 'e2e4'"""
    from_square, to_square = sq(move[:2]), sq(move[2:])
    mover = board.piece_at(from_square)
    assert mover is not None
    captured = board.piece_at(to_square)
    return notate(
        board, mover, from_square, to_square, captured, promoted_type, False, False
    )


def play(board: Board, *moves: str) -> Board:
    for move in moves:
        board = board.after_move(sq(move[:2]), sq(move[2:]))
    return board


def test_kings_pawn_opening() -> None:
    assert notate_move(create_initial_board(), "e2e4") == "e4"


def test_knight_move() -> None:
    assert notate_move(create_initial_board(), "g1f3") == "Nf3"


def test_pawn_capture_uses_origin_file() -> None:
    board = play(create_initial_board(), "e2e4", "d7d5")
    assert notate_move(board, "e4d5") == "exd5"


def test_piece_capture() -> None:
    board = play(create_initial_board(), "e2e4", "d7d5", "e4d5")
    assert notate_move(board, "d8d5") == "Qxd5"


@pytest.mark.parametrize(
    "is_kingside, is_queenside, expected",
    [(True, False, "O-O"), (False, True, "O-O-O")],
)
def test_castling(
    board_with_pieces: BoardFactory, is_kingside: bool, is_queenside: bool, expected: str
) -> None:
    board = board_with_pieces({"e1": "K", "a1": "R", "h1": "R", "e8": "k"})
    king = Piece.from_fen("K")
    to_square = sq("g1") if is_kingside else sq("c1")
    notation = notate(
        board, king, sq("e1"), to_square, None, None, is_kingside, is_queenside
    )
    assert notation == expected


def test_promotion(board_with_pieces: BoardFactory) -> None:
    board = board_with_pieces({"a7": "P", "e1": "K", "h5": "k"})
    assert notate_move(board, "a7a8", PieceType.QUEEN) == "a8=Q"


def test_promotion_with_capture_and_check(board_with_pieces: BoardFactory) -> None:
    """The promoted queen on b8 checks the king on h8 along the back rank"""
    board = board_with_pieces({"a7": "P", "b8": "n", "e1": "K", "h8": "k", "h7": "p", "g7": "p"})
    notation = notate_move(board, "a7b8", PieceType.QUEEN)
    assert notation == "axb8=Q#"


def test_check_marker() -> None:
    """1. e4 f5 2. Qh5+"""
    board = play(create_initial_board(), "e2e4", "f7f5")
    assert notate_move(board, "d1h5") == "Qh5+"


def test_checkmate_marker() -> None:
    """1. f3 e5 2. g4 Qh4#"""
    board = play(create_initial_board(), "f2f3", "e7e5", "g2g4")
    assert notate_move(board, "d8h4") == "Qh4#"


def test_no_disambiguation(board_with_pieces: BoardFactory) -> None:
    """Both rooks can reach d1: the notation does not tell which one moved"""
    board = board_with_pieces({"a1": "R", "h1": "R", "g3": "K", "e8": "k"})
    assert notate_move(board, "a1d1") == "Rd1"
    assert notate_move(board, "h1d1") == "Rd1"


def test_pre_move_board_is_not_modified() -> None:
    board = play(create_initial_board(), "f2f3", "e7e5", "g2g4")
    before = board.to_fen()
    _ = notate_move(board, "d8h4")
    assert board.to_fen() == before
