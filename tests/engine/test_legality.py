"""Unit tests for chess_rules/engine/legality.py"""

from typing import Callable

import pytest

from chess_rules.engine.attacks import is_king_in_check
from chess_rules.engine.board import Board, create_initial_board
from chess_rules.engine.castling import CastlingRights
from chess_rules.engine.legality import filter_legal, legal_moves, simulate_move
from chess_rules.engine.moves import moves_of
from chess_rules.engine.square import SquarePosition

BoardFactory = Callable[[dict[str, str]], Board]


def sq(name: str) -> SquarePosition:
    return SquarePosition.from_algebraic(name)


def names(squares: list[SquarePosition]) -> set[str]:
    return {square.to_algebraic() for square in squares}


def legal_from(board: Board, square_name: str) -> list[SquarePosition]:
    square = sq(square_name)
    piece = board.piece_at(square)
    assert piece is not None
    return legal_moves(board, piece, square.row, square.col, CastlingRights())


def test_pinned_piece_cannot_move(board_with_pieces: BoardFactory) -> None:
    board = board_with_pieces({"e1": "K", "e2": "B", "e8": "r", "a8": "k"})
    assert legal_from(board, "e2") == []


def test_pinned_rook_may_move_along_the_pin(board_with_pieces: BoardFactory) -> None:
    board = board_with_pieces({"e1": "K", "e2": "R", "e8": "r", "a8": "k"})
    assert names(legal_from(board, "e2")) == {"e3", "e4", "e5", "e6", "e7", "e8"}


def test_in_check_only_blocks_or_captures(board_with_pieces: BoardFactory) -> None:
    """Rook on a1 checks the king on h1 along the first rank: the knight can only block (it cannot reach a1)"""
    board = board_with_pieces({"h1": "K", "a1": "r", "d3": "N", "a8": "k"})
    assert names(legal_from(board, "d3")) == {"c1", "e1"}


def test_simulate_move_does_not_touch_board() -> None:
    board = create_initial_board()
    before = board.to_fen()
    after = simulate_move(board, sq("e2"), sq("e4"))
    assert board.to_fen() == before
    assert after.to_fen() != before


def test_filter_legal_removes_moves_into_check(board_with_pieces: BoardFactory) -> None:
    board = board_with_pieces({"e1": "K", "e8": "r", "a8": "k"})
    king = board.piece_at(sq("e1"))
    assert king is not None
    candidates = [sq("e2"), sq("d1"), sq("f2")]
    assert names(filter_legal(board, king, 7, 4, candidates)) == {"d1", "f2"}


def test_castling_into_check_is_filtered(board_with_pieces: BoardFactory) -> None:
    """g1 itself attacked: the candidate generator offers it, the legality filter removes it"""
    board = board_with_pieces({"e1": "K", "h1": "R", "g8": "r", "a8": "k"})
    king = board.piece_at(sq("e1"))
    assert king is not None
    candidates = moves_of(board, king, 7, 4, CastlingRights())
    assert any(move.is_castle_kingside for move in candidates)
    legal = legal_moves(board, king, 7, 4, CastlingRights())
    assert not any(move.is_castle_kingside for move in legal)


POSITIONS = [
    "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR",
    "r3k2r/pppq1ppp/2npbn2/4p3/2B1P3/2NP1N2/PPP2PPP/R3K2R",
    "rnb1kbnr/pppp1ppp/8/4p3/6Pq/5P2/PPPPP2P/RNBQKBNR",
    "4k3/8/8/8/1b6/8/3P4/4K2R",
    "7k/5Q2/6K1/8/8/8/8/8",
]


@pytest.mark.parametrize("fen", POSITIONS)
def test_legal_moves_never_leave_king_in_check(fen: str) -> None:
    """Every legal move is a candidate move, and simulating it never leaves the mover's king attacked"""
    board = Board.from_fen(fen)
    rights = CastlingRights()
    for square, piece in board.pieces():
        candidates = moves_of(board, piece, square.row, square.col, rights)
        legal = legal_moves(board, piece, square.row, square.col, rights)
        assert set(legal) <= set(candidates)
        for move in legal:
            after = simulate_move(board, square, move)
            assert not is_king_in_check(after, piece.color)
