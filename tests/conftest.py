"""
Pytest will auto-discover / import this file called 'conftest.py'.
This file defines fixtures required for testing multiple layers.
"""

from typing import Callable

import pytest

from chess_rules.engine.board import Board
from chess_rules.engine.pieces import Piece
from chess_rules.engine.square import SquarePosition

EMPTY_FEN = "/".join(["8"] * 8)


@pytest.fixture
def board_with_pieces() -> Callable[[dict[str, str]], Board]:
    """Call the inner function with a mapping of square names to FEN characters, ex. {"e1": "K", "e8": "k"}"""

    def _create_board(placement: dict[str, str]) -> Board:
        board = Board.from_fen(EMPTY_FEN)
        for square_name, fen_char in placement.items():
            board.place_piece(
                Piece.from_fen(fen_char), SquarePosition.from_algebraic(square_name)
            )
        return board

    return _create_board
