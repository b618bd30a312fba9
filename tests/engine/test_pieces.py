"""Unit tests for chess_rules/engine/pieces.py"""

from dataclasses import FrozenInstanceError

import pytest

from chess_rules.engine.pieces import (
    FEN_TO_PIECE,
    PIECE_TO_FEN,
    Color,
    Piece,
    PieceType,
)


@pytest.mark.parametrize("char", [char.upper() for char in FEN_TO_PIECE.keys()])
def test_creating_white_piece_from_fen(char: str) -> None:
    """Capital letters are used for white pieces"""
    piece = Piece.from_fen(char)
    assert piece.type == FEN_TO_PIECE[char.lower()]
    assert piece.color == Color.WHITE


@pytest.mark.parametrize("char", [char.lower() for char in FEN_TO_PIECE.keys()])
def test_creating_black_piece_from_fen(char: str) -> None:
    """Lower case letters are used for black pieces"""
    piece = Piece.from_fen(char)
    assert piece.type == FEN_TO_PIECE[char]
    assert piece.color == Color.BLACK


@pytest.mark.parametrize("piece_type", list(PieceType))
def test_pieces_to_fen(piece_type: PieceType) -> None:
    assert Piece(piece_type, Color.WHITE).to_fen() == PIECE_TO_FEN[piece_type].upper()
    assert Piece(piece_type, Color.BLACK).to_fen() == PIECE_TO_FEN[piece_type]


@pytest.mark.parametrize("color", list(Color))
def test_promotion_to_queen(color: Color) -> None:
    """Promotion hands back a new queen of the same color, the pawn itself stays a pawn"""
    pawn = Piece(PieceType.PAWN, color)
    queen = pawn.promoted_to(PieceType.QUEEN)
    assert queen == Piece(PieceType.QUEEN, color)
    assert queen.points == 9
    assert pawn.type == PieceType.PAWN


def test_pieces_are_immutable() -> None:
    piece = Piece(PieceType.ROOK, Color.WHITE)
    with pytest.raises(FrozenInstanceError):
        piece.type = PieceType.QUEEN  # type: ignore[misc]


def test_king_has_no_points() -> None:
    assert Piece(PieceType.KING, Color.BLACK).points == 0
