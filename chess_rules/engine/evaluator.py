"""Check / checkmate / stalemate classification of a position"""

from dataclasses import dataclass

from chess_rules.core.shared_types import Color
from chess_rules.engine.attacks import is_king_in_check
from chess_rules.engine.board import Board
from chess_rules.engine.castling import CastlingRights
from chess_rules.engine.legality import legal_moves


@dataclass(frozen=True)
class GameStatus:
    in_check: bool = False
    is_checkmate: bool = False
    is_stalemate: bool = False

    @property
    def is_game_over(self) -> bool:
        return self.is_checkmate or self.is_stalemate


def has_any_legal_move(board: Board, color: Color, castling_rights: CastlingRights) -> bool:
    """Stops at the first piece that has at least one legal move"""
    return any(
        legal_moves(board, piece, square.row, square.col, castling_rights)
        for square, piece in board.pieces(color)
    )


def classify(
    board: Board, player_to_move: Color, castling_rights: CastlingRights
) -> GameStatus:
    """
    Status of the position for the player that has to move. Always computed from scratch.

    * no legal move and in check --> checkmate
    * no legal move and not in check --> stalemate
    """
    in_check = is_king_in_check(board, player_to_move)
    if has_any_legal_move(board, player_to_move, castling_rights):
        return GameStatus(in_check=in_check)
    return GameStatus(
        in_check=in_check, is_checkmate=in_check, is_stalemate=not in_check
    )
