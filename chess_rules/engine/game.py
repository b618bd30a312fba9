"""
The Game class is the entrypoint into the domain layer for the service layer.
It owns the authoritative position (board, player to move, castling rights) and orchestrates
everything required to play a half-move:

1. offer the legal moves of a piece
2. apply the chosen move on a new board (castling rook co-move, promotion)
3. update castling rights, captured pieces and the notation history
4. re-classify the position for the next player
"""

import logging
from dataclasses import dataclass, field
from typing import Optional, Self

from chess_rules.core.exceptions import GameStateError, IllegalMoveError
from chess_rules.core.shared_types import Color
from chess_rules.engine.board import PROMOTION_PIECE, Board, is_promotion_square
from chess_rules.engine.castling import CastlingRights, update_rights
from chess_rules.engine.evaluator import GameStatus, classify
from chess_rules.engine.fen import STARTING_FEN, FENState
from chess_rules.engine.legality import legal_moves
from chess_rules.engine.notation import notate
from chess_rules.engine.pieces import Piece
from chess_rules.engine.square import SquarePosition

_log = logging.getLogger(__name__)


@dataclass
class Game:
    board: Board
    player_to_move: Color
    castling_rights: CastlingRights
    starting_fen: str = STARTING_FEN
    num_turns: int = 1
    history: list[str] = field(default_factory=list)  # notation of every half-move
    boards: list[Board] = field(default_factory=list)  # every position reached, oldest first
    captured: dict[Color, list[Piece]] = field(
        default_factory=lambda: {Color.WHITE: [], Color.BLACK: []}
    )  # pieces captured BY the color
    status: GameStatus = field(default_factory=GameStatus)

    def __post_init__(self) -> None:
        if not self.boards:
            self.boards.append(self.board)
        self._update_game_status()

    @classmethod
    def new_game(cls, starting_fen: Optional[str] = None) -> Self:
        """Standard starting position, or a custom setup given as FEN."""
        fen = starting_fen or STARTING_FEN
        state = FENState.from_fen(fen)
        game = cls(
            board=state.board,
            player_to_move=state.color_to_move,
            castling_rights=state.castling_rights,
            starting_fen=fen,
            num_turns=state.num_turns,
        )
        _log.info("New game started from %s", fen)
        return game

    def reset(self) -> None:
        """Back to the position the game was started from."""
        state = FENState.from_fen(self.starting_fen)
        self.board = state.board
        self.player_to_move = state.color_to_move
        self.castling_rights = state.castling_rights
        self.num_turns = state.num_turns
        self.history = []
        self.boards = [self.board]
        self.captured = {Color.WHITE: [], Color.BLACK: []}
        self._update_game_status()
        _log.info("Game reset")

    # --- DOMAIN LAYER API CALLED BY SERVICE ---
    def legal_moves(self, square: SquarePosition) -> list[SquarePosition]:
        """
        Legal destinations for the piece on the square.
        Empty squares and the opponent's pieces have none, and neither does anything once the game has ended.
        """
        piece = self.board.piece_at(square)
        if piece is None or piece.color != self.player_to_move:
            return []
        if self.status.is_game_over:
            return []
        return legal_moves(
            self.board, piece, square.row, square.col, self.castling_rights
        )

    def make_move(self, from_square: SquarePosition, to_square: SquarePosition) -> str:
        """
        Attempt to make a move. Returns its notation.
        -----

        1. make sure the game is still going and the move is legal
        2. snapshot the moving/captured pieces before the update
        3. create the new board, castling rights and notation
        4. switch players and update the game status
        """
        if self.status.is_game_over:
            raise GameStateError("Game has ended. No more moves can be made.")

        piece = self.board.piece_at(from_square)
        if piece is None or piece.color != self.player_to_move:
            raise IllegalMoveError(
                f"No piece of {self.player_to_move} on {from_square.to_algebraic()}"
            )

        # the legal move carries the castling tags (the requested square does not need to)
        move = next(
            (m for m in self.legal_moves(from_square) if m == to_square), None
        )
        if move is None:
            raise IllegalMoveError(
                f"Move not allowed: {from_square.to_algebraic()}{to_square.to_algebraic()}"
            )

        captured = self.board.piece_at(move)
        promoted_type = PROMOTION_PIECE if is_promotion_square(piece, move) else None
        notation = notate(
            self.board,
            piece,
            from_square,
            move,
            captured,
            promoted_type,
            move.is_castle_kingside,
            move.is_castle_queenside,
        )

        self.castling_rights = update_rights(
            self.castling_rights, piece, from_square, captured, move
        )
        self.board = self.board.after_move(from_square, move)
        self.boards.append(self.board)
        if captured is not None:
            self.captured[piece.color].append(captured)
        self.history.append(notation)
        _log.debug("%s played %s", self.player_to_move, notation)

        if self.player_to_move == Color.BLACK:
            self.num_turns += 1
        self.player_to_move = self.player_to_move.opponent
        self._update_game_status()
        return notation

    @property
    def winner(self) -> Optional[Color]:
        """Only checkmate has a winner: the player that just got mated is the one to move."""
        if not self.status.is_checkmate:
            return None
        return self.player_to_move.opponent

    @property
    def message(self) -> str:
        """Short status line to show the players"""
        if self.status.is_checkmate:
            return f"Checkmate! {_color_name(self.winner)} wins!"
        if self.status.is_stalemate:
            return "Stalemate! It's a draw."
        check = " (Check!)" if self.status.in_check else ""
        return f"{_color_name(self.player_to_move)}'s Turn{check}"

    def to_fen(self) -> str:
        state = FENState(
            board=self.board,
            color_to_move=self.player_to_move,
            castling_rights=self.castling_rights,
            num_turns=self.num_turns,
        )
        return state.to_fen()

    # -- PRIVATE HELPERS ---
    def _update_game_status(self) -> None:
        """Status is never patched: always re-derived from the position."""
        self.status = classify(self.board, self.player_to_move, self.castling_rights)
        if self.status.is_checkmate:
            _log.info("Checkmate. %s wins", self.player_to_move.opponent)
        elif self.status.is_stalemate:
            _log.info("Stalemate")


def _color_name(color: Optional[Color]) -> str:
    return color.value.capitalize() if color is not None else ""
