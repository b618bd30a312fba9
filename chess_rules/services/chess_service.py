"""Orchestration of communication from the UI to the business logic (and the reverse direction)."""

import logging
from typing import Optional

from chess_rules.api.models import (
    CapturedPiece,
    GameResponse,
    LegalMovesRequest,
    LegalMovesResponse,
    MoveRequest,
    NewGameRequest,
)
from chess_rules.core.exceptions import GameStateError
from chess_rules.engine.game import Game
from chess_rules.engine.square import SquarePosition

_log = logging.getLogger(__name__)


class ChessService:
    """Holds the one game the UI is showing. The UI never touches the domain objects directly."""

    def __init__(self, game: Optional[Game] = None) -> None:
        self.game = game

    # -- UI actions ---
    def new_game(self, request: NewGameRequest) -> GameResponse:
        """Start a (custom) game, replacing whatever game was being played."""
        self.game = Game.new_game(starting_fen=request.starting_fen)
        return self._create_game_response(self.game)

    def get_game_state(self) -> GameResponse:
        return self._create_game_response(self._current_game())

    def legal_moves(self, request: LegalMovesRequest) -> LegalMovesResponse:
        """Destinations to highlight after the user selected a square."""
        game = self._current_game()
        moves = game.legal_moves(SquarePosition.from_algebraic(request.square))
        return LegalMovesResponse(
            square=request.square,
            legal_moves=[move.to_algebraic() for move in moves],
            castling_moves=[move.to_algebraic() for move in moves if move.is_castle],
        )

    def make_move(self, request: MoveRequest) -> GameResponse:
        """Make a move attempt. Exceptions of the Game are propagated."""
        game = self._current_game()
        game.make_move(
            SquarePosition.from_algebraic(request.from_square),
            SquarePosition.from_algebraic(request.to_square),
        )
        return self._create_game_response(game)

    def reset_game(self) -> GameResponse:
        game = self._current_game()
        game.reset()
        return self._create_game_response(game)

    # -- Internal helpers --
    def _current_game(self) -> Game:
        if self.game is None:
            raise GameStateError("No game has been started yet.")
        return self.game

    def _create_game_response(self, game: Game) -> GameResponse:
        """Convert the state of the Game into a GameResponse."""
        _log.debug("Game state: %s (%s)", game.to_fen(), game.message)
        return GameResponse(
            fen_state=game.to_fen(),
            starting_state=game.starting_fen,
            player_to_move=game.player_to_move,
            in_check=game.status.in_check,
            is_checkmate=game.status.is_checkmate,
            is_stalemate=game.status.is_stalemate,
            winner=game.winner,
            message=game.message,
            move_history=list(game.history),
            captured={
                color: [CapturedPiece(type=p.type, color=p.color) for p in pieces]
                for color, pieces in game.captured.items()
            },
            material=game.board.count_material(),
        )
