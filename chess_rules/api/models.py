"""Requests and Response models"""

from typing import Optional

from pydantic import BaseModel, field_validator

from chess_rules.core.exceptions import InvalidRequestError
from chess_rules.core.shared_types import Color, PieceType
from chess_rules.engine.fen import is_valid_fen, is_valid_square

SquareName = str


def _validate_square_name(value: str) -> str:
    if not is_valid_square(value):
        raise InvalidRequestError(
            f"Cannot interpret {value!r} as a valid square name."
        )
    return value


# --- REQUEST MODELS ---
class NewGameRequest(BaseModel):
    starting_fen: Optional[str] = None

    @field_validator("starting_fen")
    @classmethod
    def validate_starting_fen(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value

        value = value.strip()
        if not is_valid_fen(value):
            raise InvalidRequestError(f"Cannot interpret {value!r} as a FEN string.")
        return value


class LegalMovesRequest(BaseModel):
    square: SquareName

    @field_validator("square")
    @classmethod
    def validate_square(cls, value: str) -> str:
        return _validate_square_name(value)


class MoveRequest(BaseModel):
    from_square: SquareName
    to_square: SquareName

    @field_validator(*["from_square", "to_square"])
    @classmethod
    def validate_square(cls, value: str) -> str:
        return _validate_square_name(value)


# --- RESPONSE MODELS ---
class CapturedPiece(BaseModel):
    type: PieceType
    color: Color


class GameResponse(BaseModel):
    fen_state: str
    starting_state: str
    player_to_move: Color
    in_check: bool
    is_checkmate: bool
    is_stalemate: bool
    winner: Optional[Color]
    message: str
    move_history: list[str]
    captured: dict[Color, list[CapturedPiece]]
    material: dict[Color, int]


class LegalMovesResponse(BaseModel):
    square: SquareName
    legal_moves: list[SquareName]
    castling_moves: list[SquareName]
