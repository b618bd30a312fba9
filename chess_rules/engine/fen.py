"""
Load / write positions as FEN strings (custom setups).

FEN, or Forsyth-Edwards Notation, is a standard notation for describing a particular board position of a chess game:

<board position string> <active color> <castling rights> <en passant square> <half move clock> <number turns played>

ex) The standard starting position has a FEN
rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1

NOTE: There is no en passant and no fifty-move rule in this engine. Those two fields are validated, but otherwise ignored.
"""

from dataclasses import dataclass
from typing import Self

from chess_rules.core.exceptions import InvalidFENError
from chess_rules.core.shared_types import Color
from chess_rules.engine.board import STARTING_POSITION, Board
from chess_rules.engine.castling import CastlingRights
from chess_rules.engine.pieces import FEN_TO_PIECE
from chess_rules.engine.square import BOARD_SIZE, FILE_NAMES

STARTING_FEN = f"{STARTING_POSITION} w KQkq - 0 1"
VALID_CASTLING_ENCODINGS = [
    "-",
    "K",
    "Q",
    "k",
    "q",
    "KQ",
    "Kk",
    "Kq",
    "Qk",
    "Qq",
    "kq",
    "KQk",
    "KQq",
    "Kkq",
    "Qkq",
    "KQkq",
]


def is_valid_fen(fen: str) -> bool:
    """
    Check if given string follows proper FEN notation.
    """
    parts = fen.split(" ")
    if len(parts) != 6:
        return False

    position, color, castling, en_passant, half_moves, full_moves = parts
    return (
        is_valid_position(position)
        and is_valid_color_code(color)
        and is_valid_castling_rights(castling)
        and is_valid_en_passant(en_passant)
        and half_moves.isdigit()
        and full_moves.isdigit()
    )


def is_valid_position(position: str) -> bool:
    """Only check the part of the FEN encoding for the board position."""
    rank_fens = position.split("/")
    if len(rank_fens) != BOARD_SIZE:
        return False

    for rank_fen in rank_fens:
        file_count = 0
        for character in rank_fen:
            if character.isdigit():
                file_count += int(character)
            elif character.lower() in FEN_TO_PIECE:
                file_count += 1
            else:
                return False

        # make sure you are creating a correctly sized board
        if file_count != BOARD_SIZE:
            return False
    return True


def is_valid_color_code(color: str) -> bool:
    return color in {"w", "b"}


def is_valid_castling_rights(castling: str) -> bool:
    """A valid castling encoding has either KQkq, KQk, etc. or a '-' if all rights have been revoked."""
    return castling in VALID_CASTLING_ENCODINGS


def is_valid_en_passant(en_passant: str) -> bool:
    return (en_passant == "-") or is_valid_square(en_passant)


def is_valid_square(square: str) -> bool:
    """Valid square should be a letter for the file + a number for the rank"""
    if len(square) != 2:
        return False
    file_char, rank_char = square[0], square[1]
    return (
        file_char in FILE_NAMES
        and rank_char.isdigit()
        and 1 <= int(rank_char) <= BOARD_SIZE
    )


@dataclass
class FENState:
    """The parts of a FEN string the engine works with."""

    board: Board
    color_to_move: Color
    castling_rights: CastlingRights
    num_turns: int = 1

    @classmethod
    def from_fen(cls, fen: str) -> Self:
        """Parse the FEN into data"""
        if not is_valid_fen(fen):
            raise InvalidFENError(f"Cannot interpret supplied string as FEN: {fen}")

        position, active_color, castling_str, _, _, num_turns = fen.split(" ")
        return cls(
            board=Board.from_fen(position),
            color_to_move=Color.WHITE if active_color == "w" else Color.BLACK,
            castling_rights=CastlingRights.from_fen(castling_str),
            num_turns=int(num_turns),
        )

    def to_fen(self) -> str:
        """reverse operation: write a FEN from the given data"""
        active_color = "w" if self.color_to_move == Color.WHITE else "b"
        return f"{self.board.to_fen()} {active_color} {self.castling_rights.to_fen()} - 0 {self.num_turns}"

    @classmethod
    def starting_position(cls) -> Self:
        return cls.from_fen(STARTING_FEN)
