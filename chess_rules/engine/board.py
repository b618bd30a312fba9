"""The board: an 8x8 grid of optional pieces"""

from dataclasses import dataclass
from typing import Iterator, Optional, Self

from chess_rules.core.shared_types import Color, PieceType
from chess_rules.engine.castling import castle_rook_squares
from chess_rules.engine.pieces import Piece
from chess_rules.engine.square import BOARD_SIZE, SquarePosition

STARTING_POSITION = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR"

# Underpromotion is not supported: a pawn reaching the last rank always becomes a queen.
PROMOTION_PIECE = PieceType.QUEEN

Grid = list[list[Optional[Piece]]]


@dataclass
class Board:
    grid: Grid

    @classmethod
    def empty(cls) -> Self:
        return cls([[None] * BOARD_SIZE for _ in range(BOARD_SIZE)])

    @classmethod
    def from_fen(cls, fen_str: str) -> Self:
        """Construct a board using the piece placement part of a FEN string.

        ex. standard starting position:
        rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR
        means:
        * black pieces are on the 8th rank (row 0), starting with the rook on a8
        * rank 2 are the white pawns (capital letters)
        * a number denotes that many empty squares after each other

        NOTE: the placement is assumed to be valid here (see fen.py for validation).
        """
        board = cls.empty()
        for row, fen_one_rank in enumerate(fen_str.split("/")):
            col = 0
            for character in fen_one_rank:
                if character.isalpha():
                    board.grid[row][col] = Piece.from_fen(character)
                    col += 1
                else:
                    col += int(character)
        return board

    def to_fen(self) -> str:
        """Ranks are separated by slashes in FEN string."""
        return "/".join(self._row_to_fen(row) for row in self.grid)

    @staticmethod
    def _row_to_fen(row: list[Optional[Piece]]) -> str:
        fen_characters: list[str] = []
        empty_count = 0
        for piece in row:
            if piece is None:
                empty_count += 1
                continue
            if empty_count > 0:
                fen_characters.append(str(empty_count))
                empty_count = 0
            fen_characters.append(piece.to_fen())

        if empty_count > 0:
            fen_characters.append(str(empty_count))
        return "".join(fen_characters)

    def copy(self) -> Self:
        """Independent copy of the grid. Pieces are immutable, so only the rows need copying."""
        return type(self)([list(row) for row in self.grid])

    def piece_at(self, square: SquarePosition) -> Optional[Piece]:
        return self.grid[square.row][square.col]

    def is_empty(self, square: SquarePosition) -> bool:
        return self.piece_at(square) is None

    def pieces(self, color: Optional[Color] = None) -> Iterator[tuple[SquarePosition, Piece]]:
        """Walk the board row by row (rank 8 first), optionally only one color's pieces"""
        for row in range(BOARD_SIZE):
            for col in range(BOARD_SIZE):
                piece = self.grid[row][col]
                if piece is None:
                    continue
                if color is None or piece.color == color:
                    yield SquarePosition(row, col), piece

    def find_king(self, color: Color) -> Optional[SquarePosition]:
        king = Piece(PieceType.KING, color)
        return next(
            (square for square, piece in self.pieces(color) if piece == king), None
        )

    # --- Mutating helpers: only use these on a board you own (a copy) ---
    def place_piece(self, piece: Piece, square: SquarePosition) -> None:
        self.grid[square.row][square.col] = piece

    def remove_piece(self, square: SquarePosition) -> None:
        self.grid[square.row][square.col] = None

    def move_piece(self, from_square: SquarePosition, to_square: SquarePosition) -> None:
        """Update the position on the board (whatever stood on the target square is gone)"""
        self.grid[to_square.row][to_square.col] = self.piece_at(from_square)
        self.remove_piece(from_square)

    # --- Pure helpers ---
    def after_move(
        self, from_square: SquarePosition, to_square: SquarePosition
    ) -> Self:
        """
        The board after the move, leaving this board untouched.

        * castling destinations also move the rook
        * a pawn reaching the last rank gets promoted
        """
        board = self.copy()
        board.move_piece(from_square, to_square)
        if to_square.is_castle:
            rook_from, rook_to = castle_rook_squares(to_square)
            board.move_piece(rook_from, rook_to)

        moved = board.piece_at(to_square)
        if moved is not None and is_promotion_square(moved, to_square):
            board.place_piece(moved.promoted_to(PROMOTION_PIECE), to_square)
        return board

    def count_material(self) -> dict[Color, int]:
        """Tally the points of material each player has on the board"""
        return {
            color: sum(piece.points for _, piece in self.pieces(color))
            for color in Color
        }


def is_promotion_square(piece: Piece, square: SquarePosition) -> bool:
    """A pawn that reaches the far rank (row 0 for white, row 7 for black)"""
    if piece.type != PieceType.PAWN:
        return False
    last_row = 0 if piece.color == Color.WHITE else BOARD_SIZE - 1
    return square.row == last_row


def create_initial_board() -> Board:
    """Standard chess starting position"""
    return Board.from_fen(STARTING_POSITION)
