"""
A square on the board

(placed in its own module as multiple other modules need to import it)
"""

from __future__ import annotations

from dataclasses import dataclass, field

# Chess board is always 8x8.
BOARD_SIZE = 8
FILE_NAMES = "abcdefgh"


@dataclass(frozen=True)
class SquarePosition:
    """
    Row/column pair. Row 0 is the 8th rank (black's back rank), row 7 the 1st rank (white's back rank).

    A castling destination is the same square as any other, only tagged. The tags therefore do not count for equality:
    checking `SquarePosition(7, 6) in legal_moves` finds the tagged castling move as well.
    """

    row: int
    col: int
    is_castle_kingside: bool = field(default=False, compare=False)
    is_castle_queenside: bool = field(default=False, compare=False)

    @classmethod
    def from_algebraic(cls, sq: str) -> SquarePosition:
        """Algebraic notation: 'a8' - 'h1' get converted to (0,0) - (7,7)"""
        col = ord(sq[0]) - ord("a")
        row = BOARD_SIZE - int(sq[1])
        return cls(row, col)

    def to_algebraic(self) -> str:
        return f"{FILE_NAMES[self.col]}{BOARD_SIZE - self.row}"

    def is_within_bounds(self) -> bool:
        return (0 <= self.row < BOARD_SIZE) and (0 <= self.col < BOARD_SIZE)

    @property
    def is_castle(self) -> bool:
        return self.is_castle_kingside or self.is_castle_queenside

    def shifted(self, d_row: int, d_col: int) -> SquarePosition:
        """Untagged square at the given offset (may lie outside the board: check with `is_within_bounds()`)"""
        return SquarePosition(self.row + d_row, self.col + d_col)
