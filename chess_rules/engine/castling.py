"""
Castling rights and the castling geometry. Needs to be imported by multiple sources.

Rights are tracked per color and per side. Once revoked they are never granted again.
"""

from dataclasses import dataclass, replace
from typing import Optional, Self

from chess_rules.core.shared_types import Color, PieceType
from chess_rules.engine.pieces import Piece
from chess_rules.engine.square import BOARD_SIZE, SquarePosition

# The corners the rooks start from
QUEEN_SIDE_ROOK_COL = 0
KING_SIDE_ROOK_COL = BOARD_SIZE - 1
KING_START_COL = 4

HOME_ROW: dict[Color, int] = {
    Color.WHITE: BOARD_SIZE - 1,
    Color.BLACK: 0,
}


@dataclass(frozen=True)
class SideRights:
    king_side: bool = True
    queen_side: bool = True


@dataclass(frozen=True)
class CastlingRights:
    white: SideRights = SideRights()
    black: SideRights = SideRights()

    @classmethod
    def none(cls) -> Self:
        """No castling allowed for either color"""
        revoked = SideRights(king_side=False, queen_side=False)
        return cls(white=revoked, black=revoked)

    def for_color(self, color: Color) -> SideRights:
        return self.white if color == Color.WHITE else self.black

    def revoke(
        self, color: Color, king_side: bool = False, queen_side: bool = False
    ) -> Self:
        """Return new rights with the flagged sides cleared for the color. Never sets anything back to True."""
        current = self.for_color(color)
        updated = SideRights(
            king_side=current.king_side and not king_side,
            queen_side=current.queen_side and not queen_side,
        )
        if color == Color.WHITE:
            return replace(self, white=updated)
        return replace(self, black=updated)

    @classmethod
    def from_fen(cls, castle_fen: str) -> Self:
        """parse the part of the FEN string that encodes castling rights ('KQkq', 'Kq', '-', ...)"""
        return cls(
            white=SideRights(king_side="K" in castle_fen, queen_side="Q" in castle_fen),
            black=SideRights(king_side="k" in castle_fen, queen_side="q" in castle_fen),
        )

    def to_fen(self) -> str:
        """create the part of the FEN string that encodes castling rights"""
        castling_chars = "".join(
            char
            for char, allowed in [
                ("K", self.white.king_side),
                ("Q", self.white.queen_side),
                ("k", self.black.king_side),
                ("q", self.black.queen_side),
            ]
            if allowed
        )
        return castling_chars or "-"


def _corner_side(color: Color, square: SquarePosition) -> Optional[str]:
    """Which rook corner of the color the square is (if any)"""
    if square.row != HOME_ROW[color]:
        return None
    if square.col == QUEEN_SIDE_ROOK_COL:
        return "queen_side"
    if square.col == KING_SIDE_ROOK_COL:
        return "king_side"
    return None


def update_rights(
    prior: CastlingRights,
    mover: Piece,
    from_square: SquarePosition,
    captured: Optional[Piece],
    to_square: SquarePosition,
) -> CastlingRights:
    """
    Revoke rights after a half-move
    ----

    1. If you are moving your king (castling included) --> revoke both
    2. If you are moving a rook from its corner --> revoke the right for that side
    3. If a rook gets captured on its corner --> revoke the right of the captured color for that side

    ---
    NOTE: the prior rights are never modified, a new value is returned.
    """
    rights = prior

    # 1: King moves
    if mover.type == PieceType.KING:
        rights = rights.revoke(mover.color, king_side=True, queen_side=True)

    # 2: rook leaves its corner
    elif mover.type == PieceType.ROOK:
        side = _corner_side(mover.color, from_square)
        if side is not None:
            rights = rights.revoke(mover.color, **{side: True})

    # 3: rook captured before it moved
    if captured is not None and captured.type == PieceType.ROOK:
        side = _corner_side(captured.color, to_square)
        if side is not None:
            rights = rights.revoke(captured.color, **{side: True})

    return rights


def castle_rook_squares(
    king_to: SquarePosition,
) -> tuple[SquarePosition, SquarePosition]:
    """
    The rook's co-move for a castling destination of the king.
    The rook jumps from its corner to the square the king passed over.
    """
    if king_to.is_castle_kingside:
        rook_from = SquarePosition(king_to.row, KING_SIDE_ROOK_COL)
        rook_to = SquarePosition(king_to.row, king_to.col - 1)
    elif king_to.is_castle_queenside:
        rook_from = SquarePosition(king_to.row, QUEEN_SIDE_ROOK_COL)
        rook_to = SquarePosition(king_to.row, king_to.col + 1)
    else:
        raise ValueError(f"{king_to} is not a castling destination")
    return rook_from, rook_to
