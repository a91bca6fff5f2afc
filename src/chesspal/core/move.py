"""Move, castling-rights and auxiliary-edit value objects."""

from __future__ import annotations

from dataclasses import dataclass, replace

from chesspal.core.enums import Color, PieceType
from chesspal.core.piece import Piece
from chesspal.core.types import Square, square_name

_PROMO_CHARS: dict[PieceType, str] = {
    PieceType.KNIGHT: "n",
    PieceType.BISHOP: "b",
    PieceType.ROOK: "r",
    PieceType.QUEEN: "q",
}

PROMOTION_TYPES: tuple[PieceType, ...] = tuple(_PROMO_CHARS)


@dataclass(frozen=True, slots=True)
class Move:
    """Immutable descriptor of a single ply.

    Castling, en passant and promotion side effects are not encoded here;
    they are derived from board contents when the move is applied.
    ``promotion`` is the piece a promoting pawn becomes (queen when ``None``).
    """

    from_row: int
    from_col: int
    to_row: int
    to_col: int
    piece: Piece
    captured_piece: Piece | None = None
    promotion: PieceType | None = None

    @property
    def from_sq(self) -> Square:
        return self.from_row, self.from_col

    @property
    def to_sq(self) -> Square:
        return self.to_row, self.to_col

    @property
    def is_capture(self) -> bool:
        return self.captured_piece is not None

    def __str__(self) -> str:
        base = f"{square_name(self.from_sq)}{square_name(self.to_sq)}"
        if self.promotion is not None:
            base += _PROMO_CHARS.get(self.promotion, "")
        return base


@dataclass(frozen=True, slots=True)
class RookRelocation:
    """Rook companion move implied by a castling king move."""

    from_row: int
    from_col: int
    to_row: int
    to_col: int


@dataclass(frozen=True, slots=True)
class CastlingRights:
    """Castling availability; rights are only ever lost, never regained."""

    white_kingside: bool = True
    white_queenside: bool = True
    black_kingside: bool = True
    black_queenside: bool = True

    @classmethod
    def initial(cls) -> CastlingRights:
        return cls()

    @classmethod
    def none(cls) -> CastlingRights:
        return cls(False, False, False, False)

    def kingside(self, color: Color) -> bool:
        return self.white_kingside if color == Color.WHITE else self.black_kingside

    def queenside(self, color: Color) -> bool:
        return self.white_queenside if color == Color.WHITE else self.black_queenside

    def without_king(self, color: Color) -> CastlingRights:
        if color == Color.WHITE:
            return replace(self, white_kingside=False, white_queenside=False)
        return replace(self, black_kingside=False, black_queenside=False)

    def without_side(self, color: Color, kingside: bool) -> CastlingRights:
        if color == Color.WHITE:
            field = "white_kingside" if kingside else "white_queenside"
        else:
            field = "black_kingside" if kingside else "black_queenside"
        return replace(self, **{field: False})
