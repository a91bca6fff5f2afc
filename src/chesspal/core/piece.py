"""Piece value object."""

from __future__ import annotations

from dataclasses import dataclass

from chesspal.core.enums import Color, PieceType

_LETTERS = "pnbrqk"  # PieceType order

_FEN_CHARS: dict[tuple[Color, PieceType], str] = {
    (color, ptype): letter.upper() if color == Color.WHITE else letter
    for ptype, letter in zip(PieceType, _LETTERS)
    for color in Color
}
_CHAR_MAP: dict[str, tuple[Color, PieceType]] = {v: k for k, v in _FEN_CHARS.items()}


@dataclass(frozen=True, slots=True)
class Piece:
    """Immutable value object representing a chess piece."""

    color: Color
    piece_type: PieceType

    def __str__(self) -> str:
        """FEN character (uppercase = white, lowercase = black)."""
        return _FEN_CHARS[(self.color, self.piece_type)]

    @classmethod
    def from_char(cls, char: str) -> Piece:
        """Create piece from FEN character, e.g. 'N' → white knight."""
        try:
            color, ptype = _CHAR_MAP[char]
        except KeyError:
            raise ValueError(f"Invalid piece character: {char!r}") from None
        return cls(color, ptype)

    def is_enemy_of(self, other: Piece | None) -> bool:
        """Whether *other* is a piece of the opposite color."""
        return other is not None and other.color != self.color

    def promoted_to(self, piece_type: PieceType) -> Piece:
        """Same-colored piece of *piece_type* (pawn promotion)."""
        return Piece(self.color, piece_type)
