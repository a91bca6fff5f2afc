"""Static position evaluation (material + piece-square tables)."""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import TYPE_CHECKING, TypeAlias

from chesspal.core.enums import Color, PieceType

if TYPE_CHECKING:
    from chesspal.core.board import Board
    from chesspal.engine.personalities import Personality

PositionTable: TypeAlias = tuple[tuple[float, ...], ...]

DEFAULT_PIECE_VALUES: Mapping[PieceType, int] = MappingProxyType(
    {
        PieceType.PAWN: 10,
        PieceType.KNIGHT: 30,
        PieceType.BISHOP: 30,
        PieceType.ROOK: 50,
        PieceType.QUEEN: 90,
        PieceType.KING: 900,
    }
)

# Authored from white's point of view: row 0 is the eighth rank.
POSITION_BONUSES: Mapping[PieceType, PositionTable] = MappingProxyType(
    {
        PieceType.PAWN: (
            (0, 0, 0, 0, 0, 0, 0, 0),
            (5, 5, 5, 5, 5, 5, 5, 5),
            (1, 1, 2, 3, 3, 2, 1, 1),
            (0.5, 0.5, 1, 2.5, 2.5, 1, 0.5, 0.5),
            (0, 0, 0, 2, 2, 0, 0, 0),
            (0.5, -0.5, -1, 0, 0, -1, -0.5, 0.5),
            (0.5, 1, 1, -2, -2, 1, 1, 0.5),
            (0, 0, 0, 0, 0, 0, 0, 0),
        ),
        PieceType.KNIGHT: (
            (-5, -4, -3, -3, -3, -3, -4, -5),
            (-4, -2, 0, 0, 0, 0, -2, -4),
            (-3, 0, 1, 1.5, 1.5, 1, 0, -3),
            (-3, 0.5, 1.5, 2, 2, 1.5, 0.5, -3),
            (-3, 0, 1.5, 2, 2, 1.5, 0, -3),
            (-3, 0.5, 1, 1.5, 1.5, 1, 0.5, -3),
            (-4, -2, 0, 0.5, 0.5, 0, -2, -4),
            (-5, -4, -3, -3, -3, -3, -4, -5),
        ),
        PieceType.BISHOP: (
            (-2, -1, -1, -1, -1, -1, -1, -2),
            (-1, 0, 0, 0, 0, 0, 0, -1),
            (-1, 0, 0.5, 1, 1, 0.5, 0, -1),
            (-1, 0.5, 0.5, 1, 1, 0.5, 0.5, -1),
            (-1, 0, 1, 1, 1, 1, 0, -1),
            (-1, 1, 1, 1, 1, 1, 1, -1),
            (-1, 0.5, 0, 0, 0, 0, 0.5, -1),
            (-2, -1, -1, -1, -1, -1, -1, -2),
        ),
        PieceType.ROOK: (
            (0, 0, 0, 0, 0, 0, 0, 0),
            (0.5, 1, 1, 1, 1, 1, 1, 0.5),
            (-0.5, 0, 0, 0, 0, 0, 0, -0.5),
            (-0.5, 0, 0, 0, 0, 0, 0, -0.5),
            (-0.5, 0, 0, 0, 0, 0, 0, -0.5),
            (-0.5, 0, 0, 0, 0, 0, 0, -0.5),
            (-0.5, 0, 0, 0, 0, 0, 0, -0.5),
            (0, 0, 0, 0.5, 0.5, 0, 0, 0),
        ),
        PieceType.QUEEN: (
            (-2, -1, -1, -0.5, -0.5, -1, -1, -2),
            (-1, 0, 0, 0, 0, 0, 0, -1),
            (-1, 0, 0.5, 0.5, 0.5, 0.5, 0, -1),
            (-0.5, 0, 0.5, 0.5, 0.5, 0.5, 0, -0.5),
            (0, 0, 0.5, 0.5, 0.5, 0.5, 0, -0.5),
            (-1, 0.5, 0.5, 0.5, 0.5, 0.5, 0, -1),
            (-1, 0, 0.5, 0, 0, 0, 0, -1),
            (-2, -1, -1, -0.5, -0.5, -1, -1, -2),
        ),
        PieceType.KING: (
            (-3, -4, -4, -5, -5, -4, -4, -3),
            (-3, -4, -4, -5, -5, -4, -4, -3),
            (-3, -4, -4, -5, -5, -4, -4, -3),
            (-3, -4, -4, -5, -5, -4, -4, -3),
            (-2, -3, -3, -4, -4, -3, -3, -2),
            (-1, -2, -2, -2, -2, -2, -2, -1),
            (2, 2, 0, 0, 0, 0, 2, 2),
            (2, 3, 1, 0, 0, 1, 3, 2),
        ),
    }
)


def piece_square_value(
    personality: Personality, piece_type: PieceType, color: Color, row: int, col: int
) -> float:
    """Material plus positional bonus of one piece, always positive-signed."""
    table_row = row if color == Color.WHITE else 7 - row
    material = personality.piece_values.get(
        piece_type, DEFAULT_PIECE_VALUES[piece_type]
    )
    return material + personality.positional_bonus[piece_type][table_row][col]


def evaluate(board: Board, color: Color, personality: Personality) -> float:
    """Score *board* from *color*'s perspective using *personality*'s weights.

    Own pieces add, enemy pieces subtract; the personality's modifier is
    applied to the summed score.
    """
    score = 0.0
    for row, col, piece in board.occupied():
        value = piece_square_value(personality, piece.piece_type, piece.color, row, col)
        if piece.color == color:
            score += value
        else:
            score -= value
    return personality.evaluation_modifier(board, color, score)
