"""Request/response entry points for a presentation layer.

Nothing here keeps state between calls: the host owns the board, the
castling rights and the last move, and passes them in on every request.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from chesspal.core.board import Board
from chesspal.core.enums import Color
from chesspal.core.move import CastlingRights, Move, RookRelocation
from chesspal.core.move_generator import (
    can_promote,
    castling_rook_move,
    en_passant_capture_square,
    legal_move_between,
)
from chesspal.core.rules import Classification, Rules
from chesspal.core.types import Square
from chesspal.engine.minimax import best_move
from chesspal.engine.personalities import get_personality
from chesspal.engine.search import CancelCheck, Difficulty, search_depth

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class MoveDescription:
    """Legality verdict plus the auxiliary board edits the move implies."""

    legal: bool
    rook_relocation: RookRelocation | None = None
    en_passant_capture: Square | None = None
    promotion_eligible: bool = False
    move: Move | None = None


_ILLEGAL = MoveDescription(legal=False)


def validate_and_describe_move(
    board: Board,
    from_sq: Square,
    to_sq: Square,
    castling_rights: CastlingRights | None = None,
    last_move: Move | None = None,
) -> MoveDescription:
    """Check a requested move, including king safety.

    Illegal or off-board requests come back with ``legal=False``.
    """
    from_row, from_col = from_sq
    to_row, to_col = to_sq
    move = legal_move_between(
        board, from_row, from_col, to_row, to_col, castling_rights, last_move
    )
    if move is None:
        return _ILLEGAL
    return MoveDescription(
        legal=True,
        rook_relocation=castling_rook_move(board, from_row, from_col, to_row, to_col),
        en_passant_capture=en_passant_capture_square(
            board, from_row, from_col, to_row, to_col, last_move
        ),
        promotion_eligible=can_promote(move.piece, to_row),
        move=move,
    )


def classify(
    board: Board,
    color: Color,
    castling_rights: CastlingRights | None = None,
    last_move: Move | None = None,
) -> Classification:
    return Rules.classify(board, color, castling_rights, last_move)


def request_ai_move(
    board: Board,
    color: Color,
    castling_rights: CastlingRights | None,
    last_move: Move | None,
    difficulty: Difficulty | str = Difficulty.MEDIUM,
    personality_name: str | None = None,
    is_cancelled: CancelCheck | None = None,
) -> Move | None:
    """Pick a move for *color*; ``None`` means the game is already over."""
    personality = get_personality(personality_name)
    depth = search_depth(difficulty, personality)
    _LOGGER.debug(
        "AI move request color=%s difficulty=%s personality=%s depth=%d",
        color,
        Difficulty.parse(difficulty),
        personality.name,
        depth,
    )
    return best_move(
        board, color, castling_rights, last_move, depth, personality, is_cancelled
    )
