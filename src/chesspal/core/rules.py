"""High-level chess rules: check, checkmate and stalemate classification."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from chesspal.core.enums import Color, GameStatus
from chesspal.core.move_generator import is_king_in_check, iter_legal_moves

if TYPE_CHECKING:
    from chesspal.core.board import Board
    from chesspal.core.move import CastlingRights, Move


@dataclass(frozen=True, slots=True)
class Classification:
    """Game-terminal flags for one side of a position."""

    in_check: bool
    checkmate: bool
    stalemate: bool

    @property
    def status(self) -> GameStatus:
        if self.checkmate:
            return GameStatus.CHECKMATE
        if self.stalemate:
            return GameStatus.STALEMATE
        if self.in_check:
            return GameStatus.CHECK
        return GameStatus.ACTIVE


class Rules:
    """Static rule-checker over a board and the side being classified.

    Boards must hold exactly one king per color; the result for a board
    missing a king is undefined (``ValueError`` in practice).
    """

    @staticmethod
    def is_in_check(board: Board, color: Color) -> bool:
        return is_king_in_check(board, color)

    @staticmethod
    def has_legal_move(
        board: Board,
        color: Color,
        castling_rights: CastlingRights | None = None,
        last_move: Move | None = None,
    ) -> bool:
        moves = iter_legal_moves(board, color, castling_rights, last_move)
        return next(moves, None) is not None

    @staticmethod
    def is_checkmate(
        board: Board,
        color: Color,
        castling_rights: CastlingRights | None = None,
        last_move: Move | None = None,
    ) -> bool:
        if not Rules.is_in_check(board, color):
            return False
        return not Rules.has_legal_move(board, color, castling_rights, last_move)

    @staticmethod
    def is_stalemate(
        board: Board,
        color: Color,
        castling_rights: CastlingRights | None = None,
        last_move: Move | None = None,
    ) -> bool:
        if Rules.is_in_check(board, color):
            return False
        return not Rules.has_legal_move(board, color, castling_rights, last_move)

    @staticmethod
    def classify(
        board: Board,
        color: Color,
        castling_rights: CastlingRights | None = None,
        last_move: Move | None = None,
    ) -> Classification:
        """Check / checkmate / stalemate flags for *color* (one enumeration)."""
        in_check = Rules.is_in_check(board, color)
        stuck = not Rules.has_legal_move(board, color, castling_rights, last_move)
        return Classification(
            in_check=in_check,
            checkmate=in_check and stuck,
            stalemate=stuck and not in_check,
        )
