"""Position - a board plus the context needed to continue the game."""

from __future__ import annotations

from dataclasses import dataclass, field

from chesspal.core.board import Board, apply_move
from chesspal.core.enums import Color, PieceType
from chesspal.core.move import CastlingRights, Move
from chesspal.core.move_generator import (
    can_promote,
    castling_rook_move,
    en_passant_capture_square,
    legal_moves,
    update_castling_rights,
)
from chesspal.core.rules import Classification, Rules


@dataclass(frozen=True, slots=True)
class Position:
    """Immutable game position.

    ``play`` composes the primitive :func:`apply_move` with the castling rook
    relocation, en-passant pawn removal, promotion and castling-rights update,
    and returns a new position for the opponent.
    """

    board: Board = field(default_factory=Board.initial)
    side_to_move: Color = Color.WHITE
    castling_rights: CastlingRights = field(default_factory=CastlingRights.initial)
    last_move: Move | None = None

    @classmethod
    def initial(cls) -> Position:
        return cls()

    def legal_moves(self) -> list[Move]:
        return legal_moves(
            self.board, self.side_to_move, self.castling_rights, self.last_move
        )

    def classify(self) -> Classification:
        return Rules.classify(
            self.board, self.side_to_move, self.castling_rights, self.last_move
        )

    def play(self, move: Move) -> Position:
        """Apply an already-validated *move* and hand the turn over.

        ``move.promotion`` picks the promotion piece; a promoting move
        without one becomes a queen.
        """
        board = self.board
        fr, fc, tr, tc = move.from_row, move.from_col, move.to_row, move.to_col
        rook = castling_rook_move(board, fr, fc, tr, tc)
        ep_square = en_passant_capture_square(board, fr, fc, tr, tc, self.last_move)

        after = apply_move(board, move)
        if rook is not None:
            after = after.move_piece(
                rook.from_row, rook.from_col, rook.to_row, rook.to_col
            )
        if ep_square is not None:
            after = after.with_piece(*ep_square, None)
        if can_promote(move.piece, tr):
            after = after.with_piece(
                tr, tc, move.piece.promoted_to(move.promotion or PieceType.QUEEN)
            )

        return Position(
            board=after,
            side_to_move=self.side_to_move.opposite,
            castling_rights=update_castling_rights(
                self.castling_rights, move.piece, fr, fc
            ),
            last_move=move,
        )
