"""Core domain layer with pure chess rules with zero external dependencies.

Quick start::

    from chesspal.core import STARTING_FEN, Rules, position_from_fen

    pos = position_from_fen(STARTING_FEN)
    for move in pos.legal_moves():
        print(move)
    Rules.classify(pos.board, pos.side_to_move)
"""

from chesspal.core.board import Board, apply_move
from chesspal.core.enums import Color, GameStatus, PieceType
from chesspal.core.move import PROMOTION_TYPES, CastlingRights, Move, RookRelocation
from chesspal.core.move_generator import (
    can_promote,
    castling_rook_move,
    en_passant_capture_square,
    is_attacked_by,
    is_king_in_check,
    is_path_clear,
    is_square_attacked,
    is_valid_move,
    iter_legal_moves,
    legal_move_between,
    legal_moves,
    update_castling_rights,
    would_be_in_check,
)
from chesspal.core.notation import (
    STARTING_FEN,
    board_from_fen,
    board_to_fen,
    position_from_fen,
    position_to_fen,
)
from chesspal.core.piece import Piece
from chesspal.core.position import Position
from chesspal.core.rules import Classification, Rules
from chesspal.core.types import Square, is_on_board, parse_square, square_name

__all__ = [
    # Enums
    "Color",
    "GameStatus",
    "PieceType",
    # Types / helpers
    "Square",
    "is_on_board",
    "parse_square",
    "square_name",
    # Domain objects
    "Board",
    "CastlingRights",
    "Classification",
    "Move",
    "PROMOTION_TYPES",
    "Piece",
    "Position",
    "RookRelocation",
    "Rules",
    # Legality
    "apply_move",
    "can_promote",
    "castling_rook_move",
    "en_passant_capture_square",
    "is_attacked_by",
    "is_king_in_check",
    "is_path_clear",
    "is_square_attacked",
    "is_valid_move",
    "iter_legal_moves",
    "legal_move_between",
    "legal_moves",
    "update_castling_rights",
    "would_be_in_check",
    # Notation
    "STARTING_FEN",
    "board_from_fen",
    "board_to_fen",
    "position_from_fen",
    "position_to_fen",
]
