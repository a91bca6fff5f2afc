"""FEN parsing and serialization for setting up positions."""

from __future__ import annotations

from chesspal.core.board import Board
from chesspal.core.enums import Color, PieceType
from chesspal.core.move import CastlingRights, Move
from chesspal.core.piece import Piece
from chesspal.core.position import Position
from chesspal.core.types import parse_square, square_name

STARTING_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"

_CASTLING_FIELDS: dict[str, str] = {
    "K": "white_kingside",
    "Q": "white_queenside",
    "k": "black_kingside",
    "q": "black_queenside",
}


def board_from_fen(placement: str) -> Board:
    """Parse the piece-placement field of a FEN string."""
    ranks = placement.split("/")
    if len(ranks) != 8:
        raise ValueError(f"Invalid FEN board (must contain 8 ranks): {placement!r}")

    rows: list[tuple[Piece | None, ...]] = []
    for rank_text in ranks:
        row: list[Piece | None] = []
        for ch in rank_text:
            if ch.isdigit():
                step = int(ch)
                if not (1 <= step <= 8):
                    raise ValueError(f"Invalid FEN digit {ch!r}: {placement!r}")
                row.extend([None] * step)
            else:
                row.append(Piece.from_char(ch))
            if len(row) > 8:
                raise ValueError(f"Invalid FEN rank width: {placement!r}")
        if len(row) != 8:
            raise ValueError(f"Invalid FEN rank width: {placement!r}")
        rows.append(tuple(row))
    return Board(tuple(rows))


def board_to_fen(board: Board) -> str:
    ranks: list[str] = []
    for row in board.rows:
        text = ""
        empty = 0
        for piece in row:
            if piece is None:
                empty += 1
                continue
            if empty:
                text += str(empty)
                empty = 0
            text += str(piece)
        if empty:
            text += str(empty)
        ranks.append(text)
    return "/".join(ranks)


def position_from_fen(fen: str) -> Position:
    """Parse a FEN string into a :class:`Position`.

    Clock fields are accepted but ignored. An en-passant target square is
    turned into the enemy pawn's double step as ``last_move``.
    """
    parts = fen.split()
    if not (4 <= len(parts) <= 6):
        raise ValueError(f"Invalid FEN (need 4-6 fields): {fen!r}")

    placement, side_part, castling_part, ep_part = parts[:4]
    board = board_from_fen(placement)

    if side_part == "w":
        side = Color.WHITE
    elif side_part == "b":
        side = Color.BLACK
    else:
        raise ValueError(f"Invalid FEN side-to-move field: {side_part!r}")

    rights = CastlingRights.none()
    if castling_part != "-":
        flags: dict[str, bool] = {}
        for ch in castling_part:
            field = _CASTLING_FIELDS.get(ch)
            if field is None or field in flags:
                raise ValueError(f"Invalid FEN castling field: {castling_part!r}")
            flags[field] = True
        rights = CastlingRights(**{f: f in flags for f in _CASTLING_FIELDS.values()})

    last_move: Move | None = None
    if ep_part != "-":
        last_move = _double_step_through(board, parse_square(ep_part), side.opposite)

    return Position(
        board=board, side_to_move=side, castling_rights=rights, last_move=last_move
    )


def _double_step_through(board: Board, ep_square: tuple[int, int], pawn_color: Color) -> Move:
    ep_row, col = ep_square
    expected_row = pawn_color.home_row + 2 * pawn_color.forward
    if ep_row != expected_row:
        raise ValueError(
            f"Invalid FEN en-passant square for side-to-move: {square_name(ep_square)!r}"
        )
    from_row = ep_row - pawn_color.forward
    to_row = ep_row + pawn_color.forward
    pawn = Piece(pawn_color, PieceType.PAWN)
    if board.piece_at(to_row, col) != pawn:
        raise ValueError(
            f"FEN en-passant square {square_name(ep_square)!r} has no pawn in front"
        )
    return Move(from_row, col, to_row, col, pawn)


def position_to_fen(position: Position) -> str:
    rights = position.castling_rights
    castling = "".join(
        ch for ch, field in _CASTLING_FIELDS.items() if getattr(rights, field)
    )

    ep = "-"
    last = position.last_move
    if (
        last is not None
        and last.piece.piece_type == PieceType.PAWN
        and abs(last.from_row - last.to_row) == 2
    ):
        ep = square_name(((last.from_row + last.to_row) // 2, last.to_col))

    side = "w" if position.side_to_move == Color.WHITE else "b"
    return f"{board_to_fen(position.board)} {side} {castling or '-'} {ep} 0 1"
