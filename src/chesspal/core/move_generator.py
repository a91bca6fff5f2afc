"""Move legality, attack detection and legal move enumeration.

Every function here is pure: it reads a :class:`Board` and never modifies
it. Castling is only considered when the caller passes ``castling_rights``
and en passant only when it passes ``last_move``.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator, Sequence

from chesspal.core.board import Board
from chesspal.core.enums import Color, PieceType
from chesspal.core.move import CastlingRights, Move, RookRelocation
from chesspal.core.piece import Piece
from chesspal.core.types import Square, is_on_board

KNIGHT_OFFSETS: tuple[tuple[int, int], ...] = (
    (-2, -1),
    (-2, 1),
    (-1, -2),
    (-1, 2),
    (1, -2),
    (1, 2),
    (2, -1),
    (2, 1),
)

KING_OFFSETS: tuple[tuple[int, int], ...] = (
    (-1, -1),
    (-1, 0),
    (-1, 1),
    (0, -1),
    (0, 1),
    (1, -1),
    (1, 0),
    (1, 1),
)

BISHOP_DIRS: tuple[tuple[int, int], ...] = ((-1, -1), (-1, 1), (1, -1), (1, 1))
ROOK_DIRS: tuple[tuple[int, int], ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))
QUEEN_DIRS: tuple[tuple[int, int], ...] = BISHOP_DIRS + ROOK_DIRS

_CASTLING_OFFSETS: tuple[tuple[int, int], ...] = ((0, -2), (0, 2))

_DIAGONAL_SLIDERS = (PieceType.BISHOP, PieceType.QUEEN)
_ORTHOGONAL_SLIDERS = (PieceType.ROOK, PieceType.QUEEN)


# -- Precomputed candidate tables -------------------------------------------

SquareTable = tuple[tuple[tuple[Square, ...], ...], ...]


def _build_targets(offsets: tuple[tuple[int, int], ...]) -> SquareTable:
    table: list[tuple[tuple[Square, ...], ...]] = []
    for row in range(8):
        row_targets: list[tuple[Square, ...]] = []
        for col in range(8):
            targets = [
                (row + dr, col + dc)
                for dr, dc in offsets
                if is_on_board(row + dr, col + dc)
            ]
            row_targets.append(tuple(sorted(targets)))
        table.append(tuple(row_targets))
    return tuple(table)


def _build_lines(directions: tuple[tuple[int, int], ...]) -> SquareTable:
    table: list[tuple[tuple[Square, ...], ...]] = []
    for row in range(8):
        row_targets: list[tuple[Square, ...]] = []
        for col in range(8):
            targets: list[Square] = []
            for dr, dc in directions:
                r, c = row + dr, col + dc
                while is_on_board(r, c):
                    targets.append((r, c))
                    r += dr
                    c += dc
            row_targets.append(tuple(sorted(targets)))
        table.append(tuple(row_targets))
    return tuple(table)


_KNIGHT_TARGETS = _build_targets(KNIGHT_OFFSETS)
_KING_TARGETS = _build_targets(KING_OFFSETS)
_KING_CANDIDATES = _build_targets(KING_OFFSETS + _CASTLING_OFFSETS)

_LINE_CANDIDATES: dict[PieceType, SquareTable] = {
    PieceType.BISHOP: _build_lines(BISHOP_DIRS),
    PieceType.ROOK: _build_lines(ROOK_DIRS),
    PieceType.QUEEN: _build_lines(QUEEN_DIRS),
}

_PAWNS = {color: Piece(color, PieceType.PAWN) for color in Color}
_KNIGHTS = {color: Piece(color, PieceType.KNIGHT) for color in Color}
_KINGS = {color: Piece(color, PieceType.KING) for color in Color}
_ROOKS = {color: Piece(color, PieceType.ROOK) for color in Color}


# -- Geometry ---------------------------------------------------------------


def is_path_clear(
    board: Board, from_row: int, from_col: int, to_row: int, to_col: int
) -> bool:
    """Whether every square strictly between the endpoints is empty.

    Only straight lines and diagonals have a path; any other pair of
    squares is reported as blocked.
    """
    row_diff = to_row - from_row
    col_diff = to_col - from_col
    if row_diff and col_diff and abs(row_diff) != abs(col_diff):
        return False

    row_step = (row_diff > 0) - (row_diff < 0)
    col_step = (col_diff > 0) - (col_diff < 0)
    row, col = from_row + row_step, from_col + col_step
    while (row, col) != (to_row, to_col):
        if board.piece_at(row, col) is not None:
            return False
        row += row_step
        col += col_step
    return True


# -- Per-piece validators ---------------------------------------------------


def is_valid_pawn_move(
    board: Board,
    from_row: int,
    from_col: int,
    to_row: int,
    to_col: int,
    last_move: Move | None = None,
) -> bool:
    """Single/double push, diagonal capture and (with *last_move*) en passant."""
    pawn = board.piece_at(from_row, from_col)
    if pawn is None:
        return False
    direction = pawn.color.forward
    target = board.piece_at(to_row, to_col)

    if from_col == to_col:
        if target is not None:
            return False
        if to_row == from_row + direction:
            return True
        start_row = pawn.color.home_row + direction
        return (
            from_row == start_row
            and to_row == from_row + 2 * direction
            and board.is_empty(from_row + direction, from_col)
        )

    if to_row != from_row + direction or abs(to_col - from_col) != 1:
        return False
    if pawn.is_enemy_of(target):
        return True
    return (
        en_passant_capture_square(board, from_row, from_col, to_row, to_col, last_move)
        is not None
    )


def is_valid_rook_move(
    board: Board, from_row: int, from_col: int, to_row: int, to_col: int
) -> bool:
    if from_row != to_row and from_col != to_col:
        return False
    return is_path_clear(board, from_row, from_col, to_row, to_col)


def is_valid_knight_move(from_row: int, from_col: int, to_row: int, to_col: int) -> bool:
    row_diff = abs(to_row - from_row)
    col_diff = abs(to_col - from_col)
    return (row_diff, col_diff) in ((1, 2), (2, 1))


def is_valid_bishop_move(
    board: Board, from_row: int, from_col: int, to_row: int, to_col: int
) -> bool:
    if abs(to_row - from_row) != abs(to_col - from_col):
        return False
    return is_path_clear(board, from_row, from_col, to_row, to_col)


def is_valid_queen_move(
    board: Board, from_row: int, from_col: int, to_row: int, to_col: int
) -> bool:
    return is_valid_rook_move(
        board, from_row, from_col, to_row, to_col
    ) or is_valid_bishop_move(board, from_row, from_col, to_row, to_col)


def is_valid_king_move(
    board: Board,
    from_row: int,
    from_col: int,
    to_row: int,
    to_col: int,
    castling_rights: CastlingRights | None = None,
) -> bool:
    """One step in any direction, or castling when *castling_rights* allow it."""
    row_diff = abs(to_row - from_row)
    col_diff = abs(to_col - from_col)
    if row_diff <= 1 and col_diff <= 1:
        return row_diff + col_diff > 0
    if castling_rights is None or row_diff != 0 or col_diff != 2:
        return False
    return _can_castle(board, from_row, from_col, to_col > from_col, castling_rights)


def _can_castle(
    board: Board, row: int, col: int, kingside: bool, rights: CastlingRights
) -> bool:
    king = board.piece_at(row, col)
    if king is None or king.piece_type != PieceType.KING:
        return False
    color = king.color
    if (row, col) != (color.home_row, 4):
        return False
    if not (rights.kingside(color) if kingside else rights.queenside(color)):
        return False
    if board.piece_at(row, 7 if kingside else 0) != _ROOKS[color]:
        return False

    between = (5, 6) if kingside else (1, 2, 3)
    if any(not board.is_empty(row, c) for c in between):
        return False

    # The king may not castle out of, or through, an attacked square.
    transit = (4, 5, 6) if kingside else (4, 3, 2)
    return not any(is_square_attacked(board, row, c, color) for c in transit)


_Validator = Callable[
    [Board, int, int, int, int, CastlingRights | None, Move | None], bool
]

_VALIDATORS: dict[PieceType, _Validator] = {
    PieceType.PAWN: lambda b, fr, fc, tr, tc, _cr, lm: is_valid_pawn_move(
        b, fr, fc, tr, tc, lm
    ),
    PieceType.KNIGHT: lambda _b, fr, fc, tr, tc, _cr, _lm: is_valid_knight_move(
        fr, fc, tr, tc
    ),
    PieceType.BISHOP: lambda b, fr, fc, tr, tc, _cr, _lm: is_valid_bishop_move(
        b, fr, fc, tr, tc
    ),
    PieceType.ROOK: lambda b, fr, fc, tr, tc, _cr, _lm: is_valid_rook_move(
        b, fr, fc, tr, tc
    ),
    PieceType.QUEEN: lambda b, fr, fc, tr, tc, _cr, _lm: is_valid_queen_move(
        b, fr, fc, tr, tc
    ),
    PieceType.KING: lambda b, fr, fc, tr, tc, cr, _lm: is_valid_king_move(
        b, fr, fc, tr, tc, cr
    ),
}


def is_valid_move(
    board: Board,
    from_row: int,
    from_col: int,
    to_row: int,
    to_col: int,
    castling_rights: CastlingRights | None = None,
    last_move: Move | None = None,
) -> bool:
    """Pseudo-legality of moving the piece on the source square.

    Does not look at the mover's own king; combine with
    :func:`would_be_in_check` for full legality.
    """
    if not (is_on_board(from_row, from_col) and is_on_board(to_row, to_col)):
        return False
    if from_row == to_row and from_col == to_col:
        return False
    piece = board.piece_at(from_row, from_col)
    if piece is None:
        return False
    target = board.piece_at(to_row, to_col)
    if target is not None and target.color == piece.color:
        return False
    return _VALIDATORS[piece.piece_type](
        board, from_row, from_col, to_row, to_col, castling_rights, last_move
    )


# -- Attack detection -------------------------------------------------------


def is_square_attacked(
    board: Board, row: int, col: int, defending_color: Color
) -> bool:
    """Is (row, col) attacked by any piece of ``defending_color``'s opponent?"""
    attacker = defending_color.opposite

    pawn_row = row - attacker.forward
    if 0 <= pawn_row < 8:
        pawn = _PAWNS[attacker]
        for pawn_col in (col - 1, col + 1):
            if 0 <= pawn_col < 8 and board.piece_at(pawn_row, pawn_col) == pawn:
                return True

    knight = _KNIGHTS[attacker]
    for r, c in _KNIGHT_TARGETS[row][col]:
        if board.piece_at(r, c) == knight:
            return True

    king = _KINGS[attacker]
    for r, c in _KING_TARGETS[row][col]:
        if board.piece_at(r, c) == king:
            return True

    for dr, dc in QUEEN_DIRS:
        sliders = _DIAGONAL_SLIDERS if dr and dc else _ORTHOGONAL_SLIDERS
        r, c = row + dr, col + dc
        while 0 <= r < 8 and 0 <= c < 8:
            piece = board.piece_at(r, c)
            if piece is not None:
                if piece.color == attacker and piece.piece_type in sliders:
                    return True
                break
            r += dr
            c += dc

    return False


def is_attacked_by(board: Board, row: int, col: int, attacker: Color) -> bool:
    """Is (row, col) attacked (or defended) by a piece of *attacker*?"""
    return is_square_attacked(board, row, col, attacker.opposite)


def is_king_in_check(board: Board, king_color: Color) -> bool:
    """Is *king_color*'s king attacked? The board must hold that king."""
    row, col = board.king_square(king_color)
    return is_square_attacked(board, row, col, king_color)


def would_be_in_check(
    board: Board,
    from_row: int,
    from_col: int,
    to_row: int,
    to_col: int,
    king_color: Color,
) -> bool:
    """Simulate the plain relocation and test *king_color*'s king afterwards."""
    after = board.move_piece(from_row, from_col, to_row, to_col)
    return is_king_in_check(after, king_color)


# -- Special-move derivations -----------------------------------------------


def castling_rook_move(
    board: Board, from_row: int, from_col: int, to_row: int, to_col: int
) -> RookRelocation | None:
    """Rook companion of a castling king move, or ``None``."""
    piece = board.piece_at(from_row, from_col)
    if piece is None or piece.piece_type != PieceType.KING:
        return None
    if from_row != to_row or abs(to_col - from_col) != 2:
        return None
    if to_col > from_col:
        return RookRelocation(from_row, 7, from_row, from_col + 1)
    return RookRelocation(from_row, 0, from_row, from_col - 1)


def en_passant_capture_square(
    board: Board,
    from_row: int,
    from_col: int,
    to_row: int,
    to_col: int,
    last_move: Move | None,
) -> Square | None:
    """Square of the pawn removed by an en-passant capture, or ``None``.

    Eligible only right after an enemy pawn double step that landed beside
    the capturing pawn.
    """
    if last_move is None:
        return None
    pawn = board.piece_at(from_row, from_col)
    if pawn is None or pawn.piece_type != PieceType.PAWN:
        return None
    if to_row != from_row + pawn.color.forward or abs(to_col - from_col) != 1:
        return None
    if not board.is_empty(to_row, to_col):
        return None

    moved = last_move.piece
    if moved.piece_type != PieceType.PAWN or moved.color == pawn.color:
        return None
    if last_move.to_sq != (from_row, to_col):
        return None
    if abs(last_move.from_row - last_move.to_row) != 2:
        return None
    if board.piece_at(from_row, to_col) != moved:
        return None
    return from_row, to_col


def can_promote(piece: Piece, to_row: int) -> bool:
    """A pawn promotes on reaching the farthest rank for its color."""
    return piece.piece_type == PieceType.PAWN and to_row == piece.color.promotion_row


def update_castling_rights(
    rights: CastlingRights, piece: Piece, from_row: int, from_col: int
) -> CastlingRights:
    """Strip the rights lost by moving *piece* off (from_row, from_col)."""
    if piece.piece_type == PieceType.KING:
        return rights.without_king(piece.color)
    if piece.piece_type == PieceType.ROOK and from_row == piece.color.home_row:
        if from_col == 0:
            return rights.without_side(piece.color, kingside=False)
        if from_col == 7:
            return rights.without_side(piece.color, kingside=True)
    return rights


# -- Enumeration ------------------------------------------------------------


def _candidate_targets(piece: Piece, row: int, col: int) -> Sequence[Square]:
    piece_type = piece.piece_type
    if piece_type == PieceType.KNIGHT:
        return _KNIGHT_TARGETS[row][col]
    if piece_type == PieceType.KING:
        return _KING_CANDIDATES[row][col]
    if piece_type == PieceType.PAWN:
        step = piece.color.forward
        targets = [
            (row + step, c) for c in (col - 1, col, col + 1) if is_on_board(row + step, c)
        ]
        if is_on_board(row + 2 * step, col):
            targets.append((row + 2 * step, col))
        return sorted(targets)
    return _LINE_CANDIDATES[piece_type][row][col]


def _exposes_king(
    board: Board,
    move: Move,
    en_passant_square: Square | None,
) -> bool:
    if en_passant_square is None:
        return would_be_in_check(
            board,
            move.from_row,
            move.from_col,
            move.to_row,
            move.to_col,
            move.piece.color,
        )
    after = board.apply_move(move).with_piece(*en_passant_square, None)
    return is_king_in_check(after, move.piece.color)


def legal_move_between(
    board: Board,
    from_row: int,
    from_col: int,
    to_row: int,
    to_col: int,
    castling_rights: CastlingRights | None = None,
    last_move: Move | None = None,
) -> Move | None:
    """The strictly legal move from one square to another, or ``None``.

    Off-board coordinates and empty origins are simply illegal.
    """
    if not (is_on_board(from_row, from_col) and is_on_board(to_row, to_col)):
        return None
    piece = board.piece_at(from_row, from_col)
    if piece is None:
        return None
    if not is_valid_move(
        board, from_row, from_col, to_row, to_col, castling_rights, last_move
    ):
        return None
    captured = board.piece_at(to_row, to_col)
    ep_square = None
    if (
        captured is None
        and piece.piece_type == PieceType.PAWN
        and from_col != to_col
    ):
        ep_square = en_passant_capture_square(
            board, from_row, from_col, to_row, to_col, last_move
        )
        if ep_square is not None:
            captured = board[ep_square]
    move = Move(from_row, from_col, to_row, to_col, piece, captured)
    if _exposes_king(board, move, ep_square):
        return None
    return move


def iter_legal_moves(
    board: Board,
    color: Color,
    castling_rights: CastlingRights | None = None,
    last_move: Move | None = None,
) -> Iterator[Move]:
    """Lazily yield *color*'s legal moves, origins in row-major order."""
    for row, col, piece in board.pieces(color):
        for to_row, to_col in _candidate_targets(piece, row, col):
            move = legal_move_between(
                board, row, col, to_row, to_col, castling_rights, last_move
            )
            if move is not None:
                yield move


def legal_moves(
    board: Board,
    color: Color,
    castling_rights: CastlingRights | None = None,
    last_move: Move | None = None,
) -> list[Move]:
    """All strictly legal moves for *color*."""
    return list(iter_legal_moves(board, color, castling_rights, last_move))
