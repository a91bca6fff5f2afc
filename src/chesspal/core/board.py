"""Board - immutable piece placement on an 8x8 grid."""

from __future__ import annotations

from collections.abc import Iterator
from typing import TYPE_CHECKING

from chesspal.core.enums import Color, PieceType
from chesspal.core.piece import Piece
from chesspal.core.types import FILES, Square

if TYPE_CHECKING:
    from chesspal.core.move import Move

Rows = tuple[tuple[Piece | None, ...], ...]

_BACK_RANK: tuple[PieceType, ...] = (
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
)

_EMPTY_ROWS: Rows = tuple((None,) * 8 for _ in range(8))


class Board:
    """Immutable 8x8 board value.

    Every edit (``with_piece``, ``move_piece``, ``apply_move``) returns a new
    board, so a search can branch from the same parent any number of times.
    Row 0 is black's back rank, column 0 is the a-file.
    """

    __slots__ = ("_rows",)

    def __init__(self, rows: Rows = _EMPTY_ROWS) -> None:
        if len(rows) != 8 or any(len(row) != 8 for row in rows):
            raise ValueError("Board must have 8 rows of 8 squares")
        self._rows: Rows = tuple(tuple(row) for row in rows)

    @classmethod
    def _wrap(cls, rows: Rows) -> Board:
        # Internal fast path: *rows* is already a validated tuple grid.
        board = cls.__new__(cls)
        board._rows = rows
        return board

    # -- Element access -----------------------------------------------------

    def __getitem__(self, sq: Square) -> Piece | None:
        row, col = sq
        return self._rows[row][col]

    def piece_at(self, row: int, col: int) -> Piece | None:
        return self._rows[row][col]

    def is_empty(self, row: int, col: int) -> bool:
        return self._rows[row][col] is None

    @property
    def rows(self) -> Rows:
        return self._rows

    # -- Query helpers ------------------------------------------------------

    def occupied(self) -> Iterator[tuple[int, int, Piece]]:
        """Yield ``(row, col, piece)`` for every occupied square, row-major."""
        for row_idx, row in enumerate(self._rows):
            for col_idx, piece in enumerate(row):
                if piece is not None:
                    yield row_idx, col_idx, piece

    def pieces(self, color: Color) -> list[tuple[int, int, Piece]]:
        """Occupied squares of *color*, row-major."""
        return [entry for entry in self.occupied() if entry[2].color == color]

    def find_king(self, color: Color) -> Square | None:
        for row, col, piece in self.occupied():
            if piece.piece_type == PieceType.KING and piece.color == color:
                return row, col
        return None

    def king_square(self, color: Color) -> Square:
        """Return the king square for *color*.

        A board without a king violates the engine's precondition.
        """
        sq = self.find_king(color)
        if sq is None:
            raise ValueError(f"No {color.name} king on board")
        return sq

    # -- Derivation ---------------------------------------------------------

    def with_piece(self, row: int, col: int, piece: Piece | None) -> Board:
        """Copy of this board with (row, col) set to *piece*."""
        rows = list(self._rows)
        edited = list(rows[row])
        edited[col] = piece
        rows[row] = tuple(edited)
        return Board._wrap(tuple(rows))

    def move_piece(
        self, from_row: int, from_col: int, to_row: int, to_col: int
    ) -> Board:
        """Copy with the source piece relocated and the source cleared."""
        grid = [list(row) for row in self._rows]
        grid[to_row][to_col] = grid[from_row][from_col]
        grid[from_row][from_col] = None
        return Board._wrap(tuple(tuple(row) for row in grid))

    def apply_move(self, move: Move) -> Board:
        return self.move_piece(move.from_row, move.from_col, move.to_row, move.to_col)

    # -- Factory ------------------------------------------------------------

    @classmethod
    def empty(cls) -> Board:
        return cls()

    @classmethod
    def initial(cls) -> Board:
        """Standard starting position."""
        rows: list[tuple[Piece | None, ...]] = [(None,) * 8 for _ in range(8)]
        rows[0] = tuple(Piece(Color.BLACK, pt) for pt in _BACK_RANK)
        rows[1] = (Piece(Color.BLACK, PieceType.PAWN),) * 8
        rows[6] = (Piece(Color.WHITE, PieceType.PAWN),) * 8
        rows[7] = tuple(Piece(Color.WHITE, pt) for pt in _BACK_RANK)
        return cls(tuple(rows))

    # -- Dunder helpers -----------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._rows == other._rows

    def __hash__(self) -> int:
        return hash(self._rows)

    def render(self) -> str:
        lines: list[str] = []
        for row_idx, row in enumerate(self._rows):
            cells = ["." if piece is None else str(piece) for piece in row]
            lines.append(f"{8 - row_idx} {' '.join(cells)}")
        lines.append("  " + " ".join(FILES))
        return "\n".join(lines)

    def __repr__(self) -> str:
        return self.render()


def apply_move(board: Board, move: Move) -> Board:
    """Relocate ``move.piece``; no castling, en-passant or promotion edits."""
    return board.apply_move(move)
