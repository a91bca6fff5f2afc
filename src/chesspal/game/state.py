"""Mutable game state: the current position, its status and move history."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from chesspal.core.enums import Color, GameStatus
from chesspal.core.move import Move
from chesspal.core.notation import STARTING_FEN, position_from_fen
from chesspal.core.position import Position
from chesspal.game.interfaces import GamePhase

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class MoveRecord:
    """One played move together with what it led to."""

    move: Move
    notation: str
    status_after: GameStatus
    position_before: Position


class GameState:
    """Holds everything about a game in progress.

    After every applied move the position is classified from the point of
    view of the side now to move, giving the status transitions
    active → check → {checkmate | active}, active → stalemate and
    active → checkmate.
    """

    __slots__ = ("_position", "start_fen", "status", "phase", "move_history")

    def __init__(self) -> None:
        self._position = Position.initial()
        self.start_fen = STARTING_FEN
        self.status = GameStatus.ACTIVE
        self.phase = GamePhase.NOT_STARTED
        self.move_history: list[MoveRecord] = []

    def setup(self, fen: str | None = None) -> None:
        """Reset to the starting position or to *fen*."""
        self._position = position_from_fen(fen) if fen else Position.initial()
        self.start_fen = fen or STARTING_FEN
        self.move_history = []
        self.status = self._position.classify().status
        self.phase = (
            GamePhase.GAME_OVER if self.status.is_terminal else GamePhase.AWAITING_MOVE
        )

    # ── Queries ──────────────────────────────────────────────────────────

    @property
    def position(self) -> Position:
        return self._position

    @property
    def side_to_move(self) -> Color:
        return self._position.side_to_move

    @property
    def ply_count(self) -> int:
        return len(self.move_history)

    @property
    def is_game_over(self) -> bool:
        return self.status.is_terminal

    @property
    def winner(self) -> Color | None:
        """The mating side after checkmate; ``None`` otherwise."""
        if self.status == GameStatus.CHECKMATE:
            return self.side_to_move.opposite
        return None

    # ── Mutations ────────────────────────────────────────────────────────

    def apply_move(self, move: Move) -> MoveRecord:
        """Play an already-validated move and reclassify the position."""
        before = self._position
        self._position = before.play(move)
        self.status = self._position.classify().status
        record = MoveRecord(move, str(move), self.status, before)
        self.move_history.append(record)
        if self.status.is_terminal:
            self.phase = GamePhase.GAME_OVER
            _LOGGER.info(
                "Game over after %d plies: %s", self.ply_count, self.status.name
            )
        return record

    def undo_last_move(self) -> MoveRecord | None:
        if not self.move_history:
            return None
        record = self.move_history.pop()
        self._position = record.position_before
        self.status = self._position.classify().status
        self.phase = GamePhase.AWAITING_MOVE
        return record
