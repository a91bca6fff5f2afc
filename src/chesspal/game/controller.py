"""GameController, the central orchestrator of a chess game.

Coordinates players, the GameState and move validation.
Emits events via simple callbacks so the UI / tests can subscribe.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field, replace

from chesspal.core.enums import Color, GameStatus, PieceType
from chesspal.core.move import PROMOTION_TYPES, Move
from chesspal.core.move_generator import can_promote, legal_move_between
from chesspal.core.types import Square
from chesspal.engine.search import Difficulty
from chesspal.game.interfaces import GamePhase, IGameController, IPlayer
from chesspal.game.player import AIPlayer
from chesspal.game.state import GameState

_LOGGER = logging.getLogger(__name__)

# ── Event definitions ────────────────────────────────────────────────────────

MoveCallback = Callable[[Move, "GameState"], None]
StatusCallback = Callable[[GameStatus], None]
GameOverCallback = Callable[[GameStatus], None]
PhaseCallback = Callable[[GamePhase], None]


@dataclass
class GameEvents:
    """Observable callbacks. Multiple handlers per event."""

    on_move: list[MoveCallback] = field(default_factory=list)
    on_status_changed: list[StatusCallback] = field(default_factory=list)
    on_game_over: list[GameOverCallback] = field(default_factory=list)
    on_phase_changed: list[PhaseCallback] = field(default_factory=list)


# ── Controller ───────────────────────────────────────────────────────────────


class GameController(IGameController):
    """Orchestrates a full chess game: validates moves, switches turns,
    notifies listeners.

    Methods are meant to be called from a single (main/UI) thread; AI
    results coming from an ``EngineWorker`` should reach ``submit_move``
    through a queued signal/slot connection.
    """

    __slots__ = ("_state", "_players", "events")

    def __init__(self) -> None:
        self._state = GameState()
        self._players: dict[Color, IPlayer] = {}
        self.events = GameEvents()

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def current_player(self) -> IPlayer | None:
        return self._players.get(self._state.side_to_move)

    def player(self, color: Color) -> IPlayer | None:
        return self._players.get(color)

    # ── IGameController impl ─────────────────────────────────────────────

    def new_game(
        self,
        white: IPlayer,
        black: IPlayer,
        fen: str | None = None,
    ) -> None:
        self._cancel_thinking()
        self._players = {Color.WHITE: white, Color.BLACK: black}
        self._state = GameState()
        self._state.setup(fen)

        if self._state.is_game_over:
            self._emit_game_over(self._state.status)
            return
        self._prompt_current_player()

    def submit_move(
        self,
        from_sq: Square,
        to_sq: Square,
        promotion: PieceType | None = None,
    ) -> bool:
        if self._state.is_game_over:
            return False
        if self._state.phase not in (GamePhase.AWAITING_MOVE, GamePhase.THINKING):
            return False
        if promotion is not None and promotion not in PROMOTION_TYPES:
            raise ValueError(f"Cannot promote to {promotion}")

        position = self._state.position
        move = legal_move_between(
            position.board,
            *from_sq,
            *to_sq,
            position.castling_rights,
            position.last_move,
        )
        if move is None or move.piece.color != position.side_to_move:
            _LOGGER.debug("Rejected move %s -> %s", from_sq, to_sq)
            return False
        if can_promote(move.piece, move.to_row):
            move = replace(move, promotion=promotion or PieceType.QUEEN)

        previous_status = self._state.status
        self._state.apply_move(move)
        self._emit_move(move)
        if self._state.status != previous_status:
            self._emit_status(self._state.status)

        if self._state.is_game_over:
            self._emit_game_over(self._state.status)
            return True

        self._prompt_current_player()
        return True

    def undo_move(self) -> bool:
        if not self._state.move_history:
            return False

        self._cancel_thinking()
        previous_status = self._state.status
        self._state.undo_last_move()
        # Against an AI, take back its reply too so the human is to move.
        cp = self.current_player
        if cp is not None and not cp.is_human and self._state.move_history:
            self._state.undo_last_move()

        if self._state.status != previous_status:
            self._emit_status(self._state.status)
        self._prompt_current_player()
        return True

    def set_ai_style(
        self,
        difficulty: Difficulty | str | None = None,
        personality: str | None = None,
    ) -> int:
        """Restyle every AI player mid-game without touching the position.

        A search already running keeps its old settings; the new ones apply
        from the next move request. Returns the number of players updated.
        """
        updated = 0
        for player in self._players.values():
            if isinstance(player, AIPlayer):
                player.set_style(difficulty, personality)
                updated += 1
        if updated:
            _LOGGER.debug(
                "AI style changed: difficulty=%s personality=%s",
                difficulty,
                personality,
            )
        return updated

    # ── Internal helpers ─────────────────────────────────────────────────

    def _cancel_thinking(self) -> None:
        if self._state.phase != GamePhase.THINKING:
            return
        cp = self.current_player
        if cp is not None and not cp.is_human:
            cp.cancel()

    def _prompt_current_player(self) -> None:
        """Ask the current player to move."""
        cp = self.current_player
        if cp is None:
            return

        if cp.is_human:
            self._state.phase = GamePhase.AWAITING_MOVE
            self._emit_phase(GamePhase.AWAITING_MOVE)
        else:
            self._state.phase = GamePhase.THINKING
            self._emit_phase(GamePhase.THINKING)
            cp.request_move(self._state.position)

    def _emit_move(self, move: Move) -> None:
        for cb in self.events.on_move:
            cb(move, self._state)

    def _emit_status(self, status: GameStatus) -> None:
        for cb in self.events.on_status_changed:
            cb(status)

    def _emit_game_over(self, status: GameStatus) -> None:
        self._state.phase = GamePhase.GAME_OVER
        self._emit_phase(GamePhase.GAME_OVER)
        for cb in self.events.on_game_over:
            cb(status)

    def _emit_phase(self, phase: GamePhase) -> None:
        for cb in self.events.on_phase_changed:
            cb(phase)
