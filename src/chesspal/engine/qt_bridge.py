"""Qt bridge to run engine search in a worker thread."""

from __future__ import annotations

import logging
import threading

from PyQt6.QtCore import QObject, pyqtSignal, pyqtSlot

from chesspal.engine.minimax import MinimaxEngine
from chesspal.engine.personalities import get_personality
from chesspal.engine.search import AiMoveRequest, search_depth

_LOGGER = logging.getLogger(__name__)


class EngineWorker(QObject):
    """Thread-affine worker that computes engine moves on demand."""

    best_move_ready = pyqtSignal(int, object, float, int, int)
    search_cancelled = pyqtSignal(int)
    search_no_move = pyqtSignal(int, float)
    search_error = pyqtSignal(int, str)

    __slots__ = ("_cancel_event", "_engine")

    def __init__(self, *, use_pruning: bool = True) -> None:
        super().__init__()
        self._engine = MinimaxEngine(use_pruning=use_pruning)
        self._cancel_event = threading.Event()

    @pyqtSlot(object, int)
    def request_move(self, request_obj: object, request_id: int) -> None:
        """Search the requested position and emit exactly one result signal."""
        if not isinstance(request_obj, AiMoveRequest):
            _LOGGER.warning("Engine received invalid request %r", request_obj)
            self.search_error.emit(request_id, "Engine received invalid request")
            return

        personality = get_personality(request_obj.personality)
        depth = search_depth(request_obj.difficulty, personality)

        self._cancel_event.clear()
        try:
            result = self._engine.search(
                request_obj.position,
                depth,
                personality,
                is_cancelled=self._cancel_event.is_set,
            )
        except Exception as exc:
            _LOGGER.exception("Engine search failed")
            self.search_error.emit(request_id, str(exc))
            return

        if result.cancelled or self._cancel_event.is_set():
            self.search_cancelled.emit(request_id)
            return

        if result.best_move is None:
            self.search_no_move.emit(request_id, result.score)
            return

        self.best_move_ready.emit(
            request_id,
            result.best_move,
            result.score,
            result.depth,
            result.nodes,
        )

    @pyqtSlot()
    def cancel(self) -> None:
        """Request cancellation of the current search."""
        self._cancel_event.set()
