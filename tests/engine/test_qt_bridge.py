"""Tests for Qt engine bridge worker."""

from __future__ import annotations

import pytest
from PyQt6.QtTest import QSignalSpy

from chesspal.core.notation import STARTING_FEN, position_from_fen
from chesspal.core.position import Position
from chesspal.engine.personalities import Personality
from chesspal.engine.qt_bridge import EngineWorker
from chesspal.engine.search import AiMoveRequest, CancelCheck, Difficulty, SearchResult

MATE_IN_ONE = "7k/8/6K1/8/8/8/8/1Q6 w - - 0 1"


class _CancellingEngine:
    def __init__(self, worker: EngineWorker) -> None:
        self._worker = worker

    def search(
        self,
        position: Position,
        _depth: int,
        _personality: Personality,
        is_cancelled: CancelCheck | None = None,
    ) -> SearchResult:
        del is_cancelled
        legal = position.legal_moves()
        self._worker.cancel()
        return SearchResult(best_move=legal[0], score=0.0, depth=1, nodes=1)


class _NoMoveEngine:
    def search(
        self,
        _position: Position,
        _depth: int,
        _personality: Personality,
        is_cancelled: CancelCheck | None = None,
    ) -> SearchResult:
        del is_cancelled
        return SearchResult(best_move=None, score=-10_003.0, depth=0, nodes=0)


class _RecordingEngine:
    def __init__(self) -> None:
        self.calls: list[tuple[int, str]] = []

    def search(
        self,
        position: Position,
        depth: int,
        personality: Personality,
        is_cancelled: CancelCheck | None = None,
    ) -> SearchResult:
        del is_cancelled
        self.calls.append((depth, personality.name))
        return SearchResult(position.legal_moves()[0], 1.5, depth, 42)


class _BrokenEngine:
    def search(self, *_args: object, **_kwargs: object) -> SearchResult:
        raise RuntimeError("boom")


@pytest.mark.usefixtures("qcore_app")
class TestEngineWorker:
    def test_emits_best_move(self) -> None:
        position = position_from_fen(MATE_IN_ONE)
        worker = EngineWorker()
        best_moves = QSignalSpy(worker.best_move_ready)

        worker.request_move(AiMoveRequest(position, Difficulty.EASY), 3)

        assert len(best_moves) == 1
        request_id, move, score, depth, nodes = best_moves[0]
        assert request_id == 3
        assert str(move) == "b1b8"
        assert score > 10_000
        assert depth == 2
        assert nodes > 0

    def test_depth_follows_difficulty_and_personality(self) -> None:
        worker = EngineWorker()
        engine = _RecordingEngine()
        worker._engine = engine

        worker.request_move(
            AiMoveRequest(Position.initial(), Difficulty.HARD, "positional"), 1
        )
        worker.request_move(AiMoveRequest(Position.initial(), "easy", "nobody"), 2)

        assert engine.calls == [(5, "positional"), (2, "standard")]

    def test_emits_cancelled_when_search_is_cancelled(self) -> None:
        position = position_from_fen(STARTING_FEN)
        worker = EngineWorker()
        worker._engine = _CancellingEngine(worker)

        cancelled = QSignalSpy(worker.search_cancelled)
        best_moves = QSignalSpy(worker.best_move_ready)

        worker.request_move(AiMoveRequest(position), 7)

        assert len(cancelled) == 1
        assert cancelled[0][0] == 7
        assert len(best_moves) == 0

    def test_cancel_flag_is_reset_for_next_request(self) -> None:
        worker = EngineWorker()
        worker._engine = _RecordingEngine()
        worker.cancel()

        best_moves = QSignalSpy(worker.best_move_ready)
        worker.request_move(AiMoveRequest(Position.initial()), 8)

        assert len(best_moves) == 1

    def test_emits_no_move_when_search_returns_none(self) -> None:
        position = position_from_fen(STARTING_FEN)
        worker = EngineWorker()
        worker._engine = _NoMoveEngine()

        no_move = QSignalSpy(worker.search_no_move)
        best_moves = QSignalSpy(worker.best_move_ready)
        errors = QSignalSpy(worker.search_error)

        worker.request_move(AiMoveRequest(position), 11)

        assert len(no_move) == 1
        assert no_move[0][0] == 11
        assert len(best_moves) == 0
        assert len(errors) == 0

    def test_invalid_request(self) -> None:
        worker = EngineWorker()
        errors = QSignalSpy(worker.search_error)

        worker.request_move(Position.initial(), 5)

        assert len(errors) == 1
        assert errors[0][0] == 5

    def test_engine_exception_becomes_error_signal(self) -> None:
        worker = EngineWorker()
        worker._engine = _BrokenEngine()
        errors = QSignalSpy(worker.search_error)

        worker.request_move(AiMoveRequest(Position.initial()), 9)

        assert len(errors) == 1
        assert errors[0] == [9, "boom"]
