"""Fixed-depth minimax search with alpha-beta pruning."""

from __future__ import annotations

import logging

from chesspal.core.board import Board
from chesspal.core.enums import Color
from chesspal.core.move import CastlingRights, Move
from chesspal.core.position import Position
from chesspal.core.rules import Rules
from chesspal.engine.evaluation import evaluate
from chesspal.engine.personalities import Personality
from chesspal.engine.search import (
    MATE_SCORE,
    MAX_SEARCH_DEPTH,
    CancelCheck,
    IEngine,
    SearchResult,
)

_LOGGER = logging.getLogger(__name__)

_INF_SCORE = float("inf")


def _never_cancelled() -> bool:
    return False


class MinimaxEngine(IEngine):
    """Minimax searcher scoring every leaf from the root side's perspective.

    The side to move alternates with each ply; the root side maximizes.
    With ``use_pruning=False`` the full tree is searched, which yields the
    same root score and move as the pruned search.
    """

    __slots__ = (
        "_cancel_check",
        "_cancelled",
        "_cutoffs",
        "_nodes",
        "_personality",
        "_root_color",
        "_use_pruning",
    )

    def __init__(self, *, use_pruning: bool = True) -> None:
        self._use_pruning = use_pruning
        self._nodes = 0
        self._cutoffs = 0
        self._cancelled = False
        self._cancel_check: CancelCheck = _never_cancelled
        self._root_color = Color.WHITE
        self._personality: Personality | None = None

    def search(
        self,
        position: Position,
        depth: int,
        personality: Personality,
        is_cancelled: CancelCheck | None = None,
    ) -> SearchResult:
        if depth <= 0:
            raise ValueError("Search depth must be >= 1")
        depth = min(depth, MAX_SEARCH_DEPTH)

        self._nodes = 0
        self._cutoffs = 0
        self._cancelled = False
        self._cancel_check = is_cancelled or _never_cancelled
        self._root_color = position.side_to_move
        self._personality = personality

        root_moves = personality.move_preference(position.legal_moves())
        if not root_moves:
            score = self._terminal_score(position, depth, maximizing=True)
            return SearchResult(None, score, 0, self._nodes)

        best_move: Move | None = None
        best_score = -_INF_SCORE
        alpha = -_INF_SCORE
        beta = _INF_SCORE

        for move in root_moves:
            if self._should_stop():
                break
            score = self._minimax(
                position.play(move), depth - 1, alpha, beta, maximizing=False
            )
            # A score from an interrupted subtree is incomplete.
            if self._should_stop():
                break
            if score > best_score:
                best_score = score
                best_move = move
            if self._use_pruning and score > alpha:
                alpha = score

        if best_move is None:
            best_move = root_moves[0]
            best_score = evaluate(position.board, self._root_color, personality)

        _LOGGER.debug(
            "Search depth=%d move=%s score=%.2f nodes=%d cutoffs=%d cancelled=%s",
            depth,
            best_move,
            best_score,
            self._nodes,
            self._cutoffs,
            self._cancelled,
        )
        return SearchResult(
            best_move,
            best_score,
            depth,
            self._nodes,
            self._cutoffs,
            self._cancelled,
        )

    def _minimax(
        self,
        position: Position,
        depth: int,
        alpha: float,
        beta: float,
        maximizing: bool,
    ) -> float:
        self._nodes += 1
        personality = self._personality
        assert personality is not None

        if depth == 0:
            return evaluate(position.board, self._root_color, personality)

        moves = position.legal_moves()
        if not moves:
            return self._terminal_score(position, depth, maximizing)

        best = -_INF_SCORE if maximizing else _INF_SCORE
        for move in personality.move_preference(moves):
            if self._should_stop():
                break
            score = self._minimax(
                position.play(move), depth - 1, alpha, beta, not maximizing
            )
            if maximizing:
                best = max(best, score)
                alpha = max(alpha, best)
            else:
                best = min(best, score)
                beta = min(beta, best)
            if self._use_pruning and beta <= alpha:
                self._cutoffs += 1
                break
        return best

    @staticmethod
    def _terminal_score(position: Position, depth: int, maximizing: bool) -> float:
        """Score a node without legal moves: mate (sooner is larger) or draw."""
        if not Rules.is_in_check(position.board, position.side_to_move):
            return 0.0
        mate = float(MATE_SCORE + depth)
        return -mate if maximizing else mate

    def _should_stop(self) -> bool:
        if self._cancelled:
            return True
        if self._cancel_check():
            self._cancelled = True
            return True
        return False


def best_move(
    board: Board,
    color: Color,
    castling_rights: CastlingRights | None,
    last_move: Move | None,
    depth: int,
    personality: Personality,
    is_cancelled: CancelCheck | None = None,
) -> Move | None:
    """Best move for *color* on *board*, or ``None`` when it has no move."""
    position = Position(
        board=board,
        side_to_move=color,
        castling_rights=castling_rights or CastlingRights.none(),
        last_move=last_move,
    )
    return MinimaxEngine().search(position, depth, personality, is_cancelled).best_move
