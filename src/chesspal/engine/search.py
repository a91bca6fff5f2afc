"""Shared engine search models, difficulty tiers and protocol."""

from __future__ import annotations

import math
from collections.abc import Callable
from dataclasses import dataclass
from enum import IntEnum
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from chesspal.core.move import Move
    from chesspal.core.position import Position
    from chesspal.engine.personalities import Personality

CancelCheck = Callable[[], bool]

MATE_SCORE = 10_000
# Multipliers above 1 can push HARD past 4 plies (positional searches 5);
# expect seconds to tens of seconds per move there in pure Python.
MAX_SEARCH_DEPTH = 6


class Difficulty(IntEnum):
    """Difficulty tier; the value is the base search depth in plies."""

    EASY = 2
    MEDIUM = 3
    HARD = 4

    @classmethod
    def parse(cls, value: Difficulty | str | None) -> Difficulty:
        """Accept an enum member or its (case-insensitive) name.

        Anything unrecognised resolves to ``MEDIUM``.
        """
        if isinstance(value, Difficulty):
            return value
        if isinstance(value, str):
            member = cls.__members__.get(value.strip().upper())
            if member is not None:
                return member
        return cls.MEDIUM

    def __str__(self) -> str:
        return self.name.lower()


def search_depth(difficulty: Difficulty | str, personality: Personality) -> int:
    """Plies to search for *difficulty* scaled by the personality multiplier."""
    base = Difficulty.parse(difficulty).value
    scaled = math.floor(base * personality.difficulty_multiplier + 0.5)
    return min(max(1, scaled), MAX_SEARCH_DEPTH)


@dataclass(slots=True, frozen=True)
class SearchResult:
    """Result produced by the engine search."""

    best_move: Move | None
    score: float
    depth: int
    nodes: int
    cutoffs: int = 0
    cancelled: bool = False


class IEngine(Protocol):
    """Protocol for engines used by the API and the Qt worker."""

    def search(
        self,
        position: Position,
        depth: int,
        personality: Personality,
        is_cancelled: CancelCheck | None = None,
    ) -> SearchResult: ...


@dataclass(slots=True, frozen=True)
class AiMoveRequest:
    """Everything a worker needs for one search."""

    position: Position
    difficulty: Difficulty = Difficulty.MEDIUM
    personality: str = "standard"
