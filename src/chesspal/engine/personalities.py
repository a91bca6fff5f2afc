"""AI personalities: named bundles of evaluation weights and move ordering.

A :class:`Personality` is plain immutable configuration handed to every
evaluation and search call. The registry below is built once at import and
is read-only; :func:`get_personality` resolves a name (falling back to
``"standard"``) and can build a fresh instance around a caller-supplied
``random.Random`` so randomized styles are reproducible in tests.
"""

from __future__ import annotations

import logging
import math
import random
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, TypeAlias

from chesspal.core.enums import Color, PieceType
from chesspal.core.move_generator import is_attacked_by
from chesspal.engine.evaluation import (
    DEFAULT_PIECE_VALUES,
    POSITION_BONUSES,
    PositionTable,
)

if TYPE_CHECKING:
    from chesspal.core.board import Board
    from chesspal.core.move import Move

_LOGGER = logging.getLogger(__name__)

EvaluationModifier: TypeAlias = Callable[["Board", Color, float], float]
MovePreference: TypeAlias = Callable[[Sequence["Move"]], list["Move"]]

DEFAULT_PERSONALITY = "standard"

_CENTER_SQUARES: tuple[tuple[int, int], ...] = ((3, 3), (3, 4), (4, 3), (4, 4))


@dataclass(frozen=True, slots=True, eq=False)
class Personality:
    """Immutable AI style profile."""

    name: str
    display_name: str
    description: str
    piece_values: Mapping[PieceType, int]
    evaluation_modifier: EvaluationModifier
    move_preference: MovePreference
    difficulty_multiplier: float = 1.0
    positional_bonus: Mapping[PieceType, PositionTable] = field(
        default_factory=lambda: POSITION_BONUSES
    )
    deterministic: bool = True

    def piece_value(self, piece_type: PieceType) -> int:
        return self.piece_values.get(piece_type, DEFAULT_PIECE_VALUES[piece_type])


def _values(**overrides: int) -> Mapping[PieceType, int]:
    values = dict(DEFAULT_PIECE_VALUES)
    for name, value in overrides.items():
        values[PieceType[name.upper()]] = value
    return MappingProxyType(values)


def _base_value(piece_type: PieceType) -> int:
    return DEFAULT_PIECE_VALUES[piece_type]


# ── Evaluation modifiers ─────────────────────────────────────────────────────


def _unchanged(board: Board, color: Color, score: float) -> float:
    return score


def _attack_bonus(board: Board, color: Color, score: float) -> float:
    """Reward every enemy piece (king excluded) that *color* attacks."""
    bonus = 0.0
    for row, col, piece in board.occupied():
        if piece.color == color or piece.piece_type == PieceType.KING:
            continue
        if is_attacked_by(board, row, col, color):
            bonus += _base_value(piece.piece_type) * 0.2
    return score + bonus


def _defense_bonus(board: Board, color: Color, score: float) -> float:
    """Reward protected pieces and a pawn shield, punish hanging pieces."""
    bonus = 0.0
    for row, col, piece in board.pieces(color):
        if piece.piece_type == PieceType.KING:
            continue
        value = _base_value(piece.piece_type)
        if is_attacked_by(board, row, col, color):
            bonus += value * 0.1
        elif is_attacked_by(board, row, col, color.opposite):
            bonus -= value * 0.15

    king = board.find_king(color)
    if king is not None:
        king_row, king_col = king
        shield_row = king_row + color.forward
        if 0 <= shield_row < 8:
            for shield_col in (king_col - 1, king_col, king_col + 1):
                if not 0 <= shield_col < 8:
                    continue
                piece = board.piece_at(shield_row, shield_col)
                if (
                    piece is not None
                    and piece.color == color
                    and piece.piece_type == PieceType.PAWN
                ):
                    bonus += 5
    return score + bonus


def _center_bonus(board: Board, color: Color, score: float) -> float:
    """Reward central occupation/control, punish undeveloped minor pieces."""
    bonus = 0.0
    for row, col in _CENTER_SQUARES:
        piece = board.piece_at(row, col)
        if piece is not None and piece.color == color:
            bonus += 5
        if is_attacked_by(board, row, col, color):
            bonus += 2

    back_rank = color.home_row
    for col in range(8):
        piece = board.piece_at(back_rank, col)
        if (
            piece is not None
            and piece.color == color
            and piece.piece_type in (PieceType.KNIGHT, PieceType.BISHOP)
        ):
            bonus -= 5
    return score + bonus


# ── Move preferences (ordering only, never filtering) ───────────────────────


def _keep_order(moves: Sequence[Move]) -> list[Move]:
    return list(moves)


def _captures_first(moves: Sequence[Move]) -> list[Move]:
    def key(move: Move) -> tuple[int, int]:
        if move.captured_piece is None:
            return (1, 0)
        return (0, -_base_value(move.captured_piece.piece_type))

    return sorted(moves, key=key)


def _quiet_first(moves: Sequence[Move]) -> list[Move]:
    return sorted(moves, key=lambda move: move.is_capture)


def _center_distance(row: int, col: int) -> float:
    return math.hypot(row - 3.5, col - 3.5)


def _centralizing_first(moves: Sequence[Move]) -> list[Move]:
    return sorted(moves, key=lambda move: _center_distance(move.to_row, move.to_col))


def _promote_random_pick(
    rng: random.Random,
    chance: float,
    min_moves: int,
    upper_half: bool,
) -> MovePreference:
    def prefer(moves: Sequence[Move]) -> list[Move]:
        ordered = list(moves)
        if len(ordered) > min_moves and rng.random() < chance:
            midpoint = len(ordered) // 2
            pool = ordered[:midpoint] if upper_half else ordered[midpoint:]
            pick = pool[rng.randrange(len(pool))]
            ordered.remove(pick)
            ordered.insert(0, pick)
        return ordered

    return prefer


# ── Personality factories ───────────────────────────────────────────────────


def _standard(rng: random.Random) -> Personality:
    return Personality(
        name="standard",
        display_name="Standard",
        description="A balanced AI that plays conventional chess",
        piece_values=_values(),
        evaluation_modifier=_unchanged,
        move_preference=_keep_order,
    )


def _aggressive(rng: random.Random) -> Personality:
    return Personality(
        name="aggressive",
        display_name="Aggressive",
        description="Prioritizes attacking and capturing opponent pieces",
        piece_values=_values(knight=32, bishop=32, rook=55, queen=95),
        evaluation_modifier=_attack_bonus,
        move_preference=_captures_first,
        difficulty_multiplier=1.1,
    )


def _defensive(rng: random.Random) -> Personality:
    return Personality(
        name="defensive",
        display_name="Defensive",
        description="Focuses on protecting pieces and building a solid position",
        piece_values=_values(pawn=12, knight=28, bishop=28, king=950),
        evaluation_modifier=_defense_bonus,
        move_preference=_quiet_first,
    )


def _positional(rng: random.Random) -> Personality:
    return Personality(
        name="positional",
        display_name="Positional",
        description="Emphasizes board control and piece coordination",
        piece_values=_values(),
        evaluation_modifier=_center_bonus,
        move_preference=_centralizing_first,
        difficulty_multiplier=1.2,
    )


def _creative(rng: random.Random) -> Personality:
    def jitter(board: Board, color: Color, score: float) -> float:
        return score + (rng.random() - 0.5) * 10

    return Personality(
        name="creative",
        display_name="Creative",
        description="Makes unexpected and surprising moves",
        piece_values=_values(knight=33, bishop=29),
        evaluation_modifier=jitter,
        move_preference=_promote_random_pick(rng, 0.2, 1, upper_half=True),
        deterministic=False,
    )


def _beginner(rng: random.Random) -> Personality:
    def misjudge(board: Board, color: Color, score: float) -> float:
        if rng.random() < 0.3:
            return score * (0.7 + rng.random() * 0.3)
        return score

    return Personality(
        name="beginner",
        display_name="Beginner",
        description="Makes occasional mistakes, suitable for new players",
        piece_values=_values(),
        evaluation_modifier=misjudge,
        move_preference=_promote_random_pick(rng, 0.25, 3, upper_half=False),
        difficulty_multiplier=0.7,
        deterministic=False,
    )


_FACTORIES: Mapping[str, Callable[[random.Random], Personality]] = MappingProxyType(
    {
        "standard": _standard,
        "aggressive": _aggressive,
        "defensive": _defensive,
        "positional": _positional,
        "creative": _creative,
        "beginner": _beginner,
    }
)

_SHARED_RNG = random.Random()

PERSONALITIES: Mapping[str, Personality] = MappingProxyType(
    {name: factory(_SHARED_RNG) for name, factory in _FACTORIES.items()}
)


def personality_names() -> tuple[str, ...]:
    return tuple(_FACTORIES)


def get_personality(
    name: str | None = None, rng: random.Random | None = None
) -> Personality:
    """Resolve *name* in the registry; unknown names fall back to standard.

    With *rng*, a new instance is built whose random behavior draws only
    from that generator.
    """
    key = (name or DEFAULT_PERSONALITY).strip().lower()
    if key not in _FACTORIES:
        _LOGGER.debug("Unknown personality %r, using %r", name, DEFAULT_PERSONALITY)
        key = DEFAULT_PERSONALITY
    if rng is None:
        return PERSONALITIES[key]
    return _FACTORIES[key](rng)
