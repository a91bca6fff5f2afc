"""Tests for the minimax search and difficulty handling."""

import random
from dataclasses import replace

import pytest

from chesspal.core.enums import Color
from chesspal.core.notation import position_from_fen
from chesspal.core.position import Position
from chesspal.engine.minimax import MinimaxEngine, best_move
from chesspal.engine.personalities import get_personality, personality_names
from chesspal.engine.search import (
    MATE_SCORE,
    MAX_SEARCH_DEPTH,
    Difficulty,
    search_depth,
)

STANDARD = get_personality("standard")

MATE_IN_ONE = "7k/8/6K1/8/8/8/8/1Q6 w - - 0 1"
FOOLS_MATE = "rnb1kbnr/pppp1ppp/8/4p3/6Pq/5P2/PPPPP2P/RNBQKBNR w KQkq - 1 3"
STALEMATE = "7k/8/5KQ1/8/8/8/8/8 b - - 0 1"
BARE_KINGS = "7k/8/8/8/8/8/8/K7 w - - 0 1"


class TestDifficulty:
    def test_base_depths(self) -> None:
        assert (Difficulty.EASY, Difficulty.MEDIUM, Difficulty.HARD) == (2, 3, 4)

    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("easy", Difficulty.EASY),
            ("HARD", Difficulty.HARD),
            (" medium ", Difficulty.MEDIUM),
            ("impossible", Difficulty.MEDIUM),
            (None, Difficulty.MEDIUM),
            (Difficulty.EASY, Difficulty.EASY),
        ],
    )
    def test_parse(self, text: object, expected: Difficulty) -> None:
        assert Difficulty.parse(text) == expected  # type: ignore[arg-type]

    @pytest.mark.parametrize(
        ("personality", "difficulty", "expected"),
        [
            ("standard", Difficulty.EASY, 2),
            ("standard", Difficulty.MEDIUM, 3),
            ("standard", Difficulty.HARD, 4),
            ("beginner", Difficulty.EASY, 1),
            ("beginner", Difficulty.MEDIUM, 2),
            ("beginner", Difficulty.HARD, 3),
            ("positional", Difficulty.MEDIUM, 4),
            ("positional", Difficulty.HARD, 5),
            ("aggressive", Difficulty.HARD, 4),
        ],
    )
    def test_search_depth(
        self, personality: str, difficulty: Difficulty, expected: int
    ) -> None:
        assert search_depth(difficulty, get_personality(personality)) == expected

    def test_depth_accepts_names(self) -> None:
        assert search_depth("hard", STANDARD) == 4

    def test_depth_floor_and_ceiling(self) -> None:
        tiny = replace(STANDARD, difficulty_multiplier=0.1)
        huge = replace(STANDARD, difficulty_multiplier=5.0)
        assert search_depth(Difficulty.EASY, tiny) == 1
        assert search_depth(Difficulty.HARD, huge) == MAX_SEARCH_DEPTH

    def test_registry_hard_depths_never_exceed_five(self) -> None:
        depths = {
            name: search_depth(Difficulty.HARD, get_personality(name))
            for name in personality_names()
        }
        assert max(depths.values()) == 5
        assert [name for name, d in depths.items() if d == 5] == ["positional"]


class TestTerminalPositions:
    def test_no_move_when_mated(self) -> None:
        result = MinimaxEngine().search(position_from_fen(FOOLS_MATE), 3, STANDARD)
        assert result.best_move is None
        assert result.score == -(MATE_SCORE + 3)
        assert result.depth == 0

    def test_no_move_when_stalemated(self) -> None:
        result = MinimaxEngine().search(position_from_fen(STALEMATE), 2, STANDARD)
        assert result.best_move is None
        assert result.score == 0

    def test_invalid_depth(self) -> None:
        with pytest.raises(ValueError):
            MinimaxEngine().search(Position.initial(), 0, STANDARD)

    def test_depth_is_clamped(self) -> None:
        result = MinimaxEngine().search(position_from_fen(BARE_KINGS), 10, STANDARD)
        assert result.depth == MAX_SEARCH_DEPTH
        assert result.best_move is not None


class TestMateFinding:
    @pytest.mark.parametrize("depth", [2, 3])
    def test_mate_in_one(self, depth: int) -> None:
        position = position_from_fen(MATE_IN_ONE)
        result = MinimaxEngine().search(position, depth, STANDARD)
        assert result.best_move is not None
        assert result.best_move.to_sq == (0, 1)
        assert result.score > MATE_SCORE
        assert position.play(result.best_move).classify().checkmate

    @pytest.mark.parametrize("name", ["aggressive", "defensive", "positional"])
    def test_every_deterministic_personality_mates(self, name: str) -> None:
        position = position_from_fen(MATE_IN_ONE)
        result = MinimaxEngine().search(position, 2, get_personality(name))
        assert result.best_move is not None
        assert position.play(result.best_move).classify().checkmate

    def test_black_finds_mate(self) -> None:
        # 1.f3 e5 2.g4 and black mates with Qh4.
        position = position_from_fen(
            "rnbqkbnr/pppp1ppp/8/4p3/6P1/5P2/PPPPP2P/RNBQKBNR b KQkq g3 0 2"
        )
        move = best_move(
            position.board,
            Color.BLACK,
            position.castling_rights,
            position.last_move,
            2,
            STANDARD,
        )
        assert move is not None
        assert str(move) == "d8h4"

    def test_takes_hanging_queen(self) -> None:
        position = position_from_fen("4k3/8/8/3q4/8/8/8/3RK3 w - - 0 1")
        result = MinimaxEngine().search(position, 2, STANDARD)
        assert result.best_move is not None
        assert str(result.best_move) == "d1d5"


class TestAlphaBeta:
    POSITIONS = (
        "4k3/8/8/8/8/8/4P3/4K3 w - - 0 1",
        "4k3/8/3p4/8/3R4/8/8/4K3 b - - 0 1",
        "6k1/5ppp/8/8/8/8/5PPP/3R2K1 w - - 0 1",
        MATE_IN_ONE,
    )

    @pytest.mark.slow
    @pytest.mark.parametrize("fen", POSITIONS)
    @pytest.mark.parametrize("name", ["standard", "aggressive", "defensive", "positional"])
    def test_pruning_matches_full_width(self, fen: str, name: str) -> None:
        position = position_from_fen(fen)
        personality = get_personality(name)
        pruned = MinimaxEngine().search(position, 3, personality)
        full = MinimaxEngine(use_pruning=False).search(position, 3, personality)
        assert pruned.score == full.score
        assert pruned.best_move == full.best_move
        assert pruned.nodes <= full.nodes
        assert full.cutoffs == 0

    def test_pruning_cuts_something(self) -> None:
        position = position_from_fen(self.POSITIONS[2])
        result = MinimaxEngine().search(position, 3, STANDARD)
        assert result.cutoffs > 0


class TestDeterminism:
    def test_same_inputs_same_move(self) -> None:
        position = position_from_fen(TestAlphaBeta.POSITIONS[2])
        first = MinimaxEngine().search(position, 2, STANDARD)
        second = MinimaxEngine().search(position, 2, STANDARD)
        assert first == second

    def test_seeded_creative_is_reproducible(self) -> None:
        position = position_from_fen(TestAlphaBeta.POSITIONS[2])
        moves = []
        for _ in range(2):
            creative = get_personality("creative", random.Random(99))
            moves.append(MinimaxEngine().search(position, 2, creative).best_move)
        assert moves[0] == moves[1]

    def test_input_position_untouched(self) -> None:
        position = Position.initial()
        MinimaxEngine().search(position, 2, STANDARD)
        assert position == Position.initial()


class TestCancellation:
    def test_cancel_before_start_returns_first_move(self) -> None:
        position = position_from_fen(TestAlphaBeta.POSITIONS[2])
        result = MinimaxEngine().search(position, 3, STANDARD, is_cancelled=lambda: True)
        assert result.cancelled
        assert result.best_move == position.legal_moves()[0]
        assert result.nodes == 0

    def test_cancel_midway_keeps_a_legal_move(self) -> None:
        position = Position.initial()
        polls = 0

        def cancel_after_a_while() -> bool:
            nonlocal polls
            polls += 1
            return polls > 50

        result = MinimaxEngine().search(
            position, 4, STANDARD, is_cancelled=cancel_after_a_while
        )
        assert result.cancelled
        assert result.best_move in position.legal_moves()

    def test_uncancelled_search_flags_false(self) -> None:
        result = MinimaxEngine().search(position_from_fen(MATE_IN_ONE), 2, STANDARD)
        assert not result.cancelled


class TestBestMoveWrapper:
    def test_castling_only_with_rights(self) -> None:
        # One ply deep the king table makes g1 the most attractive square.
        position = position_from_fen("4k3/8/8/8/8/8/8/4K2R w K - 0 1")
        with_rights = best_move(
            position.board, Color.WHITE, position.castling_rights, None, 1, STANDARD
        )
        without = best_move(position.board, Color.WHITE, None, None, 1, STANDARD)
        assert with_rights is not None and without is not None
        assert str(with_rights) == "e1g1"
        assert str(without) != "e1g1"
