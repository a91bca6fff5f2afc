"""Tests for the personality registry, modifiers and move preferences."""

import random
from dataclasses import replace

import pytest

from chesspal.core.board import Board
from chesspal.core.enums import Color, PieceType
from chesspal.core.move import Move
from chesspal.core.move_generator import legal_moves
from chesspal.core.notation import position_from_fen
from chesspal.core.piece import Piece
from chesspal.engine.personalities import (
    DEFAULT_PERSONALITY,
    PERSONALITIES,
    get_personality,
    personality_names,
)

WK = Piece(Color.WHITE, PieceType.KING)
BK = Piece(Color.BLACK, PieceType.KING)
WR = Piece(Color.WHITE, PieceType.ROOK)
WN = Piece(Color.WHITE, PieceType.KNIGHT)
BR = Piece(Color.BLACK, PieceType.ROOK)
BQ = Piece(Color.BLACK, PieceType.QUEEN)
BP = Piece(Color.BLACK, PieceType.PAWN)

MIDGAME = "r1bqkb1r/pppp1ppp/2n2n2/4p3/2B1P3/5N2/PPPP1PPP/RNBQK2R w KQkq - 4 4"


class TestRegistry:
    def test_names(self) -> None:
        assert personality_names() == (
            "standard",
            "aggressive",
            "defensive",
            "positional",
            "creative",
            "beginner",
        )
        assert DEFAULT_PERSONALITY == "standard"

    def test_lookup(self) -> None:
        assert get_personality("aggressive") is PERSONALITIES["aggressive"]
        assert get_personality("  Defensive ").name == "defensive"

    @pytest.mark.parametrize("name", [None, "", "grandmaster"])
    def test_unknown_falls_back_to_standard(self, name: str | None) -> None:
        assert get_personality(name).name == "standard"

    def test_registry_is_read_only(self) -> None:
        with pytest.raises(TypeError):
            PERSONALITIES["custom"] = PERSONALITIES["standard"]  # type: ignore[index]
        with pytest.raises(TypeError):
            PERSONALITIES["standard"].piece_values[PieceType.PAWN] = 1  # type: ignore[index]

    def test_piece_values(self) -> None:
        assert get_personality("aggressive").piece_value(PieceType.QUEEN) == 95
        assert get_personality("defensive").piece_value(PieceType.KING) == 950
        assert get_personality("creative").piece_value(PieceType.BISHOP) == 29
        assert get_personality("standard").piece_value(PieceType.ROOK) == 50

    def test_multipliers_and_determinism(self) -> None:
        assert get_personality("positional").difficulty_multiplier == 1.2
        assert get_personality("beginner").difficulty_multiplier == 0.7
        assert get_personality("creative").deterministic is False
        assert get_personality("standard").deterministic is True

    def test_rng_builds_fresh_instance(self, rng: random.Random) -> None:
        fresh = get_personality("creative", rng)
        assert fresh is not PERSONALITIES["creative"]
        assert fresh.name == "creative"


class TestMovePreferences:
    @pytest.mark.parametrize("name", personality_names())
    def test_reorders_without_adding_or_removing(self, name: str) -> None:
        personality = get_personality(name, random.Random(3))
        position = position_from_fen(MIDGAME)
        moves = position.legal_moves()
        snapshot = list(moves)
        for _ in range(20):
            ordered = personality.move_preference(moves)
            assert ordered is not moves
            assert sorted(map(str, ordered)) == sorted(map(str, moves))
        assert moves == snapshot

    def test_aggressive_orders_captures_by_value(self) -> None:
        rook = Piece(Color.WHITE, PieceType.ROOK)
        quiet = Move(7, 0, 6, 0, rook)
        takes_pawn = Move(7, 0, 5, 0, rook, BP)
        takes_queen = Move(7, 0, 4, 0, rook, BQ)
        ordered = get_personality("aggressive").move_preference(
            [quiet, takes_pawn, takes_queen]
        )
        assert ordered == [takes_queen, takes_pawn, quiet]

    def test_defensive_prefers_quiet_moves(self) -> None:
        rook = Piece(Color.WHITE, PieceType.ROOK)
        capture = Move(7, 0, 4, 0, rook, BQ)
        quiet_a = Move(7, 0, 6, 0, rook)
        quiet_b = Move(7, 0, 5, 0, rook)
        ordered = get_personality("defensive").move_preference(
            [capture, quiet_a, quiet_b]
        )
        assert ordered == [quiet_a, quiet_b, capture]

    def test_positional_prefers_center(self) -> None:
        moves = legal_moves(Board.initial(), Color.WHITE)
        ordered = get_personality("positional").move_preference(moves)
        assert {str(m) for m in ordered[:2]} == {"d2d4", "e2e4"}

    def test_standard_keeps_order(self) -> None:
        moves = legal_moves(Board.initial(), Color.WHITE)
        assert get_personality("standard").move_preference(moves) == moves

    def test_seeded_random_styles_repeat(self) -> None:
        moves = legal_moves(Board.initial(), Color.WHITE)
        for name in ("creative", "beginner"):
            first = get_personality(name, random.Random(42))
            second = get_personality(name, random.Random(42))
            for _ in range(10):
                assert first.move_preference(moves) == second.move_preference(moves)


class TestModifiers:
    def test_standard_is_identity(self) -> None:
        modifier = get_personality("standard").evaluation_modifier
        assert modifier(Board.initial(), Color.WHITE, 12.5) == 12.5

    def test_aggressive_rewards_attacked_pieces(self) -> None:
        board = (
            Board.empty()
            .with_piece(7, 7, WK)
            .with_piece(0, 7, BK)
            .with_piece(7, 0, WR)
            .with_piece(0, 0, BR)
        )
        modifier = get_personality("aggressive").evaluation_modifier
        assert modifier(board, Color.WHITE, 0.0) == pytest.approx(10.0)

    def test_aggressive_ignores_attacked_king(self) -> None:
        board = (
            Board.empty()
            .with_piece(7, 0, WK)
            .with_piece(0, 7, BK)
            .with_piece(7, 7, WR)
        )
        modifier = get_personality("aggressive").evaluation_modifier
        assert modifier(board, Color.WHITE, 0.0) == 0.0

    def test_defensive_pawn_shield_and_protection(self) -> None:
        board = position_from_fen("k7/8/8/8/8/8/5PPP/6K1 w - - 0 1").board
        modifier = get_personality("defensive").evaluation_modifier
        # Three shield pawns (+5 each), each protected by the king (+1 each).
        assert modifier(board, Color.WHITE, 0.0) == pytest.approx(18.0)

    def test_defensive_punishes_hanging_piece(self) -> None:
        board = (
            Board.empty()
            .with_piece(7, 0, WK)
            .with_piece(0, 7, BK)
            .with_piece(4, 3, WN)
            .with_piece(0, 3, BR)
        )
        modifier = get_personality("defensive").evaluation_modifier
        assert modifier(board, Color.WHITE, 0.0) == pytest.approx(-4.5)

    def test_positional_penalizes_undeveloped_minors(self) -> None:
        modifier = get_personality("positional").evaluation_modifier
        assert modifier(Board.initial(), Color.WHITE, 0.0) == pytest.approx(-20.0)

    def test_positional_rewards_center(self) -> None:
        board = position_from_fen("4k3/8/8/8/4P3/8/8/4K3 w - - 0 1").board
        modifier = get_personality("positional").evaluation_modifier
        # e4 is occupied (+5) and the pawn covers d5 (+2).
        assert modifier(board, Color.WHITE, 0.0) == pytest.approx(7.0)

    def test_creative_jitter_is_bounded(self, rng: random.Random) -> None:
        modifier = get_personality("creative", rng).evaluation_modifier
        for _ in range(50):
            assert abs(modifier(Board.initial(), Color.WHITE, 100.0) - 100.0) <= 5.0

    def test_beginner_only_shrinks_scores(self, rng: random.Random) -> None:
        modifier = get_personality("beginner", rng).evaluation_modifier
        for _ in range(50):
            assert 70.0 <= modifier(Board.initial(), Color.WHITE, 100.0) <= 100.0

    def test_replace_keeps_other_fields(self) -> None:
        tweaked = replace(get_personality("standard"), difficulty_multiplier=2.0)
        assert tweaked.name == "standard"
        assert tweaked.difficulty_multiplier == 2.0
