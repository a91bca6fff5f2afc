"""New-game configuration."""

from __future__ import annotations

import random
from collections.abc import Callable
from dataclasses import dataclass

from chesspal.core.enums import Color
from chesspal.engine.search import AiMoveRequest, Difficulty
from chesspal.game.interfaces import IPlayer
from chesspal.game.player import AIPlayer, HumanPlayer

GAME_MODES: tuple[str, ...] = ("vs_ai", "two_players")
PLAYER_COLORS: tuple[str, ...] = ("white", "black", "random")


@dataclass
class GameSettings:
    """All user-configurable options for starting a game."""

    mode: str = "vs_ai"
    player_color: str = "white"  # human side when playing the AI
    difficulty: Difficulty = Difficulty.MEDIUM
    personality: str = "standard"

    def __post_init__(self) -> None:
        if self.mode not in GAME_MODES:
            raise ValueError(f"Unknown game mode: {self.mode!r}")
        if self.player_color not in PLAYER_COLORS:
            raise ValueError(f"Unknown player color: {self.player_color!r}")
        self.difficulty = Difficulty.parse(self.difficulty)

    def resolve_player_color(self, rng: random.Random | None = None) -> Color:
        """The human's color, drawing a side when ``player_color`` is random."""
        if self.player_color == "white":
            return Color.WHITE
        if self.player_color == "black":
            return Color.BLACK
        return (rng or random).choice((Color.WHITE, Color.BLACK))

    def build_players(
        self,
        on_request_move: Callable[[AiMoveRequest], None] | None = None,
        on_cancel: Callable[[], None] | None = None,
        rng: random.Random | None = None,
    ) -> tuple[IPlayer, IPlayer]:
        """Create the (white, black) players described by these settings."""
        if self.mode == "two_players":
            return HumanPlayer(Color.WHITE), HumanPlayer(Color.BLACK)

        human_color = self.resolve_player_color(rng)
        human = HumanPlayer(human_color)
        ai = AIPlayer(
            human_color.opposite,
            difficulty=self.difficulty,
            personality=self.personality,
            on_request_move=on_request_move,
            on_cancel=on_cancel,
        )
        if human_color == Color.WHITE:
            return human, ai
        return ai, human
