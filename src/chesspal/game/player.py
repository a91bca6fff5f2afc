"""Concrete player implementations."""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable

from chesspal.core.enums import Color
from chesspal.engine.search import AiMoveRequest, Difficulty
from chesspal.game.interfaces import IPlayer

if TYPE_CHECKING:
    from chesspal.core.position import Position


class HumanPlayer(IPlayer):
    """A human participant whose moves come from the host UI.

    ``request_move`` is a no-op because humans select moves interactively.
    """

    __slots__ = ("_color", "_name")

    def __init__(self, color: Color, name: str = "") -> None:
        self._color = color
        self._name = name or f"Player ({color})"

    @property
    def color(self) -> Color:
        return self._color

    @property
    def name(self) -> str:
        return self._name

    @property
    def is_human(self) -> bool:
        return True

    def request_move(self, position: Position) -> None:
        pass  # Human moves arrive via controller.submit_move()

    def cancel(self) -> None:
        pass


class AIPlayer(IPlayer):
    """An AI participant that delegates computation to a callback.

    ``AIPlayer`` only packs the position together with its difficulty and
    personality into an :class:`AiMoveRequest` and hands it to the
    *on_request_move* bridge. In an application that callable dispatches
    to an ``EngineWorker`` living in a ``QThread``; tests can search
    synchronously and submit the result straight back.

    Args:
        color: Side the AI plays.
        name: Display name.
        difficulty: Difficulty tier for the search depth.
        personality: Personality name (unknown names play as standard).
        on_request_move: ``(AiMoveRequest) -> None``.
        on_cancel: ``() -> None``, called to abort a running search.
    """

    __slots__ = (
        "_color",
        "_name",
        "_difficulty",
        "_personality",
        "_auto_name",
        "_on_request_move",
        "_on_cancel",
    )

    def __init__(
        self,
        color: Color,
        name: str = "",
        difficulty: Difficulty | str = Difficulty.MEDIUM,
        personality: str = "standard",
        on_request_move: Callable[[AiMoveRequest], None] | None = None,
        on_cancel: Callable[[], None] | None = None,
    ) -> None:
        self._color = color
        self._difficulty = Difficulty.parse(difficulty)
        self._personality = personality
        self._auto_name = not name
        self._name = name or self._default_name()
        self._on_request_move = on_request_move
        self._on_cancel = on_cancel

    @property
    def color(self) -> Color:
        return self._color

    @property
    def name(self) -> str:
        return self._name

    @property
    def is_human(self) -> bool:
        return False

    @property
    def difficulty(self) -> Difficulty:
        return self._difficulty

    @property
    def personality(self) -> str:
        return self._personality

    def set_style(
        self,
        difficulty: Difficulty | str | None = None,
        personality: str | None = None,
    ) -> None:
        """Update the playing style (takes effect on the next request)."""
        if difficulty is not None:
            self._difficulty = Difficulty.parse(difficulty)
        if personality is not None:
            self._personality = personality
        if self._auto_name:
            self._name = self._default_name()

    def _default_name(self) -> str:
        return f"Computer ({self._personality}, {self._difficulty})"

    def request_move(self, position: Position) -> None:
        if self._on_request_move is not None:
            self._on_request_move(
                AiMoveRequest(position, self._difficulty, self._personality)
            )

    def cancel(self) -> None:
        if self._on_cancel is not None:
            self._on_cancel()
