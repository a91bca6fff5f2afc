"""Chess engine package: evaluation, personalities, search and Qt worker bridge."""

from chesspal.engine.evaluation import DEFAULT_PIECE_VALUES, POSITION_BONUSES, evaluate
from chesspal.engine.minimax import MinimaxEngine, best_move
from chesspal.engine.personalities import (
    DEFAULT_PERSONALITY,
    PERSONALITIES,
    Personality,
    get_personality,
    personality_names,
)
from chesspal.engine.search import (
    MATE_SCORE,
    MAX_SEARCH_DEPTH,
    AiMoveRequest,
    CancelCheck,
    Difficulty,
    IEngine,
    SearchResult,
    search_depth,
)

__all__ = [
    "AiMoveRequest",
    "CancelCheck",
    "DEFAULT_PERSONALITY",
    "DEFAULT_PIECE_VALUES",
    "Difficulty",
    "IEngine",
    "MATE_SCORE",
    "MAX_SEARCH_DEPTH",
    "MinimaxEngine",
    "PERSONALITIES",
    "POSITION_BONUSES",
    "Personality",
    "SearchResult",
    "best_move",
    "evaluate",
    "get_personality",
    "personality_names",
    "search_depth",
]
