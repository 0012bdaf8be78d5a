"""Match engine for the Word Cascade letter-grid puzzle."""

from .board import (
    BOARD_SIZE,
    EMPTY,
    Board,
    board_from_rows,
    cleared_columns,
    constrict,
    empty_board,
    fall,
    fill_ratio,
    filled_count,
    render_board,
    settle,
)
from .dictionary import WordList, WordOracle
from .generator import BoardGenerator
from .letters import RARE_LETTERS, RareLetterTracker, letter_for_draw
from .models import (
    BoardChanged,
    Coordinate,
    EngineEvent,
    FinalStats,
    InvariantViolation,
    LevelUp,
    SessionConfig,
    SessionTerminal,
    WordAccepted,
    WordRejected,
)
from .scoring import (
    LevelProgression,
    cumulative_points,
    letter_score,
    minimum_word_length,
    points_for_level,
    score,
    time_bonus,
)
from .selection import SelectionStateMachine, is_adjacent, validate_path
from .session import MatchSession
from .solver import find_word_path

__all__ = [
    # Session
    "MatchSession",
    "SessionConfig",
    # Board
    "BOARD_SIZE",
    "EMPTY",
    "Board",
    "BoardGenerator",
    "board_from_rows",
    "empty_board",
    "fall",
    "cleared_columns",
    "constrict",
    "settle",
    "fill_ratio",
    "filled_count",
    "render_board",
    # Letters
    "RARE_LETTERS",
    "RareLetterTracker",
    "letter_for_draw",
    # Selection
    "Coordinate",
    "SelectionStateMachine",
    "is_adjacent",
    "validate_path",
    # Scoring
    "LevelProgression",
    "letter_score",
    "score",
    "time_bonus",
    "minimum_word_length",
    "points_for_level",
    "cumulative_points",
    # Dictionary
    "WordList",
    "WordOracle",
    "find_word_path",
    # Events
    "EngineEvent",
    "WordAccepted",
    "WordRejected",
    "LevelUp",
    "BoardChanged",
    "SessionTerminal",
    "FinalStats",
    "InvariantViolation",
]
