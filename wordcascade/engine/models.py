"""Data models for the match engine."""

from typing import List, Optional, Literal, NamedTuple, Union
from pydantic import BaseModel, Field


class Coordinate(NamedTuple):
    """A (row, col) position on the board."""
    row: int
    col: int


class InvariantViolation(ValueError):
    """Raised in strict mode when a host hands the engine a malformed path or coordinate."""


RejectReason = Literal["too_short", "not_in_dictionary", "dictionary_unavailable"]


class WordAccepted(BaseModel):
    """A committed word was found in the dictionary and scored."""
    type: Literal["word_accepted"] = "word_accepted"
    word: str
    points_awarded: int
    time_bonus: int
    path: List[Coordinate] = Field(default_factory=list)


class WordRejected(BaseModel):
    """A committed word was refused; the board is untouched."""
    type: Literal["word_rejected"] = "word_rejected"
    reason: RejectReason
    message: str = ""
    word: Optional[str] = None


class LevelUp(BaseModel):
    """The session advanced one level."""
    type: Literal["level_up"] = "level_up"
    new_level: int


class BoardChanged(BaseModel):
    """The board was mutated (word removal, gravity, constriction or shuffle)."""
    type: Literal["board_changed"] = "board_changed"
    board: List[List[str]]
    cleared_columns: List[int] = Field(default_factory=list)


class FinalStats(BaseModel):
    """What the host forwards to the remote stats sink at the end of a match."""
    final_score: int = 0
    found_words: List[str] = Field(default_factory=list)
    highest_level_reached: int = 1


class SessionTerminal(BaseModel):
    """The session reached its absorbing terminal state."""
    type: Literal["session_terminal"] = "session_terminal"
    reason: Literal["timer_expired", "board_depleted"]
    final_stats: FinalStats


EngineEvent = Union[WordAccepted, WordRejected, LevelUp, BoardChanged, SessionTerminal]


class SessionConfig(BaseModel):
    """Tunables for a single match."""
    initial_timer_seconds: int = Field(default=120, gt=0)
    inactivity_timeout_ms: int = Field(default=1500, gt=0)
    min_fill_ratio: float = Field(default=0.10, ge=0.0, le=1.0)
    strict: bool = False  # raise InvariantViolation instead of logging and ignoring
    seed: Optional[int] = None
