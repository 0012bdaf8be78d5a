"""
Pydantic models for the environment layer.

Configuration, per-turn records and the final bench result. The logic
classes (WordBench, Player, LLMClient) live in their own modules.
"""

from typing import List, Dict, Optional, Literal
from pydantic import BaseModel, Field, ConfigDict

from ..engine.models import Coordinate, FinalStats, SessionConfig


Role = Literal["system", "user", "assistant"]


class Message(BaseModel):
    """A single message in the conversation."""
    role: Role
    content: str


class ParsedResponse(BaseModel):
    """Parsed components from an LLM response."""
    thinking: Optional[str] = None
    paths: List[List[Coordinate]] = Field(default_factory=list)
    shuffle: bool = False
    parse_errors: List[str] = Field(default_factory=list)
    raw_response: str = ""


class PathOutcome(BaseModel):
    """What happened to one proposed path."""
    path: List[Coordinate]
    word: str = ""
    accepted: bool = False
    points: int = 0
    reason: Optional[str] = None


class TurnResult(BaseModel):
    """Result of a single player turn."""
    turn_number: int
    thinking: Optional[str] = None
    outcomes: List[PathOutcome] = Field(default_factory=list)
    shuffled: bool = False
    score_after: int = 0
    level_after: int = 1
    remaining_seconds: float = 0.0
    parse_errors: List[str] = Field(default_factory=list)
    raw_response: str = ""
    error: Optional[str] = None
    prompt_tokens: Optional[int] = None
    completion_tokens: Optional[int] = None
    total_tokens: Optional[int] = None


class PlayerConfig(BaseModel):
    """Configuration for the LLM player."""
    model_config = ConfigDict(extra='allow')

    model: str
    name: Optional[str] = None
    temperature: float = 1.0
    max_tokens: Optional[int] = None
    # Additional kwargs are allowed and passed to LiteLLM


class BenchmarkConfig(BaseModel):
    """Configuration for a bench run."""
    max_turns: int = Field(default=60, ge=1)
    seconds_per_turn: float = Field(default=5.0, ge=0.0)
    dictionary_path: Optional[str] = None
    stats_path: Optional[str] = None
    session: SessionConfig = Field(default_factory=SessionConfig)
    player: PlayerConfig = Field(default_factory=lambda: PlayerConfig(model="gpt-4o"))


class BenchmarkResult(BaseModel):
    """Result of a complete bench run."""
    config: BenchmarkConfig
    final_stats: FinalStats = Field(default_factory=FinalStats)
    total_turns: int = 0
    end_reason: str = ""
    turn_history: List[TurnResult] = Field(default_factory=list)
    session_state: Dict = Field(default_factory=dict)
    conversation_history: List[Dict[str, str]] = Field(default_factory=list)
    started_at: str = ""
    ended_at: str = ""
    duration_seconds: float = 0.0
    total_prompt_tokens: int = 0
    total_completion_tokens: int = 0
    total_tokens: int = 0
