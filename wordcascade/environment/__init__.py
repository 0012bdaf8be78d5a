"""LLM bench environment for Word Cascade."""

from .models import (
    Message,
    Role,
    ParsedResponse,
    PathOutcome,
    TurnResult,
    PlayerConfig,
    BenchmarkConfig,
    BenchmarkResult,
)
from .llm_client import LLMClient
from .player import Player
from .sink import StatsSink, MemorySink, JsonFileSink
from .bench import WordBench

__all__ = [
    "Message",
    "Role",
    "ParsedResponse",
    "PathOutcome",
    "TurnResult",
    "PlayerConfig",
    "BenchmarkConfig",
    "BenchmarkResult",
    "LLMClient",
    "Player",
    "StatsSink",
    "MemorySink",
    "JsonFileSink",
    "WordBench",
]
