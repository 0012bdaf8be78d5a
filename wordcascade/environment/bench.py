import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field

from .models import BenchmarkConfig, BenchmarkResult, PathOutcome, TurnResult
from .player import Player
from .prompts import build_player_prompt
from .sink import JsonFileSink, MemorySink, StatsSink
from ..engine.board import render_board
from ..engine.dictionary import WordList, WordOracle
from ..engine.models import Coordinate, WordAccepted, WordRejected
from ..engine.scoring import minimum_word_length
from ..engine.session import MatchSession


logger = logging.getLogger(__name__)


class WordBench(BaseModel):
    """
    Top-level orchestrator: one LLM player against one match session.

    Plays the host role for the engine: turns each proposed path into tile
    clicks, fires the inactivity timeout to commit it, advances the clock,
    and forwards final stats to the sink when the match ends.

    Attributes:
        session: The MatchSession being played
        player: The LLM player
        config: Bench configuration
        sink: Receiver of the final stats
        turn_history: History of all turns
        current_turn: Current turn number
        is_complete: Whether the run has finished
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    session: Optional[MatchSession] = None
    player: Optional[Player] = None
    config: BenchmarkConfig = Field(default_factory=BenchmarkConfig)
    sink: Any = None
    turn_history: List[TurnResult] = Field(default_factory=list)
    current_turn: int = 0
    is_complete: bool = False
    stats_submitted: bool = False
    end_reason: str = ""
    started_at: Optional[datetime] = None

    @classmethod
    def create(
        cls,
        config: Optional[BenchmarkConfig] = None,
        oracle: Optional[WordOracle] = None,
        sink: Optional[StatsSink] = None,
        **config_kwargs: Any
    ) -> "WordBench":
        """
        Factory method to create a bench with a session, player and sink.

        Args:
            config: Optional BenchmarkConfig instance
            oracle: Dictionary to use; loaded from ``config.dictionary_path``
                (or the built-in fallback list) when omitted
            sink: Stats sink; a JsonFileSink when ``config.stats_path`` is set,
                otherwise an in-memory sink
            **config_kwargs: Config parameters if config not provided
        """
        if config is None:
            config = BenchmarkConfig(**config_kwargs)

        if oracle is None:
            if config.dictionary_path:
                oracle = WordList.from_file(config.dictionary_path)
            else:
                logger.warning("No dictionary_path configured; using the fallback word list")
                oracle = WordList.fallback()

        if sink is None:
            sink = JsonFileSink(config.stats_path) if config.stats_path else MemorySink()

        player_config = config.player
        llm_kwargs: Dict[str, Any] = {
            "temperature": player_config.temperature,
            "max_tokens": player_config.max_tokens,
        }
        if player_config.__pydantic_extra__:
            llm_kwargs.update(player_config.__pydantic_extra__)
        player = Player.create(model=player_config.model, name=player_config.name, **llm_kwargs)

        session = MatchSession.create(oracle=oracle, config=config.session)
        return cls(session=session, player=player, config=config, sink=sink)

    def setup(self) -> None:
        """Reset the run and deal a fresh board."""
        if self.session is None:
            raise ValueError("Session not initialized")
        self.session.start()
        self.started_at = datetime.now()
        self.current_turn = 0
        self.is_complete = False
        self.stats_submitted = False
        self.end_reason = ""
        self.turn_history = []

    def play_path(self, path: List[Coordinate]) -> PathOutcome:
        """
        Feed one path to the session as clicks, then let the inactivity timeout commit it.

        The pause before the timeout fires is charged to the match clock. A
        path that jumps between non-adjacent tiles is committed piecewise,
        exactly as a human clicking those tiles would be.
        """
        session = self.session
        session.clear_selection()
        events = []
        for row, col in path:
            events.extend(session.click(row, col))
        if session.inactivity_armed:
            events.extend(session.on_tick(session.inactivity_timeout_ms))
        events.extend(session.on_inactivity_timeout())

        outcome = PathOutcome(path=list(path))
        for event in events:
            if isinstance(event, WordAccepted):
                outcome.word = event.word
                outcome.accepted = True
                outcome.points += event.points_awarded
                outcome.reason = None
            elif isinstance(event, WordRejected) and not outcome.accepted:
                outcome.word = event.word or outcome.word
                outcome.reason = event.reason
        if not outcome.accepted and outcome.reason is None:
            outcome.reason = "discarded"
        return outcome

    def _get_last_turn_feedback(self) -> Dict[str, Any]:
        if not self.turn_history:
            return {}
        turn = self.turn_history[-1]
        return {
            "accepted": [o.word for o in turn.outcomes if o.accepted],
            "rejected": [
                f"{o.word or ' '.join(f'{r},{c}' for r, c in o.path)}: {o.reason}"
                for o in turn.outcomes if not o.accepted
            ],
            "parse_errors": turn.parse_errors,
            "action_error": turn.error,
        }

    def step(self) -> TurnResult:
        """
        Execute a single turn: prompt, play the proposed paths, advance the clock.

        Returns:
            TurnResult containing the turn outcome
        """
        if self.session is None or self.player is None:
            raise ValueError("Bench not initialized. Use WordBench.create().")
        if self.is_complete:
            raise ValueError("Bench run is already complete")

        session = self.session
        turn_number = self.current_turn + 1
        prompt = build_player_prompt(
            board=session.board,
            turn_number=turn_number,
            score=session.score,
            level=session.level,
            remaining_seconds=session.remaining_seconds,
            min_word_length=minimum_word_length(session.level),
            **self._get_last_turn_feedback()
        )

        turn_result = TurnResult(turn_number=turn_number)
        try:
            parsed, usage = self.player.take_turn(prompt)
        except Exception as e:
            # An LLM failure costs the turn, not the run
            logger.warning("LLM call failed on turn %d: %s", turn_number, e)
            turn_result.error = f"LLM error: {str(e)}"
        else:
            turn_result.thinking = parsed.thinking
            turn_result.raw_response = parsed.raw_response
            turn_result.parse_errors = parsed.parse_errors
            turn_result.prompt_tokens = usage.get("prompt_tokens")
            turn_result.completion_tokens = usage.get("completion_tokens")
            turn_result.total_tokens = usage.get("total_tokens")
            if parsed.shuffle:
                session.shuffle()
                turn_result.shuffled = True
            for path in parsed.paths:
                if session.is_terminal:
                    break
                turn_result.outcomes.append(self.play_path(path))

        session.on_tick(int(self.config.seconds_per_turn * 1000))
        turn_result.score_after = session.score
        turn_result.level_after = session.level
        turn_result.remaining_seconds = session.remaining_seconds

        self.record_turn(turn_result)
        self.check_complete()
        return turn_result

    def record_turn(self, turn_result: TurnResult) -> None:
        self.turn_history.append(turn_result)
        self.current_turn += 1

    def check_complete(self) -> bool:
        """Finish the run on a terminal session or the turn limit, submitting stats once."""
        if self.session.is_terminal:
            self.is_complete = True
            self.end_reason = f"Match over: {self.session.terminal_reason}"
        elif self.current_turn >= self.config.max_turns:
            self.is_complete = True
            self.end_reason = f"Max turns ({self.config.max_turns}) reached"

        if self.is_complete and not self.stats_submitted:
            self.sink.submit(self.session.final_stats())
            self.stats_submitted = True
        return self.is_complete

    def get_result(self) -> BenchmarkResult:
        """Get the final bench result."""
        ended_at = datetime.now()
        duration = (ended_at - self.started_at).total_seconds() if self.started_at else 0.0

        return BenchmarkResult(
            config=self.config,
            final_stats=self.session.final_stats(),
            total_turns=self.current_turn,
            end_reason=self.end_reason,
            turn_history=self.turn_history,
            session_state=self.session.get_state(),
            conversation_history=self.player.llm_client.get_messages() if self.player.llm_client else [],
            started_at=self.started_at.isoformat() if self.started_at else "",
            ended_at=ended_at.isoformat(),
            duration_seconds=duration,
            total_prompt_tokens=sum(t.prompt_tokens or 0 for t in self.turn_history),
            total_completion_tokens=sum(t.completion_tokens or 0 for t in self.turn_history),
            total_tokens=sum(t.total_tokens or 0 for t in self.turn_history),
        )

    def save_result(self, path: str | Path) -> None:
        """Save the bench result to a JSON file."""
        result = self.get_result()
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, 'w') as f:
            json.dump(result.model_dump(), f, indent=2, default=str)

    def run(
        self,
        on_turn: Optional[Callable[[TurnResult], None]] = None,
        verbose: bool = False,
    ) -> BenchmarkResult:
        """
        Run turns until the match ends or the turn limit is reached.

        Args:
            on_turn: Optional callback called after each turn
            verbose: If True, print progress to stdout
        """
        if not self.started_at:
            self.setup()

        if verbose:
            print(f"Starting match for {self.player.name}")
            print(f"Max turns: {self.config.max_turns}")
            print(f"Clock: {self.session.remaining_seconds:.0f}s")
            print("-" * 40)

        while not self.is_complete:
            if verbose:
                print(f"\n{'='*60}")
                print(f"Turn {self.current_turn + 1}: score {self.session.score}, "
                      f"level {self.session.level}, {self.session.remaining_seconds:.0f}s left")
                print(render_board(self.session.board))
                print("-" * 60)
                print("Calling LLM...", end=" ", flush=True)

            turn_result = self.step()

            if verbose:
                print("done.\n")
                if turn_result.error:
                    print(f"ERROR: {turn_result.error}")
                if turn_result.shuffled:
                    print("Board shuffled")
                for outcome in turn_result.outcomes:
                    if outcome.accepted:
                        print(f"  + {outcome.word} ({outcome.points} pts)")
                    else:
                        print(f"  x {outcome.word or '?'}: {outcome.reason}")
                for err in turn_result.parse_errors[:3]:
                    print(f"  ? {err}")

            if on_turn:
                on_turn(turn_result)

        if verbose:
            print("-" * 40)
            print(f"Run complete: {self.end_reason}")
            print(f"Final score: {self.session.score} (level {self.session.level})")
            print(f"Words: {', '.join(self.session.found_words) or '(none)'}")

        return self.get_result()
