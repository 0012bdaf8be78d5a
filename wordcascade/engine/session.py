"""
MatchSession: the aggregate root for one game.

The session owns the board, the rare-letter tracker, the selection state
machine, score, level and timer. Hosts drive it through a handful of entry
points (``click``, ``submit``, ``clear_selection``, ``on_tick``,
``on_inactivity_timeout``) and read the events each call returns. Every call
runs to completion before the next one is accepted; there are no internal
timers or threads.
"""

import logging
import random
from typing import Callable, Dict, List, Optional, Sequence

from pydantic import BaseModel, ConfigDict, Field

from .board import (
    EMPTY,
    Board,
    clear_cells,
    copy_board,
    empty_board,
    fill_ratio,
    filled_count,
    in_bounds,
    letters_on_board,
    reshuffle,
    settle,
)
from .dictionary import WordOracle
from .generator import BoardGenerator
from .letters import RareLetterTracker, is_rare
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
from .scoring import LevelProgression, minimum_word_length, time_bonus
from .scoring import score as word_score
from .selection import MIN_COMMIT_LENGTH, SelectionStateMachine, validate_path
from .solver import find_word_path


logger = logging.getLogger(__name__)

EventListener = Callable[[EngineEvent], None]


class MatchSession(BaseModel):
    """
    State and rules for a single match.

    Attributes:
        config: Session tunables
        board: The 8x8 letter grid
        tracker: Rare letters currently on the board
        progression: Current and highest level
        score: Running score
        remaining_seconds: Countdown, clamped to [0, initial timer]
        found_words: Accepted words in order (duplicates allowed)
        is_terminal: Whether the match has ended
        terminal_reason: Why it ended, once it has
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    config: SessionConfig = Field(default_factory=SessionConfig)
    board: Board = Field(default_factory=empty_board)
    tracker: RareLetterTracker = Field(default_factory=RareLetterTracker)
    progression: LevelProgression = Field(default_factory=LevelProgression)
    score: int = Field(default=0, ge=0)
    remaining_seconds: float = 0.0
    found_words: List[str] = Field(default_factory=list)
    is_terminal: bool = False
    terminal_reason: Optional[str] = None
    freeze_ms: int = 0
    had_letters: bool = False
    _rng: random.Random = None
    _oracle: Optional[WordOracle] = None
    _selection: SelectionStateMachine = None
    _listeners: List[EventListener] = None

    def model_post_init(self, __context) -> None:
        self._rng = random.Random(self.config.seed)
        self._selection = SelectionStateMachine()
        self._listeners = []

    @classmethod
    def create(
        cls,
        oracle: Optional[WordOracle] = None,
        config: Optional[SessionConfig] = None,
        **config_kwargs,
    ) -> "MatchSession":
        """
        Factory: build a session, attach the dictionary and deal a fresh board.

        Args:
            oracle: Word-membership oracle; may still be loading
            config: Optional SessionConfig instance
            **config_kwargs: Config parameters if config not provided
        """
        if config is None:
            config = SessionConfig(**config_kwargs)
        session = cls(config=config)
        session.attach_oracle(oracle)
        session.start()
        return session

    def attach_oracle(self, oracle: Optional[WordOracle]) -> None:
        self._oracle = oracle

    def subscribe(self, listener: EventListener) -> None:
        """Register a callback invoked synchronously for every emitted event."""
        self._listeners.append(listener)

    def start(self) -> List[EngineEvent]:
        """Reset all match state and generate a new board."""
        self._rng = random.Random(self.config.seed)
        self.tracker.reset()
        self.board = BoardGenerator(self.tracker, self._rng).generate()
        self.progression = LevelProgression()
        self.score = 0
        self.remaining_seconds = float(self.config.initial_timer_seconds)
        self.found_words = []
        self.is_terminal = False
        self.terminal_reason = None
        self.freeze_ms = 0
        self.had_letters = filled_count(self.board) > 0
        self._selection.clear()
        logger.info("Match started: %d rare letters on board", self.tracker.size())
        return [self._emit(BoardChanged(board=copy_board(self.board)))]

    # ------------------------------------------------------------------
    # Read-only views

    @property
    def level(self) -> int:
        return self.progression.level

    @property
    def selection(self) -> List[Coordinate]:
        return self._selection.path

    @property
    def selection_state(self) -> str:
        return self._selection.state

    @property
    def inactivity_armed(self) -> bool:
        """True while a path is in progress; the host should schedule ``on_inactivity_timeout``."""
        return self._selection.state == "building"

    @property
    def inactivity_timeout_ms(self) -> int:
        """How long the host waits after the last click before calling ``on_inactivity_timeout``."""
        return self.config.inactivity_timeout_ms

    @property
    def dictionary_ready(self) -> bool:
        return self._oracle is not None and getattr(self._oracle, "is_loaded", True)

    def current_word(self) -> str:
        return self._word_for(self._selection.path)

    # ------------------------------------------------------------------
    # Host entry points

    def click(self, row: int, col: int) -> List[EngineEvent]:
        """
        Handle a tile click.

        Extends the path, or commits it when the click repeats a selected
        tile or jumps to a non-adjacent one (which also starts a new path).
        Clicks on empty cells are ignored.
        """
        if self.is_terminal:
            return []
        if not in_bounds(row, col):
            return self._violation(f"Click at ({row}, {col}) is outside the board")
        coord = Coordinate(row, col)
        if self.board[row][col] == EMPTY:
            logger.debug("Ignoring click on empty cell %s", tuple(coord))
            return []

        action = self._selection.classify(coord)
        if action != "append" and self._refuse_unavailable():
            return [self._emit(self._unavailable())]

        clicked = self.board[row][col]
        action, committed = self._selection.click(coord)
        events = self._commit(committed) if committed else []
        if action == "restart" and self.board[row][col] != clicked:
            # The clicked tile moved during the commit
            self._selection.clear()
        logger.debug("Click %s -> %s, path=%s", tuple(coord), action, self._selection.path)
        return events

    def submit(self) -> List[EngineEvent]:
        """Commit the current path now."""
        if self.is_terminal or self._selection.state == "idle":
            return []
        if self._refuse_unavailable():
            return [self._emit(self._unavailable())]
        return self._commit(self._selection.take())

    def on_inactivity_timeout(self) -> List[EngineEvent]:
        """Host callback when the player has paused long enough; auto-commits the path."""
        return self.submit()

    def clear_selection(self) -> None:
        """Discard the in-progress path without committing it."""
        self._selection.clear()

    def commit_path(self, path: Sequence[Coordinate]) -> List[EngineEvent]:
        """
        Commit a whole path at once, bypassing click-by-click selection.

        The path must satisfy the selection contract (distinct, in-bounds,
        king-adjacent cells holding letters). A malformed path is a host bug.
        """
        if self.is_terminal:
            return []
        path = [Coordinate(*c) for c in path]
        problems = validate_path(path)
        if problems:
            return self._violation("; ".join(problems))
        if len(path) >= MIN_COMMIT_LENGTH and not self.dictionary_ready:
            return [self._emit(self._unavailable())]
        self._selection.clear()
        return self._commit(path)

    def on_tick(self, elapsed_ms: int) -> List[EngineEvent]:
        """
        Advance the countdown by ``elapsed_ms``.

        Frozen time is spent first. Any pending level-up is re-evaluated here
        so multi-threshold jumps complete one level per tick.
        """
        if self.is_terminal:
            return []
        if elapsed_ms < 0:
            return self._violation(f"Negative tick: {elapsed_ms}ms")

        frozen = min(self.freeze_ms, elapsed_ms)
        self.freeze_ms -= frozen
        elapsed_ms -= frozen
        self.remaining_seconds = max(0.0, self.remaining_seconds - elapsed_ms / 1000.0)

        events: List[EngineEvent] = []
        new_level = self.progression.evaluate(self.score)
        if new_level is not None:
            events.append(self._emit(LevelUp(new_level=new_level)))
        if self.remaining_seconds <= 0:
            events.extend(self._enter_terminal("timer_expired"))
        return events

    def freeze(self, duration_ms: int) -> None:
        """Pause the countdown for the next ``duration_ms`` of ticks."""
        if self.is_terminal:
            return
        if duration_ms < 0:
            self._violation(f"Negative freeze: {duration_ms}ms")
            return
        self.freeze_ms += duration_ms

    def shuffle(self) -> List[EngineEvent]:
        """
        Shuffle the remaining letters and repack them from the bottom.

        The selection is discarded and the rare-letter tracker is rebuilt
        from what is left on the board.
        """
        if self.is_terminal:
            return []
        self._selection.clear()
        shuffled, cleared = settle(reshuffle(self.board, self._rng))
        self.board = shuffled
        self.tracker.reset()
        for letter in letters_on_board(self.board):
            if is_rare(letter):
                self.tracker.record(letter)
        logger.info("Board shuffled: %d letters", filled_count(self.board))
        return [self._emit(BoardChanged(board=copy_board(self.board), cleared_columns=cleared))]

    def hint(self) -> Optional[List[Coordinate]]:
        """Find a path on the board spelling a currently acceptable word, if any."""
        if self.is_terminal or not self.dictionary_ready:
            return None
        return find_word_path(self.board, self._oracle, minimum_word_length(self.level))

    # ------------------------------------------------------------------
    # Results

    def final_stats(self) -> FinalStats:
        return FinalStats(
            final_score=self.score,
            found_words=list(self.found_words),
            highest_level_reached=self.progression.highest_level,
        )

    def get_state(self) -> Dict:
        """
        Get the current session state as a dictionary.

        Useful for serialization and logging.
        """
        return {
            "score": self.score,
            "level": self.level,
            "remaining_seconds": round(self.remaining_seconds, 3),
            "found_words": list(self.found_words),
            "words_found": len(self.found_words),
            "filled_cells": filled_count(self.board),
            "fill_ratio": round(fill_ratio(self.board), 4),
            "rare_letters": sorted(self.tracker.letters),
            "selection": [list(c) for c in self._selection.path],
            "dictionary_ready": self.dictionary_ready,
            "is_terminal": self.is_terminal,
            "terminal_reason": self.terminal_reason,
        }

    # ------------------------------------------------------------------
    # Internals

    def _emit(self, event: EngineEvent) -> EngineEvent:
        for listener in self._listeners:
            listener(event)
        return event

    def _violation(self, message: str) -> List[EngineEvent]:
        if self.config.strict:
            raise InvariantViolation(message)
        logger.warning("Ignoring contract violation: %s", message)
        return []

    def _refuse_unavailable(self) -> bool:
        """True when a commit of the current path must wait for the dictionary."""
        return len(self._selection) >= MIN_COMMIT_LENGTH and not self.dictionary_ready

    @staticmethod
    def _unavailable() -> WordRejected:
        return WordRejected(
            reason="dictionary_unavailable",
            message="Dictionary is still loading; selection kept",
        )

    def _word_for(self, path: Sequence[Coordinate]) -> str:
        return "".join(self.board[r][c] for r, c in path)

    def _commit(self, path: List[Coordinate]) -> List[EngineEvent]:
        if len(path) < MIN_COMMIT_LENGTH:
            logger.debug("Discarding short path of %d tiles", len(path))
            return []
        if any(self.board[r][c] == EMPTY for r, c in path):
            return self._violation(f"Path {path} includes empty cells")

        word = self._word_for(path)
        level = self.level
        min_length = minimum_word_length(level)
        if len(word) < min_length:
            return [self._emit(WordRejected(
                reason="too_short",
                message=f"'{word}' is shorter than {min_length} letters",
                word=word,
            ))]
        if not self._oracle.contains(word):
            logger.debug("Rejected %s", word)
            return [self._emit(WordRejected(
                reason="not_in_dictionary",
                message=f"'{word}' is not a valid dictionary word",
                word=word,
            ))]

        points = word_score(word, level)
        bonus = time_bonus(len(word), level)
        self.found_words.append(word)
        self.score += points
        self.remaining_seconds = min(
            float(self.config.initial_timer_seconds),
            self.remaining_seconds + bonus,
        )
        logger.debug("Accepted %s for %d points, +%ds", word, points, bonus)
        events: List[EngineEvent] = [self._emit(WordAccepted(
            word=word, points_awarded=points, time_bonus=bonus, path=list(path),
        ))]

        new_level = self.progression.evaluate(self.score)
        if new_level is not None:
            events.append(self._emit(LevelUp(new_level=new_level)))

        events.append(self._remove_word(path))
        if self.had_letters and fill_ratio(self.board) < self.config.min_fill_ratio:
            events.extend(self._enter_terminal("board_depleted"))
        return events

    def _remove_word(self, path: List[Coordinate]) -> EngineEvent:
        used = {self.board[r][c] for r, c in path}
        board = clear_cells(self.board, path)
        remaining = set(letters_on_board(board))
        for letter in used:
            # Another copy may still be on the board
            if is_rare(letter) and letter not in remaining:
                self.tracker.release(letter)
        self.board, cleared = settle(board)
        if filled_count(self.board) > 0:
            self.had_letters = True
        return self._emit(BoardChanged(board=copy_board(self.board), cleared_columns=cleared))

    def _enter_terminal(self, reason: str) -> List[EngineEvent]:
        if self.is_terminal:
            return []
        self.is_terminal = True
        self.terminal_reason = reason
        self._selection.clear()
        logger.info("Match over (%s): score=%d level=%d words=%d",
                    reason, self.score, self.level, len(self.found_words))
        return [self._emit(SessionTerminal(reason=reason, final_stats=self.final_stats()))]
