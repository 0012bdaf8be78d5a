"""Tile selection: king adjacency and the click-driven selection state machine."""

from typing import List, Literal, Sequence, Tuple

from .board import in_bounds
from .models import Coordinate, InvariantViolation


# Paths shorter than this are dropped at commit without being looked up
MIN_COMMIT_LENGTH = 3

SelectionState = Literal["idle", "building"]

# append:  the click extends the path
# finish:  the click ends the path (repeat or last tile) and nothing new starts
# restart: the click ends the path and starts a new one at the clicked tile
ClickAction = Literal["append", "finish", "restart"]


def is_adjacent(a: Coordinate, b: Coordinate) -> bool:
    """True when two cells touch in one of the 8 directions (Chebyshev distance 1)."""
    return max(abs(a[0] - b[0]), abs(a[1] - b[1])) == 1


def validate_path(path: Sequence[Coordinate]) -> List[str]:
    """
    Check the selection-path contract.

    Returns:
        List of problems found; empty when the path is well formed
    """
    problems: List[str] = []
    seen = set()
    for i, (row, col) in enumerate(path):
        if not in_bounds(row, col):
            problems.append(f"({row}, {col}) is outside the board")
        if (row, col) in seen:
            problems.append(f"({row}, {col}) appears more than once")
        seen.add((row, col))
        if i > 0 and not is_adjacent(path[i - 1], (row, col)):
            problems.append(f"({row}, {col}) is not adjacent to {tuple(path[i - 1])}")
    return problems


class SelectionStateMachine:
    """
    Turns tile clicks into an in-progress path or a path ready to commit.

    Two states: ``idle`` (empty path) and ``building``. The machine only
    tracks coordinates; the session decides what a committed path spells
    and whether it scores. A committed path is handed out exactly once and
    never kept afterwards.
    """

    def __init__(self):
        self._path: List[Coordinate] = []

    @property
    def path(self) -> List[Coordinate]:
        return list(self._path)

    @property
    def state(self) -> SelectionState:
        return "building" if self._path else "idle"

    def __len__(self) -> int:
        return len(self._path)

    def classify(self, coord: Coordinate) -> ClickAction:
        """Decide what a click at ``coord`` would do without changing state."""
        coord = Coordinate(*coord)
        if not self._path:
            return "append"
        last = self._path[-1]
        if coord == last or coord in self._path:
            return "finish"
        if not is_adjacent(last, coord):
            return "restart"
        return "append"

    def click(self, coord: Coordinate) -> Tuple[ClickAction, List[Coordinate]]:
        """
        Apply a tile click.

        Returns:
            Tuple of (action taken, path to commit). The path is empty when
            the click only extended the selection.
        """
        coord = Coordinate(*coord)
        if not in_bounds(*coord):
            raise InvariantViolation(f"Click at {tuple(coord)} is outside the board")
        action = self.classify(coord)
        if action == "append":
            self._path.append(coord)
            return action, []
        committed = self.take()
        if action == "restart":
            self._path.append(coord)
        return action, committed

    def take(self) -> List[Coordinate]:
        """Hand out the current path for commit and return to idle."""
        committed, self._path = self._path, []
        return committed

    def clear(self) -> None:
        self._path = []
