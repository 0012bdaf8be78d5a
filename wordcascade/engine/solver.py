"""Hint search: find a playable word path on the current board."""

from typing import Callable, List, Optional, Set

from .board import BOARD_SIZE, EMPTY, Board, neighbors
from .dictionary import WordOracle
from .models import Coordinate


MAX_HINT_LENGTH = 8

# Without prefix pruning the search space explodes past this depth
UNPRUNED_MAX_LENGTH = 4


def find_word_path(
    board: Board,
    oracle: WordOracle,
    min_length: int = 3,
    max_length: int = MAX_HINT_LENGTH,
) -> Optional[List[Coordinate]]:
    """
    Depth-first search for a king-adjacent path that spells a dictionary word.

    Cells are tried in row-major order so the result is deterministic for a
    given board. Oracles exposing ``has_prefix`` prune dead branches; others
    are searched only up to four letters.

    Returns:
        The first path found, or None if the board holds no playable word
    """
    has_prefix: Optional[Callable[[str], bool]] = getattr(oracle, "has_prefix", None)
    if has_prefix is None:
        max_length = min(max_length, UNPRUNED_MAX_LENGTH)

    def dfs(path: List[Coordinate], word: str, visited: Set[Coordinate]) -> Optional[List[Coordinate]]:
        if len(word) >= min_length and oracle.contains(word):
            return list(path)
        if len(word) >= max_length:
            return None
        last = path[-1]
        for nxt in neighbors(last.row, last.col):
            letter = board[nxt.row][nxt.col]
            if letter == EMPTY or nxt in visited:
                continue
            candidate = word + letter
            if has_prefix is not None and not has_prefix(candidate):
                continue
            path.append(nxt)
            visited.add(nxt)
            found = dfs(path, candidate, visited)
            path.pop()
            visited.discard(nxt)
            if found:
                return found
        return None

    for row in range(BOARD_SIZE):
        for col in range(BOARD_SIZE):
            letter = board[row][col]
            if letter == EMPTY:
                continue
            if has_prefix is not None and not has_prefix(letter):
                continue
            start = Coordinate(row, col)
            found = dfs([start], letter, {start})
            if found:
                return found
    return None
