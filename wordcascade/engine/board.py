"""Board value type and the mutation pipeline: gravity, cleared-column detection, constriction."""

import random
from typing import Iterable, Iterator, List, Tuple

from .models import Coordinate


BOARD_SIZE = 8
EMPTY = ""

# A board is BOARD_SIZE rows of BOARD_SIZE cells; EMPTY marks a cell without a letter
Board = List[List[str]]


def empty_board() -> Board:
    """Create an 8x8 board with every cell empty."""
    return [[EMPTY] * BOARD_SIZE for _ in range(BOARD_SIZE)]


def board_from_rows(rows: List[str], empty: str = ".") -> Board:
    """
    Build a board from 8 strings of 8 characters each.

    Raises:
        ValueError: If the rows do not describe an 8x8 board
    """
    if len(rows) != BOARD_SIZE or any(len(row) != BOARD_SIZE for row in rows):
        raise ValueError(f"Board must be {BOARD_SIZE} rows of {BOARD_SIZE} characters")
    return [
        [EMPTY if ch == empty else ch.upper() for ch in row]
        for row in rows
    ]


def copy_board(board: Board) -> Board:
    return [list(row) for row in board]


def has_valid_shape(board: Board) -> bool:
    """True when the board is exactly BOARD_SIZE x BOARD_SIZE."""
    return len(board) == BOARD_SIZE and all(len(row) == BOARD_SIZE for row in board)


def in_bounds(row: int, col: int) -> bool:
    return 0 <= row < BOARD_SIZE and 0 <= col < BOARD_SIZE


def neighbors(row: int, col: int) -> Iterator[Coordinate]:
    """Yield the up-to-8 king-adjacent cells around (row, col), clamped to the board."""
    for dr in (-1, 0, 1):
        for dc in (-1, 0, 1):
            if dr == 0 and dc == 0:
                continue
            r, c = row + dr, col + dc
            if in_bounds(r, c):
                yield Coordinate(r, c)


def filled_count(board: Board) -> int:
    return sum(1 for row in board for cell in row if cell != EMPTY)


def fill_ratio(board: Board) -> float:
    """Fraction of cells currently holding a letter."""
    return filled_count(board) / float(BOARD_SIZE * BOARD_SIZE)


def letters_on_board(board: Board) -> List[str]:
    return [cell for row in board for cell in row if cell != EMPTY]


def clear_cells(board: Board, cells: Iterable[Coordinate]) -> Board:
    """Return a copy of the board with the given cells emptied."""
    new_board = copy_board(board)
    for row, col in cells:
        new_board[row][col] = EMPTY
    return new_board


def fall(board: Board) -> Board:
    """
    Apply gravity column by column.

    Letters are compacted toward the bottom row (highest index) keeping
    their relative order; every vacated cell above them becomes empty.
    The input board is not modified.
    """
    new_board = copy_board(board)
    for col in range(BOARD_SIZE):
        write_row = BOARD_SIZE - 1
        for row in range(BOARD_SIZE - 1, -1, -1):
            if new_board[row][col] != EMPTY:
                if write_row != row:
                    new_board[write_row][col] = new_board[row][col]
                    new_board[row][col] = EMPTY
                write_row -= 1
    return new_board


def is_column_empty(board: Board, col: int) -> bool:
    return all(board[row][col] == EMPTY for row in range(BOARD_SIZE))


def cleared_columns(board: Board) -> List[int]:
    """Indices of the columns with no letters at all."""
    return [col for col in range(BOARD_SIZE) if is_column_empty(board, col)]


def edge_distance(col: int) -> int:
    """Distance from a column to the nearer of the left or right board edge."""
    return min(col, BOARD_SIZE - 1 - col)


def _shift_column(board: Board, src: int, dst: int) -> None:
    for row in range(BOARD_SIZE):
        board[row][dst] = board[row][src]


def _empty_column(board: Board, col: int) -> None:
    for row in range(BOARD_SIZE):
        board[row][col] = EMPTY


def constrict(board: Board, columns: Iterable[int]) -> Board:
    """
    Pull the outer columns inward over each cleared column.

    For every cleared column, the columns between it and its nearer edge
    move one step toward it and the edge column on that side is emptied.
    Columns are handled nearest-to-edge first, each against the board as
    left by the previous shifts, so stacked clearings do not skip a column.
    The grid keeps its 8x8 shape; only letters move.

    Args:
        board: Board after gravity
        columns: Cleared column indices (from ``cleared_columns``)

    Returns:
        A new board with the shifts applied
    """
    new_board = copy_board(board)
    last = BOARD_SIZE - 1
    for col in sorted(set(columns), key=lambda c: (edge_distance(c), c)):
        if col <= last - col:
            # Nearer the left edge: columns 0..col-1 slide right
            for dst in range(col, 0, -1):
                _shift_column(new_board, dst - 1, dst)
            _empty_column(new_board, 0)
        else:
            # Nearer the right edge: columns col+1..last slide left
            for dst in range(col, last):
                _shift_column(new_board, dst + 1, dst)
            _empty_column(new_board, last)
    return new_board


def settle(board: Board) -> Tuple[Board, List[int]]:
    """
    Run the post-commit pipeline: gravity, cleared-column detection, constriction.

    Returns:
        Tuple of (new board, cleared column indices that were constricted)
    """
    fallen = fall(board)
    columns = cleared_columns(fallen)
    if not columns:
        return fallen, columns
    return constrict(fallen, columns), columns


def reshuffle(board: Board, rng: random.Random) -> Board:
    """
    Shuffle every letter on the board and repack them from the bottom up.

    Empty cells end up at the top of the board, filled ones below.
    """
    letters = letters_on_board(board)
    rng.shuffle(letters)
    cells = [EMPTY] * (BOARD_SIZE * BOARD_SIZE - len(letters)) + letters
    return [cells[row * BOARD_SIZE:(row + 1) * BOARD_SIZE] for row in range(BOARD_SIZE)]


def render_board(board: Board, empty: str = ".") -> str:
    """Render the board as text, one row per line."""
    return "\n".join(
        " ".join(cell if cell != EMPTY else empty for cell in row)
        for row in board
    )
