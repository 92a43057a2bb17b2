"""Grid primitives shared by the minesweeper and tic-tac-toe rules.

Boards are flat lists indexed by ``row * side + col``.
"""

import math
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum


class CellState(str, Enum):
    """Minesweeper cell contents."""

    SAFE = "safe"
    CHECKED = "checked"
    BOMB = "bomb"


class GameStatus(str, Enum):
    """Lifecycle of a single game session."""

    NOT_STARTED = "not_started"
    AWAITING_OPPONENT = "awaiting_opponent"
    IN_PROGRESS = "in_progress"
    WON = "won"
    LOST = "lost"
    TIED = "tied"

    @property
    def is_terminal(self) -> bool:
        return self in (GameStatus.WON, GameStatus.LOST, GameStatus.TIED)


class Emphasis(str, Enum):
    """How strongly a rendered cell should stand out."""

    NEUTRAL = "neutral"
    DANGER = "danger"
    SUCCESS = "success"
    HIGHLIGHTED = "highlighted"


@dataclass(frozen=True)
class Tile:
    """Presentation-agnostic description of one rendered cell."""

    label: str
    style: Emphasis = Emphasis.NEUTRAL
    disabled: bool = False


def side_of(board: Sequence[object]) -> int:
    """Side length of a square flat board."""
    side = math.isqrt(len(board))
    if side * side != len(board):
        raise ValueError(f"Board of {len(board)} cells is not square")
    return side


def adjacent_indices(index: int, side: int) -> list[int]:
    """Indices in the Moore neighborhood of ``index``, clipped at the edges."""
    row, col = divmod(index, side)
    neighbors = []
    for r in range(max(row - 1, 0), min(row + 2, side)):
        for c in range(max(col - 1, 0), min(col + 2, side)):
            if r != row or c != col:
                neighbors.append(r * side + c)
    return neighbors


def count_adjacent_bombs(board: Sequence[CellState], index: int) -> int:
    """Number of bombs touching ``index``."""
    side = side_of(board)
    return sum(1 for i in adjacent_indices(index, side) if board[i] is CellState.BOMB)


def _row(row: int, side: int) -> list[int]:
    return [row * side + c for c in range(side)]


def _column(col: int, side: int) -> list[int]:
    return [r * side + col for r in range(side)]


def _main_diagonal(side: int) -> list[int]:
    return [i * side + i for i in range(side)]


def _anti_diagonal(side: int) -> list[int]:
    return [i * side + (side - 1 - i) for i in range(side)]


def win_lines(side: int) -> list[list[int]]:
    """Every candidate winning line on a ``side x side`` board."""
    lines = [_row(r, side) for r in range(side)]
    lines.extend(_column(c, side) for c in range(side))
    lines.append(_main_diagonal(side))
    lines.append(_anti_diagonal(side))
    return lines


def lines_through(index: int, side: int) -> list[list[int]]:
    """
    Winning lines that pass through ``index``.

    Ordered row, column, main diagonal, anti-diagonal, so at most four
    lines are returned.
    """
    row, col = divmod(index, side)
    lines = [_row(row, side), _column(col, side)]
    if row == col:
        lines.append(_main_diagonal(side))
    if col == side - 1 - row:
        lines.append(_anti_diagonal(side))
    return lines


def winning_line(board: Sequence[object | None], index: int, side: int) -> list[int] | None:
    """
    Find a completed line through ``index``.

    Args:
        board: Flat board of marks, ``None`` for empty cells
        index: Cell that was just played
        side: Board side length

    Returns:
        The first line whose cells all hold the same mark, or None
    """
    mark = board[index]
    if mark is None:
        return None
    for line in lines_through(index, side):
        if all(board[i] == mark for i in line):
            return line
    return None
