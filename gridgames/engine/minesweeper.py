"""Minesweeper rules on a fixed 5x5 board."""

import random
import time
from collections import deque
from collections.abc import Callable, Iterable, Sequence

from gridgames.engine.board import (
    CellState,
    Emphasis,
    GameStatus,
    Tile,
    adjacent_indices,
    count_adjacent_bombs,
)
from gridgames.engine.errors import CellAlreadyRevealed, InvariantViolation, NotYourGame

BOARD_SIDE = 5
BOARD_CELLS = BOARD_SIDE * BOARD_SIDE

HIDDEN_LABEL = " "
BOMB_LABEL = "\U0001f4a3"
EXPLODED_LABEL = "\U0001f4a5"


def generate_board(mines: int, safe_index: int, rng: random.Random) -> list[CellState]:
    """
    Lay out a fresh board.

    Args:
        mines: Number of bombs to place
        safe_index: Cell that must not hold a bomb (the first click)
        rng: Random source used to pick bomb positions

    Returns:
        Flat board with exactly ``mines`` bombs
    """
    candidates = [i for i in range(BOARD_CELLS) if i != safe_index]
    board = [CellState.SAFE] * BOARD_CELLS
    for i in rng.sample(candidates, mines):
        board[i] = CellState.BOMB
    return board


def flood_fill(board: Sequence[CellState], seeds: Iterable[int]) -> set[int]:
    """
    Expand a set of cells through zero-count regions.

    Every cell with no adjacent bombs pulls in its safe neighbours; numbered
    cells are kept but do not spread. The result is a fixed point, so
    feeding it back in returns the same set.
    """
    filled = set(seeds)
    queue = deque(filled)
    while queue:
        index = queue.popleft()
        if count_adjacent_bombs(board, index) != 0:
            continue
        for neighbor in adjacent_indices(index, BOARD_SIDE):
            if neighbor not in filled and board[neighbor] is CellState.SAFE:
                filled.add(neighbor)
                queue.append(neighbor)
    return filled


class MinesweeperGame:
    """Single-player minesweeper session owned by one player."""

    def __init__(
        self,
        owner: str,
        mines: int,
        rng: random.Random | None = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        if not 0 <= mines < BOARD_CELLS:
            raise ValueError(f"mines must be between 0 and {BOARD_CELLS - 1}, got {mines}")
        self.owner = owner
        self.mines = mines
        self.side = BOARD_SIDE
        self.board: list[CellState] | None = None
        self.status = GameStatus.NOT_STARTED
        self.start_time: float | None = None
        self.selected: int | None = None
        self.exploded: int | None = None
        self.last_revealed: set[int] = set()
        self._rng = rng or random.Random()
        self._clock = clock

    def reveal(self, index: int, player: str) -> GameStatus:
        """
        Reveal a cell on behalf of ``player``.

        The board is generated on the first reveal so the first click is
        never a bomb.

        Returns:
            The status after the reveal

        Raises:
            NotYourGame: If ``player`` does not own this game
            CellAlreadyRevealed: If the cell was already checked
            InvariantViolation: If the game has already ended
        """
        if player != self.owner:
            raise NotYourGame("That's not your game! Start your own with /minesweeper.")
        if self.status.is_terminal:
            raise InvariantViolation("Game has already finished", index=index)

        if self.board is None:
            self.board = generate_board(self.mines, index, self._rng)
            self.start_time = self._clock()
            self.status = GameStatus.IN_PROGRESS

        cell = self.board[index]
        if cell is CellState.CHECKED:
            raise CellAlreadyRevealed("Revealed cell selected which should be disabled", index=index)

        self.selected = index
        if cell is CellState.BOMB:
            self.exploded = index
            self.last_revealed = set()
            self.status = GameStatus.LOST
            return self.status

        self.last_revealed = {i for i in flood_fill(self.board, [index]) if self.board[i] is CellState.SAFE}
        for i in self.last_revealed:
            self.board[i] = CellState.CHECKED

        if self.safe_remaining() == 0:
            self.status = GameStatus.WON
        return self.status

    def safe_remaining(self) -> int:
        """Safe cells not yet revealed."""
        if self.board is None:
            return BOARD_CELLS - self.mines
        return sum(1 for cell in self.board if cell is CellState.SAFE)

    def elapsed(self) -> float:
        """Seconds since the first reveal."""
        if self.start_time is None:
            return 0.0
        return self._clock() - self.start_time

    def render(self) -> list[Tile]:
        """Render every cell as a tile, row-major."""
        if self.board is None:
            return [Tile(HIDDEN_LABEL) for _ in range(BOARD_CELLS)]

        game_over = self.status.is_terminal
        selected_style = Emphasis.SUCCESS if self.status is GameStatus.WON else Emphasis.HIGHLIGHTED
        tiles = []
        for index, cell in enumerate(self.board):
            if cell is CellState.CHECKED:
                style = selected_style if index == self.selected else Emphasis.NEUTRAL
                tiles.append(Tile(str(count_adjacent_bombs(self.board, index)), style, disabled=True))
            elif cell is CellState.BOMB and game_over:
                if index == self.exploded:
                    tiles.append(Tile(EXPLODED_LABEL, Emphasis.DANGER, disabled=True))
                else:
                    tiles.append(Tile(BOMB_LABEL, Emphasis.NEUTRAL, disabled=True))
            else:
                tiles.append(Tile(HIDDEN_LABEL, Emphasis.NEUTRAL, disabled=game_over))
        return tiles
