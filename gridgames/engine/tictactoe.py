"""Two-player tic-tac-toe on an N x N board."""

import time
from collections.abc import Callable
from enum import Enum

from gridgames.engine.board import Emphasis, GameStatus, Tile, winning_line
from gridgames.engine.errors import (
    AlreadyJoined,
    CellOccupied,
    InvariantViolation,
    NotYourGame,
    NotYourTurn,
    SelfJoin,
)

EMPTY_LABEL = " "


class Mark(str, Enum):
    """Player marks. X always moves first."""

    X = "X"
    O = "O"  # noqa: E741

    @property
    def other(self) -> "Mark":
        return Mark.O if self is Mark.X else Mark.X

    @property
    def symbol(self) -> str:
        return "❌" if self is Mark.X else "⭕"


class TictactoeGame:
    """Tic-tac-toe session between the player who started it and one opponent."""

    def __init__(self, player1: str, size: int = 3, clock: Callable[[], float] = time.monotonic):
        if size < 2:
            raise ValueError(f"size must be at least 2, got {size}")
        self.player1 = player1
        self.player2: str | None = None
        self.size = size
        self.board: list[Mark | None] = [None] * (size * size)
        self.turn = Mark.X
        self.status = GameStatus.AWAITING_OPPONENT
        self.start_time: float | None = None
        self.last_move: int | None = None
        self.winning_line: list[int] | None = None
        self._clock = clock

    @property
    def side(self) -> int:
        return self.size

    @property
    def current_player(self) -> str | None:
        """Player holding the current turn mark."""
        return self.player1 if self.turn is Mark.X else self.player2

    @property
    def winner(self) -> str | None:
        if self.status is not GameStatus.WON:
            return None
        return self.current_player

    def join(self, candidate: str) -> None:
        """
        Seat ``candidate`` as the second player and start the game.

        Raises:
            SelfJoin: If ``candidate`` started this game
            AlreadyJoined: If an opponent has already joined
        """
        if candidate == self.player1:
            raise SelfJoin("You can't join your own game! Find someone else to play with.")
        if self.player2 is not None:
            raise AlreadyJoined("Someone already joined this game! You can create your own with /tictactoe.")
        self.player2 = candidate
        self.start_time = self._clock()
        self.status = GameStatus.IN_PROGRESS

    def play(self, index: int, player: str) -> GameStatus:
        """
        Place the current mark at ``index``.

        Returns:
            The status after the move

        Raises:
            NotYourGame: If ``player`` is not seated in this game
            NotYourTurn: If it is the other player's turn
            CellOccupied: If the cell already holds a mark
            InvariantViolation: If the game is not in progress
        """
        if player not in (self.player1, self.player2):
            raise NotYourGame("That's not your game! Create your own with /tictactoe.")
        if self.status is not GameStatus.IN_PROGRESS:
            raise InvariantViolation(f"Move received while game is {self.status.value}", index=index)
        if player != self.current_player:
            raise NotYourTurn("It's not your turn! Wait for the other player to make a move.")
        if self.board[index] is not None:
            raise CellOccupied("Filled cell selected which should be disabled", index=index)

        self.board[index] = self.turn
        self.last_move = index

        line = winning_line(self.board, index, self.size)
        if line is not None:
            self.winning_line = line
            self.status = GameStatus.WON
        elif all(cell is not None for cell in self.board):
            self.status = GameStatus.TIED
        else:
            self.turn = self.turn.other
        return self.status

    def elapsed(self) -> float:
        """Seconds since the opponent joined."""
        if self.start_time is None:
            return 0.0
        return self._clock() - self.start_time

    def render(self) -> list[Tile]:
        """Render every cell as a tile, row-major."""
        game_over = self.status.is_terminal
        if self.winning_line is not None:
            highlighted, style = set(self.winning_line), Emphasis.SUCCESS
        elif self.last_move is not None:
            highlighted, style = {self.last_move}, Emphasis.HIGHLIGHTED
        else:
            highlighted, style = set(), Emphasis.HIGHLIGHTED

        tiles = []
        for index, mark in enumerate(self.board):
            emphasis = style if index in highlighted else Emphasis.NEUTRAL
            if mark is not None:
                tiles.append(Tile(mark.symbol, emphasis, disabled=True))
            else:
                tiles.append(Tile(EMPTY_LABEL, emphasis, disabled=game_over))
        return tiles
