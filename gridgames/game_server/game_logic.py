"""Routes player actions to live sessions and renders the results."""

import logging
import random
import secrets
from collections.abc import Callable
from dataclasses import dataclass

from gridgames.engine.board import Emphasis, GameStatus, Tile
from gridgames.engine.errors import (
    InvariantViolation,
    MalformedAction,
    PlayerError,
    SessionExpired,
)
from gridgames.engine.minesweeper import MinesweeperGame
from gridgames.engine.tictactoe import TictactoeGame
from gridgames.game_server.models import CellView, GameKind, GameResponse, OutcomeKind
from gridgames.game_server.store import Game, SessionStore

logger = logging.getLogger(__name__)

JOIN_TARGET = "join"

EXPIRED_MESSAGES = {
    GameKind.MINESWEEPER: "This game has expired, start a new one with /minesweeper.",
    GameKind.TICTACTOE: "This game has expired, start a new one with /tictactoe.",
}


def new_session_id() -> str:
    return secrets.token_hex(8)


def component_id(kind: GameKind, session_id: str, target: int | str) -> str:
    """Build the custom id that routes a click back to one cell."""
    return f"{kind.value}-{session_id}-{target}"


def parse_component_id(custom_id: str) -> tuple[GameKind, str, int | None]:
    """
    Split a component id into its routing parts.

    Args:
        custom_id: Id of the form ``<kind>-<session_id>-<index|join>``

    Returns:
        Tuple of (kind, session_id, cell index); the index is None for the join button

    Raises:
        MalformedAction: If the id cannot be parsed
    """
    parts = custom_id.split("-")
    if len(parts) != 3 or not parts[1]:
        raise MalformedAction(f"Malformed component id {custom_id!r}")
    raw_kind, session_id, target = parts

    try:
        kind = GameKind(raw_kind)
    except ValueError as e:
        raise MalformedAction(f"Unknown game kind {raw_kind!r}") from e

    if target == JOIN_TARGET:
        if kind is not GameKind.TICTACTOE:
            raise MalformedAction(f"{kind.value} games cannot be joined")
        return kind, session_id, None
    if not (target.isascii() and target.isdigit()):
        raise MalformedAction(f"Missing cell index in component id {custom_id!r}")
    try:
        index = int(target)
    except ValueError as e:
        raise MalformedAction(f"Missing cell index in component id {custom_id!r}") from e
    return kind, session_id, index


def describe(game: Game) -> str:
    """Status line shown above the board."""
    if isinstance(game, MinesweeperGame):
        if game.status is GameStatus.NOT_STARTED:
            return (
                f"{game.owner} started a game of minesweeper with {game.mines} mines. "
                "Clear every safe tile without hitting one!"
            )
        if game.status is GameStatus.WON:
            return f"{game.owner} cleared the board in {game.elapsed():.1f}s!"
        if game.status is GameStatus.LOST:
            return (
                f"Boom! {game.owner} hit a mine with {game.safe_remaining()} safe tiles left "
                f"after {game.elapsed():.1f}s."
            )
        return f"{game.safe_remaining()} safe tiles left."

    if game.status is GameStatus.AWAITING_OPPONENT:
        return f"{game.player1} has started a game of tic-tac-toe! Who would like to play?"
    if game.status is GameStatus.WON:
        return f"{game.winner} won in {game.elapsed():.1f}s!"
    if game.status is GameStatus.TIED:
        return "It's a tie!"
    return f"{game.current_player}'s turn."


@dataclass
class BoardSnapshot:
    """Everything needed to render a response, captured while the store is locked."""

    outcome: OutcomeKind
    kind: GameKind
    session_id: str
    content: str
    tiles: list[Tile]
    side: int
    awaiting_join: bool = False

    @classmethod
    def capture(cls, outcome: OutcomeKind, kind: GameKind, session_id: str, game: Game) -> "BoardSnapshot":
        return cls(
            outcome=outcome,
            kind=kind,
            session_id=session_id,
            content=describe(game),
            tiles=game.render(),
            side=game.side,
            awaiting_join=game.status is GameStatus.AWAITING_OPPONENT,
        )

    def to_response(self) -> GameResponse:
        if self.awaiting_join:
            components = [
                [
                    CellView(
                        custom_id=component_id(self.kind, self.session_id, JOIN_TARGET),
                        label="Join",
                        style=Emphasis.SUCCESS,
                    )
                ]
            ]
        else:
            components = [
                [
                    CellView(
                        custom_id=component_id(self.kind, self.session_id, index),
                        label=tile.label,
                        style=tile.style,
                        disabled=tile.disabled,
                    )
                    for index, tile in enumerate(self.tiles[row * self.side : (row + 1) * self.side], row * self.side)
                ]
                for row in range(self.side)
            ]
        return GameResponse(
            outcome=self.outcome,
            kind=self.kind,
            session_id=self.session_id,
            content=self.content,
            components=components,
        )


class GameDispatcher:
    """Starts games and applies player actions against a session store."""

    def __init__(self, store: SessionStore, rng: random.Random | None = None):
        self.store = store
        self._rng = rng

    def start_minesweeper(self, player: str, mines: int) -> GameResponse:
        """
        Start a minesweeper game owned by ``player``.

        Raises:
            ValueError: If ``mines`` does not fit on the board
        """
        game = MinesweeperGame(player, mines, rng=self._rng)
        return self._start(GameKind.MINESWEEPER, game)

    def start_tictactoe(self, player: str, size: int) -> GameResponse:
        """
        Start a tic-tac-toe game waiting for an opponent.

        Raises:
            ValueError: If ``size`` is too small
        """
        game = TictactoeGame(player, size)
        return self._start(GameKind.TICTACTOE, game)

    def join_tictactoe(self, session_id: str, player: str) -> GameResponse:
        """Seat ``player`` as the opponent in a waiting tic-tac-toe game."""
        return self._act(GameKind.TICTACTOE, session_id, None, lambda game: game.join(player))

    def apply_action(self, kind: GameKind, session_id: str, index: int, player: str) -> GameResponse:
        """
        Apply a cell click to a session.

        Args:
            kind: Game type the click was rendered for
            session_id: Session the click belongs to
            index: Flat index of the clicked cell
            player: Player who clicked

        Returns:
            Rendered outcome; player errors come back as ephemeral rejections

        Raises:
            MalformedAction: If ``index`` is outside the board
        """
        if kind is GameKind.MINESWEEPER:
            action = lambda game: game.reveal(index, player)  # noqa: E731
        else:
            action = lambda game: game.play(index, player)  # noqa: E731
        return self._act(kind, session_id, index, action)

    def handle_component(self, custom_id: str, player: str) -> GameResponse:
        """Parse a component id and route the click to its session."""
        kind, session_id, index = parse_component_id(custom_id)
        if index is None:
            return self.join_tictactoe(session_id, player)
        return self.apply_action(kind, session_id, index, player)

    def _start(self, kind: GameKind, game: Game) -> GameResponse:
        session_id = new_session_id()
        with self.store.locked():
            self.store.create(session_id, kind, game)
            snapshot = BoardSnapshot.capture(OutcomeKind.STARTED, kind, session_id, game)
        logger.info("Started %s session %s", kind.value, session_id)
        return snapshot.to_response()

    def _act(
        self,
        kind: GameKind,
        session_id: str,
        index: int | None,
        action: Callable[[Game], object],
    ) -> GameResponse:
        try:
            with self.store.locked():
                entry = self.store.get(session_id, kind)
                if entry is None:
                    raise SessionExpired(EXPIRED_MESSAGES[kind], session_id=session_id)
                game = entry.game
                if index is not None and not 0 <= index < game.side * game.side:
                    raise MalformedAction(f"Cell index {index} is outside the board")

                try:
                    action(game)
                except InvariantViolation as e:
                    logger.warning("Ignored action on %s session %s: %s", kind.value, session_id, e.message)
                    snapshot = BoardSnapshot.capture(OutcomeKind.IGNORED, kind, session_id, game)
                else:
                    if game.status.is_terminal:
                        self.store.remove(session_id)
                        logger.info("%s session %s ended: %s", kind.value, session_id, game.status.value)
                        snapshot = BoardSnapshot.capture(OutcomeKind.FINISHED, kind, session_id, game)
                    else:
                        snapshot = BoardSnapshot.capture(OutcomeKind.UPDATED, kind, session_id, game)
        except SessionExpired as e:
            logger.debug("No live %s session %s", kind.value, session_id)
            return GameResponse(outcome=OutcomeKind.EXPIRED, kind=kind, session_id=session_id, content=e.message)
        except PlayerError as e:
            logger.debug("Rejected action on %s session %s: %s", kind.value, session_id, e.error_code)
            return GameResponse(
                outcome=OutcomeKind.REJECTED,
                kind=kind,
                session_id=session_id,
                content=e.message,
                ephemeral=True,
            )

        return snapshot.to_response()
