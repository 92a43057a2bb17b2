"""In-memory session store guarded by a single lock."""

import logging
import time
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from datetime import UTC, datetime
from threading import RLock

from gridgames.engine.minesweeper import MinesweeperGame
from gridgames.engine.tictactoe import TictactoeGame
from gridgames.game_server.config import config
from gridgames.game_server.models import GameKind

logger = logging.getLogger(__name__)

Game = MinesweeperGame | TictactoeGame


@dataclass
class SessionEntry:
    """A live game tagged with its kind."""

    kind: GameKind
    game: Game
    last_active: float
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))


class SessionStore:
    """
    Maps session ids to live games.

    One lock covers the whole map. Callers hold it via ``locked()`` for the
    full read-modify-write of an action; it is reentrant so the individual
    operations can be called inside that scope.
    """

    def __init__(self, ttl_seconds: float | None = None, clock: Callable[[], float] = time.monotonic):
        self._sessions: dict[str, SessionEntry] = {}
        self._lock = RLock()
        self.ttl_seconds = ttl_seconds
        self._clock = clock

    @contextmanager
    def locked(self) -> Iterator["SessionStore"]:
        """Hold the store lock for the duration of the block."""
        with self._lock:
            yield self

    def create(self, session_id: str, kind: GameKind, game: Game) -> SessionEntry:
        """
        Store a game, replacing any session already at ``session_id``.

        Args:
            session_id: Unique session identifier
            kind: Game type tag
            game: The game state

        Returns:
            The stored entry
        """
        with self._lock:
            self._evict_expired()
            entry = SessionEntry(kind=kind, game=game, last_active=self._clock())
            self._sessions[session_id] = entry
            return entry

    def get(self, session_id: str, kind: GameKind | None = None) -> SessionEntry | None:
        """
        Get a live session by ID, refreshing its idle timer.

        Args:
            session_id: Session to look up
            kind: If given, a session of any other kind counts as missing
                and its idle timer is left alone

        Returns:
            The entry, or None if there is no matching session
        """
        with self._lock:
            self._evict_expired()
            entry = self._sessions.get(session_id)
            if entry is None or (kind is not None and entry.kind is not kind):
                return None
            entry.last_active = self._clock()
            return entry

    def remove(self, session_id: str) -> bool:
        """
        Remove a session.

        Returns:
            True if removed, False if not found
        """
        with self._lock:
            return self._sessions.pop(session_id, None) is not None

    def list_sessions(self) -> dict[str, SessionEntry]:
        """Snapshot of all live sessions."""
        with self._lock:
            self._evict_expired()
            return dict(self._sessions)

    def idle_seconds(self, entry: SessionEntry) -> float:
        return self._clock() - entry.last_active

    def prune_expired(self) -> list[str]:
        """Evict idle sessions now and return their ids."""
        with self._lock:
            return self._evict_expired()

    def clear(self) -> None:
        with self._lock:
            self._sessions.clear()

    def _evict_expired(self) -> list[str]:
        if self.ttl_seconds is None:
            return []
        cutoff = self._clock() - self.ttl_seconds
        expired = [sid for sid, entry in self._sessions.items() if entry.last_active < cutoff]
        for sid in expired:
            entry = self._sessions.pop(sid)
            logger.info("Evicted idle %s session %s", entry.kind.value, sid)
        return expired


# Global session store instance
session_store = SessionStore(ttl_seconds=config.session_ttl)
