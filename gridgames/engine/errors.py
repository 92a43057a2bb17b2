"""Exception hierarchy for game rule violations.

Player errors are recoverable and shown privately to whoever clicked.
Invariant violations mean the caller offered an action the board should
have disabled; they are logged and ignored.
"""

from typing import Any


class GameError(Exception):
    """Base exception for all game errors."""

    error_code: str = "GAME_ERROR"

    def __init__(self, message: str, **kwargs: Any):
        super().__init__(message)
        self.message = message
        self.__dict__.update(kwargs)

    def to_dict(self) -> dict[str, Any]:
        """Convert error to a serializable dict."""
        result: dict[str, Any] = {
            "error_type": self.__class__.__name__,
            "error_code": self.error_code,
            "message": self.message,
        }
        result.update({k: v for k, v in self.__dict__.items() if k != "message"})
        return result


class PlayerError(GameError):
    """A player tried something the rules do not allow them to do."""

    error_code = "PLAYER_ERROR"


class NotYourGame(PlayerError):
    """Raised when the acting player is not a participant."""

    error_code = "NOT_YOUR_GAME"


class NotYourTurn(PlayerError):
    """Raised when a participant acts out of turn."""

    error_code = "NOT_YOUR_TURN"


class SelfJoin(PlayerError):
    """Raised when a player tries to join their own game."""

    error_code = "SELF_JOIN"


class AlreadyJoined(PlayerError):
    """Raised when a second opponent tries to join."""

    error_code = "ALREADY_JOINED"


class SessionExpired(PlayerError):
    """Raised when no live session exists for an id."""

    error_code = "SESSION_EXPIRED"

    def __init__(self, message: str, session_id: str | None = None, **kwargs: Any):
        super().__init__(message, session_id=session_id, **kwargs)


class MalformedAction(GameError):
    """Raised when an action payload cannot be routed to a cell."""

    error_code = "MALFORMED_ACTION"


class InvariantViolation(GameError):
    """Raised when an action targets a cell the board should have disabled."""

    error_code = "INVARIANT_VIOLATION"

    def __init__(self, message: str, index: int | None = None, **kwargs: Any):
        super().__init__(message, index=index, **kwargs)


class CellAlreadyRevealed(InvariantViolation):
    """Raised when a revealed minesweeper cell is selected again."""

    error_code = "CELL_ALREADY_REVEALED"


class CellOccupied(InvariantViolation):
    """Raised when a filled tic-tac-toe cell is selected again."""

    error_code = "CELL_OCCUPIED"


__all__ = [
    "GameError",
    "PlayerError",
    "NotYourGame",
    "NotYourTurn",
    "SelfJoin",
    "AlreadyJoined",
    "SessionExpired",
    "MalformedAction",
    "InvariantViolation",
    "CellAlreadyRevealed",
    "CellOccupied",
]
