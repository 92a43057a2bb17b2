"""Pydantic models for the grid games API."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from gridgames.engine.board import Emphasis


class GameKind(str, Enum):
    """Game types a session can hold."""

    MINESWEEPER = "minesweeper"
    TICTACTOE = "tictactoe"


class OutcomeKind(str, Enum):
    """What an action did to its session."""

    STARTED = "started"
    UPDATED = "updated"
    FINISHED = "finished"
    REJECTED = "rejected"
    IGNORED = "ignored"
    EXPIRED = "expired"


class CellView(BaseModel):
    """A single clickable cell."""

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "examples": [
                {"custom_id": "tictactoe-3f9a1c2b7d4e5f60-4", "label": "❌", "style": "highlighted", "disabled": True}
            ]
        },
    )

    custom_id: str = Field(..., description="Routes a click back to this cell: <kind>-<session_id>-<index>")
    label: str = Field(..., description="Text or emoji shown on the cell")
    style: Emphasis = Field(Emphasis.NEUTRAL, description="Emphasis style")
    disabled: bool = Field(False, description="Whether the cell can be clicked")


class GameResponse(BaseModel):
    """Rendered result of starting a game or applying an action."""

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {
                    "outcome": "updated",
                    "kind": "tictactoe",
                    "session_id": "3f9a1c2b7d4e5f60",
                    "content": "bob's turn.",
                    "components": [
                        [
                            {"custom_id": "tictactoe-3f9a1c2b7d4e5f60-0", "label": " ", "style": "neutral", "disabled": False},
                            {"custom_id": "tictactoe-3f9a1c2b7d4e5f60-1", "label": "❌", "style": "highlighted", "disabled": True},
                        ]
                    ],
                    "ephemeral": False,
                },
                {
                    "outcome": "rejected",
                    "kind": "tictactoe",
                    "session_id": "3f9a1c2b7d4e5f60",
                    "content": "It's not your turn! Wait for the other player to make a move.",
                    "components": [],
                    "ephemeral": True,
                },
            ]
        }
    )

    outcome: OutcomeKind = Field(..., description="Result of the action")
    kind: GameKind | None = Field(None, description="Game type of the session")
    session_id: str | None = Field(None, description="Session the action applied to")
    content: str = Field(..., description="Status text to show above the board")
    components: list[list[CellView]] = Field(default_factory=list, description="Rows of cells, top to bottom")
    ephemeral: bool = Field(False, description="Show only to the acting player, leaving the board untouched")


class StartMinesweeperRequest(BaseModel):
    """Request to start a minesweeper game."""

    model_config = ConfigDict(json_schema_extra={"examples": [{"player_id": "alice", "mines": 3}]})

    player_id: str = Field(..., min_length=1, description="Player who owns the game")
    mines: int = Field(3, ge=1, le=23, description="Number of mines")


class StartTictactoeRequest(BaseModel):
    """Request to start a tic-tac-toe game."""

    model_config = ConfigDict(json_schema_extra={"examples": [{"player_id": "alice", "size": 3}]})

    player_id: str = Field(..., min_length=1, description="Player who starts the game and plays X")
    size: int = Field(3, ge=2, le=5, description="Side length of the board")


class InteractionRequest(BaseModel):
    """A click on a rendered cell or the join button."""

    model_config = ConfigDict(
        json_schema_extra={"examples": [{"custom_id": "tictactoe-3f9a1c2b7d4e5f60-4", "player_id": "bob"}]}
    )

    custom_id: str = Field(..., description="Id of the clicked component")
    player_id: str = Field(..., min_length=1, description="Player who clicked")


class SessionSummary(BaseModel):
    """Admin view of a live session."""

    session_id: str
    kind: GameKind
    status: str
    created_at: datetime
    idle_seconds: float


class ErrorResponse(BaseModel):
    """Generic error response."""

    model_config = ConfigDict(json_schema_extra={"examples": [{"detail": "Malformed component id"}]})

    detail: str = Field(..., description="Error message")
