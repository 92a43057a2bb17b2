"""Grid Games Server - FastAPI application."""

from typing import Annotated

from fastapi import Depends, FastAPI, HTTPException, Path, status
from fastapi.middleware.cors import CORSMiddleware

from gridgames.engine.errors import MalformedAction
from gridgames.game_server.auth import verify_api_key
from gridgames.game_server.game_logic import GameDispatcher
from gridgames.game_server.models import (
    ErrorResponse,
    GameResponse,
    InteractionRequest,
    SessionSummary,
    StartMinesweeperRequest,
    StartTictactoeRequest,
)
from gridgames.game_server.store import session_store

dispatcher = GameDispatcher(session_store)

# Create FastAPI app
app = FastAPI(
    title="Grid Games Server",
    description="Minesweeper and tic-tac-toe sessions driven by cell clicks",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/", tags=["Health"])
async def root():
    """Health check endpoint."""
    return {"status": "ok", "service": "Grid Games Server"}


@app.post(
    "/api/minesweeper",
    response_model=GameResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        201: {"description": "Game started"},
        401: {"model": ErrorResponse, "description": "Invalid API key"},
    },
    tags=["Games"],
)
async def start_minesweeper(
    request: StartMinesweeperRequest,
    _api_key: Annotated[str, Depends(verify_api_key)],
) -> GameResponse:
    """
    Start a minesweeper game.

    The board is laid out on the first click, so the first revealed cell is
    never a mine.
    """
    return dispatcher.start_minesweeper(request.player_id, request.mines)


@app.post(
    "/api/tictactoe",
    response_model=GameResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        201: {"description": "Game started, waiting for an opponent"},
        401: {"model": ErrorResponse, "description": "Invalid API key"},
    },
    tags=["Games"],
)
async def start_tictactoe(
    request: StartTictactoeRequest,
    _api_key: Annotated[str, Depends(verify_api_key)],
) -> GameResponse:
    """
    Start a tic-tac-toe game.

    The response holds a single Join button; the board appears once another
    player joins.
    """
    return dispatcher.start_tictactoe(request.player_id, request.size)


@app.post(
    "/api/interaction",
    response_model=GameResponse,
    status_code=status.HTTP_200_OK,
    responses={
        200: {"description": "Interaction processed (check outcome field for result)"},
        400: {"model": ErrorResponse, "description": "Malformed component id"},
        401: {"model": ErrorResponse, "description": "Invalid API key"},
    },
    tags=["Games"],
)
async def handle_interaction(
    request: InteractionRequest,
    _api_key: Annotated[str, Depends(verify_api_key)],
) -> GameResponse:
    """
    Apply a click on a rendered component.

    Player mistakes (wrong turn, someone else's game) come back as
    ephemeral ``rejected`` outcomes; unknown sessions come back as
    ``expired`` with no components.
    """
    try:
        return dispatcher.handle_component(request.custom_id, request.player_id)
    except MalformedAction as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message) from e


@app.get(
    "/api/admin/sessions",
    tags=["Admin"],
    response_model=list[SessionSummary],
)
async def list_sessions(
    _api_key: Annotated[str, Depends(verify_api_key)],
) -> list[SessionSummary]:
    """List live sessions (admin/debug endpoint)."""
    return [
        SessionSummary(
            session_id=session_id,
            kind=entry.kind,
            status=entry.game.status.value,
            created_at=entry.created_at,
            idle_seconds=session_store.idle_seconds(entry),
        )
        for session_id, entry in session_store.list_sessions().items()
    ]


@app.delete(
    "/api/admin/session/{session_id}",
    tags=["Admin"],
    status_code=status.HTTP_204_NO_CONTENT,
)
async def delete_session(
    session_id: Annotated[str, Path(description="Session ID to delete")],
    _api_key: Annotated[str, Depends(verify_api_key)],
) -> None:
    """Delete a session (admin/debug endpoint)."""
    if not session_store.remove(session_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Session not found")
