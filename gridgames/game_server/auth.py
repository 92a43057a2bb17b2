"""Shared-secret check for the platform glue calling the game server."""

from typing import Annotated

from fastapi import Header, HTTPException, status

from gridgames.game_server.config import config


async def verify_api_key(x_api_key: Annotated[str, Header()]) -> str:
    """
    Reject callers that do not present the configured GRIDGAMES_API_KEY.

    Only the bot process relaying clicks should hold the key; players never
    talk to the server directly, so their ids travel in the request body.

    Raises:
        HTTPException: 401 if the X-API-Key header does not match
    """
    if x_api_key != config.api_key:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="X-API-Key does not match GRIDGAMES_API_KEY",
        )
    return x_api_key
