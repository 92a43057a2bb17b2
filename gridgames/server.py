#!/usr/bin/env python3
"""
Entry point for running the grid games server.
"""

import argparse
import logging

import uvicorn

from gridgames.game_server.config import config
from gridgames.game_server.logging_config import setup_logging

logger = logging.getLogger(__name__)


def main():
    """Main entry point for the game server."""
    parser = argparse.ArgumentParser(description="Run the grid games server")
    parser.add_argument(
        "--host",
        type=str,
        default="127.0.0.1",
        help="Host to bind to (default: 127.0.0.1)",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=8000,
        help="Port to bind to (default: 8000)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=config.log_level,
        help=f"Logging level (default: {config.log_level})",
    )
    parser.add_argument(
        "--reload",
        action="store_true",
        help="Enable auto-reload for development",
    )

    args = parser.parse_args()
    setup_logging(args.log_level.upper())

    if config.session_ttl is None:
        logger.info("Idle session expiry disabled")
    else:
        logger.info("Idle sessions expire after %.0fs", config.session_ttl)
    logger.info("Starting server on http://%s:%d", args.host, args.port)

    uvicorn.run(
        "gridgames.game_server.main:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_config=None,
    )


if __name__ == "__main__":
    main()
