"""Server configuration read from the environment."""

import os
from dataclasses import dataclass


@dataclass
class ServerConfig:
    """Configuration for the game server."""

    # Shared secret expected in the X-API-Key header
    api_key: str = "dev-api-key-changeme"

    # Idle sessions older than this are evicted; None keeps them forever
    session_ttl: float | None = 3600.0

    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "ServerConfig":
        """Build a config from GRIDGAMES_* environment variables."""
        ttl = float(os.getenv("GRIDGAMES_SESSION_TTL", str(cls.session_ttl)))
        return cls(
            api_key=os.getenv("GRIDGAMES_API_KEY", cls.api_key),
            session_ttl=ttl if ttl > 0 else None,
            log_level=os.getenv("GRIDGAMES_LOG_LEVEL", cls.log_level).upper(),
        )


config = ServerConfig.from_env()
