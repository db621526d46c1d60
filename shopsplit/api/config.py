"""API server settings.

All settings come from ``SHOPSPLIT_*`` environment variables (a ``.env``
file in the project root is loaded by ``shopsplit.core.config``):

    SHOPSPLIT_HOST          bind address (default 127.0.0.1)
    SHOPSPLIT_PORT          port (default 8420)
    SHOPSPLIT_API_TOKEN     bearer token; the API refuses requests without one
    SHOPSPLIT_RELOAD        auto-reload on code changes (development)
    SHOPSPLIT_CORS_ORIGINS  comma-separated allowed origins (default: any)
    SHOPSPLIT_LOG_LEVEL     uvicorn log level (default info)
"""

import os
from dataclasses import dataclass, field

import shopsplit.core.config  # noqa: F401  loads .env before the settings are read

DEFAULT_PORT = 8420


def _env_flag(name: str) -> bool:
    return os.getenv(name, "").strip().lower() in ("true", "1", "yes", "on")


def _env_list(name: str) -> list[str]:
    return [part.strip() for part in os.getenv(name, "").split(",") if part.strip()]


@dataclass
class APIConfig:
    """Settings for the shopsplit API server."""

    host: str = "127.0.0.1"
    port: int = DEFAULT_PORT
    api_token: str | None = None
    reload: bool = False
    cors_origins: list[str] = field(default_factory=list)
    log_level: str = "info"

    @classmethod
    def from_env(cls) -> "APIConfig":
        """Read the settings from ``SHOPSPLIT_*`` environment variables."""
        return cls(
            host=os.getenv("SHOPSPLIT_HOST", "127.0.0.1"),
            port=int(os.getenv("SHOPSPLIT_PORT", str(DEFAULT_PORT))),
            api_token=os.getenv("SHOPSPLIT_API_TOKEN") or None,
            reload=_env_flag("SHOPSPLIT_RELOAD"),
            cors_origins=_env_list("SHOPSPLIT_CORS_ORIGINS"),
            log_level=os.getenv("SHOPSPLIT_LOG_LEVEL", "info").strip().lower(),
        )


config = APIConfig.from_env()
