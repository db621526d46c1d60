"""Run the shopsplit API server.

Usage:
    python -m shopsplit.api
    shopsplit-api
"""

import logging

import uvicorn

from shopsplit.api.config import config

_LOGGER = logging.getLogger(__name__)


def main() -> None:
    """Serve ``shopsplit.api.main:app`` with uvicorn."""
    if not config.api_token:
        _LOGGER.warning("SHOPSPLIT_API_TOKEN is not set; every protected endpoint will answer 503")

    uvicorn.run(
        "shopsplit.api.main:app",
        host=config.host,
        port=config.port,
        reload=config.reload,
        log_level=config.log_level,
    )


if __name__ == "__main__":
    main()
