"""Bearer token check shared by every list and split endpoint."""

import logging
import secrets

from fastapi import HTTPException, Security, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from shopsplit.api.config import config

_LOGGER = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False, description="Value of SHOPSPLIT_API_TOKEN")


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def verify_token(
    credentials: HTTPAuthorizationCredentials | None = Security(bearer_scheme),
) -> str:
    """Return the caller's token if it matches ``SHOPSPLIT_API_TOKEN``.

    Raises:
        HTTPException: 503 while no token is configured, 401 for a missing
            or wrong token.
    """
    if not config.api_token:
        _LOGGER.warning("Rejecting request: SHOPSPLIT_API_TOKEN is not set")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="shopsplit has no API token configured; set SHOPSPLIT_API_TOKEN",
        )

    if credentials is None:
        raise _unauthorized("Bearer token required")

    if not secrets.compare_digest(credentials.credentials.encode(), config.api_token.encode()):
        raise _unauthorized("Bearer token does not match")

    return credentials.credentials
