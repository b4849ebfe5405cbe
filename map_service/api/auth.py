"""
API Key Authentication

FastAPI dependencies that gate map endpoints behind static API keys.
SetMap needs the read-write key; every other map endpoint accepts either key.
"""

import secrets
from typing import Optional

import structlog
from fastapi import HTTPException, Request, status

from ..config_loader import AuthConfig

logger = structlog.get_logger(__name__)


def _matches(candidate: str, expected: Optional[str]) -> bool:
    if not expected:
        return False
    return secrets.compare_digest(candidate.encode(), expected.encode())


class ApiKeyGuard:
    """Checks the API key header against the configured keys."""

    def __init__(self, config: AuthConfig):
        self.config = config

    def _extract_key(self, request: Request) -> str:
        api_key = request.headers.get(self.config.header_name)
        if not api_key:
            logger.warning("API key missing", path=request.url.path)
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail=f"API Key is missing. Please provide {self.config.header_name} header.",
            )
        return api_key

    async def require_read(self, request: Request) -> None:
        """Allow callers holding the read or the read-write key."""
        if not self.config.enabled:
            return

        api_key = self._extract_key(request)
        if not (
            _matches(api_key, self.config.read_key)
            or _matches(api_key, self.config.read_write_key)
        ):
            logger.warning("Invalid API key", path=request.url.path, access="read")
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Invalid API Key. FS_Read or FS_ReadWrite key required.",
            )

    async def require_write(self, request: Request) -> None:
        """Allow only callers holding the read-write key."""
        if not self.config.enabled:
            return

        api_key = self._extract_key(request)
        if not _matches(api_key, self.config.read_write_key):
            logger.warning("Invalid API key", path=request.url.path, access="write")
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Invalid API Key or insufficient permissions. FS_ReadWrite key required.",
            )
