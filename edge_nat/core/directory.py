"""
Gateway directory dependency for the API.
"""
import logging
from functools import lru_cache
from typing import Optional

from fastapi import HTTPException, status

from edge_nat.core.config import settings
from edge_nat.services.gateway_directory import StaticGatewayDirectory

logger = logging.getLogger(__name__)


@lru_cache
def load_gateway_directory(path: str) -> StaticGatewayDirectory:
    """Load (once per path) the static gateway directory."""
    return StaticGatewayDirectory.from_file(path)


def configured_gateway_directory() -> Optional[StaticGatewayDirectory]:
    """Return the configured directory, or None when GATEWAY_DIRECTORY_FILE is unset."""
    if not settings.GATEWAY_DIRECTORY_FILE:
        return None
    return load_gateway_directory(settings.GATEWAY_DIRECTORY_FILE)


def get_gateway_directory() -> StaticGatewayDirectory:
    """
    Dependency providing the gateway directory.

    Raises:
        HTTPException: 503 if no directory is configured or it cannot be loaded
    """
    try:
        directory = configured_gateway_directory()
    except (OSError, ValueError) as e:
        logger.error(f"Failed to load gateway directory: {e}")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Gateway directory could not be loaded"
        )

    if directory is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Gateway directory is not configured (set GATEWAY_DIRECTORY_FILE)"
        )
    return directory
