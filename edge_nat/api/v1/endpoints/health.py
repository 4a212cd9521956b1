"""
Health check endpoint for monitoring and diagnostics.
"""
import logging
from fastapi import APIRouter, HTTPException, status

from edge_nat.core.config import settings
from edge_nat.core.directory import configured_gateway_directory

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/health")
async def health_check():
    """
    Health check endpoint that verifies:
    - API is running
    - Gateway directory (if configured) can be loaded

    Returns:
        {
            "ok": true,
            "directory": true,
            "gateways": 2,
            "environment": "local"
        }
    """
    try:
        directory = configured_gateway_directory()
    except (OSError, ValueError) as e:
        logger.error(f"Gateway directory health check failed: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Gateway directory could not be loaded"
        )

    return {
        "ok": True,
        "directory": directory is not None,
        "gateways": len(directory.gateway_ids()) if directory is not None else 0,
        "environment": settings.APP_ENV,
    }
