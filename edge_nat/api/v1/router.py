"""
API v1 router.
"""
from fastapi import APIRouter

from edge_nat.api.v1.endpoints import health, nat

api_router = APIRouter()

# Health check endpoint (no prefix, so it's /api/v1/health)
api_router.include_router(health.router, tags=["health"])

api_router.include_router(nat.router, prefix="/nat", tags=["nat"])
