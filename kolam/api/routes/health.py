"""
Health check endpoints.
"""

from fastapi import APIRouter

from kolam.core.config import settings
from kolam.patterns.assembler import pattern_count

router = APIRouter()


@router.get("/health")
async def health_check():
    """
    System health check endpoint.

    Returns system status and basic diagnostics.
    """
    return {
        "status": "healthy",
        "app_name": settings.app_name,
        "version": settings.app_version,
        "environment": settings.env,
        "components": {
            "pattern_table": {
                "status": "loaded",
                "patterns": pattern_count()
            },
            "playback": {
                "base_tick_ms": settings.base_tick_ms,
                "floor_tick_ms": settings.floor_tick_ms
            }
        }
    }
