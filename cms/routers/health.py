"""
Health Router

Liveness check. Does not touch the database.
"""

from fastapi import APIRouter

from cms.config import get_settings

router = APIRouter(tags=["Health"])


@router.get("/health", summary="Liveness check")
async def health() -> dict[str, str]:
    return {"status": "healthy", "environment": get_settings().environment}
