"""
API Routers
"""

from cms.routers.contents import router as contents_router
from cms.routers.document_types import router as document_types_router
from cms.routers.health import router as health_router

__all__ = [
    "contents_router",
    "document_types_router",
    "health_router",
]
