"""
CMS API - FastAPI Application

Main entry point for the FastAPI application.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from cms.config import get_settings
from cms.core.database import close_db, init_db
from cms.core.exceptions import CMSError, UnauthorizedError
from cms.routers import contents_router, document_types_router, health_router

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)

# Suppress noisy third-party loggers
logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
logging.getLogger("uvicorn.access").setLevel(logging.WARNING)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan manager.

    Handles startup and shutdown events.
    """
    # Startup
    logger.info("Starting CMS API...")
    settings = get_settings()
    logging.getLogger("cms").setLevel(settings.log_level.upper())

    logger.info("Initializing database connection...")
    await init_db()
    logger.info("Database connection established")

    logger.info(f"CMS API started in {settings.environment} mode")

    yield

    # Shutdown
    logger.info("Shutting down CMS API...")
    await close_db()
    logger.info("CMS API shutdown complete")


async def cms_error_handler(request: Request, exc: CMSError) -> JSONResponse:
    """Map domain errors to their HTTP status and JSON error body."""
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, UnauthorizedError) else None
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict(), headers=headers)


def create_app(use_lifespan: bool = True) -> FastAPI:
    """
    Create and configure FastAPI application.

    Args:
        use_lifespan: Run database startup/shutdown hooks (tests manage
            their own engine and pass False)

    Returns:
        Configured FastAPI application instance
    """
    settings = get_settings()

    app = FastAPI(
        title="CMS API",
        description="Multi-tenant headless CMS: document types, form schemas and content",
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan if use_lifespan else None,
        debug=settings.debug,
    )

    app.add_exception_handler(CMSError, cms_error_handler)  # type: ignore[arg-type]

    # Register routers
    app.include_router(health_router)
    app.include_router(document_types_router)
    app.include_router(contents_router)

    # Root endpoint
    @app.get("/")
    async def root():
        return {
            "name": "CMS API",
            "version": "1.0.0",
            "docs": "/docs",
        }

    return app


# Create app instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "cms.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.is_development,
    )
