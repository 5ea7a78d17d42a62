"""
Main FastAPI application for the Kolam animator.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from kolam.api.routes import health, patterns
from kolam.api.websocket import router as websocket_router
from kolam.core.config import settings
from kolam.core.exceptions import InvalidPatternIndexError, KolamError
from kolam.core.logging import get_logger
from kolam.patterns.assembler import pattern_count

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator:
    """
    Application lifespan handler.
    Runs on startup and shutdown.
    """
    logger.info(
        "application_starting",
        app_name=settings.app_name,
        version=settings.app_version,
        env=settings.env,
        patterns=pattern_count()
    )

    yield

    logger.info("application_shutting_down")


app = FastAPI(
    title="Kolam Animator API",
    description="Procedural kolam motifs with timed, incremental playback",
    version=settings.app_version,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_allow_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(KolamError)
async def kolam_error_handler(request, exc: KolamError) -> JSONResponse:
    """Handle custom Kolam errors."""
    logger.error(
        "kolam_error",
        error_code=exc.code,
        message=exc.message,
        path=request.url.path
    )
    status_code = 404 if isinstance(exc, InvalidPatternIndexError) else 400
    return JSONResponse(
        status_code=status_code,
        content={
            "error": {
                "code": exc.code,
                "message": exc.message
            }
        }
    )


@app.exception_handler(Exception)
async def general_exception_handler(request, exc: Exception) -> JSONResponse:
    """Handle unexpected errors."""
    logger.exception(
        "unexpected_error",
        error_type=type(exc).__name__,
        path=request.url.path
    )

    if settings.is_development:
        return JSONResponse(
            status_code=500,
            content={
                "error": {
                    "code": "INTERNAL_ERROR",
                    "message": str(exc),
                    "type": type(exc).__name__
                }
            }
        )
    return JSONResponse(
        status_code=500,
        content={
            "error": {
                "code": "INTERNAL_ERROR",
                "message": "An unexpected error occurred"
            }
        }
    )


app.include_router(health.router, prefix="/api/v1", tags=["health"])
app.include_router(patterns.router, prefix="/api/v1", tags=["patterns"])
app.include_router(websocket_router, tags=["websocket"])


@app.get("/")
async def root():
    """Root endpoint with API information."""
    return {
        "app": settings.app_name,
        "version": settings.app_version,
        "status": "running",
        "environment": settings.env,
        "docs": "/docs",
        "api": {
            "health": "/api/v1/health",
            "patterns": "/api/v1/patterns",
            "motifs": "/api/v1/motifs",
            "websocket": "/ws/playback/{session_id}"
        }
    }


def run() -> None:
    """Serve the API with uvicorn."""
    import uvicorn

    uvicorn.run(
        "kolam.api.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.is_development,
        log_level=settings.log_level.lower()
    )


if __name__ == "__main__":
    run()
