"""
FastAPI application factory.

Creates and configures the FastAPI application.
"""
from typing import Optional
import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from fastapi.responses import JSONResponse
from pymongo.errors import PyMongoError

from .lifespan import lifespan
from .logging_config import setup_logging
from .logging_middleware import RequestLoggingMiddleware
from studyshelf.config.settings import Settings, get_settings
from studyshelf.utils.exceptions import StudyShelfException, StorageError

logger = logging.getLogger(__name__)

API_VERSION = "1.0.0"


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Settings to use instead of the cached environment settings.

    Returns:
        Configured FastAPI application instance.
    """
    settings = settings or get_settings()
    settings.ensure_directories()
    setup_logging(
        log_level=settings.log_level,
        log_dir=settings.log_dir,
        log_json=settings.log_json,
    )

    app = FastAPI(
        title="StudyShelf API",
        description="""
        Study material sharing backend

        Features:
        - Categories for organizing study books
        - PDF upload with unique published codes (eduIT001, eduIT002, ...)
        - Book listing and lookup with downloadable file URLs
        """,
        version=API_VERSION,
        lifespan=lifespan
    )
    app.state.settings = settings

    upload_prefix = "/" + settings.upload_url_prefix.strip("/")

    # Request logging wraps everything, CORS included
    app.add_middleware(RequestLoggingMiddleware, skip_prefixes=(f"{upload_prefix}/",))

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["Content-Disposition", "X-Request-ID"],
    )

    _register_exception_handlers(app)
    _include_routers(app)
    _register_root_endpoints(app)

    app.mount(upload_prefix, StaticFiles(directory=str(settings.upload_dir)), name="uploads")

    return app


def _register_exception_handlers(app: FastAPI) -> None:
    """Map domain exceptions to JSON error responses."""

    @app.exception_handler(StudyShelfException)
    async def studyshelf_exception_handler(request: Request, exc: StudyShelfException):
        if exc.status_code >= 500:
            logger.error(f"{type(exc).__name__}: {exc} — {request.method} {request.url.path}")
        else:
            logger.warning(f"{type(exc).__name__}: {exc} — {request.method} {request.url.path}")
        return JSONResponse(status_code=exc.status_code, content={"detail": str(exc)})

    @app.exception_handler(PyMongoError)
    async def database_error_handler(request: Request, exc: PyMongoError):
        logger.error(
            f"Database error: {exc} — {request.method} {request.url.path}",
            exc_info=(type(exc), exc, exc.__traceback__)
        )
        return JSONResponse(status_code=500, content={"detail": str(StorageError())})


def _include_routers(app: FastAPI) -> None:
    """Include all API routers."""
    from studyshelf.routers import category_router, book_router

    app.include_router(category_router.router)
    app.include_router(book_router.router)


def _register_root_endpoints(app: FastAPI) -> None:
    """Register root and health endpoints."""
    from .dependencies import container

    @app.get("/")
    async def root():
        """Root endpoint with API information."""
        return {
            "name": "StudyShelf API",
            "version": API_VERSION,
            "description": "Study Material API is running",
            "endpoints": {
                "categories": "/api/categories",
                "books": "/api/books",
                "upload": "/api/upload",
                "docs": "/docs"
            }
        }

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        connected = container.base_repo is not None and container.base_repo.is_connected
        return {
            "status": "healthy" if connected else "degraded",
            "services": {
                "mongodb": "connected" if connected else "disconnected",
            }
        }
