"""
Application lifespan management.

Handles startup and shutdown events.
"""
from contextlib import asynccontextmanager
from fastapi import FastAPI
import logging

from .dependencies import container

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    Initializes all components at startup and cleans up at shutdown.
    """
    # Startup
    logger.info("Starting StudyShelf API...")
    await container.initialize(getattr(app.state, "settings", None))
    logger.info("StudyShelf API started successfully")

    yield

    # Shutdown
    logger.info("Shutting down StudyShelf API...")
    await container.shutdown()
    logger.info("StudyShelf API shutdown complete")
