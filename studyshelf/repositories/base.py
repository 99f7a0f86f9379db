"""
Base repository with common MongoDB operations.
"""
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from typing import Optional
import logging

from studyshelf.config.settings import Settings, get_settings

logger = logging.getLogger(__name__)


class BaseRepository:
    """Owns the MongoDB connection shared by all repositories."""

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()
        self.client: Optional[AsyncIOMotorClient] = None
        self.db: Optional[AsyncIOMotorDatabase] = None

    async def connect(self) -> None:
        """Establish connection to MongoDB."""
        try:
            self.client = AsyncIOMotorClient(self.settings.mongodb_uri)
            self.db = self.client[self.settings.mongodb_database]
            await self.client.admin.command('ping')
            logger.info(f"Connected to MongoDB: {self.settings.mongodb_database}")
        except Exception as e:
            logger.error(f"Failed to connect to MongoDB: {e}")
            raise

    def attach(self, db: AsyncIOMotorDatabase) -> None:
        """Use an already-open database handle instead of connecting."""
        self.db = db

    async def disconnect(self) -> None:
        """Close MongoDB connection."""
        if self.client:
            self.client.close()
            logger.info("Disconnected from MongoDB")
        self.client = None
        self.db = None

    @property
    def is_connected(self) -> bool:
        """Check if a database handle is available."""
        return self.db is not None
