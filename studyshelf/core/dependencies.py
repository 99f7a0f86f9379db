"""
Dependency injection container and FastAPI dependency functions.
"""
from typing import Optional
import logging

from studyshelf.config.settings import Settings, get_settings
from studyshelf.repositories import (
    BaseRepository,
    CategoryRepository,
    BookRepository,
    CounterRepository
)
from studyshelf.controllers import CategoryController, BookController
from studyshelf.services import CodeAllocator

logger = logging.getLogger(__name__)


class Container:
    """Holds the repositories and controllers shared by all requests."""

    def __init__(self):
        self.settings: Optional[Settings] = None
        self.base_repo: Optional[BaseRepository] = None

        # Repositories
        self.category_repo: Optional[CategoryRepository] = None
        self.book_repo: Optional[BookRepository] = None
        self.counter_repo: Optional[CounterRepository] = None

        # Services
        self.code_allocator: Optional[CodeAllocator] = None

        # Controllers
        self.category_controller: Optional[CategoryController] = None
        self.book_controller: Optional[BookController] = None

    async def initialize(self, settings: Optional[Settings] = None) -> None:
        """Connect to MongoDB and wire all components (called at startup)."""
        logger.info("Initializing dependency container...")
        # Same settings the app was built with, so uploads land where /uploads serves from
        self.settings = settings or get_settings()
        self.settings.ensure_directories()

        self.base_repo = BaseRepository(self.settings)
        await self.base_repo.connect()

        await self.bind(self.base_repo.db, self.settings)
        logger.info("Dependency container initialized")

    async def bind(self, db, settings: Settings) -> None:
        """Wire repositories, services and controllers onto a database handle."""
        self.settings = settings
        if self.base_repo is None:
            self.base_repo = BaseRepository(settings)
        if self.base_repo.db is not db:
            self.base_repo.attach(db)

        # Initialize repositories
        self.category_repo = CategoryRepository(db)
        self.category_repo.set_settings(settings)

        self.book_repo = BookRepository(db)
        self.book_repo.set_settings(settings)

        self.counter_repo = CounterRepository(db)
        self.counter_repo.set_settings(settings)

        await self.category_repo.ensure_indexes()
        await self.book_repo.ensure_indexes()

        # Initialize services
        self.code_allocator = CodeAllocator(
            book_repo=self.book_repo,
            counter_repo=self.counter_repo,
            prefix=settings.published_code_prefix,
            width=settings.published_code_width
        )

        # Initialize controllers
        self.category_controller = CategoryController(self.category_repo)
        self.book_controller = BookController(
            book_repo=self.book_repo,
            category_repo=self.category_repo,
            code_allocator=self.code_allocator,
            settings=settings
        )

    async def shutdown(self) -> None:
        """Cleanup on shutdown."""
        logger.info("Shutting down dependency container...")
        if self.base_repo is not None:
            await self.base_repo.disconnect()
        self.base_repo = None
        logger.info("Dependency container shutdown complete")


# Global container instance
container = Container()


# Dependency functions for FastAPI
def get_settings_dependency() -> Settings:
    """Settings the container was wired with."""
    return container.settings or get_settings()


def get_category_controller() -> CategoryController:
    """Dependency for category controller."""
    return container.category_controller


def get_book_controller() -> BookController:
    """Dependency for book controller."""
    return container.book_controller
