"""
Book repository for database operations.
"""
from typing import Optional, List
import logging

from studyshelf.schemas import Book

logger = logging.getLogger(__name__)


class BookRepository:
    """Repository for book CRUD operations."""

    def __init__(self, db):
        self.db = db
        self.settings = None

    def set_settings(self, settings):
        self.settings = settings

    @property
    def collection(self):
        return self.db[self.settings.books_collection]

    async def ensure_indexes(self) -> None:
        """Published codes are unique; listings sort by creation time."""
        await self.collection.create_index("published_code", unique=True)
        await self.collection.create_index([("code_number", -1)])
        await self.collection.create_index([("created_at", -1)])

    async def create(self, book: Book) -> Book:
        """
        Create a new book record.

        Raises:
            pymongo.errors.DuplicateKeyError: the published code is taken.
        """
        await self.collection.insert_one({
            "_id": book.book_id,
            **book.model_dump(exclude={"book_id"})
        })
        logger.info(f"Created book: {book.book_id} ({book.published_code})")
        return book

    async def get_by_id(self, book_id: str) -> Optional[Book]:
        """Get a book by ID."""
        doc = await self.collection.find_one({"_id": book_id})
        if doc:
            doc["book_id"] = doc.pop("_id")
            return Book(**doc)
        return None

    async def get_all(self, category_id: Optional[str] = None) -> List[Book]:
        """Get all books, newest first, optionally limited to one category."""
        query = {"category_id": category_id} if category_id else {}
        cursor = self.collection.find(query, sort=[("created_at", -1), ("code_number", -1)])
        books = []
        async for doc in cursor:
            doc["book_id"] = doc.pop("_id")
            books.append(Book(**doc))
        return books

    async def get_latest_code(self) -> Optional[str]:
        """Published code of the book with the highest code number, if any."""
        doc = await self.collection.find_one(
            {},
            projection={"published_code": 1},
            sort=[("code_number", -1), ("published_code", -1)]
        )
        if doc:
            return doc.get("published_code")
        return None
