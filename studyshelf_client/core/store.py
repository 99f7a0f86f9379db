"""
Shared client-side library state.

One LibraryStore holds the category and book lists every screen reads from.
Consumers receive the store they should use; nothing looks it up globally.
Data only changes on an explicit refresh.
"""
import asyncio
import logging
from typing import List, Optional

import httpx

from studyshelf_client.schemas import BookResponse, CategoryResponse
from studyshelf_client.services.api_client import StudyShelfClient

logger = logging.getLogger(__name__)


class LibraryStore:
    """Cached categories and books with explicit refresh operations."""

    def __init__(self, client: StudyShelfClient):
        self.client = client
        self.categories: List[CategoryResponse] = []
        self.books: List[BookResponse] = []
        self.loading = False
        self.error: Optional[str] = None
        self._lock = asyncio.Lock()

    async def refresh_all(self) -> bool:
        """
        Reload categories and books together.

        On failure the previous lists are kept and error is set.
        """
        async with self._lock:
            self.loading = True
            try:
                categories, books = await asyncio.gather(
                    self.client.list_categories(),
                    self.client.list_books()
                )
            except httpx.HTTPError as e:
                logger.error(f"Error fetching library data: {e}")
                self.error = "Failed to fetch data. Please check your connection."
                return False
            finally:
                self.loading = False

            self.categories = categories
            self.books = books
            self.error = None
            return True

    async def refresh_books(self) -> bool:
        """Reload only the book list, e.g. after an upload."""
        async with self._lock:
            self.loading = True
            try:
                books = await self.client.list_books()
            except httpx.HTTPError as e:
                logger.error(f"Error refreshing books: {e}")
                self.error = "Failed to refresh books. Please try again."
                return False
            finally:
                self.loading = False

            self.books = books
            self.error = None
            return True

    def get_book(self, book_id: str) -> Optional[BookResponse]:
        return next((book for book in self.books if book.id == book_id), None)

    def book_category_names(self) -> List[str]:
        """Distinct category names among the cached books, sorted."""
        return sorted({book.category_name for book in self.books if book.category_name})

    def filter_books(self, query: str = "", category_name: Optional[str] = None) -> List[BookResponse]:
        """
        Books matching a search string and an optional category.

        The query matches case-insensitively against title, description and
        published code. An empty query matches everything.
        """
        needle = (query or "").lower()

        def matches(book: BookResponse) -> bool:
            if category_name and book.category_name != category_name:
                return False
            return (
                needle in book.title.lower()
                or needle in book.description.lower()
                or needle in (book.published_code or "").lower()
            )

        return [book for book in self.books if matches(book)]
