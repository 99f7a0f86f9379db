"""
Book controller: upload coordination and read access.

An upload arrives with its PDF already written to disk. submit_upload runs
validation, category resolution, code allocation and the insert inside the
StoredUpload guard, so the file is removed again whenever any of those steps
fails.
"""
from typing import List, Optional, Tuple
from pathlib import Path
import logging
import uuid

from pymongo.errors import DuplicateKeyError, PyMongoError

from studyshelf.repositories import BookRepository, CategoryRepository
from studyshelf.schemas import Book, BookResponse, Category
from studyshelf.services import CodeAllocator
from studyshelf.utils.exceptions import (
    BookNotFoundError,
    CategoryNotFoundError,
    InvalidInputError,
    MissingFileError,
    StorageError
)
from studyshelf.utils.file_utils import StoredUpload, build_file_url

logger = logging.getLogger(__name__)


class BookController:
    """Controller for book uploads and lookups."""

    def __init__(
        self,
        book_repo: BookRepository,
        category_repo: CategoryRepository,
        code_allocator: CodeAllocator,
        settings
    ):
        self.book_repo = book_repo
        self.category_repo = category_repo
        self.code_allocator = code_allocator
        self.settings = settings

    def _to_response(self, book: Book, category_name: Optional[str], base_url: str) -> BookResponse:
        return BookResponse(
            id=book.book_id,
            title=book.title,
            description=book.description,
            category_id=book.category_id,
            category_name=category_name,
            published_code=book.published_code,
            file_url=build_file_url(base_url, book.file_path, self.settings.upload_url_prefix),
            created_at=book.created_at
        )

    @staticmethod
    def _validate_fields(
        title: Optional[str],
        description: Optional[str],
        category_id: Optional[str]
    ) -> Tuple[str, str, str]:
        cleaned = tuple((value or "").strip() for value in (title, description, category_id))
        if not all(cleaned):
            raise InvalidInputError("All fields are required")
        return cleaned

    async def _resolve_category(self, category_id: str) -> Category:
        try:
            category = await self.category_repo.get_by_id(category_id)
        except PyMongoError as e:
            logger.error(f"Category lookup failed for {category_id}: {e}", exc_info=True)
            raise StorageError()
        if not category:
            raise CategoryNotFoundError(category_id)
        return category

    async def _persist(
        self,
        title: str,
        description: str,
        category_id: str,
        stored_file: StoredUpload
    ) -> Book:
        """Allocate a code and insert the book, re-allocating on a code clash."""
        attempts = self.settings.code_allocation_attempts
        try:
            for attempt in range(1, attempts + 1):
                code = await self.code_allocator.allocate_next_code()
                book = Book(
                    book_id=f"book_{uuid.uuid4().hex[:12]}",
                    title=title,
                    description=description,
                    category_id=category_id,
                    published_code=code,
                    code_number=self.code_allocator.number_of(code),
                    file_path=str(stored_file.path),
                    original_filename=stored_file.original_filename,
                    file_size=stored_file.size
                )
                try:
                    return await self.book_repo.create(book)
                except DuplicateKeyError:
                    logger.warning(
                        f"Published code {code} already taken (attempt {attempt}/{attempts}), resyncing counter"
                    )
                    await self.code_allocator.sync()
        except PyMongoError as e:
            logger.error(f"Failed to store book {title!r}: {e}", exc_info=True)
            raise StorageError()

        logger.error(f"No free published code after {attempts} attempts for book {title!r}")
        raise StorageError()

    async def submit_upload(
        self,
        title: Optional[str],
        description: Optional[str],
        category_id: Optional[str],
        stored_file: Optional[StoredUpload],
        base_url: str
    ) -> BookResponse:
        """
        Validate an upload and create its book record.

        Args:
            title: Book title from the form
            description: Book description from the form
            category_id: ID of an existing category
            stored_file: The PDF as already written to disk, None if absent
            base_url: Scheme and host used to build the file URL

        Returns:
            The created book with a fully-qualified file URL.

        Raises:
            MissingFileError: no file was attached
            InvalidInputError: a text field is missing or blank
            CategoryNotFoundError: category_id does not exist
            StorageError: the database rejected the write
        """
        if stored_file is None:
            raise MissingFileError()

        async with stored_file:
            title, description, category_id = self._validate_fields(title, description, category_id)
            category = await self._resolve_category(category_id)
            book = await self._persist(title, description, category_id, stored_file)

        logger.info(f"Uploaded book {book.published_code}: {book.title!r} in {category.name!r}")
        return self._to_response(book, category.name, base_url)

    async def list_books(self, base_url: str, category_id: Optional[str] = None) -> List[BookResponse]:
        """All books newest first, with category names joined in."""
        books = await self.book_repo.get_all(category_id)
        names = await self.category_repo.get_names(book.category_id for book in books)
        return [
            self._to_response(book, names.get(book.category_id), base_url)
            for book in books
        ]

    async def get_book(self, book_id: str, base_url: str) -> BookResponse:
        """Get one book by ID."""
        book = await self.book_repo.get_by_id(book_id)
        if not book:
            raise BookNotFoundError(book_id)
        category = await self.category_repo.get_by_id(book.category_id)
        return self._to_response(book, category.name if category else None, base_url)

    async def get_book_file(self, book_id: str) -> Tuple[Book, Path]:
        """Book record and the on-disk path of its PDF."""
        book = await self.book_repo.get_by_id(book_id)
        if not book:
            raise BookNotFoundError(book_id)
        return book, Path(book.file_path)
