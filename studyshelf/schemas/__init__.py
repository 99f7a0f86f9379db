"""
Schemas module for StudyShelf.
"""
from .common import CamelModel, utcnow_ms
from .category import Category, CategoryCreate, CategoryResponse
from .book import Book, BookResponse, BookUploadResponse

__all__ = [
    # Common
    "CamelModel",
    "utcnow_ms",
    # Category
    "Category",
    "CategoryCreate",
    "CategoryResponse",
    # Book
    "Book",
    "BookResponse",
    "BookUploadResponse",
]
