"""
Client Schemas package.
Exports all DTOs for the StudyShelf Python client.
"""
from .category import CategoryCreate, CategoryResponse
from .book import BookResponse, UploadResponse, FileCheck

__all__ = [
    # Category
    "CategoryCreate", "CategoryResponse",
    # Book
    "BookResponse", "UploadResponse", "FileCheck",
]
