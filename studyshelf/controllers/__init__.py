"""
Controllers module for StudyShelf.
"""
from .category_controller import CategoryController
from .book_controller import BookController

__all__ = [
    "CategoryController",
    "BookController",
]
