"""
Repositories module for StudyShelf.
"""
from .base import BaseRepository
from .category_repository import CategoryRepository
from .book_repository import BookRepository
from .counter_repository import CounterRepository

__all__ = [
    "BaseRepository",
    "CategoryRepository",
    "BookRepository",
    "CounterRepository",
]
