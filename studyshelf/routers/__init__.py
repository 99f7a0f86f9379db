"""
Routers module for StudyShelf.
"""
from . import category_router
from . import book_router

__all__ = [
    "category_router",
    "book_router",
]
