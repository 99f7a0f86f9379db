"""
Core module for StudyShelf application setup.
"""
from .app import create_app
from .dependencies import container, get_category_controller, get_book_controller

__all__ = [
    "create_app",
    "container",
    "get_category_controller",
    "get_book_controller",
]
