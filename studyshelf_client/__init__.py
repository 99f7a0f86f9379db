"""
StudyShelf Python client: API access, shared library cache and display helpers.
"""
from .config import ClientConfig
from .core import LibraryStore
from .services import StudyShelfClient

__all__ = ["ClientConfig", "LibraryStore", "StudyShelfClient"]
