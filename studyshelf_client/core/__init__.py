from .store import LibraryStore

__all__ = ["LibraryStore"]
