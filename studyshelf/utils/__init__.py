"""
Utilities module for StudyShelf.
"""
from .file_utils import (
    StoredUpload,
    save_uploaded_file,
    generate_unique_filename,
    build_file_url,
    delete_file_quietly,
)
from .exceptions import (
    StudyShelfException,
    MissingFileError,
    UnsupportedFileTypeError,
    InvalidInputError,
    DuplicateNameError,
    CategoryNotFoundError,
    BookNotFoundError,
    StorageError
)

__all__ = [
    "StoredUpload",
    "save_uploaded_file",
    "generate_unique_filename",
    "build_file_url",
    "delete_file_quietly",
    "StudyShelfException",
    "MissingFileError",
    "UnsupportedFileTypeError",
    "InvalidInputError",
    "DuplicateNameError",
    "CategoryNotFoundError",
    "BookNotFoundError",
    "StorageError"
]
