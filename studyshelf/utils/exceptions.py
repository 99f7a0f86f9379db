"""
Custom exceptions for StudyShelf application.

Each exception carries the HTTP status code the API layer maps it to.
"""


class StudyShelfException(Exception):
    """Base exception for StudyShelf."""
    status_code = 500


class MissingFileError(StudyShelfException):
    """Raised when an upload arrives without a file payload."""
    status_code = 400

    def __init__(self, message: str = "PDF file is required"):
        super().__init__(message)


class UnsupportedFileTypeError(StudyShelfException):
    """Raised when the uploaded file is not a PDF."""
    status_code = 400

    def __init__(self, filename: str = ""):
        self.filename = filename
        super().__init__("Only PDF files are allowed")


class InvalidInputError(StudyShelfException):
    """Raised for missing or malformed request fields."""
    status_code = 400


class DuplicateNameError(StudyShelfException):
    """Raised when a category name is already taken."""
    status_code = 400

    def __init__(self, name: str):
        self.name = name
        super().__init__("Category already exists")


class CategoryNotFoundError(StudyShelfException):
    """Raised when a category is not found."""
    status_code = 404

    def __init__(self, category_id: str):
        self.category_id = category_id
        super().__init__(f"Category not found: {category_id}")


class BookNotFoundError(StudyShelfException):
    """Raised when a book is not found."""
    status_code = 404

    def __init__(self, book_id: str):
        self.book_id = book_id
        super().__init__(f"Book not found: {book_id}")


class StorageError(StudyShelfException):
    """Raised when persistence or disk IO fails. The message stays generic."""
    status_code = 500

    def __init__(self, message: str = "Server error"):
        super().__init__(message)
