"""
Book schemas.
"""
from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime

from .common import CamelModel, utcnow_ms


class Book(BaseModel):
    """A stored study book and the PDF backing it."""
    book_id: str
    title: str
    description: str
    category_id: str
    published_code: str
    code_number: int
    file_path: str
    original_filename: Optional[str] = None
    file_size: int = 0
    created_at: datetime = Field(default_factory=utcnow_ms)


class BookResponse(CamelModel):
    """Book as returned to clients, with its file resolved to a full URL."""
    id: str
    title: str
    description: str
    category_id: str
    category_name: Optional[str] = None
    published_code: str
    file_url: str
    created_at: datetime


class BookUploadResponse(CamelModel):
    """Response after a successful upload."""
    message: str
    book: BookResponse
