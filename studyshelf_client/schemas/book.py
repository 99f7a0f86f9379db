"""
Book Data Transfer Objects.
"""
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from typing import Optional
from datetime import datetime


class BookResponse(BaseModel):
    """Response DTO for a book."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str = Field(..., description="Unique book ID")
    title: str
    description: str
    category_id: str = Field(..., description="Parent category ID")
    category_name: Optional[str] = Field(None, description="Parent category name")
    published_code: str = Field(..., description="Published code, e.g. eduIT001")
    file_url: str = Field(..., description="Fully-qualified PDF URL")
    created_at: datetime = Field(..., description="Upload timestamp")


class UploadResponse(BaseModel):
    """Response DTO for a book upload."""
    message: str
    book: BookResponse


class FileCheck(BaseModel):
    """Result of probing a file URL with HEAD."""
    exists: bool
    size: int = 0
    content_type: Optional[str] = None
