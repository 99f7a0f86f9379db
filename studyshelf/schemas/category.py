"""
Category schemas.
"""
from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime

from .common import CamelModel, utcnow_ms


class Category(BaseModel):
    """Category for organizing books."""
    category_id: str
    name: str
    created_at: datetime = Field(default_factory=utcnow_ms)


class CategoryCreate(CamelModel):
    """Request to create a category. Presence of name is checked by the controller."""
    name: Optional[str] = None


class CategoryResponse(CamelModel):
    """Response for category operations."""
    id: str
    name: str
    created_at: datetime
