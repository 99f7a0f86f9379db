"""
Category Data Transfer Objects.
"""
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from datetime import datetime


class CategoryCreate(BaseModel):
    """Payload for creating a new category."""
    name: str = Field(..., description="Name of the category")


class CategoryResponse(BaseModel):
    """Response DTO for Category."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str = Field(..., description="Unique identifier")
    name: str = Field(..., description="Name of the category")
    created_at: datetime = Field(..., description="Creation timestamp")
