"""
RecipeBook Backend: Category Schemas
=====================================

What:  Request and response models for the /categories resource.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class CategoryCreate(BaseModel):
    """Body of POST /categories. The name is trimmed by the service."""
    name: str = Field(
        description="Display name, unique ignoring case and surrounding spaces",
        json_schema_extra={"example": "Desserts"},
    )


class CategoryUpdate(BaseModel):
    """Body of PUT /categories/{id}. Only provided fields are applied."""
    name: Optional[str] = Field(default=None, description="New display name")


class Category(BaseModel):
    """A stored category."""
    id: str = Field(description="Opaque identifier assigned at creation")
    name: str = Field(description="Trimmed display name")
    created_at: datetime = Field(description="Creation timestamp (UTC)")

    model_config = {"from_attributes": True}
