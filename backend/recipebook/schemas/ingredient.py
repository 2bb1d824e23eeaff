"""
RecipeBook Backend: Ingredient Schemas
=======================================

What:  Request and response models for the /ingredients resource.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class IngredientCreate(BaseModel):
    name: str = Field(
        description="Ingredient name, unique ignoring case and surrounding spaces",
        json_schema_extra={"example": "Sugar"},
    )


class IngredientUpdate(BaseModel):
    name: Optional[str] = Field(default=None, description="New ingredient name")


class Ingredient(BaseModel):
    id: str = Field(description="Opaque identifier assigned at creation")
    name: str = Field(description="Trimmed ingredient name")
    created_at: datetime = Field(description="Creation timestamp (UTC)")

    model_config = {"from_attributes": True}
