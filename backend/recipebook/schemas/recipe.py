"""
RecipeBook Backend: Recipe Schemas
===================================

What:  Request and response models for the /recipes resource, including the
       shopping-list and list-filter models.

Status lifecycle:
    draft ──publish──▶ published ──archive──▶ archived
      └──────────────archive──────────────────▲

    `archived` is terminal. Status is never part of a client patch; it only
    changes through the publish/archive operations.
"""

from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field


class RecipeStatus(str, Enum):
    DRAFT = "draft"
    PUBLISHED = "published"
    ARCHIVED = "archived"


class RecipeIngredient(BaseModel):
    """
    One ingredient line of a recipe.

    Positivity of `quantity` and emptiness of `unit` are business rules
    checked by RecipeService (400), not schema constraints (422).
    """
    ingredient_id: str = Field(description="Identifier of a stored ingredient")
    quantity: float = Field(description="Amount needed for the recipe's portions")
    unit: str = Field(description="Free-form unit, e.g. 'g', 'cup', 'pcs'")


class RecipeCreate(BaseModel):
    """Body of POST /recipes. New recipes always start as drafts."""
    name: str = Field(json_schema_extra={"example": "Chocolate Cake"})
    category_id: str = Field(description="Identifier of an existing category")
    ingredients: List[RecipeIngredient] = Field(default_factory=list)
    portions: int = Field(description="Number of portions the quantities yield")


class RecipeUpdate(BaseModel):
    """Body of PUT /recipes/{id}. Only provided, non-null fields are applied."""
    name: Optional[str] = None
    category_id: Optional[str] = None
    ingredients: Optional[List[RecipeIngredient]] = None
    portions: Optional[int] = None


class RecipeChanges(RecipeUpdate):
    """Storage-level patch: a client patch plus the lifecycle status."""
    status: Optional[RecipeStatus] = None


class Recipe(BaseModel):
    id: str
    name: str
    category_id: str
    status: RecipeStatus = RecipeStatus.DRAFT
    ingredients: List[RecipeIngredient] = Field(default_factory=list)
    portions: int
    created_at: datetime

    model_config = {"from_attributes": True}


class RecipeFilter(BaseModel):
    """
    Optional list filters; every provided filter must match (AND).

        category_id:   exact category identifier
        category_name: category name, resolved case-insensitively
        search:        case-insensitive substring of the recipe name
        status:        lifecycle status
    """
    category_id: Optional[str] = None
    category_name: Optional[str] = None
    search: Optional[str] = None
    status: Optional[RecipeStatus] = None


class ShoppingListRequest(BaseModel):
    """Body of POST /recipes/shopping-list. Repeated ids count repeatedly."""
    recipe_ids: List[str] = Field(json_schema_extra={"example": ["<recipe-id>", "<recipe-id>"]})


class ShoppingListItem(BaseModel):
    """
    One consolidated line: the total quantity of an ingredient in one unit.

    An ingredient used with two different units yields two items.
    `name` is null when the ingredient was deleted after the recipe was saved.
    """
    ingredient_id: str
    name: Optional[str] = None
    quantity: float
    unit: str
