# Services package init
"""
RecipeBook Backend: Services Layer
===================================

What:  Business logic layer sitting between routes (HTTP) and repositories
       (storage).
How:   Services receive repository instances in their constructor and only
       use the abstract contracts from `recipebook.repositories.base`.

Service Inventory:
    - NamedEntityService: shared name trimming/uniqueness logic
    - CategoryService: categories, blocks deletion while recipes reference one
    - IngredientService: ingredients, unconditional deletion
    - RecipeService: recipes, lifecycle, shopping list, portion scaling

All failures are raised as `recipebook.exceptions` types and propagate
unmodified to the HTTP layer.
"""

from recipebook.services.category_service import CategoryService
from recipebook.services.ingredient_service import IngredientService
from recipebook.services.recipe_service import RecipeService

__all__ = ["CategoryService", "IngredientService", "RecipeService"]
