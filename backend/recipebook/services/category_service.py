"""
RecipeBook Backend: Category Service
=====================================

What:  Business rules for categories: trimmed unique names and the
       referential integrity check on delete.
Who:   Called by the /categories route handlers.
"""

import logging

from recipebook.exceptions import ConflictError
from recipebook.repositories.base import CategoryRepository, RecipeRepository
from recipebook.schemas.category import Category, CategoryCreate, CategoryUpdate
from recipebook.services.named_entity import NamedEntityService

logger = logging.getLogger(__name__)


class CategoryService(NamedEntityService[Category, CategoryCreate, CategoryUpdate]):
    """
    Responsibilities:
        - create(): trim + validate name, reject duplicates (ConflictError)
        - list() / get(): plain reads, get raises NotFoundError
        - update(): partial patch, rename re-checks uniqueness
        - delete(): refuses while any recipe references the category
    """

    resource = "category"

    def __init__(self, categories: CategoryRepository, recipes: RecipeRepository):
        super().__init__(categories)
        self.recipes = recipes

    async def delete(self, category_id: str) -> None:
        """
        Delete a category that no recipe references.

        Raises:
            ConflictError: at least one recipe has this category_id; the
                category is left in place
        """
        recipes = await self.recipes.list_by_category_id(category_id)
        if recipes:
            logger.warning(
                "Refused to delete category %s: referenced by %d recipe(s)",
                category_id,
                len(recipes),
            )
            raise ConflictError(
                message="Cannot delete category with recipes",
                context={"category_id": category_id, "recipe_count": len(recipes)},
            )
        await super().delete(category_id)
