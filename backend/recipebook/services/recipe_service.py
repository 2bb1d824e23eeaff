"""
RecipeBook Backend: Recipe Service
===================================

What:  Business rules and workflows for recipes.
How:   Validates input, checks the referenced category and ingredients
       through their repositories, and drives the status lifecycle.
Who:   Called by the /recipes route handlers.

Operations:
    list(filters)                   filter by category id/name, name search, status
    get / create / update / delete  CRUD with validation and unique names
    publish / archive               status transitions (see TRANSITIONS)
    consolidate_shopping_list(ids)  summed ingredient quantities per unit
    scale_recipe(id, portions)      unsaved copy with scaled quantities

Validation order on create/update:
    1. ValidationError: blank name, portions outside 1..MAX_PORTIONS,
       quantities that are not finite or outside (0, MAX_QUANTITY],
       blank units, the same ingredient listed twice
    2. NotFoundError:   referenced category or ingredient does not exist
    3. ConflictError:   another recipe already uses the name
"""

import logging
import math
from typing import Any, Dict, List, Optional, Tuple

from recipebook.exceptions import ConflictError, NotFoundError, ValidationError
from recipebook.repositories.base import (
    CategoryRepository,
    IngredientRepository,
    RecipeRepository,
    normalize_name,
    patch_values,
)
from recipebook.schemas.recipe import (
    Recipe,
    RecipeChanges,
    RecipeCreate,
    RecipeFilter,
    RecipeIngredient,
    RecipeStatus,
    RecipeUpdate,
    ShoppingListItem,
)
from recipebook.services.named_entity import require_name

logger = logging.getLogger(__name__)

# target status -> statuses it may be reached from
TRANSITIONS = {
    RecipeStatus.PUBLISHED: {RecipeStatus.DRAFT},
    RecipeStatus.ARCHIVED: {RecipeStatus.DRAFT, RecipeStatus.PUBLISHED},
}

# Quantities are rounded to this many decimals after summing or scaling
QUANTITY_PRECISION = 6

# Upper bounds keep sums and scaled quantities finite
MAX_QUANTITY = 1_000_000
MAX_PORTIONS = 10_000


class RecipeService:
    """
    Business logic layer for recipe operations.

    Depends on all three repositories: recipes for storage, categories for
    reference checks and the category-name filter, ingredients for reference
    checks and shopping-list names.
    """

    def __init__(
        self,
        recipes: RecipeRepository,
        categories: CategoryRepository,
        ingredients: IngredientRepository,
    ):
        self.recipes = recipes
        self.categories = categories
        self.ingredients = ingredients

    # ── Reads ─────────────────────────────────────────────────────────────

    async def list(self, filters: Optional[RecipeFilter] = None) -> List[Recipe]:
        """
        List recipes in insertion order, narrowed by any provided filters.

        An unknown `category_name` matches nothing. A blank `category_name`
        or `search` is ignored.
        """
        recipes = await self.recipes.list()
        if filters is None:
            return recipes

        if filters.category_name is not None and filters.category_name.strip():
            category = await self.categories.find_by_name(filters.category_name)
            if category is None:
                return []
            recipes = [r for r in recipes if r.category_id == category.id]

        if filters.category_id is not None:
            recipes = [r for r in recipes if r.category_id == filters.category_id]

        if filters.search is not None and filters.search.strip():
            needle = normalize_name(filters.search)
            recipes = [r for r in recipes if needle in r.name.lower()]

        if filters.status is not None:
            recipes = [r for r in recipes if r.status == filters.status]

        return recipes

    async def get(self, recipe_id: str) -> Recipe:
        found = await self.recipes.find_by_id(recipe_id)
        if found is None:
            raise NotFoundError(resource="recipe", resource_id=recipe_id)
        return found

    # ── Writes ────────────────────────────────────────────────────────────

    async def create(self, data: RecipeCreate) -> Recipe:
        """
        Create a recipe in `draft` status.

        Raises:
            ValidationError, NotFoundError, ConflictError (see module docs)
        """
        name = require_name(data.name)
        self._check_portions(data.portions)
        lines = self._clean_lines(data.ingredients)

        await self._ensure_category(data.category_id)
        await self._ensure_ingredients(lines)
        await self._ensure_unique(name)

        recipe = await self.recipes.create(
            data.model_copy(update={"name": name, "ingredients": lines})
        )
        logger.info("Created recipe %s (%s) in category %s", recipe.id, recipe.name, recipe.category_id)
        return recipe

    async def update(self, recipe_id: str, patch: RecipeUpdate) -> Recipe:
        """
        Apply a partial patch. Fields not provided (or null) keep their value.

        Status is not patchable; use publish() or archive().
        """
        current = await self.get(recipe_id)
        provided = patch_values(patch)
        changes: Dict[str, Any] = {}

        if "name" in provided:
            changes["name"] = require_name(provided["name"])
        if "portions" in provided:
            self._check_portions(provided["portions"])
            changes["portions"] = provided["portions"]
        if "ingredients" in provided:
            changes["ingredients"] = self._clean_lines(provided["ingredients"])
        if "category_id" in provided:
            changes["category_id"] = provided["category_id"]

        if "category_id" in changes and changes["category_id"] != current.category_id:
            await self._ensure_category(changes["category_id"])
        if "ingredients" in changes:
            await self._ensure_ingredients(changes["ingredients"])
        if "name" in changes:
            await self._ensure_unique(changes["name"], exclude_id=recipe_id)

        if not changes:
            return current
        return await self.recipes.update(recipe_id, RecipeChanges(**changes))

    async def delete(self, recipe_id: str) -> None:
        await self.recipes.delete(recipe_id)
        logger.info("Deleted recipe %s", recipe_id)

    # ── Lifecycle ─────────────────────────────────────────────────────────

    async def publish(self, recipe_id: str) -> Recipe:
        """draft -> published. Any other source status raises ConflictError."""
        return await self._transition(recipe_id, RecipeStatus.PUBLISHED)

    async def archive(self, recipe_id: str) -> Recipe:
        """draft|published -> archived. Archived recipes raise ConflictError."""
        return await self._transition(recipe_id, RecipeStatus.ARCHIVED)

    async def _transition(self, recipe_id: str, target: RecipeStatus) -> Recipe:
        recipe = await self.get(recipe_id)
        if recipe.status not in TRANSITIONS[target]:
            logger.warning(
                "Rejected transition of recipe %s from %s to %s",
                recipe_id,
                recipe.status.value,
                target.value,
            )
            raise ConflictError(
                message=f"Cannot change recipe status from '{recipe.status.value}' to '{target.value}'",
                context={
                    "recipe_id": recipe_id,
                    "status": recipe.status.value,
                    "target": target.value,
                },
            )
        updated = await self.recipes.update(recipe_id, RecipeChanges(status=target))
        logger.info("Recipe %s is now %s", recipe_id, target.value)
        return updated

    # ── Derived views ─────────────────────────────────────────────────────

    async def consolidate_shopping_list(self, recipe_ids: List[str]) -> List[ShoppingListItem]:
        """
        Sum ingredient quantities across recipes.

        Lines are grouped by (ingredient_id, unit) where units compare
        trimmed and case-insensitively; the first spelling seen is reported.
        Different units of the same ingredient stay separate items (no unit
        conversion). A recipe id given twice counts twice. Items keep the
        order in which their (ingredient, unit) pair first appears.

        Raises:
            NotFoundError: any id does not name a stored recipe
        """
        recipes = [await self.get(recipe_id) for recipe_id in recipe_ids]

        totals: Dict[Tuple[str, str], Dict[str, Any]] = {}
        for recipe in recipes:
            for line in recipe.ingredients:
                key = (line.ingredient_id, normalize_name(line.unit))
                entry = totals.setdefault(
                    key,
                    {"ingredient_id": line.ingredient_id, "unit": line.unit, "quantity": 0.0},
                )
                entry["quantity"] += line.quantity

        names: Dict[str, Optional[str]] = {}
        for ingredient_id, _ in totals:
            if ingredient_id not in names:
                ingredient = await self.ingredients.find_by_id(ingredient_id)
                names[ingredient_id] = ingredient.name if ingredient else None

        return [
            ShoppingListItem(
                ingredient_id=entry["ingredient_id"],
                name=names[entry["ingredient_id"]],
                quantity=round(entry["quantity"], QUANTITY_PRECISION),
                unit=entry["unit"],
            )
            for entry in totals.values()
        ]

    async def scale_recipe(self, recipe_id: str, portions: int) -> Recipe:
        """
        Return a copy of the recipe sized for `portions`.

        Every quantity is multiplied by portions / recipe.portions. The copy
        keeps the stored id and is never saved.
        """
        self._check_portions(portions)
        recipe = await self.get(recipe_id)
        factor = portions / recipe.portions
        return recipe.model_copy(
            update={
                "portions": portions,
                "ingredients": [
                    line.model_copy(
                        update={"quantity": round(line.quantity * factor, QUANTITY_PRECISION)}
                    )
                    for line in recipe.ingredients
                ],
            }
        )

    # ── Validation helpers ────────────────────────────────────────────────

    @staticmethod
    def _check_portions(portions: Any) -> None:
        if isinstance(portions, bool) or not isinstance(portions, int) or portions <= 0:
            raise ValidationError(
                message="Portions must be a positive whole number",
                field="portions",
            )
        if portions > MAX_PORTIONS:
            raise ValidationError(
                message=f"Portions must be at most {MAX_PORTIONS}",
                field="portions",
            )

    @staticmethod
    def _clean_lines(lines: List[RecipeIngredient]) -> List[RecipeIngredient]:
        cleaned: List[RecipeIngredient] = []
        seen = set()
        for line in lines:
            if not math.isfinite(line.quantity):
                raise ValidationError(
                    message="Ingredient quantity must be a finite number",
                    field="ingredients",
                    context={"ingredient_id": line.ingredient_id},
                )
            if line.quantity <= 0:
                raise ValidationError(
                    message="Ingredient quantity must be greater than zero",
                    field="ingredients",
                    context={"ingredient_id": line.ingredient_id},
                )
            if line.quantity > MAX_QUANTITY:
                raise ValidationError(
                    message=f"Ingredient quantity must be at most {MAX_QUANTITY}",
                    field="ingredients",
                    context={"ingredient_id": line.ingredient_id},
                )
            unit = line.unit.strip()
            if not unit:
                raise ValidationError(
                    message="Ingredient unit is required",
                    field="ingredients",
                    context={"ingredient_id": line.ingredient_id},
                )
            if line.ingredient_id in seen:
                raise ValidationError(
                    message="Each ingredient may appear only once per recipe",
                    field="ingredients",
                    context={"ingredient_id": line.ingredient_id},
                )
            seen.add(line.ingredient_id)
            cleaned.append(line.model_copy(update={"unit": unit}))
        return cleaned

    async def _ensure_category(self, category_id: str) -> None:
        if await self.categories.find_by_id(category_id) is None:
            raise NotFoundError(resource="category", resource_id=category_id)

    async def _ensure_ingredients(self, lines: List[RecipeIngredient]) -> None:
        for line in lines:
            if await self.ingredients.find_by_id(line.ingredient_id) is None:
                raise NotFoundError(resource="ingredient", resource_id=line.ingredient_id)

    async def _ensure_unique(self, name: str, exclude_id: Optional[str] = None) -> None:
        existing = await self.recipes.find_by_name(name)
        if existing is not None and existing.id != exclude_id:
            logger.warning("Rejected duplicate recipe name '%s'", name)
            raise ConflictError(
                message="Recipe name must be unique",
                context={"name": name, "existing_id": existing.id},
            )
