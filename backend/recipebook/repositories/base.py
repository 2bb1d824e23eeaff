"""
RecipeBook Backend: Abstract Repository Interfaces
===================================================

What:  Abstract base classes defining the storage contract for each entity.
How:   Concrete implementations (`memory`, `sql`) inherit from these and
       implement every method. Services depend only on these classes.
Who:   Implemented in `recipebook.repositories.memory` and
       `recipebook.repositories.sql`; consumed by `recipebook.services`.

Contract shared by every repository:
    - list()            -> all records in insertion order
    - find_by_id(id)    -> record or None
    - find_by_name(n)   -> record whose trimmed, lowercased name equals the
                           trimmed, lowercased `n`, or None
    - create(data)      -> new record with a fresh id and created_at
    - update(id, patch) -> merged record; raises NotFoundError if absent;
                           only fields set on the patch and not None apply
    - delete(id)        -> removes the record; no-op if absent

Records returned are detached copies. Mutating one never changes storage.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from pydantic import BaseModel

from recipebook.schemas.category import Category, CategoryCreate, CategoryUpdate
from recipebook.schemas.ingredient import Ingredient, IngredientCreate, IngredientUpdate
from recipebook.schemas.recipe import Recipe, RecipeChanges, RecipeCreate


def normalize_name(name: str) -> str:
    """Trimmed, lowercased form of a name used for uniqueness comparison."""
    return name.strip().lower()


def patch_values(patch: BaseModel) -> Dict[str, Any]:
    """
    Fields of a patch that should overwrite stored values.

    A field counts only if the client set it and it is not None, so
    `update(id, CategoryUpdate())` and `update(id, CategoryUpdate(name=None))`
    both leave the record untouched. Nested models are kept as models.
    """
    return {
        field: getattr(patch, field)
        for field in patch.model_fields_set
        if getattr(patch, field) is not None
    }


class CategoryRepository(ABC):

    @abstractmethod
    async def list(self) -> List[Category]:
        ...

    @abstractmethod
    async def find_by_id(self, category_id: str) -> Optional[Category]:
        ...

    @abstractmethod
    async def find_by_name(self, name: str) -> Optional[Category]:
        ...

    @abstractmethod
    async def create(self, data: CategoryCreate) -> Category:
        ...

    @abstractmethod
    async def update(self, category_id: str, patch: CategoryUpdate) -> Category:
        ...

    @abstractmethod
    async def delete(self, category_id: str) -> None:
        ...


class IngredientRepository(ABC):

    @abstractmethod
    async def list(self) -> List[Ingredient]:
        ...

    @abstractmethod
    async def find_by_id(self, ingredient_id: str) -> Optional[Ingredient]:
        ...

    @abstractmethod
    async def find_by_name(self, name: str) -> Optional[Ingredient]:
        ...

    @abstractmethod
    async def create(self, data: IngredientCreate) -> Ingredient:
        ...

    @abstractmethod
    async def update(self, ingredient_id: str, patch: IngredientUpdate) -> Ingredient:
        ...

    @abstractmethod
    async def delete(self, ingredient_id: str) -> None:
        ...


class RecipeRepository(ABC):
    """
    Storage contract for recipes.

    Adds `list_by_category_id`, which CategoryService uses for the
    referential integrity check before deleting a category. `create` always
    stores the recipe as a draft; status changes go through `update` with a
    RecipeChanges patch.
    """

    @abstractmethod
    async def list(self) -> List[Recipe]:
        ...

    @abstractmethod
    async def list_by_category_id(self, category_id: str) -> List[Recipe]:
        ...

    @abstractmethod
    async def find_by_id(self, recipe_id: str) -> Optional[Recipe]:
        ...

    @abstractmethod
    async def find_by_name(self, name: str) -> Optional[Recipe]:
        ...

    @abstractmethod
    async def create(self, data: RecipeCreate) -> Recipe:
        ...

    @abstractmethod
    async def update(self, recipe_id: str, patch: RecipeChanges) -> Recipe:
        ...

    @abstractmethod
    async def delete(self, recipe_id: str) -> None:
        ...
