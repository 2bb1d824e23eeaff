"""
RecipeBook Backend: In-Memory Repositories
===========================================

What:  List-backed implementations of the repository contracts.
How:   Each repository keeps its records in a Python list in insertion order.
       Lookups are linear scans; names are compared in normalized form.
Who:   The default storage backend (STORAGE_BACKEND=memory) and the fixture
       storage used by the service tests.

State is per repository instance and lives as long as the process. Nothing
is persisted; a restart starts from empty lists.
"""

import logging
import uuid
from datetime import datetime, timezone
from typing import Generic, List, Optional, TypeVar

from pydantic import BaseModel

from recipebook.exceptions import NotFoundError
from recipebook.repositories.base import (
    CategoryRepository,
    IngredientRepository,
    RecipeRepository,
    normalize_name,
    patch_values,
)
from recipebook.schemas.category import Category, CategoryCreate, CategoryUpdate
from recipebook.schemas.ingredient import Ingredient, IngredientCreate, IngredientUpdate
from recipebook.schemas.recipe import Recipe, RecipeChanges, RecipeCreate, RecipeStatus

logger = logging.getLogger(__name__)

EntityT = TypeVar("EntityT", bound=BaseModel)


def _new_id() -> str:
    return str(uuid.uuid4())


def _now() -> datetime:
    return datetime.now(timezone.utc)


class _MemoryStore(Generic[EntityT]):
    """
    Ordered list of entities shared by the three memory repositories.

    Every read hands out a deep copy so callers cannot change stored
    records without going through `merge`.
    """

    def __init__(self, resource: str):
        self.resource = resource
        self.items: List[EntityT] = []

    def all(self) -> List[EntityT]:
        return [item.model_copy(deep=True) for item in self.items]

    def find_by_id(self, entity_id: str) -> Optional[EntityT]:
        for item in self.items:
            if item.id == entity_id:
                return item.model_copy(deep=True)
        return None

    def find_by_name(self, name: str) -> Optional[EntityT]:
        wanted = normalize_name(name)
        for item in self.items:
            if normalize_name(item.name) == wanted:
                return item.model_copy(deep=True)
        return None

    def add(self, item: EntityT) -> EntityT:
        self.items.append(item)
        logger.debug("Stored %s %s", self.resource, item.id)
        return item.model_copy(deep=True)

    def merge(self, entity_id: str, patch: BaseModel) -> EntityT:
        for idx, current in enumerate(self.items):
            if current.id == entity_id:
                updated = current.model_copy(update=patch_values(patch), deep=True)
                self.items[idx] = updated
                return updated.model_copy(deep=True)
        raise NotFoundError(resource=self.resource, resource_id=entity_id)

    def remove(self, entity_id: str) -> None:
        self.items = [item for item in self.items if item.id != entity_id]


class CategoryMemoryRepository(CategoryRepository):

    def __init__(self):
        self._store: _MemoryStore[Category] = _MemoryStore("category")

    async def list(self) -> List[Category]:
        return self._store.all()

    async def find_by_id(self, category_id: str) -> Optional[Category]:
        return self._store.find_by_id(category_id)

    async def find_by_name(self, name: str) -> Optional[Category]:
        return self._store.find_by_name(name)

    async def create(self, data: CategoryCreate) -> Category:
        return self._store.add(
            Category(id=_new_id(), name=data.name, created_at=_now())
        )

    async def update(self, category_id: str, patch: CategoryUpdate) -> Category:
        return self._store.merge(category_id, patch)

    async def delete(self, category_id: str) -> None:
        self._store.remove(category_id)


class IngredientMemoryRepository(IngredientRepository):

    def __init__(self):
        self._store: _MemoryStore[Ingredient] = _MemoryStore("ingredient")

    async def list(self) -> List[Ingredient]:
        return self._store.all()

    async def find_by_id(self, ingredient_id: str) -> Optional[Ingredient]:
        return self._store.find_by_id(ingredient_id)

    async def find_by_name(self, name: str) -> Optional[Ingredient]:
        return self._store.find_by_name(name)

    async def create(self, data: IngredientCreate) -> Ingredient:
        return self._store.add(
            Ingredient(id=_new_id(), name=data.name, created_at=_now())
        )

    async def update(self, ingredient_id: str, patch: IngredientUpdate) -> Ingredient:
        return self._store.merge(ingredient_id, patch)

    async def delete(self, ingredient_id: str) -> None:
        self._store.remove(ingredient_id)


class RecipeMemoryRepository(RecipeRepository):

    def __init__(self):
        self._store: _MemoryStore[Recipe] = _MemoryStore("recipe")

    async def list(self) -> List[Recipe]:
        return self._store.all()

    async def list_by_category_id(self, category_id: str) -> List[Recipe]:
        return [recipe for recipe in self._store.all() if recipe.category_id == category_id]

    async def find_by_id(self, recipe_id: str) -> Optional[Recipe]:
        return self._store.find_by_id(recipe_id)

    async def find_by_name(self, name: str) -> Optional[Recipe]:
        return self._store.find_by_name(name)

    async def create(self, data: RecipeCreate) -> Recipe:
        return self._store.add(
            Recipe(
                id=_new_id(),
                name=data.name,
                category_id=data.category_id,
                status=RecipeStatus.DRAFT,
                ingredients=[line.model_copy() for line in data.ingredients],
                portions=data.portions,
                created_at=_now(),
            )
        )

    async def update(self, recipe_id: str, patch: RecipeChanges) -> Recipe:
        return self._store.merge(recipe_id, patch)

    async def delete(self, recipe_id: str) -> None:
        self._store.remove(recipe_id)
