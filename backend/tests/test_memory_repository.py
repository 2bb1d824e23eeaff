"""
RecipeBook Backend: In-Memory Repository Tests
===============================================

What we test:
    ✅ create assigns an id and a UTC timestamp
    ✅ find_by_name ignores case and surrounding spaces
    ✅ update merges only provided, non-null fields
    ✅ update of a missing id raises NotFoundError
    ✅ delete is an idempotent no-op for missing ids
    ✅ returned records are copies, not the stored objects
"""

import pytest

from recipebook.exceptions import NotFoundError
from recipebook.repositories.memory import CategoryMemoryRepository, RecipeMemoryRepository
from recipebook.schemas.category import CategoryCreate, CategoryUpdate
from recipebook.schemas.recipe import (
    RecipeChanges,
    RecipeCreate,
    RecipeIngredient,
    RecipeStatus,
)


class TestCategoryMemoryRepository:

    def setup_method(self):
        self.repo = CategoryMemoryRepository()

    @pytest.mark.asyncio
    async def test_create_assigns_id_and_timestamp(self):
        first = await self.repo.create(CategoryCreate(name="Desserts"))
        second = await self.repo.create(CategoryCreate(name="Soups"))

        assert first.id and second.id and first.id != second.id
        assert first.created_at.tzinfo is not None
        assert [c.name for c in await self.repo.list()] == ["Desserts", "Soups"]

    @pytest.mark.asyncio
    async def test_find_by_name_is_case_insensitive(self):
        created = await self.repo.create(CategoryCreate(name="Desserts"))

        assert (await self.repo.find_by_name("  dESSERTS ")).id == created.id
        assert await self.repo.find_by_name("Dessert") is None

    @pytest.mark.asyncio
    async def test_update_merges_provided_fields(self):
        created = await self.repo.create(CategoryCreate(name="Desserts"))

        renamed = await self.repo.update(created.id, CategoryUpdate(name="Sweets"))
        assert renamed.name == "Sweets"
        assert renamed.id == created.id
        assert renamed.created_at == created.created_at

    @pytest.mark.asyncio
    async def test_update_ignores_unset_and_null_fields(self):
        created = await self.repo.create(CategoryCreate(name="Desserts"))

        assert (await self.repo.update(created.id, CategoryUpdate())).name == "Desserts"
        assert (await self.repo.update(created.id, CategoryUpdate(name=None))).name == "Desserts"

    @pytest.mark.asyncio
    async def test_update_missing_raises_not_found(self):
        with pytest.raises(NotFoundError):
            await self.repo.update("missing", CategoryUpdate(name="x"))

    @pytest.mark.asyncio
    async def test_delete_is_idempotent(self):
        created = await self.repo.create(CategoryCreate(name="Desserts"))

        await self.repo.delete(created.id)
        await self.repo.delete(created.id)
        await self.repo.delete("never-existed")

        assert await self.repo.find_by_id(created.id) is None
        assert await self.repo.list() == []

    @pytest.mark.asyncio
    async def test_returned_records_are_copies(self):
        created = await self.repo.create(CategoryCreate(name="Desserts"))
        created.name = "Tampered"

        listed = await self.repo.list()
        listed[0].name = "Tampered again"

        assert (await self.repo.find_by_id(created.id)).name == "Desserts"


class TestRecipeMemoryRepository:

    def setup_method(self):
        self.repo = RecipeMemoryRepository()

    def _recipe(self, name, category_id="cat-1"):
        return RecipeCreate(
            name=name,
            category_id=category_id,
            portions=2,
            ingredients=[RecipeIngredient(ingredient_id="ing-1", quantity=100, unit="g")],
        )

    @pytest.mark.asyncio
    async def test_create_starts_as_draft(self):
        recipe = await self.repo.create(self._recipe("Cake"))
        assert recipe.status == RecipeStatus.DRAFT
        assert recipe.ingredients[0].quantity == 100

    @pytest.mark.asyncio
    async def test_list_by_category_id(self):
        await self.repo.create(self._recipe("Cake", "cat-1"))
        await self.repo.create(self._recipe("Soup", "cat-2"))
        await self.repo.create(self._recipe("Pie", "cat-1"))

        names = [r.name for r in await self.repo.list_by_category_id("cat-1")]
        assert names == ["Cake", "Pie"]
        assert await self.repo.list_by_category_id("cat-3") == []

    @pytest.mark.asyncio
    async def test_update_status_keeps_other_fields(self):
        recipe = await self.repo.create(self._recipe("Cake"))

        updated = await self.repo.update(recipe.id, RecipeChanges(status=RecipeStatus.PUBLISHED))

        assert updated.status == RecipeStatus.PUBLISHED
        assert updated.name == "Cake"
        assert updated.portions == 2
        assert updated.ingredients == recipe.ingredients

    @pytest.mark.asyncio
    async def test_nested_ingredients_are_copied(self):
        recipe = await self.repo.create(self._recipe("Cake"))
        fetched = await self.repo.find_by_id(recipe.id)
        fetched.ingredients[0].quantity = 999

        assert (await self.repo.find_by_id(recipe.id)).ingredients[0].quantity == 100
