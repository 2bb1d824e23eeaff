"""
RecipeBook Backend: SQL Repositories
=====================================

What:  Async SQLAlchemy implementations of the repository contracts.
How:   Each operation opens its own session from the injected
       async_sessionmaker, commits on success and converts ORM rows into
       the pydantic entities from `recipebook.schemas`.
Who:   Wired in by `recipebook.dependencies` when STORAGE_BACKEND=sql.

Error Handling:
    SQLAlchemyError from any statement is rolled back, logged with its type
    and re-raised as DatabaseError (500 with a generic message).
    NotFoundError from `update` passes through unchanged.

Query patterns:
    list()          SELECT ... ORDER BY pk                  (insertion order)
    find_by_name(n) SELECT ... WHERE lower(name) = :n       (n normalized)
"""

import logging
import uuid
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import AsyncGenerator, List, Optional

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from recipebook.exceptions import DatabaseError, NotFoundError
from recipebook.models.category import CategoryModel
from recipebook.models.ingredient import IngredientModel
from recipebook.models.recipe import RecipeIngredientModel, RecipeModel
from recipebook.repositories.base import (
    CategoryRepository,
    IngredientRepository,
    RecipeRepository,
    normalize_name,
    patch_values,
)
from recipebook.schemas.category import Category, CategoryCreate, CategoryUpdate
from recipebook.schemas.ingredient import Ingredient, IngredientCreate, IngredientUpdate
from recipebook.schemas.recipe import (
    Recipe,
    RecipeChanges,
    RecipeCreate,
    RecipeIngredient,
    RecipeStatus,
)

logger = logging.getLogger(__name__)


def _utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes even for timezone=True columns
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _category(row: CategoryModel) -> Category:
    return Category(id=row.id, name=row.name, created_at=_utc(row.created_at))


def _ingredient(row: IngredientModel) -> Ingredient:
    return Ingredient(id=row.id, name=row.name, created_at=_utc(row.created_at))


def _recipe(row: RecipeModel) -> Recipe:
    return Recipe(
        id=row.id,
        name=row.name,
        category_id=row.category_id,
        status=RecipeStatus(row.status),
        ingredients=[
            RecipeIngredient(
                ingredient_id=line.ingredient_id,
                quantity=line.quantity,
                unit=line.unit,
            )
            for line in row.lines
        ],
        portions=row.portions,
        created_at=_utc(row.created_at),
    )


def _lines(ingredients: List[RecipeIngredient]) -> List[RecipeIngredientModel]:
    return [
        RecipeIngredientModel(
            position=position,
            ingredient_id=line.ingredient_id,
            quantity=line.quantity,
            unit=line.unit,
        )
        for position, line in enumerate(ingredients)
    ]


class _SqlRepository:
    """Session handling shared by the SQL repositories."""

    resource = "record"

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory

    @asynccontextmanager
    async def _session(self) -> AsyncGenerator[AsyncSession, None]:
        async with self._session_factory() as session:
            try:
                yield session
                await session.commit()
            except SQLAlchemyError as e:
                await session.rollback()
                logger.error(
                    "Database error in %s repository: %s", self.resource, str(e), exc_info=True
                )
                raise DatabaseError(
                    context={"resource": self.resource, "error_type": type(e).__name__}
                ) from e


class CategorySqlRepository(_SqlRepository, CategoryRepository):
    resource = "category"

    async def list(self) -> List[Category]:
        async with self._session() as session:
            result = await session.execute(select(CategoryModel).order_by(CategoryModel.pk))
            return [_category(row) for row in result.scalars().all()]

    async def find_by_id(self, category_id: str) -> Optional[Category]:
        async with self._session() as session:
            row = await self._get(session, category_id)
            return _category(row) if row else None

    async def find_by_name(self, name: str) -> Optional[Category]:
        async with self._session() as session:
            result = await session.execute(
                select(CategoryModel)
                .where(func.lower(CategoryModel.name) == normalize_name(name))
                .order_by(CategoryModel.pk)
                .limit(1)
            )
            row = result.scalars().first()
            return _category(row) if row else None

    async def create(self, data: CategoryCreate) -> Category:
        async with self._session() as session:
            row = CategoryModel(
                id=str(uuid.uuid4()), name=data.name, created_at=datetime.now(timezone.utc)
            )
            session.add(row)
            await session.flush()
            return _category(row)

    async def update(self, category_id: str, patch: CategoryUpdate) -> Category:
        async with self._session() as session:
            row = await self._get(session, category_id)
            if row is None:
                raise NotFoundError(resource=self.resource, resource_id=category_id)
            for field, value in patch_values(patch).items():
                setattr(row, field, value)
            await session.flush()
            return _category(row)

    async def delete(self, category_id: str) -> None:
        async with self._session() as session:
            row = await self._get(session, category_id)
            if row is not None:
                await session.delete(row)

    @staticmethod
    async def _get(session: AsyncSession, category_id: str) -> Optional[CategoryModel]:
        result = await session.execute(
            select(CategoryModel).where(CategoryModel.id == category_id)
        )
        return result.scalar_one_or_none()


class IngredientSqlRepository(_SqlRepository, IngredientRepository):
    resource = "ingredient"

    async def list(self) -> List[Ingredient]:
        async with self._session() as session:
            result = await session.execute(select(IngredientModel).order_by(IngredientModel.pk))
            return [_ingredient(row) for row in result.scalars().all()]

    async def find_by_id(self, ingredient_id: str) -> Optional[Ingredient]:
        async with self._session() as session:
            row = await self._get(session, ingredient_id)
            return _ingredient(row) if row else None

    async def find_by_name(self, name: str) -> Optional[Ingredient]:
        async with self._session() as session:
            result = await session.execute(
                select(IngredientModel)
                .where(func.lower(IngredientModel.name) == normalize_name(name))
                .order_by(IngredientModel.pk)
                .limit(1)
            )
            row = result.scalars().first()
            return _ingredient(row) if row else None

    async def create(self, data: IngredientCreate) -> Ingredient:
        async with self._session() as session:
            row = IngredientModel(
                id=str(uuid.uuid4()), name=data.name, created_at=datetime.now(timezone.utc)
            )
            session.add(row)
            await session.flush()
            return _ingredient(row)

    async def update(self, ingredient_id: str, patch: IngredientUpdate) -> Ingredient:
        async with self._session() as session:
            row = await self._get(session, ingredient_id)
            if row is None:
                raise NotFoundError(resource=self.resource, resource_id=ingredient_id)
            for field, value in patch_values(patch).items():
                setattr(row, field, value)
            await session.flush()
            return _ingredient(row)

    async def delete(self, ingredient_id: str) -> None:
        async with self._session() as session:
            row = await self._get(session, ingredient_id)
            if row is not None:
                await session.delete(row)

    @staticmethod
    async def _get(session: AsyncSession, ingredient_id: str) -> Optional[IngredientModel]:
        result = await session.execute(
            select(IngredientModel).where(IngredientModel.id == ingredient_id)
        )
        return result.scalar_one_or_none()


class RecipeSqlRepository(_SqlRepository, RecipeRepository):
    resource = "recipe"

    async def list(self) -> List[Recipe]:
        async with self._session() as session:
            result = await session.execute(select(RecipeModel).order_by(RecipeModel.pk))
            return [_recipe(row) for row in result.scalars().all()]

    async def list_by_category_id(self, category_id: str) -> List[Recipe]:
        async with self._session() as session:
            result = await session.execute(
                select(RecipeModel)
                .where(RecipeModel.category_id == category_id)
                .order_by(RecipeModel.pk)
            )
            return [_recipe(row) for row in result.scalars().all()]

    async def find_by_id(self, recipe_id: str) -> Optional[Recipe]:
        async with self._session() as session:
            row = await self._get(session, recipe_id)
            return _recipe(row) if row else None

    async def find_by_name(self, name: str) -> Optional[Recipe]:
        async with self._session() as session:
            result = await session.execute(
                select(RecipeModel)
                .where(func.lower(RecipeModel.name) == normalize_name(name))
                .order_by(RecipeModel.pk)
                .limit(1)
            )
            row = result.scalars().first()
            return _recipe(row) if row else None

    async def create(self, data: RecipeCreate) -> Recipe:
        async with self._session() as session:
            row = RecipeModel(
                id=str(uuid.uuid4()),
                name=data.name,
                category_id=data.category_id,
                status=RecipeStatus.DRAFT.value,
                portions=data.portions,
                created_at=datetime.now(timezone.utc),
                lines=_lines(data.ingredients),
            )
            session.add(row)
            await session.flush()
            return _recipe(row)

    async def update(self, recipe_id: str, patch: RecipeChanges) -> Recipe:
        async with self._session() as session:
            row = await self._get(session, recipe_id)
            if row is None:
                raise NotFoundError(resource=self.resource, resource_id=recipe_id)
            for field, value in patch_values(patch).items():
                if field == "ingredients":
                    row.lines = _lines(value)
                elif field == "status":
                    row.status = RecipeStatus(value).value
                else:
                    setattr(row, field, value)
            await session.flush()
            return _recipe(row)

    async def delete(self, recipe_id: str) -> None:
        async with self._session() as session:
            row = await self._get(session, recipe_id)
            if row is not None:
                await session.delete(row)

    @staticmethod
    async def _get(session: AsyncSession, recipe_id: str) -> Optional[RecipeModel]:
        result = await session.execute(select(RecipeModel).where(RecipeModel.id == recipe_id))
        return result.scalar_one_or_none()
