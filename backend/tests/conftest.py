"""
RecipeBook Backend: Test Configuration (conftest.py)
=====================================================

What:  Shared pytest fixtures for the entire test suite.

Fixture Hierarchy (all function-scoped, fresh state per test):
    ├── category_repo / ingredient_repo / recipe_repo: empty memory repositories
    ├── category_service / ingredient_service / recipe_service: services
    │   wired to the same three repositories
    ├── sql_container: services over SQL repositories on a temp SQLite file
    └── test_client: HTTPX AsyncClient bound to a fresh app (memory storage)
"""

import os

# Settings are read at import time; configure before importing recipebook
os.environ["STORAGE_BACKEND"] = "memory"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from recipebook.database import dispose_engine, init_db
from recipebook.dependencies import build_memory_container, build_sql_container
from recipebook.repositories.memory import (
    CategoryMemoryRepository,
    IngredientMemoryRepository,
    RecipeMemoryRepository,
)
from recipebook.schemas.recipe import RecipeCreate, RecipeIngredient
from recipebook.services import CategoryService, IngredientService, RecipeService


# ══════════════════════════════════════════════════════════════════════════
# Memory Storage & Services
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def category_repo():
    return CategoryMemoryRepository()


@pytest.fixture
def ingredient_repo():
    return IngredientMemoryRepository()


@pytest.fixture
def recipe_repo():
    return RecipeMemoryRepository()


@pytest.fixture
def category_service(category_repo, recipe_repo):
    return CategoryService(category_repo, recipe_repo)


@pytest.fixture
def ingredient_service(ingredient_repo):
    return IngredientService(ingredient_repo)


@pytest.fixture
def recipe_service(recipe_repo, category_repo, ingredient_repo):
    return RecipeService(recipe_repo, category_repo, ingredient_repo)


def _build_recipe_input(name, category_id, lines=(), portions=4):
    return RecipeCreate(
        name=name,
        category_id=category_id,
        portions=portions,
        ingredients=[
            RecipeIngredient(ingredient_id=ingredient_id, quantity=qty, unit=unit)
            for ingredient_id, qty, unit in lines
        ],
    )


@pytest.fixture
def recipe_input():
    """
    Builder for RecipeCreate payloads.

    Usage:
        recipe_input("Cake", cat.id, [(sugar.id, 200, "g")], portions=4)
    """
    return _build_recipe_input


# ══════════════════════════════════════════════════════════════════════════
# SQL Storage
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def sql_container(tmp_path):
    """
    Services backed by SQL repositories on a throwaway SQLite database.

    Tables are created before the test and the engine disposed after it.
    """
    container = build_sql_container(f"sqlite+aiosqlite:///{tmp_path / 'recipebook_test.db'}")
    await init_db(container.engine)
    yield container
    await dispose_engine(container.engine)


# ══════════════════════════════════════════════════════════════════════════
# HTTP Client
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def test_client():
    """
    HTTPX AsyncClient talking to a fresh app through ASGITransport.

    Each test gets its own app and therefore its own empty memory store.
    """
    from recipebook.main import create_app

    app = create_app(build_memory_container())
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
