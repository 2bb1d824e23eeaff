"""
RecipeBook Backend: Service Container & FastAPI Dependencies
=============================================================

What:  Builds the repositories for the configured storage backend, the
       services on top of them, and the Depends() providers routes use.
How:   `build_container()` is called once by `create_app()`; the container
       is stored on `app.state.services`. Route dependencies read it from
       the request, so every request of one app shares the same store while
       separate apps (e.g. one per test) stay isolated.

Wiring:
    CategoryService(categories, recipes)
    IngredientService(ingredients)
    RecipeService(recipes, categories, ingredients)
"""

import logging
from typing import Optional

from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncEngine

from recipebook.config import settings
from recipebook.repositories.base import (
    CategoryRepository,
    IngredientRepository,
    RecipeRepository,
)
from recipebook.services import CategoryService, IngredientService, RecipeService

logger = logging.getLogger(__name__)


class ServiceContainer:
    """
    Services of one application instance plus the storage they share.

    Attributes:
        categories / ingredients / recipes: the application services
        storage: backend name ("memory" or "sql")
        engine: the SQLAlchemy engine for the sql backend, else None
    """

    def __init__(
        self,
        categories: CategoryRepository,
        ingredients: IngredientRepository,
        recipes: RecipeRepository,
        storage: str,
        engine: Optional[AsyncEngine] = None,
    ):
        self.categories = CategoryService(categories, recipes)
        self.ingredients = IngredientService(ingredients)
        self.recipes = RecipeService(recipes, categories, ingredients)
        self.storage = storage
        self.engine = engine


def build_memory_container() -> ServiceContainer:
    from recipebook.repositories.memory import (
        CategoryMemoryRepository,
        IngredientMemoryRepository,
        RecipeMemoryRepository,
    )

    return ServiceContainer(
        categories=CategoryMemoryRepository(),
        ingredients=IngredientMemoryRepository(),
        recipes=RecipeMemoryRepository(),
        storage="memory",
    )


def build_sql_container(database_url: Optional[str] = None) -> ServiceContainer:
    """
    Wire SQL repositories sharing one engine and session factory.

    Tables are not created here; `init_db()` runs in the app lifespan.
    """
    from recipebook.database import build_engine, build_session_factory
    from recipebook.repositories.sql import (
        CategorySqlRepository,
        IngredientSqlRepository,
        RecipeSqlRepository,
    )

    engine = build_engine(database_url)
    session_factory = build_session_factory(engine)
    return ServiceContainer(
        categories=CategorySqlRepository(session_factory),
        ingredients=IngredientSqlRepository(session_factory),
        recipes=RecipeSqlRepository(session_factory),
        storage="sql",
        engine=engine,
    )


def build_container(storage_backend: Optional[str] = None) -> ServiceContainer:
    backend = storage_backend or settings.storage_backend
    logger.info("Using %s storage backend", backend)
    if backend == "sql":
        return build_sql_container()
    return build_memory_container()


# ── Route Dependencies ────────────────────────────────────────────────────

def get_container(request: Request) -> ServiceContainer:
    return request.app.state.services


def get_category_service(request: Request) -> CategoryService:
    return get_container(request).categories


def get_ingredient_service(request: Request) -> IngredientService:
    return get_container(request).ingredients


def get_recipe_service(request: Request) -> RecipeService:
    return get_container(request).recipes
