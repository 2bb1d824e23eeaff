"""
RecipeBook Backend: Recipe Route Handlers
==========================================

What:  CRUD endpoints for recipes plus the lifecycle, shopping-list and
       scaling endpoints.

    GET    /recipes?category_id=&category_name=&search=&status=
    POST   /recipes
    POST   /recipes/shopping-list      body: {"recipe_ids": [...]}
    GET    /recipes/{id}
    PUT    /recipes/{id}               partial patch, status not patchable
    DELETE /recipes/{id}
    POST   /recipes/{id}/publish       draft -> published
    POST   /recipes/{id}/archive       draft|published -> archived
    GET    /recipes/{id}/scale?portions=N   scaled copy, not saved
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response, status

from recipebook.dependencies import get_recipe_service
from recipebook.schemas.common import ErrorResponse
from recipebook.schemas.recipe import (
    Recipe,
    RecipeCreate,
    RecipeFilter,
    RecipeStatus,
    RecipeUpdate,
    ShoppingListItem,
    ShoppingListRequest,
)
from recipebook.services import RecipeService

router = APIRouter(prefix="/recipes", tags=["Recipes"])

NOT_FOUND = {404: {"description": "Recipe not found", "model": ErrorResponse}}


@router.get("", response_model=List[Recipe], summary="List recipes with optional filters")
async def list_recipes(
    category_id: Optional[str] = Query(default=None, description="Only recipes in this category"),
    category_name: Optional[str] = Query(
        default=None, description="Only recipes in the category with this name (any casing)"
    ),
    search: Optional[str] = Query(
        default=None, description="Case-insensitive substring of the recipe name"
    ),
    status: Optional[RecipeStatus] = Query(default=None, description="Lifecycle status"),
    service: RecipeService = Depends(get_recipe_service),
) -> List[Recipe]:
    filters = RecipeFilter(
        category_id=category_id,
        category_name=category_name,
        search=search,
        status=status,
    )
    return await service.list(filters)


@router.post(
    "",
    response_model=Recipe,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"description": "Invalid recipe data", "model": ErrorResponse},
        404: {"description": "Category or ingredient not found", "model": ErrorResponse},
        409: {"description": "Name already used", "model": ErrorResponse},
    },
    summary="Create a draft recipe",
)
async def create_recipe(
    body: RecipeCreate,
    service: RecipeService = Depends(get_recipe_service),
) -> Recipe:
    return await service.create(body)


@router.post(
    "/shopping-list",
    response_model=List[ShoppingListItem],
    responses=NOT_FOUND,
    summary="Consolidate the ingredients of several recipes",
)
async def shopping_list(
    body: ShoppingListRequest,
    service: RecipeService = Depends(get_recipe_service),
) -> List[ShoppingListItem]:
    return await service.consolidate_shopping_list(body.recipe_ids)


@router.get("/{recipe_id}", response_model=Recipe, responses=NOT_FOUND, summary="Get a recipe")
async def get_recipe(
    recipe_id: str,
    service: RecipeService = Depends(get_recipe_service),
) -> Recipe:
    return await service.get(recipe_id)


@router.put(
    "/{recipe_id}",
    response_model=Recipe,
    responses={
        400: {"description": "Invalid recipe data", "model": ErrorResponse},
        404: {"description": "Recipe, category or ingredient not found", "model": ErrorResponse},
        409: {"description": "Name already used", "model": ErrorResponse},
    },
    summary="Update a recipe (partial)",
)
async def update_recipe(
    recipe_id: str,
    body: RecipeUpdate,
    service: RecipeService = Depends(get_recipe_service),
) -> Recipe:
    return await service.update(recipe_id, body)


@router.delete(
    "/{recipe_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Delete a recipe",
)
async def delete_recipe(
    recipe_id: str,
    service: RecipeService = Depends(get_recipe_service),
) -> Response:
    await service.delete(recipe_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "/{recipe_id}/publish",
    response_model=Recipe,
    responses={**NOT_FOUND, 409: {"description": "Recipe is not a draft", "model": ErrorResponse}},
    summary="Publish a draft recipe",
)
async def publish_recipe(
    recipe_id: str,
    service: RecipeService = Depends(get_recipe_service),
) -> Recipe:
    return await service.publish(recipe_id)


@router.post(
    "/{recipe_id}/archive",
    response_model=Recipe,
    responses={**NOT_FOUND, 409: {"description": "Recipe already archived", "model": ErrorResponse}},
    summary="Archive a recipe",
)
async def archive_recipe(
    recipe_id: str,
    service: RecipeService = Depends(get_recipe_service),
) -> Recipe:
    return await service.archive(recipe_id)


@router.get(
    "/{recipe_id}/scale",
    response_model=Recipe,
    responses={**NOT_FOUND, 400: {"description": "Invalid portions", "model": ErrorResponse}},
    summary="Preview a recipe scaled to another number of portions",
)
async def scale_recipe(
    recipe_id: str,
    portions: int = Query(description="Target number of portions"),
    service: RecipeService = Depends(get_recipe_service),
) -> Recipe:
    return await service.scale_recipe(recipe_id, portions)
