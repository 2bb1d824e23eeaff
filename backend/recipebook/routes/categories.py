"""
RecipeBook Backend: Category Route Handlers
============================================

What:  CRUD endpoints for categories.
"""

from typing import List

from fastapi import APIRouter, Depends, Response, status

from recipebook.dependencies import get_category_service
from recipebook.schemas.category import Category, CategoryCreate, CategoryUpdate
from recipebook.schemas.common import ErrorResponse
from recipebook.services import CategoryService

router = APIRouter(prefix="/categories", tags=["Categories"])


@router.get("", response_model=List[Category], summary="List categories")
async def list_categories(
    service: CategoryService = Depends(get_category_service),
) -> List[Category]:
    return await service.list()


@router.post(
    "",
    response_model=Category,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"description": "Blank name", "model": ErrorResponse},
        409: {"description": "Name already used", "model": ErrorResponse},
    },
    summary="Create a category",
)
async def create_category(
    body: CategoryCreate,
    service: CategoryService = Depends(get_category_service),
) -> Category:
    return await service.create(body)


@router.get(
    "/{category_id}",
    response_model=Category,
    responses={404: {"description": "Category not found", "model": ErrorResponse}},
    summary="Get a category",
)
async def get_category(
    category_id: str,
    service: CategoryService = Depends(get_category_service),
) -> Category:
    return await service.get(category_id)


@router.put(
    "/{category_id}",
    response_model=Category,
    responses={
        400: {"description": "Blank name", "model": ErrorResponse},
        404: {"description": "Category not found", "model": ErrorResponse},
        409: {"description": "Name already used", "model": ErrorResponse},
    },
    summary="Update a category (partial)",
)
async def update_category(
    category_id: str,
    body: CategoryUpdate,
    service: CategoryService = Depends(get_category_service),
) -> Category:
    return await service.update(category_id, body)


@router.delete(
    "/{category_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={409: {"description": "Recipes still use the category", "model": ErrorResponse}},
    summary="Delete a category",
)
async def delete_category(
    category_id: str,
    service: CategoryService = Depends(get_category_service),
) -> Response:
    await service.delete(category_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
