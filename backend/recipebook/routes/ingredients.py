"""
RecipeBook Backend: Ingredient Route Handlers
==============================================

What:  CRUD endpoints for ingredients. Same shape as /categories.
"""

from typing import List

from fastapi import APIRouter, Depends, Response, status

from recipebook.dependencies import get_ingredient_service
from recipebook.schemas.common import ErrorResponse
from recipebook.schemas.ingredient import Ingredient, IngredientCreate, IngredientUpdate
from recipebook.services import IngredientService

router = APIRouter(prefix="/ingredients", tags=["Ingredients"])


@router.get("", response_model=List[Ingredient], summary="List ingredients")
async def list_ingredients(
    service: IngredientService = Depends(get_ingredient_service),
) -> List[Ingredient]:
    return await service.list()


@router.post(
    "",
    response_model=Ingredient,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"description": "Blank name", "model": ErrorResponse},
        409: {"description": "Name already used", "model": ErrorResponse},
    },
    summary="Create an ingredient",
)
async def create_ingredient(
    body: IngredientCreate,
    service: IngredientService = Depends(get_ingredient_service),
) -> Ingredient:
    return await service.create(body)


@router.get(
    "/{ingredient_id}",
    response_model=Ingredient,
    responses={404: {"description": "Ingredient not found", "model": ErrorResponse}},
    summary="Get an ingredient",
)
async def get_ingredient(
    ingredient_id: str,
    service: IngredientService = Depends(get_ingredient_service),
) -> Ingredient:
    return await service.get(ingredient_id)


@router.put(
    "/{ingredient_id}",
    response_model=Ingredient,
    responses={
        400: {"description": "Blank name", "model": ErrorResponse},
        404: {"description": "Ingredient not found", "model": ErrorResponse},
        409: {"description": "Name already used", "model": ErrorResponse},
    },
    summary="Update an ingredient (partial)",
)
async def update_ingredient(
    ingredient_id: str,
    body: IngredientUpdate,
    service: IngredientService = Depends(get_ingredient_service),
) -> Ingredient:
    return await service.update(ingredient_id, body)


@router.delete(
    "/{ingredient_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Delete an ingredient",
)
async def delete_ingredient(
    ingredient_id: str,
    service: IngredientService = Depends(get_ingredient_service),
) -> Response:
    await service.delete(ingredient_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
