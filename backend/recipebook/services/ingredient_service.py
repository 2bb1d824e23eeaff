"""
RecipeBook Backend: Ingredient Service
=======================================

What:  Business rules for ingredients. Same naming rules as categories;
       deletion is unconditional.
Who:   Called by the /ingredients route handlers.

Recipes that still list a deleted ingredient keep their lines; the shopping
list reports such lines with a null name.
"""

from recipebook.repositories.base import IngredientRepository
from recipebook.schemas.ingredient import Ingredient, IngredientCreate, IngredientUpdate
from recipebook.services.named_entity import NamedEntityService


class IngredientService(NamedEntityService[Ingredient, IngredientCreate, IngredientUpdate]):

    resource = "ingredient"

    def __init__(self, ingredients: IngredientRepository):
        super().__init__(ingredients)
