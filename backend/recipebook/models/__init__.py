# Models package init
"""
RecipeBook Backend: SQLAlchemy ORM Models
==========================================

What:  Table mappings used only by the sql storage backend.
How:   The SQL repositories convert rows into the pydantic entities from
       `recipebook.schemas` before returning them, so nothing above the
       repository layer ever sees an ORM object.

Tables:
    categories          one row per category
    ingredients         one row per ingredient
    recipes             one row per recipe (category_id references categories)
    recipe_ingredients  ordered ingredient lines of a recipe
"""
