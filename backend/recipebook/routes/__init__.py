# Routes package init
"""
RecipeBook Backend: API Routes Package
=======================================

Route Inventory:
    - categories.py:  /categories, /categories/{id}
    - ingredients.py: /ingredients, /ingredients/{id}
    - recipes.py:     /recipes, /recipes/{id}, /recipes/{id}/publish,
                      /recipes/{id}/archive, /recipes/{id}/scale,
                      /recipes/shopping-list
    - health.py:      /health

Routes stay thin: extract parameters, call one service method, pick the
status code. Errors raised by services are turned into responses by the
handlers registered in `recipebook.main`.
"""
