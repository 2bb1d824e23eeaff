"""
RecipeBook Backend: Application Package Initializer
====================================================

What: Marks the `recipebook` directory as a Python package.
Who:  Used by uvicorn (`recipebook.main:app`), pytest and `python -m recipebook`.

Architecture Note:
    The backend is split into layers that only talk downwards:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  <- HTTP concerns only
    ├─────────────────────────────────────┤
    │         Services (Business Logic)   │  <- validation, uniqueness, integrity
    ├─────────────────────────────────────┤
    │     Repositories (Storage Contract) │  <- memory or SQL implementation
    ├─────────────────────────────────────┤
    │   Schemas (Pydantic) & Models (ORM) │  <- entities and table mappings
    └─────────────────────────────────────┘

    Services never import a concrete repository; the container in
    `recipebook.dependencies` decides which storage backend is wired in.
"""

__version__ = "1.0.0"
