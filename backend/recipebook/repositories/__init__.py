# Repositories package init
"""
RecipeBook Backend: Storage Repositories
=========================================

What:  Persistence contracts (`base`) and their implementations.

Implementations:
    - memory: list-backed, volatile, the default backend
    - sql:    async SQLAlchemy, selected with STORAGE_BACKEND=sql
"""
