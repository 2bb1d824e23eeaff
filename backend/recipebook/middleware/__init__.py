# Middleware package init
"""
RecipeBook Backend: Middleware Package
=======================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain:
    Request -> [Request ID] -> [Access Log] -> [CORS] -> Route Handler

    Request ID runs first so the access log line and any error response can
    carry the same correlation id.
"""
