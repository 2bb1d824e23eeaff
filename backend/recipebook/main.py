"""
RecipeBook Backend: FastAPI Application Factory
================================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() wires storage, services, middleware,
       exception handlers and routers, and returns the app.
Who:   uvicorn (`recipebook.main:app`), `python -m recipebook`, and tests
       (one fresh app per test for an empty in-memory store).

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────────┐ ┌──────────────┐ ┌─────────────┐  │
    │  │  Request ID  │→│  Access Log  │→│    CORS     │  │
    │  └──────────────┘ └──────────────┘ └─────────────┘  │
    │                                                     │
    │  Routes:                                            │
    │  /categories   /ingredients   /recipes   /health    │
    │                                                     │
    │  Exception Handlers:                                │
    │  Validation→400  NotFound→404  Conflict→409  DB→500 │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  configure logging, create tables (sql backend only)
    Shutdown: dispose the SQL engine (sql backend only)
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from recipebook import __version__
from recipebook.config import settings
from recipebook.database import dispose_engine, init_db
from recipebook.dependencies import ServiceContainer, build_container
from recipebook.exceptions import (
    ConflictError,
    DatabaseError,
    NotFoundError,
    RecipeBookError,
    ValidationError,
)
from recipebook.middleware.logging import RequestLoggingMiddleware
from recipebook.middleware.request_id import (
    REQUEST_ID_HEADER,
    RequestIDMiddleware,
    request_id_var,
)
from recipebook.routes import categories, health, ingredients, recipes

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure root logging once for the whole process.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s, to stdout,
    at LOG_LEVEL. Chatty third-party loggers are capped at WARNING.
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    setup_logging()
    container: ServiceContainer = app.state.services
    logger.info("RecipeBook Backend %s starting (storage=%s)", __version__, container.storage)

    if container.engine is not None:
        await init_db(container.engine)

    logger.info("Server ready on port %d", settings.port)

    yield

    logger.info("RecipeBook Backend shutting down...")
    if container.engine is not None:
        await dispose_engine(container.engine)
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _error_body(error: str, exc: RecipeBookError, include_details: bool = True) -> dict:
    body = {
        "error": error,
        "message": exc.message,
        "request_id": request_id_var.get(""),
    }
    if include_details and exc.context:
        body["details"] = exc.context
    return body


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map domain exceptions to HTTP responses.

    Handler table:
        ValidationError        -> 400 validation_error
        NotFoundError          -> 404 not_found
        ConflictError          -> 409 conflict
        DatabaseError          -> 500 server_error (generic message)
        RecipeBookError (base) -> 500 server_error
        Exception (fallback)   -> 500 internal_server_error

    Server-side errors never expose their context in the response body;
    it is logged instead.
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        logger.warning("[%s] Validation error: %s", request_id_var.get(""), exc.message)
        return JSONResponse(status_code=400, content=_error_body("validation_error", exc))

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return JSONResponse(status_code=404, content=_error_body("not_found", exc))

    @app.exception_handler(ConflictError)
    async def handle_conflict(request: Request, exc: ConflictError):
        logger.warning("[%s] Conflict: %s", request_id_var.get(""), exc.message)
        return JSONResponse(status_code=409, content=_error_body("conflict", exc))

    @app.exception_handler(DatabaseError)
    async def handle_database_error(request: Request, exc: DatabaseError):
        rid = request_id_var.get("")
        logger.error("[%s] Database error: %s | Context: %s", rid, exc.message, exc.context)
        return JSONResponse(
            status_code=500,
            content={
                "error": "server_error",
                "message": "An internal error occurred. Please try again later.",
                "request_id": rid,
            },
        )

    @app.exception_handler(RecipeBookError)
    async def handle_app_error(request: Request, exc: RecipeBookError):
        rid = request_id_var.get("")
        logger.error("[%s] Application error: %s | Context: %s", rid, exc.message, exc.context)
        return JSONResponse(
            status_code=500,
            content=_error_body("server_error", exc, include_details=False),
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        # Runs outside the middleware stack, after the ContextVar was reset
        rid = getattr(request.state, "request_id", "")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=exc)
        return JSONResponse(
            status_code=500,
            content={
                "error": "internal_server_error",
                "message": "An unexpected error occurred. Please try again or contact support.",
                "request_id": rid,
            },
            headers={REQUEST_ID_HEADER: rid} if rid else None,
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(container: Optional[ServiceContainer] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        container: pre-built services; defaults to the backend selected by
                   STORAGE_BACKEND. Every app owns its own store.
    """
    app = FastAPI(
        title="RecipeBook API",
        description=(
            "Recipe management backend: categories, ingredients and recipes with "
            "publish/archive lifecycle, shopping lists and portion scaling."
        ),
        version=__version__,
        lifespan=lifespan,
    )
    app.state.services = container or build_container()

    # Last added runs first: RequestID -> Logging -> CORS -> routes
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=[REQUEST_ID_HEADER],
    )
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(categories.router)
    app.include_router(ingredients.router)
    app.include_router(recipes.router)
    app.include_router(health.router)

    return app


# Module-level instance for `uvicorn recipebook.main:app`
app = create_app()
