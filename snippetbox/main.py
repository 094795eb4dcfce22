"""
Snippetbox: FastAPI Application Factory
=======================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Served by uvicorn, either via `python -m snippetbox` or
       `uvicorn snippetbox.main:app`.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware:  Request ID → Logging                  │
    │                                                     │
    │  Routes:                                            │
    │  ┌──────────────┐ ┌──────────────┐ ┌─────────────┐  │
    │  │ HTML pages   │ │ /api/snippets│ │ GET /health │  │
    │  └──────────────┘ └──────────────┘ └─────────────┘  │
    │                                                     │
    │  Exception Handlers:                                │
    │  Validation→400 │ NotFound→404 │ Database→500       │
    │  (JSON under /api, HTML error page elsewhere)       │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  configure logging, ping the database (fail fast on a bad DSN)
    Shutdown: dispose the database engine
"""

import logging
import sys
from contextlib import asynccontextmanager
from http import HTTPStatus
from typing import Any, AsyncGenerator, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.responses import Response

from snippetbox import __version__
from snippetbox.config import settings
from snippetbox.database import dispose_engine, ping_database
from snippetbox.exceptions import (
    DatabaseError,
    NotFoundError,
    SnippetboxError,
)
from snippetbox.middleware.logging import RequestLoggingMiddleware
from snippetbox.middleware.request_id import RequestIDMiddleware, request_id_var
from snippetbox.routes import health, pages, snippets
from snippetbox.templating import templates

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    Safe to call more than once (force=True replaces existing handlers).
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Our access middleware replaces uvicorn's access log
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Startup: configure logging and verify the database is reachable.
    Shutdown: close all pooled connections.

    A failed ping is logged and re-raised, which makes uvicorn abort startup.
    """
    setup_logging()
    logger.info("Snippetbox %s starting up...", __version__)

    try:
        await ping_database()
    except Exception as e:
        logger.error("Could not connect to the database: %s", str(e))
        await dispose_engine()
        raise

    logger.info("Database connection OK")

    yield

    logger.info("Snippetbox shutting down...")
    await dispose_engine()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def wants_json(request: Request) -> bool:
    return request.url.path.startswith("/api")


def error_response(
    request: Request,
    status_code: int,
    error: str,
    message: str,
    details: Optional[Dict[str, Any]] = None,
) -> Response:
    """
    Build the error response for either audience.

    /api paths get an ErrorResponse JSON body; pages get error.html.
    """
    rid = request_id_var.get("")
    if wants_json(request):
        content: Dict[str, Any] = {"error": error, "message": message, "request_id": rid}
        if details:
            content["details"] = details
        return JSONResponse(status_code=status_code, content=content)

    return templates.TemplateResponse(
        request,
        "error.html",
        {
            "status_code": status_code,
            "status_text": HTTPStatus(status_code).phrase,
            "message": message,
            "request_id": rid,
        },
        status_code=status_code,
    )


def register_exception_handlers(app: FastAPI) -> None:
    """
    Register global exception handlers for consistent error responses.

    Handler hierarchy:
        RequestValidationError  → 400 Bad Request
        NotFoundError           → 404 Not Found
        DatabaseError           → 500 Internal Server Error
        SnippetboxError (base)  → 500 Internal Server Error

    Internal details (driver messages, SQL) are logged, never returned.
    """

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        errors = [
            {"field": ".".join(str(p) for p in err["loc"][1:]), "message": err["msg"]}
            for err in exc.errors()
        ]
        logger.warning("[%s] Invalid request: %s", request_id_var.get(""), errors)
        return error_response(
            request, 400, "validation_error", "Request validation failed", {"errors": errors}
        )

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return error_response(request, 404, "not_found", exc.message)

    @app.exception_handler(DatabaseError)
    async def handle_database_error(request: Request, exc: DatabaseError):
        logger.error(
            "[%s] Database error: %s | Context: %s",
            request_id_var.get(""),
            exc.message,
            exc.context,
            exc_info=exc,
        )
        return error_response(
            request,
            500,
            "server_error",
            "An internal error occurred. Please try again later.",
        )

    @app.exception_handler(SnippetboxError)
    async def handle_snippetbox_error(request: Request, exc: SnippetboxError):
        logger.error("[%s] Application error: %s", request_id_var.get(""), exc.message)
        return error_response(request, 500, "server_error", exc.message)


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns: Fully configured FastAPI instance ready to receive requests.
    """
    app = FastAPI(
        title="Snippetbox",
        description="Create and view short text snippets that expire.",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # Middleware executes in REVERSE order of addition: Request ID runs first
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(pages.router)
    app.include_router(snippets.router)
    app.include_router(health.router)

    return app


# uvicorn expects `snippetbox.main:app` to be importable
app = create_app()
