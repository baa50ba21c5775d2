"""
Verse API: FastAPI Application Factory
=======================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() wires the translation registry, the
       data source pool and the verse service into app.state, registers
       middleware, exception handlers and routes.
Who:   `python -m verse_api` (see __main__.py) or `uvicorn verse_api.main:app`.

Application Architecture:
    ┌──────────────────────────────────────────────────────┐
    │                    FastAPI App                       │
    │                                                      │
    │  Middleware Chain:                                   │
    │  ┌──────────┐ ┌──────────┐ ┌──────────┐              │
    │  │   CORS   │→│  Req ID  │→│ Logging  │              │
    │  └──────────┘ └──────────┘ └──────────┘              │
    │                                                      │
    │  Routes:                                             │
    │  ┌────────────────────────────┐ ┌────────────┐       │
    │  │ GET /get-random-verse/{t}  │ │ GET /health│       │
    │  └────────────────────────────┘ └────────────┘       │
    │                                                      │
    │  app.state:                                          │
    │    registry → pool → verse_service                   │
    └──────────────────────────────────────────────────────┘

Lifecycle:
    Startup:
    1. Configure logging
    2. Open and liveness-check every translation (fatal if none opens)
    3. Log the available translations

    Shutdown (after the server stops accepting requests):
    1. Dispose every translation's engine exactly once
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from verse_api import __version__
from verse_api.config import settings
from verse_api.database import DataSourcePool
from verse_api.exceptions import (
    InitializationError,
    MalformedRequestError,
    RetrievalError,
    TranslationUnavailableError,
    UnknownTranslationError,
)
from verse_api.middleware.cors import CORSHeadersMiddleware
from verse_api.middleware.logging import RequestLoggingMiddleware
from verse_api.middleware.request_id import RequestIDMiddleware, request_id_var
from verse_api.registry import TranslationRegistry
from verse_api.routes import health, verses
from verse_api.services.verse_service import VerseService

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure process-wide logging to stdout.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # The access log middleware replaces uvicorn's access log
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Open the data source pool before serving and release it afterwards.

    InitializationError propagates out of startup, so the server exits
    without ever accepting a request. The pool is shut down on every path.
    """
    setup_logging()
    pool: DataSourcePool = app.state.pool

    logger.info("Initializing databases...")
    try:
        await pool.initialize()
    except InitializationError as e:
        logger.critical("Failed to initialize databases: %s | Context: %s", e.message, e.context)
        await pool.shutdown()
        raise

    logger.info("Available translations: %s", pool.available())
    logger.info("Server ready at http://%s:%d", settings.host, settings.port)

    try:
        yield
    finally:
        logger.info("Verse API shutting down...")
        await pool.shutdown()
        logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map the exception hierarchy to HTTP responses.

    Handler hierarchy:
        MalformedRequestError        → 400
        UnknownTranslationError      → 404
        TranslationUnavailableError  → 503
        RetrievalError               → 500 (cause logged, never returned)
        HTTPException (framework)    → its own status, same body shape
        RequestValidationError       → 422
        Exception (fallback)         → 500

    Every body is `{"error": "<message>"}`. Stack traces, SQL and file
    paths are logged server-side only.
    """

    @app.exception_handler(MalformedRequestError)
    async def handle_malformed_request(request: Request, exc: MalformedRequestError):
        return _error(400, exc.message)

    @app.exception_handler(UnknownTranslationError)
    async def handle_unknown_translation(request: Request, exc: UnknownTranslationError):
        return _error(404, exc.message)

    @app.exception_handler(TranslationUnavailableError)
    async def handle_translation_unavailable(request: Request, exc: TranslationUnavailableError):
        rid = request_id_var.get("")
        logger.warning("[%s] Translation unavailable: %s", rid, exc.translation)
        return _error(503, exc.message)

    @app.exception_handler(RetrievalError)
    async def handle_retrieval_error(request: Request, exc: RetrievalError):
        rid = request_id_var.get("")
        logger.error(
            "[%s] Database query error for %s: %s | Context: %s",
            rid,
            exc.translation,
            exc.message,
            exc.context,
        )
        return _error(500, exc.message)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        return _error(422, "Invalid request")

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return _error(500, "An unexpected error occurred")


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(
    registry: Optional[TranslationRegistry] = None,
    pool: Optional[DataSourcePool] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        registry: Translation registry; defaults to the static registry
                  resolved against settings.assets_dir (or pool.registry
                  when a pool is given).
        pool:     Data source pool; created (but not opened) when omitted.
                  The lifespan opens it.

    Returns: Configured FastAPI instance. No I/O happens until startup.
    """
    if registry is None:
        registry = pool.registry if pool is not None else TranslationRegistry.from_assets(settings.assets_dir)
    if pool is None:
        pool = DataSourcePool(registry)

    app = FastAPI(
        title="Random Verse API",
        description="Returns a random verse from one of the pre-loaded scripture translations.",
        version=__version__,
        lifespan=lifespan,
    )

    app.state.registry = registry
    app.state.pool = pool
    app.state.verse_service = VerseService(registry, pool)

    # ── Register Middleware ───────────────────────────────────────────────
    # Last added runs first: CORS → RequestID → Logging → routes
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)
    app.add_middleware(CORSHeadersMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(verses.router)
    app.include_router(health.router)

    return app


# uvicorn expects `verse_api.main:app` to be importable
app = create_app()
