"""
QRVault Backend — FastAPI Application Factory
===============================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app(settings) returns a configured FastAPI app;
       the lifespan handler builds the store, generator and service from those
       settings and attaches them to `app.state`.
Who:   uvicorn (`qrvault.main:app`), `python -m qrvault`, and the test suite.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────────┐ ┌──────────────────────────────┐  │
    │  │  Request ID  │→│  Access Logging              │  │
    │  └──────────────┘ └──────────────────────────────┘  │
    │                                                     │
    │  Routes:                                            │
    │  ┌───────┐ ┌────────────────┐ ┌──────────────────┐  │
    │  │ GET / │ │ POST /generate │ │ /qr/{id}         │  │
    │  └───────┘ └────────────────┘ └──────────────────┘  │
    │                                                     │
    │  Exception Handlers:                                │
    │  ┌──────────────────────────────────────────────┐   │
    │  │ Validation→400 │ NotFound→404 │ Internal→500 │   │
    │  └──────────────────────────────────────────────┘   │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:
    1. Initialize logging
    2. Open the SQLite database and create the schema if needed
    3. Build generator + service and attach them to app.state

    Shutdown:
    1. Dispose the database engine
"""

import logging
import sys
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.templating import Jinja2Templates

from qrvault import __version__
from qrvault.config import Settings, settings as default_settings
from qrvault.exceptions import InternalError, NotFoundError, ValidationError
from qrvault.middleware.logging import RequestLoggingMiddleware
from qrvault.middleware.request_id import RequestIDMiddleware, request_id_var
from qrvault.routes import health, pages, qr_codes
from qrvault.services.qr_generator import QRCodeGenerator
from qrvault.services.qr_service import QRCodeService
from qrvault.services.qr_store import QRCodeStore

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(level: str = "INFO") -> None:
    """
    Configure the root logger for the whole process.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s, written to stdout
    so container runtimes collect it.
    """
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # qrvault.access already logs every request
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    if level != "DEBUG":
        logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Build the long-lived objects on startup and release them on shutdown.

    Everything a request handler needs is reachable from `app.state`:
        settings, qr_service (with its store and generator), templates
    """
    app_settings: Settings = app.state.settings

    # ── Startup ───────────────────────────────────────────────────────────
    setup_logging(app_settings.log_level)
    logger.info("QRVault %s starting up...", __version__)

    store = QRCodeStore(app_settings.db_path, echo=app_settings.log_level == "DEBUG")
    await store.init()

    generator = QRCodeGenerator(
        size=app_settings.qr_size,
        error_correction=app_settings.qr_error_correction,
    )
    app.state.qr_service = QRCodeService(store=store, generator=generator)

    logger.info("Server ready at http://%s:%d", app_settings.host, app_settings.port)

    yield

    # ── Shutdown ──────────────────────────────────────────────────────────
    logger.info("QRVault shutting down...")
    await store.close()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exception types to HTTP status codes and JSON error bodies.

    Handler hierarchy:
        ValidationError          → 400 Bad Request
        RequestValidationError   → 400 Bad Request (bad path id, malformed JSON)
        NotFoundError            → 404 Not Found
        InternalError            → 500 (DatabaseError, CodecError)
        Exception (fallback)     → 500

    5xx bodies never contain internal details; those are logged server-side.
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        """Client sent invalid input; tell them what's wrong."""
        rid = request_id_var.get("")
        logger.warning("[%s] Validation error: %s", rid, exc.message)
        return JSONResponse(
            status_code=400,
            content={
                "error": "validation_error",
                "message": exc.message,
                "details": exc.context,
                "request_id": rid,
            },
        )

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        """FastAPI could not parse the path id or the request body."""
        rid = request_id_var.get("")
        errors = [
            {"loc": [str(part) for part in err.get("loc", ())], "msg": err.get("msg", "")}
            for err in exc.errors()
        ]
        logger.warning("[%s] Request validation error: %s", rid, errors)
        return JSONResponse(
            status_code=400,
            content={
                "error": "validation_error",
                "message": "Invalid request",
                "details": {"errors": errors},
                "request_id": rid,
            },
        )

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        """Requested QR code doesn't exist."""
        rid = request_id_var.get("")
        return JSONResponse(
            status_code=404,
            content={
                "error": "not_found",
                "message": exc.message,
                "request_id": rid,
            },
        )

    @app.exception_handler(InternalError)
    async def handle_internal_error(request: Request, exc: InternalError):
        """Storage or codec failure: generic message to the client, details to the log."""
        rid = request_id_var.get("")
        logger.error(
            "[%s] %s: %s | Context: %s",
            rid,
            type(exc).__name__,
            exc.message,
            exc.context,
            exc_info=exc,
        )
        return JSONResponse(
            status_code=500,
            content={
                "error": "server_error",
                "message": "An internal error occurred. Please try again later.",
                "request_id": rid,
            },
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        """Catch-all: no stack trace reaches the client."""
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=exc)
        return JSONResponse(
            status_code=500,
            content={
                "error": "internal_server_error",
                "message": "An unexpected error occurred. Please try again later.",
                "request_id": rid,
            },
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(app_settings: Optional[Settings] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        app_settings: Configuration to run with; defaults to the environment-
                      derived `qrvault.config.settings`.

    Creating the app has no side effects: the database is opened by the
    lifespan handler when the server (or test client) starts it.
    """
    app_settings = app_settings or default_settings

    app = FastAPI(
        title="QRVault",
        description="Generate, label, and keep QR codes in a local SQLite database.",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = app_settings
    app.state.templates = Jinja2Templates(directory=str(TEMPLATES_DIR))

    # Last added runs first: RequestID → Logging → routes
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(pages.router)
    app.include_router(qr_codes.router)
    app.include_router(health.router)

    return app


# uvicorn expects `qrvault.main:app` to be importable
app = create_app()
