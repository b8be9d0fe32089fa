"""Application factory and CLI entry point.

``create_app()`` builds the FastAPI application with:
  - Lifespan handler that loads the question catalog and builds the service once
  - CORS middleware
  - Global exception handlers (SDK ValueError → 404/400, bad path id → 404, bad body/query → 400)
  - All API routes mounted under ``/api/v1``
  - A ``/health`` endpoint for readiness probes

The ``cli()`` function is the ``absence-server`` console-script entry point.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text

from absence_db.engine import dispose_engine, get_engine
from absence_questions.catalog import QuestionCatalog
from absence_questions.service import AbsenceQuestionService

from absence_server.config import ServerSettings, load_settings
from absence_server.errors import (
    generic_error_handler,
    key_error_handler,
    validation_error_handler,
    value_error_handler,
)
from absence_server.routes import register_routes

logger = logging.getLogger(__name__)


# ------------------------------------------------------------------
# Lifespan, runs once at startup/shutdown
# ------------------------------------------------------------------

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Load the catalog at startup; dispose the DB pool on shutdown.

    The catalog is immutable for the life of the process, so one
    ``QuestionCatalog`` and one ``AbsenceQuestionService`` are shared by
    every request via ``app.state``.
    """
    settings: ServerSettings = app.state.settings

    catalog = QuestionCatalog(
        catalog_dir=settings.catalog_dir,
        trigger_match=settings.trigger_match,
        scenario_roots=settings.scenario_roots,
    )
    catalog.load()

    app.state.catalog = catalog
    app.state.service = AbsenceQuestionService(catalog)

    yield

    await dispose_engine()
    logger.info("Database engine disposed")


# ------------------------------------------------------------------
# Factory
# ------------------------------------------------------------------

def create_app(settings: ServerSettings | None = None) -> FastAPI:
    """Build and return the configured FastAPI application."""
    if settings is None:
        settings = load_settings()

    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    app = FastAPI(
        title="Absence Questions API",
        description="Dependent-question flow and risk assessment for absence reporting",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(ValueError, value_error_handler)
    app.add_exception_handler(KeyError, key_error_handler)
    app.add_exception_handler(Exception, generic_error_handler)

    @app.get("/health")
    async def health() -> dict:
        """Readiness probe — verifies DB connectivity."""
        try:
            async with get_engine().connect() as conn:
                await conn.execute(text("SELECT 1"))
            return {"status": "ok"}
        except Exception as exc:
            logger.error("Health check failed: %s", exc)
            return {"status": "error", "detail": str(exc)}

    register_routes(app)

    return app


# ------------------------------------------------------------------
# Module-level ASGI export (for uvicorn absence_server.app:app)
# ------------------------------------------------------------------
app = create_app()


def cli() -> None:
    """Console-script entry point: ``absence-server``."""
    import uvicorn

    settings = load_settings()
    uvicorn.run(
        "absence_server.app:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
        reload=False,
    )
