"""Application factory and CLI entry point.

``create_app()`` builds the FastAPI application with:
  - Lifespan handler that loads the pathway registry, creates missing
    tables and builds the case service once
  - CORS middleware and a request-logging middleware
  - Global exception handlers (service ValueError → 404/409/503/400,
    OpenAI errors → 429/401/502)
  - All API routes mounted under ``/api``
  - A ``/health`` endpoint for readiness probes

The ``cli()`` function is the ``intake-server`` console-script entry point.
"""

from __future__ import annotations

import logging
import time
from contextlib import asynccontextmanager
from typing import AsyncGenerator

import openai
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text

from intake_db.engine import dispose_engine, get_engine, init_models
from intake_pathways.registry import PathwayRegistry, get_default_registry
from intake_pathways.service import CaseService

from intake_server.config import ServerSettings, load_settings
from intake_server.errors import (
    generic_error_handler,
    key_error_handler,
    openai_error_handler,
    value_error_handler,
)
from intake_server.llm import OpenAINoteWriter
from intake_server.routes import register_routes

logger = logging.getLogger(__name__)


# ------------------------------------------------------------------
# Lifespan: runs once at startup/shutdown
# ------------------------------------------------------------------

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Initialise shared resources at startup, tear down on shutdown.

    Startup:
      1. Load the pathway registry (packaged data unless overridden)
      2. Create missing database tables
      3. Build ``CaseService`` with an OpenAI writer when a key is set
      4. Stash them on ``app.state`` for dependency injection

    Shutdown:
      1. Dispose the database engine's connection pool
    """
    settings: ServerSettings = app.state.settings

    # --- Pathway registry ---
    if settings.pathway_dir:
        registry = PathwayRegistry(settings.pathway_dir)
        registry.load()
    else:
        registry = get_default_registry()

    # --- Tables ---
    if settings.create_tables:
        await init_models()

    # --- Case service ---
    writer = None
    if settings.openai_api_key:
        writer = OpenAINoteWriter(settings.openai_api_key, model=settings.openai_model)
        logger.info("AI note writer enabled (model=%s)", settings.openai_model)
    else:
        logger.warning("OPENAI_API_KEY not set; summary and diagnosis endpoints disabled")

    app.state.registry = registry
    app.state.service = CaseService(writer=writer)

    yield

    # --- Shutdown ---
    await dispose_engine()
    logger.info("Database engine disposed")


# ------------------------------------------------------------------
# Factory
# ------------------------------------------------------------------

def create_app(settings: ServerSettings | None = None) -> FastAPI:
    """Build and return the configured FastAPI application."""
    if settings is None:
        settings = load_settings()

    # --- Configure logging ---
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    app = FastAPI(
        title="Patient Intake API Server",
        description="REST API for patient intake: cases, adaptive symptom questionnaires and AI clinical notes",
        version="0.1.0",
        lifespan=lifespan,
    )

    # Store settings so the lifespan handler can read them
    app.state.settings = settings

    # --- CORS ---
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # --- Request logging ---
    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - start) * 1000
        if response.status_code >= 500:
            level = logging.ERROR
        elif response.status_code >= 400:
            level = logging.WARNING
        else:
            level = logging.INFO
        logger.log(
            level, "%s %s -> %d (%.1f ms)",
            request.method, request.url.path, response.status_code, elapsed_ms,
        )
        return response

    # --- Exception handlers ---
    app.add_exception_handler(ValueError, value_error_handler)
    app.add_exception_handler(KeyError, key_error_handler)
    app.add_exception_handler(openai.APIError, openai_error_handler)
    app.add_exception_handler(Exception, generic_error_handler)

    # --- Health check (outside /api prefix) ---
    @app.get("/health")
    async def health() -> dict:
        """Readiness probe — verifies DB connectivity."""
        try:
            engine = get_engine()
            async with engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            return {"status": "ok"}
        except Exception as exc:
            logger.error("Health check failed: %s", exc)
            return {"status": "error", "detail": "database unavailable"}

    # --- Mount all API routes ---
    register_routes(app)

    return app


# ------------------------------------------------------------------
# Module-level ASGI export (for uvicorn intake_server.app:app)
# ------------------------------------------------------------------
app = create_app()


# ------------------------------------------------------------------
# CLI entry point
# ------------------------------------------------------------------

def cli() -> None:
    """Console-script entry point: ``intake-server``."""
    import uvicorn

    settings = load_settings()
    uvicorn.run(
        "intake_server.app:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
        reload=False,
    )
