"""
FastAPI application factory.

The Database handle is created here (or injected by the caller) and stored on app.state;
routers reach it through registry.deps.get_db.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, RedirectResponse

from registry import __version__
from registry.config import Settings, get_settings
from registry.db import Database
from registry.errors import DependencyUnavailableError
from registry.routers import health
from registry.routers.api_router import api_router
from registry.seed import seed_categories

logger = logging.getLogger(__name__)

OPENAPI_TAGS = [
    {"name": "Health", "description": "Service health, database status and registry statistics."},
    {"name": "Tools", "description": "Tool registry: list, create, update, delete, score breakdown, usage."},
    {"name": "Search", "description": "Full-text search with filters, sorting and pagination."},
    {"name": "Trending", "description": "Tools ranked by recent usage and trust score."},
    {"name": "Categories", "description": "Tool categories and their tool counts."},
    {"name": "Discovery", "description": "Queue of tools submitted for review."},
]


def create_app(settings: Settings | None = None, database: Database | None = None) -> FastAPI:
    """Build the application. Without an explicit database, one is created from DATABASE_URL (if set)."""
    settings = settings or get_settings()
    owns_database = database is None
    if database is None:
        database = Database.from_settings(settings)
        if database is None:
            logger.warning("DATABASE_URL is not set; API routes will respond 503")

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Startup/shutdown lifecycle."""
        db: Database | None = app.state.db
        if db is not None:
            try:
                if settings.create_schema_on_startup:
                    db.create_all()
                if settings.seed_on_startup:
                    seed_categories(db)
            except Exception as e:
                logger.warning("Startup schema/seed skipped: %s", e)
        yield
        if db is not None and owns_database:
            db.dispose()

    app = FastAPI(
        title="Tool Registry",
        description="Catalog of tool integrations with trust scores, search and trending.",
        version=__version__,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_tags=OPENAPI_TAGS,
    )
    app.state.settings = settings
    app.state.db = database

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.get_cors_origins() or ["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(DependencyUnavailableError)
    async def _dependency_unavailable(request: Request, exc: DependencyUnavailableError):
        logger.warning("%s %s: %s", request.method, request.url.path, exc)
        return JSONResponse(status_code=503, content={"detail": str(exc)})

    @app.get("/", include_in_schema=False)
    def _root():
        """Redirect browser visitors to API docs."""
        return RedirectResponse(url="/docs", status_code=302)

    app.include_router(api_router)
    app.include_router(health.router)
    return app
