"""FastAPI dependencies: the Database handle and Settings held on app.state."""

from fastapi import Request

from registry.config import Settings
from registry.db import Database
from registry.errors import DependencyUnavailableError


def get_db(request: Request) -> Database:
    """Database created by the application factory. Raises DependencyUnavailableError if not configured."""
    db = getattr(request.app.state, "db", None)
    if db is None:
        raise DependencyUnavailableError("Database is not configured. Set DATABASE_URL in .env")
    return db


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings
