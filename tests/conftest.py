"""Shared pytest fixtures and factory functions for registry tests."""

from __future__ import annotations

from collections.abc import Generator
from datetime import datetime, timezone
from typing import Any

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool

from registry.config import Settings
from registry.db import Database
from registry.models import Category, ToolUsageLog
from registry.schemas.requests import CreateToolRequest
from registry.server import create_app

NOW = datetime(2026, 10, 18, 12, 0, tzinfo=timezone.utc)

REQUIRED_ONLY = {
    "is_validated": True,
    "has_tools": True,
    "has_deployment": True,
    "has_readme": True,
}


@pytest.fixture
def db() -> Generator[Database]:
    """In-memory SQLite Database with all tables created."""
    database = Database("sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool)
    database.create_all()
    yield database
    database.dispose()


@pytest.fixture
def settings() -> Settings:
    return Settings(_env_file=None, database_url="", seed_on_startup=False)


@pytest.fixture
def client(db: Database, settings: Settings) -> Generator[TestClient]:
    app = create_app(settings, database=db)
    with TestClient(app) as c:
        yield c


def make_tool_request(**overrides: Any) -> CreateToolRequest:
    """Create a CreateToolRequest with sensible defaults, overridable via kwargs."""
    defaults: dict[str, Any] = {
        "name": "get_token_price",
        "description": "Fetch the current price of a token",
        "category": "market",
        "input_schema": {"type": "object", "properties": {"symbol": {"type": "string"}}},
        "has_tools": False,
    }
    defaults.update(overrides)
    return CreateToolRequest(**defaults)


def tool_payload(**overrides: Any) -> dict[str, Any]:
    """JSON body for POST /api/tools."""
    payload: dict[str, Any] = {
        "name": "get_token_price",
        "description": "Fetch the current price of a token",
        "category": "market",
        "input_schema": {"type": "object", "properties": {"symbol": {"type": "string"}}},
    }
    payload.update(overrides)
    return payload


def add_category(db: Database, slug: str, tool_count: int = 0) -> None:
    with db.session_scope() as session:
        session.add(Category(slug=slug, name=slug.title(), tool_count=tool_count))


def category_count(db: Database, slug: str) -> int:
    with db.session_scope() as session:
        return session.query(Category.tool_count).filter(Category.slug == slug).scalar()


def add_usage(db: Database, tool_id: Any, when: datetime, count: int = 1, action: str = "call") -> None:
    with db.session_scope() as session:
        for _ in range(count):
            session.add(ToolUsageLog(tool_id=tool_id, action=action, created_at=when))
