"""Categories CRUD and the per-category tool counter."""

import logging

from sqlalchemy import case
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from registry.db import Database
from registry.errors import ConflictError
from registry.models import Category

logger = logging.getLogger(__name__)


def list_categories(db: Database) -> list[Category]:
    with db.session_scope() as session:
        rows = session.query(Category).order_by(Category.tool_count.desc(), Category.slug).all()
        return list(rows)


def get_category(db: Database, slug: str) -> Category | None:
    with db.session_scope() as session:
        return session.query(Category).filter(Category.slug == slug).first()


def create_category(
    db: Database,
    name: str,
    slug: str,
    description: str | None = None,
    icon: str | None = None,
) -> Category:
    name = (name or "").strip()
    slug = (slug or "").strip()
    if not name:
        raise ValueError("name is required")
    if not slug:
        raise ValueError("slug is required")
    with db.session_scope() as session:
        if session.query(Category.id).filter(Category.slug == slug).first():
            raise ConflictError(f'A category with slug "{slug}" already exists')
        category = Category(name=name, slug=slug, description=description, icon=icon)
        session.add(category)
        try:
            session.flush()
        except IntegrityError as e:
            raise ConflictError(f'A category named "{name}" or with slug "{slug}" already exists') from e
        session.refresh(category)
        logger.info("Created category %s", slug)
        return category


def adjust_tool_count(session: Session, slug: str, delta: int) -> None:
    """Move a category's tool counter by delta, never below zero. Unknown slugs are ignored."""
    if delta == 0:
        return
    if delta > 0:
        value = Category.tool_count + delta
    else:
        value = case((Category.tool_count + delta > 0, Category.tool_count + delta), else_=0)
    session.query(Category).filter(Category.slug == slug).update(
        {Category.tool_count: value}, synchronize_session=False
    )
