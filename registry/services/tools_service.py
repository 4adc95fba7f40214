"""Tools CRUD, search, and usage recording.

Every write that touches a quality flag recomputes the stored score in the same transaction.
"""

import logging
from typing import Any
from uuid import UUID

from sqlalchemy import and_, func, or_
from sqlalchemy.exc import IntegrityError

from registry.db import Database
from registry.errors import ConflictError
from registry.models import Tool, ToolLabel, ToolUsageLog
from registry.schemas.requests import CreateToolRequest
from registry.scoring import ScoreFlags, has_flag_changes, merge_score_flags
from registry.services.categories_service import adjust_tool_count

logger = logging.getLogger(__name__)

SORT_COLUMNS = {
    "name": Tool.name,
    "createdAt": Tool.created_at,
    "updatedAt": Tool.updated_at,
    "totalScore": Tool.total_score,
    "downloadCount": Tool.download_count,
}

# Fields a partial update may set; None is ignored for the first group and clears the second
_REQUIRED_FIELDS = ("name", "description", "category", "version", "source_type", "input_schema", "requires_api_key")
_NULLABLE_FIELDS = ("source_url", "mcp_server_url", "repository_url", "output_schema", "api_key_name")
_LABEL_FIELDS = {"tags": "tag", "chains": "chain", "protocols": "protocol"}


def _has_label(kind: str, value: str):
    return Tool.labels.any(and_(ToolLabel.kind == kind, ToolLabel.value == value))


def search_tools(
    db: Database,
    q: str | None = None,
    category: str | None = None,
    chain: str | None = None,
    protocol: str | None = None,
    grade: str | None = None,
    requires_api_key: bool | None = None,
    tags: list[str] | None = None,
    page: int = 1,
    limit: int = 20,
    sort_by: str = "totalScore",
    sort_order: str = "desc",
) -> tuple[list[Tool], int]:
    """Filter, sort and paginate tools. Text search is a case-insensitive substring match."""
    offset = (page - 1) * limit
    with db.session_scope() as session:
        query = session.query(Tool)
        q = (q or "").strip()
        if q:
            query = query.filter(
                or_(Tool.name.icontains(q, autoescape=True), Tool.description.icontains(q, autoescape=True))
            )
        if category:
            query = query.filter(Tool.category == category)
        if grade:
            query = query.filter(Tool.grade == grade)
        if requires_api_key is not None:
            query = query.filter(Tool.requires_api_key.is_(requires_api_key))
        if chain:
            query = query.filter(_has_label("chain", chain))
        if protocol:
            query = query.filter(_has_label("protocol", protocol))
        for tag in tags or []:
            query = query.filter(_has_label("tag", tag))

        total = query.count()
        column = SORT_COLUMNS.get(sort_by, Tool.total_score)
        ordering = column.asc() if sort_order == "asc" else column.desc()
        rows = query.order_by(ordering, Tool.name, Tool.id).offset(offset).limit(limit).all()
        return list(rows), total


def get_tool(db: Database, tool_id: UUID) -> Tool | None:
    with db.session_scope() as session:
        return session.query(Tool).filter(Tool.id == tool_id).first()


def create_tool(db: Database, data: CreateToolRequest) -> Tool:
    with db.session_scope() as session:
        if session.query(Tool.id).filter(Tool.name == data.name).first():
            raise ConflictError(f'A tool with name "{data.name}" already exists')

        tool = Tool(
            name=data.name,
            description=data.description,
            category=data.category,
            version=data.version,
            source_type=data.source_type,
            source_url=str(data.source_url) if data.source_url else None,
            mcp_server_url=str(data.mcp_server_url) if data.mcp_server_url else None,
            repository_url=str(data.repository_url) if data.repository_url else None,
            input_schema=data.input_schema,
            output_schema=data.output_schema,
            requires_api_key=data.requires_api_key,
            api_key_name=data.api_key_name,
        )
        result = tool.apply_score_flags(ScoreFlags.from_mapping(data.model_dump()))
        for field, kind in _LABEL_FIELDS.items():
            tool.set_labels(kind, getattr(data, field))
        session.add(tool)
        try:
            session.flush()
        except IntegrityError as e:
            raise ConflictError(f'A tool with name "{data.name}" already exists') from e
        adjust_tool_count(session, tool.category, 1)
        session.refresh(tool)
        logger.info("Created tool %s (%s) grade=%s score=%s", tool.name, tool.id, result.grade, result.total_score)
        return tool


def update_tool(db: Database, tool_id: UUID, changes: dict[str, Any]) -> Tool | None:
    """Apply a partial update as one read-modify-write on the locked row.

    Flags present in `changes` are merged over the stored ones and the score is recomputed.
    A category change moves one unit of tool_count from the old category to the new one.
    """
    with db.session_scope() as session:
        tool = session.query(Tool).filter(Tool.id == tool_id).with_for_update().first()
        if not tool:
            return None

        changes = dict(changes)
        for field in ("name", "description", "category"):
            if changes.get(field) is not None:
                changes[field] = changes[field].strip()
                if not changes[field]:
                    raise ValueError(f"{field} must not be blank")

        new_name = changes.get("name")
        if new_name is not None:
            if new_name != tool.name and session.query(Tool.id).filter(Tool.name == new_name).first():
                raise ConflictError(f'A tool with name "{new_name}" already exists')

        old_category = tool.category
        for field in _REQUIRED_FIELDS:
            if changes.get(field) is not None:
                setattr(tool, field, changes[field])
        for field in _NULLABLE_FIELDS:
            if field in changes:
                setattr(tool, field, changes[field])
        for field, kind in _LABEL_FIELDS.items():
            if changes.get(field) is not None:
                tool.set_labels(kind, changes[field])

        if has_flag_changes(changes):
            result = tool.apply_score_flags(merge_score_flags(tool.score_flags, changes))
            logger.info("Rescored tool %s: grade=%s score=%s", tool.id, result.grade, result.total_score)

        if tool.category != old_category:
            adjust_tool_count(session, old_category, -1)
            adjust_tool_count(session, tool.category, 1)
            logger.info("Tool %s moved from category %s to %s", tool.id, old_category, tool.category)

        tool.updated_at = func.now()
        try:
            session.flush()
        except IntegrityError as e:
            raise ConflictError(f'A tool with name "{tool.name}" already exists') from e
        session.refresh(tool)
        return tool


def delete_tool(db: Database, tool_id: UUID) -> bool:
    """Delete a tool; its usage events and labels cascade."""
    with db.session_scope() as session:
        tool = session.query(Tool).filter(Tool.id == tool_id).first()
        if not tool:
            return False
        category, name = tool.category, tool.name
        session.delete(tool)
        session.flush()
        adjust_tool_count(session, category, -1)
        logger.info("Deleted tool %s (%s)", name, tool_id)
        return True


def record_usage(
    db: Database,
    tool_id: UUID,
    action: str = "view",
    metadata: dict[str, Any] | None = None,
) -> ToolUsageLog | None:
    """Append a usage event. Non-view actions bump usage_count; downloads also bump download_count.

    Returns None if the tool does not exist.
    """
    with db.session_scope() as session:
        tool = session.query(Tool).filter(Tool.id == tool_id).first()
        if not tool:
            return None
        event = ToolUsageLog(tool_id=tool_id, action=action, metadata_=metadata)
        session.add(event)
        if action != "view":
            tool.usage_count = Tool.usage_count + 1
        if action == "download":
            tool.download_count = Tool.download_count + 1
        session.flush()
        session.refresh(event)
        return event
