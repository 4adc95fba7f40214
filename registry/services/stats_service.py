"""Registry statistics for the health endpoint."""

from datetime import datetime, timedelta, timezone

from sqlalchemy import func

from registry.db import Database
from registry.models import Category, Tool, ToolUsageLog


def registry_stats(db: Database, now: datetime | None = None) -> dict:
    """Totals, tools per grade, and usage events in the last 24 hours."""
    now = now or datetime.now(timezone.utc)
    with db.session_scope() as session:
        by_grade = {grade: count for grade, count in session.query(Tool.grade, func.count(Tool.id)).group_by(Tool.grade)}
        total_categories = session.query(func.count(Category.id)).scalar() or 0
        recent_activity = (
            session.query(func.count(ToolUsageLog.id))
            .filter(ToolUsageLog.created_at > now - timedelta(hours=24))
            .scalar()
            or 0
        )
        return {
            "total_tools": sum(by_grade.values()),
            "total_categories": total_categories,
            "tools_by_grade": {g: by_grade.get(g, 0) for g in ("a", "b", "f")},
            "recent_activity": recent_activity,
        }
