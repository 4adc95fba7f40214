"""Trending tools: usage is grouped and blended with the stored score in SQL, final ordering by registry.trending."""

import logging
from datetime import datetime, timezone

from sqlalchemy import func

from registry.db import Database
from registry.models import Tool, ToolUsageLog
from registry.trending import ToolStats, TrendingEntry, period_threshold, rank_by_usage

logger = logging.getLogger(__name__)


def get_trending(
    db: Database,
    period: str = "week",
    limit: int = 10,
    category: str | None = None,
    overfetch_factor: int = 2,
    now: datetime | None = None,
) -> list[tuple[Tool, TrendingEntry]]:
    """Return (tool, entry) pairs, best first. Entries carry fallback=True when the window had no usage."""
    now = now or datetime.now(timezone.utc)
    threshold = period_threshold(period, now)
    with db.session_scope() as session:
        has_usage = session.query(ToolUsageLog.id).filter(ToolUsageLog.created_at >= threshold).first() is not None

        if has_usage:
            usage = (
                session.query(ToolUsageLog.tool_id, func.count(ToolUsageLog.id).label("recent_usage"))
                .filter(ToolUsageLog.created_at >= threshold)
                .group_by(ToolUsageLog.tool_id)
                .subquery()
            )
            trending_score = (usage.c.recent_usage + Tool.total_score).label("trending_score")
            query = session.query(Tool, usage.c.recent_usage).join(usage, usage.c.tool_id == Tool.id)
            if category:
                query = query.filter(Tool.category == category)
            # Candidates are cut by the blended score, so the cap never drops a better-ranked tool
            rows = (
                query.order_by(trending_score.desc(), usage.c.recent_usage.desc(), Tool.id)
                .limit(limit * overfetch_factor)
                .all()
            )
            tools = [tool for tool, _ in rows]
            counts = {tool.id: int(recent_usage) for tool, recent_usage in rows}
            if not counts:
                return []
        else:
            query = session.query(Tool)
            if category:
                query = query.filter(Tool.category == category)
            tools = query.order_by(Tool.total_score.desc(), Tool.download_count.desc(), Tool.id).limit(limit).all()
            counts = {}
            logger.info("No usage in the last %s; ranking %d tools by stored score", period, len(tools))

        by_id = {t.id: t for t in tools}
        stats = {
            t.id: ToolStats(tool_id=t.id, total_score=t.total_score, download_count=t.download_count, category=t.category)
            for t in tools
        }
        entries = rank_by_usage(counts, stats, limit, category=category)
        return [(by_id[e.tool_id], e) for e in entries]
