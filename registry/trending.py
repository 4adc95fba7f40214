"""
Trending ranking over recent usage events.

trending_score = recent usage count + stored total score, so reputable tools keep a floor
even with modest traffic. When the window holds no usage at all, the ranking falls back to
the top stored scores (cold start).

Ties are broken by recent usage (desc) and then tool id (asc) so results are stable.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Hashable, Iterable, Mapping
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Literal

Period = Literal["day", "week", "month"]

PERIOD_DAYS: dict[str, int] = {
    "day": 1,
    "week": 7,
    "month": 30,
}


@dataclass(frozen=True)
class UsageEvent:
    tool_id: Hashable
    timestamp: datetime


@dataclass(frozen=True)
class ToolStats:
    """Stored fields of a tool that the ranking reads."""

    tool_id: Hashable
    total_score: int
    download_count: int
    category: str


@dataclass(frozen=True)
class TrendingEntry:
    tool_id: Hashable
    trending_score: int
    recent_usage: int
    fallback: bool = False


def period_threshold(period: str, now: datetime) -> datetime:
    """Start of the lookback window for a period."""
    try:
        days = PERIOD_DAYS[period]
    except KeyError:
        raise ValueError(f"period must be one of {', '.join(PERIOD_DAYS)}") from None
    return now - timedelta(days=days)


def count_recent_usage(events: Iterable[UsageEvent], threshold: datetime) -> dict[Hashable, int]:
    """Count events at or after threshold, per tool."""
    return dict(Counter(e.tool_id for e in events if e.timestamp >= threshold))


def _tie_key(entry: TrendingEntry) -> tuple:
    return (-entry.trending_score, -entry.recent_usage, str(entry.tool_id))


def rank_by_usage(
    usage_counts: Mapping[Hashable, int],
    tools: Mapping[Hashable, ToolStats],
    limit: int,
    category: str | None = None,
) -> list[TrendingEntry]:
    """Rank tools from precomputed usage counts; falls back to stored scores when counts are empty."""
    if limit <= 0:
        raise ValueError("limit must be a positive integer")

    if not usage_counts:
        candidates = [t for t in tools.values() if category is None or t.category == category]
        candidates.sort(key=lambda t: (-t.total_score, -t.download_count, str(t.tool_id)))
        return [
            TrendingEntry(tool_id=t.tool_id, trending_score=t.total_score, recent_usage=0, fallback=True)
            for t in candidates[:limit]
        ]

    entries = []
    for tool_id, used in usage_counts.items():
        tool = tools.get(tool_id)
        # Category is applied after usage grouping, so over-fetched candidates outside it drop here
        if tool is None or (category is not None and tool.category != category):
            continue
        entries.append(TrendingEntry(tool_id=tool_id, trending_score=used + tool.total_score, recent_usage=used))
    entries.sort(key=_tie_key)
    return entries[:limit]


def rank_trending(
    events: Iterable[UsageEvent],
    tools: Mapping[Hashable, ToolStats],
    period: str,
    limit: int,
    now: datetime,
    category: str | None = None,
) -> list[TrendingEntry]:
    threshold = period_threshold(period, now)
    return rank_by_usage(count_recent_usage(events, threshold), tools, limit, category=category)
