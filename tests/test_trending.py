"""Unit tests for the trending ranking."""

from datetime import timedelta

import pytest

from registry.trending import (
    ToolStats,
    UsageEvent,
    count_recent_usage,
    period_threshold,
    rank_by_usage,
    rank_trending,
)

from tests.conftest import NOW


def _tools(*specs: tuple[str, int, int, str]) -> dict[str, ToolStats]:
    """(id, total_score, download_count, category) tuples to a lookup."""
    return {
        tool_id: ToolStats(tool_id=tool_id, total_score=score, download_count=downloads, category=category)
        for tool_id, score, downloads, category in specs
    }


def _events(tool_id: str, count: int, age: timedelta = timedelta(hours=1)) -> list[UsageEvent]:
    return [UsageEvent(tool_id=tool_id, timestamp=NOW - age) for _ in range(count)]


class TestPeriodThreshold:
    @pytest.mark.parametrize(("period", "days"), [("day", 1), ("week", 7), ("month", 30)])
    def test_periods(self, period: str, days: int) -> None:
        assert period_threshold(period, NOW) == NOW - timedelta(days=days)

    def test_unknown_period(self) -> None:
        with pytest.raises(ValueError):
            period_threshold("year", NOW)


class TestCountRecentUsage:
    def test_counts_per_tool_inside_window(self) -> None:
        threshold = NOW - timedelta(days=1)
        events = [
            UsageEvent("a", NOW - timedelta(hours=2)),
            UsageEvent("a", NOW - timedelta(hours=3)),
            UsageEvent("b", NOW - timedelta(hours=4)),
            UsageEvent("b", NOW - timedelta(days=2)),
        ]

        assert count_recent_usage(events, threshold) == {"a": 2, "b": 1}

    def test_event_at_threshold_is_included(self) -> None:
        threshold = NOW - timedelta(days=1)

        assert count_recent_usage([UsageEvent("a", threshold)], threshold) == {"a": 1}

    def test_no_events(self) -> None:
        assert count_recent_usage([], NOW) == {}


class TestFallback:
    def test_top_stored_scores_when_no_usage(self) -> None:
        tools = _tools(("low", 10, 0, "market"), ("high", 90, 0, "market"), ("mid", 50, 0, "defi"))

        ranked = rank_trending([], tools, period="day", limit=2, now=NOW)

        assert [e.tool_id for e in ranked] == ["high", "mid"]
        assert [e.recent_usage for e in ranked] == [0, 0]
        assert [e.trending_score for e in ranked] == [90, 50]
        assert all(e.fallback for e in ranked)

    def test_old_events_outside_window_trigger_fallback(self) -> None:
        tools = _tools(("a", 10, 0, "market"), ("b", 90, 0, "market"))
        events = _events("a", 100, age=timedelta(days=3))

        ranked = rank_trending(events, tools, period="day", limit=5, now=NOW)

        assert [e.tool_id for e in ranked] == ["b", "a"]
        assert all(e.fallback for e in ranked)

    def test_download_count_breaks_score_ties(self) -> None:
        tools = _tools(("a", 60, 5, "market"), ("b", 60, 50, "market"))

        ranked = rank_by_usage({}, tools, limit=2)

        assert [e.tool_id for e in ranked] == ["b", "a"]

    def test_fallback_filters_category(self) -> None:
        tools = _tools(("a", 90, 0, "market"), ("b", 50, 0, "defi"), ("c", 10, 0, "defi"))

        ranked = rank_by_usage({}, tools, limit=5, category="defi")

        assert [e.tool_id for e in ranked] == ["b", "c"]


class TestBlend:
    def test_usage_plus_stored_score(self) -> None:
        tools = _tools(("A", 10, 0, "market"), ("B", 50, 0, "market"))
        events = _events("A", 5) + _events("B", 1)

        ranked = rank_trending(events, tools, period="week", limit=10, now=NOW)

        assert [(e.tool_id, e.trending_score, e.recent_usage) for e in ranked] == [("B", 51, 1), ("A", 15, 5)]
        assert not any(e.fallback for e in ranked)

    def test_only_tools_with_usage_are_ranked(self) -> None:
        tools = _tools(("used", 10, 0, "market"), ("idle", 100, 0, "market"))

        ranked = rank_by_usage({"used": 3}, tools, limit=10)

        assert [e.tool_id for e in ranked] == ["used"]

    def test_unknown_tool_ids_are_skipped(self) -> None:
        tools = _tools(("a", 10, 0, "market"))

        ranked = rank_by_usage({"a": 1, "deleted": 50}, tools, limit=10)

        assert [e.tool_id for e in ranked] == ["a"]

    def test_limit_truncates(self) -> None:
        tools = _tools(("a", 10, 0, "x"), ("b", 20, 0, "x"), ("c", 30, 0, "x"))

        ranked = rank_by_usage({"a": 1, "b": 1, "c": 1}, tools, limit=2)

        assert [e.tool_id for e in ranked] == ["c", "b"]

    def test_invalid_limit(self) -> None:
        with pytest.raises(ValueError):
            rank_by_usage({}, {}, limit=0)


class TestCategoryFilter:
    def test_category_applied_after_usage_ranking(self) -> None:
        tools = _tools(("hot", 90, 0, "trading"), ("defi-1", 20, 0, "defi"), ("defi-2", 10, 0, "defi"))
        usage = {"hot": 40, "defi-1": 2, "defi-2": 5}

        ranked = rank_by_usage(usage, tools, limit=1, category="defi")

        assert [(e.tool_id, e.trending_score) for e in ranked] == [("defi-1", 22)]

    def test_usage_outside_category_gives_empty_result(self) -> None:
        tools = _tools(("hot", 90, 0, "trading"), ("quiet", 80, 0, "defi"))

        assert rank_by_usage({"hot": 3}, tools, limit=5, category="defi") == []


class TestTieBreak:
    def test_recent_usage_then_id(self) -> None:
        tools = _tools(("b", 10, 0, "x"), ("a", 10, 0, "x"), ("c", 5, 0, "x"))
        # b and a tie on 12; c reaches 12 with more usage
        usage = {"b": 2, "a": 2, "c": 7}

        ranked = rank_by_usage(usage, tools, limit=3)

        assert [e.tool_id for e in ranked] == ["c", "a", "b"]

    def test_deterministic_across_input_order(self) -> None:
        tools = _tools(("x", 10, 0, "k"), ("y", 10, 0, "k"), ("z", 10, 0, "k"))
        forward = rank_by_usage({"x": 1, "y": 1, "z": 1}, tools, limit=3)
        backward = rank_by_usage({"z": 1, "y": 1, "x": 1}, tools, limit=3)

        assert forward == backward
        assert len({e.tool_id for e in forward}) == 3
