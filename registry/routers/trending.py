"""Trending API (under /api/trending)."""

from typing import Literal

from fastapi import APIRouter, Depends, Query

from registry.config import Settings
from registry.db import Database
from registry.deps import get_app_settings, get_db
from registry.routers.tools import tool_to_item
from registry.schemas.responses import TrendingResponse, TrendingToolItem
from registry.services import trending_service

router = APIRouter(tags=["Trending"])


@router.get(
    "/trending",
    summary="Trending tools",
    description="Tools ranked by recent usage plus stored trust score. "
    "Falls back to top-rated tools when the period has no usage.",
    operation_id="getTrending",
    response_model=TrendingResponse,
)
def get_trending(
    period: Literal["day", "week", "month"] | None = Query(None, description="Lookback window (default: week)"),
    limit: int = Query(10, ge=1, le=50),
    category: str | None = Query(None, description="Category slug"),
    db: Database = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
):
    period = period or settings.trending_default_period
    ranked = trending_service.get_trending(
        db,
        period=period,
        limit=limit,
        category=category,
        overfetch_factor=settings.trending_overfetch_factor,
    )
    fallback = any(entry.fallback for _, entry in ranked)
    return TrendingResponse(
        period=period,
        data=[
            TrendingToolItem(tool=tool_to_item(tool), trendingScore=entry.trending_score, recentUsage=entry.recent_usage)
            for tool, entry in ranked
        ],
        fallback=fallback,
        message="Showing top-rated tools (no recent usage data)" if fallback else None,
    )
