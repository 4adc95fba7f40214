"""Request and response schemas for API endpoints."""

from registry.schemas.requests import (
    CreateCategoryRequest,
    CreateToolRequest,
    RecordUsageRequest,
    SubmitDiscoveryRequest,
    UpdateToolRequest,
)
from registry.schemas.responses import (
    HealthResponse,
    ListCategoriesResponse,
    ListDiscoveryResponse,
    ListToolsResponse,
    PaginationMeta,
    ToolItem,
    ToolScoreResponse,
    TrendingResponse,
)

__all__ = [
    "CreateCategoryRequest",
    "CreateToolRequest",
    "RecordUsageRequest",
    "SubmitDiscoveryRequest",
    "UpdateToolRequest",
    "HealthResponse",
    "ListCategoriesResponse",
    "ListDiscoveryResponse",
    "ListToolsResponse",
    "PaginationMeta",
    "ToolItem",
    "ToolScoreResponse",
    "TrendingResponse",
]
