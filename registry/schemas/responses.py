"""Response schemas for API endpoints."""

from typing import Any

from pydantic import BaseModel, Field


class PaginationMeta(BaseModel):
    """Pagination metadata for list endpoints."""

    page: int = Field(..., description="Current page (1-based)")
    limit: int = Field(..., description="Page size")
    total: int = Field(..., description="Total number of items")
    pages: int = Field(..., description="Total number of pages")
    more: bool = Field(..., description="Whether there are more pages")


class ToolItem(BaseModel):
    """Single tool with its stored score."""

    id: str = Field(..., description="Tool ID (UUID)")
    name: str
    description: str
    category: str = Field(..., description="Category slug")
    version: str
    sourceType: str
    sourceUrl: str | None = None
    mcpServerUrl: str | None = None
    repositoryUrl: str | None = None
    inputSchema: dict[str, Any]
    outputSchema: dict[str, Any] | None = None
    tags: list[str] = Field(default_factory=list)
    chains: list[str] = Field(default_factory=list)
    protocols: list[str] = Field(default_factory=list)
    requiresApiKey: bool
    apiKeyName: str | None = None

    isValidated: bool
    isClaimed: bool
    hasTools: bool
    hasReadme: bool
    hasLicense: bool
    hasDeployment: bool
    hasDeployMoreThanManual: bool
    hasPrompts: bool
    hasResources: bool

    totalScore: int = Field(..., description="Sum of weights of satisfied quality flags")
    maxScore: int
    percentage: int
    grade: str = Field(..., description="One of: a, b, f")

    downloadCount: int
    usageCount: int
    createdAt: str = Field(..., description="Creation time (ISO)")
    updatedAt: str = Field(..., description="Last update time (ISO)")
    lastVerifiedAt: str | None = None


class ListToolsResponse(BaseModel):
    """Response for GET /api/tools and GET /api/search."""

    data: list[ToolItem] = Field(..., description="Tools")
    meta: PaginationMeta = Field(..., description="Pagination metadata")


class ScoreItemResponse(BaseModel):
    key: str
    title: str
    description: str
    weight: int
    required: bool
    check: bool


class ToolScoreResponse(BaseModel):
    """Score and per-flag breakdown for a tool."""

    toolId: str
    grade: str
    gradeLabel: str = Field(..., description="Excellent | Good | Needs Improvement")
    gradeColor: str = Field(..., description="Hex colour for display")
    totalScore: int
    maxScore: int
    percentage: int
    requiredScore: int
    maxRequiredScore: int
    requiredPercentage: int
    breakdown: list[ScoreItemResponse]


class UsageEventResponse(BaseModel):
    id: str
    toolId: str
    action: str
    createdAt: str


class TrendingToolItem(BaseModel):
    """Tool with its trending score for the requested period."""

    tool: ToolItem
    trendingScore: int = Field(..., description="Recent usage count + stored total score")
    recentUsage: int = Field(..., description="Usage events in the period")


class TrendingResponse(BaseModel):
    period: str
    data: list[TrendingToolItem]
    fallback: bool = Field(..., description="True when no usage data exists and tools are ranked by stored score")
    message: str | None = None


class CategoryItem(BaseModel):
    id: str
    name: str
    slug: str
    description: str | None = None
    icon: str | None = None
    toolCount: int
    createdAt: str


class ListCategoriesResponse(BaseModel):
    data: list[CategoryItem]


class DiscoveryItemResponse(BaseModel):
    id: str
    name: str
    description: str | None = None
    sourceUrl: str
    sourceType: str
    rawData: dict[str, Any] | None = None
    securityScore: int | None = None
    qualityScore: int | None = None
    status: str
    reviewNotes: str | None = None
    createdAt: str
    reviewedAt: str | None = None


class ListDiscoveryResponse(BaseModel):
    data: list[DiscoveryItemResponse]


class GradeCounts(BaseModel):
    a: int = 0
    b: int = 0
    f: int = 0


class RegistryStats(BaseModel):
    totalTools: int
    totalCategories: int
    toolsByGrade: GradeCounts
    recentActivity: int = Field(..., description="Usage events in the last 24 hours")


class DatabaseStatus(BaseModel):
    configured: bool
    connected: bool
    latencyMs: int | None = None


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(..., description="healthy | unhealthy")
    timestamp: str
    version: str
    database: DatabaseStatus
    stats: RegistryStats | None = None
