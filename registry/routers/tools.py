"""Tools API (under /api/tools)."""

import logging
from datetime import datetime
from typing import Literal
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, status

from registry.db import Database
from registry.deps import get_db
from registry.errors import ConflictError
from registry.models import Tool
from registry.schemas.requests import CreateToolRequest, RecordUsageRequest, UpdateToolRequest
from registry.schemas.responses import (
    ListToolsResponse,
    PaginationMeta,
    ScoreItemResponse,
    ToolItem,
    ToolScoreResponse,
    UsageEventResponse,
)
from registry.scoring import compute_score, grade_color, grade_label, score_breakdown
from registry.services import tools_service

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/tools", tags=["Tools"])

SortBy = Literal["name", "createdAt", "updatedAt", "totalScore", "downloadCount"]


def _iso(value: datetime | None) -> str | None:
    return value.isoformat() if value else None


def tool_to_item(tool: Tool) -> ToolItem:
    return ToolItem(
        id=str(tool.id),
        name=tool.name,
        description=tool.description,
        category=tool.category,
        version=tool.version,
        sourceType=tool.source_type,
        sourceUrl=tool.source_url,
        mcpServerUrl=tool.mcp_server_url,
        repositoryUrl=tool.repository_url,
        inputSchema=tool.input_schema or {},
        outputSchema=tool.output_schema,
        tags=tool.tags,
        chains=tool.chains,
        protocols=tool.protocols,
        requiresApiKey=tool.requires_api_key,
        apiKeyName=tool.api_key_name,
        isValidated=tool.is_validated,
        isClaimed=tool.is_claimed,
        hasTools=tool.has_tools,
        hasReadme=tool.has_readme,
        hasLicense=tool.has_license,
        hasDeployment=tool.has_deployment,
        hasDeployMoreThanManual=tool.has_deploy_more_than_manual,
        hasPrompts=tool.has_prompts,
        hasResources=tool.has_resources,
        totalScore=tool.total_score,
        maxScore=tool.max_score,
        percentage=tool.percentage,
        grade=tool.grade,
        downloadCount=tool.download_count,
        usageCount=tool.usage_count,
        createdAt=tool.created_at.isoformat(),
        updatedAt=tool.updated_at.isoformat(),
        lastVerifiedAt=_iso(tool.last_verified_at),
    )


def search_params(
    q: str | None = Query(None, description="Case-insensitive text in name or description"),
    category: str | None = Query(None, description="Category slug"),
    chain: str | None = Query(None, description="Chain label, e.g. ethereum"),
    protocol: str | None = Query(None, description="Protocol label, e.g. uniswap"),
    grade: Literal["a", "b", "f"] | None = Query(None),
    requires_api_key: bool | None = Query(None),
    tags: str | None = Query(None, description="Comma-separated; every tag must match"),
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    sort_by: SortBy = Query("totalScore"),
    sort_order: Literal["asc", "desc"] = Query("desc"),
) -> dict:
    return {
        "q": q,
        "category": category,
        "chain": chain,
        "protocol": protocol,
        "grade": grade,
        "requires_api_key": requires_api_key,
        "tags": [t.strip() for t in tags.split(",") if t.strip()] if tags else [],
        "page": page,
        "limit": limit,
        "sort_by": sort_by,
        "sort_order": sort_order,
    }


def paginated_tools(db: Database, params: dict) -> ListToolsResponse:
    rows, total = tools_service.search_tools(db, **params)
    limit, page = params["limit"], params["page"]
    pages = (total + limit - 1) // limit if total else 0
    return ListToolsResponse(
        data=[tool_to_item(t) for t in rows],
        meta=PaginationMeta(page=page, limit=limit, total=total, pages=pages, more=page < pages),
    )


@router.get(
    "",
    summary="List tools",
    description="Paginated list of tools, with the same filters and sorting as /api/search.",
    operation_id="listTools",
    response_model=ListToolsResponse,
)
def list_tools(params: dict = Depends(search_params), db: Database = Depends(get_db)):
    return paginated_tools(db, params)


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    summary="Create tool",
    description="Create a tool; the trust score and grade are computed from its quality flags.",
    operation_id="createTool",
    response_model=ToolItem,
)
def create_tool(body: CreateToolRequest, db: Database = Depends(get_db)):
    try:
        tool = tools_service.create_tool(db, body)
    except ConflictError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return tool_to_item(tool)


@router.get(
    "/{tool_id}",
    summary="Get tool by ID",
    description="Return a single tool by ID and log a view for trending.",
    operation_id="getTool",
    response_model=ToolItem,
)
def get_tool(tool_id: UUID, db: Database = Depends(get_db)):
    tool = tools_service.get_tool(db, tool_id)
    if not tool:
        raise HTTPException(status_code=404, detail=f"No tool found with ID: {tool_id}")
    tools_service.record_usage(db, tool_id, "view")
    return tool_to_item(tool)


@router.patch(
    "/{tool_id}",
    summary="Update tool",
    description="Partial update. Any quality flag in the body triggers a score recomputation.",
    operation_id="updateTool",
    response_model=ToolItem,
)
def update_tool(tool_id: UUID, body: UpdateToolRequest, db: Database = Depends(get_db)):
    try:
        tool = tools_service.update_tool(db, tool_id, body.changes())
    except ConflictError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    if not tool:
        raise HTTPException(status_code=404, detail=f"No tool found with ID: {tool_id}")
    return tool_to_item(tool)


@router.delete(
    "/{tool_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete tool",
    description="Delete a tool and its usage history.",
    operation_id="deleteTool",
)
def delete_tool(tool_id: UUID, db: Database = Depends(get_db)):
    if not tools_service.delete_tool(db, tool_id):
        raise HTTPException(status_code=404, detail=f"No tool found with ID: {tool_id}")


@router.get(
    "/{tool_id}/score",
    summary="Get tool score breakdown",
    description="Trust score, grade and per-flag breakdown.",
    operation_id="getToolScore",
    response_model=ToolScoreResponse,
)
def get_tool_score(tool_id: UUID, db: Database = Depends(get_db)):
    tool = tools_service.get_tool(db, tool_id)
    if not tool:
        raise HTTPException(status_code=404, detail=f"No tool found with ID: {tool_id}")
    flags = tool.score_flags
    result = compute_score(flags)
    return ToolScoreResponse(
        toolId=str(tool.id),
        grade=result.grade,
        gradeLabel=grade_label(result.grade),
        gradeColor=grade_color(result.grade),
        totalScore=result.total_score,
        maxScore=result.max_score,
        percentage=result.percentage,
        requiredScore=result.required_score,
        maxRequiredScore=result.max_required_score,
        requiredPercentage=result.required_percentage,
        breakdown=[
            ScoreItemResponse(
                key=item.key,
                title=item.title,
                description=item.description,
                weight=item.weight,
                required=item.required,
                check=item.check,
            )
            for item in score_breakdown(flags)
        ],
    )


@router.post(
    "/{tool_id}/usage",
    status_code=status.HTTP_201_CREATED,
    summary="Record usage",
    description="Append a usage event (view, download, install, call) used by trending.",
    operation_id="recordToolUsage",
    response_model=UsageEventResponse,
)
def record_usage(tool_id: UUID, body: RecordUsageRequest, db: Database = Depends(get_db)):
    event = tools_service.record_usage(db, tool_id, body.action, body.metadata)
    if event is None:
        raise HTTPException(status_code=404, detail=f"No tool found with ID: {tool_id}")
    return UsageEventResponse(
        id=str(event.id),
        toolId=str(event.tool_id),
        action=event.action,
        createdAt=event.created_at.isoformat(),
    )
