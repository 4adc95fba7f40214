"""Search API (under /api/search)."""

from fastapi import APIRouter, Depends

from registry.db import Database
from registry.deps import get_db
from registry.routers.tools import paginated_tools, search_params
from registry.schemas.responses import ListToolsResponse

router = APIRouter(tags=["Search"])


@router.get(
    "/search",
    summary="Search tools",
    description="Text search in name and description, with category, chain, protocol, grade, API key and tag filters.",
    operation_id="searchTools",
    response_model=ListToolsResponse,
)
def search_tools(params: dict = Depends(search_params), db: Database = Depends(get_db)):
    return paginated_tools(db, params)
