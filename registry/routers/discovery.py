"""Discovery queue API (under /api/discovery)."""

from typing import Literal

from fastapi import APIRouter, Depends, HTTPException, Query, status

from registry.db import Database
from registry.deps import get_db
from registry.errors import ConflictError
from registry.models import DiscoveryItem
from registry.schemas.requests import SubmitDiscoveryRequest
from registry.schemas.responses import DiscoveryItemResponse, ListDiscoveryResponse
from registry.services import discovery_service

router = APIRouter(prefix="/discovery", tags=["Discovery"])


def _item_to_response(item: DiscoveryItem) -> DiscoveryItemResponse:
    return DiscoveryItemResponse(
        id=str(item.id),
        name=item.name,
        description=item.description,
        sourceUrl=item.source_url,
        sourceType=item.source_type,
        rawData=item.raw_data,
        securityScore=item.security_score,
        qualityScore=item.quality_score,
        status=item.status,
        reviewNotes=item.review_notes,
        createdAt=item.created_at.isoformat(),
        reviewedAt=item.reviewed_at.isoformat() if item.reviewed_at else None,
    )


@router.get(
    "",
    summary="List discovery queue",
    description="Submitted tools with the given status, newest first (max 50).",
    operation_id="listDiscovery",
    response_model=ListDiscoveryResponse,
)
def list_discovery(
    status_: Literal["pending", "approved", "rejected"] = Query("pending", alias="status"),
    db: Database = Depends(get_db),
):
    return ListDiscoveryResponse(data=[_item_to_response(i) for i in discovery_service.list_items(db, status=status_)])


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    summary="Submit tool for review",
    operation_id="submitDiscovery",
    response_model=DiscoveryItemResponse,
)
def submit_discovery(body: SubmitDiscoveryRequest, db: Database = Depends(get_db)):
    try:
        item = discovery_service.submit_item(db, body)
    except ConflictError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    return _item_to_response(item)
