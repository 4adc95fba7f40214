"""Discovery queue: tools submitted for review."""

import logging

from sqlalchemy.exc import IntegrityError

from registry.db import Database
from registry.errors import ConflictError
from registry.models import DiscoveryItem
from registry.schemas.requests import SubmitDiscoveryRequest

logger = logging.getLogger(__name__)

DISCOVERY_STATUSES = ("pending", "approved", "rejected")


def list_items(db: Database, status: str = "pending", limit: int = 50) -> list[DiscoveryItem]:
    if status not in DISCOVERY_STATUSES:
        raise ValueError(f"status must be one of {', '.join(DISCOVERY_STATUSES)}")
    with db.session_scope() as session:
        rows = (
            session.query(DiscoveryItem)
            .filter(DiscoveryItem.status == status)
            .order_by(DiscoveryItem.created_at.desc(), DiscoveryItem.id)
            .limit(limit)
            .all()
        )
        return list(rows)


def submit_item(db: Database, data: SubmitDiscoveryRequest) -> DiscoveryItem:
    source_url = str(data.source_url)
    with db.session_scope() as session:
        if session.query(DiscoveryItem.id).filter(DiscoveryItem.source_url == source_url).first():
            raise ConflictError("This source URL is already in the discovery queue")
        item = DiscoveryItem(
            name=data.name.strip(),
            description=data.description,
            source_url=source_url,
            source_type=data.source_type,
            raw_data=data.raw_data,
            security_score=data.security_score,
            quality_score=data.quality_score,
        )
        session.add(item)
        try:
            session.flush()
        except IntegrityError as e:
            raise ConflictError("This source URL is already in the discovery queue") from e
        session.refresh(item)
        logger.info("Queued %s for review (%s)", item.name, source_url)
        return item
