"""DiscoveryItem model: tools submitted for review before entering the registry."""

from __future__ import annotations

import uuid

from sqlalchemy import DateTime, Integer, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from registry.models.base import Base, JSONDocument


class DiscoveryItem(Base):
    __tablename__ = "discovery_queue"

    id: Mapped[uuid.UUID] = mapped_column(Uuid(), primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[str | None] = mapped_column(Text(), nullable=True)
    source_url: Mapped[str] = mapped_column(Text(), nullable=False, unique=True)
    source_type: Mapped[str] = mapped_column(String(20), nullable=False, default="discovered")
    raw_data: Mapped[dict | None] = mapped_column(JSONDocument, nullable=True)
    security_score: Mapped[int | None] = mapped_column(Integer(), nullable=True)
    quality_score: Mapped[int | None] = mapped_column(Integer(), nullable=True)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="pending", server_default="pending")
    review_notes: Mapped[str | None] = mapped_column(Text(), nullable=True)
    created_at: Mapped[DateTime] = mapped_column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    reviewed_at: Mapped[DateTime | None] = mapped_column(DateTime(timezone=True), nullable=True)
