"""ToolUsageLog model: append-only usage events feeding the trending ranking."""

from __future__ import annotations

import uuid

from sqlalchemy import DateTime, ForeignKey, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.sql import func

from registry.models.base import Base, JSONDocument


class ToolUsageLog(Base):
    __tablename__ = "tool_usage_logs"

    id: Mapped[uuid.UUID] = mapped_column(Uuid(), primary_key=True, default=uuid.uuid4)
    tool_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(), ForeignKey("tools.id", ondelete="CASCADE"), nullable=False, index=True
    )
    action: Mapped[str] = mapped_column(String(20), nullable=False)  # view, download, install, call
    metadata_: Mapped[dict | None] = mapped_column("metadata", JSONDocument, nullable=True)
    created_at: Mapped[DateTime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False, index=True
    )

    tool: Mapped["Tool"] = relationship("Tool", back_populates="usage_logs")  # noqa: F821
