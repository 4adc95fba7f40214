"""Tool model: registry entries with quality flags and derived trust score."""

from __future__ import annotations

import uuid
from collections.abc import Iterable

from sqlalchemy import Boolean, DateTime, ForeignKey, Index, Integer, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.sql import func

from registry.models.base import Base, JSONDocument
from registry.scoring import FLAG_NAMES, ScoreFlags, ScoreResult, compute_score


class Tool(Base):
    __tablename__ = "tools"
    __table_args__ = (
        Index("tools_category_idx", "category"),
        Index("tools_grade_idx", "grade"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid(), primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String(100), nullable=False, unique=True, index=True)
    description: Mapped[str] = mapped_column(Text(), nullable=False)
    category: Mapped[str] = mapped_column(String(50), nullable=False)
    version: Mapped[str] = mapped_column(String(50), nullable=False, default="1.0.0", server_default="1.0.0")

    source_type: Mapped[str] = mapped_column(String(20), nullable=False, default="manual", server_default="manual")
    source_url: Mapped[str | None] = mapped_column(Text(), nullable=True)
    mcp_server_url: Mapped[str | None] = mapped_column(Text(), nullable=True)
    repository_url: Mapped[str | None] = mapped_column(Text(), nullable=True)

    input_schema: Mapped[dict] = mapped_column(JSONDocument, nullable=False)
    output_schema: Mapped[dict | None] = mapped_column(JSONDocument, nullable=True)

    requires_api_key: Mapped[bool] = mapped_column(Boolean(), nullable=False, default=False, server_default="false")
    api_key_name: Mapped[str | None] = mapped_column(String(100), nullable=True)

    # Quality flags (scoring inputs)
    is_validated: Mapped[bool] = mapped_column(Boolean(), nullable=False, default=False, server_default="false")
    is_claimed: Mapped[bool] = mapped_column(Boolean(), nullable=False, default=False, server_default="false")
    has_tools: Mapped[bool] = mapped_column(Boolean(), nullable=False, default=True, server_default="true")
    has_readme: Mapped[bool] = mapped_column(Boolean(), nullable=False, default=False, server_default="false")
    has_license: Mapped[bool] = mapped_column(Boolean(), nullable=False, default=False, server_default="false")
    has_deployment: Mapped[bool] = mapped_column(Boolean(), nullable=False, default=False, server_default="false")
    has_deploy_more_than_manual: Mapped[bool] = mapped_column(
        Boolean(), nullable=False, default=False, server_default="false"
    )
    has_prompts: Mapped[bool] = mapped_column(Boolean(), nullable=False, default=False, server_default="false")
    has_resources: Mapped[bool] = mapped_column(Boolean(), nullable=False, default=False, server_default="false")

    # Derived from the flags; written only through apply_score_flags()
    score_data: Mapped[dict | None] = mapped_column(JSONDocument, nullable=True)
    total_score: Mapped[int] = mapped_column(Integer(), nullable=False, default=0, server_default="0")
    max_score: Mapped[int] = mapped_column(Integer(), nullable=False, default=100, server_default="100")
    percentage: Mapped[int] = mapped_column(Integer(), nullable=False, default=0, server_default="0")
    grade: Mapped[str] = mapped_column(String(1), nullable=False, default="f", server_default="f")

    download_count: Mapped[int] = mapped_column(Integer(), nullable=False, default=0, server_default="0")
    usage_count: Mapped[int] = mapped_column(Integer(), nullable=False, default=0, server_default="0")

    created_at: Mapped[DateTime] = mapped_column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at: Mapped[DateTime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )
    last_verified_at: Mapped[DateTime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    labels: Mapped[list["ToolLabel"]] = relationship(
        "ToolLabel",
        back_populates="tool",
        cascade="all, delete-orphan",
        passive_deletes=True,
        lazy="selectin",
    )
    usage_logs: Mapped[list["ToolUsageLog"]] = relationship(  # noqa: F821
        "ToolUsageLog", back_populates="tool", cascade="all, delete-orphan", passive_deletes=True
    )

    @property
    def score_flags(self) -> ScoreFlags:
        return ScoreFlags(**{name: bool(getattr(self, name)) for name in FLAG_NAMES})

    def apply_score_flags(self, flags: ScoreFlags) -> ScoreResult:
        """Set all quality flags and recompute every derived score field from them."""
        result = compute_score(flags)
        for name in FLAG_NAMES:
            setattr(self, name, getattr(flags, name))
        self.score_data = flags.as_dict()
        self.total_score = result.total_score
        self.max_score = result.max_score
        self.percentage = result.percentage
        self.grade = result.grade
        return result

    def label_values(self, kind: str) -> list[str]:
        return sorted(label.value for label in self.labels if label.kind == kind)

    def set_labels(self, kind: str, values: Iterable[str]) -> None:
        """Replace the labels of one kind, keeping rows that are unchanged."""
        wanted = {v.strip() for v in values if v and v.strip()}
        for label in [lb for lb in self.labels if lb.kind == kind and lb.value not in wanted]:
            self.labels.remove(label)
        present = {lb.value for lb in self.labels if lb.kind == kind}
        for value in sorted(wanted - present):
            self.labels.append(ToolLabel(kind=kind, value=value))

    @property
    def tags(self) -> list[str]:
        return self.label_values("tag")

    @property
    def chains(self) -> list[str]:
        return self.label_values("chain")

    @property
    def protocols(self) -> list[str]:
        return self.label_values("protocol")


class ToolLabel(Base):
    """One tag, chain or protocol attached to a tool."""

    __tablename__ = "tool_labels"
    __table_args__ = (Index("tool_labels_kind_value_idx", "kind", "value"),)

    tool_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(), ForeignKey("tools.id", ondelete="CASCADE"), primary_key=True
    )
    kind: Mapped[str] = mapped_column(String(20), primary_key=True)  # tag | chain | protocol
    value: Mapped[str] = mapped_column(String(100), primary_key=True)

    tool: Mapped[Tool] = relationship("Tool", back_populates="labels")
