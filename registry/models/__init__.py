"""SQLAlchemy models for the tool registry."""

from registry.models.base import Base
from registry.models.category import Category
from registry.models.discovery_item import DiscoveryItem
from registry.models.tool import Tool, ToolLabel
from registry.models.usage_log import ToolUsageLog

__all__ = [
    "Base",
    "Category",
    "DiscoveryItem",
    "Tool",
    "ToolLabel",
    "ToolUsageLog",
]
