"""Service layer: each call runs in its own session scope on the Database it is given."""

from registry.services import (
    categories_service,
    discovery_service,
    stats_service,
    tools_service,
    trending_service,
)

__all__ = [
    "categories_service",
    "discovery_service",
    "stats_service",
    "tools_service",
    "trending_service",
]
