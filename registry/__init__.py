"""Tool registry: catalog of tool integrations with trust scores and trending."""

__version__ = "1.0.0"
