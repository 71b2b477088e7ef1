# Path: core/models/__init__.py
# Purpose: Package initializer for domain model definitions.
# Layer: core/models.
# Details: Exposes dataclasses and enumerations used across loading, relevance, and API layers.

from .domain import (
    CATEGORIES,
    USER_CATEGORY,
    Category,
    Graph,
    GraphLink,
    GraphNode,
    ImageRecord,
    Metric,
    TagFanStats,
    TagStats,
    TagUserShare,
    UserCount,
)

__all__ = [
    "CATEGORIES",
    "USER_CATEGORY",
    "Category",
    "Graph",
    "GraphLink",
    "GraphNode",
    "ImageRecord",
    "Metric",
    "TagFanStats",
    "TagStats",
    "TagUserShare",
    "UserCount",
]
