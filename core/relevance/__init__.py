# Path: core/relevance/__init__.py
# Purpose: Package initializer for the relevance engine.
# Layer: core/relevance.
# Details: Exposes the weight resolver, tag and user aggregators, graph builders, and the engine facade.

from .weights import RecordWeight, presence_metric, resolve_weight, user_record_weight
from .scanner import TagFilter, normalize_whitelist, split_allowed_categories
from .tags import get_biggest_fans_by_tag, get_tag_fan_breakdown, get_top_tags, get_top_user_tags
from .users import get_top_users
from .graphs import edge_key, get_global_network, get_tag_neighbors, get_user_neighbors
from .engine import RelevanceEngine

__all__ = [
    "RecordWeight",
    "RelevanceEngine",
    "TagFilter",
    "edge_key",
    "get_biggest_fans_by_tag",
    "get_global_network",
    "get_tag_fan_breakdown",
    "get_tag_neighbors",
    "get_top_tags",
    "get_top_user_tags",
    "get_top_users",
    "get_user_neighbors",
    "normalize_whitelist",
    "presence_metric",
    "resolve_weight",
    "split_allowed_categories",
    "user_record_weight",
]
