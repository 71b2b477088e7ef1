# Path: core/models/domain.py
# Purpose: Define domain models shared across loading, relevance aggregation, and the API.
# Layer: core/models.
# Details: Lightweight dataclasses and enumerations simplify serialization between API, scripts, and core services.

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Union


class Category(str, Enum):
    """Tag category attached to every tag list of a record."""

    CHARACTER = "character"
    COPYRIGHT = "copyright"
    ARTIST = "artist"
    GENERAL = "general"
    META = "meta"

    @classmethod
    def parse(cls, value: Union["Category", str, None]) -> Optional["Category"]:
        """Return the matching category or None for unknown values."""

        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            return None


# Fixed iteration order for every aggregation. META is never aggregated.
CATEGORIES = (Category.CHARACTER, Category.COPYRIGHT, Category.ARTIST, Category.GENERAL)

# Pseudo-category marking user nodes and requesting user entities in allow-lists.
USER_CATEGORY = "user"


class Metric(str, Enum):
    """Weighting scheme translating record engagement into numeric weight."""

    INTERACTIONS = "interactions"
    POSTS = "posts"
    REACTIONS = "reactions"
    POPULARITY = "popularity"

    @classmethod
    def parse(cls, value: Union["Metric", str, None]) -> "Metric":
        """Return the matching metric, falling back to INTERACTIONS for anything unrecognized."""

        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            return cls.INTERACTIONS


def _string_list(value: Any) -> List[str]:
    if not value or isinstance(value, (str, bytes)):
        return []
    return [str(item) for item in value if item is not None]


@dataclass
class ImageRecord:
    """One tagged post with its author, reactors, and categorized tags."""

    image_path: str
    author: str = ""
    reactors: List[str] = field(default_factory=list)
    tags: Dict[str, List[str]] = field(default_factory=dict)
    source: Optional[str] = None
    source_url: Optional[str] = None
    similarity: Optional[float] = None

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "ImageRecord":
        """Build a record from its JSON shape, treating absent or null fields as empty."""

        raw_tags = payload.get("tags") or {}
        tags: Dict[str, List[str]] = {}
        if isinstance(raw_tags, Mapping):
            for category, values in raw_tags.items():
                tags[str(category)] = _string_list(values)

        similarity = payload.get("similarity")
        return cls(
            image_path=str(payload.get("imagePath") or payload.get("image_path") or ""),
            author=str(payload.get("author") or ""),
            reactors=_string_list(payload.get("reactors")),
            tags=tags,
            source=payload.get("source"),
            source_url=payload.get("sourceUrl") or payload.get("source_url"),
            similarity=float(similarity) if isinstance(similarity, (int, float)) else None,
        )

    def to_dict(self) -> dict:
        payload: Dict[str, Any] = {
            "imagePath": self.image_path,
            "author": self.author,
            "reactors": list(self.reactors),
            "tags": {category: list(values) for category, values in self.tags.items()},
        }
        if self.source is not None:
            payload["source"] = self.source
        if self.source_url is not None:
            payload["sourceUrl"] = self.source_url
        if self.similarity is not None:
            payload["similarity"] = self.similarity
        return payload

    def tags_in(self, category: Union[Category, str]) -> List[str]:
        """Return the tags listed under a category, empty when the category is absent."""

        key = category.value if isinstance(category, Category) else category
        return self.tags.get(key) or []

    def people(self) -> List[str]:
        """Return the unique reactors followed by the author when not already present."""

        people = list(dict.fromkeys(self.reactors))
        if self.author and self.author not in people:
            people.append(self.author)
        return people


@dataclass
class TagStats:
    """Aggregated weight of a tag and the category it was last counted under."""

    tag: str
    count: int
    category: Category

    def to_dict(self) -> dict:
        return {"tag": self.tag, "count": self.count, "category": self.category.value}


@dataclass
class UserCount:
    """Aggregated weight of a single user."""

    user_id: str
    count: int

    def to_dict(self) -> dict:
        return {"userId": self.user_id, "count": self.count}


@dataclass
class TagFanStats:
    """The user with the largest weight for a tag, next to the tag's total weight."""

    tag: str
    category: Category
    fan_user_id: str
    fan_count: int
    total_count: int

    def to_dict(self) -> dict:
        return {
            "tag": self.tag,
            "category": self.category.value,
            "fanUserId": self.fan_user_id,
            "fanCount": self.fan_count,
            "totalCount": self.total_count,
        }


@dataclass
class TagUserShare:
    """A user's contribution to one tag as an absolute weight and a percentage."""

    user_id: str
    count: int
    percentage: float

    def to_dict(self) -> dict:
        return {"userId": self.user_id, "count": self.count, "percentage": self.percentage}


@dataclass
class GraphNode:
    """Graph node for a tag (category name) or a user (category "user")."""

    id: str
    name: str
    category: str
    value: int

    def to_dict(self) -> dict:
        return {"id": self.id, "name": self.name, "category": self.category, "value": self.value}


@dataclass
class GraphLink:
    """Weighted undirected edge between two node identifiers."""

    source: str
    target: str
    value: int

    def to_dict(self) -> dict:
        return {"source": self.source, "target": self.target, "value": self.value}


@dataclass
class Graph:
    """Node and link lists ready for a force-directed renderer."""

    nodes: List[GraphNode] = field(default_factory=list)
    links: List[GraphLink] = field(default_factory=list)

    def node_ids(self) -> List[str]:
        return [node.id for node in self.nodes]

    def to_dict(self) -> dict:
        return {
            "nodes": [node.to_dict() for node in self.nodes],
            "links": [link.to_dict() for link in self.links],
        }
