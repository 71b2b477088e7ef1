# Path: core/relevance/graphs.py
# Purpose: Build co-occurrence graphs around a tag, around a user, or over the whole corpus.
# Layer: core/relevance.
# Details: Star graphs for neighbor queries and a multi-entity network of top tags and users.

from __future__ import annotations

import logging
from itertools import combinations
from typing import Dict, Iterable, List, Optional, Sequence, Tuple, Union

from core.models.domain import (
    CATEGORIES,
    USER_CATEGORY,
    Category,
    Graph,
    GraphLink,
    GraphNode,
    ImageRecord,
    Metric,
)
from .scanner import CategoryLike, TagFilter, normalize_whitelist, split_allowed_categories
from .tags import get_top_tags
from .users import get_top_users
from .weights import presence_metric, resolve_weight, user_record_weight

logger = logging.getLogger(__name__)

EdgeKey = Tuple[str, str]


def edge_key(a: str, b: str) -> EdgeKey:
    """Canonical key of an undirected edge: endpoints in lexicographic order."""

    return (a, b) if a <= b else (b, a)


def _category_name(category: Union[Category, str]) -> str:
    return category.value if isinstance(category, Category) else category


class _NeighborTally:
    """Accumulate neighbor weights around a hub and emit them as a star graph."""

    def __init__(self) -> None:
        self._counts: Dict[str, int] = {}
        self._categories: Dict[str, str] = {}

    def add(self, neighbor: str, category: Union[Category, str], weight: int) -> None:
        self._counts[neighbor] = self._counts.get(neighbor, 0) + weight
        self._categories[neighbor] = _category_name(category)

    def star(self, hub: GraphNode, limit: int, min_count: Optional[int] = None) -> Graph:
        ranked = [
            (neighbor, count)
            for neighbor, count in self._counts.items()
            if min_count is None or count >= min_count
        ]
        ranked.sort(key=lambda item: item[1], reverse=True)

        graph = Graph(nodes=[hub])
        for neighbor, count in ranked[: max(limit, 0)]:
            graph.nodes.append(
                GraphNode(id=neighbor, name=neighbor, category=self._categories[neighbor], value=count)
            )
            graph.links.append(GraphLink(source=hub.id, target=neighbor, value=count))
        return graph


def get_global_network(
    records: Iterable[ImageRecord],
    *,
    limit: int = 30,
    min_cooccurrence: int = 2,
    allowed_categories: Optional[Sequence[CategoryLike]] = None,
    metric: Union[Metric, str] = Metric.INTERACTIONS,
    allowed_general_tags: Optional[Iterable[str]] = None,
) -> Graph:
    """
    Build the corpus-wide network over the top tags and, when requested, the top users.

    Users join when ``allowed_categories`` contains "user"; they are capped at
    ``max(10, limit // 2)`` nodes. Edges:
    - tag-tag: the record's total weight for each co-occurring pair
    - user-tag: 1 per record, or the record's reactor count under popularity
    - user-user: 1 per record both users were active on
    Edges lighter than ``min_cooccurrence`` are dropped.
    """

    records = list(records)
    metric = Metric.parse(metric)
    tag_categories, include_users = split_allowed_categories(allowed_categories)
    tag_filter = TagFilter.build(categories=tag_categories, allowed_general_tags=allowed_general_tags)

    top_tags = get_top_tags(
        records,
        categories=tag_filter.categories,
        limit=limit,
        metric=metric,
        allowed_general_tags=tag_filter.whitelist,
    )
    top_users = get_top_users(records, limit=max(10, limit // 2), metric=metric) if include_users else []
    top_tag_set = {stats.tag for stats in top_tags}
    top_user_set = {user.user_id for user in top_users}
    presence = presence_metric(metric)

    edges: Dict[EdgeKey, int] = {}

    def bump(a: str, b: str, weight: int) -> None:
        key = edge_key(a, b)
        edges[key] = edges.get(key, 0) + weight

    for record in records:
        tags = list(dict.fromkeys(tag for tag, _ in tag_filter.iter_tags(record) if tag in top_tag_set))
        users: List[str] = []
        if include_users:
            users = [user for user in resolve_weight(record, presence).users if user in top_user_set]
        if not tags and not users:
            continue

        weight = resolve_weight(record, metric).total
        for first, second in combinations(tags, 2):
            bump(first, second, weight)

        if users and tags:
            user_tag_weight = len(record.reactors) if metric is Metric.POPULARITY else 1
            for user in users:
                for tag in tags:
                    bump(user, tag, user_tag_weight)

        for first, second in combinations(users, 2):
            bump(first, second, 1)

    graph = Graph()
    for stats in top_tags:
        graph.nodes.append(GraphNode(id=stats.tag, name=stats.tag, category=stats.category.value, value=stats.count))
    for user in top_users:
        graph.nodes.append(GraphNode(id=user.user_id, name=user.user_id, category=USER_CATEGORY, value=user.count))
    for (source, target), value in edges.items():
        if value >= min_cooccurrence:
            graph.links.append(GraphLink(source=source, target=target, value=value))

    logger.debug(
        f"Global network ({metric.value}): {len(graph.nodes)} nodes, "
        f"{len(graph.links)} of {len(edges)} edges kept"
    )
    return graph


def get_tag_neighbors(
    records: Iterable[ImageRecord],
    target_tag: str,
    *,
    limit: int = 20,
    min_cooccurrence: int = 1,
    metric: Union[Metric, str] = Metric.INTERACTIONS,
    allowed_general_tags: Optional[Iterable[str]] = None,
    allowed_categories: Optional[Sequence[CategoryLike]] = None,
) -> Graph:
    """
    Star graph of the tags (and optionally users) co-occurring with ``target_tag``.

    The whitelist never hides the target tag itself. ``allowed_categories``
    only decides whether users are included.
    """

    metric = Metric.parse(metric)
    _, include_users = split_allowed_categories(allowed_categories)
    tag_filter = TagFilter(categories=CATEGORIES, whitelist=normalize_whitelist(allowed_general_tags))
    presence = presence_metric(metric)

    tally = _NeighborTally()
    target_count = 0
    target_category = Category.GENERAL
    matched = 0

    for record in records:
        record_tags: List[Tuple[str, Category]] = []
        has_target = False
        for category in CATEGORIES:
            for tag in record.tags_in(category):
                if tag != target_tag and not tag_filter.allows(tag, category):
                    continue
                record_tags.append((tag, category))
                if tag == target_tag:
                    has_target = True
                    target_category = category
        if not has_target:
            continue

        matched += 1
        weight = resolve_weight(record, metric).total
        target_count += weight
        for tag, category in record_tags:
            if tag != target_tag:
                tally.add(tag, category, weight)

        if include_users:
            user_weight = len(record.reactors) if metric is Metric.POPULARITY else 1
            for user in resolve_weight(record, presence).users:
                tally.add(user, USER_CATEGORY, user_weight)

    logger.debug(f"Tag neighbors for {target_tag!r}: {matched} records carry the tag")
    hub = GraphNode(id=target_tag, name=target_tag, category=target_category.value, value=target_count)
    return tally.star(hub, limit, min_count=min_cooccurrence)


def get_user_neighbors(
    records: Iterable[ImageRecord],
    user_id: str,
    *,
    limit: int = 30,
    metric: Union[Metric, str] = Metric.INTERACTIONS,
    allowed_general_tags: Optional[Iterable[str]] = None,
    allowed_categories: Optional[Sequence[CategoryLike]] = None,
) -> Graph:
    """
    Star graph of the tags and co-active users around ``user_id``.

    Tags gain the user's per-record weight; other users gain 1 per shared
    record. Authorship is unique, so the posts metric yields no user neighbors.
    """

    metric = Metric.parse(metric)
    tag_categories, include_users = split_allowed_categories(allowed_categories)
    tag_filter = TagFilter.build(categories=tag_categories, allowed_general_tags=allowed_general_tags)
    presence = presence_metric(metric)

    tally = _NeighborTally()
    hub_value = 0
    for record in records:
        weight = user_record_weight(record, user_id, metric)
        if weight is None:
            continue
        hub_value += weight

        for tag, category in tag_filter.iter_tags(record):
            tally.add(tag, category, weight)

        if include_users:
            for other in resolve_weight(record, presence).users:
                if other != user_id:
                    tally.add(other, USER_CATEGORY, 1)

    hub = GraphNode(id=user_id, name=user_id, category=USER_CATEGORY, value=hub_value)
    return tally.star(hub, limit)
