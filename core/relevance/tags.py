# Path: core/relevance/tags.py
# Purpose: Rank tags globally, per user, and by their most devoted users.
# Layer: core/relevance.
# Details: Each function is one full scan over the records; weights come from core/relevance/weights.py.

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Sequence, Union

from core.models.domain import Category, ImageRecord, Metric, TagFanStats, TagStats, TagUserShare
from .scanner import CategoryLike, TagFilter
from .weights import resolve_weight, user_record_weight

logger = logging.getLogger(__name__)


class _TagTally:
    """Running tag totals with last-write-wins category bookkeeping."""

    def __init__(self) -> None:
        self._counts: Dict[str, int] = {}
        self._categories: Dict[str, Category] = {}

    def add(self, tag: str, category: Category, weight: int) -> None:
        self._counts[tag] = self._counts.get(tag, 0) + weight
        self._categories[tag] = category

    def __len__(self) -> int:
        return len(self._counts)

    def ranked(self, limit: int, min_support: Optional[int] = None) -> List[TagStats]:
        stats = [
            TagStats(tag=tag, count=count, category=self._categories[tag])
            for tag, count in self._counts.items()
            if min_support is None or count >= min_support
        ]
        stats.sort(key=lambda item: item.count, reverse=True)
        return stats[: max(limit, 0)]


def get_top_tags(
    records: Iterable[ImageRecord],
    *,
    category: Optional[CategoryLike] = None,
    categories: Optional[Sequence[CategoryLike]] = None,
    limit: int = 50,
    min_support: int = 1,
    metric: Union[Metric, str] = Metric.INTERACTIONS,
    allowed_general_tags: Optional[Iterable[str]] = None,
) -> List[TagStats]:
    """
    Rank tags by the summed record weight of every record carrying them.

    Tags below ``min_support`` are dropped; ties keep first-seen order.
    """

    tag_filter = TagFilter.build(category, categories, allowed_general_tags)
    tally = _TagTally()
    scanned = 0
    for record in records:
        scanned += 1
        weight = resolve_weight(record, metric).total
        for tag, tag_category in tag_filter.iter_tags(record):
            tally.add(tag, tag_category, weight)

    logger.debug(f"Top tags ({Metric.parse(metric).value}): {len(tally)} candidate tags over {scanned} records")
    return tally.ranked(limit, min_support=min_support)


def get_top_user_tags(
    records: Iterable[ImageRecord],
    user_id: str,
    *,
    category: Optional[CategoryLike] = None,
    limit: int = 20,
    metric: Union[Metric, str] = Metric.INTERACTIONS,
    allowed_general_tags: Optional[Iterable[str]] = None,
) -> List[TagStats]:
    """
    Rank tags on the records where ``user_id`` is active under ``metric``.

    Each qualifying record adds the user's own weight: 1 for interactions,
    posts and reactions, the post's reactor count for popularity. Under
    reactions the user's own posts never qualify, even when they reacted to them.
    """

    metric = Metric.parse(metric)
    tag_filter = TagFilter.build(category=category, allowed_general_tags=allowed_general_tags)
    tally = _TagTally()
    for record in records:
        if metric is Metric.REACTIONS and record.author == user_id:
            continue
        weight = user_record_weight(record, user_id, metric)
        if weight is None:
            continue
        for tag, tag_category in tag_filter.iter_tags(record):
            tally.add(tag, tag_category, weight)

    logger.debug(f"User tags for {user_id!r}: {len(tally)} candidate tags")
    return tally.ranked(limit)


@dataclass
class _FanTally:
    category: Category
    total: int = 0
    users: Dict[str, int] = field(default_factory=dict)


def get_biggest_fans_by_tag(
    records: Iterable[ImageRecord],
    *,
    limit: int = 50,
    metric: Union[Metric, str] = Metric.INTERACTIONS,
    allowed_general_tags: Optional[Iterable[str]] = None,
    categories: Optional[Sequence[CategoryLike]] = None,
) -> List[TagFanStats]:
    """
    Find, for every tag, the user contributing the most weight to it.

    On equal weight the user recorded first keeps the title. Results are
    ordered by the fan's weight, not by the tag total.
    """

    tag_filter = TagFilter.build(categories=categories, allowed_general_tags=allowed_general_tags)
    tallies: Dict[str, _FanTally] = {}

    for record in records:
        weight = resolve_weight(record, metric)
        if weight.is_empty():
            continue
        for tag, tag_category in tag_filter.iter_tags(record):
            tally = tallies.get(tag)
            if tally is None:
                tally = tallies[tag] = _FanTally(category=tag_category)
            else:
                tally.category = tag_category
            tally.total += weight.total
            for user_id, user_weight in weight.users.items():
                tally.users[user_id] = tally.users.get(user_id, 0) + user_weight

    results: List[TagFanStats] = []
    for tag, tally in tallies.items():
        if not tally.users:
            continue
        fan_user_id, fan_count = "", -1
        for user_id, count in tally.users.items():
            if count > fan_count:
                fan_user_id, fan_count = user_id, count
        results.append(
            TagFanStats(
                tag=tag,
                category=tally.category,
                fan_user_id=fan_user_id,
                fan_count=fan_count,
                total_count=tally.total,
            )
        )

    results.sort(key=lambda item: item.fan_count, reverse=True)
    logger.debug(f"Biggest fans: {len(results)} tags with at least one contributor")
    return results[: max(limit, 0)]


def get_tag_fan_breakdown(
    records: Iterable[ImageRecord],
    tag: str,
    category: CategoryLike,
    *,
    metric: Union[Metric, str] = Metric.INTERACTIONS,
) -> List[TagUserShare]:
    """Share of a single tag's weight held by each contributing user, largest first."""

    user_counts: Dict[str, int] = {}
    total = 0
    for record in records:
        if tag not in record.tags_in(category):
            continue
        weight = resolve_weight(record, metric)
        if not weight.users:
            continue
        total += weight.total
        for user_id, user_weight in weight.users.items():
            user_counts[user_id] = user_counts.get(user_id, 0) + user_weight

    if total == 0:
        return []

    shares = [
        TagUserShare(user_id=user_id, count=count, percentage=count / total * 100)
        for user_id, count in user_counts.items()
    ]
    shares.sort(key=lambda item: item.count, reverse=True)
    return shares
