# Path: core/relevance/engine.py
# Purpose: Bind one record snapshot and its tag whitelist to the relevance queries.
# Layer: core/relevance.
# Details: Bridges API and script layers with the pure aggregation functions, filling unset arguments from QuerySettings.

from __future__ import annotations

from typing import FrozenSet, Iterable, List, Optional, Sequence, Tuple, Union

from config.settings import QuerySettings
from core.models.domain import Graph, ImageRecord, Metric, TagFanStats, TagStats, TagUserShare, UserCount
from .graphs import get_global_network, get_tag_neighbors, get_user_neighbors
from .scanner import CategoryLike, normalize_whitelist
from .tags import get_biggest_fans_by_tag, get_tag_fan_breakdown, get_top_tags, get_top_user_tags
from .users import get_top_users

MetricLike = Union[Metric, str, None]


def _pick(value, default):
    return default if value is None else value


class RelevanceEngine:
    """High-level service answering relevance queries over an immutable record snapshot.

    The engine holds no per-query state; the metric is an argument of every
    call so that independent callers can share one instance.
    """

    def __init__(
        self,
        records: Iterable[ImageRecord],
        allowed_general_tags: Optional[Iterable[str]] = None,
        settings: Optional[QuerySettings] = None,
    ) -> None:
        self.records: Tuple[ImageRecord, ...] = tuple(records)
        self.whitelist: Optional[FrozenSet[str]] = normalize_whitelist(allowed_general_tags)
        self.settings = settings or QuerySettings()

    def __len__(self) -> int:
        return len(self.records)

    def _metric(self, metric: MetricLike) -> Metric:
        return self.settings.metric if metric is None else Metric.parse(metric)

    def _whitelist(self, use_whitelist: bool) -> Optional[FrozenSet[str]]:
        return self.whitelist if use_whitelist else None

    def top_tags(
        self,
        category: Optional[CategoryLike] = None,
        categories: Optional[Sequence[CategoryLike]] = None,
        limit: Optional[int] = None,
        min_support: Optional[int] = None,
        metric: MetricLike = None,
        use_whitelist: bool = True,
    ) -> List[TagStats]:
        return get_top_tags(
            self.records,
            category=category,
            categories=categories,
            limit=_pick(limit, self.settings.top_tags_limit),
            min_support=_pick(min_support, self.settings.min_support),
            metric=self._metric(metric),
            allowed_general_tags=self._whitelist(use_whitelist),
        )

    def top_user_tags(
        self,
        user_id: str,
        category: Optional[CategoryLike] = None,
        limit: Optional[int] = None,
        metric: MetricLike = None,
        use_whitelist: bool = True,
    ) -> List[TagStats]:
        return get_top_user_tags(
            self.records,
            user_id,
            category=category,
            limit=_pick(limit, self.settings.user_tags_limit),
            metric=self._metric(metric),
            allowed_general_tags=self._whitelist(use_whitelist),
        )

    def top_users(self, limit: Optional[int] = None, metric: MetricLike = None) -> List[UserCount]:
        return get_top_users(
            self.records,
            limit=_pick(limit, self.settings.top_users_limit),
            metric=self._metric(metric),
        )

    def global_network(
        self,
        limit: Optional[int] = None,
        min_cooccurrence: Optional[int] = None,
        allowed_categories: Optional[Sequence[CategoryLike]] = None,
        metric: MetricLike = None,
        use_whitelist: bool = True,
    ) -> Graph:
        return get_global_network(
            self.records,
            limit=_pick(limit, self.settings.network_limit),
            min_cooccurrence=_pick(min_cooccurrence, self.settings.network_min_cooccurrence),
            allowed_categories=allowed_categories,
            metric=self._metric(metric),
            allowed_general_tags=self._whitelist(use_whitelist),
        )

    def tag_neighbors(
        self,
        target_tag: str,
        limit: Optional[int] = None,
        min_cooccurrence: Optional[int] = None,
        allowed_categories: Optional[Sequence[CategoryLike]] = None,
        metric: MetricLike = None,
        use_whitelist: bool = True,
    ) -> Graph:
        return get_tag_neighbors(
            self.records,
            target_tag,
            limit=_pick(limit, self.settings.neighbor_limit),
            min_cooccurrence=_pick(min_cooccurrence, self.settings.neighbor_min_cooccurrence),
            metric=self._metric(metric),
            allowed_general_tags=self._whitelist(use_whitelist),
            allowed_categories=allowed_categories,
        )

    def user_neighbors(
        self,
        user_id: str,
        limit: Optional[int] = None,
        allowed_categories: Optional[Sequence[CategoryLike]] = None,
        metric: MetricLike = None,
        use_whitelist: bool = True,
    ) -> Graph:
        return get_user_neighbors(
            self.records,
            user_id,
            limit=_pick(limit, self.settings.user_neighbor_limit),
            metric=self._metric(metric),
            allowed_general_tags=self._whitelist(use_whitelist),
            allowed_categories=allowed_categories,
        )

    def biggest_fans(
        self,
        limit: Optional[int] = None,
        categories: Optional[Sequence[CategoryLike]] = None,
        metric: MetricLike = None,
        use_whitelist: bool = True,
    ) -> List[TagFanStats]:
        return get_biggest_fans_by_tag(
            self.records,
            limit=_pick(limit, self.settings.fans_limit),
            metric=self._metric(metric),
            allowed_general_tags=self._whitelist(use_whitelist),
            categories=categories,
        )

    def tag_fan_breakdown(self, tag: str, category: CategoryLike, metric: MetricLike = None) -> List[TagUserShare]:
        return get_tag_fan_breakdown(self.records, tag, category, metric=self._metric(metric))
