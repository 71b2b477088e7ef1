# Path: core/relevance/users.py
# Purpose: Rank users by their aggregate weight across all records.
# Layer: core/relevance.
# Details: Presence-style ranking: posts counts authorship, reactions counts reactions given, anything else counts interactions.

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Union

from core.models.domain import ImageRecord, Metric, UserCount
from .weights import presence_metric, resolve_weight

logger = logging.getLogger(__name__)


def get_top_users(
    records: Iterable[ImageRecord],
    *,
    limit: int = 50,
    metric: Union[Metric, str] = Metric.INTERACTIONS,
) -> List[UserCount]:
    """Return users sorted by descending weight, at most ``limit`` of them."""

    counting = presence_metric(metric)
    counts: Dict[str, int] = {}
    for record in records:
        for user_id, weight in resolve_weight(record, counting).users.items():
            counts[user_id] = counts.get(user_id, 0) + weight

    ranked = sorted(counts.items(), key=lambda item: item[1], reverse=True)
    logger.debug(f"Top users ({counting.value}): {len(ranked)} distinct users")
    return [UserCount(user_id=user_id, count=count) for user_id, count in ranked[: max(limit, 0)]]
