# Path: core/relevance/weights.py
# Purpose: Resolve how much a record weighs under a metric and which users carry that weight.
# Layer: core/relevance.
# Details: A single dispatch table keyed by Metric; every aggregator reduces to it.

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Dict, Optional, Union

from core.models.domain import ImageRecord, Metric


@dataclass(frozen=True)
class RecordWeight:
    """Scalar contribution of a record and the per-user weights of its active users.

    ``users`` preserves insertion order, which decides fan tie-breaks downstream.
    """

    total: int = 0
    users: Dict[str, int] = field(default_factory=dict)

    def is_empty(self) -> bool:
        return self.total == 0 and not self.users


def _posts(record: ImageRecord) -> RecordWeight:
    users = {record.author: 1} if record.author else {}
    return RecordWeight(total=1, users=users)


def _reactions(record: ImageRecord) -> RecordWeight:
    users: Dict[str, int] = {}
    for reactor in record.reactors:
        users[reactor] = users.get(reactor, 0) + 1
    return RecordWeight(total=len(record.reactors), users=users)


def _popularity(record: ImageRecord) -> RecordWeight:
    reach = len(record.reactors)
    users = {record.author: reach} if record.author else {}
    return RecordWeight(total=reach, users=users)


def _interactions(record: ImageRecord) -> RecordWeight:
    people = record.people()
    return RecordWeight(total=len(people), users={person: 1 for person in people})


_RESOLVERS: Dict[Metric, Callable[[ImageRecord], RecordWeight]] = {
    Metric.POSTS: _posts,
    Metric.REACTIONS: _reactions,
    Metric.POPULARITY: _popularity,
    Metric.INTERACTIONS: _interactions,
}

_PRESENCE_METRICS = frozenset({Metric.POSTS, Metric.REACTIONS, Metric.INTERACTIONS})


def resolve_weight(record: ImageRecord, metric: Union[Metric, str, None]) -> RecordWeight:
    """Return the record's total weight and active users under ``metric``.

    A record with neither author nor reactors weighs nothing under any metric.
    """

    if not record.author and not record.reactors:
        return RecordWeight()
    return _RESOLVERS[Metric.parse(metric)](record)


def presence_metric(metric: Union[Metric, str, None]) -> Metric:
    """Map a metric onto the subset that only says who was present on a record.

    Popularity (and anything unrecognized) counts presence like interactions.
    """

    parsed = Metric.parse(metric)
    return parsed if parsed in _PRESENCE_METRICS else Metric.INTERACTIONS


def user_record_weight(record: ImageRecord, user_id: str, metric: Union[Metric, str, None]) -> Optional[int]:
    """Weight one record adds to ``user_id`` in per-user scans, or None when the user is inactive.

    Under reactions a record counts once however often the user reacted.
    """

    parsed = Metric.parse(metric)
    weight = resolve_weight(record, parsed).users.get(user_id)
    if weight is None:
        return None
    return 1 if parsed is Metric.REACTIONS else weight
