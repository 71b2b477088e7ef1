# Path: core/relevance/scanner.py
# Purpose: Select which tags of a record take part in an aggregation.
# Layer: core/relevance.
# Details: Applies category allow-lists and the general-tag whitelist while iterating tags in a fixed category order.

from __future__ import annotations

from dataclasses import dataclass
from typing import FrozenSet, Iterable, Iterator, Optional, Sequence, Tuple, Union

from core.models.domain import CATEGORIES, USER_CATEGORY, Category, ImageRecord

CategoryLike = Union[Category, str]


def normalize_whitelist(allowed_general_tags: Optional[Iterable[str]]) -> Optional[FrozenSet[str]]:
    """Return the whitelist as a frozenset, or None when no whitelist applies."""

    if allowed_general_tags is None:
        return None
    if isinstance(allowed_general_tags, frozenset):
        return allowed_general_tags
    return frozenset(allowed_general_tags)


def ordered_categories(categories: Iterable[CategoryLike]) -> Tuple[Category, ...]:
    """Keep the aggregatable categories among ``categories`` in their fixed order.

    Unknown names are ignored.
    """

    parsed = (Category.parse(value) for value in categories)
    wanted = {category for category in parsed if category is not None}
    return tuple(category for category in CATEGORIES if category in wanted)


def split_allowed_categories(
    allowed_categories: Optional[Sequence[CategoryLike]],
) -> Tuple[Optional[Tuple[Category, ...]], bool]:
    """Split a mixed allow-list into tag categories and the user-inclusion flag.

    ``None`` keeps every tag category and excludes users.
    """

    if allowed_categories is None:
        return None, False
    include_users = any(value == USER_CATEGORY for value in allowed_categories)
    tag_categories = ordered_categories(value for value in allowed_categories if value != USER_CATEGORY)
    return tag_categories, include_users


@dataclass(frozen=True)
class TagFilter:
    """Category allow-list plus optional whitelist restricting general tags."""

    categories: Tuple[Category, ...] = CATEGORIES
    whitelist: Optional[FrozenSet[str]] = None

    @classmethod
    def build(
        cls,
        category: Optional[CategoryLike] = None,
        categories: Optional[Iterable[CategoryLike]] = None,
        allowed_general_tags: Optional[Iterable[str]] = None,
    ) -> "TagFilter":
        """Resolve the filter: a single category wins, then the list, then all four."""

        if category is not None:
            selected = ordered_categories([category])
        elif categories is not None:
            selected = ordered_categories(categories)
        else:
            selected = CATEGORIES
        return cls(categories=selected, whitelist=normalize_whitelist(allowed_general_tags))

    def allows(self, tag: str, category: Category) -> bool:
        if category is Category.GENERAL and self.whitelist is not None:
            return tag in self.whitelist
        return True

    def iter_tags(self, record: ImageRecord) -> Iterator[Tuple[str, Category]]:
        """Yield eligible ``(tag, category)`` pairs, duplicates included."""

        for category in self.categories:
            for tag in record.tags_in(category):
                if self.allows(tag, category):
                    yield tag, category
