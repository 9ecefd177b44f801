from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

"""Aggregation result models."""

__all__ = [
    "GroupOrder",
    "AggregatedGroup",
    "GroupedSummary",
]


class GroupOrder(Enum):
    COUNT_DESC = "count_desc"  # ties keep first-seen order
    KEY_ASC = "key_asc"
    FIRST_SEEN = "first_seen"


@dataclass(frozen=True)
class AggregatedGroup:
    group_key: str
    record_count: int
    summed_value: float = 0.0


@dataclass(frozen=True)
class GroupedSummary:
    """Ordered groups for one grouping column.

    The record counts of all groups add up to the number of records grouped.
    """
    column: str
    groups: tuple[AggregatedGroup, ...]

    @property
    def total_count(self) -> int:
        return sum(g.record_count for g in self.groups)
