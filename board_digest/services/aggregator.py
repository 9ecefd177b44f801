from __future__ import annotations

from collections.abc import Sequence

from ..models.aggregation import AggregatedGroup, GroupedSummary, GroupOrder
from ..models.board import CleanedRecord

"""Grouping and summing of cleaned records.

Group key per record: its value in the grouping column, else its display
name, else the sentinel. Every record lands in exactly one group, so group
counts always add up to the number of records.
"""

__all__ = [
    "UNKNOWN",
    "NOT_SET",
    "group_key",
    "numeric_value",
    "sum_column",
    "group_records",
]

UNKNOWN = "Unknown"
NOT_SET = "Not set"


def group_key(record: CleanedRecord, column: str, sentinel: str = UNKNOWN) -> str:
    v = record.values.get(column)
    if v is not None and not v.is_missing:
        return v.text  # type: ignore[return-value]
    return record.display_name or sentinel


def numeric_value(record: CleanedRecord, column: str | None) -> float:
    """Float value of ``column`` for the record; 0.0 when absent or unparsable."""
    if column is None:
        return 0.0
    v = record.values.get(column)
    if v is None:
        return 0.0
    num = v.as_float()
    return num if num is not None else 0.0


def sum_column(records: Sequence[CleanedRecord], column: str | None) -> float:
    return sum(numeric_value(r, column) for r in records)


def group_records(
    records: Sequence[CleanedRecord],
    group_column: str,
    value_column: str | None = None,
    *,
    order: GroupOrder = GroupOrder.FIRST_SEEN,
    sentinel: str = UNKNOWN,
) -> GroupedSummary:
    counts: dict[str, int] = {}
    sums: dict[str, float] = {}
    for record in records:
        key = group_key(record, group_column, sentinel)
        counts[key] = counts.get(key, 0) + 1
        sums[key] = sums.get(key, 0.0) + numeric_value(record, value_column)

    keys = list(counts)  # first-seen order
    if order is GroupOrder.COUNT_DESC:
        keys.sort(key=lambda k: -counts[k])  # stable: ties keep first-seen order
    elif order is GroupOrder.KEY_ASC:
        keys.sort()

    return GroupedSummary(
        column=group_column,
        groups=tuple(AggregatedGroup(k, counts[k], sums[k]) for k in keys),
    )
