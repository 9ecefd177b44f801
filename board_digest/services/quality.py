from __future__ import annotations

from collections.abc import Sequence
from decimal import ROUND_HALF_UP, Decimal

from ..models.board import CleanedRecord
from ..models.quality_report import QualityReport

"""Data quality audit over the filtered record set."""

__all__ = [
    "round_percent",
    "completeness_percent",
    "count_missing",
    "audit_quality",
]


def round_percent(value: float) -> float:
    """One decimal, ties away from zero on the exact binary value.

    >>> round_percent(81.25)
    81.3
    """
    return float(Decimal(value).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def completeness_percent(missing: int, total: int) -> float:
    """``(1 - missing/total) * 100`` to one decimal; 100.0 when there are no fields.

    >>> completeness_percent(6, 40)
    85.0
    >>> completeness_percent(3, 16)
    81.3
    """
    if total == 0:
        return 100.0
    return round_percent((1 - missing / total) * 100)


def count_missing(records: Sequence[CleanedRecord], column_titles: Sequence[str]) -> int:
    missing = 0
    for record in records:
        for title in column_titles:
            v = record.values.get(title)
            if v is None or v.is_missing:
                missing += 1
    return missing


def audit_quality(
    records: Sequence[CleanedRecord],
    column_titles: Sequence[str],
    *,
    total_raw_rows: int,
    removed_row_count: int,
    row_issues: Sequence[str] = (),
) -> QualityReport:
    """Build the QualityReport for the records that survived filtering.

    Issue order: per-row header notes, then the removed-rows note, then the
    missing-values note.
    """
    total_fields = len(records) * len(column_titles)
    missing = count_missing(records, column_titles)

    issues = list(row_issues)
    if removed_row_count > 0:
        issues.append(f"Removed {removed_row_count} junk/empty/header rows")
    if missing > 0:
        issues.append(
            f"{missing} of {total_fields} field values are missing/null "
            f"({round_percent(missing / total_fields * 100):.1f}%)"
        )

    return QualityReport(
        total_raw_rows=total_raw_rows,
        cleaned_row_count=len(records),
        removed_row_count=removed_row_count,
        missing_field_count=missing,
        total_field_count=total_fields,
        completeness_percent=completeness_percent(missing, total_fields),
        issues=tuple(issues),
    )
