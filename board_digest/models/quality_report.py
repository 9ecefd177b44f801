from __future__ import annotations

from dataclasses import dataclass

"""QualityReport model consumed by the UI collaborator."""

__all__ = [
    "QualityReport",
]


@dataclass(frozen=True)
class QualityReport:
    """Completeness statistics for one cleaned board.

    Invariants:
        total_field_count == cleaned_row_count * number of column titles
        cleaned_row_count + removed_row_count == total_raw_rows
    """
    total_raw_rows: int
    cleaned_row_count: int
    removed_row_count: int
    missing_field_count: int
    total_field_count: int
    completeness_percent: float  # one decimal, 100.0 when there are no fields
    issues: tuple[str, ...] = ()
