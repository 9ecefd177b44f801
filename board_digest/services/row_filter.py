from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum

from ..models.board import CleanedRecord

"""Row filtering: genuine records vs spreadsheet-import noise.

Rule A (empty row) is checked before rule B (embedded header row).

Rule B drops a record when any value equals the title of its own column. It
is a heuristic for header lines that became data rows during a spreadsheet
import, and it also drops a legitimate record whose value happens to equal
its column title (e.g. a status literally named "Status").
"""

__all__ = [
    "DropReason",
    "RowDecision",
    "evaluate_row",
    "filter_rows",
]


class DropReason(Enum):
    EMPTY = "empty"
    EMBEDDED_HEADER = "embedded_header"


@dataclass(frozen=True)
class RowDecision:
    keep: bool
    reason: DropReason | None = None
    issue: str | None = None  # quality note, only for embedded header rows


KEEP = RowDecision(keep=True)


def header_row_issue(display_name: str | None) -> str:
    return f'Removed embedded header row (item: "{display_name or "empty"}")'


def evaluate_row(record: CleanedRecord, column_titles: Sequence[str]) -> RowDecision:
    values = [(title, record.values.get(title)) for title in column_titles]

    if not record.display_name and all(v is None or v.is_missing for _, v in values):
        return RowDecision(keep=False, reason=DropReason.EMPTY)

    for title, v in values:
        if v is not None and not v.is_missing and v.text == title:
            return RowDecision(
                keep=False,
                reason=DropReason.EMBEDDED_HEADER,
                issue=header_row_issue(record.display_name),
            )
    return KEEP


def filter_rows(
    records: Sequence[CleanedRecord], column_titles: Sequence[str]
) -> tuple[list[CleanedRecord], int, list[str]]:
    """Apply the row rules in record order.

    Returns:
        tuple: (kept records, removed count, per-row issues in drop order)
    """
    kept: list[CleanedRecord] = []
    removed = 0
    issues: list[str] = []
    for record in records:
        decision = evaluate_row(record, column_titles)
        if decision.keep:
            kept.append(record)
            continue
        removed += 1
        if decision.issue:
            issues.append(decision.issue)
    return kept, removed, issues
