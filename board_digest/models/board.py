from __future__ import annotations

from dataclasses import dataclass

from .quality_report import QualityReport
from .values import CellValue

"""Board snapshot models: raw input records and cleaned output records.

RawBoard mirrors what the board-store collaborator hands over. CleanedBoard is
the primary artifact returned by the cleaning pipeline; once returned it is
owned by the caller and never touched again by the pipeline.
"""

__all__ = [
    "ColumnSchema",
    "RawField",
    "RawRecord",
    "RawBoard",
    "CleanedRecord",
    "CleanedBoard",
]


@dataclass(frozen=True)
class ColumnSchema:
    id: str  # unique within a board
    title: str  # human readable, not necessarily unique


@dataclass(frozen=True)
class RawField:
    column_id: str
    text: str | None  # board store may send null for untouched cells


@dataclass(frozen=True)
class RawRecord:
    id: str
    display_name: str | None
    fields: tuple[RawField, ...] = ()


@dataclass(frozen=True)
class RawBoard:
    board_name: str
    columns: tuple[ColumnSchema, ...]
    records: tuple[RawRecord, ...]


@dataclass(frozen=True)
class CleanedRecord:
    """One record after column resolution and value normalization.

    ``values`` always holds every non-identity column title of the board, with
    MISSING for cells the source record did not carry.
    """
    id: str
    display_name: str | None
    values: dict[str, CellValue]

    def get(self, title: str | None) -> CellValue | None:
        if title is None:
            return None
        return self.values.get(title)


@dataclass(frozen=True)
class CleanedBoard:
    board_name: str
    column_titles: tuple[str, ...]  # ordered, identity column excluded
    records: tuple[CleanedRecord, ...]
    quality: QualityReport
