from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum

"""Normalized cell value model.

A cleaned cell is always one of four explicit kinds. Values that could not be
parsed as their column's expected type keep their trimmed source text as a
TEXT value instead of disappearing into a catch-all string.
"""

__all__ = [
    "ValueKind",
    "CellValue",
    "MISSING",
]


class ValueKind(Enum):
    """Kind tag for a normalized cell.

    - TEXT: free text, or a value that failed numeric/date parsing
    - NUMBER: canonical decimal string (``"125000"``, ``"1.5"``)
    - DATE: canonical ``YYYY-MM-DD`` string
    - MISSING: empty cell or spreadsheet error sentinel
    """
    TEXT = "text"
    NUMBER = "number"
    DATE = "date"
    MISSING = "missing"


@dataclass(frozen=True)
class CellValue:
    kind: ValueKind
    text: str | None = None  # canonical string; None only for MISSING

    @staticmethod
    def of_text(text: str) -> CellValue:
        return CellValue(ValueKind.TEXT, text)

    @staticmethod
    def of_number(text: str) -> CellValue:
        return CellValue(ValueKind.NUMBER, text)

    @staticmethod
    def of_date(text: str) -> CellValue:
        return CellValue(ValueKind.DATE, text)

    @property
    def is_missing(self) -> bool:
        """True for MISSING values and for blank text."""
        return self.kind is ValueKind.MISSING or not self.text

    def as_float(self) -> float | None:
        """Numeric interpretation used by sums and sorting.

        Only the text itself is considered; anything that does not parse as a
        finite float yields None.
        """
        if self.is_missing:
            return None
        try:
            num = float(self.text)  # type: ignore[arg-type]
        except ValueError:
            return None
        if not math.isfinite(num):
            return None
        return num

    def __str__(self) -> str:
        return self.text or ""


MISSING = CellValue(ValueKind.MISSING, None)
