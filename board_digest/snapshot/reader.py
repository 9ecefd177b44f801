from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pandas as pd

from ..models.board import ColumnSchema, RawBoard, RawField, RawRecord
from .parser import MalformedSnapshotError, parse_snapshot

"""Snapshot file reader.

Board snapshots arrive either as JSON (the fetch collaborator's payload saved
to disk) or as the board store's spreadsheet export:

- row 1: board title (first non-empty cell, falls back to the file stem)
- row 2: header; the first column is the item name (identity column)
- row 3+: one record per line

Every cell is read as text with pandas' default NA conversion disabled, so
literal strings such as ``NA`` or ``null`` reach the normalizer untouched.
"""

__all__ = [
    "SnapshotHeaderError",
    "SUPPORTED_SUFFIXES",
    "read_snapshot_file",
    "frame_to_board",
]

SUPPORTED_SUFFIXES = (".json", ".xlsx", ".csv")
IDENTITY_COLUMN_ID = "name"


class SnapshotHeaderError(MalformedSnapshotError):
    """Raised when a spreadsheet export lacks its title/header rows."""


def _cell_text(val: Any) -> str | None:
    if val is None:
        return None
    if not isinstance(val, str) and pd.isna(val):
        return None
    text = str(val)
    return text if text.strip() else None


def read_export_frame(path: Path) -> pd.DataFrame:
    """Read a spreadsheet export without a header, every cell as text."""
    if path.suffix.lower() == ".csv":
        return pd.read_csv(path, header=None, dtype=str, keep_default_na=False, na_values=[])
    return pd.read_excel(
        path, sheet_name=0, header=None, dtype=str, keep_default_na=False, na_values=[]
    )


def frame_to_board(df: pd.DataFrame, fallback_name: str) -> RawBoard:
    """Convert a raw export frame (title row, header row, data rows) to a RawBoard.

    Steps:
    1. Validate at least 2 rows exist (1: title, 2: header)
    2. Column ids: ``name`` for the first column, ``col_<n>`` for the rest
    3. Skip lines that are blank in every cell
    """
    if df.shape[0] < 2:
        raise SnapshotHeaderError(f"export '{fallback_name}' lacks a header row (row 2)")

    title_cells = [_cell_text(v) for v in df.iloc[0].tolist()]
    board_name = next((t.strip() for t in title_cells if t), fallback_name)

    header = [_cell_text(v) for v in df.iloc[1].tolist()]
    columns: list[ColumnSchema] = []
    for idx, title in enumerate(header):
        col_id = IDENTITY_COLUMN_ID if idx == 0 else f"col_{idx}"
        columns.append(ColumnSchema(id=col_id, title=title.strip() if title else col_id))

    records: list[RawRecord] = []
    for offset, raw in enumerate(df.iloc[2:].itertuples(index=False, name=None)):
        cells = [_cell_text(v) for v in raw]
        if all(c is None for c in cells):
            continue
        name = cells[0].strip() if cells and cells[0] else None
        fields = tuple(
            RawField(column_id=col.id, text=text)
            for col, text in zip(columns[1:], cells[1:], strict=False)
        )
        # row_<n> uses the 1-based spreadsheet line number
        records.append(RawRecord(id=f"row_{offset + 3}", display_name=name, fields=fields))

    return RawBoard(board_name=board_name, columns=tuple(columns), records=tuple(records))


def read_snapshot_file(path: Path) -> RawBoard:
    """Load one board snapshot from disk.

    Raises:
        MalformedSnapshotError: unsupported suffix, invalid JSON, or a
            snapshot missing required structure.
    """
    suffix = path.suffix.lower()
    if suffix == ".json":
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise MalformedSnapshotError(f"invalid json in {path.name}: {e}") from e
        return parse_snapshot(data)
    if suffix in (".xlsx", ".csv"):
        return frame_to_board(read_export_frame(path), fallback_name=path.stem)
    raise MalformedSnapshotError(f"unsupported snapshot format: {path.name}")
