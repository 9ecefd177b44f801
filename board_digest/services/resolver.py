from __future__ import annotations

from collections.abc import Iterable, Sequence

from ..models.board import ColumnSchema, RawRecord

"""Column resolution: column id -> human readable title.

Unresolved ids are never dropped; a field whose column id is missing from the
schema is kept under the literal id so no cell is lost downstream.
"""

__all__ = [
    "IDENTITY_COLUMN_ID",
    "resolve_columns",
    "resolve_title",
    "identity_column_ids",
    "board_column_titles",
]

IDENTITY_COLUMN_ID = "name"


def resolve_columns(columns: Iterable[ColumnSchema]) -> dict[str, str]:
    """Map column id to title. Later entries for the same id win."""
    mapping: dict[str, str] = {}
    for col in columns:
        mapping[col.id] = col.title
    return mapping


def resolve_title(mapping: dict[str, str], column_id: str) -> str:
    return mapping.get(column_id, column_id)


def identity_column_ids(columns: Iterable[ColumnSchema], identity_titles: Sequence[str]) -> set[str]:
    """Ids of the item-name column(s): id ``name`` or a title listed as identity."""
    return {c.id for c in columns if c.id == IDENTITY_COLUMN_ID or c.title in identity_titles}


def board_column_titles(
    columns: Sequence[ColumnSchema],
    records: Iterable[RawRecord],
    identity_titles: Sequence[str],
) -> tuple[str, ...]:
    """Ordered, de-duplicated non-identity titles of a board.

    Schema titles come first in schema order (a repeated title keeps its first
    position). Field ids the schema does not know are appended in first-seen
    order under their literal id.
    """
    identity_ids = identity_column_ids(columns, identity_titles)
    known_ids = {c.id for c in columns}
    titles: list[str] = []
    seen: set[str] = set()

    def _add(title: str) -> None:
        if title not in seen:
            seen.add(title)
            titles.append(title)

    for col in columns:
        if col.id not in identity_ids:
            _add(col.title)
    for record in records:
        for f in record.fields:
            if f.column_id not in known_ids and f.column_id != IDENTITY_COLUMN_ID:
                _add(f.column_id)
    return tuple(titles)
