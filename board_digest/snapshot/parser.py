from __future__ import annotations

import json
from collections.abc import Mapping
from functools import lru_cache
from pathlib import Path
from typing import Any

import jsonschema
from jsonschema.exceptions import best_match

from ..models.board import ColumnSchema, RawBoard, RawField, RawRecord

"""Snapshot parsing and structural validation.

Two input shapes are accepted:

- the pipeline contract::

    {"boardName": str,
     "columns": [{"id", "title"}],
     "records": [{"id", "displayName", "fields": [{"columnId", "text"}]}]}

- the board store's own payload (what the fetch collaborator returns)::

    {"name": str,
     "columns": [{"id", "title"}],
     "items": [{"id", "name", "column_values": [{"id", "text"}]}]}

A payload is treated as the store shape only when it has ``items`` and no
``records``; everything else is validated against the contract so that a
missing ``records`` key is reported as such.
"""

__all__ = [
    "MalformedSnapshotError",
    "parse_snapshot",
]

SCHEMA_PATH = Path(__file__).with_name("snapshot_schema.json")


class MalformedSnapshotError(ValueError):
    """Snapshot lacks required structure (board name, columns or records)."""


@lru_cache(maxsize=1)
def _schemas() -> dict[str, Any]:
    return json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))


def _validate(data: Mapping[str, Any], shape: str) -> None:
    validator = jsonschema.Draft7Validator(_schemas()[shape])
    error = best_match(validator.iter_errors(data))
    if error is not None:
        where = "/".join(str(p) for p in error.absolute_path) or "<root>"
        raise MalformedSnapshotError(f"malformed snapshot at {where}: {error.message}")


def _is_store_payload(data: Mapping[str, Any]) -> bool:
    return "items" in data and "records" not in data


def parse_snapshot(data: Any) -> RawBoard:
    """Validate a snapshot mapping and convert it to a RawBoard.

    Raises:
        MalformedSnapshotError: when ``data`` is not a mapping or misses
            required structural fields. Never returns an empty board instead.
    """
    if isinstance(data, RawBoard):
        return data
    if not isinstance(data, Mapping):
        raise MalformedSnapshotError(
            f"malformed snapshot: expected a mapping, got {type(data).__name__}"
        )

    if _is_store_payload(data):
        _validate(data, "native")
        return RawBoard(
            board_name=data["name"],
            columns=tuple(ColumnSchema(id=str(c["id"]), title=c["title"]) for c in data["columns"]),
            records=tuple(
                RawRecord(
                    id=str(item["id"]),
                    display_name=item.get("name"),
                    fields=tuple(
                        RawField(column_id=str(cv["id"]), text=cv.get("text"))
                        for cv in item.get("column_values") or []
                    ),
                )
                for item in data["items"]
            ),
        )

    _validate(data, "contract")
    return RawBoard(
        board_name=data["boardName"],
        columns=tuple(ColumnSchema(id=str(c["id"]), title=c["title"]) for c in data["columns"]),
        records=tuple(
            RawRecord(
                id=str(rec["id"]),
                display_name=rec.get("displayName"),
                fields=tuple(
                    RawField(column_id=str(f["columnId"]), text=f.get("text"))
                    for f in rec.get("fields") or []
                ),
            )
            for rec in data["records"]
        ),
    )
