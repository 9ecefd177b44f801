from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from ..config.loader import PipelineConfig
from ..models.board import CleanedBoard, CleanedRecord, RawBoard, RawRecord
from ..models.roles import RoleBindings
from ..models.values import MISSING, CellValue
from ..snapshot.parser import parse_snapshot
from .normalizer import normalize_value
from .quality import audit_quality
from .renderer import render_context
from .resolver import (
    IDENTITY_COLUMN_ID,
    board_column_titles,
    identity_column_ids,
    resolve_columns,
    resolve_title,
)
from .roles import detect_roles
from .row_filter import filter_rows

"""Pipeline entry points.

snapshot -> resolve + normalize -> filter rows -> audit quality -> CleanedBoard
CleanedBoard -> detect roles -> render -> context document

Every function here is pure: no I/O, no state kept between calls, and the
same snapshot always yields equal boards and byte-identical documents.
"""

__all__ = [
    "PipelineOutput",
    "clean_record",
    "clean_board",
    "build_context",
    "run_pipeline",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PipelineOutput:
    board: CleanedBoard
    bindings: RoleBindings
    document: str


def clean_record(
    record: RawRecord,
    titles_by_id: dict[str, str],
    column_titles: tuple[str, ...],
    identity_ids: set[str],
    config: PipelineConfig,
) -> CleanedRecord:
    """Normalize one raw record onto the full column-title key set.

    When two fields resolve to the same title the later field wins.
    """
    values: dict[str, CellValue] = dict.fromkeys(column_titles, MISSING)
    for f in record.fields:
        if f.column_id in identity_ids or f.column_id == IDENTITY_COLUMN_ID:
            continue
        title = resolve_title(titles_by_id, f.column_id)
        values[title] = normalize_value(f.text, title, config)
    name = record.display_name.strip() if record.display_name else None
    return CleanedRecord(id=record.id, display_name=name or None, values=values)


def clean_board(snapshot: RawBoard | Mapping[str, Any], config: PipelineConfig | None = None) -> CleanedBoard:
    """Clean one board snapshot.

    Raises:
        MalformedSnapshotError: if a mapping snapshot lacks board name,
            columns or records.
    """
    cfg = config or PipelineConfig()
    raw = parse_snapshot(snapshot)

    titles_by_id = resolve_columns(raw.columns)
    identity_ids = identity_column_ids(raw.columns, cfg.identity_titles)
    column_titles = board_column_titles(raw.columns, raw.records, cfg.identity_titles)

    cleaned = [clean_record(r, titles_by_id, column_titles, identity_ids, cfg) for r in raw.records]
    kept, removed, row_issues = filter_rows(cleaned, column_titles)
    quality = audit_quality(
        kept,
        column_titles,
        total_raw_rows=len(raw.records),
        removed_row_count=removed,
        row_issues=row_issues,
    )
    logger.debug(
        "cleaned board=%s raw=%d kept=%d removed=%d completeness=%.1f",
        raw.board_name, len(raw.records), len(kept), removed, quality.completeness_percent,
    )
    return CleanedBoard(
        board_name=raw.board_name,
        column_titles=column_titles,
        records=tuple(kept),
        quality=quality,
    )


def build_context(board: CleanedBoard, config: PipelineConfig | None = None) -> str:
    bindings = detect_roles(board.column_titles, config)
    return render_context(board, bindings, bindings.kind, config)


def run_pipeline(snapshot: RawBoard | Mapping[str, Any], config: PipelineConfig | None = None) -> PipelineOutput:
    cfg = config or PipelineConfig()
    board = clean_board(snapshot, cfg)
    bindings = detect_roles(board.column_titles, cfg)
    return PipelineOutput(
        board=board,
        bindings=bindings,
        document=render_context(board, bindings, bindings.kind, cfg),
    )
