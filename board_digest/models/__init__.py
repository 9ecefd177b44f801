"""Domain models for the board cleaning and summarization pipeline.

This package contains the immutable artifacts passed between pipeline stages:
raw snapshot records, normalized values, cleaned boards, quality reports,
role bindings and aggregation results.
"""

from .aggregation import AggregatedGroup, GroupedSummary, GroupOrder
from .board import CleanedBoard, CleanedRecord, ColumnSchema, RawBoard, RawField, RawRecord
from .processing_result import BoardStat, RunResult
from .quality_report import QualityReport
from .roles import BoardKind, ColumnRole, RoleBindings, RoleRule
from .values import MISSING, CellValue, ValueKind

__all__ = [
    # Snapshot models
    "ColumnSchema",
    "RawField",
    "RawRecord",
    "RawBoard",
    # Cleaned models
    "CellValue",
    "ValueKind",
    "MISSING",
    "CleanedRecord",
    "CleanedBoard",
    "QualityReport",
    # Role / aggregation models
    "ColumnRole",
    "BoardKind",
    "RoleRule",
    "RoleBindings",
    "GroupOrder",
    "AggregatedGroup",
    "GroupedSummary",
    # Run models
    "BoardStat",
    "RunResult",
]
