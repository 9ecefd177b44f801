from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

"""Column role and board kind models.

Roles are semantic categories inferred from column titles; a board's
RoleBindings is resolved once and then shared by the aggregator and the
renderer.
"""

__all__ = [
    "ColumnRole",
    "BoardKind",
    "RoleRule",
    "RoleBindings",
]


class ColumnRole(Enum):
    EXECUTION_STATUS = "execution_status"
    STATUS = "status"
    STAGE = "stage"
    PROBABILITY = "probability"
    BILLED_AMOUNT = "billed_amount"
    COLLECTED_AMOUNT = "collected_amount"
    RECEIVABLE_AMOUNT = "receivable_amount"
    MONETARY_AMOUNT = "monetary_amount"
    SECTOR = "sector"
    OWNER = "owner"
    CUSTOMER = "customer"
    NATURE = "nature"
    SERIAL = "serial"
    DATE_FIELD = "date_field"
    GENERIC = "generic"


class BoardKind(Enum):
    """Board classification driving which summary sections are rendered.

    - PIPELINE: sales-pipeline-like (deals, stages, closure)
    - EXECUTION: execution-tracking-like (work orders, billing, serials)
    - GENERIC: unrecognized; rendered as a plain table
    """
    PIPELINE = "pipeline"
    EXECUTION = "execution"
    GENERIC = "generic"


@dataclass(frozen=True)
class RoleRule:
    role: ColumnRole
    keywords: tuple[str, ...]  # lowercase substrings
    priority: int  # lower binds first


@dataclass(frozen=True)
class RoleBindings:
    """Role -> column title (or None) for one board, plus its kind."""
    kind: BoardKind
    columns: dict[ColumnRole, str | None] = field(default_factory=dict)

    def column(self, role: ColumnRole) -> str | None:
        return self.columns.get(role)

    def bound(self, *roles: ColumnRole) -> list[str]:
        """Bound column titles for ``roles`` in the order given, unbound ones skipped."""
        return [c for c in (self.columns.get(r) for r in roles) if c is not None]
