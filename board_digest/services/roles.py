from __future__ import annotations

from collections.abc import Sequence

from ..config.loader import PipelineConfig
from ..models.roles import BoardKind, ColumnRole, RoleBindings, RoleRule

"""Column-role detection and board-kind classification.

Roles bind in ascending priority. For each role the titles are scanned in
board order and the first title not already claimed by a higher-priority role
whose lowercase form contains one of the role's keywords wins. A title binds
to at most one role, which is what keeps overlapping keywords ("value",
"status", "amount") deterministic: e.g. "Billed Value" goes to BILLED_AMOUNT
before MONETARY_AMOUNT gets a chance at it.

GENERIC has no keywords; it binds to the first title no other role claimed.
"""

__all__ = [
    "ROLE_RULES",
    "detect_roles",
    "classify_board",
    "bind_roles",
]

ROLE_RULES: tuple[RoleRule, ...] = (
    RoleRule(ColumnRole.EXECUTION_STATUS, ("execution status", "execution"), 1),
    RoleRule(ColumnRole.STATUS, ("deal status", "status"), 2),
    RoleRule(ColumnRole.STAGE, ("deal stage", "stage"), 3),
    RoleRule(ColumnRole.PROBABILITY, ("probability", "closure prob"), 4),
    RoleRule(ColumnRole.BILLED_AMOUNT, ("billed value", "billed"), 5),
    RoleRule(ColumnRole.COLLECTED_AMOUNT, ("collected amount", "collected"), 6),
    RoleRule(ColumnRole.RECEIVABLE_AMOUNT, ("amount receivable", "receivable"), 7),
    RoleRule(ColumnRole.MONETARY_AMOUNT, ("masked deal", "deal value", "value", "amount"), 8),
    RoleRule(ColumnRole.SECTOR, ("sector",), 9),
    RoleRule(ColumnRole.OWNER, ("owner", "bd/kam", "personnel"), 10),
    RoleRule(ColumnRole.CUSTOMER, ("customer", "client"), 11),
    RoleRule(ColumnRole.NATURE, ("nature of work", "nature"), 12),
    RoleRule(ColumnRole.SERIAL, ("serial",), 13),
    RoleRule(ColumnRole.DATE_FIELD, ("date",), 14),
    RoleRule(ColumnRole.GENERIC, (), 15),
)

_DEFAULT_CONFIG = PipelineConfig()


def _matches(title: str, keywords: Sequence[str]) -> bool:
    lower = title.lower()
    return any(k in lower for k in keywords)


def classify_board(column_titles: Sequence[str], config: PipelineConfig | None = None) -> BoardKind:
    """Pipeline keywords are checked before execution keywords."""
    cfg = config or _DEFAULT_CONFIG
    if any(_matches(t, cfg.pipeline_keywords) for t in column_titles):
        return BoardKind.PIPELINE
    if any(_matches(t, cfg.execution_keywords) for t in column_titles):
        return BoardKind.EXECUTION
    return BoardKind.GENERIC


def bind_roles(
    column_titles: Sequence[str], rules: Sequence[RoleRule] = ROLE_RULES
) -> dict[ColumnRole, str | None]:
    claimed: set[str] = set()
    bindings: dict[ColumnRole, str | None] = {}
    for rule in sorted(rules, key=lambda r: r.priority):
        match: str | None = None
        for title in column_titles:
            if title in claimed:
                continue
            if not rule.keywords or _matches(title, rule.keywords):
                match = title
                break
        if match is not None:
            claimed.add(match)
        bindings[rule.role] = match
    return bindings


def detect_roles(column_titles: Sequence[str], config: PipelineConfig | None = None) -> RoleBindings:
    return RoleBindings(
        kind=classify_board(column_titles, config),
        columns=bind_roles(column_titles),
    )
