from __future__ import annotations

from collections.abc import Sequence

from ..config.loader import PipelineConfig
from ..models.aggregation import GroupOrder
from ..models.board import CleanedBoard, CleanedRecord
from ..models.roles import BoardKind, ColumnRole, RoleBindings
from .aggregator import NOT_SET, UNKNOWN, group_records, numeric_value, sum_column
from .formatting import flatten_cell, format_amount, format_cell, format_percent

"""Context document rendering.

Layout, in fixed order:

1. ``## <board> (<rows> rows, <completeness>% complete)``
2. ``Data notes: ...`` when the quality report has issues
3. ``### AGGREGATED SUMMARY`` with one bullet section per bound role
   (pipeline and execution boards only)
4. a detail table: top-N records by the board's amount column, or for
   generic boards every record with the first few columns

Group ordering per section:

    By Deal Status / By Closure Probability / By Execution Status  first seen
    By Sector / By Owner                                           count desc
    By Deal Stage                                                  key asc

The renderer is a pure function of its inputs.
"""

__all__ = [
    "NO_DATA",
    "render_context",
    "render_header",
    "compose_data_block",
]

NO_DATA = "No data available."

_DEFAULT_CONFIG = PipelineConfig()

# (role, section title, group order, sentinel)
_PIPELINE_SECTIONS: tuple[tuple[ColumnRole, str, GroupOrder, str], ...] = (
    (ColumnRole.STATUS, "By Deal Status", GroupOrder.FIRST_SEEN, UNKNOWN),
    (ColumnRole.SECTOR, "By Sector", GroupOrder.COUNT_DESC, UNKNOWN),
    (ColumnRole.STAGE, "By Deal Stage", GroupOrder.KEY_ASC, UNKNOWN),
    (ColumnRole.OWNER, "By Owner", GroupOrder.COUNT_DESC, UNKNOWN),
    (ColumnRole.PROBABILITY, "By Closure Probability", GroupOrder.FIRST_SEEN, NOT_SET),
)

_PIPELINE_TABLE_ROLES = (
    ColumnRole.STATUS,
    ColumnRole.MONETARY_AMOUNT,
    ColumnRole.SECTOR,
    ColumnRole.STAGE,
    ColumnRole.OWNER,
    ColumnRole.PROBABILITY,
)

_EXECUTION_TABLE_ROLES = (
    ColumnRole.CUSTOMER,
    ColumnRole.NATURE,
    ColumnRole.EXECUTION_STATUS,
    ColumnRole.SECTOR,
    ColumnRole.MONETARY_AMOUNT,
    ColumnRole.COLLECTED_AMOUNT,
    ColumnRole.RECEIVABLE_AMOUNT,
)


def render_header(board: CleanedBoard) -> str:
    q = board.quality
    return f"## {flatten_cell(board.board_name)} ({q.cleaned_row_count} rows, {q.completeness_percent:.1f}% complete)"


def _money(cfg: PipelineConfig, n: float) -> str:
    return f"{cfg.currency_symbol}{format_amount(n)}"


def _pipeline_sections(
    records: Sequence[CleanedRecord], bindings: RoleBindings, cfg: PipelineConfig
) -> list[str]:
    value_col = bindings.column(ColumnRole.MONETARY_AMOUNT)
    lines: list[str] = []
    for role, title, order, sentinel in _PIPELINE_SECTIONS:
        column = bindings.column(role)
        if column is None:
            continue
        summary = group_records(records, column, value_col, order=order, sentinel=sentinel)
        label = "total value" if role is ColumnRole.STATUS else "value"
        lines += ["", f"**{title}:**"]
        lines += [
            f"- {flatten_cell(g.group_key)}: {g.record_count} deals, {label}: {_money(cfg, g.summed_value)}"
            for g in summary.groups
        ]
    return lines


def _financial_overview(
    records: Sequence[CleanedRecord], bindings: RoleBindings, cfg: PipelineConfig
) -> list[str]:
    amount_col = bindings.column(ColumnRole.MONETARY_AMOUNT)
    billed_col = bindings.column(ColumnRole.BILLED_AMOUNT)
    collected_col = bindings.column(ColumnRole.COLLECTED_AMOUNT)
    receivable_col = bindings.column(ColumnRole.RECEIVABLE_AMOUNT)

    totals = [
        ("Total Order Value", amount_col),
        ("Total Billed", billed_col),
        ("Total Collected", collected_col),
        ("Total Receivable", receivable_col),
    ]
    body = [f"- {label}: {_money(cfg, sum_column(records, col))}" for label, col in totals if col]
    if not body:
        return []

    total_amount = sum_column(records, amount_col)
    total_billed = sum_column(records, billed_col)
    total_collected = sum_column(records, collected_col)
    if billed_col and collected_col and total_billed > 0:
        body.append(f"- Collection Rate: {format_percent(total_collected, total_billed)}")
    if amount_col and billed_col and total_amount > 0:
        body.append(f"- Billing Rate: {format_percent(total_billed, total_amount)}")
    return ["", "**Financial Overview:**", *body]


def _execution_sections(
    records: Sequence[CleanedRecord], bindings: RoleBindings, cfg: PipelineConfig
) -> list[str]:
    amount_col = bindings.column(ColumnRole.MONETARY_AMOUNT)
    collected_col = bindings.column(ColumnRole.COLLECTED_AMOUNT)
    lines = _financial_overview(records, bindings, cfg)

    exec_col = bindings.column(ColumnRole.EXECUTION_STATUS)
    if exec_col:
        summary = group_records(records, exec_col, amount_col, order=GroupOrder.FIRST_SEEN)
        lines += ["", "**By Execution Status:**"]
        lines += [
            f"- {flatten_cell(g.group_key)}: {g.record_count} WOs, value: {_money(cfg, g.summed_value)}"
            for g in summary.groups
        ]

    sector_col = bindings.column(ColumnRole.SECTOR)
    if sector_col:
        by_value = group_records(records, sector_col, amount_col, order=GroupOrder.COUNT_DESC)
        collected: dict[str, float] = {}
        if collected_col:
            by_collected = group_records(records, sector_col, collected_col, order=GroupOrder.COUNT_DESC)
            collected = {g.group_key: g.summed_value for g in by_collected.groups}
        lines += ["", "**By Sector:**"]
        for g in by_value.groups:
            line = f"- {flatten_cell(g.group_key)}: {g.record_count} WOs, value: {_money(cfg, g.summed_value)}"
            if collected_col:
                line += f", collected: {_money(cfg, collected[g.group_key])}"
            lines.append(line)
    return lines


def _table(
    records: Sequence[CleanedRecord], columns: Sequence[str], *, abbreviate: bool
) -> list[str]:
    lines = ["Name" + "".join(f" | {flatten_cell(c)}" for c in columns)]
    for record in records:
        name = flatten_cell(record.display_name) if record.display_name else "-"
        cells = [format_cell(record.values.get(c), abbreviate=abbreviate) for c in columns]
        lines.append(name + "".join(f" | {c}" for c in cells))
    return lines


def _top_records(
    records: Sequence[CleanedRecord], value_col: str | None, limit: int
) -> list[CleanedRecord]:
    # sorted() is stable: equal amounts keep board order
    ranked = sorted(records, key=lambda r: numeric_value(r, value_col), reverse=True)
    return ranked[:limit]


def render_context(
    board: CleanedBoard,
    bindings: RoleBindings,
    kind: BoardKind | None = None,
    config: PipelineConfig | None = None,
) -> str:
    """Render the context document for one cleaned board.

    Args:
        board: cleaned board with its quality report
        bindings: role bindings for the board's columns
        kind: board kind; defaults to ``bindings.kind``
        config: rendering knobs (top-N size, generic column limit, currency)

    Returns:
        The document text, always ending with a newline
    """
    cfg = config or _DEFAULT_CONFIG
    kind = kind or bindings.kind
    records = board.records

    if not records:
        return f"## {flatten_cell(board.board_name)}\n{NO_DATA}\n"

    lines = [render_header(board)]
    if board.quality.issues:
        lines.append(f"Data notes: {'; '.join(flatten_cell(i) for i in board.quality.issues)}")

    if kind is BoardKind.GENERIC:
        columns = list(board.column_titles[: cfg.generic_column_limit])
        lines += ["", "### DATA"]
        lines += _table(records, columns, abbreviate=False)
        return "\n".join(lines) + "\n"

    if kind is BoardKind.PIPELINE:
        sections = _pipeline_sections(records, bindings, cfg)
        table_title = f"### TOP {cfg.top_n} DEALS BY VALUE"
        table_columns = bindings.bound(*_PIPELINE_TABLE_ROLES)
    else:
        sections = _execution_sections(records, bindings, cfg)
        table_title = f"### TOP {cfg.top_n} WORK ORDERS BY VALUE"
        table_columns = bindings.bound(*_EXECUTION_TABLE_ROLES)

    if sections:
        lines += ["", "### AGGREGATED SUMMARY", *sections]

    top = _top_records(records, bindings.column(ColumnRole.MONETARY_AMOUNT), cfg.top_n)
    lines += ["", table_title]
    lines += _table(top, table_columns, abbreviate=True)
    return "\n".join(lines) + "\n"


def compose_data_block(documents: Sequence[str], heading: str = "LIVE BOARD DATA") -> str:
    """Wrap rendered board documents into the data block embedded in a prompt."""
    body = "\n\n".join(doc.rstrip("\n") for doc in documents)
    return f"\n---\n**{heading}:**\n\n{body}\n---\n"

