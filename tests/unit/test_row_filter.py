from __future__ import annotations

from board_digest.models.board import CleanedRecord
from board_digest.models.values import MISSING, CellValue
from board_digest.services.row_filter import DropReason, evaluate_row, filter_rows

TITLES = ("Status", "Sector")


def _record(rid: str, name: str | None, status=MISSING, sector=MISSING) -> CleanedRecord:
    return CleanedRecord(id=rid, display_name=name, values={"Status": status, "Sector": sector})


def test_keeps_normal_row():
    assert evaluate_row(_record("1", "A", CellValue.of_text("Open")), TITLES).keep


def test_named_row_with_no_values_is_kept():
    assert evaluate_row(_record("1", "Only a name"), TITLES).keep


def test_empty_row_dropped_without_issue():
    decision = evaluate_row(_record("1", None), TITLES)
    assert not decision.keep
    assert decision.reason is DropReason.EMPTY
    assert decision.issue is None


def test_header_row_dropped_with_issue_naming_record():
    decision = evaluate_row(_record("1", "Row 7", CellValue.of_text("Status")), TITLES)
    assert not decision.keep
    assert decision.reason is DropReason.EMBEDDED_HEADER
    assert decision.issue == 'Removed embedded header row (item: "Row 7")'


def test_unnamed_header_row_uses_empty_label():
    decision = evaluate_row(_record("1", None, CellValue.of_text("Status")), TITLES)
    assert decision.issue == 'Removed embedded header row (item: "empty")'


def test_known_limitation_legitimate_value_equal_to_title_is_dropped():
    # a real sector literally called "Sector" is indistinguishable from a header line
    decision = evaluate_row(
        _record("1", "Real deal", CellValue.of_text("Open"), CellValue.of_text("Sector")), TITLES
    )
    assert not decision.keep
    assert decision.reason is DropReason.EMBEDDED_HEADER


def test_header_match_is_case_sensitive():
    assert evaluate_row(_record("1", "A", CellValue.of_text("status")), TITLES).keep


def test_filter_rows_preserves_order_and_counts():
    records = [
        _record("1", "A", CellValue.of_text("Open")),
        _record("2", None),
        _record("3", "H", CellValue.of_text("Status")),
        _record("4", "B", CellValue.of_text("Won")),
    ]
    kept, removed, issues = filter_rows(records, TITLES)
    assert [r.id for r in kept] == ["1", "4"]
    assert removed == 2
    assert issues == ['Removed embedded header row (item: "H")']
