from __future__ import annotations

import pytest

from board_digest.models.board import RawBoard
from board_digest.snapshot.parser import MalformedSnapshotError, parse_snapshot


def test_contract_shape(deals_snapshot):
    raw = parse_snapshot(deals_snapshot)
    assert raw.board_name == "Deals"
    assert raw.columns[1].title == "Deal Status"
    assert len(raw.records) == 6
    assert raw.records[2].fields[5].text is None


def test_store_payload_shape(work_orders_snapshot):
    raw = parse_snapshot(work_orders_snapshot)
    assert raw.board_name == "Work Orders"
    assert raw.records[0].id == "101"
    assert raw.records[0].display_name == "Alpha WO"
    assert raw.records[0].fields[0].column_id == "cust"
    assert raw.records[0].fields[0].text == "CUST_1"


def test_integer_ids_become_strings():
    raw = parse_snapshot(
        {
            "boardName": "B",
            "columns": [{"id": 7, "title": "Status"}],
            "records": [{"id": 1, "fields": [{"columnId": 7, "text": "x"}]}],
        }
    )
    assert raw.columns[0].id == "7"
    assert raw.records[0].id == "1"
    assert raw.records[0].fields[0].column_id == "7"
    assert raw.records[0].display_name is None


def test_raw_board_passthrough():
    raw = RawBoard(board_name="B", columns=(), records=())
    assert parse_snapshot(raw) is raw


@pytest.mark.parametrize(
    "payload,fragment",
    [
        ({"columns": [], "records": []}, "boardName"),
        ({"boardName": "B", "records": []}, "columns"),
        ({"boardName": "B", "columns": []}, "records"),
        ({"boardName": "B", "columns": [{"id": "a"}], "records": []}, "title"),
        ({"boardName": "B", "columns": [], "records": "nope"}, "records"),
        ({"name": "B", "items": []}, "columns"),
    ],
)
def test_structural_errors(payload, fragment):
    with pytest.raises(MalformedSnapshotError) as ei:
        parse_snapshot(payload)
    assert str(ei.value).startswith("malformed snapshot")
    assert fragment in str(ei.value)


def test_non_mapping_rejected():
    with pytest.raises(MalformedSnapshotError, match="expected a mapping"):
        parse_snapshot(["not", "a", "board"])


def test_error_is_value_error():
    assert issubclass(MalformedSnapshotError, ValueError)
