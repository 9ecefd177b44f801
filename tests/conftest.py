# Shared pytest fixtures
from __future__ import annotations

import copy
import json
import logging
import tempfile
from pathlib import Path

import pytest

from board_digest.logging.init import APP_LOGGER_NAME, reset_logging


@pytest.fixture(autouse=True)
def _clean_logging(monkeypatch):
    monkeypatch.delenv("BOARD_DIGEST_CONFIG", raising=False)
    reset_logging()
    yield
    reset_logging()
    app_logger = logging.getLogger(APP_LOGGER_NAME)
    for handler in app_logger.handlers[:]:
        app_logger.removeHandler(handler)
    app_logger.propagate = True


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        monkeypatch.chdir(p)
        yield p


@pytest.fixture()
def sample_config_yaml() -> str:
    return """source_directory: ./data
null_sentinels: ["#VALUE!", "#N/A"]
top_n: 20
generic_column_limit: 8
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "board_digest.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg


_DEALS = {
    "boardName": "Deals",
    "columns": [
        {"id": "name", "title": "Name"},
        {"id": "status", "title": "Deal Status"},
        {"id": "value", "title": "Masked Deal value"},
        {"id": "sector", "title": "Sector/service"},
        {"id": "stage", "title": "Deal Stage"},
        {"id": "owner", "title": "Owner code"},
        {"id": "prob", "title": "Closure Probability"},
        {"id": "created", "title": "Created Date"},
    ],
    "records": [
        {
            "id": "1",
            "displayName": "Alpha",
            "fields": [
                {"columnId": "status", "text": "Open"},
                {"columnId": "value", "text": "₹1,25,000"},
                {"columnId": "sector", "text": "Mining"},
                {"columnId": "stage", "text": "B. Sales Qualified Leads"},
                {"columnId": "owner", "text": "OWNER_1"},
                {"columnId": "prob", "text": "High"},
                {"columnId": "created", "text": "05/03/2024"},
            ],
        },
        {
            "id": "2",
            "displayName": "Beta",
            "fields": [
                {"columnId": "status", "text": "Won"},
                {"columnId": "value", "text": "2,50,000"},
                {"columnId": "sector", "text": "Renewables"},
                {"columnId": "stage", "text": "G. Project Won"},
                {"columnId": "owner", "text": "OWNER_2"},
                {"columnId": "prob", "text": "Medium"},
                {"columnId": "created", "text": "2024-01-15T10:00:00"},
            ],
        },
        {
            "id": "3",
            "displayName": "Gamma",
            "fields": [
                {"columnId": "status", "text": "Open"},
                {"columnId": "value", "text": "#VALUE!"},
                {"columnId": "sector", "text": " Mining "},
                {"columnId": "stage", "text": "A. Lead Generated"},
                {"columnId": "owner", "text": "OWNER_1"},
                {"columnId": "prob", "text": None},
                {"columnId": "created", "text": ""},
            ],
        },
        {
            "id": "4",
            "displayName": "",
            "fields": [{"columnId": "status", "text": ""}],
        },
        {
            "id": "5",
            "displayName": "Header",
            "fields": [{"columnId": "status", "text": "Deal Status"}],
        },
        {
            "id": "6",
            "displayName": "Delta",
            "fields": [
                {"columnId": "status", "text": "Dead"},
                {"columnId": "value", "text": "50000"},
                {"columnId": "sector", "text": "Railways"},
                {"columnId": "stage", "text": "L. Project Lost"},
                {"columnId": "owner", "text": "OWNER_2"},
                {"columnId": "prob", "text": "Low"},
                {"columnId": "created", "text": "1/2/2024"},
            ],
        },
    ],
}

# Board store payload shape (items / column_values)
_WORK_ORDERS = {
    "name": "Work Orders",
    "columns": [
        {"id": "name", "title": "Deal name", "type": "name"},
        {"id": "cust", "title": "Customer Name Code", "type": "text"},
        {"id": "serial", "title": "Serial #", "type": "text"},
        {"id": "nature", "title": "Nature of Work", "type": "status"},
        {"id": "exec", "title": "Execution Status", "type": "status"},
        {"id": "sector", "title": "Sector", "type": "status"},
        {"id": "amount", "title": "Amount in Rupees (Excl of GST) (Masked)", "type": "numbers"},
        {"id": "billed", "title": "Billed Value in Rupees (Excl of GST.) (Masked)", "type": "numbers"},
        {"id": "collected", "title": "Collected Amount in Rupees (Incl of GST.) (Masked)", "type": "numbers"},
        {"id": "receivable", "title": "Amount Receivable (Masked)", "type": "numbers"},
    ],
    "items": [
        {
            "id": "101",
            "name": "Alpha WO",
            "column_values": [
                {"id": "cust", "text": "CUST_1", "value": None, "type": "text"},
                {"id": "serial", "text": "SDPLDEAL-001"},
                {"id": "nature", "text": "One time Project"},
                {"id": "exec", "text": "Completed"},
                {"id": "sector", "text": "Mining"},
                {"id": "amount", "text": "10,00,000"},
                {"id": "billed", "text": "8,00,000"},
                {"id": "collected", "text": "6,00,000"},
                {"id": "receivable", "text": "2,00,000"},
            ],
        },
        {
            "id": "102",
            "name": "Beta WO",
            "column_values": [
                {"id": "cust", "text": "CUST_2"},
                {"id": "serial", "text": "SDPLDEAL-002"},
                {"id": "nature", "text": "Proof of Concept"},
                {"id": "exec", "text": "Ongoing"},
                {"id": "sector", "text": "Powerline"},
                {"id": "amount", "text": "2,50,00,000"},
                {"id": "billed", "text": "0"},
                {"id": "collected", "text": "0"},
                {"id": "receivable", "text": "0"},
            ],
        },
        {
            "id": "103",
            "name": "Gamma WO",
            "column_values": [
                {"id": "cust", "text": "CUST_1"},
                {"id": "serial", "text": "SDPLDEAL-003"},
                {"id": "nature", "text": "Annual Rate Contract"},
                {"id": "exec", "text": "Completed"},
                {"id": "sector", "text": "Mining"},
                {"id": "amount", "text": "2,000"},
                {"id": "billed", "text": "2,000"},
                {"id": "collected", "text": ""},
                {"id": "receivable", "text": None},
            ],
        },
    ],
}


@pytest.fixture()
def deals_snapshot() -> dict:
    return copy.deepcopy(_DEALS)


@pytest.fixture()
def work_orders_snapshot() -> dict:
    return copy.deepcopy(_WORK_ORDERS)


@pytest.fixture()
def snapshot_files(temp_workdir: Path, deals_snapshot: dict, work_orders_snapshot: dict) -> list[Path]:
    files = []
    for name, payload in [("deals.json", deals_snapshot), ("work_orders.json", work_orders_snapshot)]:
        f = temp_workdir / "data" / name
        f.write_text(json.dumps(payload, ensure_ascii=False), encoding="utf-8")
        files.append(f)
    return files
