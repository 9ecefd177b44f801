from __future__ import annotations

import json
from pathlib import Path

import pytest

from board_digest.cli import main as cli_main

"""One malformed snapshot fails on its own; the other boards are still rendered."""


@pytest.fixture
def partial_failure_setup(write_config: Path, snapshot_files, temp_workdir: Path) -> Path:
    broken = temp_workdir / "data" / "broken.json"
    broken.write_text(json.dumps({"boardName": "Broken", "columns": []}), encoding="utf-8")
    return broken


def test_partial_failure_run(partial_failure_setup: Path, temp_workdir: Path, capsys):
    code = cli_main([])
    out = capsys.readouterr().out
    assert code == 2
    assert "ERROR broken.json: malformed snapshot at <root>: 'records' is a required property" in out
    assert "## Deals (4 rows, 89.3% complete)" in out
    assert "## Work Orders (3 rows, 92.6% complete)" in out
    assert "## Broken" not in out
    summary = out.rstrip().splitlines()[-1]
    assert summary.startswith("SUMMARY boards=3/3 success=2 failed=1 rows=7 removed=2")

    log_file = next((temp_workdir / "logs").glob("issues-*.log"))
    records = [json.loads(line) for line in log_file.read_text(encoding="utf-8").splitlines()]
    failures = [r for r in records if r["issue_type"] == "MALFORMED_SNAPSHOT"]
    assert len(failures) == 1
    assert failures[0]["board"] == "broken.json"
    assert failures[0]["record"] == "-1"
