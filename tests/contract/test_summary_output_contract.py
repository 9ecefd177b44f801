from __future__ import annotations

import re
from pathlib import Path

from board_digest.cli import main as cli_main

"""SUMMARY line format contract."""

SUMMARY_PATTERN = re.compile(
    r"^SUMMARY\s+boards=([0-9]+)/(\1)\s+success=([0-9]+)\s+failed=([0-9]+)\s+"
    r"rows=([0-9]+)\s+removed=([0-9]+)\s+completeness=([0-9]+\.[0-9])$"
)


def test_summary_pattern_example_line():
    line = "SUMMARY boards=2/2 success=2 failed=0 rows=340 removed=3 completeness=91.4"
    assert SUMMARY_PATTERN.match(line)


def test_summary_pattern_rejects_mismatched_totals():
    assert not SUMMARY_PATTERN.match(
        "SUMMARY boards=2/3 success=2 failed=0 rows=340 removed=3 completeness=91.4"
    )


def test_cli_summary_is_last_line(write_config: Path, snapshot_files, capsys):
    assert cli_main([]) == 0
    last = capsys.readouterr().out.rstrip().splitlines()[-1]
    m = SUMMARY_PATTERN.match(last)
    assert m, last
    assert m.group(3) == "2"
    assert m.group(5) == "7"
    assert m.group(4) == "0"
