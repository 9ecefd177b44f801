from __future__ import annotations

import sys
from pathlib import Path
from typing import Any

from tqdm import tqdm

from ..models.processing_result import BoardStat

"""Board progress bar (TTY only).

The bar advances once per snapshot file and shows the running
success/failed/rows tally next to it. It is drawn on stderr and removed when
the run ends, so the context block and the SUMMARY line on stdout stay clean.
Without a TTY no bar is created at all.
"""

__all__ = [
    "ProgressTracker",
    "is_tty_enabled",
]


def is_tty_enabled() -> bool:
    return sys.stdout.isatty()


class ProgressTracker:
    """Per-board progress with a running outcome tally."""

    def __init__(self, total_boards: int, *, description: str = "Boards") -> None:
        self.total_boards = total_boards
        self.description = description
        self.success = 0
        self.failed = 0
        self.rows = 0

        self.pbar: tqdm[Any] | None = None
        if is_tty_enabled() and total_boards > 0:
            self.pbar = tqdm(
                total=total_boards,
                desc=description,
                unit="board",
                leave=False,
                file=sys.stderr,
                ascii=True,
            )

    @property
    def enabled(self) -> bool:
        return self.pbar is not None

    def start_board(self, file_path: Path) -> None:
        if self.pbar is not None:
            self.pbar.set_description(f"{self.description} [{file_path.stem}]")

    def finish_board(self, stat: BoardStat) -> None:
        """Count one finished board and advance the bar."""
        if stat.status == "success":
            self.success += 1
            self.rows += stat.cleaned_rows
        else:
            self.failed += 1
        if self.pbar is not None:
            self.pbar.set_postfix(ok=self.success, failed=self.failed, rows=self.rows)
            self.pbar.update(1)

    def close(self) -> None:
        if self.pbar is not None:
            self.pbar.close()
            self.pbar = None

    def __enter__(self) -> ProgressTracker:
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()
