from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

"""Run result models for multi-board processing.

The orchestrator returns a RunResult; the CLI renders the SUMMARY line from it
and decides the exit code.
"""


@dataclass(frozen=True)
class BoardStat:
    """Per-board outcome (internal helper for RunResult)."""
    source: str  # file name the snapshot came from
    board_name: str | None  # None when the snapshot could not be parsed
    status: str  # success/failed
    cleaned_rows: int = 0
    removed_rows: int = 0
    completeness_percent: float = 0.0
    error: str | None = None


@dataclass(frozen=True)
class RunResult:
    """Aggregated outcome of one CLI run over a snapshot directory."""
    success_boards: int
    failed_boards: int
    total_cleaned_rows: int
    total_removed_rows: int
    start_time: datetime
    end_time: datetime
    elapsed_seconds: float
    documents: tuple[str, ...] = ()  # rendered context per successful board, in file order
    board_stats: list[BoardStat] | None = None

    @property
    def mean_completeness(self) -> float:
        """Mean completeness over successful boards, one decimal (100.0 if none)."""
        done = [s.completeness_percent for s in self.board_stats or [] if s.status == "success"]
        if not done:
            return 100.0
        return round(sum(done) / len(done), 1)
