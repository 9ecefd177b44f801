from __future__ import annotations

from ..models.processing_result import RunResult

"""SUMMARY line rendering for a CLI run."""


def render_summary_line(total_boards: int, result: RunResult) -> str:
    """Render the SUMMARY line for a run.

    Format:
    SUMMARY boards={total}/{total} success={success} failed={failed} rows={rows}
    removed={removed} completeness={mean completeness}

    Examples:
        >>> from datetime import datetime, timezone
        >>> t = datetime(2024, 1, 1, tzinfo=timezone.utc)
        >>> result = RunResult(
        ...     success_boards=2, failed_boards=0, total_cleaned_rows=340,
        ...     total_removed_rows=3, start_time=t, end_time=t, elapsed_seconds=0.0,
        ... )
        >>> render_summary_line(2, result)
        'SUMMARY boards=2/2 success=2 failed=0 rows=340 removed=3 completeness=100.0'
    """
    return (
        f"SUMMARY boards={total_boards}/{total_boards} "
        f"success={result.success_boards} "
        f"failed={result.failed_boards} "
        f"rows={result.total_cleaned_rows} "
        f"removed={result.total_removed_rows} "
        f"completeness={result.mean_completeness:.1f}"
    )
