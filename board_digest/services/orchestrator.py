from __future__ import annotations

import logging
from datetime import UTC, datetime
from pathlib import Path
from zipfile import BadZipFile

from ..config.loader import DigestConfig
from ..logging.issue_log import IssueLogBuffer, IssueRecord
from ..models.processing_result import BoardStat, RunResult
from ..snapshot.parser import MalformedSnapshotError
from ..snapshot.reader import SUPPORTED_SUFFIXES, read_snapshot_file
from .pipeline import PipelineOutput, run_pipeline
from .progress import ProgressTracker

logger = logging.getLogger(__name__)

"""Multi-board orchestration.

Runs the pipeline over every snapshot file in the configured source
directory, in file-name order:

1. Scan the directory for .json/.xlsx/.csv snapshots
2. Clean, classify and render each board independently
3. Record failures and quality notes in the issue log and keep going
4. Return a RunResult with per-board stats and the rendered documents
"""


class ProcessingError(Exception):
    """Fatal orchestration error (nothing could be processed)."""


def scan_snapshot_files(directory: Path) -> list[Path]:
    """Snapshot files directly inside ``directory`` (non-recursive), sorted by name.

    Raises:
        ProcessingError: If directory doesn't exist or can't be read
    """
    if not directory.exists():
        raise ProcessingError(f"Directory not found: {directory}")

    if not directory.is_dir():
        raise ProcessingError(f"Path is not a directory: {directory}")

    try:
        return sorted(
            (p for p in directory.iterdir() if p.is_file() and p.suffix.lower() in SUPPORTED_SUFFIXES),
            key=lambda p: p.name,
        )
    except OSError as e:
        raise ProcessingError(f"Error reading directory {directory}: {e}") from e


def _record_quality(issue_log: IssueLogBuffer, source: str, output: PipelineOutput) -> None:
    for note in output.board.quality.issues:
        logger.info(f"{source}: {note}")
        issue_log.append(IssueRecord.create(board=source, issue_type="QUALITY_NOTE", message=note))


def process_board_file(path: Path, config: DigestConfig, issue_log: IssueLogBuffer) -> tuple[BoardStat, str | None]:
    """Process one snapshot file. Failures are logged and reported, not raised."""
    try:
        raw = read_snapshot_file(path)
        output = run_pipeline(raw, config.pipeline)
    except (MalformedSnapshotError, BadZipFile, OSError, ValueError) as e:
        logger.error(f"{path.name}: {e}")
        issue_log.append(
            IssueRecord.create(board=path.name, issue_type="MALFORMED_SNAPSHOT", message=str(e))
        )
        return BoardStat(source=path.name, board_name=None, status="failed", error=str(e)), None

    _record_quality(issue_log, path.name, output)
    q = output.board.quality
    logger.info(
        f"{path.name}: board={output.board.board_name} kind={output.bindings.kind.value} "
        f"rows={q.cleaned_row_count}/{q.total_raw_rows} completeness={q.completeness_percent:.1f}%"
    )
    stat = BoardStat(
        source=path.name,
        board_name=output.board.board_name,
        status="success",
        cleaned_rows=q.cleaned_row_count,
        removed_rows=q.removed_row_count,
        completeness_percent=q.completeness_percent,
    )
    return stat, output.document


def process_all(config: DigestConfig, issue_log: IssueLogBuffer | None = None) -> RunResult:
    """Process all snapshot files in the configured directory.

    Raises:
        ProcessingError: when the source directory is missing or unreadable
    """
    start_time = datetime.now(UTC)
    issue_log = issue_log if issue_log is not None else IssueLogBuffer()

    file_paths = scan_snapshot_files(Path(config.source_directory))

    stats: list[BoardStat] = []
    documents: list[str] = []
    success_count = 0
    failed_count = 0
    total_rows = 0
    total_removed = 0

    with ProgressTracker(len(file_paths)) as progress:
        for path in file_paths:
            progress.start_board(path)
            stat, document = process_board_file(path, config, issue_log)
            stats.append(stat)
            if stat.status == "success":
                success_count += 1
                total_rows += stat.cleaned_rows
                total_removed += stat.removed_rows
                documents.append(document or "")
            else:
                failed_count += 1
            progress.finish_board(stat)

    end_time = datetime.now(UTC)
    return RunResult(
        success_boards=success_count,
        failed_boards=failed_count,
        total_cleaned_rows=total_rows,
        total_removed_rows=total_removed,
        start_time=start_time,
        end_time=end_time,
        elapsed_seconds=(end_time - start_time).total_seconds(),
        documents=tuple(documents),
        board_stats=stats,
    )
