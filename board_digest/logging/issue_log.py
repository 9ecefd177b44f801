from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from datetime import UTC, datetime
from pathlib import Path

"""Issue log generation & buffering.

- JSON Lines with a fixed schema (no extra keys)
- One file per run: ``logs/issues-YYYYMMDD-HHMMSS.log`` (UTC), created lazily
- Records are buffered and written on flush()
"""

__all__ = [
    "IssueRecord",
    "IssueLogBuffer",
]

LOGS_DIR = Path("./logs")
TIMESTAMP_FMT = "%Y%m%d-%H%M%S"

# record value for board-level issues that concern no single record
BOARD_LEVEL = "-1"


@dataclass(frozen=True)
class IssueRecord:
    """Structured issue record for JSON Lines logging.

    Attributes:
        timestamp: ISO8601 UTC timestamp with 'Z' suffix
        board: source file or board name
        record: record id, or "-1" for board-level issues
        issue_type: classification in UPPER_SNAKE_CASE (MALFORMED_SNAPSHOT, QUALITY_NOTE, ...)
        message: human readable description
    """
    timestamp: str
    board: str
    record: str
    issue_type: str
    message: str

    @staticmethod
    def create(board: str, issue_type: str, message: str, record: str = BOARD_LEVEL) -> IssueRecord:
        ts = datetime.now(UTC).isoformat().replace("+00:00", "Z")
        return IssueRecord(
            timestamp=ts,
            board=board,
            record=record,
            issue_type=issue_type,
            message=message,
        )

    def to_json_line(self) -> str:
        return json.dumps(asdict(self), ensure_ascii=False)


class IssueLogBuffer:
    """In-memory buffer for issue records. Flush appends JSON Lines.

    Not thread-safe; the orchestrator runs boards serially.
    """
    def __init__(self, logs_dir: Path | None = None) -> None:
        self._records: list[IssueRecord] = []
        self._file_path: Path | None = None
        self._logs_dir = logs_dir or LOGS_DIR

    @property
    def file_path(self) -> Path:
        if self._file_path is None:
            self._logs_dir.mkdir(parents=True, exist_ok=True)
            stamp = datetime.now(UTC).strftime(TIMESTAMP_FMT)
            self._file_path = self._logs_dir / f"issues-{stamp}.log"
        return self._file_path

    @property
    def records(self) -> tuple[IssueRecord, ...]:
        return tuple(self._records)

    def append(self, record: IssueRecord) -> None:
        self._records.append(record)

    def __len__(self) -> int:  # pragma: no cover (trivial)
        return len(self._records)

    def flush(self) -> Path | None:
        """Write buffered records; returns the file path, or None when nothing was buffered."""
        if not self._records:
            return None
        fp = self.file_path
        with fp.open("a", encoding="utf-8") as f:
            for r in self._records:
                f.write(r.to_json_line() + "\n")
        self._records.clear()
        return fp
