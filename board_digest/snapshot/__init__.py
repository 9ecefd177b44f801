from .parser import MalformedSnapshotError, parse_snapshot
from .reader import SnapshotHeaderError, read_snapshot_file

__all__ = [
    "MalformedSnapshotError",
    "SnapshotHeaderError",
    "parse_snapshot",
    "read_snapshot_file",
]
