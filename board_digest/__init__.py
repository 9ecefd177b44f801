"""Board snapshot cleaning and context summarization.

Typical use::

    from board_digest import run_pipeline

    output = run_pipeline(snapshot)
    output.board.quality      # QualityReport for the UI
    output.document           # context document for the generation client
"""

from .config.loader import PipelineConfig
from .services.normalizer import normalize_value
from .services.pipeline import PipelineOutput, build_context, clean_board, run_pipeline
from .services.renderer import compose_data_block, render_context
from .services.roles import detect_roles
from .snapshot.parser import MalformedSnapshotError, parse_snapshot

__version__ = "0.1.0"

__all__ = [
    "PipelineConfig",
    "PipelineOutput",
    "MalformedSnapshotError",
    "parse_snapshot",
    "normalize_value",
    "clean_board",
    "detect_roles",
    "render_context",
    "build_context",
    "run_pipeline",
    "compose_data_block",
]
