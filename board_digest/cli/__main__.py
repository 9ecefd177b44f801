from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path

from dotenv import load_dotenv

from board_digest.config.loader import DEFAULT_CONFIG_PATH, ConfigError, DigestConfig, load_config
from board_digest.logging.init import log_summary, setup_logging
from board_digest.logging.issue_log import IssueLogBuffer
from board_digest.services.orchestrator import ProcessingError, process_all, scan_snapshot_files
from board_digest.services.pipeline import run_pipeline
from board_digest.services.renderer import compose_data_block
from board_digest.services.summary import render_summary_line
from board_digest.snapshot.parser import MalformedSnapshotError
from board_digest.snapshot.reader import read_snapshot_file

"""CLI entrypoint.

Flow:
- Load .env and the YAML config
- Clean and summarize every snapshot in source_directory
- Write the composed data block to --output / output_path, or stdout
- Print the SUMMARY line and exit with 0 (all boards ok), 2 (some board
  failed) or 1 (fatal: config or directory problem)
"""

EXIT_SUCCESS_ALL = 0
EXIT_PARTIAL_FAILURE = 2
EXIT_FATAL = 1

CONFIG_ENV_VAR = "BOARD_DIGEST_CONFIG"


def _load_env_file(path: Path) -> None:
    if path.exists():
        load_dotenv(dotenv_path=path, override=False)


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Clean board snapshots and render LLM context documents")
    p.add_argument("--config", type=Path, default=None, help="Path to the YAML config")
    p.add_argument("--output", type=Path, default=None, help="Write the data block here instead of stdout")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    p.add_argument(
        "--inspect-data",
        action="store_true",
        help="Print each board's columns, kind and role bindings then exit",
    )
    return p.parse_args(argv)


def _inspect_data(cfg: DigestConfig) -> int:
    try:
        files = scan_snapshot_files(Path(cfg.source_directory))
    except ProcessingError as e:
        print(f"inspect: {e}")
        return EXIT_FATAL
    if not files:
        print("inspect: no snapshot files")
        return EXIT_SUCCESS_ALL
    for f in files:
        print(f"FILE: {f.name}")
        try:
            output = run_pipeline(read_snapshot_file(f), cfg.pipeline)
        except MalformedSnapshotError as e:
            print(f"  error={e}")
            continue
        board = output.board
        print(f"  BOARD: {board.board_name} kind={output.bindings.kind.value} cols={list(board.column_titles)}")
        bound = {role.value: col for role, col in output.bindings.columns.items() if col is not None}
        print(f"    roles={bound}")
    return EXIT_SUCCESS_ALL


def main(argv: list[str] | None = None) -> int:
    logger = setup_logging()

    # None -> read sys.argv; [] stays empty (tests call main([]))
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)
    _load_env_file(Path(".env"))

    config_path = args.config or Path(os.getenv(CONFIG_ENV_VAR) or DEFAULT_CONFIG_PATH)
    try:
        cfg = load_config(config_path)
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    if args.debug:
        for h in logger.handlers:
            h.setLevel("DEBUG")
        logger.setLevel("DEBUG")
        logger.debug("debug mode enabled")

    directory = Path(cfg.source_directory)
    if not directory.exists():
        logger.error(f"directory not found: {directory}")
        return EXIT_FATAL

    logger.info(f"Processing boards from: {directory}")

    if args.inspect_data:
        return _inspect_data(cfg)

    issue_log = IssueLogBuffer()
    try:
        result = process_all(cfg, issue_log=issue_log)
    except ProcessingError as e:
        logger.error(f"processing: {e}")
        return EXIT_FATAL

    if result.documents:
        block = compose_data_block(result.documents)
        output_path = args.output or (Path(cfg.output_path) if cfg.output_path else None)
        if output_path is not None:
            output_path.parent.mkdir(parents=True, exist_ok=True)
            output_path.write_text(block, encoding="utf-8")
            logger.info(f"context written to: {output_path}")
        else:
            print(block)

    try:
        log_path = issue_log.flush()
    except OSError as e:
        logger.warning(f"issue log not written: {e}")
    else:
        if log_path is not None:
            logger.info(f"issue log: {log_path}")

    total_boards = result.success_boards + result.failed_boards
    # log_summary adds the "SUMMARY " label itself
    log_summary(render_summary_line(total_boards, result)[len("SUMMARY "):])

    if result.failed_boards > 0:
        return EXIT_PARTIAL_FAILURE
    return EXIT_SUCCESS_ALL


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
