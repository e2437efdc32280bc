"""
Command-line entry points for robocopy-log-parser.

Usage:
    robocopy-log-parser --source robocopy.log --output result.json
    robocopy-log-parser --source robocopy.log --output result.json --overwrite --log run.log
    robocopy-log-summary job1.log job2.log --output summary.parquet --format parquet

Exit codes: 0 on success, 1 when the log cannot be read or the output
cannot be written, 2 on usage errors (reported by argparse).
"""

from __future__ import annotations

import argparse
import logging
import sys
import time
from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from pathlib import Path

from robocopy_log_parser.config import ConvertConfig, SummaryConfig
from robocopy_log_parser.dialect_registry import DEFAULT_DIALECT, list_dialects
from robocopy_log_parser.exceptions import RobocopyLogError
from robocopy_log_parser.export import export_summary, write_result
from robocopy_log_parser.parser import parse_log
from robocopy_log_parser.summary import summarize

log = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s  %(levelname)-8s  %(name)s  %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"


# ---------------------------------------------------------------------------
# Logging setup
# ---------------------------------------------------------------------------

@contextmanager
def setup_logging(log_file: Path | None = None, level: int = logging.INFO) -> Iterator[logging.Handler]:
    """Attach a handler for this program's own logs to the root logger.

    Logs go to *log_file* when given, otherwise to stderr. On exit the
    handler is detached and closed and the root level is restored.
    """
    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handler: logging.Handler = logging.FileHandler(log_file, encoding="utf-8")
    else:
        handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATEFMT))
    root = logging.getLogger()
    previous_level = root.level
    root.addHandler(handler)
    root.setLevel(level)
    try:
        yield handler
    finally:
        root.removeHandler(handler)
        root.setLevel(previous_level)
        handler.close()


# ---------------------------------------------------------------------------
# Argument parsing
# ---------------------------------------------------------------------------

def _add_common_arguments(p: argparse.ArgumentParser) -> None:
    p.add_argument(
        "--log", dest="log_file", type=Path, default=None,
        help="Where to write this program's logs (default: stderr)",
    )
    p.add_argument(
        "--overwrite", action="store_true",
        help="Overwrite the output file if present",
    )
    p.add_argument(
        "--dialect", choices=list_dialects(), default=DEFAULT_DIALECT,
        help=f"Encoding and key set of the Robocopy log (default: {DEFAULT_DIALECT})",
    )


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="robocopy-log-parser",
        description="Convert a Robocopy log into a JSON record.",
    )
    p.add_argument("--source", type=Path, required=True, help="Robocopy log file to process")
    p.add_argument("--output", type=Path, required=True, help="Processed output file")
    _add_common_arguments(p)
    return p


def build_summary_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="robocopy-log-summary",
        description="Summarize many Robocopy logs into one CSV or Parquet table.",
    )
    p.add_argument("sources", nargs="+", type=Path, help="Robocopy log files")
    p.add_argument("--output", type=Path, required=True, help="Summary table to write")
    p.add_argument(
        "--format", dest="output_format", choices=["csv", "parquet"], default="csv",
        help="Output format (default: csv)",
    )
    _add_common_arguments(p)
    return p


# ---------------------------------------------------------------------------
# Runs
# ---------------------------------------------------------------------------

def run(config: ConvertConfig) -> None:
    result = parse_log(config.source, config.dialect)
    write_result(result, config.output, overwrite=config.overwrite)


def run_summary(config: SummaryConfig) -> None:
    results = [(str(path), parse_log(path, config.dialect)) for path in config.sources]
    df = summarize(results)
    export_summary(df, config.output, config.output_format, overwrite=config.overwrite)


def _harness(name: str, log_file: Path | None, work) -> int:
    """Run *work* with logging set up, reporting outcome and duration."""
    with setup_logging(log_file):
        start = time.perf_counter()
        try:
            work()
        except RobocopyLogError as exc:
            log.error("%s failed after %.3fs: %s", name, time.perf_counter() - start, exc)
            return 1
        log.info("%s succeeded in %.3fs", name, time.perf_counter() - start)
        return 0


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    config = ConvertConfig(
        source=args.source,
        output=args.output,
        log_file=args.log_file,
        overwrite=args.overwrite,
        dialect=args.dialect,
    )
    return _harness("Conversion", config.log_file, lambda: run(config))


def summary_main(argv: Sequence[str] | None = None) -> int:
    args = build_summary_parser().parse_args(argv)
    config = SummaryConfig(
        sources=args.sources,
        output=args.output,
        output_format=args.output_format,
        log_file=args.log_file,
        overwrite=args.overwrite,
        dialect=args.dialect,
    )
    return _harness("Summary", config.log_file, lambda: run_summary(config))


if __name__ == "__main__":
    sys.exit(main())
