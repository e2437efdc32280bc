"""
robocopy-log-parser: turn Robocopy text logs into structured records.

Public API surface:

- ``parse_log(path, dialect="unilog")`` -- parse one log into a
  ``ParseResult`` (timestamps, paths, options, speed, copy statistics).

- ``convert(source, output, overwrite=False, dialect="unilog")`` -- parse
  a log and write the result as JSON.

- ``summarize(results)`` / ``export_summary(df, path)`` -- flatten many
  results into one table and write it as CSV or Parquet.

Recoverable problems in the log (unknown keys, malformed values) are
logged as warnings and leave the affected field unset. Only failing to
open the log or to write the output raises.
"""

from __future__ import annotations

import logging
from pathlib import Path

from robocopy_log_parser.dialect_registry import DEFAULT_DIALECT, Dialect, list_dialects
from robocopy_log_parser.export import export_summary, write_result
from robocopy_log_parser.models import CopyStat, CopyStats, ParseResult
from robocopy_log_parser.parser import RobocopyLogParser, parse_log
from robocopy_log_parser.summary import read_summary, summarize

__all__ = [
    "CopyStat",
    "CopyStats",
    "ParseResult",
    "RobocopyLogParser",
    "convert",
    "export_summary",
    "list_dialects",
    "parse_log",
    "read_summary",
    "summarize",
    "write_result",
]

logger = logging.getLogger(__name__)


def convert(
    source: str | Path,
    output: str | Path,
    overwrite: bool = False,
    dialect: str | Dialect = DEFAULT_DIALECT,
) -> ParseResult:
    """Parse a Robocopy log and write the result as JSON.

    Orchestration:
      1. ``parse_log()`` -> ``ParseResult`` (field errors become warnings).
      2. ``write_result()`` to *output* with the requested overwrite policy.

    Args:
        source: Path to the Robocopy log.
        output: Path of the JSON file to write.
        overwrite: Replace *output* if it already exists.
        dialect: Dialect name (or definition) the log was written in.

    Returns:
        The parsed ``ParseResult``.

    Raises:
        DialectError: If *dialect* is unknown.
        LogReadError: If *source* cannot be opened.
        OutputExistsError: If *output* exists and *overwrite* is False.
        ExportError: If *output* cannot be written.
    """
    logger.info("convert() -- source=%s, output=%s", source, output)
    result = parse_log(source, dialect)
    write_result(result, output, overwrite=overwrite)
    return result
