"""
Batch summary table for robocopy-log-parser.

Flattens many ``ParseResult`` records into one DataFrame, one row per
log, for operators tracking a fleet of Robocopy jobs. The table is
written by ``export.export_summary`` and read back with
``read_summary``.

Column layout:
- ``log_file``: the log the row was parsed from.
- ``started`` / ``ended``: ISO-8601 strings (with UTC offset), so rows
  from different DST periods share one column type and sort correctly.
- ``source``, ``destination``, ``files``, ``options``: as written.
- ``speed``: bytes per second.
- ``{category}_{counter}``: e.g. ``dirs_total``, ``bytes_extras``.

Missing values are ``<NA>``; counters use the nullable ``Int64`` dtype.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

import pandas as pd

from robocopy_log_parser.models import STAT_CATEGORIES, STAT_COLUMNS, ParseResult

logger = logging.getLogger(__name__)

TEXT_COLUMNS = ["log_file", "started", "ended", "source", "destination", "files", "options"]

COUNTER_COLUMNS = ["speed"] + [
    f"{category}_{counter}" for category in STAT_CATEGORIES for counter in STAT_COLUMNS
]

SUMMARY_COLUMNS = TEXT_COLUMNS + COUNTER_COLUMNS


def result_to_row(log_file: str, result: ParseResult) -> dict[str, Any]:
    """Flatten one ParseResult into a summary row."""
    row: dict[str, Any] = {
        "log_file": log_file,
        "started": result.started.isoformat() if result.started else None,
        "ended": result.ended.isoformat() if result.ended else None,
        "source": result.source,
        "destination": result.destination,
        "files": result.files,
        "options": result.options,
        "speed": result.speed,
    }
    for category in STAT_CATEGORIES:
        stat = getattr(result.stats, category)
        for counter in STAT_COLUMNS:
            row[f"{category}_{counter}"] = getattr(stat, counter) if stat else None
    return row


def summarize(
    results: Mapping[str, ParseResult] | Iterable[tuple[str, ParseResult]],
) -> pd.DataFrame:
    """Build the summary table.

    Args:
        results: ``(log_file, ParseResult)`` pairs, or a mapping of log
            file -> ParseResult. One row per pair, in input order; the
            same log may appear more than once.

    Returns:
        DataFrame with ``SUMMARY_COLUMNS`` in order.
    """
    pairs = results.items() if isinstance(results, Mapping) else results
    rows = [result_to_row(str(log_file), result) for log_file, result in pairs]
    # Build columns directly so large byte counters never pass through float64
    df = pd.DataFrame({
        col: pd.array(
            [row[col] for row in rows],
            dtype="string" if col in TEXT_COLUMNS else "Int64",
        )
        for col in SUMMARY_COLUMNS
    })
    logger.debug("Summarized %d logs", len(df))
    return df


def read_summary(path: str | Path) -> pd.DataFrame:
    """Read a summary table written by ``export_summary``.

    The format is chosen from the file extension (``.parquet`` or CSV).

    Raises:
        FileNotFoundError: If the file does not exist.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Summary file not found: {path}")
    if path.suffix.lower() == ".parquet":
        return pd.read_parquet(path)
    return pd.read_csv(
        path,
        encoding="utf-8-sig",
        dtype={col: "string" for col in TEXT_COLUMNS} | {col: "Int64" for col in COUNTER_COLUMNS},
    )
