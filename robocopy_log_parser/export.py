"""
Exporter for robocopy-log-parser.

Writes a ``ParseResult`` as JSON, and a batch summary table as CSV or
Parquet.

Write policy (shared by every output):
- By default the destination must not exist; ``OutputExistsError`` is
  raised and the existing file is left untouched.
- With ``overwrite=True`` an existing file is replaced.
- Output is written to a temporary sibling file first, then hard-linked
  into place (exclusive) or moved with ``os.replace`` (overwrite), so a
  failed write never leaves a partial file at the destination.
- Files get the usual umask-derived permissions.
"""

from __future__ import annotations

import logging
import os
import tempfile
from collections.abc import Callable
from pathlib import Path
from typing import Literal

import pandas as pd

from robocopy_log_parser.exceptions import ExportError, OutputExistsError
from robocopy_log_parser.models import ParseResult

logger = logging.getLogger(__name__)

_SUPPORTED_FORMATS = {"csv", "parquet"}


def _default_file_mode() -> int:
    """Mode a plain ``open(path, "w")`` would create, honouring the umask."""
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask


def _write_atomic(
    path: Path,
    write: Callable[[Path], None],
    overwrite: bool,
) -> None:
    """Run *write* against a temporary sibling of *path*, then move it into place.

    Without *overwrite* the file is linked into place, which fails if
    the destination appeared in the meantime.

    Raises:
        OutputExistsError: If *path* exists and *overwrite* is False.
        ExportError: If writing or moving the file fails.
    """
    if not overwrite and path.exists():
        raise OutputExistsError(
            f"Output file already exists: {path}. Use overwrite to replace it."
        )

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{path.name}.", suffix=".tmp", dir=path.parent
        )
        os.close(fd)
    except OSError as exc:
        raise ExportError(f"Failed to open output file {path}: {exc}") from exc

    tmp_path = Path(tmp_name)
    try:
        write(tmp_path)
        # mkstemp creates owner-only files
        os.chmod(tmp_path, _default_file_mode())
        if overwrite:
            os.replace(tmp_path, path)
        else:
            os.link(tmp_path, path)
    except FileExistsError as exc:
        raise OutputExistsError(
            f"Output file already exists: {path}. Use overwrite to replace it."
        ) from exc
    except Exception as exc:
        raise ExportError(f"Failed to write output file {path}: {exc}") from exc
    finally:
        tmp_path.unlink(missing_ok=True)


def write_result(
    result: ParseResult,
    output: str | Path,
    overwrite: bool = False,
) -> Path:
    """Write a ParseResult as a JSON document.

    Fields that were not found in the log are omitted; ``stats`` is
    always present as an object.

    Args:
        result: The parsed record.
        output: Destination file path.
        overwrite: Replace *output* if it already exists.

    Returns:
        The path that was written.

    Raises:
        OutputExistsError: If *output* exists and *overwrite* is False.
        ExportError: If writing fails for any other reason.
    """
    path = Path(output)
    payload = result.to_json()
    _write_atomic(
        path,
        lambda tmp: tmp.write_text(payload + "\n", encoding="utf-8"),
        overwrite,
    )
    logger.info("Exported result -> %s", path)
    return path


def _write_dataframe(df: pd.DataFrame, path: Path, output_format: str) -> None:
    if output_format == "csv":
        df.to_csv(path, index=False, encoding="utf-8-sig")
    else:  # parquet
        df.to_parquet(path, index=False, engine="pyarrow")


def export_summary(
    df: pd.DataFrame,
    output: str | Path,
    output_format: Literal["csv", "parquet"] = "csv",
    overwrite: bool = False,
) -> Path:
    """Write a summary table (see ``summary.summarize``) to disk.

    CSV files are written with ``utf-8-sig`` encoding (BOM) so that
    non-ASCII paths display correctly when opened in Excel.

    Raises:
        ExportError: If *output_format* is unsupported, or if the write fails.
        OutputExistsError: If *output* exists and *overwrite* is False.
    """
    if output_format not in _SUPPORTED_FORMATS:
        raise ExportError(
            f"Unsupported output format: '{output_format}'. "
            f"Supported formats: {sorted(_SUPPORTED_FORMATS)}"
        )
    path = Path(output)
    _write_atomic(path, lambda tmp: _write_dataframe(df, tmp, output_format), overwrite)
    logger.info(
        "Exported summary -> %s (%d rows, %d cols)",
        path.name, len(df), len(df.columns),
    )
    return path
