"""
Log reading for robocopy-log-parser.

Opens a Robocopy log with the dialect's encoding and yields decoded
lines. Undecodable byte sequences are replaced with U+FFFD instead of
aborting the read, so a partly corrupted log still yields whatever
fields survive.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import TextIO

from robocopy_log_parser.exceptions import LogReadError

logger = logging.getLogger(__name__)

_BOM = "\ufeff"


@contextmanager
def open_log(path: str | Path, encoding: str) -> Iterator[TextIO]:
    """Open a log for text reading; the file is closed on every exit path.

    Raises:
        LogReadError: If the file cannot be opened.
    """
    path = Path(path)
    try:
        f = open(path, "r", encoding=encoding, errors="replace")
    except OSError as exc:
        raise LogReadError(f"Cannot open Robocopy log {path}: {exc}") from exc
    logger.debug("Opened %s (encoding=%s)", path, encoding)
    with f:
        yield f


def iter_lines(f: TextIO) -> Iterator[tuple[int, str]]:
    """Yield ``(line_no, line)`` pairs with 1-based line numbers.

    A byte-order mark at the start of the stream is dropped.
    """
    for line_no, line in enumerate(f, start=1):
        if line_no == 1:
            line = line.lstrip(_BOM)
        yield line_no, line
