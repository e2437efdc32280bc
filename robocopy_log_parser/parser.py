"""
Robocopy log parser.

A Robocopy log is made of four sections, each preceded by a line made
only of dashes:

1. ``ROBOCOPY :: Robust File Copy for Windows`` banner
2. Header: Started, Source, Dest, Files, Options, ...
3. Per-file transfer listing
4. Footer: statistics table, Speed, Ended

Only sections 2 and 4 are extracted. The parser counts divider lines as
it goes and never fails on an unexpected structure: with too few or too
many dividers, content simply lands in (or misses) the sections it
happens to fall into.

Per-field failures (unknown key, bad timestamp, bad speed, malformed
statistics) are logged at WARNING, recorded in ``warnings`` and leave
the field unset. Only I/O errors on the log itself are fatal.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from robocopy_log_parser.converters import convert_field, split_key_value
from robocopy_log_parser.dialect_registry import DEFAULT_DIALECT, Dialect, get_dialect
from robocopy_log_parser.exceptions import FieldConversionError, LogReadError
from robocopy_log_parser.models import ParseResult
from robocopy_log_parser.reader import iter_lines, open_log

logger = logging.getLogger(__name__)

HEADER_SECTION = 2
FOOTER_SECTION = 4

_SECTION_NAMES = {HEADER_SECTION: "header", FOOTER_SECTION: "footer"}

# Substituted by the reader for undecodable byte sequences
_REPLACEMENT_CHAR = "\ufffd"


class LineKind(str, Enum):
    """Classification of a trimmed log line."""

    BLANK = "blank"
    DIVIDER = "divider"
    CONTENT = "content"


def classify_line(line: str) -> LineKind:
    """Classify a line as blank, section divider, or content."""
    line = line.strip()
    if not line:
        return LineKind.BLANK
    if not line.replace("-", ""):
        return LineKind.DIVIDER
    return LineKind.CONTENT


@dataclass(frozen=True)
class ParseWarning:
    """A recoverable problem met while parsing one line."""

    line_no: int
    section: int
    key: str
    message: str


class RobocopyLogParser:
    """Single-pass parser for one Robocopy log.

    Attributes:
        dialect: The dialect every line is interpreted with.
        section: Number of divider lines seen so far in the current run.
        warnings: Recoverable problems met in the current run.
    """

    def __init__(self, dialect: str | Dialect = DEFAULT_DIALECT) -> None:
        self.dialect = get_dialect(dialect)
        self.section = 0
        self.warnings: list[ParseWarning] = []

    def __repr__(self) -> str:
        return f"RobocopyLogParser(dialect={self.dialect.name!r})"

    # -- Entry points -------------------------------------------------------

    def parse(self, path: str | Path) -> ParseResult:
        """Read and parse a log file.

        Raises:
            LogReadError: If the file cannot be opened or read.
        """
        logger.info("Parsing %s (dialect=%s)", path, self.dialect.name)
        with open_log(path, self.dialect.encoding) as f:
            try:
                result = self._run(iter_lines(f))
            except OSError as exc:
                raise LogReadError(f"Failed to read Robocopy log {path}: {exc}") from exc
        logger.info(
            "Parsed %s: %d sections, %d warnings",
            path, self.section, len(self.warnings),
        )
        return result

    def parse_lines(self, lines: Iterable[str]) -> ParseResult:
        """Parse already-decoded lines (e.g. from a string or a stream)."""
        return self._run(enumerate(lines, start=1))

    # -- Internals ----------------------------------------------------------

    def _run(self, numbered_lines: Iterable[tuple[int, str]]) -> ParseResult:
        self.section = 0
        self.warnings = []
        result = ParseResult()

        for line_no, line in numbered_lines:
            if _REPLACEMENT_CHAR in line:
                self._warn(line_no, "", "Line contains undecodable bytes")
            kind = classify_line(line)
            if kind is LineKind.BLANK:
                continue
            if kind is LineKind.DIVIDER:
                self.section += 1
                continue
            if self.section in _SECTION_NAMES:
                pair = split_key_value(line)
                if pair is not None:
                    self._dispatch(result, line_no, *pair)

        return result

    def _dispatch(self, result: ParseResult, line_no: int, key: str, value: str) -> None:
        """Convert one key/value pair into *result*, logging on failure."""
        section_name = _SECTION_NAMES[self.section]
        table = self.dialect.header if self.section == HEADER_SECTION else self.dialect.footer
        try:
            field, converted = convert_field(table, key, value, self.dialect)
        except FieldConversionError as err:
            self._warn(line_no, key, f"Failed to parse {section_name} key `{key}`: {err}")
            return
        result.assign(field, converted)

    def _warn(self, line_no: int, key: str, message: str) -> None:
        self.warnings.append(ParseWarning(line_no, self.section, key, message))
        logger.warning(
            "Line %d: %s",
            line_no,
            message,
            extra={"line_no": line_no, "section": self.section, "log_key": key},
        )


def parse_log(path: str | Path, dialect: str | Dialect = DEFAULT_DIALECT) -> ParseResult:
    """Parse a Robocopy log file into a ``ParseResult``."""
    return RobocopyLogParser(dialect).parse(path)
