"""
Field converters for Robocopy header and footer values.

Every converter is a pure function: it either returns the typed value or
raises ``FieldConversionError`` with the reason. None of them log; the
parser decides whether a failure is logged and skipped.

Value formats handled:
- timestamp: ``Monday, January  1, 2024 12:00:00 AM`` (local time)
- speed: ``12345 Bytes/sec.``
- copy_stat: six whitespace-separated counters
  (total, copied, skipped, mismatch, failed, extras)
"""

from __future__ import annotations

import re
from datetime import datetime

from robocopy_log_parser.dialect_registry import Dialect, FieldSpec
from robocopy_log_parser.exceptions import FieldConversionError, UnknownKeyError
from robocopy_log_parser.models import STAT_COLUMNS, CopyStat

SPEED_UNIT = "bytes/sec."

_UNSIGNED_RE = re.compile(r"[0-9]+")


def split_key_value(line: str) -> tuple[str, str] | None:
    """Split a content line at its first ``:`` into a trimmed (key, value).

    Returns ``None`` for lines without a colon.
    """
    key, sep, value = line.strip().partition(":")
    if not sep:
        return None
    return key.strip(), value.strip()


def parse_unsigned(token: str) -> int:
    """Parse a non-negative integer made of ASCII digits only."""
    if not _UNSIGNED_RE.fullmatch(token):
        raise FieldConversionError(f"Not an unsigned integer: '{token}'")
    return int(token)


def parse_timestamp(value: str, datetime_format: str) -> datetime:
    """Parse a Robocopy timestamp as local time."""
    try:
        naive = datetime.strptime(value, datetime_format)
    except ValueError as exc:
        raise FieldConversionError(f"Unrecognized timestamp '{value}': {exc}") from exc
    # Robocopy writes wall-clock time without an offset
    return naive.astimezone()


def parse_speed(value: str) -> int:
    """Parse ``<number> Bytes/sec.`` into bytes per second."""
    number, sep, unit = value.partition(" ")
    if not sep:
        raise FieldConversionError(f"Unrecognized speed value: '{value}'")
    if unit.lower() != SPEED_UNIT:
        raise FieldConversionError(f"Unexpected speed unit: '{unit}'")
    try:
        return parse_unsigned(number)
    except FieldConversionError as exc:
        raise FieldConversionError(f"Failed to parse speed value: {exc}") from exc


def parse_copy_stat(value: str) -> CopyStat:
    """Parse a six-column statistics line into a CopyStat.

    The CopyStat is only built once all six tokens have parsed.
    """
    tokens = value.split()
    if len(tokens) != len(STAT_COLUMNS):
        raise FieldConversionError(
            f"Unexpected number of fields: {len(tokens)} instead of {len(STAT_COLUMNS)}"
        )
    counters = {name: parse_unsigned(token) for name, token in zip(STAT_COLUMNS, tokens)}
    return CopyStat(**counters)


def convert_value(spec: FieldSpec, value: str, dialect: Dialect) -> object:
    """Apply the converter named by ``spec.kind`` to a raw value."""
    if spec.kind == "timestamp":
        return parse_timestamp(value, dialect.datetime_format)
    if spec.kind == "speed":
        return parse_speed(value)
    if spec.kind == "copy_stat":
        return parse_copy_stat(value)
    return value


def convert_field(
    table: dict[str, FieldSpec],
    key: str,
    value: str,
    dialect: Dialect,
) -> tuple[str, object]:
    """Convert one key/value pair using a section's key table.

    Args:
        table: The dialect's ``header`` or ``footer`` key table.
        key: Trimmed key, matched case-sensitively.
        value: Trimmed raw value.
        dialect: Supplies the timestamp format.

    Returns:
        ``(field, typed_value)`` where *field* is the ParseResult
        attribute (possibly dotted) to assign.

    Raises:
        UnknownKeyError: If *key* is not in *table*.
        FieldConversionError: If the value cannot be converted.
    """
    spec = table.get(key)
    if spec is None:
        raise UnknownKeyError(f"Unknown key: '{key}'")
    return spec.field, convert_value(spec, value, dialect)
