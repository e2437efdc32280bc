"""
Unit tests for field converters (robocopy_log_parser.converters).

Converters are pure: they return the typed value or raise
FieldConversionError, and never touch logging.
"""

from __future__ import annotations

from datetime import datetime

import pytest

from robocopy_log_parser.converters import (
    convert_field,
    parse_copy_stat,
    parse_speed,
    parse_timestamp,
    parse_unsigned,
)
from robocopy_log_parser.dialect_registry import get_dialect
from robocopy_log_parser.exceptions import FieldConversionError, UnknownKeyError
from robocopy_log_parser.models import CopyStat

FORMAT = "%A, %B %d, %Y %I:%M:%S %p"


class TestParseUnsigned:

    def test_digits(self):
        assert parse_unsigned("0") == 0
        assert parse_unsigned("123456789012345678901234567890") == 123456789012345678901234567890

    @pytest.mark.parametrize("token", ["", "-1", "+1", "1.5", "1_000", " 1", "1k", "١٢"])
    def test_rejects_non_digits(self, token):
        with pytest.raises(FieldConversionError):
            parse_unsigned(token)


class TestParseTimestamp:

    def test_padded_day(self):
        ts = parse_timestamp("Monday, January  1, 2024 12:00:00 AM", FORMAT)
        assert ts == datetime(2024, 1, 1, 0, 0, 0).astimezone()

    def test_afternoon(self):
        ts = parse_timestamp("Friday, March 15, 2024 3:04:05 PM", FORMAT)
        assert ts.replace(tzinfo=None) == datetime(2024, 3, 15, 15, 4, 5)

    def test_is_timezone_aware(self):
        ts = parse_timestamp("Monday, January 1, 2024 12:00:00 AM", FORMAT)
        assert ts.tzinfo is not None

    @pytest.mark.parametrize("value", ["not-a-date", "", "2024-01-01 00:00:00"])
    def test_invalid(self, value):
        with pytest.raises(FieldConversionError):
            parse_timestamp(value, FORMAT)


class TestParseSpeed:

    def test_bytes_per_second(self):
        assert parse_speed("12345 Bytes/sec.") == 12345

    def test_unit_is_case_insensitive(self):
        assert parse_speed("12345 BYTES/SEC.") == 12345

    def test_other_unit(self):
        with pytest.raises(FieldConversionError, match="unit"):
            parse_speed("12345 KB/sec.")

    def test_megabytes_per_minute(self):
        with pytest.raises(FieldConversionError):
            parse_speed("8.789 MegaBytes/min.")

    def test_missing_separator(self):
        with pytest.raises(FieldConversionError, match="Unrecognized"):
            parse_speed("12345")

    def test_non_numeric(self):
        with pytest.raises(FieldConversionError):
            parse_speed("fast Bytes/sec.")


class TestParseCopyStat:

    def test_six_columns(self):
        stat = parse_copy_stat("10         8         2         0         0         0")
        assert stat == CopyStat(total=10, copied=8, skipped=2, mismatch=0, failed=0, extras=0)

    def test_tabs_and_spaces(self):
        stat = parse_copy_stat("1\t2 3  4\t\t5 6")
        assert (stat.total, stat.extras) == (1, 6)

    @pytest.mark.parametrize("value", ["1 2 3 4 5", "1 2 3 4 5 6 7", ""])
    def test_wrong_token_count(self, value):
        with pytest.raises(FieldConversionError, match="instead of 6"):
            parse_copy_stat(value)

    def test_human_readable_sizes_rejected(self):
        """``1.5 m`` style byte counts split into extra tokens and fail as a unit."""
        with pytest.raises(FieldConversionError):
            parse_copy_stat("1.5 m 1.5 m 0 0 0 0")

    def test_non_numeric_token(self):
        with pytest.raises(FieldConversionError):
            parse_copy_stat("1 2 3 x 5 6")


class TestConvertField:

    def test_header_text_field(self):
        dialect = get_dialect("unilog")
        assert convert_field(dialect.header, "Dest", "D:\\", dialect) == ("destination", "D:\\")

    def test_footer_stat_field(self):
        dialect = get_dialect("unilog")
        field, value = convert_field(dialect.footer, "Dirs", "1 0 1 0 0 0", dialect)
        assert field == "stats.dirs"
        assert isinstance(value, CopyStat)

    def test_same_key_differs_by_section(self):
        """``Files`` is the selection pattern in the header and a stat in the footer."""
        dialect = get_dialect("unilog")
        assert convert_field(dialect.header, "Files", "*.*", dialect) == ("files", "*.*")
        field, _ = convert_field(dialect.footer, "Files", "2 2 0 0 0 0", dialect)
        assert field == "stats.files"

    def test_unknown_key(self):
        dialect = get_dialect("unilog")
        with pytest.raises(UnknownKeyError):
            convert_field(dialect.header, "Exc Files", "*.tmp", dialect)

    def test_keys_are_case_sensitive(self):
        dialect = get_dialect("unilog")
        with pytest.raises(UnknownKeyError):
            convert_field(dialect.header, "source", "C:\\", dialect)

    def test_bytes_unknown_in_legacy(self):
        dialect = get_dialect("legacy")
        with pytest.raises(UnknownKeyError):
            convert_field(dialect.footer, "Bytes", "1 1 0 0 0 0", dialect)
