"""
Custom exception hierarchy for robocopy-log-parser.

Two tiers:
- Recoverable, field-level errors (``FieldConversionError`` and its
  subclasses) are raised by the converters and caught by the parser,
  which logs them and leaves the field unset.
- Fatal, stream-level errors (``LogReadError``, ``OutputExistsError``,
  ``ExportError``) and configuration errors (``DialectError``) propagate
  to the caller.
"""


class RobocopyLogError(Exception):
    """Base exception for all robocopy-log-parser errors."""


class DialectError(RobocopyLogError):
    """Raised when a requested log dialect is unknown or invalid."""


class LogReadError(RobocopyLogError):
    """Raised when the Robocopy log cannot be opened or read."""


class FieldConversionError(RobocopyLogError, ValueError):
    """Raised when a header or footer value cannot be converted.

    For example a malformed timestamp, a speed in an unexpected unit, or
    a statistics line without exactly six numeric columns.
    """


class UnknownKeyError(FieldConversionError):
    """Raised when a key is not part of the section's key table."""


class OutputExistsError(RobocopyLogError, FileExistsError):
    """Raised when the output file exists and overwriting was not requested."""


class ExportError(RobocopyLogError):
    """Raised when the exporter fails to write an output file.

    For example permission errors, disk full, or unsupported format.
    """
