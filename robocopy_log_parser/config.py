"""
Run configuration for robocopy-log-parser.

``ConvertConfig`` holds the settings of one log -> JSON conversion, as
collected by the CLI. ``SummaryConfig`` does the same for a batch
summary run.

Why Pydantic:
- The dialect name is checked against the registry before any file is
  touched, giving a clear error for typos.
- Paths are coerced to ``Path`` objects in one place.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator

from robocopy_log_parser.dialect_registry import DEFAULT_DIALECT, list_dialects

logger = logging.getLogger(__name__)


def _check_dialect(value: str) -> str:
    available = list_dialects()
    if value not in available:
        raise ValueError(f"Unknown dialect '{value}'. Available dialects: {available}")
    return value


class ConvertConfig(BaseModel):
    """Settings for converting one Robocopy log to JSON."""

    source: Path = Field(..., description="Robocopy log file to process")
    output: Path = Field(..., description="Processed output file")
    log_file: Path | None = Field(None, description="Where to write this program's logs")
    overwrite: bool = Field(False, description="Overwrite the output file if present")
    dialect: str = Field(DEFAULT_DIALECT, description="Log dialect of the source file")

    @field_validator("dialect")
    @classmethod
    def _validate_dialect(cls, value: str) -> str:
        return _check_dialect(value)


class SummaryConfig(BaseModel):
    """Settings for summarizing many Robocopy logs into one table."""

    sources: list[Path] = Field(..., min_length=1, description="Robocopy log files")
    output: Path
    output_format: Literal["csv", "parquet"] = "csv"
    log_file: Path | None = None
    overwrite: bool = False
    dialect: str = DEFAULT_DIALECT

    @field_validator("dialect")
    @classmethod
    def _validate_dialect(cls, value: str) -> str:
        return _check_dialect(value)
