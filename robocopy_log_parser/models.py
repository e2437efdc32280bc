"""
Result models for robocopy-log-parser.

``ParseResult`` is the structured record of one Robocopy run. Every
field is independently optional: ``None`` means the value was not found
(or could not be converted) in the log, never "empty".

Key models:
- CopyStat: the six counters of one statistics line.
- CopyStats: up to three CopyStat entries keyed by category.
- ParseResult: the accumulated output of one parse pass.

Why Pydantic:
- Non-negative counters are validated at construction, so a CopyStat is
  either complete or not built at all.
- JSON serialization (``to_json``) drops unset fields without a custom
  encoder.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field, NonNegativeInt

# Column order of a Robocopy statistics line
STAT_COLUMNS = ("total", "copied", "skipped", "mismatch", "failed", "extras")

STAT_CATEGORIES = ("dirs", "files", "bytes")


class CopyStat(BaseModel):
    """Outcome counters for one copy category (directories, files or bytes)."""

    total: NonNegativeInt
    copied: NonNegativeInt
    skipped: NonNegativeInt
    mismatch: NonNegativeInt
    failed: NonNegativeInt
    extras: NonNegativeInt


class CopyStats(BaseModel):
    """Footer statistics keyed by category.

    ``bytes`` is only reported by the full-featured (``unilog``) dialect.
    """

    dirs: CopyStat | None = None
    files: CopyStat | None = None
    bytes: CopyStat | None = None


class ParseResult(BaseModel):
    """Structured record of one Robocopy log."""

    started: datetime | None = None
    ended: datetime | None = None
    source: str | None = None
    destination: str | None = None
    files: str | None = Field(None, description="File selection pattern")
    options: str | None = None
    speed: NonNegativeInt | None = Field(None, description="In bytes per second")
    stats: CopyStats = Field(default_factory=CopyStats)

    def assign(self, field: str, value: object) -> None:
        """Set a (possibly dotted) field, e.g. ``"stats.dirs"``."""
        target: BaseModel = self
        *parents, name = field.split(".")
        for parent in parents:
            target = getattr(target, parent)
        setattr(target, name, value)

    def to_json(self, indent: int | None = 2) -> str:
        """Serialize to JSON, omitting fields that were never set."""
        return self.model_dump_json(indent=indent, exclude_none=True)
