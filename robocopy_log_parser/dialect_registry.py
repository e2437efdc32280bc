"""
Dialect loader for robocopy-log-parser.

Loads dialect YAML files from robocopy_log_parser/dialects/ and provides
structured access via Pydantic models. Each dialect defines:
- name: unique identifier (e.g., "unilog")
- encoding: the Python codec the log is decoded with
- datetime_format: strptime pattern for Started / Ended
- header / footer: the fixed key tables, mapping a log key to the
  ParseResult field it fills and the converter kind to apply

A parse always runs against exactly one dialect chosen by the caller.
Robocopy's output encoding depends on how it was invoked, so the engine
does not try to guess it.
"""

from __future__ import annotations

import codecs
import logging
from functools import lru_cache
from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from robocopy_log_parser.exceptions import DialectError

logger = logging.getLogger(__name__)

# Directory containing dialect YAML files (sibling package)
_DIALECTS_DIR = Path(__file__).parent / "dialects"

DEFAULT_DIALECT = "unilog"

FieldKind = Literal["text", "timestamp", "speed", "copy_stat"]


class FieldSpec(BaseModel):
    """Where a recognized key is stored and how its value is converted."""
    field: str
    kind: FieldKind


class Dialect(BaseModel):
    """A complete dialect definition loaded from YAML."""
    name: str
    description: str = ""
    encoding: str
    datetime_format: str
    header: dict[str, FieldSpec] = Field(default_factory=dict)
    footer: dict[str, FieldSpec] = Field(default_factory=dict)

    @field_validator("encoding")
    @classmethod
    def _check_encoding(cls, value: str) -> str:
        try:
            codecs.lookup(value)
        except LookupError as exc:
            raise ValueError(f"Unknown text encoding: '{value}'") from exc
        return value


def load_dialect(path: Path) -> Dialect:
    """Load a single dialect YAML file."""
    with open(path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f)
    if not isinstance(raw, dict):
        raise DialectError(f"Dialect file is empty or malformed: {path}")
    return Dialect.model_validate(raw)


def load_all_dialects(dialects_dir: Path | None = None) -> dict[str, Dialect]:
    """Load all dialect YAML files, keyed by dialect name.

    Files that fail to load are skipped with a warning.

    Args:
        dialects_dir: Directory to scan for .yaml files. Defaults to
            the built-in dialects/ directory.
    """
    dialects_dir = dialects_dir or _DIALECTS_DIR
    dialects: dict[str, Dialect] = {}
    for yaml_path in sorted(dialects_dir.glob("*.yaml")):
        try:
            dialect = load_dialect(yaml_path)
        except (OSError, yaml.YAMLError, ValidationError, DialectError) as e:
            logger.warning("Failed to load dialect from %s: %s", yaml_path, e)
            continue
        if dialect.name in dialects:
            logger.warning(
                "Duplicate dialect '%s' in %s ignored", dialect.name, yaml_path
            )
            continue
        dialects[dialect.name] = dialect
        logger.debug("Loaded dialect: %s from %s", dialect.name, yaml_path)
    logger.debug("Loaded %d dialects", len(dialects))
    return dialects


@lru_cache(maxsize=1)
def _builtin_dialects() -> dict[str, Dialect]:
    return load_all_dialects()


def list_dialects() -> list[str]:
    """Names of the built-in dialects."""
    return sorted(_builtin_dialects())


def get_dialect(dialect: str | Dialect = DEFAULT_DIALECT) -> Dialect:
    """Resolve a dialect name to its definition.

    A ``Dialect`` instance is returned as-is, so callers can pass a
    custom definition.

    Raises:
        DialectError: If no built-in dialect has that name.
    """
    if isinstance(dialect, Dialect):
        return dialect
    dialects = _builtin_dialects()
    try:
        return dialects[dialect]
    except KeyError:
        raise DialectError(
            f"Unknown dialect: '{dialect}'. "
            f"Available dialects: {sorted(dialects)}"
        ) from None
