"""
Shared test fixtures for robocopy-log-parser tests.

``SAMPLE_LOG`` is a complete Robocopy log with the four usual sections
(banner, header, file listing, footer). Fixtures write it to disk in the
encoding of the dialect under test.
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

SAMPLE_LOG = """\

-------------------------------------------------------------------------------
   ROBOCOPY     ::     Robust File Copy for Windows
-------------------------------------------------------------------------------

  Started : Monday, January 1, 2024 12:00:00 AM
   Source : C:\\Data\\
     Dest : D:\\Backup\\Data\\

    Files : *.*
\t
  Options : *.* /S /E /DCOPY:DA /COPY:DAT /R:1000000 /W:30

------------------------------------------------------------------------------

\t                   2\tC:\\Data\\
\t    New File  \t\t     512\ta.txt
100%
\t    New File  \t\t    1024\tb.txt
100%

------------------------------------------------------------------------------

               Total    Copied   Skipped  Mismatch    FAILED    Extras
    Dirs :         1         0         1         0         0         0
   Files :         2         2         0         0         0         0
   Bytes :      1536      1536         0         0         0         0
   Times :   0:00:00   0:00:00                       0:00:00   0:00:00


   Speed :              153600 Bytes/sec.
   Speed :               8.789 MegaBytes/min.
   Ended : Monday, January 1, 2024 12:00:01 AM
"""

# Number of dash-only lines in SAMPLE_LOG
SAMPLE_DIVIDERS = 4


# ---------------------------------------------------------------------------
# Pytest markers
# ---------------------------------------------------------------------------
def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line(
        "markers",
        "integration: mark test as integration test (parses files end to end)",
    )


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def sample_log_text() -> str:
    return SAMPLE_LOG


@pytest.fixture
def write_log() -> Callable[..., Path]:
    """Write log text to a file with Windows line endings."""
    def _write(path: Path, text: str, encoding: str = "utf-16-le", bom: bool = False) -> Path:
        data = text.replace("\n", "\r\n").encode(encoding)
        if bom:
            data = "\ufeff".encode(encoding) + data
        path.write_bytes(data)
        return path

    return _write


@pytest.fixture
def unilog_file(tmp_path: Path, write_log) -> Path:
    """SAMPLE_LOG as written by ``robocopy /UNILOG`` (UTF-16LE with BOM)."""
    return write_log(tmp_path / "robocopy.log", SAMPLE_LOG, bom=True)


@pytest.fixture
def legacy_file(tmp_path: Path, write_log) -> Path:
    """SAMPLE_LOG as written by ``robocopy /LOG`` on an ANSI console."""
    return write_log(tmp_path / "robocopy_ansi.log", SAMPLE_LOG, encoding="cp1252")
