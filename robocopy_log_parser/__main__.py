"""Module entrypoint.

Allows:
    python -m robocopy_log_parser --source robocopy.log --output result.json
"""

from __future__ import annotations

from robocopy_log_parser.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
