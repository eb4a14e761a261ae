#!/usr/bin/env python3
"""Quick smoke checks for the calculator package and CLI.

Run:
  python -m cmpc.qa.smoke_check
"""

from __future__ import annotations
import sys
from pathlib import Path

# Ensure repo root is on sys.path regardless of where this script is invoked from.
_REPO_ROOT = Path(__file__).resolve().parents[2]
if str(_REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(_REPO_ROOT))

import compileall
import contextlib
import io
import json


def die(msg: str, code: int = 1) -> None:
    print(f"\n[SMOKE CHECK FAILED] {msg}\n")
    raise SystemExit(code)


def main(argv: list[str] | None = None) -> None:
    pkg_dir = _REPO_ROOT / "cmpc"
    if not pkg_dir.is_dir():
        die("cmpc/ not found (run from the repo root).")
    if not compileall.compile_dir(str(pkg_dir), quiet=1):
        die("cmpc/ package failed to compile.")

    try:
        from cmpc import __main__ as cli
    except Exception as e:
        die(f"Import failure: {e}")

    buf = io.StringIO()
    with contextlib.redirect_stdout(buf), contextlib.redirect_stderr(io.StringIO()):
        rc = cli.main(["--json", "--set", "frequency=accelerated-weekly"])
    if rc != 0:
        die(f"CLI exited with {rc}")
    try:
        data = json.loads(buf.getvalue())
    except ValueError as e:
        die(f"CLI --json output is not JSON: {e}")
    if not data.get("payment") or data["payment"] <= 0:
        die(f"CLI returned no payment: {data}")
    if not data.get("totals_use_stated_term"):
        die("accelerated CLI result is missing the stated-term flag")

    print("[SMOKE CHECK] OK")


if __name__ == "__main__":
    main()
