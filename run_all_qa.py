#!/usr/bin/env python3
"""Run all calculator QA gates (smoke + truth tables + scenarios + sensitivity).

Usage:
  python run_all_qa.py
  python run_all_qa.py --only smoke,scenarios
  python run_all_qa.py --skip sensitivity
  python run_all_qa.py --list

Exit codes:
  0 = all selected suites passed
  1 = at least one selected suite failed
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

SUITES = ["smoke", "truth_tables", "scenarios", "sensitivity"]


def _ensure_repo_root_on_syspath() -> Path:
    repo_root = Path(__file__).resolve().parent
    if str(repo_root) not in sys.path:
        sys.path.insert(0, str(repo_root))
    return repo_root


def _run_suite(name: str) -> int:
    """Run a suite by name. Returns exit code."""
    if name == "smoke":
        from cmpc.qa.smoke_check import main as _main
    elif name == "truth_tables":
        from cmpc.qa.qa_truth_tables import main as _main
    elif name == "scenarios":
        from cmpc.qa.qa_scenarios import main as _main
    elif name == "sensitivity":
        from cmpc.qa.qa_sensitivity import main as _main
    else:
        raise ValueError(f"Unknown suite: {name}")

    try:
        _main([])  # prevent suite argparsers from seeing run_all_qa flags
        return 0
    except SystemExit as e:
        # Normalize exit code: None/0 => 0, otherwise 1..255
        code = e.code
        if code is None:
            return 0
        try:
            return int(code)
        except (TypeError, ValueError):
            return 1
    except Exception as e:
        print(f"\n[RUN_ALL_QA] Unhandled exception in '{name}': {e}\n")
        return 1


def _split(csv: str) -> set[str]:
    return {x.strip() for x in csv.split(",") if x.strip()}


def main(argv: list[str] | None = None) -> int:
    _ensure_repo_root_on_syspath()

    ap = argparse.ArgumentParser(add_help=True)
    ap.add_argument("--list", action="store_true", help="List available suites and exit.")
    ap.add_argument("--only", type=str, default="", help="Comma-separated suites to run (subset).")
    ap.add_argument("--skip", type=str, default="", help="Comma-separated suites to skip.")
    args = ap.parse_args(argv)

    if args.list:
        print("Available suites:")
        for s in SUITES:
            print(f" - {s}")
        return 0

    selected = set(SUITES)
    for flag, requested in (("--only", _split(args.only)), ("--skip", _split(args.skip))):
        unknown = sorted(requested.difference(SUITES))
        if unknown:
            print(f"[RUN_ALL_QA] Unknown suite(s) in {flag}: {unknown}")
            return 1
    if args.only.strip():
        selected = _split(args.only)
    selected = selected.difference(_split(args.skip))

    ordered = [s for s in SUITES if s in selected]
    if not ordered:
        print("[RUN_ALL_QA] Nothing to run (selection is empty).")
        return 0

    print("\n[RUN_ALL_QA] Running suites:", ", ".join(ordered), "\n")

    failures: list[tuple[str, int]] = []
    for s in ordered:
        print(f"--- {s.upper()} ---")
        code = _run_suite(s)
        if code != 0:
            failures.append((s, code))
            print(f"[RUN_ALL_QA] Suite '{s}' failed with exit code {code}.\n")
        else:
            print(f"[RUN_ALL_QA] Suite '{s}' passed.\n")

    if failures:
        print("=== RUN_ALL_QA FAILED ===")
        for s, code in failures:
            print(f" - {s}: exit code {code}")
        return 1

    print("=== RUN_ALL_QA PASS ===\n")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
