"""CLI / headless entry point for the mortgage payment calculator.

Usage
-----
Price the default scenario (25 years, 5%, monthly):
    python -m cmpc

Run with a JSON scenario file:
    python -m cmpc --config scenario.json --json

Dump an example scenario file:
    python -m cmpc --example

Override individual parameters on the command line:
    python -m cmpc --set principal=450000 --set frequency=accelerated-bi-weekly

Compare every payment frequency, or sweep the rate, as CSV:
    python -m cmpc --compare --output frequencies.csv
    python -m cmpc --sweep 3:8:0.25

The ``loan`` keys are ``principal``, ``rate`` (nominal annual percent),
``amortization_years`` (+ optional ``amortization_extra_months``) or
``amortization_months``.  ``frequency`` accepts any of the selector keys
printed by --example.
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from cmpc.core.frequency import PaymentFrequency
from cmpc.core.payment import LoanInput, compare_frequencies, compute_payment
from cmpc.core.sensitivity import payment_by_rate, rate_grid
from cmpc.core.summary import format_summary, summary_dict
from cmpc.core.validation import InvalidInput, get_validation_warnings

# ---------------------------------------------------------------------------
# Default scenario
# ---------------------------------------------------------------------------
_DEFAULT_LOAN: dict = {
    "principal": 300000.0,
    "amortization_years": 25,
    "amortization_extra_months": 0,
    "amortization_months": None,   # when set, wins over the years fields
    "rate": 5.0,                   # annual nominal rate, percent (semi-annual compounding)
}


def _build_example() -> dict:
    """Return a complete example scenario dict."""
    return {
        "_comment": (
            "Mortgage payment scenario. 'loan' holds the amounts; 'frequency' is one of: "
            + ", ".join(f.key for f in PaymentFrequency)
        ),
        "loan": _DEFAULT_LOAN.copy(),
        "frequency": PaymentFrequency.MONTHLY.key,
    }


def _coerce(raw: str) -> bool | int | float | str | None:
    """Coerce an override value: null -> bool -> int -> float -> str."""
    if raw.lower() in ("null", "none"):
        return None
    if raw.lower() in ("true", "false"):
        return raw.lower() == "true"
    try:
        return int(raw)
    except ValueError:
        try:
            return float(raw)
        except ValueError:
            return raw


def _apply_overrides(scenario: dict, overrides: list[str]) -> dict:
    """Apply --set key=value overrides; ``frequency`` is top-level, the rest go to ``loan``."""
    for kv in overrides or []:
        if "=" not in kv:
            print(f"Warning: ignoring malformed --set argument (expected key=value): {kv!r}", file=sys.stderr)
            continue
        key, _, raw = kv.partition("=")
        key = key.strip()
        value = _coerce(raw.strip())
        if key == "frequency":
            scenario["frequency"] = value
        else:
            scenario["loan"][key] = value
    return scenario


def _loan_from_cfg(cfg: dict) -> LoanInput:
    if cfg.get("amortization_months") is not None:
        return LoanInput(
            principal=cfg.get("principal"),
            amortization_months=cfg.get("amortization_months"),
            nominal_annual_rate_pct=cfg.get("rate"),
        )
    return LoanInput.from_years(
        cfg.get("principal"),
        cfg.get("amortization_years"),
        cfg.get("rate"),
        months=cfg.get("amortization_extra_months") or 0,
    )


def _parse_sweep(value: str):
    parts = value.split(":")
    if len(parts) != 3:
        raise InvalidInput(f"--sweep expects START:STOP:STEP, got {value!r}")
    try:
        start, stop, step = (float(p) for p in parts)
    except ValueError:
        raise InvalidInput(f"--sweep values must be numeric, got {value!r}") from None
    return rate_grid(start, stop, step)


def _emit(text: str, output: str) -> None:
    if output == "-":
        print(text, end="" if text.endswith("\n") else "\n")
    else:
        out_path = Path(output)
        out_path.write_text(text if text.endswith("\n") else text + "\n")
        print(f"Results written to {out_path}", file=sys.stderr)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="python -m cmpc",
        description="Canadian mortgage payment calculator (semi-annual compounding).",
    )
    parser.add_argument(
        "--config", "-c",
        metavar="FILE",
        help="Path to a JSON scenario file. Use --example to generate a template.",
    )
    parser.add_argument(
        "--output", "-o",
        metavar="FILE",
        default="-",
        help="Output file path. Use '-' (default) to print to stdout.",
    )
    parser.add_argument(
        "--set", "-s",
        dest="overrides",
        metavar="key=value",
        action="append",
        help="Override a loan parameter or the frequency. Repeat for multiple overrides.",
    )
    parser.add_argument(
        "--example",
        action="store_true",
        help="Print an example JSON scenario file and exit.",
    )
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument(
        "--json",
        action="store_true",
        help="Output the summary as JSON instead of text.",
    )
    mode.add_argument(
        "--compare",
        action="store_true",
        help="Output every payment frequency side by side as CSV.",
    )
    mode.add_argument(
        "--sweep",
        metavar="START:STOP:STEP",
        help="Output payments across a range of nominal rates (percent) as CSV.",
    )

    args = parser.parse_args(argv)

    if args.example:
        print(json.dumps(_build_example(), indent=2))
        return 0

    scenario = _build_example()
    scenario.pop("_comment")
    if args.config:
        config_path = Path(args.config)
        if not config_path.exists():
            print(f"Error: config file not found: {config_path}", file=sys.stderr)
            return 1
        try:
            with config_path.open() as fh:
                user_scenario = json.load(fh)
        except json.JSONDecodeError as exc:
            print(f"Config error: {config_path} is not valid JSON ({exc})", file=sys.stderr)
            return 1
        if not isinstance(user_scenario, dict):
            print(f"Config error: {config_path} must contain a JSON object", file=sys.stderr)
            return 1
        scenario["loan"].update(user_scenario.get("loan", {}))
        if "frequency" in user_scenario:
            scenario["frequency"] = user_scenario["frequency"]

    _apply_overrides(scenario, args.overrides)
    cfg = scenario["loan"]

    for msg in get_validation_warnings(cfg):
        print(f"Warning: {msg}", file=sys.stderr)

    try:
        loan = _loan_from_cfg(cfg).validated()
        if args.compare:
            _emit(compare_frequencies(loan).to_csv(index=False), args.output)
            return 0
        if args.sweep:
            df = payment_by_rate(loan, scenario["frequency"], _parse_sweep(args.sweep))
            _emit(df.to_csv(index=False), args.output)
            return 0
        result = compute_payment(loan, scenario["frequency"])
    except InvalidInput as exc:
        print(f"Input error: {exc}", file=sys.stderr)
        return 1

    print(
        f"Computed {result.frequency.label.lower()} payment for ${loan.principal:,.0f} "
        f"over {loan.amortization_months} months at {loan.nominal_annual_rate_pct}%",
        file=sys.stderr,
    )

    if args.json:
        _emit(json.dumps(summary_dict(loan, result), indent=2), args.output)
    else:
        _emit(format_summary(loan, result), args.output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
