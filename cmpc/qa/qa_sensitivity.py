#!/usr/bin/env python3
"""Sensitivity / monotonicity suite for the payment calculator.

Goal:
- Raising the nominal rate must strictly raise the payment.
- Lengthening the amortization must strictly lower the payment.
- Vectorized sweeps must agree with the scalar calculator row by row.

Run:
  python -m cmpc.qa.qa_sensitivity

Notes:
- This is a *regression* guardrail, not a proof; grids are coarse but cover
  every frequency.
"""

from __future__ import annotations

import sys
from pathlib import Path

# Ensure repo root is on sys.path regardless of where this script is invoked from.
_REPO_ROOT = Path(__file__).resolve().parents[2]
if str(_REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(_REPO_ROOT))

import math

REL_EPS = 1e-9


def _die(msg: str, code: int = 1) -> None:
    print(f"\n[QA_SENSITIVITY FAILED] {msg}\n")
    raise SystemExit(code)


def _strictly(values, *, increasing: bool) -> bool:
    pairs = zip(values, values[1:])
    if increasing:
        return all(b > a for a, b in pairs)
    return all(b < a for a, b in pairs)


def rate_monotonicity() -> None:
    from cmpc.core.frequency import PaymentFrequency
    from cmpc.core.payment import LoanInput
    from cmpc.core.sensitivity import payment_by_rate, rate_grid

    loan = LoanInput(400_000.0, 300, 0.0)
    rates = rate_grid(0.0, 20.0, 0.25)
    for freq in PaymentFrequency:
        pmts = payment_by_rate(loan, freq, rates)["Payment"].tolist()
        if not _strictly(pmts, increasing=True):
            _die(f"payment not strictly increasing in rate for {freq.key}")

    print("[PASS] rate monotonicity")


def amortization_monotonicity() -> None:
    from cmpc.core.frequency import PaymentFrequency
    from cmpc.core.payment import LoanInput
    from cmpc.core.sensitivity import payment_by_amortization

    months = list(range(12, 481, 12))
    for rate in (0.0, 4.5, 15.0):
        loan = LoanInput(400_000.0, 300, rate)
        for freq in PaymentFrequency:
            pmts = payment_by_amortization(loan, freq, months)["Payment"].tolist()
            if not _strictly(pmts, increasing=False):
                _die(f"payment not strictly decreasing in amortization for {freq.key} at {rate}%")

    print("[PASS] amortization monotonicity")


def sweep_matches_scalar() -> None:
    from cmpc.core.frequency import PaymentFrequency
    from cmpc.core.payment import LoanInput, compute_payment
    from cmpc.core.sensitivity import payment_by_rate

    loan = LoanInput(275_000.0, 301, 0.0)
    rates = [0.0, 1.0, 3.99, 7.25]
    for freq in PaymentFrequency:
        df = payment_by_rate(loan, freq, rates)
        for row in df.itertuples(index=False):
            ref = compute_payment(LoanInput(275_000.0, 301, row[0]), freq)
            for got, exp, label in (
                (row[1], ref.periodic_payment, "payment"),
                (row[2], ref.total_interest_paid, "interest"),
                (row[3], ref.total_cost_of_mortgage, "total"),
            ):
                if not math.isclose(got, exp, rel_tol=REL_EPS, abs_tol=1e-9):
                    _die(f"sweep {label} mismatch for {freq.key} at {row[0]}%: {got!r} vs {exp!r}")

    print("[PASS] sweep matches scalar")


def main(argv: list[str] | None = None) -> None:
    rate_monotonicity()
    amortization_monotonicity()
    sweep_matches_scalar()
    print("\n[QA_SENSITIVITY] All tests passed.\n")


if __name__ == "__main__":
    main()
