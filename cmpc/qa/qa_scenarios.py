#!/usr/bin/env python3
"""Scenario QA for the mortgage payment calculator.

Goal: pin the reference scenarios (25-year / 5% / $300k across frequencies,
0% straight-line, rejected inputs) and sweep a broad grid of valid inputs to
catch crashes, NaNs or non-positive payments.

Run:
  python -m cmpc.qa.qa_scenarios
"""

from __future__ import annotations

import sys
from pathlib import Path

# Ensure repo root is on sys.path regardless of where this script is invoked from.
_REPO_ROOT = Path(__file__).resolve().parents[2]
if str(_REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(_REPO_ROOT))

import itertools
import math

# Closed-form reference values for $300,000 / 300 months / 5% nominal.
REF_MONTHLY = 1744.814955
REF_SEMI_MONTHLY = 871.509894
REF_BI_WEEKLY = 804.406984
REF_WEEKLY = 402.012503


def _die(msg: str, code: int = 1) -> None:
    print(f"\n[QA_SCENARIOS FAILED] {msg}\n")
    raise SystemExit(code)


def _check(name: str, got: float, exp: float, atol: float) -> None:
    if not math.isfinite(float(got)) or abs(float(got) - float(exp)) > atol:
        _die(f"{name}: got {got!r} expected {exp!r} (atol={atol})")


def reference_scenarios() -> None:
    from cmpc.core.frequency import PaymentFrequency as F
    from cmpc.core.payment import LoanInput, compute_payment

    loan = LoanInput(300_000.0, 300, 5.0)

    monthly = compute_payment(loan, F.MONTHLY)
    _check("monthly payment", monthly.periodic_payment, REF_MONTHLY, 1e-5)
    _check("monthly count", monthly.total_payments_over_stated_term, 300, 0.0)

    semi = compute_payment(loan, F.SEMI_MONTHLY)
    _check("semi-monthly payment", semi.periodic_payment, REF_SEMI_MONTHLY, 1e-5)
    _check("semi-monthly count", semi.total_payments_over_stated_term, 600, 0.0)

    bw = compute_payment(loan, F.BI_WEEKLY)
    _check("bi-weekly payment", bw.periodic_payment, REF_BI_WEEKLY, 1e-5)
    _check("bi-weekly count", bw.total_payments_over_stated_term, 650, 1e-12)

    wk = compute_payment(loan, F.WEEKLY)
    _check("weekly payment", wk.periodic_payment, REF_WEEKLY, 1e-5)
    _check("weekly count", wk.total_payments_over_stated_term, 1300, 1e-12)

    abw = compute_payment(loan, F.ACCELERATED_BI_WEEKLY)
    _check("accelerated bi-weekly payment", abw.periodic_payment, REF_MONTHLY / 2, 1e-5)
    if abs(abw.periodic_payment - bw.periodic_payment) < 1.0:
        _die("accelerated bi-weekly must differ from the standard bi-weekly payment")
    if not abw.totals_use_stated_term or not abw.note:
        _die("accelerated results must be flagged with the stated-term note")

    aw = compute_payment(loan, F.ACCELERATED_WEEKLY)
    _check("accelerated weekly payment", aw.periodic_payment, REF_MONTHLY / 4, 1e-5)

    zero = compute_payment(LoanInput(100_000.0, 120, 0.0), F.MONTHLY)
    if zero.periodic_payment != 100_000.0 / 120:
        _die(f"0% monthly payment must be exactly principal/120, got {zero.periodic_payment!r}")
    _check("0% total interest", zero.total_interest_paid, 0.0, 1e-9)

    print("[PASS] reference scenarios")


def rejected_inputs() -> None:
    from cmpc.core.payment import LoanInput, compute_payment
    from cmpc.core.validation import InvalidInput

    bad = [
        (LoanInput(-1.0, 300, 5.0), "monthly"),
        (LoanInput(0.0, 300, 5.0), "monthly"),
        (LoanInput(300_000.0, 0, 5.0), "monthly"),
        (LoanInput(300_000.0, 300, -0.5), "monthly"),
        (LoanInput(float("nan"), 300, 5.0), "monthly"),
        (LoanInput(300_000.0, 300, 5.0), "fortnightly"),
    ]
    for loan, freq in bad:
        try:
            compute_payment(loan, freq)
        except InvalidInput:
            continue
        _die(f"expected InvalidInput for {loan!r} / {freq!r}")

    print("[PASS] rejected inputs")


def grid_sweep() -> None:
    from cmpc.core.frequency import PaymentFrequency
    from cmpc.core.payment import LoanInput, compute_payment

    principals = [1.0, 50_000.0, 750_000.0, 5_000_000.0]
    months = [1, 7, 60, 299, 360, 480]
    rates = [0.0, 0.1, 2.35, 5.0, 12.0, 20.0, 35.0]
    count = 0
    for p, n, r, f in itertools.product(principals, months, rates, PaymentFrequency):
        res = compute_payment(LoanInput(p, n, r), f)
        pmt = res.periodic_payment
        if not (math.isfinite(pmt) and pmt > 0.0):
            _die(f"non-positive/non-finite payment for p={p} n={n} r={r} f={f.key}: {pmt!r}")
        if res.total_interest_paid < -1e-6 * p and not f.accelerated:
            _die(f"negative interest for p={p} n={n} r={r} f={f.key}: {res.total_interest_paid!r}")
        count += 1

    print(f"[PASS] grid sweep ({count} cases)")


def main(argv: list[str] | None = None) -> None:
    reference_scenarios()
    rejected_inputs()
    grid_sweep()
    print("\n[QA_SCENARIOS] All tests passed.\n")


if __name__ == "__main__":
    main()
