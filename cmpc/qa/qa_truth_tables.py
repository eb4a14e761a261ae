#!/usr/bin/env python3
"""Truth-table QA: small, exact, model-level invariants.

These tests are intentionally numeric and explicit. They exist to prove that:
- Semi-annual compounding produces the expected effective and periodic rates.
- The annuity solver matches an independent closed form, including 0% and
  fractional payment counts.
- Accelerated payments are the monthly payment split in 2 or 4.
- Totals are payment x count, interest is total minus principal.

Run:
  python -m cmpc.qa.qa_truth_tables
"""

from __future__ import annotations

import math
import sys
from pathlib import Path


# Ensure repo root is on sys.path regardless of where this script is invoked from.
_REPO_ROOT = Path(__file__).resolve().parents[2]
if str(_REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(_REPO_ROOT))


def _die(msg: str, code: int = 1) -> None:
    print(f"\n[TRUTH TABLES FAILED] {msg}\n")
    raise SystemExit(code)


def _assert_close(name: str, got: float, exp: float, *, atol: float = 1e-9, rtol: float = 0.0) -> None:
    try:
        g = float(got)
        e = float(exp)
    except Exception:
        _die(f"{name}: non-numeric (got={got}, exp={exp})")
    if not (math.isfinite(g) and math.isfinite(e)):
        _die(f"{name}: non-finite (got={g}, exp={e})")
    if abs(g - e) > (atol + rtol * abs(e)):
        _die(f"{name}: got {g:.12g} expected {e:.12g} (atol={atol}, rtol={rtol})")


def _canadian_periodic_rate(rate_pct: float, k: int) -> float:
    r = float(rate_pct) / 100.0
    return (1.0 + r / 2.0) ** (2.0 / k) - 1.0


def _pmt(principal: float, rate: float, n: float) -> float:
    if rate == 0:
        return principal / n
    growth = (1.0 + rate) ** n
    return principal * rate * growth / (growth - 1.0)


def test_rates() -> None:
    from cmpc.core.rates import effective_annual_rate, nominal_pct_to_periodic_rate, periodic_rate

    _assert_close("EAR(5%)", effective_annual_rate(5.0), 0.050625, atol=1e-15)
    _assert_close("EAR(0%)", effective_annual_rate(0.0), 0.0, atol=0.0)
    _assert_close("EAR(12%)", effective_annual_rate(12.0), 0.1236, atol=1e-15)

    for k in (12, 24, 26, 52):
        _assert_close(f"periodic(5%, {k})", nominal_pct_to_periodic_rate(5.0, k), _canadian_periodic_rate(5.0, k), atol=1e-15)

    # Compounding the periodic rate back over a year recovers the EAR.
    ear = effective_annual_rate(6.5)
    for k in (12, 24, 26, 52):
        _assert_close(f"roundtrip EAR k={k}", (1.0 + periodic_rate(ear, k)) ** k - 1.0, ear, atol=1e-12)

    print("[PASS] rates")


def test_annuity() -> None:
    from cmpc.core.payment import annuity_payment

    mr = _canadian_periodic_rate(5.0, 12)
    _assert_close("annuity 300k/300", annuity_payment(300_000, mr, 300), _pmt(300_000, mr, 300), atol=1e-9, rtol=1e-12)
    _assert_close("annuity 0%", annuity_payment(100_000, 0.0, 120), 100_000 / 120, atol=0.0)

    # Fractional counts: 301 months bi-weekly = 652.1666... payments.
    br = _canadian_periodic_rate(5.0, 26)
    n = 301 * 26 / 12
    _assert_close("annuity fractional n", annuity_payment(300_000, br, n), _pmt(300_000, br, n), atol=1e-9, rtol=1e-12)

    print("[PASS] annuity_payment")


def test_accelerated_and_totals() -> None:
    from cmpc.core.frequency import PaymentFrequency
    from cmpc.core.payment import LoanInput, compute_payment, monthly_payment

    loan = LoanInput(300_000.0, 300, 5.0)
    m = monthly_payment(loan)
    _assert_close("monthly 300k/25y/5%", m, 1744.814955, atol=1e-5)

    abw = compute_payment(loan, PaymentFrequency.ACCELERATED_BI_WEEKLY)
    aw = compute_payment(loan, PaymentFrequency.ACCELERATED_WEEKLY)
    _assert_close("acc bi-weekly x2", abw.periodic_payment * 2, m, atol=1e-9)
    _assert_close("acc weekly x4", aw.periodic_payment * 4, m, atol=1e-9)

    for freq in PaymentFrequency:
        res = compute_payment(loan, freq)
        _assert_close(
            f"total cost {freq.key}",
            res.total_cost_of_mortgage,
            res.periodic_payment * res.total_payments_over_stated_term,
            rtol=1e-9,
        )
        _assert_close(
            f"total interest {freq.key}",
            res.total_interest_paid,
            res.total_cost_of_mortgage - loan.principal,
            rtol=1e-9,
        )

    print("[PASS] accelerated + totals")


def main(argv: list[str] | None = None) -> None:
    test_rates()
    test_annuity()
    test_accelerated_and_totals()
    print("\n[TRUTH TABLES] All tests passed.\n")


if __name__ == "__main__":
    main()
