"""Mortgage payment calculation under Canadian conventions.

Pipeline for one calculation:

1. Nominal rate -> effective annual rate (semi-annual compounding).
2. Frequency -> (payments per year, total payments over the stated term).
3. Payment:
   - standard frequencies solve the level-payment annuity at their own
     periodic rate;
   - accelerated frequencies take the ordinary monthly payment and divide it
     by 2 (bi-weekly) or 4 (weekly).
4. Totals: total cost = payment x total payments; interest = cost - principal.

Accelerated totals are reported over the *stated* amortization.  The real
payoff is shorter, so those totals overstate the number of payments and
understate the interest saved; results carry ``totals_use_stated_term`` and a
note saying so.
"""

from __future__ import annotations

import math
import warnings
from dataclasses import asdict, dataclass
from typing import Any, Iterable

import pandas as pd

from .frequency import MONTHS_PER_YEAR, PaymentFrequency, resolve_frequency
from .rates import effective_annual_rate, periodic_rate
from .validation import (
    InvalidInput,
    require_non_negative,
    require_positive,
    require_whole_months,
)

ACCELERATED_NOTES = {
    PaymentFrequency.ACCELERATED_BI_WEEKLY: (
        "Accelerated bi-weekly payments will pay off your mortgage faster than a standard bi-weekly "
        "schedule and save you interest over the long run, typically equivalent to one extra monthly "
        "payment per year."
    ),
    PaymentFrequency.ACCELERATED_WEEKLY: (
        "Accelerated weekly payments will pay off your mortgage faster than a standard weekly "
        "schedule and save you interest over the long run, typically equivalent to one extra monthly "
        "payment per year."
    ),
}


@dataclass(frozen=True)
class LoanInput:
    """Loan parameters for one calculation."""

    principal: float
    amortization_months: int
    nominal_annual_rate_pct: float

    @classmethod
    def from_years(cls, principal: float, years: float, rate_pct: float, months: int = 0) -> "LoanInput":
        """Build a loan from an amortization given in years (plus optional months).

        Fractional totals are rounded to the nearest whole month with a warning.
        """
        y = require_non_negative(years, "amortization_years")
        extra = require_non_negative(months, "amortization_extra_months")
        total = y * MONTHS_PER_YEAR + extra
        if not math.isfinite(total):
            raise InvalidInput(f"amortization of {y:g} years is too large to count in months")
        rounded = int(round(total))
        if not math.isclose(total, rounded, abs_tol=1e-9):
            warnings.warn(f"Amortization of {total:g} months is not whole. Rounding to {rounded} months.")
        return cls(principal=principal, amortization_months=rounded, nominal_annual_rate_pct=rate_pct)

    def validated(self) -> "LoanInput":
        """Return a normalized copy, raising :class:`InvalidInput` on bad fields."""
        return LoanInput(
            principal=require_positive(self.principal, "principal"),
            amortization_months=require_whole_months(self.amortization_months),
            nominal_annual_rate_pct=require_non_negative(self.nominal_annual_rate_pct, "nominal_annual_rate_pct"),
        )


@dataclass(frozen=True)
class CalculationResult:
    """Payment and totals for one loan at one frequency."""

    frequency: PaymentFrequency
    periodic_payment: float
    payments_per_year: int
    total_payments_over_stated_term: float
    total_interest_paid: float
    total_cost_of_mortgage: float
    effective_annual_rate: float
    periodic_rate: float
    totals_use_stated_term: bool = False
    note: str | None = None

    def to_dict(self) -> dict[str, Any]:
        out = asdict(self)
        out["frequency"] = self.frequency.key
        return out


# Mortgage Payment


def annuity_payment(principal: float, rate: float, n_payments: float) -> float:
    """Level payment that amortizes ``principal`` over ``n_payments`` periods.

    Args:
        principal: Loan principal.
        rate: Effective rate per period (decimal).
        n_payments: Number of periods; may be fractional.

    Returns:
        Periodic payment amount.
    """
    p = float(principal)
    r = float(rate)
    n = float(n_payments)
    if n <= 0.0:
        raise InvalidInput(f"number of payments must be greater than 0, got {n:g}")
    if r == 0.0:
        return p / n
    return (p * r) / (1.0 - (1.0 + r) ** (-n))


def monthly_payment(loan: LoanInput) -> float:
    """Ordinary monthly payment at the true monthly periodic rate."""
    loan = loan.validated()
    mr = periodic_rate(effective_annual_rate(loan.nominal_annual_rate_pct), MONTHS_PER_YEAR)
    return annuity_payment(loan.principal, mr, loan.amortization_months)


def accelerated_payment(loan: LoanInput, frequency) -> float:
    """Accelerated installment: the monthly payment split into 2 or 4 pieces.

    Raises:
        InvalidInput: when ``frequency`` is not an accelerated variant.
    """
    freq = PaymentFrequency.parse(frequency)
    if not freq.accelerated:
        raise InvalidInput(f"{freq.label} is not an accelerated payment frequency")
    return monthly_payment(loan) / freq.monthly_divisor


def compute_payment(loan: LoanInput, frequency) -> CalculationResult:
    """Compute the periodic payment and stated-term totals.

    Args:
        loan: Principal, amortization (months) and nominal annual rate (percent).
        frequency: A :class:`PaymentFrequency` or any selector accepted by
            :meth:`PaymentFrequency.parse`.

    Returns:
        CalculationResult

    Raises:
        InvalidInput: principal <= 0, amortization <= 0 (or not whole months),
            rate < 0, non-finite values, an unrecognized frequency, or inputs
            so large that the totals overflow a float.
    """
    loan = loan.validated()
    freq = PaymentFrequency.parse(frequency)

    ear = effective_annual_rate(loan.nominal_annual_rate_pct)
    ppy, n_total = resolve_frequency(loan.amortization_months, freq)

    if freq.accelerated:
        rate = periodic_rate(ear, MONTHS_PER_YEAR)
        payment = annuity_payment(loan.principal, rate, loan.amortization_months) / freq.monthly_divisor
    else:
        rate = periodic_rate(ear, ppy)
        payment = annuity_payment(loan.principal, rate, n_total)

    total_cost = payment * n_total
    if not math.isfinite(total_cost):
        raise InvalidInput("loan is too large to price: total cost is not a finite amount")
    return CalculationResult(
        frequency=freq,
        periodic_payment=payment,
        payments_per_year=ppy,
        total_payments_over_stated_term=n_total,
        total_interest_paid=total_cost - loan.principal,
        total_cost_of_mortgage=total_cost,
        effective_annual_rate=ear,
        periodic_rate=rate,
        totals_use_stated_term=freq.accelerated,
        note=ACCELERATED_NOTES.get(freq),
    )


def compare_frequencies(loan: LoanInput, frequencies: Iterable | None = None) -> pd.DataFrame:
    """Side-by-side payment and totals for several frequencies (default: all)."""
    freqs = [PaymentFrequency.parse(f) for f in frequencies] if frequencies is not None else list(PaymentFrequency)
    rows = []
    for freq in freqs:
        res = compute_payment(loan, freq)
        rows.append(
            {
                "Frequency": freq.label,
                "Payments/Year": res.payments_per_year,
                "Payment": res.periodic_payment,
                "Total Payments": res.total_payments_over_stated_term,
                "Total Interest": res.total_interest_paid,
                "Total Cost": res.total_cost_of_mortgage,
                "Accelerated": freq.accelerated,
            }
        )
    return pd.DataFrame(rows)
