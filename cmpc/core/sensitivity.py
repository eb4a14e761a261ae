"""Payment sweeps across rates and amortization lengths.

Vectorized versions of :func:`cmpc.core.payment.compute_payment` for one
loan and one frequency, varying a single input.  Every row equals what the
scalar calculator returns for the same inputs.
"""

from __future__ import annotations

from typing import Iterable

import numpy as np
import pandas as pd

from .frequency import MONTHS_PER_YEAR, PaymentFrequency
from .payment import LoanInput
from .rates import nominal_pct_to_periodic_rate
from .validation import InvalidInput, require_finite, require_non_negative, require_whole_months


def _annuity_vector(principal: float, rate: np.ndarray, n: np.ndarray) -> np.ndarray:
    rate = np.asarray(rate, dtype=np.float64)
    n = np.asarray(n, dtype=np.float64)
    zero = rate == 0.0
    with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
        amort = (principal * rate) / (1.0 - np.power(1.0 + rate, -n))
    return np.where(zero, principal / n, amort)


def _payments(principal: float, rates_pct: np.ndarray, months: np.ndarray, freq: PaymentFrequency):
    """Return (payment, total_payments) arrays for broadcast rates/months.

    Periodic rates come from :mod:`cmpc.core.rates` one rate at a time; only
    the annuity step is vectorized.
    """
    n_total = months * freq.payments_per_year / MONTHS_PER_YEAR
    k = MONTHS_PER_YEAR if freq.accelerated else freq.payments_per_year
    pr = np.asarray([nominal_pct_to_periodic_rate(r, k) for r in rates_pct], dtype=np.float64)
    if freq.accelerated:
        return _annuity_vector(principal, pr, months) / freq.monthly_divisor, n_total
    return _annuity_vector(principal, pr, n_total), n_total


def _frame(first_col: str, xs: np.ndarray, payment: np.ndarray, n_total: np.ndarray, principal: float) -> pd.DataFrame:
    with np.errstate(over="ignore", invalid="ignore"):
        total_cost = payment * n_total
    if not np.isfinite(total_cost).all():
        raise InvalidInput("loan is too large to price: total cost is not a finite amount")
    return pd.DataFrame(
        {
            first_col: xs,
            "Payment": payment,
            "Total Interest": total_cost - principal,
            "Total Cost": total_cost,
        }
    )


def payment_by_rate(loan: LoanInput, frequency, rates_pct: Iterable[float]) -> pd.DataFrame:
    """Payment and stated-term totals for each nominal rate in ``rates_pct``.

    ``loan.nominal_annual_rate_pct`` is ignored; every other field is used.
    """
    base = LoanInput(loan.principal, loan.amortization_months, 0.0).validated()
    freq = PaymentFrequency.parse(frequency)
    rates = np.asarray([require_finite(r, "rate") for r in rates_pct], dtype=np.float64)
    if (rates < 0.0).any():
        raise InvalidInput("rates must not be negative")
    months = np.full(rates.shape, float(base.amortization_months))
    payment, n_total = _payments(base.principal, rates, months, freq)
    return _frame("Rate %", rates, payment, n_total, base.principal)


def payment_by_amortization(loan: LoanInput, frequency, months: Iterable[int]) -> pd.DataFrame:
    """Payment and stated-term totals for each amortization length (months).

    ``loan.amortization_months`` is ignored; every other field is used.
    """
    base = LoanInput(loan.principal, 1, loan.nominal_annual_rate_pct).validated()
    freq = PaymentFrequency.parse(frequency)
    ms = np.asarray([require_whole_months(m) for m in months], dtype=np.float64)
    rates = np.full(ms.shape, base.nominal_annual_rate_pct)
    payment, n_total = _payments(base.principal, rates, ms, freq)
    return _frame("Amortization Months", ms.astype(np.int64), payment, n_total, base.principal)


def rate_grid(start: float, stop: float, step: float) -> np.ndarray:
    """Evenly spaced rates from ``start`` to ``stop`` inclusive."""
    lo = require_non_negative(start, "start")
    hi = require_non_negative(stop, "stop")
    st = require_finite(step, "step")
    if st <= 0.0:
        raise InvalidInput(f"step must be greater than 0, got {st:g}")
    if hi < lo:
        raise InvalidInput(f"stop ({hi:g}) must not be below start ({lo:g})")
    count = int(np.floor((hi - lo) / st + 1e-9)) + 1
    return np.round(lo + st * np.arange(count), 10)
