"""Canadian mortgage compounding utilities.

Fixed-rate Canadian mortgages quote a nominal annual rate compounded
semi-annually, not in advance. Every payment frequency derives its periodic
rate from the resulting effective annual rate (EAR).
"""

from __future__ import annotations

from .validation import InvalidInput

# Compounding periods per year for the quoted nominal rate.
SEMI_ANNUAL_PERIODS = 2


def effective_annual_rate(nominal_rate_pct: float) -> float:
    """Convert an annual nominal rate in percent to the effective annual rate (decimal).

    Nominal compounded semi-annually: (1 + r/2)^2 - 1

    Raises:
        InvalidInput: when the rate is too large for the EAR to be a finite float.
    """
    r = float(nominal_rate_pct) / 100.0
    semi_annual = r / SEMI_ANNUAL_PERIODS
    try:
        return (1.0 + semi_annual) ** SEMI_ANNUAL_PERIODS - 1.0
    except OverflowError:
        raise InvalidInput(f"nominal rate of {nominal_rate_pct:g}% is too large to compound") from None


def periodic_rate(effective_rate: float, payments_per_year: int) -> float:
    """Effective rate per payment period for ``payments_per_year`` periods.

    Args:
        effective_rate: Effective annual rate (decimal).
        payments_per_year: Payment periods per year (12, 24, 26, 52).

    Returns:
        (1 + EAR)^(1/k) - 1
    """
    k = int(payments_per_year)
    if k <= 0:
        raise ValueError(f"payments_per_year must be positive, got {payments_per_year!r}")
    return (1.0 + float(effective_rate)) ** (1.0 / k) - 1.0


def nominal_pct_to_periodic_rate(nominal_rate_pct: float, payments_per_year: int) -> float:
    """Nominal percent (semi-annual compounding) straight to a periodic rate."""
    return periodic_rate(effective_annual_rate(nominal_rate_pct), payments_per_year)
