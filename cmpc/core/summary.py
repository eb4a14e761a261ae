"""Plain-text and JSON summaries of a payment calculation."""

from __future__ import annotations

from typing import Any

from .payment import CalculationResult, LoanInput


def _money(x: float) -> str:
    """en-CA currency with two decimals, e.g. ``$1,744.81``; negatives as ``-$5.00``."""
    v = float(x)
    sign = "-" if v < 0 else ""
    return f"{sign}${abs(v):,.2f}"


def _count(x: float) -> str:
    """Payment counts: whole numbers without decimals, fractional ones to 2 places."""
    v = float(x)
    if v.is_integer():
        return f"{int(v):,}"
    return f"{v:,.2f}"


def _amortization_label(months: int) -> str:
    years, rem = divmod(int(months), 12)
    if rem == 0:
        return f"{years} Years"
    if years == 0:
        return f"{rem} Months"
    return f"{years} Years {rem} Months"


def summary_dict(loan: LoanInput, result: CalculationResult) -> dict[str, Any]:
    """JSON-able summary rounded to cents."""
    return {
        "principal": round(float(loan.principal), 2),
        "amortization_months": int(loan.amortization_months),
        "rate_pct": float(loan.nominal_annual_rate_pct),
        "frequency": result.frequency.key,
        "payments_per_year": result.payments_per_year,
        "payment": round(result.periodic_payment, 2),
        "total_payments": round(result.total_payments_over_stated_term, 4),
        "total_interest": round(result.total_interest_paid, 2),
        "total_cost": round(result.total_cost_of_mortgage, 2),
        "totals_use_stated_term": result.totals_use_stated_term,
        "note": result.note,
    }


def format_summary(loan: LoanInput, result: CalculationResult) -> str:
    label = result.frequency.label
    lines = [
        "Mortgage Summary",
        f"Principal Borrowed: {_money(loan.principal)}",
        f"Selected Amortization: {_amortization_label(loan.amortization_months)}",
        f"Interest Rate: {float(loan.nominal_annual_rate_pct):.2f}% (Semi-Annual Compounding)",
        f"Payment Frequency: {label}",
        "",
        f"Estimated {label} Payment: {_money(result.periodic_payment)}",
        f"Total Number of Payments (over stated amortization): {_count(result.total_payments_over_stated_term)}",
        f"Total Interest Paid (over stated amortization): {_money(result.total_interest_paid)}",
        f"Total Cost of Mortgage (Principal + Interest): {_money(result.total_cost_of_mortgage)}",
    ]
    if result.note:
        lines += ["", f"Note: {result.note}"]
    return "\n".join(lines)
