"""Validation helpers for the mortgage payment calculator.

Two layers live here:

* **Hard checks** – ``require_*`` helpers raise :class:`InvalidInput` when a
  value can never be priced (non-numeric, NaN, non-positive principal or
  amortization, negative rate).  The calculator calls these before doing
  any arithmetic so no partial result is ever produced.

* **Advisory checks** – :func:`get_validation_warnings` mirrors the bounds
  that input forms usually impose (rate 0.1–20 %, amortization up to 30
  years).  Values outside them are still computable, so these checks never
  raise; they accumulate human-readable messages for the caller to show.
"""

from __future__ import annotations

import math
from typing import List

# Bounds typically enforced by the input form; the core prices beyond them.
MIN_ADVISORY_RATE_PCT = 0.1
MAX_ADVISORY_RATE_PCT = 20.0
MAX_ADVISORY_AMORTIZATION_MONTHS = 360


class InvalidInput(ValueError):
    """Raised when loan inputs or the frequency selector cannot be priced."""


def require_finite(value, name: str) -> float:
    """Coerce ``value`` to float, rejecting bools, non-numerics, NaN and infinities."""
    if isinstance(value, bool):
        raise InvalidInput(f"{name} must be numeric, got {value!r}")
    try:
        v = float(value)
    except (TypeError, ValueError):
        raise InvalidInput(f"{name} must be numeric, got {value!r}") from None
    if not math.isfinite(v):
        raise InvalidInput(f"{name} must be a finite number, got {value!r}")
    return v


def require_positive(value, name: str) -> float:
    v = require_finite(value, name)
    if v <= 0.0:
        raise InvalidInput(f"{name} must be greater than 0, got {v:g}")
    return v


def require_non_negative(value, name: str) -> float:
    v = require_finite(value, name)
    if v < 0.0:
        raise InvalidInput(f"{name} must not be negative, got {v:g}")
    return v


def require_whole_months(value, name: str = "amortization_months") -> int:
    """Positive whole number of months; integral floats such as 300.0 are accepted."""
    v = require_positive(value, name)
    if not float(v).is_integer():
        raise InvalidInput(f"{name} must be a whole number of months, got {v:g}")
    return int(v)


def get_validation_warnings(cfg: dict) -> List[str]:
    """Return a list of human-readable warnings for a loan config.

    The config dictionary may contain ``rate`` (nominal percent) and either
    ``amortization_months`` or ``amortization_years`` (plus optional
    ``amortization_extra_months``).  Missing or non-numeric entries are
    skipped; hard validation happens in the calculator.

    Args:
        cfg: Loan parameters.  This helper does not mutate the input.

    Returns:
        A list of warning strings.  The list is empty when no issues
        are detected.
    """
    warnings: List[str] = []

    try:
        rate = float(cfg.get("rate"))
    except (TypeError, ValueError):
        rate = None
    if rate is not None and math.isfinite(rate) and rate >= 0.0:
        if rate < MIN_ADVISORY_RATE_PCT:
            warnings.append(
                f"Interest rate of {rate:.2f}% is below the usual minimum of {MIN_ADVISORY_RATE_PCT:.1f}%."
            )
        elif rate > MAX_ADVISORY_RATE_PCT:
            warnings.append(
                f"Interest rate of {rate:.2f}% exceeds the usual maximum of {MAX_ADVISORY_RATE_PCT:.1f}%."
            )

    months: float | None = None
    try:
        if cfg.get("amortization_months") is not None:
            months = float(cfg["amortization_months"])
        elif cfg.get("amortization_years") is not None:
            months = float(cfg["amortization_years"]) * 12.0 + float(cfg.get("amortization_extra_months") or 0)
    except (TypeError, ValueError):
        months = None
    if months is not None and math.isfinite(months) and months > MAX_ADVISORY_AMORTIZATION_MONTHS:
        warnings.append(
            f"Requested amortization of {months / 12.0:.1f} years exceeds the usual maximum of "
            f"{MAX_ADVISORY_AMORTIZATION_MONTHS // 12} years."
        )

    return warnings
