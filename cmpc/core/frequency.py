"""Payment frequencies and their per-variant constants."""

from __future__ import annotations

from enum import Enum

from .validation import InvalidInput, require_whole_months

MONTHS_PER_YEAR = 12


class PaymentFrequency(Enum):
    """Supported payment frequencies.

    Each member's value is ``(key, label, payments_per_year, monthly_divisor)``.
    ``monthly_divisor`` is set only for accelerated variants: their payment is
    the ordinary monthly payment divided by it.
    """

    MONTHLY = ("monthly", "Monthly", 12, None)
    SEMI_MONTHLY = ("semi-monthly", "Semi-Monthly", 24, None)
    BI_WEEKLY = ("bi-weekly", "Bi-Weekly", 26, None)
    WEEKLY = ("weekly", "Weekly", 52, None)
    ACCELERATED_BI_WEEKLY = ("accelerated-bi-weekly", "Accelerated Bi-Weekly", 26, 2)
    ACCELERATED_WEEKLY = ("accelerated-weekly", "Accelerated Weekly", 52, 4)

    @property
    def key(self) -> str:
        return self.value[0]

    @property
    def label(self) -> str:
        return self.value[1]

    @property
    def payments_per_year(self) -> int:
        return self.value[2]

    @property
    def monthly_divisor(self) -> int | None:
        return self.value[3]

    @property
    def accelerated(self) -> bool:
        return self.monthly_divisor is not None

    @classmethod
    def parse(cls, value) -> "PaymentFrequency":
        """Resolve a member from itself, its key, its label or its name.

        Matching ignores case and treats spaces, underscores and hyphens alike,
        so ``"Accelerated Bi-Weekly"``, ``"accelerated-bi-weekly"`` and
        ``"ACCELERATED_BI_WEEKLY"`` all resolve to the same member.
        """
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            raise InvalidInput(f"Unrecognized payment frequency: {value!r}")
        wanted = _normalize(value)
        for member in cls:
            if wanted in (_normalize(member.key), _normalize(member.label), _normalize(member.name)):
                return member
        choices = ", ".join(m.key for m in cls)
        raise InvalidInput(f"Unrecognized payment frequency: {value!r} (expected one of: {choices})")


def _normalize(s: str) -> str:
    return s.strip().lower().replace("_", "-").replace(" ", "-")


def resolve_frequency(amortization_months: int, frequency) -> tuple[int, float]:
    """Return ``(payments_per_year, total_payments)`` for an amortization length.

    ``total_payments`` is ``months * payments_per_year / 12`` and is fractional
    for bi-weekly and weekly schedules whenever the month count is not a
    multiple of 6 or 3 respectively.  Accelerated variants report the same
    count as their standard counterparts; it only feeds the totals.
    """
    months = require_whole_months(amortization_months)
    freq = PaymentFrequency.parse(frequency)
    ppy = freq.payments_per_year
    if ppy == MONTHS_PER_YEAR:
        return ppy, float(months)
    if ppy == 2 * MONTHS_PER_YEAR:
        return ppy, float(months * 2)
    return ppy, months * ppy / MONTHS_PER_YEAR
