"""Tests for the vectorized rate / amortization sweeps."""

from __future__ import annotations

import numpy as np
import pytest

from cmpc.core.payment import LoanInput, compute_payment
from cmpc.core.sensitivity import payment_by_amortization, payment_by_rate, rate_grid
from cmpc.core.validation import InvalidInput

LOAN = LoanInput(300_000.0, 300, 5.0)


class TestRateGrid:
    def test_inclusive_stop(self) -> None:
        grid = rate_grid(3.0, 4.0, 0.25)
        assert grid.tolist() == [3.0, 3.25, 3.5, 3.75, 4.0]

    def test_decimal_step_does_not_drift(self) -> None:
        grid = rate_grid(0.0, 1.0, 0.1)
        assert len(grid) == 11
        assert grid[-1] == pytest.approx(1.0)

    def test_single_point(self) -> None:
        assert rate_grid(5.0, 5.0, 1.0).tolist() == [5.0]

    @pytest.mark.parametrize(
        "start, stop, step",
        [(1.0, 2.0, 0.0), (1.0, 2.0, -0.5), (3.0, 2.0, 0.5), (-1.0, 2.0, 0.5), (float("nan"), 2.0, 0.5)],
    )
    def test_rejects_bad_ranges(self, start: float, stop: float, step: float) -> None:
        with pytest.raises(InvalidInput):
            rate_grid(start, stop, step)


class TestPaymentByRate:
    def test_columns(self) -> None:
        df = payment_by_rate(LOAN, "monthly", [4.0, 5.0])
        assert list(df.columns) == ["Rate %", "Payment", "Total Interest", "Total Cost"]

    @pytest.mark.parametrize(
        "freq", ["monthly", "semi-monthly", "bi-weekly", "weekly", "accelerated-bi-weekly", "accelerated-weekly"]
    )
    def test_matches_scalar(self, freq: str) -> None:
        rates = [0.0, 2.5, 5.0, 9.99]
        df = payment_by_rate(LOAN, freq, rates)
        for rate, pmt, interest, total in df.itertuples(index=False):
            ref = compute_payment(LoanInput(LOAN.principal, LOAN.amortization_months, rate), freq)
            assert pmt == pytest.approx(ref.periodic_payment, rel=1e-12)
            assert interest == pytest.approx(ref.total_interest_paid, rel=1e-9, abs=1e-6)
            assert total == pytest.approx(ref.total_cost_of_mortgage, rel=1e-12)

    def test_ignores_loan_rate(self) -> None:
        a = payment_by_rate(LoanInput(300_000, 300, 1.0), "weekly", [6.0])
        b = payment_by_rate(LoanInput(300_000, 300, 9.0), "weekly", [6.0])
        assert a["Payment"].iloc[0] == b["Payment"].iloc[0]

    def test_strictly_increasing(self) -> None:
        df = payment_by_rate(LOAN, "bi-weekly", rate_grid(0.0, 20.0, 0.5))
        assert np.all(np.diff(df["Payment"].to_numpy()) > 0)

    def test_rejects_negative_rate(self) -> None:
        with pytest.raises(InvalidInput):
            payment_by_rate(LOAN, "monthly", [1.0, -1.0])

    def test_rejects_bad_loan(self) -> None:
        with pytest.raises(InvalidInput):
            payment_by_rate(LoanInput(-5, 300, 5.0), "monthly", [5.0])

    def test_rejects_rate_too_large_to_compound(self) -> None:
        with pytest.raises(InvalidInput, match="too large"):
            payment_by_rate(LOAN, "weekly", [5.0, 1e160])

    def test_rejects_overflowing_totals(self) -> None:
        with pytest.raises(InvalidInput, match="too large"):
            payment_by_rate(LoanInput(1e308, 300, 5.0), "monthly", [5.0, 100.0])


class TestPaymentByAmortization:
    def test_matches_scalar(self) -> None:
        months = [60, 121, 300, 360]
        df = payment_by_amortization(LOAN, "accelerated-bi-weekly", months)
        assert df["Amortization Months"].tolist() == months
        for n, pmt in zip(months, df["Payment"]):
            ref = compute_payment(LoanInput(LOAN.principal, n, LOAN.nominal_annual_rate_pct), "accelerated-bi-weekly")
            assert pmt == pytest.approx(ref.periodic_payment, rel=1e-12)

    def test_strictly_decreasing(self) -> None:
        df = payment_by_amortization(LOAN, "semi-monthly", range(12, 361, 12))
        assert np.all(np.diff(df["Payment"].to_numpy()) < 0)

    def test_rejects_fractional_months(self) -> None:
        with pytest.raises(InvalidInput):
            payment_by_amortization(LOAN, "monthly", [120, 120.5])
