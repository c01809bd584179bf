"""Tests for integer money helpers."""

from decimal import Decimal

import pytest

from threebuckets_core.money import (
    apply_bps,
    cents_from_dollars,
    compound,
    dollars_from_cents,
    format_bps,
    format_cents,
)


class TestCompound:
    def test_annual(self):
        assert compound(100_000, 500, periods=2) == 110_250

    def test_monthly_period(self):
        """A 12% annual rate is 1% a month."""
        assert compound(100_000, 1200, periods_per_year=12) == 101_000

    def test_floors(self):
        assert compound(999, 100) == 1008

    def test_no_periods(self):
        assert compound(123_456, 700, periods=0) == 123_456

    def test_zero_rate(self):
        assert compound(123_456, 0, periods=30) == 123_456


class TestApplyBps:
    @pytest.mark.parametrize(
        "amount,bps,expected",
        [(10_000, 5000, 5_000), (333, 5000, 166), (185_000, 10_000, 185_000), (185_000, 0, 0)],
    )
    def test_apply_bps(self, amount, bps, expected):
        assert apply_bps(amount, bps) == expected


class TestConversions:
    def test_cents_from_dollars(self):
        assert cents_from_dollars("1850.00") == 185_000
        assert cents_from_dollars(Decimal("0.005")) == 1
        assert cents_from_dollars(2100) == 210_000

    def test_dollars_from_cents(self):
        assert dollars_from_cents(210_050) == Decimal("2100.5")

    @pytest.mark.parametrize(
        "cents,expected",
        [(0, "$0"), (445_000, "$4,450"), (5_000_000, "$50,000"), (123_450, "$1,235"), (-123_450, "-$1,235")],
    )
    def test_format_cents(self, cents, expected):
        assert format_cents(cents) == expected

    def test_format_bps(self):
        assert format_bps(600) == "6.00%"
        assert format_bps(325) == "3.25%"
