"""Tests for Colombian locale formatting and parsing."""

from __future__ import annotations

from datetime import UTC, datetime
from decimal import Decimal

import pytest

from credit_advisor.formatters import (
    format_confidence,
    format_currency,
    format_datetime,
    format_percentage,
    format_rate,
    format_term,
    parse_currency,
)

NBSP = "\u00a0"


class TestFormatCurrency:
    def test_integer(self):
        assert format_currency(4000000) == f"${NBSP}4.000.000"

    def test_small(self):
        assert format_currency(950) == f"${NBSP}950"

    def test_zero(self):
        assert format_currency(0) == f"${NBSP}0"

    def test_rounds_half_up(self):
        assert format_currency(Decimal("1234.5")) == f"${NBSP}1.235"

    def test_negative(self):
        assert format_currency(-1500) == f"-${NBSP}1.500"

    def test_none(self):
        assert format_currency(None) == ""

    def test_garbage(self):
        assert format_currency("abc") == ""

    def test_beyond_default_precision(self):
        assert format_currency(10**28) == f"${NBSP}10" + ".000" * 9
        assert format_currency(1e30).endswith(".000.000")


class TestParseCurrency:
    def test_formatted(self):
        assert parse_currency(f"${NBSP}4.000.000") == Decimal("4000000")

    def test_typed_with_separators(self):
        assert parse_currency("1,300,000") == Decimal("1300000")

    @pytest.mark.parametrize("value", ["", "   ", "abc", None])
    def test_unparseable_is_zero(self, value):
        assert parse_currency(value) == Decimal("0")

    def test_number_passthrough(self):
        assert parse_currency(2500) == Decimal("2500")

    @pytest.mark.parametrize("n", [0, 1, 999, 1000, 1_300_000, 200_000_000, 10**15, 10**28, 10**40 + 7])
    def test_round_trip_integers(self, n):
        assert parse_currency(format_currency(n)) == n


class TestFormatPercentage:
    def test_rate(self):
        assert format_percentage(Decimal("1.2")) == "1,2%"

    def test_decimals(self):
        assert format_percentage(50, decimals=0) == "50%"

    def test_none(self):
        assert format_percentage(None) == "-"

    def test_monthly_rate(self):
        assert format_rate(Decimal("2.8")) == "2,8% M.V."


class TestFormatTerm:
    def test_revolving(self):
        assert format_term(0) == "Rotativo"

    def test_months(self):
        assert format_term(240) == "240 meses"

    def test_single_month(self):
        assert format_term(1) == "1 mes"


class TestFormatConfidence:
    def test_rounded(self):
        assert format_confidence(Decimal("87.456")) == "87,5%"

    def test_none(self):
        assert format_confidence(None) == "0,0%"


class TestFormatDatetime:
    def test_datetime(self):
        dt = datetime(2026, 2, 16, 14, 30, tzinfo=UTC)
        assert format_datetime(dt) == "16/02/2026 14:30"

    def test_none(self):
        assert format_datetime(None) == "-"
