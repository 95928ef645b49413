"""Tests for lenient form payload coercion."""

from __future__ import annotations

from decimal import Decimal

from credit_advisor.forms import parse_bool, parse_decimal, parse_form_data
from credit_advisor.schemas.application import AppInputData


class TestParseFormData:
    def test_full_payload(self):
        data = parse_form_data({
            "age": "35",
            "monthly_income": "$ 4.000.000",
            "credit_score": 750,
            "employment_status": "employed",
            "credit_purpose": "vivienda",
            "requested_amount": 120000000,
            "debt_to_income_ratio": "25,5",
            "is_pep": "true",
            "pep_committee_approval": True,
        })
        assert data.age == 35
        assert data.monthly_income == Decimal("4000000")
        assert data.credit_score == 750
        assert data.requested_amount == Decimal("120000000")
        assert data.debt_to_income_ratio == Decimal("25.5")
        assert data.is_pep is True
        assert data.pep_committee_approval is True

    def test_empty_payload_defaults(self):
        data = parse_form_data({})
        assert data.age == 0
        assert data.monthly_income == Decimal("0")
        assert data.employment_status == ""
        assert data.max_days_delinquency is None
        assert data.is_microenterprise is False

    def test_garbage_numbers(self):
        data = parse_form_data({"age": "treinta", "monthly_income": "mucho", "recent_inquiries": "x"})
        assert data.age == 0
        assert data.monthly_income == Decimal("0")
        assert data.recent_inquiries is None

    def test_zero_optional_is_not_provided(self):
        data = parse_form_data({"max_days_delinquency": 0, "co_borrower_income": "$ 0"})
        assert data.max_days_delinquency is None
        assert data.co_borrower_income is None

    def test_blank_optional_strings(self):
        data = parse_form_data({"economic_activity": "  ", "employment_type": "empleado"})
        assert data.economic_activity is None
        assert data.employment_type == "empleado"

    def test_other_truthy_strings_are_false(self):
        data = parse_form_data({"is_pep": "yes", "is_microenterprise": 1})
        assert data.is_pep is False
        assert data.is_microenterprise is False

    def test_payload_omits_unset_optionals(self):
        payload = parse_form_data({"age": 30, "payment_to_income_ratio": ""}).to_payload()
        assert "payment_to_income_ratio" not in payload
        assert payload["age"] == 30
        assert set(AppInputData.REQUIRED_FIELDS) <= set(payload)


class TestHelpers:
    def test_parse_decimal(self):
        assert parse_decimal("12.5") == Decimal("12.5")
        assert parse_decimal("NaN") is None
        assert parse_decimal(True) is None

    def test_parse_bool(self):
        assert parse_bool(" TRUE ") is True
        assert parse_bool(None) is False
