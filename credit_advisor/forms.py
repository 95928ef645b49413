"""Lenient coercion of the raw multi-step form payload into ``AppInputData``.

The form sends whatever the user has typed so far: numbers, numeric strings,
currency-formatted strings, booleans or the string "true". Nothing here
raises; malformed numbers become 0 (required) or None (optional).
"""

from __future__ import annotations

from collections.abc import Mapping
from decimal import Decimal, InvalidOperation
from typing import Any

from credit_advisor.formatters import parse_currency
from credit_advisor.schemas.application import AppInputData

CURRENCY_FIELDS = frozenset({
    "monthly_income",
    "requested_amount",
    "co_borrower_income",
    "pension_amount",
})

REQUIRED_INT_FIELDS = ("age", "credit_score")

OPTIONAL_INT_FIELDS = (
    "max_days_delinquency",
    "recent_inquiries",
    "customer_tenure_months",
    "employment_tenure_months",
)

OPTIONAL_DECIMAL_FIELDS = (
    "debt_to_income_ratio",
    "payment_to_income_ratio",
    "down_payment_percentage",
    "historical_compliance",
    "co_borrower_income",
    "pension_amount",
)

OPTIONAL_STR_FIELDS = ("employment_type", "economic_activity")

BOOL_FIELDS = (
    "is_convention_employee",
    "payroll_discount_authorized",
    "is_microenterprise",
    "is_legal_pension",
    "has_co_borrower",
    "is_pep",
    "pep_committee_approval",
)


def parse_decimal(value: Any) -> Decimal | None:
    """Parse a plain number ("12.5", "12,5", 12.5). None when unparseable or NaN/infinite."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return Decimal(value)
    if isinstance(value, Decimal):
        return value if value.is_finite() else None
    text = str(value).strip().replace(",", ".")
    if not text:
        return None
    try:
        parsed = Decimal(text)
    except InvalidOperation:
        return None
    return parsed if parsed.is_finite() else None


def parse_bool(value: Any) -> bool:
    return value is True or (isinstance(value, str) and value.strip().lower() == "true")


def _number(field: str, value: Any) -> Decimal | None:
    if field in CURRENCY_FIELDS and isinstance(value, str):
        return parse_currency(value)
    return parse_decimal(value)


def _optional(value: Decimal | None) -> Decimal | None:
    # Blank and zero are both "not provided"
    if value is None or value == 0:
        return None
    return value


def parse_form_data(raw: Mapping[str, Any]) -> AppInputData:
    """Build an ``AppInputData`` from a raw form payload. Never raises."""
    values: dict[str, Any] = {}

    for field in REQUIRED_INT_FIELDS:
        number = parse_decimal(raw.get(field))
        values[field] = int(number) if number is not None else 0

    for field in ("monthly_income", "requested_amount"):
        values[field] = _number(field, raw.get(field)) or Decimal("0")

    for field in ("employment_status", "credit_purpose"):
        values[field] = str(raw.get(field) or "").strip()

    for field in OPTIONAL_INT_FIELDS:
        number = _optional(parse_decimal(raw.get(field)))
        values[field] = int(number) if number is not None else None

    for field in OPTIONAL_DECIMAL_FIELDS:
        values[field] = _optional(_number(field, raw.get(field)))

    for field in OPTIONAL_STR_FIELDS:
        text = str(raw.get(field) or "").strip()
        values[field] = text or None

    for field in BOOL_FIELDS:
        values[field] = parse_bool(raw.get(field))

    return AppInputData(**values)
