"""Applicant input record: the completed multi-step form.

Field names follow the inference engine's wire contract (snake_case), so the
same model is used to feed the recommender and to build the engine request.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Annotated, Any, ClassVar

from pydantic import BaseModel, ConfigDict, PlainSerializer


def _decimal_to_json_number(value: Decimal) -> int | float:
    """Serialize integral amounts as int, the rest as float (never as a string)."""
    if value == value.to_integral_value():
        return int(value)
    return float(value)


# Decimal in Python, plain JSON number on the wire.
JsonDecimal = Annotated[
    Decimal,
    PlainSerializer(_decimal_to_json_number, return_type=int | float, when_used="json"),
]


class AppInputData(BaseModel):
    """Applicant record, immutable for the duration of an evaluation.

    Ratios and percentages are expressed on a 0–100 scale. Optional fields are
    ``None`` when the applicant left them blank; the recommender reads a missing
    number as 0 and a missing flag as False.
    """

    model_config = ConfigDict(frozen=True)

    REQUIRED_FIELDS: ClassVar[tuple[str, ...]] = (
        "age",
        "monthly_income",
        "credit_score",
        "employment_status",
        "credit_purpose",
        "requested_amount",
    )

    # Required by the engine
    age: int = 0
    monthly_income: JsonDecimal = Decimal("0")
    credit_score: int = 0
    employment_status: str = ""
    credit_purpose: str = ""
    requested_amount: JsonDecimal = Decimal("0")

    # Credit profile
    debt_to_income_ratio: JsonDecimal | None = None
    max_days_delinquency: int | None = None
    payment_to_income_ratio: JsonDecimal | None = None
    down_payment_percentage: JsonDecimal | None = None
    recent_inquiries: int | None = None
    historical_compliance: JsonDecimal | None = None
    customer_tenure_months: int | None = None

    # Employment
    employment_type: str | None = None
    employment_tenure_months: int | None = None
    is_convention_employee: bool | None = None
    payroll_discount_authorized: bool | None = None
    is_microenterprise: bool | None = None
    pension_amount: JsonDecimal | None = None
    is_legal_pension: bool | None = None

    # Co-borrower
    has_co_borrower: bool | None = None
    co_borrower_income: JsonDecimal | None = None

    # SARLAFT / PEP
    economic_activity: str | None = None
    is_pep: bool | None = None
    pep_committee_approval: bool | None = None

    def to_payload(self) -> dict[str, Any]:
        """Build the ``input_data`` JSON object for the engine.

        Required fields are always present; unset optional fields are omitted
        entirely rather than sent as null.
        """
        return self.model_dump(mode="json", exclude_none=True)

    def amount(self, field: str) -> Decimal:
        """Numeric field value with ``None`` read as 0."""
        value = getattr(self, field)
        if value is None:
            return Decimal("0")
        return Decimal(value)

    def flag(self, field: str) -> bool:
        """Boolean field value with ``None`` read as False."""
        return bool(getattr(self, field))
