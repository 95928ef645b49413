"""Form field validation against the fixed business bounds.

``validate_field`` is the per-keystroke check shown next to each input;
``validate_application`` is the pre-submission check of a whole record
before it is sent to the inference engine. Neither raises.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from decimal import Decimal
from types import MappingProxyType

from credit_advisor.eligibility.products import SMMLV
from credit_advisor.formatters import format_currency
from credit_advisor.forms import parse_decimal
from credit_advisor.schemas.application import AppInputData
from credit_advisor.schemas.eligibility import ApplicationValidation, FieldValidation


@dataclass(frozen=True)
class FieldBound:
    """Inclusive bounds for one field. ``None`` means unbounded on that side."""

    minimum: Decimal | None
    maximum: Decimal | None
    below_message: str
    above_message: str

    def check(self, value: Decimal) -> FieldValidation:
        if self.minimum is not None and value < self.minimum:
            return FieldValidation(is_valid=False, message=self.below_message)
        if self.maximum is not None and value > self.maximum:
            return FieldValidation(is_valid=False, message=self.above_message)
        return FieldValidation(is_valid=True)


def _at_most(maximum: int, message: str) -> FieldBound:
    return FieldBound(minimum=None, maximum=Decimal(maximum), below_message="", above_message=message)


_AGE_MESSAGE = "La edad debe estar entre 18 y 75 años"

FIELD_BOUNDS: Mapping[str, FieldBound] = MappingProxyType({
    "age": FieldBound(Decimal(18), Decimal(75), _AGE_MESSAGE, _AGE_MESSAGE),
    "monthly_income": FieldBound(
        minimum=SMMLV,
        maximum=None,
        below_message=f"Los ingresos deben ser al menos {format_currency(SMMLV)} (1 SMMLV)",
        above_message="",
    ),
    "credit_score": FieldBound(
        Decimal(300),
        Decimal(1000),
        "El score crediticio debe ser al menos 300 puntos",
        "El score crediticio no puede ser mayor a 1000 puntos",
    ),
    "debt_to_income_ratio": _at_most(50, "El endeudamiento no puede ser mayor al 50% de los ingresos"),
    "max_days_delinquency": _at_most(90, "Los días de mora no pueden ser mayores a 90 días"),
    "recent_inquiries": _at_most(3, "No puede tener más de 3 consultas en los últimos 30 días"),
    "down_payment_percentage": _at_most(100, "El porcentaje de cuota inicial no puede ser mayor al 100%"),
    "payment_to_income_ratio": _at_most(100, "La relación cuota/ingreso no puede ser mayor al 100%"),
    "historical_compliance": _at_most(100, "El cumplimiento histórico no puede ser mayor al 100%"),
})


def validate_field(field: str, value: Decimal | float | int | str | None) -> FieldValidation:
    """Check one field value against its bound.

    Fields without a bound are always valid, as is a blank value: ``None``,
    an empty or non-numeric string, or NaN (a cleared numeric input).
    """
    bound = FIELD_BOUNDS.get(field)
    number = parse_decimal(value)
    if bound is None or number is None:
        return FieldValidation(is_valid=True)
    return bound.check(number)


def validate_fields(input_data: AppInputData) -> dict[str, str]:
    """Run ``validate_field`` over every bounded field; return failing field -> message."""
    errors: dict[str, str] = {}
    for field in FIELD_BOUNDS:
        result = validate_field(field, getattr(input_data, field))
        if not result.is_valid:
            errors[field] = result.message
    return errors


# ── Pre-submission structural check ─────────────────────────────────

_PERCENT_FIELDS: Mapping[str, str] = MappingProxyType({
    "debt_to_income_ratio": "La relación deuda/ingreso debe estar entre 0% y 100%",
    "payment_to_income_ratio": "La relación cuota/ingreso debe estar entre 0% y 100%",
    "down_payment_percentage": "El porcentaje de cuota inicial debe estar entre 0% y 100%",
    "historical_compliance": "El cumplimiento histórico debe estar entre 0% y 100%",
})

_NON_NEGATIVE_FIELDS: Mapping[str, str] = MappingProxyType({
    "max_days_delinquency": "Los días de mora no pueden ser negativos",
    "employment_tenure_months": "La antigüedad laboral no puede ser negativa",
    "co_borrower_income": "Los ingresos del codeudor no pueden ser negativos",
    "recent_inquiries": "El número de consultas recientes no puede ser negativo",
    "customer_tenure_months": "La antigüedad como cliente no puede ser negativa",
    "pension_amount": "El monto de la pensión no puede ser negativo",
})


def validate_application(input_data: AppInputData) -> ApplicationValidation:
    """Structural check run before an evaluation request is sent.

    Only catches missing or impossible values; business bounds (minimum age,
    minimum income, ...) are left to ``validate_field`` and the engine.
    """
    errors: list[str] = []

    if not 0 < input_data.age <= 120:
        errors.append("La edad debe estar entre 1 y 120 años")
    if input_data.monthly_income <= 0:
        errors.append("Los ingresos mensuales deben ser mayores a 0")
    if not 0 < input_data.credit_score <= 1000:
        errors.append("El score crediticio debe estar entre 1 y 1000")
    if not input_data.employment_status.strip():
        errors.append("El estado laboral es requerido")
    if not input_data.credit_purpose.strip():
        errors.append("La finalidad del crédito es requerida")
    if input_data.requested_amount <= 0:
        errors.append("El monto solicitado debe ser mayor a 0")

    for field, message in _PERCENT_FIELDS.items():
        value = getattr(input_data, field)
        if value is not None and not 0 <= value <= 100:
            errors.append(message)

    for field, message in _NON_NEGATIVE_FIELDS.items():
        value = getattr(input_data, field)
        if value is not None and value < 0:
            errors.append(message)

    return ApplicationValidation(is_valid=not errors, errors=errors)
