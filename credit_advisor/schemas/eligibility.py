"""Pydantic schemas for the recommender, explainer and validator outputs.

Pure data classes: no business logic, no I/O.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from credit_advisor.schemas.application import JsonDecimal


class ProductCandidate(BaseModel):
    """One recommended credit product, created fresh per evaluation."""

    model_config = ConfigDict(frozen=True)

    id: str                            # stable slug, e.g. "credito_hipotecario"
    name: str
    description: str
    max_amount: JsonDecimal            # COP, already capped
    interest_rate: JsonDecimal         # % per month, risk-adjusted
    term_months: int = Field(ge=0)     # 0 = revolving
    conditions: list[str] = Field(default_factory=list)
    eligibility: int = Field(ge=0, le=100)

    @property
    def is_revolving(self) -> bool:
        return self.term_months == 0


class FailureExplanation(BaseModel):
    """Human message + remediation for one failure code."""

    model_config = ConfigDict(frozen=True)

    message: str
    remediation: str


class ExplainedFailure(FailureExplanation):
    """FailureExplanation tagged with the code it explains."""

    code: str


class FieldValidation(BaseModel):
    """Result of validating a single form field."""

    model_config = ConfigDict(frozen=True)

    is_valid: bool
    message: str = ""


class ApplicationValidation(BaseModel):
    """Result of the pre-submission check of a whole applicant record."""

    is_valid: bool
    errors: list[str] = Field(default_factory=list)


class AdvisoryReport(BaseModel):
    """Combined render model: ranked products plus explained failures."""

    products: list[ProductCandidate] = Field(default_factory=list)
    failures: list[ExplainedFailure] = Field(default_factory=list)
    risk_profile: str = ""

    # Present when the report is built from an engine evaluation
    session_id: str | None = None
    final_decision: str | None = None
    confidence_score: Decimal | None = None
    explanation: str | None = None
    evaluated_at: datetime | None = None

    @property
    def has_products(self) -> bool:
        return bool(self.products)

    @property
    def best_product(self) -> ProductCandidate | None:
        return self.products[0] if self.products else None
