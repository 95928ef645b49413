"""Pydantic schemas for the remote inference engine API.

Mirrors the JSON contract of ``/inference-engine/*``. Unknown keys sent by the
engine are ignored so new server fields do not break the client.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from credit_advisor.schemas.application import AppInputData


class _EngineModel(BaseModel):
    model_config = ConfigDict(extra="ignore")


class EvaluationRequest(_EngineModel):
    """Body of POST /inference-engine/evaluate."""

    input_data: AppInputData
    session_id: str | None = None
    user_id: int | None = None

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"input_data": self.input_data.to_payload()}
        if self.session_id is not None:
            payload["session_id"] = self.session_id
        if self.user_id is not None:
            payload["user_id"] = self.user_id
        return payload


class ProductRecommendation(_EngineModel):
    """Product suggested by the engine itself (shown as-is, not re-ranked)."""

    name: str
    description: str = ""
    max_amount: Decimal = Decimal("0")
    max_term_months: int = 0
    interest_rate: Decimal = Decimal("0")
    special_conditions: list[str] = Field(default_factory=list)
    confidence: Decimal = Decimal("0")


class RuleExecution(_EngineModel):
    """Trace of one rule fired by the engine."""

    rule_code: str
    rule_name: str = ""
    category: str = ""
    result: str = ""
    explanation: str = ""
    execution_time_ms: float = 0.0


class EvaluationResult(_EngineModel):
    """Response of POST /inference-engine/evaluate."""

    session_id: str
    final_decision: str
    risk_profile: str = ""
    confidence_score: Decimal = Decimal("0")
    explanation: str = ""
    facts_detected: list[str] = Field(default_factory=list)
    failures_detected: list[str] = Field(default_factory=list)
    recommended_products: list[ProductRecommendation] = Field(default_factory=list)
    rule_executions: list[RuleExecution] = Field(default_factory=list)
    total_execution_time_ms: float = 0.0
    evaluated_at: datetime | None = None


class EvaluationUser(_EngineModel):
    id: int
    username: str
    email: str = ""


class EvaluationSession(_EngineModel):
    """Stored evaluation, as listed in the administrative history view."""

    id: int
    session_id: str
    user_id: int | None = None
    user: EvaluationUser | None = None
    input_data: dict[str, Any] | None = None
    facts_detected: list[str] | None = None
    evaluation_result: dict[str, Any] | None = None
    final_decision: str = ""
    risk_profile: str = ""
    recommended_products: Any = None
    explanation: str | None = None
    confidence_score: Decimal = Decimal("0")
    status: str = ""
    created_at: datetime | None = None
    updated_at: datetime | None = None


class EvaluationsPage(_EngineModel):
    """Response of GET /inference-engine/evaluations."""

    evaluations: list[EvaluationSession] = Field(default_factory=list)
    total: int = 0


class EngineStats(_EngineModel):
    """Response of GET /inference-engine/stats."""

    total_evaluations: int = 0
    completed_evaluations: int = 0
    failed_evaluations: int = 0
    success_rate: float = 0.0
    average_confidence: float = 0.0
