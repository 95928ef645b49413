"""Combines the recommender and the failure explainer into one render model.

This is the synchronous call offered to the UI layer: the caller fetches
facts, failures and the risk profile from the inference engine, then hands
them here together with the applicant record.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from credit_advisor.eligibility import recommend
from credit_advisor.explanations import explain_all
from credit_advisor.schemas.application import AppInputData
from credit_advisor.schemas.eligibility import AdvisoryReport
from credit_advisor.schemas.inference import EvaluationResult

logger = logging.getLogger(__name__)


def build_report(
    facts: Iterable[str] | None,
    input_data: AppInputData,
    risk_profile: str | None,
    failures: Iterable[str] | None = (),
) -> AdvisoryReport:
    """Rank products and explain failures for one evaluation. Never raises on data."""
    products = recommend(facts, input_data, risk_profile)
    explained = explain_all(failures)

    logger.info(
        "Advisory report: %d products (best=%s), %d failures, risk=%s",
        len(products),
        products[0].id if products else None,
        len(explained),
        risk_profile or "-",
    )
    return AdvisoryReport(
        products=products,
        failures=explained,
        risk_profile=risk_profile or "",
    )


def report_from_evaluation(result: EvaluationResult, input_data: AppInputData) -> AdvisoryReport:
    """Build the report straight from an engine evaluation response."""
    report = build_report(
        result.facts_detected,
        input_data,
        result.risk_profile,
        result.failures_detected,
    )
    return report.model_copy(update={
        "session_id": result.session_id,
        "final_decision": result.final_decision,
        "confidence_score": result.confidence_score,
        "explanation": result.explanation or None,
        "evaluated_at": result.evaluated_at,
    })
