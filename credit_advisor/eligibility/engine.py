"""Eligibility engine. Evaluates every product rule against one applicant.

Pure Python orchestrator. No HTTP calls, no shared state.
The caller obtains facts and the risk profile from the inference engine and
threads them in synchronously.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from credit_advisor.eligibility.facts import resolve_risk_level, to_fact_set
from credit_advisor.eligibility.rules import (
    FALLBACK_RULES,
    PRODUCT_RULES,
    EvaluationContext,
    ProductRule,
)
from credit_advisor.schemas.application import AppInputData
from credit_advisor.schemas.eligibility import ProductCandidate

logger = logging.getLogger(__name__)


def _run_rules(rules: Iterable[ProductRule], ctx: EvaluationContext) -> list[ProductCandidate]:
    candidates: list[ProductCandidate] = []
    for rule in rules:
        candidate = rule.evaluate(ctx)
        if candidate is not None:
            candidates.append(candidate)
    return candidates


def build_context(
    facts: Iterable[str] | None,
    input_data: AppInputData,
    risk_profile: str | None,
) -> EvaluationContext:
    """Normalize raw engine output into an EvaluationContext."""
    fact_set = to_fact_set(facts)
    return EvaluationContext(
        facts=fact_set,
        data=input_data,
        risk=resolve_risk_level(fact_set, risk_profile),
    )


def recommend(
    facts: Iterable[str] | None,
    input_data: AppInputData,
    risk_profile: str | None,
) -> list[ProductCandidate]:
    """Rank the credit products the applicant qualifies for.

    Runs every product rule in catalogue order. Only when none produced a
    candidate, the fallback pass re-offers reduced-scope general-purpose
    products. The result is stable-sorted by eligibility, highest first;
    an empty list means no product matched.
    """
    ctx = build_context(facts, input_data, risk_profile)

    candidates = _run_rules(PRODUCT_RULES, ctx)
    if not candidates:
        candidates = _run_rules(FALLBACK_RULES, ctx)
        logger.debug("No product rule matched, fallback produced %d candidates", len(candidates))

    # list.sort is stable: ties keep catalogue order
    candidates.sort(key=lambda c: c.eligibility, reverse=True)

    logger.debug(
        "Recommended %s (risk=%s, facts=%d)",
        [c.id for c in candidates],
        ctx.risk.value,
        len(ctx.facts),
    )
    return candidates
