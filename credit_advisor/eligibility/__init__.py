"""Eligibility engine: rule-based credit product recommendation."""

from credit_advisor.eligibility.engine import recommend
from credit_advisor.eligibility.facts import Fact, RiskLevel, resolve_risk_level
from credit_advisor.eligibility.products import SMMLV, ProductType

__all__ = [
    "recommend",
    "Fact",
    "RiskLevel",
    "resolve_risk_level",
    "SMMLV",
    "ProductType",
]
