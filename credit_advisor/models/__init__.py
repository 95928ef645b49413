"""Domain enums shared by schemas, rules and the HTTP boundary."""

from __future__ import annotations

from credit_advisor.models.enums import CreditPurpose, EmploymentStatus, FinalDecision

__all__ = ["CreditPurpose", "EmploymentStatus", "FinalDecision"]
