"""Credit product recommendation and failure explanation for the inference-engine console."""

from credit_advisor.advisor import build_report, report_from_evaluation
from credit_advisor.rendering import render_report

__all__ = ["build_report", "report_from_evaluation", "render_report"]
