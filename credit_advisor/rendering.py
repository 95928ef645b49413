"""Plain-text rendering of an advisory report through Jinja2."""

from __future__ import annotations

from jinja2 import Environment, PackageLoader, StrictUndefined

from credit_advisor.formatters import (
    format_confidence,
    format_currency,
    format_datetime,
    format_percentage,
    format_rate,
    format_term,
)
from credit_advisor.schemas.eligibility import AdvisoryReport

# Plain text output: no HTML autoescaping
env = Environment(
    loader=PackageLoader("credit_advisor", "templates"),
    autoescape=False,
    trim_blocks=True,
    lstrip_blocks=True,
    keep_trailing_newline=True,
    undefined=StrictUndefined,
)

# Register custom filters
env.filters["currency"] = format_currency
env.filters["percentage"] = format_percentage
env.filters["rate"] = format_rate
env.filters["term"] = format_term
env.filters["confidence"] = format_confidence
env.filters["datetime"] = format_datetime

REPORT_TEMPLATE = "report.txt"


def render_report(report: AdvisoryReport) -> str:
    """Render the report as Spanish plain text."""
    return env.get_template(REPORT_TEMPLATE).render(report=report)
