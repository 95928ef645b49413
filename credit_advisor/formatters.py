"""Colombian (es-CO) locale formatting for amounts, rates and dates.

Also registered as Jinja2 filters in rendering.py.
"""

from __future__ import annotations

import re
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation, localcontext

from credit_advisor.config import settings

_NON_DIGITS = re.compile(r"\D")
_NBSP = "\u00a0"


def _to_decimal(value: Decimal | float | int | str) -> Decimal | None:
    try:
        return Decimal(str(value))
    except InvalidOperation:
        return None


def format_currency(value: Decimal | float | int | str | None) -> str:
    """Format as COP without decimals: 4000000 -> "$ 4.000.000".

    Fractions are rounded half-up; the domain has no fractional pesos.
    Returns "" for missing or non-numeric input.
    """
    if value is None:
        return ""
    d = _to_decimal(value)
    if d is None or not d.is_finite():
        return ""
    # Enough precision for the integer part, beyond the default 28 digits
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, d.adjusted() + 2)
        rounded = d.quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    # US grouping 4,000,000 -> Colombian 4.000.000
    grouped = f"{abs(rounded):,.0f}".replace(",", ".")
    sign = "-" if rounded < 0 else ""
    return f"{sign}{settings.policy.currency_symbol}{_NBSP}{grouped}"


def parse_currency(value: str | Decimal | int | None) -> Decimal:
    """Parse a typed or formatted amount back to a number. Never raises.

    Every non-digit character (symbol, spaces, separators) is dropped, so
    "$ 4.000.000" -> 4000000. Empty or digit-free input gives 0.
    """
    if value is None:
        return Decimal("0")
    if isinstance(value, (int, Decimal)) and not isinstance(value, bool):
        return Decimal(value)
    digits = _NON_DIGITS.sub("", str(value))
    if not digits:
        return Decimal("0")
    return Decimal(digits)


def format_percentage(value: Decimal | float | int | None, decimals: int = 1) -> str:
    """Format a value already on a 0–100 scale: 1.2 -> "1,2%"."""
    if value is None:
        return "-"
    formatted = f"{Decimal(str(value)):.{decimals}f}".replace(".", ",")
    return f"{formatted}%"


def format_rate(value: Decimal | float | int | None) -> str:
    """Monthly interest rate: 1.2 -> "1,2% M.V." (mes vencido)."""
    if value is None:
        return "-"
    return f"{format_percentage(value)} M.V."


def format_term(term_months: int | None) -> str:
    """0 months is the revolving sentinel."""
    if term_months is None:
        return "-"
    if term_months == 0:
        return "Rotativo"
    if term_months == 1:
        return "1 mes"
    return f"{term_months} meses"


def format_confidence(value: Decimal | float | None) -> str:
    """Engine confidence is already a percentage: 87.456 -> "87,5%"."""
    if value is None:
        return "0,0%"
    return format_percentage(value, decimals=1)


def format_datetime(value: datetime | None) -> str:
    """Format as DD/MM/YYYY HH:MM."""
    if value is None:
        return "-"
    return value.strftime("%d/%m/%Y %H:%M")
