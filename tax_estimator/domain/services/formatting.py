# tax_estimator/domain/services/formatting.py
"""Display helpers. Rounding happens here and nowhere in the calculators."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal


def format_currency(amount, cents: bool = False) -> str:
    """Format an amount as dollars, e.g. ``$17,427`` or ``$17,427.32``.

    Negative amounts keep their sign in front of the dollar sign.
    """
    value = Decimal(str(amount))
    exp = Decimal("0.01") if cents else Decimal("1")
    value = value.quantize(exp, rounding=ROUND_HALF_UP)
    sign = "-" if value < 0 else ""
    body = f"{abs(value):,.2f}" if cents else f"{abs(value):,.0f}"
    return f"{sign}${body}"


def format_rate(rate, places: int = 2) -> str:
    """Format a fraction (``0.205``) as a percentage string (``20.5%``)."""
    pct = Decimal(str(rate)) * 100
    text = f"{pct.quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP):f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return f"{text}%"


def format_percent(value, places: int = 1) -> str:
    """Format a value that is already a percentage (``17.43``) as ``17.4%``."""
    pct = Decimal(str(value)).quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP)
    return f"{pct:f}%"
