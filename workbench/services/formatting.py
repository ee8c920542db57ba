"""Display formatting helpers for ingredient quantities and totals."""

import math
import re
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Optional

_LEADING_NUMBER = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?")


def parse_quantity(value: Any) -> Optional[float]:
    """
    Parse a quantity the way the editor form does (JS parseFloat).

    Leading numeric prefix wins ("12.5 kg" -> 12.5, "1,5" -> 1.0). Returns
    None for blanks and anything that is not a finite number.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
        return number if math.isfinite(number) else None

    text = str(value).strip()
    match = _LEADING_NUMBER.match(text)
    if not match:
        return None
    number = float(match.group(0))
    return number if math.isfinite(number) else None


def to_fixed(value: float, digits: int) -> str:
    """Number.prototype.toFixed: half-up rounding of the exact binary value."""
    exponent = Decimal(1).scaleb(-digits)
    return str(Decimal(value).quantize(exponent, rounding=ROUND_HALF_UP))


def _strip_zeros(text: str) -> str:
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    if text == "-0":
        return "0"
    return text


def format_display_value(value: Any) -> str:
    """
    Format a quantity for display.

    Integral values have no decimals, others are rounded to 3 places with
    trailing zeros removed.

        >>> format_display_value(2.0)
        '2'
        >>> format_display_value(1.25)
        '1.25'
        >>> format_display_value(1.23456)
        '1.235'
    """
    if value is None:
        return ""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return str(value)
    if not math.isfinite(value):
        return str(value)

    if value == int(value):
        return str(int(value))
    return _strip_zeros(to_fixed(value, 3))


def format_percentage(percentage: Optional[float]) -> str:
    if percentage is None:
        return ""
    return f"{to_fixed(percentage, 2)}%"


def format_total_weight(result) -> str:
    """Render an AggregationResult total, e.g. '1.5 kg'."""
    if not result.unit_label:
        return ""
    return f"{format_display_value(result.total_weight)} {result.unit_label}"
