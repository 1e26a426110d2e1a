"""Shared utility functions — rounding, amount coercion, formatting."""

from __future__ import annotations

import math
from typing import Optional, Union

from bdtax.config import settings

Number = Union[int, float]

# Float noise below this many decimal places is ignored before a ceiling.
_CEIL_PRECISION = 6


# ── Rounding ──────────────────────────────────────────────────────────────

def ceil_currency(amount: Number) -> int:
    """Round *amount* UP to a whole currency unit.

    ``25000 * 0.1`` style products can land a hair above the exact value;
    that residue is dropped first so an exact amount is never bumped by one.
    """
    return math.ceil(round(amount, _CEIL_PRECISION))


def round_currency(value: float, decimals: int = 2) -> float:
    """Round to *decimals* places (standard banker-friendly rounding)."""
    return round(value, decimals)


def coerce_amount(value: Optional[Number]) -> float:
    """Treat a missing or NaN amount as zero."""
    if value is None:
        return 0.0
    value = float(value)
    if math.isnan(value):
        return 0.0
    return value


# ── Formatting ────────────────────────────────────────────────────────────

def group_en_in(whole: int) -> str:
    """Group digits the South-Asian way: ``1234567`` → ``12,34,567``."""
    sign = "-" if whole < 0 else ""
    digits = str(abs(whole))
    if len(digits) <= 3:
        return sign + digits

    head, tail = digits[:-3], digits[-3:]
    pairs: list[str] = []
    while len(head) > 2:
        pairs.insert(0, head[-2:])
        head = head[:-2]
    if head:
        pairs.insert(0, head)
    return sign + ",".join(pairs + [tail])


def format_currency(amount: Number, include_symbol: bool = True) -> str:
    """Round *amount* up to a whole unit and format it for display.

    >>> format_currency(1234567.2)
    'BDT 12,34,568'
    >>> format_currency(375000, include_symbol=False)
    '3,75,000'
    """
    formatted = group_en_in(ceil_currency(amount))
    if include_symbol:
        return f"{settings.CURRENCY_CODE} {formatted}"
    return formatted


def assessment_year(income_year: str) -> str:
    """Return the assessment year that follows *income_year*.

    Raises ``ValueError`` if the key is not of the form ``YYYY-YYYY``.
    """
    parts = income_year.strip().split("-")
    if len(parts) != 2 or not all(p.isdigit() and len(p) == 4 for p in parts):
        raise ValueError(
            f"Invalid income year: '{income_year}'. Expected YYYY-YYYY."
        )
    start, end = (int(p) for p in parts)
    return f"{start + 1}-{end + 1}"
