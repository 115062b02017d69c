"""
Decimal helpers shared by the ledger and the splitter.

Rounding is ROUND_HALF_UP on Decimal: ties go away from zero, so
10.005 -> 10.01 and -10.005 -> -10.01. This fixes the sign of the
rounding error for amounts that split into exact half cents.
"""

from decimal import ROUND_HALF_UP, Decimal
from typing import Union

Amount = Union[Decimal, int, float, str]

CENT = Decimal("0.01")
ZERO = Decimal("0")


def to_decimal(value: Amount) -> Decimal:
    """Convert user input to Decimal. Floats go through str() to drop binary noise."""
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(str(value))
    return Decimal(value)


def round2(value: Amount) -> Decimal:
    """Round to cents."""
    return to_decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def safe_divide(numerator: Decimal, denominator: Decimal) -> Decimal:
    """Divide, defining x / 0 as 0."""
    if denominator == 0:
        return ZERO
    return numerator / denominator
