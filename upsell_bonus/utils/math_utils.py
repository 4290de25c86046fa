"""
Bonus Math Utilities.

Decimal helpers shared by the engine components.  Percentages are
whole-number percents throughout (``10`` means 10%).
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Iterable, Optional, Union

__all__: list[str] = [
    "apply_percentage",
    "percent_of_whole",
    "sum_decimals",
    "to_decimal",
]

_HUNDRED: Decimal = Decimal("100")

Number = Union[Decimal, int, float, str]


def to_decimal(value: Optional[Number]) -> Optional[Decimal]:
    """Convert *value* to a finite ``Decimal``, or ``None`` if it cannot be.

    ``bool`` is rejected even though it is an ``int`` subclass.  Floats are
    converted via ``str()`` so ``0.1`` becomes ``Decimal("0.1")``.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, (int, float, str)):
        try:
            result = Decimal(str(value).strip())
        except InvalidOperation:
            return None
    else:
        return None
    if not result.is_finite():
        return None
    return result


def sum_decimals(values: Iterable[Decimal]) -> Decimal:
    """Sum *values* starting from ``Decimal("0")`` (never an ``int`` 0)."""
    return sum(values, Decimal("0"))


def apply_percentage(amount: Decimal, percentage: Decimal) -> Decimal:
    """Return ``amount * percentage / 100``.

    Raises:
        ValueError: If either input is NaN or infinite.
    """
    if not amount.is_finite() or not percentage.is_finite():
        raise ValueError(
            f"amount and percentage must be finite, got {amount!r} and {percentage!r}."
        )
    return amount * percentage / _HUNDRED


def percent_of_whole(part: int, whole: int) -> int:
    """``part / whole`` as an integer percentage, rounded half-up.

    Returns 0 when *whole* is not positive.
    """
    if whole <= 0:
        return 0
    ratio = Decimal(part) * _HUNDRED / Decimal(whole)
    return int(ratio.quantize(Decimal("1"), rounding=ROUND_HALF_UP))
