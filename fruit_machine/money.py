"""Currency helpers: every money value is a Decimal rounded to 2 dp."""

from __future__ import annotations

from decimal import ROUND_FLOOR, ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any

CENTS = Decimal("0.01")
ZERO = Decimal("0.00")


def to_money(value: Any) -> Decimal:
    """Coerce ``value`` to a 2 dp Decimal.

    Floats go through ``str`` first so ``0.2`` becomes ``0.20`` rather than
    the binary expansion.
    """

    if isinstance(value, bool):
        raise TypeError("money value cannot be a bool")
    if isinstance(value, float):
        value = str(value)
    try:
        amount = Decimal(value)
    except (InvalidOperation, TypeError, ValueError) as exc:
        raise ValueError(f"not a money amount: {value!r}") from exc
    if not amount.is_finite():
        raise ValueError(f"not a money amount: {value!r}")
    try:
        return amount.quantize(CENTS, rounding=ROUND_HALF_UP)
    except InvalidOperation as exc:
        # more digits than the decimal context can hold at 2 dp
        raise ValueError(f"money amount out of range: {value!r}") from exc


def add(a: Decimal, b: Decimal) -> Decimal:
    return (a + b).quantize(CENTS, rounding=ROUND_HALF_UP)


def sub(a: Decimal, b: Decimal) -> Decimal:
    return (a - b).quantize(CENTS, rounding=ROUND_HALF_UP)


def floor_int(value: Decimal) -> int:
    return int(value.to_integral_value(rounding=ROUND_FLOOR))


def fmt(amount: Decimal, currency: str = "£") -> str:
    return f"{currency}{amount:.2f}"
