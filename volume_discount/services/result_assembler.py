"""
Result assembler.

Turns resolved (line, percentage) pairs into the function result. Every
qualifying line gets its own entry under the ALL strategy; no discounts
means the canonical empty result under FIRST.
"""
from decimal import Decimal
from typing import Iterable

from ..models import (
    Discount,
    DiscountApplicationStrategy,
    FunctionRunResult,
    ResolvedDiscount,
)

EMPTY_RESULT = FunctionRunResult(discounts=(), strategy=DiscountApplicationStrategy.FIRST)


def format_percentage(percentage: Decimal) -> str:
    """Plain decimal string without trailing zeros or exponent: 20 -> '20', 12.50 -> '12.5'."""
    text = format(percentage.normalize(), 'f')
    return '0' if text in ('-0', '0') else text


def assemble_result(resolved: Iterable[ResolvedDiscount]) -> FunctionRunResult:
    discounts = tuple(
        Discount(cart_line_id=item.line_id, percentage=format_percentage(item.percentage))
        for item in resolved
    )
    if not discounts:
        return EMPTY_RESULT
    return FunctionRunResult(discounts=discounts, strategy=DiscountApplicationStrategy.ALL)
