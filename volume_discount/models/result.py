"""
Discount function output models.

``FunctionRunResult.to_dict`` produces the exact JSON shape the checkout
expects:

    {
        "discounts": [
            {
                "targets": [{"cartLine": {"id": "gid://shopify/CartLine/1"}}],
                "value": {"percentage": {"value": "20"}}
            }
        ],
        "discountApplicationStrategy": "ALL"
    }
"""
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, Tuple


class DiscountApplicationStrategy(str, Enum):
    """How the checkout combines multiple discount entries."""

    FIRST = "FIRST"
    ALL = "ALL"


@dataclass(frozen=True)
class ResolvedDiscount:
    line_id: str
    percentage: Decimal


@dataclass(frozen=True)
class Discount:
    """A percentage-off discount targeting a single cart line."""
    cart_line_id: str
    percentage: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            'targets': [{'cartLine': {'id': self.cart_line_id}}],
            'value': {'percentage': {'value': self.percentage}},
        }


@dataclass(frozen=True)
class FunctionRunResult:
    discounts: Tuple[Discount, ...]
    strategy: DiscountApplicationStrategy

    @property
    def is_empty(self) -> bool:
        return not self.discounts

    def to_dict(self) -> Dict[str, Any]:
        return {
            'discounts': [discount.to_dict() for discount in self.discounts],
            'discountApplicationStrategy': self.strategy.value,
        }
