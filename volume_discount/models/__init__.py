"""
Data models for the volume discount function.
"""
from .cart import (
    CartLine,
    Merchandise,
    OtherMerchandise,
    Product,
    ProductVariant,
    parse_cart_lines,
)
from .configuration import Configuration, Tier, tier_index, tier_key
from .result import (
    Discount,
    DiscountApplicationStrategy,
    FunctionRunResult,
    ResolvedDiscount,
)

__all__ = [
    'CartLine',
    'Merchandise',
    'OtherMerchandise',
    'Product',
    'ProductVariant',
    'parse_cart_lines',
    'Configuration',
    'Tier',
    'tier_index',
    'tier_key',
    'Discount',
    'DiscountApplicationStrategy',
    'FunctionRunResult',
    'ResolvedDiscount',
]
