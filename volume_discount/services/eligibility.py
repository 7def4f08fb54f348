"""
Eligibility filter.

A product allow-list, when present, decides eligibility on its own. Only
when it is empty does collection membership (``inExcludedCollection``)
apply. The two are never combined.
"""
from typing import Iterable, List

from ..models import CartLine, Configuration, ProductVariant


def is_eligible(line: CartLine, configuration: Configuration, allowed_ids=None) -> bool:
    merchandise = line.merchandise
    if not isinstance(merchandise, ProductVariant):
        return False

    if configuration.has_product_filter:
        if allowed_ids is None:
            allowed_ids = frozenset(configuration.product_ids)
        product_id = merchandise.product.id
        return product_id is not None and product_id in allowed_ids

    return merchandise.product.in_excluded_collection is True


def filter_eligible_lines(lines: Iterable[CartLine], configuration: Configuration) -> List[CartLine]:
    """Return the lines eligible for tier evaluation, in cart order."""
    allowed_ids = frozenset(configuration.product_ids)
    return [line for line in lines if is_eligible(line, configuration, allowed_ids)]
