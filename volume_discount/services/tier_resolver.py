"""
Tier resolution.

A line gets the percentage of the highest tier threshold its quantity meets
or exceeds. Precedence comes only from the numeric threshold, never from
tier key names or the order the tiers were stored in.

Equal thresholds: the tier with the lower index wins (tier01 before tier03).
"""
import logging
from decimal import Decimal, InvalidOperation
from typing import Any, Iterable, List, Optional, Sequence, Tuple

from ..models import CartLine, Configuration, ResolvedDiscount, Tier

logger = logging.getLogger(__name__)

MAX_ADJUSTED_EXPONENT = 18


def _to_decimal(value: Any) -> Optional[Decimal]:
    # bool is an int subclass; true/false are never amounts
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float, Decimal)):
        raw = str(value)
    elif isinstance(value, str):
        raw = value.strip()
    else:
        return None

    try:
        number = Decimal(raw)
    except (InvalidOperation, ValueError):
        return None

    if not number.is_finite():
        return None
    if number.is_zero():
        return Decimal(0)
    # Quantities and percentages never need more than 18 digits either side
    # of the point; larger exponents overflow formatting and make int() slow
    if abs(number.adjusted()) > MAX_ADJUSTED_EXPONENT:
        return None
    return number


def coerce_threshold(value: Any) -> Optional[int]:
    """Parse a minimum quantity; None if it is not an integral number."""
    number = _to_decimal(value)
    if number is None or number != number.to_integral_value():
        return None
    return int(number)


def coerce_percentage(value: Any) -> Optional[Decimal]:
    """Parse a percent-off value; None if it is not a finite number."""
    return _to_decimal(value)


def sort_tiers(tiers: Iterable[Tier]) -> Tuple[Tier, ...]:
    """Order tiers for resolution: threshold descending, then tier index."""
    return tuple(sorted(tiers, key=lambda tier: (-tier.threshold, tier.index)))


def resolve_percentage(line: CartLine, tiers: Sequence[Tier]) -> Optional[Decimal]:
    """
    Find the percentage that applies to a cart line.

    Args:
        line: Eligible cart line
        tiers: Tiers as ordered by sort_tiers()

    Returns:
        Percentage of the first tier whose threshold is <= the line
        quantity, or None if the quantity is below every threshold
    """
    for tier in tiers:
        if tier.threshold <= line.quantity:
            return tier.percentage
    return None


def resolve_discounts(
    lines: Iterable[CartLine],
    configuration: Configuration,
    diagnostics: logging.Logger = None
) -> List[ResolvedDiscount]:
    """Resolve a percentage for each eligible line, dropping lines with no match."""
    log = diagnostics or logger
    resolved = []

    for line in lines:
        percentage = resolve_percentage(line, configuration.tiers)
        if percentage is None:
            log.debug(f'Line {line.id} (quantity {line.quantity}) is below every tier')
            continue
        log.debug(f'Line {line.id} (quantity {line.quantity}) resolved to {percentage}%')
        resolved.append(ResolvedDiscount(line_id=line.id, percentage=percentage))

    return resolved
