"""
Volume discount configuration models.
"""
import re
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Optional, Tuple

TIER_KEY_PREFIX = 'tier'
TIER_KEY_PATTERN = re.compile(r'^tier(\d+)$')


def tier_key(index: int) -> str:
    """Storage key for the 1-based tier index, e.g. 1 -> 'tier01'."""
    return f'{TIER_KEY_PREFIX}{index:02d}'


def tier_index(key: str) -> Optional[int]:
    """Numeric index of a tier key, or None if the key is not a tier key."""
    match = TIER_KEY_PATTERN.match(key) if isinstance(key, str) else None
    return int(match.group(1)) if match else None


@dataclass(frozen=True)
class Tier:
    """Buy at least ``threshold`` units, get ``percentage`` percent off."""
    key: str
    threshold: int
    percentage: Decimal

    @property
    def index(self) -> int:
        return tier_index(self.key)


@dataclass(frozen=True)
class Configuration:
    """
    Parsed volume discount configuration.

    ``tiers`` is ordered for resolution: threshold descending, and for
    equal thresholds the lower tier index first.
    ``product_ids`` is the explicit allow-list; when empty, eligibility
    falls back to collection membership.
    """
    tiers: Tuple[Tier, ...] = ()
    product_ids: Tuple[str, ...] = field(default=())

    @property
    def has_product_filter(self) -> bool:
        return len(self.product_ids) > 0
