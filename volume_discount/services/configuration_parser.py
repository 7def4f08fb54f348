"""
Configuration parser.

Decodes the metafield JSON stored on the discount node:

    {
        "quantity": {"tier01": 5, "tier02": "10"},
        "percentage": {"tier01": 10, "tier02": "20"},
        "productId": ["gid://shopify/Product/1"]
    }

Parsing never raises. Missing or malformed JSON is read as an empty object,
and a configuration without both tier mappings is not usable.
"""
import json
import logging
from typing import Any, Dict, List, Optional, Tuple

from ..models import Configuration, Tier, tier_index
from .tier_resolver import coerce_percentage, coerce_threshold, sort_tiers

logger = logging.getLogger(__name__)


def load_configuration_json(raw: Any) -> Dict[str, Any]:
    """Decode the raw metafield value, falling back to an empty object."""
    if not isinstance(raw, str) or not raw.strip():
        return {}

    try:
        data = json.loads(raw)
    except ValueError as e:
        logger.warning(f'Ignoring malformed configuration JSON: {e}')
        return {}

    if not isinstance(data, dict):
        logger.warning(f'Ignoring configuration of type {type(data).__name__}, expected object')
        return {}

    return data


def build_tiers(quantity: Dict[str, Any], percentage: Dict[str, Any]) -> Tuple[Tier, ...]:
    """
    Pair thresholds with percentages by tier key.

    A key must be a tier key and present in both mappings, and both values
    must coerce to numbers; anything else drops just that tier.
    """
    tiers = []
    for key, raw_threshold in quantity.items():
        if tier_index(key) is None:
            logger.debug(f'Ignoring non-tier key {key!r}')
            continue
        if key not in percentage:
            logger.warning(f'Dropping {key}: threshold has no percentage')
            continue

        threshold = coerce_threshold(raw_threshold)
        value = coerce_percentage(percentage[key])
        if threshold is None or value is None:
            logger.warning(
                f'Dropping {key}: unparseable threshold {raw_threshold!r} '
                f'or percentage {percentage[key]!r}'
            )
            continue

        tiers.append(Tier(key=key, threshold=threshold, percentage=value))

    for key in percentage:
        if key not in quantity and tier_index(key) is not None:
            logger.warning(f'Dropping {key}: percentage has no threshold')

    return sort_tiers(tiers)


def parse_product_ids(raw: Any) -> Tuple[str, ...]:
    if not isinstance(raw, list):
        return ()
    return tuple(product_id for product_id in raw if isinstance(product_id, str))


def parse_configuration(raw: Optional[str]) -> Optional[Configuration]:
    """
    Parse the stored configuration.

    Args:
        raw: Metafield value (JSON string) or None when no metafield exists

    Returns:
        Configuration, or None when the quantity or percentage mapping is
        missing or empty
    """
    data = load_configuration_json(raw)

    quantity = data.get('quantity')
    percentage = data.get('percentage')
    if not isinstance(quantity, dict) or not isinstance(percentage, dict):
        return None
    if not quantity or not percentage:
        return None

    return Configuration(
        tiers=build_tiers(quantity, percentage),
        product_ids=parse_product_ids(data.get('productId')),
    )


def describe_tiers(configuration: Configuration) -> List[Dict[str, Any]]:
    """Summarize tiers in resolution order for diagnostics and the CLI."""
    return [
        {'key': tier.key, 'threshold': tier.threshold, 'percentage': str(tier.percentage)}
        for tier in configuration.tiers
    ]
