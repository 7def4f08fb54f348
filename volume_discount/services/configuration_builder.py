"""
Configuration builder.

Admin-side counterpart of the configuration parser. Encodes the tier rows
and product selection a merchant enters in the discount form into the JSON
stored on the discount's metafield, and decodes a stored value back into
form rows for editing.

Usage:
    from volume_discount.services.configuration_builder import TierInput, build_metafield_input

    metafield = build_metafield_input(
        [TierInput(5, 10), TierInput(10, 20)],
        product_ids=['gid://shopify/Product/123'],
    )
"""
import json
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Dict, List, Optional, Sequence, Union

from ..models import tier_key
from ..utils.exceptions import ValidationError
from .configuration_parser import parse_configuration
from .tier_resolver import coerce_percentage, coerce_threshold

DEFAULT_METAFIELD_NAMESPACE = '$app:volume-discount'
DEFAULT_METAFIELD_KEY = 'function-configuration'
METAFIELD_TYPE = 'json'
MAX_TIERS = 6


@dataclass(frozen=True)
class TierInput:
    """One row of the volume form: minimum quantity and discount percentage."""
    quantity: Union[int, str]
    percentage: Union[int, float, str, Decimal]


def _json_number(value: Decimal) -> Union[int, float]:
    if value == value.to_integral_value():
        return int(value)
    return float(value)


def _validate_tier(position: int, tier: TierInput) -> Dict[str, Any]:
    threshold = coerce_threshold(tier.quantity)
    if threshold is None or threshold < 1:
        raise ValidationError(
            f'Tier {position} minimum quantity must be a positive whole number, got {tier.quantity!r}',
            field='quantity'
        )

    percentage = coerce_percentage(tier.percentage)
    if percentage is None or not Decimal('0') < percentage <= Decimal('100'):
        raise ValidationError(
            f'Tier {position} discount percentage must be greater than 0 and at most 100, '
            f'got {tier.percentage!r}',
            field='percentage'
        )

    return {'threshold': threshold, 'percentage': _json_number(percentage)}


def _validate_product_ids(product_ids: Sequence[str]) -> List[str]:
    if isinstance(product_ids, str):
        raise ValidationError('Product IDs must be a list', field='productId')

    validated = []
    for product_id in product_ids:
        if not isinstance(product_id, str) or not product_id.strip():
            raise ValidationError(f'Invalid product ID: {product_id!r}', field='productId')
        validated.append(product_id.strip())
    return validated


def build_configuration(
    tiers: Sequence[TierInput],
    product_ids: Sequence[str] = (),
    max_tiers: int = MAX_TIERS
) -> Dict[str, Any]:
    """
    Build the configuration object for the discount metafield.

    Tier rows are keyed by their position in the form (tier01, tier02, ...).

    Args:
        tiers: Tier rows in form order
        product_ids: Selected product GIDs; empty scopes the discount to the collection
        max_tiers: Maximum number of tier rows accepted

    Returns:
        Dict with quantity, percentage and productId

    Raises:
        ValidationError: If a row or product ID is invalid
    """
    tiers = list(tiers)
    if not tiers:
        raise ValidationError('At least one tier is required', field='tiers')
    if len(tiers) > max_tiers:
        raise ValidationError(f'At most {max_tiers} tiers are allowed, got {len(tiers)}', field='tiers')

    quantity = {}
    percentage = {}
    for position, tier in enumerate(tiers, start=1):
        validated = _validate_tier(position, tier)
        key = tier_key(position)
        quantity[key] = validated['threshold']
        percentage[key] = validated['percentage']

    return {
        'quantity': quantity,
        'percentage': percentage,
        'productId': _validate_product_ids(product_ids),
    }


def serialize_configuration(configuration: Dict[str, Any]) -> str:
    return json.dumps(configuration, separators=(',', ':'))


def build_metafield_input(
    tiers: Sequence[TierInput],
    product_ids: Sequence[str] = (),
    namespace: str = DEFAULT_METAFIELD_NAMESPACE,
    key: str = DEFAULT_METAFIELD_KEY,
    max_tiers: int = MAX_TIERS
) -> Dict[str, str]:
    """Metafield input record carrying the serialized configuration."""
    configuration = build_configuration(tiers, product_ids, max_tiers=max_tiers)
    return {
        'namespace': namespace,
        'key': key,
        'type': METAFIELD_TYPE,
        'value': serialize_configuration(configuration),
    }


def tier_inputs_from_configuration(raw: Optional[str]) -> List[TierInput]:
    """
    Decode a stored configuration into form rows, ordered by tier key.

    Tiers the discount function would ignore are left out, so the form
    shows exactly what checkout applies.
    """
    configuration = parse_configuration(raw)
    if configuration is None:
        return []

    ordered = sorted(configuration.tiers, key=lambda tier: tier.index)
    return [TierInput(quantity=tier.threshold, percentage=tier.percentage) for tier in ordered]


def product_ids_from_configuration(raw: Optional[str]) -> List[str]:
    configuration = parse_configuration(raw)
    return list(configuration.product_ids) if configuration else []
