"""
Volume discount function.

Entry point the checkout invokes once per cart evaluation:

    configuration JSON -> Configuration -> eligible lines
        -> resolved percentages -> function result

The function is pure and total. Whatever the input looks like it returns a
result, degrading to the canonical empty result (no discounts, FIRST).
Diagnostics go to an injectable logger and never change the result.
"""
import logging
from typing import Any, Dict, Optional

from ..models import FunctionRunResult, parse_cart_lines
from .configuration_parser import describe_tiers, parse_configuration
from .eligibility import filter_eligible_lines
from .result_assembler import EMPTY_RESULT, assemble_result
from .tier_resolver import resolve_discounts

logger = logging.getLogger(__name__)


def _get_object(data: Any, key: str) -> Dict[str, Any]:
    value = data.get(key) if isinstance(data, dict) else None
    return value if isinstance(value, dict) else {}


def metafield_value(input_data: Dict[str, Any]) -> Optional[str]:
    """The configuration JSON from ``discountNode.metafield.value``, if any."""
    metafield = _get_object(_get_object(input_data, 'discountNode'), 'metafield')
    value = metafield.get('value')
    return value if isinstance(value, str) else None


def evaluate(input_data: Dict[str, Any], diagnostics: logging.Logger = None) -> FunctionRunResult:
    """
    Run the discount pipeline and return the structured result.

    Args:
        input_data: Function input ({cart: {lines}, discountNode: {metafield}})
        diagnostics: Optional logger for debug output

    Returns:
        FunctionRunResult
    """
    log = diagnostics or logger

    configuration = parse_configuration(metafield_value(input_data))
    if configuration is None:
        log.debug('No usable configuration, returning empty result')
        return EMPTY_RESULT
    if not configuration.tiers:
        log.debug('Configuration has no valid tiers, returning empty result')
        return EMPTY_RESULT

    log.debug(f'Tiers in resolution order: {describe_tiers(configuration)}')

    lines = parse_cart_lines(_get_object(input_data, 'cart').get('lines'))
    eligible = filter_eligible_lines(lines, configuration)
    log.debug(f'{len(eligible)} of {len(lines)} cart lines eligible')
    if not eligible:
        return EMPTY_RESULT

    return assemble_result(resolve_discounts(eligible, configuration, diagnostics=log))


def run(input_data: Dict[str, Any], diagnostics: logging.Logger = None) -> Dict[str, Any]:
    """
    Compute volume discounts for a cart.

    Never raises: an unexpected failure is logged and produces the
    canonical empty result so checkout is never blocked.

    Returns:
        Dict in the function output shape
    """
    try:
        result = evaluate(input_data, diagnostics=diagnostics)
    except Exception as e:
        logger.exception(f'Volume discount evaluation failed: {e}')
        result = EMPTY_RESULT
    return result.to_dict()
