"""
Volume discount services.
"""
from .discount_function import run, evaluate
from .configuration_parser import parse_configuration
from .eligibility import filter_eligible_lines
from .tier_resolver import resolve_percentage, resolve_discounts
from .result_assembler import EMPTY_RESULT, assemble_result
from .configuration_builder import (
    TierInput,
    build_configuration,
    build_metafield_input,
    tier_inputs_from_configuration
)
