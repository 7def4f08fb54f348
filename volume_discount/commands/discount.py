"""
CLI Commands for the volume discount function.

The discount function follows the checkout function contract: input JSON
in, result JSON out.

    flask discount run --input cart.json
    cat cart.json | flask discount run --pretty
    flask discount configure --tier 5:10 --tier 10:20 --product gid://shopify/Product/1
    flask discount inspect --input metafield.json
"""
import json
import logging

import click
from flask import current_app
from flask.cli import with_appcontext

from ..services.configuration_builder import (
    TierInput,
    build_configuration,
    build_metafield_input,
    product_ids_from_configuration,
    tier_inputs_from_configuration,
)
from ..services.discount_function import run as run_function
from ..utils.exceptions import ValidationError
from ..utils.logging_config import get_logger


def parse_tier_option(value: str) -> TierInput:
    """Parse a QTY:PCT tier option, e.g. '5:10'."""
    quantity, sep, percentage = value.partition(':')
    if not sep or not quantity.strip() or not percentage.strip():
        raise click.BadParameter(f'Expected QTY:PCT, got {value!r}', param_hint='--tier')
    return TierInput(quantity=quantity.strip(), percentage=percentage.strip())


def _dump(data, pretty: bool) -> str:
    if pretty:
        return json.dumps(data, indent=2)
    return json.dumps(data, separators=(',', ':'))


@click.group('discount')
def discount_cli():
    """Volume discount function commands."""
    pass


@discount_cli.command('run')
@click.option('--input', 'input_file', type=click.File('r'), default='-',
              help='Function input JSON (defaults to stdin)')
@click.option('--pretty', is_flag=True, help='Indent the output JSON')
@with_appcontext
def run_discount(input_file, pretty):
    """
    Run the discount function on a cart input and print the result.
    """
    try:
        input_data = json.loads(input_file.read())
    except ValueError as e:
        raise click.ClickException(f'Input is not valid JSON: {e}')

    diagnostics = None
    if current_app.config.get('DISCOUNT_DIAGNOSTICS'):
        diagnostics = get_logger('diagnostics')
        diagnostics.setLevel(logging.DEBUG)

    click.echo(_dump(run_function(input_data, diagnostics=diagnostics), pretty))


@discount_cli.command('configure')
@click.option('--tier', 'tiers', multiple=True, required=True,
              help='Tier as QTY:PCT, in form order (repeatable)')
@click.option('--product', 'product_ids', multiple=True,
              help='Product GID to restrict the discount to (repeatable)')
@click.option('--metafield', is_flag=True, help='Print the full metafield input instead')
@click.option('--pretty', is_flag=True, help='Indent the output JSON')
@with_appcontext
def configure_discount(tiers, product_ids, metafield, pretty):
    """
    Build the configuration JSON for a volume discount.
    """
    tier_inputs = [parse_tier_option(value) for value in tiers]
    config = current_app.config

    try:
        if metafield:
            output = build_metafield_input(
                tier_inputs,
                product_ids=product_ids,
                namespace=config['METAFIELD_NAMESPACE'],
                key=config['METAFIELD_KEY'],
                max_tiers=config['MAX_TIERS'],
            )
        else:
            output = build_configuration(tier_inputs, product_ids, max_tiers=config['MAX_TIERS'])
    except ValidationError as e:
        raise click.ClickException(f'[{e.code}] {e.message}')

    click.echo(_dump(output, pretty))


@discount_cli.command('inspect')
@click.option('--input', 'input_file', type=click.File('r'), default='-',
              help='Stored configuration JSON (defaults to stdin)')
@with_appcontext
def inspect_configuration(input_file):
    """
    Show the tiers and product scope a stored configuration applies.
    """
    raw = input_file.read()
    tier_inputs = tier_inputs_from_configuration(raw)

    if not tier_inputs:
        click.echo('No usable tiers: the discount applies to nothing')
        return

    for position, tier in enumerate(tier_inputs, start=1):
        click.echo(f'Tier {position}: buy {tier.quantity}+ get {tier.percentage}% off')

    product_ids = product_ids_from_configuration(raw)
    if product_ids:
        click.echo(f'Products: {", ".join(product_ids)}')
    else:
        click.echo('Products: collection members')
