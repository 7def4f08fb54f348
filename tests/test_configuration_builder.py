"""
Tests for the admin-side configuration builder.

Tests cover:
- Tier keying and number normalization
- Form validation errors
- Metafield input record
- Decoding a stored configuration back into form rows
- Builder output evaluated by the discount function
"""
import json
import pytest

from volume_discount.services.configuration_builder import (
    DEFAULT_METAFIELD_KEY,
    DEFAULT_METAFIELD_NAMESPACE,
    TierInput,
    build_configuration,
    build_metafield_input,
    product_ids_from_configuration,
    serialize_configuration,
    tier_inputs_from_configuration,
)
from volume_discount.services.discount_function import run
from volume_discount.utils.exceptions import ValidationError


class TestBuildConfiguration:

    def test_tiers_keyed_by_form_position(self):
        configuration = build_configuration(
            [TierInput('5', '10'), TierInput(10, 12.5), TierInput(20, '25.0')],
            product_ids=['gid://shopify/Product/1'],
        )

        assert configuration == {
            'quantity': {'tier01': 5, 'tier02': 10, 'tier03': 20},
            'percentage': {'tier01': 10, 'tier02': 12.5, 'tier03': 25},
            'productId': ['gid://shopify/Product/1'],
        }

    def test_no_products_means_collection_scope(self):
        configuration = build_configuration([TierInput(1, 10)])
        assert configuration['productId'] == []

    def test_at_least_one_tier(self):
        with pytest.raises(ValidationError) as exc_info:
            build_configuration([])
        assert exc_info.value.code == 'INVALID_TIERS'

    def test_too_many_tiers(self):
        tiers = [TierInput(i, 5) for i in range(1, 8)]

        with pytest.raises(ValidationError) as exc_info:
            build_configuration(tiers)
        assert exc_info.value.code == 'INVALID_TIERS'
        assert 'At most 6' in exc_info.value.message

    def test_custom_tier_limit(self):
        tiers = [TierInput(i, 5) for i in range(1, 8)]
        assert len(build_configuration(tiers, max_tiers=10)['quantity']) == 7

    @pytest.mark.parametrize('quantity', [0, -1, '2.5', 'abc', None])
    def test_invalid_quantity(self, quantity):
        with pytest.raises(ValidationError) as exc_info:
            build_configuration([TierInput(quantity, 10)])
        assert exc_info.value.code == 'INVALID_QUANTITY'
        assert exc_info.value.field == 'quantity'

    @pytest.mark.parametrize('percentage', [0, -5, 100.5, 'abc', None])
    def test_invalid_percentage(self, percentage):
        with pytest.raises(ValidationError) as exc_info:
            build_configuration([TierInput(1, percentage)])
        assert exc_info.value.code == 'INVALID_PERCENTAGE'

    def test_error_names_the_tier(self):
        with pytest.raises(ValidationError) as exc_info:
            build_configuration([TierInput(1, 10), TierInput('x', 20)])
        assert 'Tier 2' in exc_info.value.message

    @pytest.mark.parametrize('product_ids', ['gid://shopify/Product/1', ['', 'P1'], [None]])
    def test_invalid_product_ids(self, product_ids):
        with pytest.raises(ValidationError) as exc_info:
            build_configuration([TierInput(1, 10)], product_ids=product_ids)
        assert exc_info.value.code == 'INVALID_PRODUCTID'


class TestMetafieldInput:

    def test_defaults(self):
        metafield = build_metafield_input([TierInput(5, 10)])

        assert metafield['namespace'] == DEFAULT_METAFIELD_NAMESPACE == '$app:volume-discount'
        assert metafield['key'] == DEFAULT_METAFIELD_KEY == 'function-configuration'
        assert metafield['type'] == 'json'
        assert json.loads(metafield['value']) == {
            'quantity': {'tier01': 5},
            'percentage': {'tier01': 10},
            'productId': [],
        }

    def test_custom_namespace_and_key(self):
        metafield = build_metafield_input([TierInput(5, 10)], namespace='custom', key='config')
        assert (metafield['namespace'], metafield['key']) == ('custom', 'config')

    def test_serialization_is_compact(self):
        assert serialize_configuration({'quantity': {'tier01': 1}}) == '{"quantity":{"tier01":1}}'


class TestDecodeConfiguration:

    def test_rows_ordered_by_tier_key(self):
        raw = json.dumps({
            'quantity': {'tier02': 10, 'tier01': '5'},
            'percentage': {'tier02': 20, 'tier01': '10'},
            'productId': ['P1'],
        })

        rows = tier_inputs_from_configuration(raw)

        assert [(row.quantity, str(row.percentage)) for row in rows] == [(5, '10'), (10, '20')]
        assert product_ids_from_configuration(raw) == ['P1']

    def test_unusable_configuration(self):
        assert tier_inputs_from_configuration(None) == []
        assert tier_inputs_from_configuration('{broken') == []
        assert product_ids_from_configuration(None) == []


class TestBuilderWithDiscountFunction:
    """What the admin saves is exactly what checkout applies."""

    def test_round_trip_through_parser(self):
        tiers = [TierInput(2, 5), TierInput(6, 15), TierInput(4, '7.5')]
        raw = build_metafield_input(tiers)['value']

        rows = tier_inputs_from_configuration(raw)

        assert [(row.quantity, float(row.percentage)) for row in rows] == [(2, 5.0), (6, 15.0), (4, 7.5)]

    def test_saved_configuration_discounts_cart(self, make_input, make_line):
        metafield = build_metafield_input(
            [TierInput(2, 5), TierInput(6, 15)],
            product_ids=['gid://shopify/Product/2'],
        )
        input_data = make_input(
            [
                make_line('line1', 7, product_id='gid://shopify/Product/1'),
                make_line('line2', 7, product_id='gid://shopify/Product/2'),
            ],
            configuration=metafield['value'],
        )

        result = run(input_data)

        assert result['discountApplicationStrategy'] == 'ALL'
        assert [d['targets'][0]['cartLine']['id'] for d in result['discounts']] == ['line2']
        assert result['discounts'][0]['value']['percentage']['value'] == '15'
