"""
Tests for result assembly.
"""
import pytest
from decimal import Decimal

from volume_discount.models import DiscountApplicationStrategy, ResolvedDiscount
from volume_discount.services.result_assembler import (
    EMPTY_RESULT,
    assemble_result,
    format_percentage,
)


class TestFormatPercentage:

    @pytest.mark.parametrize('value,expected', [
        (Decimal('20'), '20'),
        (Decimal('10.0'), '10'),
        (Decimal('12.50'), '12.5'),
        (Decimal('100'), '100'),
        (Decimal('0.00'), '0'),
        (Decimal('1E+1'), '10'),
        (Decimal('0.125'), '0.125'),
    ])
    def test_plain_decimal_string(self, value, expected):
        assert format_percentage(value) == expected


class TestAssembleResult:

    def test_no_discounts_is_empty_result(self):
        result = assemble_result([])

        assert result is EMPTY_RESULT
        assert result.to_dict() == {'discounts': [], 'discountApplicationStrategy': 'FIRST'}

    def test_discounts_use_all_strategy(self):
        result = assemble_result([
            ResolvedDiscount(line_id='l2', percentage=Decimal('20')),
            ResolvedDiscount(line_id='l1', percentage=Decimal('7.5')),
        ])

        assert result.strategy is DiscountApplicationStrategy.ALL
        assert result.to_dict() == {
            'discounts': [
                {
                    'targets': [{'cartLine': {'id': 'l2'}}],
                    'value': {'percentage': {'value': '20'}},
                },
                {
                    'targets': [{'cartLine': {'id': 'l1'}}],
                    'value': {'percentage': {'value': '7.5'}},
                },
            ],
            'discountApplicationStrategy': 'ALL',
        }

    def test_strategy_serializes_as_plain_string(self):
        assert DiscountApplicationStrategy.ALL == 'ALL'
        assert EMPTY_RESULT.to_dict()['discountApplicationStrategy'] == 'FIRST'
