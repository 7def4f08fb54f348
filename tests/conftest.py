"""
Shared pytest fixtures.
"""
import json
import pytest

from volume_discount import create_app


@pytest.fixture
def app():
    """Application configured for testing."""
    app = create_app('testing')
    with app.app_context():
        yield app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def runner(app):
    return app.test_cli_runner()


@pytest.fixture
def make_line():
    """Factory for cart line input objects."""

    def _make_line(line_id, quantity, product_id='gid://shopify/Product/1',
                   in_collection=False, typename='ProductVariant'):
        merchandise = {'__typename': typename, 'id': f'{line_id}-variant'}
        if typename == 'ProductVariant':
            merchandise['product'] = {
                'id': product_id,
                'title': 'Test Product',
                'inExcludedCollection': in_collection,
            }
        return {'id': line_id, 'quantity': quantity, 'merchandise': merchandise}

    return _make_line


@pytest.fixture
def make_input():
    """Factory for discount function input objects."""

    def _make_input(lines=(), configuration=None):
        if configuration is None:
            metafield = None
        elif isinstance(configuration, str):
            metafield = {'value': configuration}
        else:
            metafield = {'value': json.dumps(configuration)}
        return {
            'cart': {'lines': list(lines)},
            'discountNode': {'metafield': metafield},
        }

    return _make_input
