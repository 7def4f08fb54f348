"""
Cart input models.

Decodes the cart section of the discount function input into immutable
records. Merchandise is a tagged union: a ``ProductVariant`` carries its
product, anything else becomes ``OtherMerchandise`` and is never eligible
for a volume discount.
"""
import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Union

logger = logging.getLogger(__name__)

PRODUCT_VARIANT_TYPENAME = 'ProductVariant'


@dataclass(frozen=True)
class Product:
    """Product behind a variant.

    ``in_excluded_collection`` keeps the input field's name but means the
    product belongs to the collection the discount is scoped to.
    """
    id: Optional[str] = None
    in_excluded_collection: bool = False


@dataclass(frozen=True)
class ProductVariant:
    product: Product
    id: Optional[str] = None


@dataclass(frozen=True)
class OtherMerchandise:
    typename: Optional[str] = None


Merchandise = Union[ProductVariant, OtherMerchandise]


def merchandise_from_dict(data: Optional[Dict[str, Any]]) -> Merchandise:
    """
    Decode a merchandise object.

    The ``__typename`` discriminator decides the variant. Inputs queried
    without ``__typename`` fall back to the presence of a ``product`` object.
    """
    if not isinstance(data, dict):
        return OtherMerchandise()

    typename = data.get('__typename')
    product_data = data.get('product')

    if typename not in (None, PRODUCT_VARIANT_TYPENAME):
        return OtherMerchandise(typename=typename)
    if not isinstance(product_data, dict):
        return OtherMerchandise(typename=typename)

    # A product without an id can still match by collection, never by product list
    product_id = product_data.get('id')
    if not isinstance(product_id, str) or not product_id:
        product_id = None

    variant_id = data.get('id')
    return ProductVariant(
        id=variant_id if isinstance(variant_id, str) else None,
        product=Product(
            id=product_id,
            # Only a literal true counts as membership
            in_excluded_collection=product_data.get('inExcludedCollection') is True,
        ),
    )


def _coerce_quantity(value: Any) -> int:
    if isinstance(value, bool):
        raise ValueError(f'Invalid quantity: {value!r}')
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        return int(value.strip())
    raise ValueError(f'Invalid quantity: {value!r}')


@dataclass(frozen=True)
class CartLine:
    """One line of the customer's cart."""
    id: str
    quantity: int
    merchandise: Merchandise

    @property
    def product(self) -> Optional[Product]:
        if isinstance(self.merchandise, ProductVariant):
            return self.merchandise.product
        return None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'CartLine':
        """
        Build a cart line from its input JSON.

        Raises:
            ValueError: If the line has no id or an unusable quantity
        """
        if not isinstance(data, dict):
            raise ValueError('Cart line must be an object')

        line_id = data.get('id')
        if not isinstance(line_id, str) or not line_id:
            raise ValueError('Cart line is missing an id')

        return cls(
            id=line_id,
            quantity=_coerce_quantity(data.get('quantity')),
            merchandise=merchandise_from_dict(data.get('merchandise')),
        )


def parse_cart_lines(raw_lines: Optional[Iterable[Any]]) -> List[CartLine]:
    """
    Decode cart lines in cart order, skipping malformed ones.

    Args:
        raw_lines: The ``cart.lines`` array from the function input

    Returns:
        List of CartLine in input order
    """
    if not isinstance(raw_lines, (list, tuple)):
        return []

    lines = []
    for index, raw_line in enumerate(raw_lines):
        try:
            lines.append(CartLine.from_dict(raw_line))
        except ValueError as e:
            logger.warning(f'Skipping cart line {index}: {e}')
    return lines
