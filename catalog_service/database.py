# catalog_service/database.py
from decimal import Decimal
from typing import Iterable, Optional, Tuple

from .models import Category, Product

# This file holds the in-memory product catalog served by the API.

ELECTRONICS = Category(id=101, name="Electronics")
ACCESSORIES = Category(id=102, name="Accessories")

SEED_PRODUCTS: Tuple[Product, ...] = (
    Product(
        id=1,
        name="Laptop",
        price=Decimal("1200.50"),
        stock=25,
        category=ELECTRONICS,
        description="High-performance laptop for professionals",
        image_url="/images/laptop.jpg",
    ),
    Product(
        id=2,
        name="Headphones",
        price=Decimal("50.00"),
        stock=100,
        category=ACCESSORIES,
        description="Premium wireless headphones",
        image_url="/images/headphones.jpg",
    ),
    Product(
        id=3,
        name="Smartphone",
        price=Decimal("899.99"),
        stock=50,
        category=ELECTRONICS,
        description="Latest smartphone with advanced features",
        image_url="/images/smartphone.jpg",
    ),
)


class CatalogStore:
    """Owns the product list for one service instance.

    The list is fixed at construction and never mutated afterwards.
    """

    def __init__(self, products: Optional[Iterable[Product]] = None):
        if products is None:
            products = SEED_PRODUCTS
        self._products = tuple(products)
        ids = [p.id for p in self._products]
        if len(ids) != len(set(ids)):
            raise ValueError("seed catalog contains duplicate product ids")

    @property
    def products(self) -> Tuple[Product, ...]:
        return self._products
