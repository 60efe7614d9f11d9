"""Product entity for the catalog.

Products are held in memory by the catalog service and identified by a
sequential integer ID.
"""

from dataclasses import dataclass
from decimal import Decimal


@dataclass
class NewProduct:
    """Data needed to create a product (the ID is assigned by the catalog).

    Attributes:
        name: Display name (1-255 characters).
        description: Free-form description.
        price: Unit price.
        inventory_count: Units in stock.
    """

    name: str
    description: str
    price: Decimal
    inventory_count: int

    def __post_init__(self) -> None:
        """Validate product data after initialization."""
        if not self.name or len(self.name) > 255:
            raise ValueError("Product name must be between 1 and 255 characters")
        if self.price < 0:
            raise ValueError("Product price must not be negative")
        if self.inventory_count < 0:
            raise ValueError("Inventory count must not be negative")


@dataclass
class Product:
    """A product in the catalog."""

    id: int
    name: str
    description: str
    price: Decimal
    inventory_count: int

    @property
    def in_stock(self) -> bool:
        return self.inventory_count > 0


@dataclass
class ProductFilter:
    """Criteria for searching the catalog.

    Unset criteria are ignored; set criteria must all match.

    Attributes:
        name_contains: Case-insensitive substring of the product name.
        min_price: Inclusive lower price bound.
        max_price: Inclusive upper price bound.
        in_stock: True for products with inventory, False for sold out.
    """

    name_contains: str | None = None
    min_price: Decimal | None = None
    max_price: Decimal | None = None
    in_stock: bool | None = None

    def matches(self, product: Product) -> bool:
        """Check whether a product satisfies every set criterion."""
        if self.name_contains is not None and (
            self.name_contains.lower() not in product.name.lower()
        ):
            return False
        if self.min_price is not None and product.price < self.min_price:
            return False
        if self.max_price is not None and product.price > self.max_price:
            return False
        if self.in_stock is not None and product.in_stock != self.in_stock:
            return False
        return True
