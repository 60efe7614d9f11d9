"""Shopping cart entities.

Each user has at most one cart. Items capture the product name and unit
price at the moment they were added.
"""

from dataclasses import dataclass, field
from decimal import Decimal


@dataclass
class CartItem:
    """A line in a cart."""

    product_id: int
    quantity: int
    product_name: str
    unit_price: Decimal

    @property
    def total_price(self) -> Decimal:
        return self.unit_price * self.quantity


@dataclass
class Cart:
    """A user's shopping cart.

    Attributes:
        id: Cart ID, assigned sequentially.
        user_id: Owner of the cart.
        items: Lines in the order they were first added.
    """

    id: int
    user_id: int
    items: list[CartItem] = field(default_factory=list)

    @property
    def total(self) -> Decimal:
        """Sum of all line totals."""
        return sum((item.total_price for item in self.items), Decimal("0"))

    @property
    def item_count(self) -> int:
        """Total number of units across all lines."""
        return sum(item.quantity for item in self.items)

    def find_item(self, product_id: int) -> CartItem | None:
        for item in self.items:
            if item.product_id == product_id:
                return item
        return None
