"""Domain entities for Shopfront.

Entities are pure Python dataclasses that represent core business concepts.
They have no dependencies on infrastructure or external frameworks.
"""

from shopfront.domain.entities.cart import Cart, CartItem
from shopfront.domain.entities.product import NewProduct, Product, ProductFilter

__all__ = [
    "Cart",
    "CartItem",
    "NewProduct",
    "Product",
    "ProductFilter",
]
