"""Domain services for Shopfront.

Services contain business logic that doesn't naturally fit within a single entity.
They have no dependencies on infrastructure or external frameworks.
"""

from shopfront.domain.services.cart_service import CartService
from shopfront.domain.services.product_service import ProductService

__all__ = [
    "CartService",
    "ProductService",
]
