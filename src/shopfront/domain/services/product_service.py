"""In-memory product catalog.

Thread-safe implementation for concurrent access: every public method holds
the catalog lock for its whole duration, so each call is observed atomically.
"""

import threading
from dataclasses import replace

from shopfront.domain.entities.product import NewProduct, Product, ProductFilter


class ProductService:
    """Thread-safe store of catalog products.

    Product IDs are assigned sequentially starting at 1. Products handed
    out are copies; mutate the catalog only through this service.
    """

    def __init__(self) -> None:
        self._products: list[Product] = []
        self._next_id = 1
        self._lock = threading.Lock()

    def create(self, new_product: NewProduct) -> Product:
        """Add a product to the catalog.

        Args:
            new_product: Product data without an ID.

        Returns:
            The stored product with its assigned ID.
        """
        with self._lock:
            product = Product(
                id=self._next_id,
                name=new_product.name,
                description=new_product.description,
                price=new_product.price,
                inventory_count=new_product.inventory_count,
            )
            self._next_id += 1
            self._products.append(product)
            return replace(product)

    def get_all(self) -> list[Product]:
        """Return every product in creation order."""
        with self._lock:
            return [replace(p) for p in self._products]

    def get_by_id(self, product_id: int) -> Product | None:
        """Look up a product by ID.

        Returns:
            The product if found, None otherwise.
        """
        with self._lock:
            product = self._find(product_id)
            return replace(product) if product is not None else None

    def update_inventory(self, product_id: int, inventory_count: int) -> Product | None:
        """Set a product's inventory count.

        Returns:
            The updated product, or None if no product has that ID.
        """
        if inventory_count < 0:
            raise ValueError("Inventory count must not be negative")

        with self._lock:
            product = self._find(product_id)
            if product is None:
                return None
            product.inventory_count = inventory_count
            return replace(product)

    def filter(self, product_filter: ProductFilter) -> list[Product]:
        """Return products matching every set criterion of the filter."""
        with self._lock:
            return [replace(p) for p in self._products if product_filter.matches(p)]

    def _find(self, product_id: int) -> Product | None:
        # Caller must hold the lock.
        for product in self._products:
            if product.id == product_id:
                return product
        return None
