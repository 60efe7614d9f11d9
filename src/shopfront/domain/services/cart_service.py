"""In-memory shopping carts.

One cart per user, keyed by user ID. A single lock guards all carts, so
each add, remove and clear is observed atomically by concurrent readers.
"""

import copy
import threading

from shopfront.domain.entities.cart import Cart, CartItem
from shopfront.domain.entities.product import Product


class CartService:
    """Thread-safe store of user carts.

    Cart IDs are assigned sequentially starting at 1 when a user's cart is
    first created. Carts handed out are deep copies.
    """

    def __init__(self) -> None:
        self._carts: dict[int, Cart] = {}
        self._next_id = 1
        self._lock = threading.Lock()

    def get_or_create_cart(self, user_id: int) -> Cart:
        """Return the user's cart, creating an empty one if needed."""
        with self._lock:
            return copy.deepcopy(self._get_or_create(user_id))

    def get_cart(self, user_id: int) -> Cart | None:
        """Return the user's cart, or None if they have none."""
        with self._lock:
            cart = self._carts.get(user_id)
            return copy.deepcopy(cart) if cart is not None else None

    def add_item(self, user_id: int, product: Product, quantity: int) -> Cart:
        """Add ``quantity`` units of a product to the user's cart.

        If the product is already in the cart its quantity is incremented;
        otherwise a new line is appended with the product's current name
        and price.

        Args:
            user_id: Owner of the cart (created if missing).
            product: Product to add.
            quantity: Units to add; must be positive.

        Returns:
            The updated cart.
        """
        if quantity <= 0:
            raise ValueError("Quantity must be positive")

        with self._lock:
            cart = self._get_or_create(user_id)
            existing = cart.find_item(product.id)
            if existing is not None:
                existing.quantity += quantity
            else:
                cart.items.append(
                    CartItem(
                        product_id=product.id,
                        quantity=quantity,
                        product_name=product.name,
                        unit_price=product.price,
                    )
                )
            return copy.deepcopy(cart)

    def remove_item(self, user_id: int, product_id: int) -> Cart | None:
        """Remove a product's line from the user's cart.

        Returns:
            The updated cart, or None if the user has no cart.
        """
        with self._lock:
            cart = self._carts.get(user_id)
            if cart is None:
                return None
            cart.items = [item for item in cart.items if item.product_id != product_id]
            return copy.deepcopy(cart)

    def clear_cart(self, user_id: int) -> Cart | None:
        """Remove every line from the user's cart.

        Returns:
            The emptied cart, or None if the user has no cart.
        """
        with self._lock:
            cart = self._carts.get(user_id)
            if cart is None:
                return None
            cart.items.clear()
            return copy.deepcopy(cart)

    def _get_or_create(self, user_id: int) -> Cart:
        # Caller must hold the lock.
        cart = self._carts.get(user_id)
        if cart is None:
            cart = Cart(id=self._next_id, user_id=user_id)
            self._next_id += 1
            self._carts[user_id] = cart
        return cart
