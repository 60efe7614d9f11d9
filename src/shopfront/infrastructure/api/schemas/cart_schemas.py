"""Pydantic schemas for cart endpoints."""

from decimal import Decimal

from pydantic import BaseModel, Field

from shopfront.domain.entities import Cart


class AddItemRequest(BaseModel):
    """Request body for adding a product to the cart.

    Quantity is validated in the route so a non-positive value gets the
    cart API's 400 response rather than a schema 422.
    """

    product_id: int
    quantity: int


class CartItemResponse(BaseModel):
    """A line in the cart."""

    product_id: int
    quantity: int
    product_name: str
    unit_price: Decimal
    total_price: Decimal

    model_config = {"from_attributes": True}


class CartResponse(BaseModel):
    """A user's cart with computed totals."""

    id: int
    user_id: int
    items: list[CartItemResponse] = Field(default_factory=list)
    total: Decimal
    item_count: int

    model_config = {"from_attributes": True}

    @classmethod
    def from_cart(cls, cart: Cart) -> "CartResponse":
        return cls.model_validate(cart)
