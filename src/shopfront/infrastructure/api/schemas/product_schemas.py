"""Pydantic schemas for catalog endpoints."""

from decimal import Decimal

from pydantic import BaseModel, Field

from shopfront.domain.entities import NewProduct


class CreateProductRequest(BaseModel):
    """Request body for adding a product to the catalog."""

    name: str = Field(..., min_length=1, max_length=255)
    description: str = Field(default="", max_length=10_000)
    price: Decimal = Field(..., ge=0, max_digits=12, decimal_places=2)
    inventory_count: int = Field(default=0, ge=0)

    def to_new_product(self) -> NewProduct:
        return NewProduct(
            name=self.name,
            description=self.description,
            price=self.price,
            inventory_count=self.inventory_count,
        )


class UpdateInventoryRequest(BaseModel):
    """Request body for setting a product's stock level."""

    inventory_count: int = Field(..., ge=0)


class ProductResponse(BaseModel):
    """A catalog product."""

    id: int
    name: str
    description: str
    price: Decimal
    inventory_count: int

    model_config = {"from_attributes": True}
