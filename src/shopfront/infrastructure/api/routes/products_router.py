"""Catalog API routes.

Listing and lookup are public. Creating products and setting stock levels
require a bearer token.
"""

from decimal import Decimal

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from shopfront.core.logging import get_logger
from shopfront.domain.entities import ProductFilter
from shopfront.infrastructure.api.dependencies import AuthenticatedUser, ProductServiceDep
from shopfront.infrastructure.api.schemas import (
    CreateProductRequest,
    ErrorResponse,
    ProductResponse,
    UpdateInventoryRequest,
)

logger = get_logger(__name__)

router = APIRouter()


def _not_found(product_id: int) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={"error": "Not found", "message": f"Product {product_id} not found"},
    )


@router.get("", response_model=list[ProductResponse])
async def list_products(
    product_service: ProductServiceDep,
    name_contains: str | None = None,
    min_price: Decimal | None = None,
    max_price: Decimal | None = None,
    in_stock: bool | None = None,
) -> list[ProductResponse]:
    """List catalog products, optionally filtered.

    With no query parameters every product is returned.
    """
    criteria = ProductFilter(
        name_contains=name_contains,
        min_price=min_price,
        max_price=max_price,
        in_stock=in_stock,
    )
    products = product_service.filter(criteria)
    return [ProductResponse.model_validate(p) for p in products]


@router.get(
    "/{product_id}",
    response_model=ProductResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_product(
    product_id: int,
    product_service: ProductServiceDep,
) -> ProductResponse | JSONResponse:
    product = product_service.get_by_id(product_id)
    if product is None:
        return _not_found(product_id)
    return ProductResponse.model_validate(product)


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=ProductResponse,
)
async def create_product(
    request: CreateProductRequest,
    current_user: AuthenticatedUser,
    product_service: ProductServiceDep,
) -> ProductResponse:
    """Add a product to the catalog."""
    product = product_service.create(request.to_new_product())
    logger.info(
        "Product created",
        product_id=product.id,
        name=product.name,
        user_id=current_user.user_id,
    )
    return ProductResponse.model_validate(product)


@router.put(
    "/{product_id}/inventory",
    response_model=ProductResponse,
    responses={404: {"model": ErrorResponse}},
)
async def update_inventory(
    product_id: int,
    request: UpdateInventoryRequest,
    current_user: AuthenticatedUser,
    product_service: ProductServiceDep,
) -> ProductResponse | JSONResponse:
    """Set a product's inventory count."""
    product = product_service.update_inventory(product_id, request.inventory_count)
    if product is None:
        return _not_found(product_id)

    logger.info(
        "Inventory updated",
        product_id=product_id,
        inventory_count=product.inventory_count,
        user_id=current_user.user_id,
    )
    return ProductResponse.model_validate(product)
