"""Cart API routes.

Every endpoint acts on the authenticated user's own cart.
"""

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from shopfront.core.logging import get_logger
from shopfront.infrastructure.api.dependencies import (
    AuthenticatedUser,
    CartServiceDep,
    ProductServiceDep,
)
from shopfront.infrastructure.api.schemas import AddItemRequest, CartResponse, ErrorResponse

logger = get_logger(__name__)

router = APIRouter()


def _error(status_code: int, error: str, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": error, "message": message})


def _cart_not_found() -> JSONResponse:
    return _error(status.HTTP_404_NOT_FOUND, "Not found", "Cart not found")


@router.get("", response_model=CartResponse)
async def get_cart(
    current_user: AuthenticatedUser,
    cart_service: CartServiceDep,
) -> CartResponse:
    """Return the user's cart, creating an empty one on first access."""
    cart = cart_service.get_or_create_cart(current_user.user_id)
    return CartResponse.from_cart(cart)


@router.post(
    "/add",
    response_model=CartResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid quantity or insufficient stock"},
        404: {"model": ErrorResponse, "description": "Product not found"},
    },
)
async def add_to_cart(
    request: AddItemRequest,
    current_user: AuthenticatedUser,
    cart_service: CartServiceDep,
    product_service: ProductServiceDep,
) -> CartResponse | JSONResponse:
    """Add units of a product to the user's cart.

    The requested quantity must be positive and must not exceed the
    product's current inventory.
    """
    if request.quantity <= 0:
        return _error(
            status.HTTP_400_BAD_REQUEST, "Bad request", "Quantity must be greater than 0"
        )

    product = product_service.get_by_id(request.product_id)
    if product is None:
        return _error(
            status.HTTP_404_NOT_FOUND,
            "Not found",
            f"Product {request.product_id} not found",
        )

    if request.quantity > product.inventory_count:
        logger.info(
            "Add to cart rejected: insufficient inventory",
            product_id=product.id,
            requested=request.quantity,
            available=product.inventory_count,
        )
        return _error(
            status.HTTP_400_BAD_REQUEST,
            "Bad request",
            f"Insufficient inventory. Available: {product.inventory_count}",
        )

    cart = cart_service.add_item(current_user.user_id, product, request.quantity)
    logger.info(
        "Item added to cart",
        user_id=current_user.user_id,
        product_id=product.id,
        quantity=request.quantity,
    )
    return CartResponse.from_cart(cart)


@router.delete(
    "/remove/{product_id}",
    response_model=CartResponse,
    responses={404: {"model": ErrorResponse, "description": "Cart not found"}},
)
async def remove_from_cart(
    product_id: int,
    current_user: AuthenticatedUser,
    cart_service: CartServiceDep,
) -> CartResponse | JSONResponse:
    cart = cart_service.remove_item(current_user.user_id, product_id)
    if cart is None:
        return _cart_not_found()
    return CartResponse.from_cart(cart)


@router.post(
    "/clear",
    response_model=CartResponse,
    responses={404: {"model": ErrorResponse, "description": "Cart not found"}},
)
async def clear_cart(
    current_user: AuthenticatedUser,
    cart_service: CartServiceDep,
) -> CartResponse | JSONResponse:
    cart = cart_service.clear_cart(current_user.user_id)
    if cart is None:
        return _cart_not_found()
    logger.info("Cart cleared", user_id=current_user.user_id)
    return CartResponse.from_cart(cart)
