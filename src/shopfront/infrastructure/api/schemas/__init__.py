"""API Schemas for request/response validation."""

from shopfront.infrastructure.api.schemas.auth_schemas import (
    AuthResponse,
    ConflictErrorResponse,
    ErrorResponse,
    LoginRequest,
    RegisterRequest,
    UserResponse,
)
from shopfront.infrastructure.api.schemas.cart_schemas import (
    AddItemRequest,
    CartItemResponse,
    CartResponse,
)
from shopfront.infrastructure.api.schemas.product_schemas import (
    CreateProductRequest,
    ProductResponse,
    UpdateInventoryRequest,
)

__all__ = [
    "AddItemRequest",
    "AuthResponse",
    "CartItemResponse",
    "CartResponse",
    "ConflictErrorResponse",
    "CreateProductRequest",
    "ErrorResponse",
    "LoginRequest",
    "ProductResponse",
    "RegisterRequest",
    "UpdateInventoryRequest",
    "UserResponse",
]
