"""API Routes for Shopfront."""

from shopfront.infrastructure.api.routes.auth_router import router as auth_router
from .cart_router import router as cart_router
from .products_router import router as products_router

__all__ = [
    "auth_router",
    "cart_router",
    "products_router",
]
