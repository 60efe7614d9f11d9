"""FastAPI dependencies for authentication and shared services.

Provides dependencies for extracting and validating bearer tokens from
requests and for reaching the services stored on ``app.state``.
"""

from dataclasses import dataclass
from typing import Annotated

from fastapi import Depends, Header, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from shopfront.core.config import get_settings
from shopfront.core.logging import get_logger
from shopfront.domain.services import CartService, ProductService
from shopfront.infrastructure.auth import TokenError, TokenService
from shopfront.infrastructure.persistence.database import get_db_session
from shopfront.infrastructure.persistence.repositories import UserRepository

logger = get_logger(__name__)


@dataclass
class CurrentUser:
    """Represents the current authenticated user context.

    Extracted from a valid bearer token whose subject names an existing user.
    """

    user_id: int
    username: str
    email: str


def get_token_service(request: Request) -> TokenService:
    """Get the token service from app state.

    Created from settings on first use if the app factory did not set one.
    """
    if not hasattr(request.app.state, "token_service"):
        request.app.state.token_service = TokenService.from_settings(get_settings())
    return request.app.state.token_service


def get_product_service(request: Request) -> ProductService:
    """Get the catalog from app state."""
    if not hasattr(request.app.state, "product_service"):
        request.app.state.product_service = ProductService()
    return request.app.state.product_service


def get_cart_service(request: Request) -> CartService:
    """Get the cart store from app state."""
    if not hasattr(request.app.state, "cart_service"):
        request.app.state.cart_service = CartService()
    return request.app.state.cart_service


def _credentials_exception() -> HTTPException:
    # Every authentication failure looks identical to the client.
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_user(
    token_service: Annotated[TokenService, Depends(get_token_service)],
    session: Annotated[AsyncSession, Depends(get_db_session)],
    authorization: Annotated[str | None, Header()] = None,
) -> CurrentUser:
    """Extract and validate the current user from the Authorization header.

    Args:
        token_service: Service used to validate the token.
        session: Database session for loading the user.
        authorization: The Authorization header value (e.g., "Bearer <token>").

    Returns:
        CurrentUser: The authenticated user's context.

    Raises:
        HTTPException: 401 if the header is missing or malformed, the token
            fails validation, or the subject is not an existing user.
    """
    if authorization is None:
        logger.info("Authentication failed: missing Authorization header")
        raise _credentials_exception()

    parts = authorization.split()
    if len(parts) != 2 or parts[0].lower() != "bearer":
        logger.info("Authentication failed: invalid Authorization header format")
        raise _credentials_exception()

    try:
        claims = token_service.validate(parts[1])
    except TokenError as e:
        logger.info(
            "Authentication failed: token rejected",
            reason=type(e).__name__,
        )
        raise _credentials_exception() from None

    # Subjects are issued as str(user.id); anything else cannot name a user.
    if not (claims.sub.isascii() and claims.sub.isdigit()) or len(claims.sub) > 18:
        logger.info("Authentication failed: subject is not a user ID")
        raise _credentials_exception()
    user_id = int(claims.sub)

    user = await UserRepository(session).get_by_id(user_id)
    if user is None:
        logger.info("Authentication failed: subject not found", user_id=user_id)
        raise _credentials_exception()

    return CurrentUser(user_id=user.id, username=user.username, email=user.email)


# Type aliases for dependency injection
AuthenticatedUser = Annotated[CurrentUser, Depends(get_current_user)]
TokenServiceDep = Annotated[TokenService, Depends(get_token_service)]
ProductServiceDep = Annotated[ProductService, Depends(get_product_service)]
CartServiceDep = Annotated[CartService, Depends(get_cart_service)]
