"""Authentication API routes.

Provides endpoints for user registration, login and the current user.
"""

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.concurrency import run_in_threadpool

from shopfront.core.logging import get_logger
from shopfront.infrastructure.api.dependencies import AuthenticatedUser, TokenServiceDep
from shopfront.infrastructure.api.schemas import (
    AuthResponse,
    ConflictErrorResponse,
    ErrorResponse,
    LoginRequest,
    RegisterRequest,
    UserResponse,
)
from shopfront.infrastructure.auth import get_password_hasher, hash_password, verify_password
from shopfront.infrastructure.persistence.database import get_db_session
from shopfront.infrastructure.persistence.models import UserModel
from shopfront.infrastructure.persistence.repositories import UserRepository

logger = get_logger(__name__)

router = APIRouter()


def _conflict() -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_409_CONFLICT,
        content={
            "error": "Conflict",
            "message": "Username or email already registered",
            "field": "username",
        },
    )


@router.post(
    "/register",
    status_code=status.HTTP_201_CREATED,
    response_model=AuthResponse,
    responses={
        409: {"model": ConflictErrorResponse, "description": "Username or email already exists"},
    },
)
async def register(
    request: RegisterRequest,
    token_service: TokenServiceDep,
    session: AsyncSession = Depends(get_db_session),
) -> AuthResponse | JSONResponse:
    """Register a new user and return a bearer token.

    Flow:
    1. Check username/email uniqueness
    2. Hash password (off the event loop)
    3. Create user record
    4. Issue token
    """
    user_repo = UserRepository(session)

    if await user_repo.username_or_email_exists(request.username, request.email):
        logger.info("Registration failed: duplicate identity", username=request.username)
        return _conflict()

    password_hash = await run_in_threadpool(hash_password, request.password)

    user = UserModel(
        username=request.username,
        email=request.email,
        password_hash=password_hash,
    )
    try:
        await user_repo.create(user)
        await session.commit()
    except IntegrityError:
        # Lost a race with a concurrent registration
        await session.rollback()
        logger.info("Registration failed: duplicate identity", username=request.username)
        return _conflict()

    await session.refresh(user)

    logger.info("User registered successfully", user_id=user.id, username=user.username)

    return AuthResponse(
        token=token_service.issue(str(user.id)),
        expires_in=token_service.ttl_seconds,
        user=UserResponse.model_validate(user),
    )


@router.post(
    "/login",
    status_code=status.HTTP_200_OK,
    response_model=AuthResponse,
    responses={
        401: {"model": ErrorResponse, "description": "Invalid credentials"},
    },
)
async def login(
    request: LoginRequest,
    token_service: TokenServiceDep,
    session: AsyncSession = Depends(get_db_session),
) -> AuthResponse | JSONResponse:
    """Authenticate a user and return a bearer token.

    Security:
    - All authentication failures return the same generic 401 message
    - A password check is always performed (against a dummy hash when the
      user does not exist) so timing does not reveal which usernames exist
    """
    auth_error = JSONResponse(
        status_code=status.HTTP_401_UNAUTHORIZED,
        content={
            "error": "Unauthorized",
            "message": "Invalid credentials",
        },
    )

    user_repo = UserRepository(session)
    hasher = get_password_hasher()

    user = await user_repo.get_by_login(request.username)

    if user is None:
        logger.info("Login failed: user not found", login=request.username)
        await run_in_threadpool(hasher.burn_verification, request.password)
        return auth_error

    if not await run_in_threadpool(verify_password, request.password, user.password_hash):
        logger.info("Login failed: invalid password", user_id=user.id)
        return auth_error

    if hasher.needs_rehash(user.password_hash):
        new_hash = await run_in_threadpool(hash_password, request.password)
        await user_repo.update_password_hash(user.id, new_hash)
        await session.commit()
        logger.info("Password hash upgraded", user_id=user.id)

    logger.info("User logged in successfully", user_id=user.id)

    return AuthResponse(
        token=token_service.issue(str(user.id)),
        expires_in=token_service.ttl_seconds,
        user=UserResponse.model_validate(user),
    )


@router.get("/me", response_model=UserResponse)
async def me(
    current_user: AuthenticatedUser,
    session: AsyncSession = Depends(get_db_session),
) -> UserResponse:
    """Return the authenticated user's public profile."""
    user = await UserRepository(session).get_by_id(current_user.user_id)
    return UserResponse.model_validate(user)
