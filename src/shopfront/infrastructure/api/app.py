"""FastAPI application factory and configuration.

This module provides the application factory function for creating
and configuring the FastAPI application with all middleware, routes,
and lifecycle handlers.
"""

import uuid
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from shopfront.core.config import get_settings
from shopfront.core.logging import (
    bind_correlation_id,
    clear_context,
    configure_logging,
    get_logger,
)
from shopfront.domain.services import CartService, ProductService
from shopfront.infrastructure.auth import TokenService
from shopfront.infrastructure.persistence.database import (
    close_database,
    get_db_manager,
    init_database,
)

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager.

    Configures logging, initializes the database on startup and closes it
    on shutdown.
    """
    settings = get_settings()

    configure_logging(settings)

    logger.info(
        "Starting Shopfront",
        app_name=settings.app_name,
        version=settings.app_version,
        environment=settings.environment,
    )

    if settings.uses_default_token_secret:
        logger.warning(
            "Using the built-in development token secret; "
            "set SHOPFRONT_TOKEN_SECRET before deploying"
        )

    try:
        await init_database()
        logger.info("Database initialized successfully")
    except Exception as e:
        logger.error("Failed to initialize database", error=str(e))
        raise

    yield

    logger.info("Shutting down Shopfront")
    await close_database()
    logger.info("Database connection closed")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    The token service, catalog and cart store live on ``app.state`` for
    the lifetime of the application.

    Returns:
        FastAPI: Configured FastAPI application instance.
    """
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Storefront API with bearer-token authentication",
        docs_url="/docs" if settings.is_development else None,
        redoc_url="/redoc" if settings.is_development else None,
        openapi_url="/openapi.json" if settings.is_development else None,
        lifespan=lifespan,
    )

    app.state.token_service = TokenService.from_settings(settings)
    app.state.product_service = ProductService()
    app.state.cart_service = CartService()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )

    register_health_check(app)
    register_routes(app)
    register_exception_handlers(app)
    register_middleware(app)

    return app


def register_health_check(app: FastAPI) -> None:
    """Register health check endpoints."""

    @app.get("/health", tags=["health"])
    async def health_check():
        """Basic health check endpoint.

        Returns 200 if the service is running. Does not check
        database connectivity.
        """
        return {
            "status": "healthy",
            "service": get_settings().app_name,
            "version": get_settings().app_version,
        }

    @app.get("/ready", tags=["health"])
    async def readiness_check():
        """Readiness check endpoint, including database connectivity."""
        settings = get_settings()
        db_healthy = await get_db_manager().check_connection()

        if db_healthy:
            return {
                "status": "ready",
                "service": settings.app_name,
                "version": settings.app_version,
                "database": "connected",
            }
        return JSONResponse(
            status_code=503,
            content={
                "status": "not_ready",
                "service": settings.app_name,
                "database": "disconnected",
            },
        )


def register_routes(app: FastAPI) -> None:
    """Register API routes under the configured prefix."""
    from shopfront.infrastructure.api.routes import auth_router, cart_router, products_router

    settings = get_settings()

    app.include_router(auth_router, prefix=f"{settings.api_prefix}/auth", tags=["auth"])
    app.include_router(
        products_router, prefix=f"{settings.api_prefix}/products", tags=["products"]
    )
    app.include_router(cart_router, prefix=f"{settings.api_prefix}/cart", tags=["cart"])

    @app.get(settings.api_prefix, tags=["root"])
    async def api_root():
        """API root endpoint."""
        return {
            "name": settings.app_name,
            "version": settings.app_version,
            "api_version": "v1",
        }


def register_exception_handlers(app: FastAPI) -> None:
    """Register global exception handlers."""

    @app.exception_handler(Exception)
    async def global_exception_handler(request, exc):
        """Handle uncaught exceptions."""
        logger.error(
            "Unhandled exception",
            path=str(request.url),
            method=request.method,
            error=str(exc),
            exc_type=type(exc).__name__,
        )
        return JSONResponse(
            status_code=500,
            content={
                "error": "Internal server error",
                "detail": str(exc) if get_settings().debug else "An unexpected error occurred",
            },
        )


def register_middleware(app: FastAPI) -> None:
    """Register custom middleware."""

    @app.middleware("http")
    async def logging_middleware(request, call_next):
        """Log every request and tag it with a correlation ID."""
        correlation_id = request.headers.get("X-Correlation-ID", f"cid_{uuid.uuid4().hex[:12]}")
        bind_correlation_id(correlation_id)

        logger.info(
            "Request started",
            method=request.method,
            path=str(request.url.path),
        )

        try:
            response = await call_next(request)
            logger.info(
                "Request completed",
                method=request.method,
                path=str(request.url.path),
                status_code=response.status_code,
            )
            response.headers["X-Correlation-ID"] = correlation_id
            return response
        finally:
            clear_context()


app = create_app()
