"""Persistence repositories for database operations."""

from shopfront.infrastructure.persistence.repositories.user_repository import (
    UserRepository,
)

__all__ = [
    "UserRepository",
]
