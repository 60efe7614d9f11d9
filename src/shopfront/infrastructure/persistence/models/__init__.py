"""SQLAlchemy models for Shopfront tables.

All models inherit from the Base class defined in database.py and are
automatically created on application startup outside production.
"""

from shopfront.infrastructure.persistence.models.user import UserModel

__all__ = [
    "UserModel",
]
