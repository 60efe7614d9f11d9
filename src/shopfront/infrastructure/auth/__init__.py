"""Authentication infrastructure components.

This module provides password hashing, bearer token services and the
clock abstraction the token service depends on.
"""

from shopfront.infrastructure.auth.clock import Clock, FixedClock, SystemClock
from shopfront.infrastructure.auth.password_hasher import (
    CredentialHasher,
    PasswordHashingError,
    get_password_hasher,
    hash_password,
    needs_rehash,
    verify_password,
)
from shopfront.infrastructure.auth.token_service import (
    MalformedTokenError,
    SignatureMismatchError,
    TokenEncodingError,
    TokenError,
    TokenExpiredError,
    TokenService,
)
from shopfront.infrastructure.auth.token_types import TokenClaims

__all__ = [
    "Clock",
    "CredentialHasher",
    "FixedClock",
    "MalformedTokenError",
    "PasswordHashingError",
    "SignatureMismatchError",
    "SystemClock",
    "TokenClaims",
    "TokenEncodingError",
    "TokenError",
    "TokenExpiredError",
    "TokenService",
    "get_password_hasher",
    "hash_password",
    "needs_rehash",
    "verify_password",
]
