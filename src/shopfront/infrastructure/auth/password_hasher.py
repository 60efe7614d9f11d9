"""Password hashing utility using Argon2.

Provides secure password hashing and verification using the Argon2id algorithm,
which is the winner of the Password Hashing Competition and recommended by OWASP.

Hashes are PHC strings such as ``$argon2id$v=19$m=65536,t=3,p=1$<salt>$<digest>``;
the salt and cost parameters travel inside the string, so callers only ever
store it and hand it back to :func:`verify_password`.
"""

from functools import cached_property, lru_cache

from argon2 import PasswordHasher, Type
from argon2.exceptions import HashingError, InvalidHashError, VerificationError

from shopfront.core.config import Settings, get_settings

# Verified against when a login names an unknown user, so that the
# response takes as long as a real password check.
_DUMMY_PASSWORD = "dummy_password_for_timing_safety"


class PasswordHashingError(Exception):
    """Raised when the hashing primitive itself fails (e.g. out of memory)."""

    pass


class CredentialHasher:
    """Argon2id hasher with explicit cost parameters.

    Instances hold no mutable state and are safe to share between threads.
    """

    def __init__(
        self,
        memory_cost: int = 65536,
        time_cost: int = 3,
        parallelism: int = 1,
    ) -> None:
        """Initialize the hasher.

        Args:
            memory_cost: Memory cost in KiB (65536 = 64 MiB).
            time_cost: Number of iterations.
            parallelism: Number of parallel lanes.
        """
        self._hasher = PasswordHasher(
            time_cost=time_cost,
            memory_cost=memory_cost,
            parallelism=parallelism,
            type=Type.ID,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "CredentialHasher":
        """Build a hasher from the configured cost parameters."""
        return cls(
            memory_cost=settings.password_memory_cost,
            time_cost=settings.password_time_cost,
            parallelism=settings.password_parallelism,
        )

    def hash(self, secret: str | bytes) -> str:
        """Hash a secret with a freshly generated random salt.

        Args:
            secret: The plaintext secret. ``str`` is UTF-8 encoded as-is,
                without Unicode normalization.

        Returns:
            The encoded Argon2id hash string.

        Raises:
            PasswordHashingError: If the underlying primitive fails or the
                secret is not encodable as UTF-8 (e.g. a lone surrogate).
        """
        try:
            return self._hasher.hash(secret)
        except (HashingError, UnicodeEncodeError) as e:
            raise PasswordHashingError("Failed to hash password") from e

    def verify(self, secret: str | bytes, hashed: str) -> bool:
        """Verify a secret against a stored hash.

        The digest comparison is Argon2's constant-time comparison.
        Malformed hashes are reported as a mismatch rather than raised.

        Returns:
            True if the secret matches, False otherwise.
        """
        try:
            return self._hasher.verify(hashed, secret)
        except (VerificationError, InvalidHashError, UnicodeEncodeError):
            return False

    def needs_rehash(self, hashed: str) -> bool:
        """Check if a hash was produced with different cost parameters.

        Unparseable hashes always need replacing.
        """
        try:
            return self._hasher.check_needs_rehash(hashed)
        except (InvalidHashError, ValueError):
            return True

    @cached_property
    def dummy_hash(self) -> str:
        """A valid hash of a throwaway password, computed on first use."""
        return self.hash(_DUMMY_PASSWORD)

    def burn_verification(self, secret: str | bytes) -> None:
        """Spend the time of one verification without checking anything real."""
        self.verify(secret, self.dummy_hash)


@lru_cache
def get_password_hasher() -> CredentialHasher:
    """Get the process-wide hasher built from settings."""
    return CredentialHasher.from_settings(get_settings())


def hash_password(password: str | bytes) -> str:
    """Hash a password using Argon2id.

    Example:
        >>> hashed = hash_password("SecureP@ss123!")
        >>> hashed.startswith("$argon2id$")
        True
    """
    return get_password_hasher().hash(password)


def verify_password(password: str | bytes, hashed: str) -> bool:
    """Verify a password against a hash.

    Example:
        >>> hashed = hash_password("SecureP@ss123!")
        >>> verify_password("SecureP@ss123!", hashed)
        True
        >>> verify_password("wrong", hashed)
        False
    """
    return get_password_hasher().verify(password, hashed)


def needs_rehash(hashed: str) -> bool:
    """Check if a password hash needs to be rehashed.

    This should be called after successful password verification.
    If True, the password should be rehashed with the current parameters.
    """
    return get_password_hasher().needs_rehash(hashed)
