"""Bearer token issuance and validation.

Tokens are HS256 JWTs: ``base64url(header).base64url(claims).base64url(signature)``
carrying exactly the ``sub``, ``iat`` and ``exp`` claims. Every token lives for
the service's TTL (24 hours unless configured otherwise).

The service holds only immutable configuration (secret, TTL, clock) and is
safe to share between threads and requests. It never logs; every failure is
raised to the caller as a :class:`TokenError` subclass.
"""

import re

import jwt
from jwt.algorithms import HMACAlgorithm
from jwt.utils import base64url_decode, base64url_encode
from pydantic import ValidationError

from shopfront.core.config import DEFAULT_TOKEN_TTL_SECONDS, Settings
from shopfront.infrastructure.auth.clock import Clock, SystemClock
from shopfront.infrastructure.auth.token_types import TokenClaims

_SEGMENT_RE = re.compile(r"^[A-Za-z0-9_-]+$")


class TokenError(Exception):
    """Base exception for token-related errors."""

    pass


class MalformedTokenError(TokenError):
    """Raised when a token is not a well-formed three-segment token."""

    pass


class SignatureMismatchError(TokenError):
    """Raised when a token's signature does not match its contents."""

    pass


class TokenExpiredError(TokenError):
    """Raised when a token's expiry is in the past."""

    pass


class TokenEncodingError(TokenError):
    """Raised when a token cannot be signed or serialized."""

    pass


class TokenService:
    """Issue and validate signed, time-bounded bearer tokens."""

    ALGORITHM = "HS256"
    REQUIRED_CLAIMS = ("sub", "iat", "exp")

    def __init__(
        self,
        secret_key: str,
        ttl_seconds: int = DEFAULT_TOKEN_TTL_SECONDS,
        clock: Clock | None = None,
    ) -> None:
        """Initialize the token service.

        Args:
            secret_key: HMAC secret used to sign and verify tokens.
            ttl_seconds: Lifetime of every issued token.
            clock: Default time source. Defaults to the system clock.
        """
        if not secret_key:
            raise ValueError("secret_key must not be empty")
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be positive")
        self._secret_key = secret_key
        self._signer = HMACAlgorithm(HMACAlgorithm.SHA256)
        self._signing_key = self._signer.prepare_key(secret_key)
        self._ttl_seconds = ttl_seconds
        self._clock = clock or SystemClock()

    @classmethod
    def from_settings(cls, settings: Settings, clock: Clock | None = None) -> "TokenService":
        """Build a service from the configured secret and TTL."""
        return cls(
            secret_key=settings.token_secret,
            ttl_seconds=settings.token_ttl_seconds,
            clock=clock,
        )

    @property
    def ttl_seconds(self) -> int:
        return self._ttl_seconds

    def issue(self, subject: str, clock: Clock | None = None) -> str:
        """Create a signed token for ``subject``.

        The subject is embedded verbatim; empty, very long and non-ASCII
        subjects are all accepted.

        Args:
            subject: Identifier the token asserts (a user ID).
            clock: Time source for ``iat``. Defaults to the service clock.

        Returns:
            The encoded token string.

        Raises:
            TokenEncodingError: If signing or serialization fails.
        """
        now = (clock or self._clock).now_seconds()
        claims = {"sub": subject, "iat": now, "exp": now + self._ttl_seconds}
        try:
            return jwt.encode(claims, self._secret_key, algorithm=self.ALGORITHM)
        except (jwt.PyJWTError, TypeError, ValueError) as e:
            raise TokenEncodingError("Failed to encode token") from e

    def validate(self, token: str, clock: Clock | None = None) -> TokenClaims:
        """Validate a token's structure, signature and expiry.

        Expiry is judged against this service's own clock (or the one passed
        here), never against anything recorded at issuance. A token is still
        valid in the second it expires.

        Args:
            token: The encoded token string.
            clock: Time source for "now". Defaults to the service clock.

        Returns:
            The validated claims.

        Raises:
            MalformedTokenError: Wrong segment count, bad base64url, bad JSON,
                or missing/ill-typed claims.
            SignatureMismatchError: The signature does not match the raw
                header and claims segments.
            TokenExpiredError: ``exp`` is before now.
        """
        header_segment, payload_segment, signature_segment = self._split(token)

        # The signature is checked over the raw segments before anything is
        # parsed, so any altered character reads as tampering.
        signature = base64url_decode(signature_segment)
        # base64 ignores the spare low bits of the final character, so two
        # different encodings can decode to the same signature bytes.
        canonical = base64url_encode(signature).decode("ascii")
        signing_input = f"{header_segment}.{payload_segment}".encode("ascii")
        if canonical != signature_segment or not self._signer.verify(
            signing_input, self._signing_key, signature
        ):
            raise SignatureMismatchError("Invalid token signature")

        try:
            payload = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self.ALGORITHM],
                options={
                    "verify_signature": True,
                    "verify_exp": False,
                    "verify_iat": False,
                    "verify_nbf": False,
                    "require": list(self.REQUIRED_CLAIMS),
                },
            )
        except jwt.InvalidSignatureError as e:
            raise SignatureMismatchError("Invalid token signature") from e
        except jwt.InvalidTokenError as e:
            raise MalformedTokenError("Invalid token") from e

        try:
            claims = TokenClaims.model_validate(payload)
        except ValidationError as e:
            raise MalformedTokenError("Invalid token claims") from e

        now = (clock or self._clock).now_seconds()
        if claims.exp < now:
            raise TokenExpiredError("Token has expired")

        return claims

    @staticmethod
    def _split(token: str) -> list[str]:
        """Split a token into its three segments, checking each is base64url."""
        if not isinstance(token, str):
            raise MalformedTokenError("Token must be a string")

        parts = token.split(".")
        if len(parts) != 3:
            raise MalformedTokenError("Invalid token format: must have 3 parts")

        for part in parts:
            # A length of 1 mod 4 can never be produced by base64.
            if not _SEGMENT_RE.match(part) or len(part) % 4 == 1:
                raise MalformedTokenError("Invalid token format: bad base64url segment")

        return parts
