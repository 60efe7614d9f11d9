"""Unit tests for bearer token issuance and validation."""

import base64
import json

import jwt
import pytest
from jwt.algorithms import HMACAlgorithm
from jwt.utils import base64url_encode

from shopfront.core.config import DEFAULT_TOKEN_TTL_SECONDS
from shopfront.infrastructure.auth import (
    FixedClock,
    MalformedTokenError,
    SignatureMismatchError,
    TokenClaims,
    TokenError,
    TokenExpiredError,
    TokenService,
)

SECRET = "unit-test-secret-key-with-at-least-32-bytes"
T0 = 1_700_000_000
B64URL_ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789-_"


def _b64(data: dict) -> str:
    raw = json.dumps(data, separators=(",", ":")).encode()
    return base64.urlsafe_b64encode(raw).rstrip(b"=").decode()


def _signed(header: str, payload: str) -> str:
    """Sign arbitrary segments with the test secret."""
    alg = HMACAlgorithm(HMACAlgorithm.SHA256)
    signature = alg.sign(f"{header}.{payload}".encode(), alg.prepare_key(SECRET))
    return f"{header}.{payload}.{base64url_encode(signature).decode()}"


def _replace_char(segment: str, index: int) -> str:
    original = segment[index]
    replacement = next(c for c in B64URL_ALPHABET if c != original)
    return segment[:index] + replacement + segment[index + 1 :]


@pytest.fixture
def service() -> TokenService:
    return TokenService(secret_key=SECRET, clock=FixedClock(T0))


class TestConstruction:
    """Tests for TokenService construction."""

    def test_empty_secret_rejected(self):
        with pytest.raises(ValueError):
            TokenService(secret_key="")

    @pytest.mark.parametrize("ttl", [0, -1])
    def test_non_positive_ttl_rejected(self, ttl):
        with pytest.raises(ValueError):
            TokenService(secret_key=SECRET, ttl_seconds=ttl)

    def test_default_ttl_is_24_hours(self):
        assert TokenService(secret_key=SECRET).ttl_seconds == 86400
        assert DEFAULT_TOKEN_TTL_SECONDS == 86400


class TestIssue:
    """Tests for TokenService.issue."""

    def test_issue_produces_three_unpadded_segments(self, service):
        token = service.issue("123")

        parts = token.split(".")
        assert len(parts) == 3
        assert all(parts)
        assert "=" not in token

    def test_issue_header_is_hs256_jwt(self, service):
        token = service.issue("123")

        assert jwt.get_unverified_header(token) == {"alg": "HS256", "typ": "JWT"}

    def test_issue_claims(self, service):
        token = service.issue("123")

        payload = jwt.decode(token, SECRET, algorithms=["HS256"], options={"verify_exp": False})
        assert payload == {"sub": "123", "iat": T0, "exp": T0 + 86400}

    def test_issue_uses_passed_clock(self, service):
        claims = service.validate(service.issue("123", clock=FixedClock(T0 - 100)))

        assert claims.iat == T0 - 100
        assert claims.exp == T0 - 100 + 86400

    def test_custom_ttl(self):
        service = TokenService(secret_key=SECRET, ttl_seconds=60, clock=FixedClock(T0))

        claims = service.validate(service.issue("1"))

        assert claims.exp - claims.iat == 60


class TestRoundTrip:
    """Tests that issued tokens validate back to their subject."""

    @pytest.mark.parametrize(
        "subject",
        [
            "123",
            "",
            "a" * 1000,
            "ユーザー-ü-🛒" * 100,
            "user with spaces and \"quotes\"",
        ],
    )
    def test_round_trip_preserves_subject(self, service, subject):
        claims = service.validate(service.issue(subject))

        assert isinstance(claims, TokenClaims)
        assert claims.sub == subject
        assert claims.subject == subject
        assert claims.exp - claims.iat == 86400

    def test_claims_properties(self, service):
        claims = service.validate(service.issue("42"))

        assert claims.issued_at == T0
        assert claims.expires_at == T0 + 86400


class TestExpiry:
    """Tests for expiry checked against the validator's clock."""

    def test_valid_one_second_before_expiry(self, service):
        token = service.issue("123")

        claims = service.validate(token, clock=FixedClock(T0 + 86399))

        assert claims.sub == "123"

    def test_valid_at_exact_expiry(self, service):
        token = service.issue("123")

        assert service.validate(token, clock=FixedClock(T0 + 86400)).sub == "123"

    def test_expired_one_second_after_expiry(self, service):
        token = service.issue("123")

        with pytest.raises(TokenExpiredError):
            service.validate(token, clock=FixedClock(T0 + 86401))

    def test_expired_via_service_clock(self):
        clock = FixedClock(T0)
        service = TokenService(secret_key=SECRET, clock=clock)
        token = service.issue("123")

        clock.advance(86401)

        with pytest.raises(TokenExpiredError):
            service.validate(token)

    def test_token_issued_in_future_is_accepted(self, service):
        """Test that only exp is judged; iat in the validator's future is fine."""
        token = service.issue("123", clock=FixedClock(T0 + 3600))

        assert service.validate(token).sub == "123"

    def test_expiry_checked_after_signature(self, service):
        """Test that an expired token with a bad signature reports the signature."""
        header, payload, signature = service.issue("123").split(".")
        forged = f"{header}.{payload}.{_replace_char(signature, 0)}"

        with pytest.raises(SignatureMismatchError):
            service.validate(forged, clock=FixedClock(T0 + 10 * 86400))


class TestTampering:
    """Tests for signature verification."""

    def test_every_single_character_change_in_signature_detected(self, service):
        header, payload, signature = service.issue("123").split(".")

        for index in range(len(signature)):
            tampered = f"{header}.{payload}.{_replace_char(signature, index)}"
            with pytest.raises(SignatureMismatchError):
                service.validate(tampered)

    def test_modified_claims_detected(self, service):
        header, _, signature = service.issue("123").split(".")
        forged_payload = _b64({"sub": "1", "iat": T0, "exp": T0 + 86400})

        with pytest.raises(SignatureMismatchError):
            service.validate(f"{header}.{forged_payload}.{signature}")

    def test_every_single_character_change_in_payload_detected(self, service):
        header, payload, signature = service.issue("123").split(".")

        for index in range(len(payload)):
            tampered = f"{header}.{_replace_char(payload, index)}.{signature}"
            with pytest.raises(SignatureMismatchError):
                service.validate(tampered)

    def test_every_single_character_change_in_header_detected(self, service):
        header, payload, signature = service.issue("123").split(".")

        for index in range(len(header)):
            tampered = f"{_replace_char(header, index)}.{payload}.{signature}"
            with pytest.raises(SignatureMismatchError):
                service.validate(tampered)

    def test_different_secret_detected(self, service):
        other = TokenService(
            secret_key="another-secret-key-with-at-least-32-bytes",
            clock=FixedClock(T0),
        )

        with pytest.raises(SignatureMismatchError):
            service.validate(other.issue("123"))

    def test_services_with_distinct_secrets_coexist(self):
        first = TokenService(secret_key=SECRET, clock=FixedClock(T0))
        second = TokenService(
            secret_key="another-secret-key-with-at-least-32-bytes",
            clock=FixedClock(T0),
        )

        assert first.validate(first.issue("a")).sub == "a"
        assert second.validate(second.issue("b")).sub == "b"


class TestMalformed:
    """Tests for structurally invalid tokens."""

    @pytest.mark.parametrize(
        "token",
        [
            "",
            "abc",
            "a.b",
            "a.b.c.d",
            "..",
            "abc.def.",
            "ab$.cd.ef",
            "a b.cd.ef",
            "abcde.abcd.abcd",
        ],
    )
    def test_bad_structure(self, service, token):
        with pytest.raises(MalformedTokenError):
            service.validate(token)

    def test_non_string_token(self, service):
        with pytest.raises(MalformedTokenError):
            service.validate(None)  # type: ignore[arg-type]

    def test_signed_header_not_json(self, service):
        _, payload, _ = service.issue("123").split(".")
        header = base64.urlsafe_b64encode(b"not json").rstrip(b"=").decode()

        with pytest.raises(MalformedTokenError):
            service.validate(_signed(header, payload))

    def test_signed_payload_not_json(self, service):
        header, _, _ = service.issue("123").split(".")
        payload = base64.urlsafe_b64encode(b"[1, 2").rstrip(b"=").decode()

        with pytest.raises(MalformedTokenError):
            service.validate(_signed(header, payload))

    @pytest.mark.parametrize(
        "claims",
        [
            {"iat": T0, "exp": T0 + 86400},
            {"sub": "1", "exp": T0 + 86400},
            {"sub": "1", "iat": T0},
            {"sub": 1, "iat": T0, "exp": T0 + 86400},
            {"sub": "1", "iat": "now", "exp": T0 + 86400},
            {"sub": "1", "iat": T0, "exp": "later"},
            {"sub": "1", "iat": T0, "exp": True},
        ],
    )
    def test_missing_or_ill_typed_claims(self, service, claims):
        """Test correctly signed tokens whose claims are wrong."""
        token = jwt.encode(claims, SECRET, algorithm="HS256")

        with pytest.raises(MalformedTokenError):
            service.validate(token)

    def test_unsigned_token_rejected(self, service):
        header = _b64({"alg": "none", "typ": "JWT"})
        payload = _b64({"sub": "1", "iat": T0, "exp": T0 + 86400})

        with pytest.raises(MalformedTokenError):
            service.validate(f"{header}.{payload}.")

    def test_all_errors_share_base(self):
        for error in (MalformedTokenError, SignatureMismatchError, TokenExpiredError):
            assert issubclass(error, TokenError)
