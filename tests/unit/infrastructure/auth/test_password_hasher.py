"""Unit tests for password hashing utilities."""

import pytest

from shopfront.infrastructure.auth.password_hasher import (
    CredentialHasher,
    PasswordHashingError,
    hash_password,
    needs_rehash,
    verify_password,
)


@pytest.fixture(scope="module")
def hasher() -> CredentialHasher:
    """Hasher with the production cost parameters."""
    return CredentialHasher()


class TestHash:
    """Tests for CredentialHasher.hash."""

    def test_hash_returns_argon2id_phc_string(self, hasher):
        """Test that the hash is an Argon2id PHC string with the default costs."""
        hashed = hasher.hash("SecureP@ss123!")

        assert hashed.startswith("$argon2id$v=19$m=65536,t=3,p=1$")

    def test_hash_different_for_same_input(self, hasher):
        """Test that hashing the same secret twice produces different hashes (due to salt)."""
        hash1 = hasher.hash("SecureP@ss123!")
        hash2 = hasher.hash("SecureP@ss123!")

        assert hash1 != hash2
        assert hasher.verify("SecureP@ss123!", hash1) is True
        assert hasher.verify("SecureP@ss123!", hash2) is True

    def test_hash_empty_secret(self, hasher):
        hashed = hasher.hash("")

        assert hasher.verify("", hashed) is True
        assert hasher.verify("x", hashed) is False

    def test_hash_non_ascii_secret(self, hasher):
        """Test that non-ASCII secrets are hashed as UTF-8."""
        secret = "pässwörd-密码-🔑"
        hashed = hasher.hash(secret)

        assert hasher.verify(secret, hashed) is True
        assert hasher.verify("passwort-密码-🔑", hashed) is False

    def test_hash_long_secret(self, hasher):
        secret = "correct horse battery staple " * 200
        hashed = hasher.hash(secret)

        assert hasher.verify(secret, hashed) is True
        assert hasher.verify(secret[:-1], hashed) is False

    def test_hash_bytes_secret(self, hasher):
        hashed = hasher.hash(b"raw-bytes-secret")

        assert hasher.verify(b"raw-bytes-secret", hashed) is True
        assert hasher.verify("raw-bytes-secret", hashed) is True

    def test_hash_unencodable_secret_raises_hashing_error(self, hasher):
        """Test that a lone surrogate is reported as a hashing failure."""
        with pytest.raises(PasswordHashingError):
            hasher.hash("ab\ud800cd")

    def test_verify_unencodable_secret_returns_false(self, hasher):
        assert hasher.verify("ab\ud800cd", hasher.hash("abcd")) is False


class TestVerify:
    """Tests for CredentialHasher.verify."""

    def test_verify_incorrect_secret(self, hasher):
        hashed = hasher.hash("SecureP@ss123!")

        assert hasher.verify("WrongPassword", hashed) is False

    def test_verify_case_sensitive(self, hasher):
        hashed = hasher.hash("SecureP@ss123!")

        assert hasher.verify("securep@ss123!", hashed) is False

    @pytest.mark.parametrize(
        "bad_hash",
        [
            "",
            "not-a-hash",
            "$argon2id$",
            "$argon2id$v=19$m=65536,t=3,p=1$",
            "$argon2id$v=19$m=65536,t=3,p=1$c2FsdA$!!!notbase64!!!",
            "$2b$12$KIXQJxJYhCjVfZEdqvbOsu7UKZJjW6ZN7H1uGqW4a8vGEXxDWqGz2",
        ],
    )
    def test_verify_malformed_hash_returns_false(self, hasher, bad_hash):
        """Test that structurally invalid hashes are a mismatch, never an exception."""
        assert hasher.verify("anything", bad_hash) is False

    def test_verify_truncated_hash_returns_false(self, hasher):
        hashed = hasher.hash("SecureP@ss123!")

        assert hasher.verify("SecureP@ss123!", hashed[:-10]) is False

    def test_verify_hash_made_with_other_parameters(self, hasher):
        """Test that parameters are read from the stored hash, not the hasher."""
        cheap = CredentialHasher(memory_cost=1024, time_cost=1)
        hashed = cheap.hash("SecureP@ss123!")

        assert hasher.verify("SecureP@ss123!", hashed) is True


class TestNeedsRehash:
    """Tests for CredentialHasher.needs_rehash."""

    def test_same_parameters_do_not_need_rehash(self, hasher):
        assert hasher.needs_rehash(hasher.hash("secret")) is False

    def test_weaker_parameters_need_rehash(self, hasher):
        cheap = CredentialHasher(memory_cost=1024, time_cost=1)

        assert hasher.needs_rehash(cheap.hash("secret")) is True

    def test_invalid_hash_needs_rehash(self, hasher):
        assert hasher.needs_rehash("not-a-hash") is True


class TestDummyVerification:
    """Tests for the timing guard used on unknown users."""

    def test_dummy_hash_is_valid_argon2id(self, hasher):
        assert hasher.dummy_hash.startswith("$argon2id$")
        assert hasher.dummy_hash is hasher.dummy_hash

    def test_burn_verification_returns_none(self, hasher):
        assert hasher.burn_verification("any-password") is None


class TestModuleFunctions:
    """Tests for the settings-backed module-level helpers."""

    def test_hash_and_verify_password(self):
        hashed = hash_password("SecureP@ss123!")

        assert hashed.startswith("$argon2id$")
        assert verify_password("SecureP@ss123!", hashed) is True
        assert verify_password("WrongPassword", hashed) is False

    def test_needs_rehash_uses_configured_parameters(self):
        assert needs_rehash(hash_password("secret")) is False
        assert needs_rehash(CredentialHasher().hash("secret")) is True
