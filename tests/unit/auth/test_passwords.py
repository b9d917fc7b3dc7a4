"""Unit tests for bcrypt password hashing."""

from __future__ import annotations

import pytest

from recipe_service.auth.passwords import BcryptPasswordHasher, PasswordHasher


pytestmark = pytest.mark.unit


@pytest.fixture
def hasher() -> BcryptPasswordHasher:
    return BcryptPasswordHasher(rounds=4)


class TestBcryptPasswordHasher:
    """Tests for BcryptPasswordHasher."""

    def test_satisfies_protocol(self, hasher: BcryptPasswordHasher):
        """Should be usable wherever a PasswordHasher is expected."""
        assert isinstance(hasher, PasswordHasher)

    def test_hash_is_not_plaintext(self, hasher: BcryptPasswordHasher):
        """Should never store the plaintext."""
        digest = hasher.hash("Secret123")

        assert digest != "Secret123"
        assert digest.startswith("$2")

    def test_hash_is_salted(self, hasher: BcryptPasswordHasher):
        """Should produce a different digest each time."""
        assert hasher.hash("Secret123") != hasher.hash("Secret123")

    def test_verify_round_trip(self, hasher: BcryptPasswordHasher):
        """Should accept the right password and reject a wrong one."""
        digest = hasher.hash("Secret123")

        assert hasher.verify("Secret123", digest)
        assert not hasher.verify("secret123", digest)

    def test_verify_garbage_digest(self, hasher: BcryptPasswordHasher):
        """Should return False rather than raise for a non-bcrypt digest."""
        assert not hasher.verify("Secret123", "plaintext-leftover")

    def test_long_passwords_are_truncated_consistently(self, hasher: BcryptPasswordHasher):
        """Should hash and verify passwords beyond bcrypt's 72-byte limit."""
        long_password = "x" * 100
        digest = hasher.hash(long_password)

        assert hasher.verify(long_password, digest)

    def test_dummy_digest_is_stable_and_matches_nothing(self, hasher: BcryptPasswordHasher):
        """Should reuse one real bcrypt digest that no user password verifies against."""
        digest = hasher.dummy_digest

        assert digest is hasher.dummy_digest
        assert digest.startswith("$2")
        assert not hasher.verify("Secret123", digest)
