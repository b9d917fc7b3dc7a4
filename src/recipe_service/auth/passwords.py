"""One-way password hashing."""

from __future__ import annotations

from functools import cached_property
from typing import Protocol, runtime_checkable

import bcrypt


# bcrypt only looks at the first 72 bytes; newer releases raise instead of
# truncating silently, so truncate explicitly on both hash and verify.
_BCRYPT_MAX_BYTES = 72


@runtime_checkable
class PasswordHasher(Protocol):
    """Salted one-way hash with verification."""

    def hash(self, plaintext: str) -> str: ...

    def verify(self, plaintext: str, digest: str) -> bool: ...

    @property
    def dummy_digest(self) -> str:
        """A digest of no real password, checked when no account matches."""
        ...


class BcryptPasswordHasher:
    """bcrypt-backed :class:`PasswordHasher`.

    Args:
        rounds: Log2 cost factor. 12 in production; tests use the minimum (4).
    """

    def __init__(self, rounds: int = 12) -> None:
        self.rounds = rounds

    @staticmethod
    def _encode(plaintext: str) -> bytes:
        return plaintext.encode("utf-8")[:_BCRYPT_MAX_BYTES]

    def hash(self, plaintext: str) -> str:
        return bcrypt.hashpw(
            self._encode(plaintext), bcrypt.gensalt(rounds=self.rounds)
        ).decode("ascii")

    @cached_property
    def dummy_digest(self) -> str:
        return self.hash("not-a-real-password")

    def verify(self, plaintext: str, digest: str) -> bool:
        try:
            return bcrypt.checkpw(self._encode(plaintext), digest.encode("ascii"))
        except ValueError:
            # Stored value is not a bcrypt hash
            return False
