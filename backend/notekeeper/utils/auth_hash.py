"""Password hashing using passlib.

``PasswordHasher`` wraps a passlib ``CryptContext`` configured for bcrypt. The
bcrypt cost can be set through ``Settings.bcrypt_rounds``; when unset, passlib's
default is used. If the bcrypt backend cannot initialise, hashing falls back to
pbkdf2_sha256 (with its own iteration count, never the bcrypt cost)
so the service still starts.
"""
from __future__ import annotations

import warnings
from typing import Optional

from passlib.context import CryptContext

# passlib 1.7.4 default for pbkdf2_sha256
PBKDF2_FALLBACK_ROUNDS = 29_000


def _build_context(rounds: Optional[int]) -> CryptContext:
    try:
        if rounds:
            ctx = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=rounds)
        else:
            ctx = CryptContext(schemes=["bcrypt"], deprecated="auto")
        ctx.hash("test")
        return ctx
    except Exception as exc:
        warnings.warn(
            "bcrypt backend not available or failed to initialize; falling back to pbkdf2_sha256. "
            f"Original error: {exc}",
            RuntimeWarning,
        )
    # bcrypt cost is log2 rounds; it does not carry over to pbkdf2 iterations
    return CryptContext(
        schemes=["pbkdf2_sha256"],
        deprecated="auto",
        pbkdf2_sha256__rounds=PBKDF2_FALLBACK_ROUNDS,
    )


class PasswordHasher:
    def __init__(self, rounds: Optional[int] = None):
        self.context = _build_context(rounds)

    def hash(self, plain: str) -> str:
        """Hash a plaintext password and return the encoded hash string."""
        if plain is None:
            raise ValueError("Password must not be None")
        return self.context.hash(plain)

    def verify(self, plain: str, hashed: str) -> bool:
        """Verify a plaintext password against a stored hash.

        Returns True if the password matches, False otherwise (including for
        malformed hashes).
        """
        if plain is None or hashed is None:
            return False
        try:
            return self.context.verify(plain, hashed)
        except (ValueError, TypeError):
            return False
