"""Password digest and session token primitives.

Passwords are hashed with argon2id; the stored digest is the full encoded
hash string, so parameters and salt travel with it.
"""
from __future__ import annotations

import secrets

import argon2

TOKEN_BYTES = 32

_hasher = argon2.PasswordHasher(
    time_cost=2,
    memory_cost=65536,  # 64 MB
    parallelism=1,
    hash_len=32,
    salt_len=16,
    type=argon2.Type.ID,
)


def hash_password(password: str) -> str:
    """Return the argon2id hash of ``password``."""
    return _hasher.hash(password)


def verify_password(password: str, digest: str) -> bool:
    """Check ``password`` against a digest produced by :func:`hash_password`.

    Args:
        password: Plain-text password submitted by the client.
        digest: Stored argon2 hash string.

    Returns:
        True if the password matches; False for a mismatch or a malformed digest.
    """
    try:
        return _hasher.verify(digest, password)
    except argon2.exceptions.VerificationError:
        # Covers VerifyMismatchError and undecodable argon2 strings.
        return False
    except argon2.exceptions.InvalidHashError:
        return False


def needs_rehash(digest: str) -> bool:
    """Return True when ``digest`` was made with weaker parameters than the current ones."""
    return _hasher.check_needs_rehash(digest)


def generate_session_token() -> str:
    """Return an opaque, hex-encoded random session token."""
    return secrets.token_hex(TOKEN_BYTES)


# Verified against for unknown usernames so both login failure paths cost the same.
DUMMY_DIGEST = hash_password(secrets.token_hex(8))
