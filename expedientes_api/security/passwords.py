# expedientes_api/security/passwords.py

"""
Password hashing.

Hashes are stored as ``pbkdf2_sha256$<iterations>$<salt_hex>$<hash_hex>``
so the iteration count can be raised later without invalidating existing
hashes.
"""

from __future__ import annotations

import hashlib
import secrets
from typing import Optional

from expedientes_api.config import get_settings

ALGORITHM = "pbkdf2_sha256"
SALT_BYTES = 16


def _derive(password: str, salt: bytes, iterations: int) -> bytes:
    return hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, iterations)


def hash_password(password: str, *, iterations: Optional[int] = None) -> str:
    iterations = iterations or get_settings().PASSWORD_HASH_ITERATIONS
    salt = secrets.token_bytes(SALT_BYTES)
    digest = _derive(password, salt, iterations)
    return f"{ALGORITHM}${iterations}${salt.hex()}${digest.hex()}"


def verify_password(password: str, stored_hash: str) -> bool:
    """
    Constant-time check of ``password`` against a stored hash.
    Malformed hashes never verify.
    """
    try:
        algorithm, iterations_raw, salt_hex, digest_hex = stored_hash.split("$")
        iterations = int(iterations_raw)
        salt = bytes.fromhex(salt_hex)
        expected = bytes.fromhex(digest_hex)
    except (ValueError, AttributeError):
        return False

    if algorithm != ALGORITHM or iterations <= 0:
        return False

    return secrets.compare_digest(_derive(password, salt, iterations), expected)


__all__ = ["hash_password", "verify_password"]
