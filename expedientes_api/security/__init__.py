"""
Credential primitives: password hashing and JWT access tokens.

FastAPI wiring (bearer extraction, role checks) lives in
``expedientes_api.dependencies``.
"""

from .passwords import hash_password, verify_password
from .tokens import TokenClaims, create_access_token, decode_access_token

__all__ = [
    "hash_password",
    "verify_password",
    "TokenClaims",
    "create_access_token",
    "decode_access_token",
]
