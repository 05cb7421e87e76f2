# expedientes_api/security/tokens.py

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

from jose import ExpiredSignatureError, JWTError, jwt

from expedientes_api.config import Settings, get_settings
from expedientes_api.db.models import Usuario
from expedientes_api.errors import InvalidTokenError


@dataclass
class TokenClaims:
    sub: str
    username: str
    rol: str
    claims: dict[str, Any]

    @property
    def user_id(self) -> int:
        return int(self.sub)


def create_access_token(
    usuario: Usuario,
    *,
    settings: Optional[Settings] = None,
    now: Optional[datetime] = None,
) -> tuple[str, int]:
    """
    Sign an access token for ``usuario``.

    Returns the encoded token and its lifetime in seconds.
    """
    settings = settings or get_settings()
    now = now or datetime.now(timezone.utc)
    lifetime = timedelta(minutes=settings.JWT_EXPIRE_MINUTES)

    claims = {
        "sub": str(usuario.id),
        "username": usuario.username,
        "rol": usuario.rol.value,
        "iss": settings.JWT_ISSUER,
        "iat": now,
        "exp": now + lifetime,
    }
    token = jwt.encode(claims, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)
    return token, int(lifetime.total_seconds())


def decode_access_token(token: str, *, settings: Optional[Settings] = None) -> TokenClaims:
    """
    Verify signature, issuer and expiry of ``token``.

    Raises InvalidTokenError for anything that does not check out.
    """
    if not token:
        raise InvalidTokenError("Missing token.")

    settings = settings or get_settings()
    try:
        claims = jwt.decode(
            token,
            settings.JWT_SECRET_KEY,
            algorithms=[settings.JWT_ALGORITHM],
            issuer=settings.JWT_ISSUER,
        )
    except ExpiredSignatureError:
        raise InvalidTokenError("Token has expired.") from None
    except JWTError:
        raise InvalidTokenError() from None

    sub = str(claims.get("sub") or "")
    if not sub.isdigit():
        raise InvalidTokenError("Token subject is invalid.")

    return TokenClaims(
        sub=sub,
        username=str(claims.get("username") or ""),
        rol=str(claims.get("rol") or ""),
        claims=claims,
    )


__all__ = ["TokenClaims", "create_access_token", "decode_access_token"]
