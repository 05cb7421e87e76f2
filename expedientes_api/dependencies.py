# expedientes_api/dependencies.py
from __future__ import annotations

from typing import Callable, Optional

from fastapi import Depends, Security
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from expedientes_api.db.models import RolUsuario, Usuario
from expedientes_api.db.session import get_session
from expedientes_api.errors import (
    InvalidTokenError,
    NotAuthenticatedError,
    PermissionDeniedError,
)
from expedientes_api.logging import get_logger
from expedientes_api.services import AuthService, AuthServiceImpl

logger = get_logger(__name__)

# auto_error=False so missing credentials go through our own 401 envelope
# instead of FastAPI's default 403.
bearer_scheme = HTTPBearer(auto_error=False)


def get_auth_service(session: Session = Depends(get_session)) -> AuthService:
    return AuthServiceImpl.from_session(session)


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Security(bearer_scheme),
    auth: AuthService = Depends(get_auth_service),
) -> Usuario:
    """
    Resolve the ``Authorization: Bearer <token>`` header to a user.

    - Missing header            -> 401 not_authenticated
    - Not a bearer scheme       -> 401 invalid_token
    - Bad / expired token       -> 401 invalid_token
    - Token of an inactive user -> 403 inactive_user
    """
    if credentials is None:
        raise NotAuthenticatedError()
    if credentials.scheme.lower() != "bearer":
        raise InvalidTokenError("Authorization scheme must be Bearer.")

    return auth.current_user(credentials.credentials.strip())


def require_roles(*roles: RolUsuario) -> Callable[..., Usuario]:
    """
    Build a dependency that only lets users with one of ``roles`` through.

        @router.delete("/{id}")
        def delete(user: Usuario = Depends(require_roles(RolUsuario.ADMIN))):
            ...
    """
    allowed = tuple(r.value for r in roles)

    def _checker(user: Usuario = Depends(get_current_user)) -> Usuario:
        if user.rol.value not in allowed:
            logger.info(
                "permission_denied",
                username=user.username,
                rol=user.rol.value,
                allowed=list(allowed),
            )
            raise PermissionDeniedError(user.rol.value, allowed)
        return user

    return _checker


require_writer = require_roles(RolUsuario.ADMIN, RolUsuario.GESTOR)
require_admin = require_roles(RolUsuario.ADMIN)


__all__ = [
    "bearer_scheme",
    "get_auth_service",
    "get_current_user",
    "require_roles",
    "require_writer",
    "require_admin",
]
