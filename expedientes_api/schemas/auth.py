# expedientes_api/schemas/auth.py

from __future__ import annotations

from typing import Optional

from pydantic import Field

from expedientes_api.db.models import RolUsuario
from expedientes_api.schemas.common import APIInputModel, APIModel


class LoginRequest(APIInputModel):
    username: str = Field(..., min_length=1, max_length=64)
    password: str = Field(..., min_length=1)


class TokenVO(APIModel):
    """
    Access token returned by the login endpoint.

    The frontend stores `access_token` and sends it back as
    ``Authorization: Bearer <token>``.
    """

    access_token: str
    token_type: str = "bearer"
    expires_in: int = Field(..., description="Token lifetime in seconds.")


class UsuarioVO(APIModel):
    """
    Public view of a user. The password hash is never exposed.
    """

    id: int
    username: str
    nombre_completo: str
    email: Optional[str] = None
    rol: RolUsuario
    activo: bool = True


__all__ = ["LoginRequest", "TokenVO", "UsuarioVO"]
