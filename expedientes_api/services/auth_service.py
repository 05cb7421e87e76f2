# expedientes_api/services/auth_service.py

from __future__ import annotations

import secrets
from functools import lru_cache
from typing import Optional

from sqlalchemy.orm import Session

from expedientes_api.config import Settings, get_settings
from expedientes_api.db import models
from expedientes_api.errors import (
    InactiveUserError,
    InvalidCredentialsError,
    InvalidTokenError,
)
from expedientes_api.logging import get_logger
from expedientes_api.repositories import UsuariosRepository
from expedientes_api.schemas.auth import TokenVO
from expedientes_api.security.passwords import hash_password, verify_password
from expedientes_api.security.tokens import create_access_token, decode_access_token

log = get_logger(__name__)


@lru_cache(maxsize=4)
def _dummy_hash(iterations: int) -> str:
    """Hash checked for unknown usernames so every login costs one PBKDF2 run."""
    return hash_password(secrets.token_urlsafe(16), iterations=iterations)


class AuthServiceImpl:
    """
    Password login and bearer-token resolution.

    Login failures never reveal whether the username exists.
    """

    def __init__(
        self,
        usuarios: UsuariosRepository,
        settings: Optional[Settings] = None,
    ) -> None:
        self._usuarios = usuarios
        self._settings = settings

    @classmethod
    def from_session(cls, session: Session) -> "AuthServiceImpl":
        return cls(UsuariosRepository(session))

    @property
    def settings(self) -> Settings:
        return self._settings or get_settings()

    def authenticate(self, username: str, password: str) -> TokenVO:
        usuario = self._usuarios.find_by_username(username.strip())

        if usuario is not None:
            stored_hash = usuario.password_hash
        else:
            stored_hash = _dummy_hash(self.settings.PASSWORD_HASH_ITERATIONS)
        password_ok = verify_password(password, stored_hash)

        if usuario is None or not usuario.activo or not password_ok:
            log.warning("login_failed", username=username)
            raise InvalidCredentialsError()

        token, expires_in = create_access_token(usuario, settings=self.settings)
        log.info("login_succeeded", username=usuario.username, rol=usuario.rol.value)
        return TokenVO(access_token=token, expires_in=expires_in)

    def current_user(self, token: str) -> models.Usuario:
        claims = decode_access_token(token, settings=self.settings)

        usuario = self._usuarios.find_by_id(claims.user_id)
        if usuario is None:
            raise InvalidTokenError("Token subject no longer exists.")
        if not usuario.activo:
            raise InactiveUserError(usuario.username)
        return usuario

    def register_user(
        self,
        *,
        username: str,
        password: str,
        nombre_completo: str,
        rol: models.RolUsuario = models.RolUsuario.CONSULTA,
        email: Optional[str] = None,
    ) -> models.Usuario:
        """
        Create a user with a hashed password. Used by ``manage.py create-user``
        and by test fixtures; there is no public sign-up endpoint.
        """
        usuario = models.Usuario(
            username=username.strip(),
            nombre_completo=nombre_completo,
            email=email,
            password_hash=hash_password(
                password, iterations=self.settings.PASSWORD_HASH_ITERATIONS
            ),
            rol=rol,
            activo=True,
        )
        self._usuarios.save(usuario)
        self._usuarios.session.commit()

        log.info("usuario_created", username=usuario.username, rol=rol.value)
        return usuario


__all__ = ["AuthServiceImpl"]
