# expedientes_api/repositories/usuarios.py

from __future__ import annotations

from typing import Optional, Sequence

from sqlalchemy import select
from sqlalchemy.orm import Session

from ..db import models


class UsuariosRepository:
    """
    Data access for application users.
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    @property
    def session(self) -> Session:
        return self._session

    def find_all(self) -> Sequence[models.Usuario]:
        stmt = select(models.Usuario).order_by(models.Usuario.username)
        return list(self.session.execute(stmt).scalars().all())

    def find_by_id(self, usuario_id: int) -> Optional[models.Usuario]:
        if not models.fits_sql_integer(usuario_id):
            return None
        return self.session.get(models.Usuario, usuario_id)

    def find_by_username(self, username: str) -> Optional[models.Usuario]:
        stmt = select(models.Usuario).where(models.Usuario.username == username)
        return self.session.execute(stmt).scalar_one_or_none()

    def save(self, usuario: models.Usuario) -> models.Usuario:
        self.session.add(usuario)
        self.session.flush()
        return usuario


__all__ = ["UsuariosRepository"]
