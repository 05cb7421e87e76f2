# expedientes_api/repositories/tipos_expediente.py

from __future__ import annotations

from typing import Optional, Sequence

from sqlalchemy import select
from sqlalchemy.orm import Session

from ..db import models


class TiposExpedienteRepository:
    """
    Data access for the case-file type catalogue.
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    @property
    def session(self) -> Session:
        return self._session

    def find_all(self, *, only_active: bool = False) -> Sequence[models.TipoExpediente]:
        stmt = select(models.TipoExpediente)
        if only_active:
            stmt = stmt.where(models.TipoExpediente.activo.is_(True))
        stmt = stmt.order_by(models.TipoExpediente.codigo)
        return list(self.session.execute(stmt).scalars().all())

    def find_by_id(self, tipo_id: int) -> Optional[models.TipoExpediente]:
        if not models.fits_sql_integer(tipo_id):
            return None
        return self.session.get(models.TipoExpediente, tipo_id)

    def find_by_codigo(self, codigo: str) -> Optional[models.TipoExpediente]:
        stmt = select(models.TipoExpediente).where(
            models.TipoExpediente.codigo == codigo
        )
        return self.session.execute(stmt).scalar_one_or_none()

    def save(self, tipo: models.TipoExpediente) -> models.TipoExpediente:
        self.session.add(tipo)
        self.session.flush()
        return tipo


__all__ = ["TiposExpedienteRepository"]
