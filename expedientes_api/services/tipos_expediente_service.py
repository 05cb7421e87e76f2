# expedientes_api/services/tipos_expediente_service.py

from __future__ import annotations

from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from expedientes_api.converters import TipoExpedienteConverter
from expedientes_api.db import models
from expedientes_api.errors import DuplicateTipoExpedienteError
from expedientes_api.logging import get_logger
from expedientes_api.repositories import TiposExpedienteRepository
from expedientes_api.schemas.tipos_expediente import (
    TipoExpedienteCreate,
    TipoExpedienteVO,
)

log = get_logger(__name__)


class TipoExpedienteServiceImpl:
    def __init__(
        self,
        repo: TiposExpedienteRepository,
        converter: Optional[TipoExpedienteConverter] = None,
    ) -> None:
        self._repo = repo
        self._converter = converter or TipoExpedienteConverter()

    @classmethod
    def from_session(cls, session: Session) -> "TipoExpedienteServiceImpl":
        return cls(TiposExpedienteRepository(session))

    def find_all(self, *, only_active: bool = False) -> List[TipoExpedienteVO]:
        return self._converter.to_vos(self._repo.find_all(only_active=only_active))

    def create(self, payload: TipoExpedienteCreate, actor: models.Usuario) -> TipoExpedienteVO:
        if self._repo.find_by_codigo(payload.codigo) is not None:
            raise DuplicateTipoExpedienteError(payload.codigo)

        try:
            tipo = self._repo.save(self._converter.to_entity(payload))
            self._repo.session.commit()
        except IntegrityError:
            # Lost a race with a concurrent insert of the same code.
            self._repo.session.rollback()
            raise DuplicateTipoExpedienteError(payload.codigo) from None

        log.info(
            "tipo_expediente_created",
            tipo_expediente_id=tipo.id,
            codigo=tipo.codigo,
            actor=actor.username,
        )
        return self._converter.to_vo(tipo)


__all__ = ["TipoExpedienteServiceImpl"]
