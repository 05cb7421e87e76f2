# expedientes_api/converters/catalog_converters.py

from __future__ import annotations

from typing import Iterable, List

from expedientes_api.db import models
from expedientes_api.schemas.auth import UsuarioVO
from expedientes_api.schemas.tipos_expediente import (
    TipoExpedienteCreate,
    TipoExpedienteVO,
)


class TipoExpedienteConverter:
    def to_vo(self, entity: models.TipoExpediente) -> TipoExpedienteVO:
        return TipoExpedienteVO.model_validate(entity)

    def to_vos(self, entities: Iterable[models.TipoExpediente]) -> List[TipoExpedienteVO]:
        return [self.to_vo(e) for e in entities]

    def to_entity(self, payload: TipoExpedienteCreate) -> models.TipoExpediente:
        return models.TipoExpediente(
            codigo=payload.codigo,
            nombre=payload.nombre.strip(),
            descripcion=payload.descripcion,
            activo=payload.activo,
        )


class UsuarioConverter:
    """Maps users to their public VO; `password_hash` is not part of it."""

    def to_vo(self, entity: models.Usuario) -> UsuarioVO:
        return UsuarioVO.model_validate(entity)

    def to_vos(self, entities: Iterable[models.Usuario]) -> List[UsuarioVO]:
        return [self.to_vo(e) for e in entities]


__all__ = ["TipoExpedienteConverter", "UsuarioConverter"]
