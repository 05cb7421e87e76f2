# expedientes_api/converters/expediente_converter.py

from __future__ import annotations

from datetime import datetime, timezone
from typing import Iterable, List

from expedientes_api.db import models
from expedientes_api.schemas.expedientes import (
    ExpedienteCreate,
    ExpedienteUpdate,
    ExpedienteVO,
)


def _as_utc(value: datetime) -> datetime:
    # SQLite drops the offset on the way back; stored values are always UTC.
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class ExpedienteConverter:
    """
    Translation layer between the `Expediente` ORM entity and its VOs.

    Field mapping is one-to-one; the only additions are the display names
    pulled from the loaded relationships.
    """

    def to_vo(self, entity: models.Expediente) -> ExpedienteVO:
        tipo = entity.tipo_expediente
        responsable = entity.usuario_responsable

        return ExpedienteVO(
            id=entity.id,
            tipo_expediente_id=entity.tipo_expediente_id,
            tipo_expediente_nombre=tipo.nombre if tipo is not None else None,
            anio=entity.anio,
            codigo=entity.codigo,
            fecha_creacion=_as_utc(entity.fecha_creacion),
            cod_estado=entity.cod_estado,
            usuario_responsable_id=entity.usuario_responsable_id,
            usuario_responsable_nombre=(
                responsable.nombre_completo if responsable is not None else None
            ),
            asunto=entity.asunto,
        )

    def to_vos(self, entities: Iterable[models.Expediente]) -> List[ExpedienteVO]:
        return [self.to_vo(e) for e in entities]

    def to_entity(self, payload: ExpedienteCreate) -> models.Expediente:
        """
        Build a new, unsaved entity from a create payload.

        `codigo` may still be None here; the service fills it in before
        the entity is persisted.
        """
        return models.Expediente(
            tipo_expediente_id=payload.tipo_expediente_id,
            anio=payload.anio,
            codigo=payload.codigo,
            cod_estado=payload.cod_estado or models.EstadoExpediente.ABIERTO,
            usuario_responsable_id=payload.usuario_responsable_id,
            asunto=payload.asunto.strip(),
        )

    def apply_update(
        self,
        entity: models.Expediente,
        payload: ExpedienteUpdate,
    ) -> models.Expediente:
        """
        Copy onto `entity` only the fields the client actually sent.
        """
        for field_name, value in payload.model_dump(exclude_unset=True).items():
            setattr(entity, field_name, value)
        return entity


__all__ = ["ExpedienteConverter"]
