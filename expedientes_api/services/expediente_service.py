# expedientes_api/services/expediente_service.py

from __future__ import annotations

from typing import List, Optional, Tuple

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from expedientes_api.converters import ExpedienteConverter
from expedientes_api.db import models
from expedientes_api.errors import (
    ArchivedExpedienteError,
    DuplicateExpedienteError,
    ExpedienteNotFoundError,
    TipoExpedienteNotFoundError,
    UsuarioNotFoundError,
)
from expedientes_api.logging import get_logger
from expedientes_api.repositories import (
    ExpedientesRepository,
    TiposExpedienteRepository,
    UsuariosRepository,
)
from expedientes_api.schemas.expedientes import (
    ExpedienteCreate,
    ExpedienteFilters,
    ExpedienteUpdate,
    ExpedienteVO,
)

log = get_logger(__name__)


def format_codigo(prefijo: str, anio: int, secuencia: int) -> str:
    return f"{prefijo}-{anio}-{secuencia:05d}"


class ExpedienteServiceImpl:
    """
    High-level service for working with expedientes.

    Responsibilities:
    - Enforce business rules (reference checks, code uniqueness, archived
      expedientes are read-only).
    - Generate sequential codes when the client does not supply one.
    - Delegate persistence to the repositories and own the commit.
    - Convert entities to VOs through `ExpedienteConverter`.
    """

    def __init__(
        self,
        expedientes: ExpedientesRepository,
        tipos: TiposExpedienteRepository,
        usuarios: UsuariosRepository,
        converter: Optional[ExpedienteConverter] = None,
    ) -> None:
        self._expedientes = expedientes
        self._tipos = tipos
        self._usuarios = usuarios
        self._converter = converter or ExpedienteConverter()

    @classmethod
    def from_session(cls, session: Session) -> "ExpedienteServiceImpl":
        return cls(
            ExpedientesRepository(session),
            TiposExpedienteRepository(session),
            UsuariosRepository(session),
        )

    @property
    def session(self) -> Session:
        return self._expedientes.session

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def find_all(
        self,
        filters: Optional[ExpedienteFilters] = None,
        *,
        limit: int = 100,
        offset: int = 0,
    ) -> Tuple[List[ExpedienteVO], int]:
        entities = self._expedientes.find_all(filters=filters, limit=limit, offset=offset)
        total = self._expedientes.count(filters=filters)
        return self._converter.to_vos(entities), total

    def find_by_id(self, expediente_id: int) -> ExpedienteVO:
        return self._converter.to_vo(self._get_or_raise(expediente_id))

    # -------------------------------------------------------------------------
    # Commands
    # -------------------------------------------------------------------------

    def create(self, payload: ExpedienteCreate, actor: models.Usuario) -> ExpedienteVO:
        tipo = self._require_tipo(payload.tipo_expediente_id)

        entity = self._converter.to_entity(payload)
        if entity.usuario_responsable_id is None:
            entity.usuario_responsable_id = actor.id
        else:
            self._require_usuario(entity.usuario_responsable_id)

        if entity.codigo is None:
            entity.codigo = self._next_codigo(tipo, payload.anio)
        else:
            self._ensure_codigo_available(tipo.id, payload.anio, entity.codigo)

        entity.fecha_creacion = models.utcnow()

        self._persist(entity)

        log.info(
            "expediente_created",
            expediente_id=entity.id,
            codigo=entity.codigo,
            anio=entity.anio,
            tipo=tipo.codigo,
            actor=actor.username,
        )
        return self._converter.to_vo(entity)

    def update(
        self,
        expediente_id: int,
        payload: ExpedienteUpdate,
        actor: models.Usuario,
    ) -> ExpedienteVO:
        entity = self._get_or_raise(expediente_id)
        if entity.cod_estado == models.EstadoExpediente.ARCHIVADO:
            raise ArchivedExpedienteError(expediente_id)

        changes = payload.model_dump(exclude_unset=True)
        # Explicit nulls on required columns are treated as "not sent".
        for required in ("tipo_expediente_id", "anio", "codigo", "cod_estado", "asunto"):
            if changes.get(required, "") is None:
                changes.pop(required)
        if not changes:
            return self._converter.to_vo(entity)

        # Re-sending the current references is not a change, even if the
        # type or user has since been deactivated.
        nuevo_tipo = changes.get("tipo_expediente_id", entity.tipo_expediente_id)
        if nuevo_tipo != entity.tipo_expediente_id:
            self._require_tipo(nuevo_tipo)
        nuevo_responsable = changes.get(
            "usuario_responsable_id", entity.usuario_responsable_id
        )
        if (
            nuevo_responsable is not None
            and nuevo_responsable != entity.usuario_responsable_id
        ):
            self._require_usuario(nuevo_responsable)

        target_tipo = changes.get("tipo_expediente_id", entity.tipo_expediente_id)
        target_anio = changes.get("anio", entity.anio)
        target_codigo = changes.get("codigo", entity.codigo)
        if (target_tipo, target_anio, target_codigo) != (
            entity.tipo_expediente_id,
            entity.anio,
            entity.codigo,
        ):
            self._ensure_codigo_available(
                target_tipo, target_anio, target_codigo, exclude_id=entity.id
            )

        self._converter.apply_update(entity, ExpedienteUpdate(**changes))
        self._persist(entity)

        log.info(
            "expediente_updated",
            expediente_id=entity.id,
            fields=sorted(changes),
            actor=actor.username,
        )
        return self._converter.to_vo(entity)

    def delete(self, expediente_id: int, actor: models.Usuario) -> None:
        entity = self._get_or_raise(expediente_id)
        codigo = entity.codigo

        self._expedientes.delete(entity)
        self.session.commit()

        log.info(
            "expediente_deleted",
            expediente_id=expediente_id,
            codigo=codigo,
            actor=actor.username,
        )

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _get_or_raise(self, expediente_id: int) -> models.Expediente:
        entity = self._expedientes.find_by_id(expediente_id)
        if entity is None:
            raise ExpedienteNotFoundError(expediente_id)
        return entity

    def _require_tipo(self, tipo_id: int) -> models.TipoExpediente:
        tipo = self._tipos.find_by_id(tipo_id)
        if tipo is None or not tipo.activo:
            raise TipoExpedienteNotFoundError(tipo_id)
        return tipo

    def _require_usuario(self, usuario_id: int) -> models.Usuario:
        usuario = self._usuarios.find_by_id(usuario_id)
        if usuario is None or not usuario.activo:
            raise UsuarioNotFoundError(usuario_id)
        return usuario

    def _ensure_codigo_available(
        self,
        tipo_id: int,
        anio: int,
        codigo: str,
        *,
        exclude_id: Optional[int] = None,
    ) -> None:
        existing = self._expedientes.find_by_codigo(tipo_id, anio, codigo)
        if existing is not None and existing.id != exclude_id:
            raise DuplicateExpedienteError(tipo_id, anio, codigo)

    def _next_codigo(self, tipo: models.TipoExpediente, anio: int) -> str:
        """
        Next free "<TIPO>-<anio>-<nnnnn>" code for the type and year.
        """
        secuencia = self._expedientes.count_by_tipo_and_anio(tipo.id, anio) + 1
        while True:
            codigo = format_codigo(tipo.codigo, anio, secuencia)
            if self._expedientes.find_by_codigo(tipo.id, anio, codigo) is None:
                return codigo
            secuencia += 1

    def _persist(self, entity: models.Expediente) -> None:
        """
        Flush, commit and reload `entity` so relationships reflect the new ids.

        A unique-constraint violation (concurrent insert of the same code)
        is reported as a duplicate.
        """
        key = (entity.tipo_expediente_id, entity.anio, entity.codigo)
        try:
            self._expedientes.save(entity)
            self.session.commit()
        except IntegrityError:
            self.session.rollback()
            raise DuplicateExpedienteError(*key) from None
        self.session.refresh(entity)


__all__ = ["ExpedienteServiceImpl", "format_codigo"]
