# expedientes_api/repositories/expedientes.py

from __future__ import annotations

from typing import Any, Optional, Sequence

from sqlalchemy import Select, func, or_, select
from sqlalchemy.orm import Session

from ..db import models
from ..schemas.expedientes import ExpedienteFilters


class ExpedientesRepository:
    """
    Thin data-access layer around the Expediente model.

    Write operations flush but never commit; the service owns the
    transaction.
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @property
    def session(self) -> Session:
        return self._session

    def _base_select(self) -> Select[Any]:
        return select(models.Expediente)

    def _apply_filters(
        self,
        stmt: Select[Any],
        filters: Optional[ExpedienteFilters],
    ) -> Select[Any]:
        if filters is None:
            return stmt

        if filters.anio is not None:
            stmt = stmt.where(models.Expediente.anio == filters.anio)
        if filters.tipo_expediente_id is not None:
            stmt = stmt.where(
                models.Expediente.tipo_expediente_id == filters.tipo_expediente_id
            )
        if filters.cod_estado is not None:
            stmt = stmt.where(models.Expediente.cod_estado == filters.cod_estado)
        if filters.usuario_responsable_id is not None:
            stmt = stmt.where(
                models.Expediente.usuario_responsable_id == filters.usuario_responsable_id
            )
        if filters.q and filters.q.strip():
            # autoescape: "%" and "_" in the search text match literally.
            needle = filters.q.strip().lower()
            stmt = stmt.where(
                or_(
                    func.lower(models.Expediente.asunto).contains(needle, autoescape=True),
                    func.lower(models.Expediente.codigo).contains(needle, autoescape=True),
                )
            )
        return stmt

    # ------------------------------------------------------------------
    # Read operations
    # ------------------------------------------------------------------

    def find_all(
        self,
        *,
        filters: Optional[ExpedienteFilters] = None,
        limit: int = 100,
        offset: int = 0,
    ) -> Sequence[models.Expediente]:
        """
        Return a page of expedientes, newest first.
        """
        stmt = self._apply_filters(self._base_select(), filters)
        stmt = stmt.order_by(
            models.Expediente.fecha_creacion.desc(),
            models.Expediente.id.desc(),
        )

        if offset:
            stmt = stmt.offset(offset)
        if limit:
            stmt = stmt.limit(limit)

        result = self.session.execute(stmt)
        return list(result.scalars().all())

    def count(self, *, filters: Optional[ExpedienteFilters] = None) -> int:
        stmt = self._apply_filters(
            select(func.count()).select_from(models.Expediente),
            filters,
        )
        return int(self.session.execute(stmt).scalar_one())

    def find_by_id(self, expediente_id: int) -> Optional[models.Expediente]:
        """
        Fetch a single expediente by primary key, or None if it does not exist.
        """
        if not models.fits_sql_integer(expediente_id):
            return None
        return self.session.get(models.Expediente, expediente_id)

    def find_by_codigo(
        self,
        tipo_expediente_id: int,
        anio: int,
        codigo: str,
    ) -> Optional[models.Expediente]:
        stmt = self._base_select().where(
            models.Expediente.tipo_expediente_id == tipo_expediente_id,
            models.Expediente.anio == anio,
            models.Expediente.codigo == codigo,
        )
        return self.session.execute(stmt).scalar_one_or_none()

    def count_by_tipo_and_anio(self, tipo_expediente_id: int, anio: int) -> int:
        stmt = (
            select(func.count())
            .select_from(models.Expediente)
            .where(
                models.Expediente.tipo_expediente_id == tipo_expediente_id,
                models.Expediente.anio == anio,
            )
        )
        return int(self.session.execute(stmt).scalar_one())

    # ------------------------------------------------------------------
    # Write operations
    # ------------------------------------------------------------------

    def save(self, expediente: models.Expediente) -> models.Expediente:
        """
        Add (or re-attach) an expediente and flush so its id is assigned.
        """
        self.session.add(expediente)
        self.session.flush()
        return expediente

    def delete(self, expediente: models.Expediente) -> None:
        self.session.delete(expediente)
        self.session.flush()


__all__ = ["ExpedientesRepository"]
