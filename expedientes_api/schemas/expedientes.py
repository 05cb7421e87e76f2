"""
expedientes_api/schemas/expedientes.py

Value objects for the "expedientes" HTTP API.

These are the shapes the frontend sends and receives. They are decoupled
from the ORM model: the converter in ``expedientes_api.converters`` maps
between the two, adding display-only fields such as the type name and
the responsible user's full name.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import Field, field_validator

from expedientes_api.db.models import EstadoExpediente
from expedientes_api.schemas.common import MAX_ID, APIInputModel, APIModel, strip_required


ExpedienteID = int

MIN_ANIO = 1900
MAX_ANIO = 9999


class ExpedienteVO(APIModel):
    """
    Full expediente representation as returned by the API.
    """

    id: ExpedienteID = Field(..., description="Database identifier")
    tipo_expediente_id: int = Field(..., description="Case-file type reference")
    tipo_expediente_nombre: Optional[str] = Field(
        default=None,
        description="Display name of the case-file type.",
    )
    anio: int = Field(..., description="Year the expediente belongs to")
    codigo: str = Field(..., description="Case-file code, unique per type and year")
    fecha_creacion: datetime = Field(..., description="Creation timestamp (UTC)")
    cod_estado: EstadoExpediente = Field(..., description="Status code")
    usuario_responsable_id: Optional[int] = Field(
        default=None,
        description="Responsible user reference",
    )
    usuario_responsable_nombre: Optional[str] = Field(
        default=None,
        description="Full name of the responsible user.",
    )
    asunto: str = Field(..., description="Subject text")


class ExpedienteCreate(APIInputModel):
    """
    Payload for creating a new expediente.

    `codigo` is optional: when omitted the backend generates the next
    sequential code for the type and year. `usuario_responsable_id`
    defaults to the authenticated user.
    """

    tipo_expediente_id: int = Field(..., ge=1, le=MAX_ID)
    anio: int = Field(..., ge=MIN_ANIO, le=MAX_ANIO)
    codigo: Optional[str] = Field(default=None, max_length=64)
    cod_estado: EstadoExpediente = EstadoExpediente.ABIERTO
    usuario_responsable_id: Optional[int] = Field(default=None, ge=1, le=MAX_ID)
    asunto: str = Field(..., min_length=1)

    @field_validator("asunto")
    @classmethod
    def _asunto_not_blank(cls, value: str) -> str:
        return strip_required(value)

    @field_validator("codigo")
    @classmethod
    def _codigo_not_blank(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        return strip_required(value)


class ExpedienteUpdate(APIInputModel):
    """
    Partial update payload.

    All fields are optional; only provided ones are patched.
    `fecha_creacion` cannot be changed.
    """

    tipo_expediente_id: Optional[int] = Field(default=None, ge=1, le=MAX_ID)
    anio: Optional[int] = Field(default=None, ge=MIN_ANIO, le=MAX_ANIO)
    codigo: Optional[str] = Field(default=None, max_length=64)
    cod_estado: Optional[EstadoExpediente] = None
    usuario_responsable_id: Optional[int] = Field(default=None, ge=1, le=MAX_ID)
    asunto: Optional[str] = None

    @field_validator("asunto", "codigo")
    @classmethod
    def _not_blank(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        return strip_required(value)


class ExpedienteFilters(APIModel):
    """
    Query filters accepted by the list endpoint.
    """

    anio: Optional[int] = None
    tipo_expediente_id: Optional[int] = None
    cod_estado: Optional[EstadoExpediente] = None
    usuario_responsable_id: Optional[int] = None
    q: Optional[str] = None


__all__ = [
    "ExpedienteID",
    "ExpedienteVO",
    "ExpedienteCreate",
    "ExpedienteUpdate",
    "ExpedienteFilters",
    "MIN_ANIO",
    "MAX_ANIO",
]
