# expedientes_api/schemas/tipos_expediente.py

from __future__ import annotations

from typing import Optional

from pydantic import Field, field_validator

from expedientes_api.schemas.common import APIInputModel, APIModel, strip_required


class TipoExpedienteVO(APIModel):
    id: int
    codigo: str
    nombre: str
    descripcion: Optional[str] = None
    activo: bool = True


class TipoExpedienteCreate(APIInputModel):
    """
    Payload for registering a new case-file type.

    `codigo` is normalised to upper case; it becomes the prefix of the
    codes generated for expedientes of this type.
    """

    codigo: str = Field(..., min_length=1, max_length=16, pattern=r"^[A-Za-z0-9_]+$")
    nombre: str = Field(..., min_length=1, max_length=255)
    descripcion: Optional[str] = None
    activo: bool = True

    @field_validator("codigo")
    @classmethod
    def _upper(cls, value: str) -> str:
        return value.strip().upper()

    @field_validator("nombre")
    @classmethod
    def _nombre_not_blank(cls, value: str) -> str:
        return strip_required(value)


__all__ = ["TipoExpedienteVO", "TipoExpedienteCreate"]
