# expedientes_api/db/models.py

from __future__ import annotations

import enum
from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy import (
    Boolean,
    DateTime,
    Enum as SQLEnum,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, declarative_base, mapped_column, relationship

# ---------------------------------------------------------------------------
# Base
# ---------------------------------------------------------------------------

Base = declarative_base()


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


# Largest value a 64-bit signed INTEGER column can hold (SQLite, Postgres BIGINT).
MAX_SQL_INTEGER = 2**63 - 1


def fits_sql_integer(value: int) -> bool:
    return -MAX_SQL_INTEGER <= value <= MAX_SQL_INTEGER


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------


class EstadoExpediente(str, enum.Enum):
    ABIERTO = "ABIERTO"
    EN_TRAMITE = "EN_TRAMITE"
    CERRADO = "CERRADO"
    ARCHIVADO = "ARCHIVADO"


class RolUsuario(str, enum.Enum):
    ADMIN = "admin"
    GESTOR = "gestor"
    CONSULTA = "consulta"


# ---------------------------------------------------------------------------
# Tipos de expediente
# ---------------------------------------------------------------------------


class TipoExpediente(Base):
    """
    Catalogue of case-file types.

    `codigo` doubles as the prefix of generated expediente codes
    (e.g. "LIC" -> "LIC-2024-00001").
    """

    __tablename__ = "tipos_expediente"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    codigo: Mapped[str] = mapped_column(String(16), unique=True, index=True)
    nombre: Mapped[str] = mapped_column(String(255), nullable=False)
    descripcion: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    activo: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    expedientes: Mapped[List["Expediente"]] = relationship(
        "Expediente",
        back_populates="tipo_expediente",
    )

    def __repr__(self) -> str:
        return f"<TipoExpediente id={self.id!r} codigo={self.codigo!r}>"


# ---------------------------------------------------------------------------
# Usuarios
# ---------------------------------------------------------------------------


class Usuario(Base):
    """
    Application user: login principal and responsible party for expedientes.
    """

    __tablename__ = "usuarios"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    username: Mapped[str] = mapped_column(String(64), unique=True, index=True)
    nombre_completo: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)

    rol: Mapped[RolUsuario] = mapped_column(
        SQLEnum(RolUsuario, name="rol_usuario_enum"),
        nullable=False,
        default=RolUsuario.CONSULTA,
    )
    activo: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )

    expedientes: Mapped[List["Expediente"]] = relationship(
        "Expediente",
        back_populates="usuario_responsable",
    )

    def __repr__(self) -> str:
        return f"<Usuario id={self.id!r} username={self.username!r} rol={self.rol.value!r}>"


# ---------------------------------------------------------------------------
# Expedientes
# ---------------------------------------------------------------------------


class Expediente(Base):
    """
    A case file.

    `fecha_creacion` is set once on insert; `updated_at` tracks the last
    modification.
    """

    __tablename__ = "expedientes"
    __table_args__ = (
        UniqueConstraint(
            "tipo_expediente_id",
            "anio",
            "codigo",
            name="uq_expediente_tipo_anio_codigo",
        ),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)

    tipo_expediente_id: Mapped[int] = mapped_column(
        ForeignKey("tipos_expediente.id"),
        nullable=False,
        index=True,
    )
    anio: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    codigo: Mapped[str] = mapped_column(String(64), nullable=False, index=True)

    fecha_creacion: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )

    cod_estado: Mapped[EstadoExpediente] = mapped_column(
        SQLEnum(EstadoExpediente, name="estado_expediente_enum"),
        nullable=False,
        default=EstadoExpediente.ABIERTO,
        index=True,
    )

    usuario_responsable_id: Mapped[Optional[int]] = mapped_column(
        ForeignKey("usuarios.id"),
        nullable=True,
        index=True,
    )

    asunto: Mapped[str] = mapped_column(Text, nullable=False)

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        onupdate=utcnow,
    )

    # Relationships
    tipo_expediente: Mapped[TipoExpediente] = relationship(
        "TipoExpediente",
        back_populates="expedientes",
        lazy="joined",
    )
    usuario_responsable: Mapped[Optional[Usuario]] = relationship(
        "Usuario",
        back_populates="expedientes",
        lazy="joined",
    )

    def __repr__(self) -> str:
        return (
            f"<Expediente id={self.id!r} codigo={self.codigo!r} "
            f"estado={self.cod_estado.value!r}>"
        )


__all__ = [
    "Base",
    "EstadoExpediente",
    "RolUsuario",
    "TipoExpediente",
    "Usuario",
    "Expediente",
    "utcnow",
    "MAX_SQL_INTEGER",
    "fits_sql_integer",
]
