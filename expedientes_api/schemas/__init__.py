"""
Top-level export module for HTTP API schemas (value objects).
"""

from . import auth, common, expedientes, tipos_expediente

from .common import APIModel, ErrorDetail, ErrorResponse

from .auth import LoginRequest, TokenVO, UsuarioVO

from .expedientes import (
    ExpedienteCreate,
    ExpedienteFilters,
    ExpedienteUpdate,
    ExpedienteVO,
)

from .tipos_expediente import TipoExpedienteCreate, TipoExpedienteVO

__all__ = [
    # Submodules
    "auth", "common", "expedientes", "tipos_expediente",

    # Common
    "APIModel", "ErrorDetail", "ErrorResponse",

    # Auth
    "LoginRequest", "TokenVO", "UsuarioVO",

    # Expedientes
    "ExpedienteVO", "ExpedienteCreate", "ExpedienteUpdate", "ExpedienteFilters",

    # Tipos
    "TipoExpedienteVO", "TipoExpedienteCreate",
]
