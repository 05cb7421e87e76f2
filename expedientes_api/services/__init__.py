"""
expedientes_api.services
------------------------

Service layer for the Expedientes HTTP API.

`ports` declares the service interfaces; the `*ServiceImpl` classes are
the concrete implementations routers depend on. Routers should import
from this package instead of talking to repositories directly.

Example:

    from expedientes_api.services import ExpedienteService, ExpedienteServiceImpl
"""

from .auth_service import AuthServiceImpl
from .expediente_service import ExpedienteServiceImpl
from .ports import AuthService, ExpedienteService, TipoExpedienteService
from .tipos_expediente_service import TipoExpedienteServiceImpl

__all__ = [
    "AuthService",
    "AuthServiceImpl",
    "ExpedienteService",
    "ExpedienteServiceImpl",
    "TipoExpedienteService",
    "TipoExpedienteServiceImpl",
]
