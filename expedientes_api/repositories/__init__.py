# expedientes_api/repositories/__init__.py
"""
Repository layer public exports.

Downstream code can import from this module instead of individual files:

    from expedientes_api.repositories import ExpedientesRepository
"""

from .expedientes import ExpedientesRepository
from .tipos_expediente import TiposExpedienteRepository
from .usuarios import UsuariosRepository

__all__ = [
    "ExpedientesRepository",
    "TiposExpedienteRepository",
    "UsuariosRepository",
]
