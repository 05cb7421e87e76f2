"""
Entity <-> value object converters.
"""

from .catalog_converters import TipoExpedienteConverter, UsuarioConverter
from .expediente_converter import ExpedienteConverter

__all__ = [
    "ExpedienteConverter",
    "TipoExpedienteConverter",
    "UsuarioConverter",
]
