"""
HTTP routers (controllers) for the Expedientes API.
"""

from . import auth, expedientes, health, tipos_expediente

__all__ = ["auth", "expedientes", "health", "tipos_expediente"]
