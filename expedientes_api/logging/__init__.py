# expedientes_api/logging/__init__.py

"""
Logging helpers for the Expedientes HTTP API.

API code should depend on this module rather than on structlog directly:

    from expedientes_api.logging import get_logger
"""

from __future__ import annotations

from typing import Any, Optional

import structlog

DEFAULT_LOGGER_NAME = "expedientes_api"


def get_logger(name: Optional[str] = None) -> Any:
    """
    Return a structlog logger bound to ``name`` (or the service default).
    """
    return structlog.get_logger(name or DEFAULT_LOGGER_NAME)


__all__ = ["get_logger", "DEFAULT_LOGGER_NAME"]
