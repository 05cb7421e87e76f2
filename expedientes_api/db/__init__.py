"""
expedientes_api.db
==================

Database package for the Expedientes HTTP API.

The rest of the service imports its DB primitives from here:

    from expedientes_api.db import Base, engine, SessionLocal, get_session
"""

from .models import Base
from .session import SessionLocal, create_schema, db_session, engine, get_session

__all__ = [
    "Base",
    "engine",
    "SessionLocal",
    "create_schema",
    "db_session",
    "get_session",
]
