"""
expedientes_api
---------------

HTTP API for expedientes (case files).

This package exposes:

- ``create_app()``: application factory returning a FastAPI instance.
- ``app``: a module-level ASGI application, suitable for uvicorn / gunicorn
  entrypoints like ``expedientes_api:app``.
"""

from importlib import metadata as _metadata

# ---------------------------------------------------------------------------
# Package metadata
# ---------------------------------------------------------------------------

try:
    __version__: str = _metadata.version("expedientes-api")
except _metadata.PackageNotFoundError:  # When running from source tree
    __version__ = "0.0.0"


# ---------------------------------------------------------------------------
# Public application entry points
# ---------------------------------------------------------------------------

from .main import app, create_app  # noqa: E402

__all__ = [
    "__version__",
    "create_app",
    "app",
]
