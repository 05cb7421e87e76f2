# expedientes_api/errors.py

"""
Domain exceptions for the Expedientes API.

Each exception carries a stable machine-readable ``code`` and the HTTP
status the API layer should answer with. Services raise these; the
exception handler registered in ``expedientes_api.main`` renders them.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional


class DomainError(Exception):
    """Base class for all domain-level exceptions."""

    code: str = "domain_error"
    status_code: int = 400

    def __init__(self, message: str, details: Optional[Mapping[str, Any]] = None):
        self.message = message
        self.details = details
        super().__init__(self.message)


# --- Not Found Errors ---

class ExpedienteNotFoundError(DomainError):
    """Raised when no expediente exists with the requested id."""

    code = "expediente_not_found"
    status_code = 404

    def __init__(self, expediente_id: int):
        super().__init__(
            f"Expediente with id={expediente_id} not found.",
            {"id": expediente_id},
        )


class TipoExpedienteNotFoundError(DomainError):
    """Raised when an expediente references an unknown or inactive type."""

    code = "tipo_expediente_not_found"
    status_code = 422

    def __init__(self, tipo_expediente_id: int):
        super().__init__(
            f"Tipo de expediente id={tipo_expediente_id} does not exist or is inactive.",
            {"tipoExpedienteId": tipo_expediente_id},
        )


class UsuarioNotFoundError(DomainError):
    """Raised when an expediente references an unknown or inactive user."""

    code = "usuario_not_found"
    status_code = 422

    def __init__(self, usuario_id: int):
        super().__init__(
            f"Usuario id={usuario_id} does not exist or is inactive.",
            {"usuarioResponsableId": usuario_id},
        )


# --- Conflict Errors ---

class DuplicateExpedienteError(DomainError):
    """Raised when (tipo, anio, codigo) is already taken."""

    code = "duplicate_expediente"
    status_code = 409

    def __init__(self, tipo_expediente_id: int, anio: int, codigo: str):
        super().__init__(
            f"Expediente '{codigo}' already exists for tipo={tipo_expediente_id}, anio={anio}.",
            {"tipoExpedienteId": tipo_expediente_id, "anio": anio, "codigo": codigo},
        )


class DuplicateTipoExpedienteError(DomainError):
    code = "duplicate_tipo_expediente"
    status_code = 409

    def __init__(self, codigo: str):
        super().__init__(
            f"Tipo de expediente '{codigo}' already exists.",
            {"codigo": codigo},
        )


class ArchivedExpedienteError(DomainError):
    """Raised when attempting to modify an archived expediente."""

    code = "expediente_archived"
    status_code = 409

    def __init__(self, expediente_id: int):
        super().__init__(
            f"Expediente id={expediente_id} is archived and cannot be modified.",
            {"id": expediente_id},
        )


# --- Authentication / Authorization Errors ---

class AuthenticationError(DomainError):
    """Base class for 401 responses; rendered with WWW-Authenticate."""

    code = "not_authenticated"
    status_code = 401


class NotAuthenticatedError(AuthenticationError):
    def __init__(self) -> None:
        super().__init__("Missing bearer token.")


class InvalidTokenError(AuthenticationError):
    code = "invalid_token"

    def __init__(self, reason: str = "Invalid or expired token."):
        super().__init__(reason)


class InvalidCredentialsError(AuthenticationError):
    code = "invalid_credentials"

    def __init__(self) -> None:
        super().__init__("Incorrect username or password.")


class InactiveUserError(DomainError):
    code = "inactive_user"
    status_code = 403

    def __init__(self, username: str):
        super().__init__(f"User '{username}' is inactive.")


class PermissionDeniedError(DomainError):
    code = "permission_denied"
    status_code = 403

    def __init__(self, rol: str, allowed: tuple[str, ...]):
        super().__init__(
            f"Role '{rol}' is not allowed to perform this operation.",
            {"rol": rol, "allowed": list(allowed)},
        )


__all__ = [
    "DomainError",
    "ExpedienteNotFoundError",
    "TipoExpedienteNotFoundError",
    "UsuarioNotFoundError",
    "DuplicateExpedienteError",
    "DuplicateTipoExpedienteError",
    "ArchivedExpedienteError",
    "AuthenticationError",
    "NotAuthenticatedError",
    "InvalidTokenError",
    "InvalidCredentialsError",
    "InactiveUserError",
    "PermissionDeniedError",
]
