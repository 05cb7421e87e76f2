# expedientes_api/schemas/common.py

from __future__ import annotations

from typing import Any, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from expedientes_api.db.models import MAX_SQL_INTEGER

# Upper bound for any id accepted from a client.
MAX_ID = MAX_SQL_INTEGER


def strip_required(value: str) -> str:
    value = value.strip()
    if not value:
        raise ValueError("must not be blank")
    return value


# ---------------------------------------------------------------------------
# Base / shared types
# ---------------------------------------------------------------------------


class APIModel(BaseModel):
    """
    Base Pydantic model for all HTTP API schemas.

    Common config:
    - camelCase on the wire, snake_case in Python (both accepted on input)
    - from_attributes so VOs can be built straight from ORM rows
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class APIInputModel(APIModel):
    """
    Base for request bodies: forbid extra fields so the frontend gets
    early feedback on mistakes.
    """

    model_config = ConfigDict(extra="forbid")


# ---------------------------------------------------------------------------
# Error envelope
# ---------------------------------------------------------------------------


class ErrorDetail(APIModel):
    """
    Machine- and human-readable error description.
    """

    code: str = Field(
        ...,
        description="Stable, machine-readable error code (e.g. 'expediente_not_found').",
    )
    message: str = Field(
        ...,
        description="Human-readable explanation of the error.",
    )
    details: Optional[Mapping[str, Any]] = Field(
        default=None,
        description="Optional structured details (offending ids, field values, etc.).",
    )


class ErrorResponse(APIModel):
    """
    Standard error envelope for all endpoints.
    """

    error: ErrorDetail


__all__ = [
    "MAX_ID",
    "strip_required",
    "APIModel",
    "APIInputModel",
    "ErrorDetail",
    "ErrorResponse",
]
