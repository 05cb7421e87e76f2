# expedientes_api/services/ports.py

from __future__ import annotations

from typing import List, Optional, Protocol, Tuple

from expedientes_api.db.models import Usuario
from expedientes_api.schemas.auth import TokenVO
from expedientes_api.schemas.expedientes import (
    ExpedienteCreate,
    ExpedienteFilters,
    ExpedienteUpdate,
    ExpedienteVO,
)
from expedientes_api.schemas.tipos_expediente import (
    TipoExpedienteCreate,
    TipoExpedienteVO,
)


class ExpedienteService(Protocol):
    """
    Business operations on expedientes.
    Implementations return value objects, never ORM entities.
    """

    def find_all(
        self,
        filters: Optional[ExpedienteFilters] = None,
        *,
        limit: int = 100,
        offset: int = 0,
    ) -> Tuple[List[ExpedienteVO], int]:
        """
        Returns one page of expedientes and the total number matching
        the filters.
        """
        ...

    def find_by_id(self, expediente_id: int) -> ExpedienteVO:
        """
        Raises:
            ExpedienteNotFoundError: if no row has that id.
        """
        ...

    def create(self, payload: ExpedienteCreate, actor: Usuario) -> ExpedienteVO:
        ...

    def update(
        self,
        expediente_id: int,
        payload: ExpedienteUpdate,
        actor: Usuario,
    ) -> ExpedienteVO:
        ...

    def delete(self, expediente_id: int, actor: Usuario) -> None:
        ...


class TipoExpedienteService(Protocol):
    """Port for the case-file type catalogue."""

    def find_all(self, *, only_active: bool = False) -> List[TipoExpedienteVO]:
        ...

    def create(self, payload: TipoExpedienteCreate, actor: Usuario) -> TipoExpedienteVO:
        ...


class AuthService(Protocol):
    """Login and token resolution."""

    def authenticate(self, username: str, password: str) -> TokenVO:
        """
        Raises:
            InvalidCredentialsError: unknown user, wrong password or inactive user.
        """
        ...

    def current_user(self, token: str) -> Usuario:
        """
        Raises:
            InvalidTokenError: bad signature, expired token or unknown subject.
            InactiveUserError: the user behind the token was deactivated.
        """
        ...
