# expedientes_api/routers/auth.py

from __future__ import annotations

from fastapi import APIRouter, Depends

from expedientes_api.converters import UsuarioConverter
from expedientes_api.db.models import Usuario
from expedientes_api.dependencies import get_auth_service, get_current_user
from expedientes_api.schemas.auth import LoginRequest, TokenVO, UsuarioVO
from expedientes_api.schemas.common import ErrorResponse
from expedientes_api.services import AuthService

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post(
    "/login",
    response_model=TokenVO,
    summary="Exchange username and password for an access token",
    responses={401: {"model": ErrorResponse}},
)
def login(
    payload: LoginRequest,
    auth: AuthService = Depends(get_auth_service),
) -> TokenVO:
    return auth.authenticate(payload.username, payload.password)


@router.get(
    "/me",
    response_model=UsuarioVO,
    summary="Return the user behind the bearer token",
    responses={401: {"model": ErrorResponse}},
)
def me(user: Usuario = Depends(get_current_user)) -> UsuarioVO:
    return UsuarioConverter().to_vo(user)
