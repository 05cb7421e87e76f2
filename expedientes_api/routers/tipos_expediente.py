# expedientes_api/routers/tipos_expediente.py

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from expedientes_api.db.models import Usuario
from expedientes_api.db.session import get_session
from expedientes_api.dependencies import get_current_user, require_admin
from expedientes_api.schemas.common import ErrorResponse
from expedientes_api.schemas.tipos_expediente import (
    TipoExpedienteCreate,
    TipoExpedienteVO,
)
from expedientes_api.services import TipoExpedienteService, TipoExpedienteServiceImpl

router = APIRouter(prefix="/tipos-expediente", tags=["tipos-expediente"])


def get_tipo_expediente_service(
    session: Session = Depends(get_session),
) -> TipoExpedienteService:
    return TipoExpedienteServiceImpl.from_session(session)


@router.get(
    "",
    response_model=List[TipoExpedienteVO],
    summary="List case-file types",
)
def list_tipos(
    *,
    service: TipoExpedienteService = Depends(get_tipo_expediente_service),
    _: Usuario = Depends(get_current_user),
    only_active: bool = Query(False, alias="soloActivos"),
) -> List[TipoExpedienteVO]:
    return service.find_all(only_active=only_active)


@router.post(
    "",
    response_model=TipoExpedienteVO,
    status_code=status.HTTP_201_CREATED,
    summary="Register a case-file type",
    responses={409: {"model": ErrorResponse}},
)
def create_tipo(
    *,
    payload: TipoExpedienteCreate,
    service: TipoExpedienteService = Depends(get_tipo_expediente_service),
    user: Usuario = Depends(require_admin),
) -> TipoExpedienteVO:
    return service.create(payload, user)
