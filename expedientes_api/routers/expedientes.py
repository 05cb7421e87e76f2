# expedientes_api/routers/expedientes.py

from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Request, Response, status
from sqlalchemy.orm import Session

from expedientes_api.db.models import EstadoExpediente, Usuario
from expedientes_api.db.session import get_session
from expedientes_api.dependencies import get_current_user, require_admin, require_writer
from expedientes_api.schemas.common import MAX_ID, ErrorResponse
from expedientes_api.schemas.expedientes import (
    MAX_ANIO,
    MIN_ANIO,
    ExpedienteCreate,
    ExpedienteFilters,
    ExpedienteUpdate,
    ExpedienteVO,
)
from expedientes_api.services import ExpedienteService, ExpedienteServiceImpl

router = APIRouter(
    prefix="/expedientes",
    tags=["expedientes"],
    responses={
        401: {"model": ErrorResponse, "description": "Missing or invalid token"},
        403: {"model": ErrorResponse, "description": "Role not allowed"},
    },
)


def get_expediente_service(session: Session = Depends(get_session)) -> ExpedienteService:
    """
    Dependency-injected factory for the expediente service.

    Tests swap the implementation via ``app.dependency_overrides``.
    """
    return ExpedienteServiceImpl.from_session(session)


@router.get(
    "",
    response_model=List[ExpedienteVO],
    summary="List expedientes",
    description=(
        "Return expedientes, newest first, optionally filtered. "
        "The total number of matches is returned in the X-Total-Count header."
    ),
)
def list_expedientes(
    *,
    response: Response,
    service: ExpedienteService = Depends(get_expediente_service),
    _: Usuario = Depends(get_current_user),
    anio: Optional[int] = Query(
        None, ge=MIN_ANIO, le=MAX_ANIO, description="Filter by year."
    ),
    tipo_expediente_id: Optional[int] = Query(
        None, alias="tipoExpedienteId", ge=1, le=MAX_ID, description="Filter by case-file type."
    ),
    cod_estado: Optional[EstadoExpediente] = Query(
        None, alias="codEstado", description="Filter by status code."
    ),
    usuario_responsable_id: Optional[int] = Query(
        None, alias="usuarioResponsableId", ge=1, le=MAX_ID, description="Filter by responsible user."
    ),
    q: Optional[str] = Query(
        None, description="Case-insensitive search over subject and code."
    ),
    limit: int = Query(100, ge=1, le=500),
    offset: int = Query(0, ge=0, le=MAX_ID),
) -> List[ExpedienteVO]:
    filters = ExpedienteFilters(
        anio=anio,
        tipo_expediente_id=tipo_expediente_id,
        cod_estado=cod_estado,
        usuario_responsable_id=usuario_responsable_id,
        q=q,
    )
    items, total = service.find_all(filters, limit=limit, offset=offset)
    response.headers["X-Total-Count"] = str(total)
    return items


@router.get(
    "/{expediente_id}",
    response_model=ExpedienteVO,
    summary="Get a single expediente",
    responses={404: {"model": ErrorResponse}},
)
def get_expediente(
    *,
    expediente_id: int,
    service: ExpedienteService = Depends(get_expediente_service),
    _: Usuario = Depends(get_current_user),
) -> ExpedienteVO:
    return service.find_by_id(expediente_id)


@router.post(
    "",
    response_model=ExpedienteVO,
    status_code=status.HTTP_201_CREATED,
    summary="Create an expediente",
    description=(
        "Create a new expediente. When `codigo` is omitted the next sequential "
        "code for the type and year is generated."
    ),
    responses={409: {"model": ErrorResponse}, 422: {"model": ErrorResponse}},
)
def create_expediente(
    *,
    request: Request,
    response: Response,
    payload: ExpedienteCreate,
    service: ExpedienteService = Depends(get_expediente_service),
    user: Usuario = Depends(require_writer),
) -> ExpedienteVO:
    created = service.create(payload, user)
    response.headers["Location"] = str(
        request.url_for("get_expediente", expediente_id=created.id)
    )
    return created


@router.put(
    "/{expediente_id}",
    response_model=ExpedienteVO,
    summary="Update an expediente",
    description="Apply a partial update. Archived expedientes cannot be modified.",
    responses={404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
def update_expediente(
    *,
    expediente_id: int,
    payload: ExpedienteUpdate,
    service: ExpedienteService = Depends(get_expediente_service),
    user: Usuario = Depends(require_writer),
) -> ExpedienteVO:
    return service.update(expediente_id, payload, user)


@router.delete(
    "/{expediente_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Delete an expediente",
    responses={404: {"model": ErrorResponse}},
)
def delete_expediente(
    *,
    expediente_id: int,
    service: ExpedienteService = Depends(get_expediente_service),
    user: Usuario = Depends(require_admin),
) -> Response:
    service.delete(expediente_id, user)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
