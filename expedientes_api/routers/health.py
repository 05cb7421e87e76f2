# expedientes_api/routers/health.py
from typing import Dict

from fastapi import APIRouter, Response, status
from sqlalchemy.exc import SQLAlchemyError

from expedientes_api.db import session as db_session
from expedientes_api.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/health", tags=["system"])


@router.get("/live", status_code=status.HTTP_200_OK)
def liveness_probe() -> Dict[str, str]:
    """
    Liveness probe. Returns 200 OK while the process is serving requests.
    """
    return {"status": "ok", "service": "expedientes-api"}


@router.get("/ready", status_code=status.HTTP_200_OK)
def readiness_probe(response: Response) -> Dict[str, str]:
    """
    Readiness probe. Checks the database; 503 when it does not answer.
    """
    health_status = {"database": "down"}

    try:
        if db_session.ping():
            health_status["database"] = "up"
    except SQLAlchemyError as e:
        logger.error("health_check_failed", component="database", error=str(e))

    if health_status["database"] != "up":
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
        logger.warning("readiness_probe_failed", status=health_status)

    return health_status
