# tests/http_api/test_server_errors.py

import pytest
from fastapi import status
from fastapi.testclient import TestClient

from expedientes_api.config import Settings
from expedientes_api.main import app, create_app
from expedientes_api.routers.expedientes import get_expediente_service


class _BrokenService:
    def find_by_id(self, expediente_id):
        raise RuntimeError("database exploded")


@pytest.fixture
def broken_app():
    def _use(target):
        target.dependency_overrides[get_expediente_service] = lambda: _BrokenService()
        return TestClient(target, raise_server_exceptions=False)

    yield _use
    app.dependency_overrides.clear()


def test_unhandled_error_returns_500_envelope_with_request_id(db, broken_app, gestor, auth_headers):
    with broken_app(app) as client:
        response = client.get(
            "/api/expedientes/1",
            headers={**auth_headers(gestor), "X-Request-Id": "req-500"},
        )

    assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
    assert response.headers["X-Request-Id"] == "req-500"
    assert response.json()["error"] == {
        "code": "internal_error",
        "message": "Internal server error",
        "details": None,
    }


def test_debug_mode_exposes_exception_text(db, broken_app, gestor, auth_headers):
    debug_app = create_app(Settings(DEBUG=True))

    with broken_app(debug_app) as client:
        response = client.get("/api/expedientes/1", headers=auth_headers(gestor))

    assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
    assert response.json()["error"]["message"] == "database exploded"
    assert response.headers["X-Request-Id"]
