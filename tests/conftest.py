# tests/conftest.py
import os

# Must be set before anything from expedientes_api is imported: the package
# builds its engine and app from the environment at import time.
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["APP_ENV"] = "testing"
os.environ["JWT_SECRET_KEY"] = "test-secret"
os.environ["PASSWORD_HASH_ITERATIONS"] = "1000"
os.environ["LOG_FORMAT"] = "json"
os.environ["LOG_LEVEL"] = "WARNING"

from typing import Callable, Dict

import pytest
from fastapi.testclient import TestClient

from expedientes_api.db import models
from expedientes_api.db.session import SessionLocal, engine
from expedientes_api.main import app
from expedientes_api.repositories import UsuariosRepository
from expedientes_api.security.tokens import create_access_token
from expedientes_api.services import AuthServiceImpl

PASSWORD = "s3cret-pass"


@pytest.fixture(scope="function")
def db():
    """
    Fresh schema per test on the shared in-memory SQLite engine.
    """
    models.Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        models.Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db):
    with TestClient(app) as c:
        yield c


def _make_user(db, username: str, rol: models.RolUsuario, nombre: str) -> models.Usuario:
    return AuthServiceImpl(UsuariosRepository(db)).register_user(
        username=username,
        password=PASSWORD,
        nombre_completo=nombre,
        rol=rol,
        email=f"{username}@example.org",
    )


@pytest.fixture
def admin(db) -> models.Usuario:
    return _make_user(db, "admin", models.RolUsuario.ADMIN, "Ana Administradora")


@pytest.fixture
def gestor(db) -> models.Usuario:
    return _make_user(db, "gestor", models.RolUsuario.GESTOR, "Gonzalo Gestor")


@pytest.fixture
def consulta(db) -> models.Usuario:
    return _make_user(db, "consulta", models.RolUsuario.CONSULTA, "Clara Consulta")


@pytest.fixture
def tipo_licencia(db) -> models.TipoExpediente:
    tipo = models.TipoExpediente(codigo="LIC", nombre="Licencia", activo=True)
    db.add(tipo)
    db.commit()
    return tipo


@pytest.fixture
def tipo_inactivo(db) -> models.TipoExpediente:
    tipo = models.TipoExpediente(codigo="OLD", nombre="Obsoleto", activo=False)
    db.add(tipo)
    db.commit()
    return tipo


@pytest.fixture
def auth_headers() -> Callable[[models.Usuario], Dict[str, str]]:
    """Build an Authorization header for a given user."""

    def _headers(usuario: models.Usuario) -> Dict[str, str]:
        token, _ = create_access_token(usuario)
        return {"Authorization": f"Bearer {token}"}

    return _headers
