# tests/test_manage.py
"""
Smoke tests for the manage.py commands that touch the database.
"""

import manage
from expedientes_api.repositories import TiposExpedienteRepository, UsuariosRepository
from expedientes_api.security import verify_password


def test_seed_tipos_is_idempotent(db):
    assert manage.main(["seed-tipos"]) == 0
    assert manage.main(["seed-tipos"]) == 0

    codigos = [t.codigo for t in TiposExpedienteRepository(db).find_all()]
    assert codigos == sorted(c for c, _, _ in manage.DEFAULT_TIPOS)


def test_create_user(db):
    rc = manage.main(
        ["create-user", "marta", "-p", "pw-123", "-r", "gestor", "--nombre", "Marta Ruiz"]
    )

    assert rc == 0
    usuario = UsuariosRepository(db).find_by_username("marta")
    assert usuario.nombre_completo == "Marta Ruiz"
    assert usuario.rol.value == "gestor"
    assert verify_password("pw-123", usuario.password_hash)


def test_create_user_rejects_existing_username(db, gestor):
    assert manage.main(["create-user", "gestor", "-p", "x"]) == 1
