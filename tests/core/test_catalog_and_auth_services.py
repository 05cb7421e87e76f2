# tests/core/test_catalog_and_auth_services.py
import pytest
from pydantic import ValidationError

from expedientes_api.errors import DuplicateTipoExpedienteError, InvalidCredentialsError
from expedientes_api.schemas.tipos_expediente import TipoExpedienteCreate
from expedientes_api.services import AuthServiceImpl, TipoExpedienteServiceImpl
from expedientes_api.services import auth_service

PASSWORD = "s3cret-pass"


class TestTipoExpedienteService:

    def test_unique_violation_at_commit_is_a_duplicate(self, db, admin, tipo_licencia, monkeypatch):
        service = TipoExpedienteServiceImpl.from_session(db)
        monkeypatch.setattr(service._repo, "find_by_codigo", lambda codigo: None)

        with pytest.raises(DuplicateTipoExpedienteError):
            service.create(TipoExpedienteCreate(codigo="lic", nombre="Otra licencia"), admin)

        assert [t.codigo for t in service.find_all()] == ["LIC"]

    def test_blank_name_is_rejected(self):
        with pytest.raises(ValidationError):
            TipoExpedienteCreate(codigo="REC", nombre="   ")


class TestLoginTiming:

    @pytest.fixture
    def checked_hashes(self, monkeypatch):
        seen = []
        real_verify = auth_service.verify_password

        def _recording_verify(password, stored_hash):
            seen.append(stored_hash)
            return real_verify(password, stored_hash)

        monkeypatch.setattr(auth_service, "verify_password", _recording_verify)
        return seen

    def test_unknown_user_still_costs_one_hash_check(self, db, checked_hashes):
        with pytest.raises(InvalidCredentialsError):
            AuthServiceImpl.from_session(db).authenticate("ghost", PASSWORD)

        assert len(checked_hashes) == 1
        assert checked_hashes[0].startswith("pbkdf2_sha256$1000$")

    def test_inactive_user_still_costs_one_hash_check(self, db, gestor, checked_hashes):
        gestor.activo = False
        db.commit()

        with pytest.raises(InvalidCredentialsError):
            AuthServiceImpl.from_session(db).authenticate("gestor", PASSWORD)

        assert checked_hashes == [gestor.password_hash]
