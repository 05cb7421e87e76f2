# tests/core/test_expediente_service.py
import pytest

from expedientes_api.db import models
from expedientes_api.errors import (
    ArchivedExpedienteError,
    DuplicateExpedienteError,
    ExpedienteNotFoundError,
    TipoExpedienteNotFoundError,
    UsuarioNotFoundError,
)
from expedientes_api.schemas.expedientes import (
    ExpedienteCreate,
    ExpedienteFilters,
    ExpedienteUpdate,
)
from expedientes_api.services import ExpedienteServiceImpl
from expedientes_api.services.expediente_service import format_codigo


@pytest.fixture
def service(db) -> ExpedienteServiceImpl:
    return ExpedienteServiceImpl.from_session(db)


def _create(service, actor, tipo, **kwargs):
    fields = {"tipo_expediente_id": tipo.id, "anio": 2024, "asunto": "Asunto"}
    fields.update(kwargs)
    return service.create(ExpedienteCreate(**fields), actor)


def test_format_codigo_pads_sequence():
    assert format_codigo("LIC", 2024, 1) == "LIC-2024-00001"
    assert format_codigo("REC", 1999, 123456) == "REC-1999-123456"


class TestCreate:

    def test_sequence_is_per_tipo_and_year(self, service, gestor, tipo_licencia):
        first = _create(service, gestor, tipo_licencia)
        second = _create(service, gestor, tipo_licencia)
        other_year = _create(service, gestor, tipo_licencia, anio=2025)

        assert first.codigo == "LIC-2024-00001"
        assert second.codigo == "LIC-2024-00002"
        assert other_year.codigo == "LIC-2025-00001"

    def test_generated_code_skips_taken_codes(self, service, gestor, tipo_licencia):
        _create(service, gestor, tipo_licencia, codigo="LIC-2024-00002")

        generated = _create(service, gestor, tipo_licencia)

        # One row exists, so the first candidate is ...00002, which is taken.
        assert generated.codigo == "LIC-2024-00003"

    def test_responsible_defaults_to_actor(self, service, gestor, tipo_licencia):
        vo = _create(service, gestor, tipo_licencia)

        assert vo.usuario_responsable_id == gestor.id
        assert vo.usuario_responsable_nombre == gestor.nombre_completo

    def test_explicit_responsible_must_exist(self, service, gestor, tipo_licencia):
        with pytest.raises(UsuarioNotFoundError):
            _create(service, gestor, tipo_licencia, usuario_responsable_id=999)

    def test_inactive_tipo_is_rejected(self, service, gestor, tipo_inactivo):
        with pytest.raises(TipoExpedienteNotFoundError):
            _create(service, gestor, tipo_inactivo)

    def test_duplicate_code_is_rejected(self, service, gestor, tipo_licencia):
        _create(service, gestor, tipo_licencia, codigo="A-1")

        with pytest.raises(DuplicateExpedienteError) as excinfo:
            _create(service, gestor, tipo_licencia, codigo="A-1")

        assert excinfo.value.details == {
            "tipoExpedienteId": tipo_licencia.id,
            "anio": 2024,
            "codigo": "A-1",
        }

    def test_same_code_in_another_year_is_allowed(self, service, gestor, tipo_licencia):
        _create(service, gestor, tipo_licencia, codigo="A-1")
        vo = _create(service, gestor, tipo_licencia, codigo="A-1", anio=2023)

        assert vo.anio == 2023

    def test_creation_date_is_set_by_server(self, service, gestor, tipo_licencia):
        vo = _create(service, gestor, tipo_licencia)
        assert vo.fecha_creacion is not None


class TestQueries:

    def test_find_all_returns_total_independent_of_page(self, service, gestor, tipo_licencia):
        for i in range(5):
            _create(service, gestor, tipo_licencia, asunto=f"asunto {i}")

        items, total = service.find_all(limit=2, offset=0)

        assert len(items) == 2
        assert total == 5

    def test_find_all_filters_by_responsible(self, service, gestor, admin, tipo_licencia):
        _create(service, gestor, tipo_licencia)
        _create(service, gestor, tipo_licencia, usuario_responsable_id=admin.id)

        items, total = service.find_all(ExpedienteFilters(usuario_responsable_id=admin.id))

        assert total == 1
        assert items[0].usuario_responsable_id == admin.id

    def test_find_by_id_missing(self, service):
        with pytest.raises(ExpedienteNotFoundError):
            service.find_by_id(42)


class TestUpdate:

    def test_changing_code_to_taken_one_is_rejected(self, service, gestor, tipo_licencia):
        _create(service, gestor, tipo_licencia, codigo="A-1")
        other = _create(service, gestor, tipo_licencia, codigo="A-2")

        with pytest.raises(DuplicateExpedienteError):
            service.update(other.id, ExpedienteUpdate(codigo="A-1"), gestor)

    def test_resending_own_code_is_not_a_conflict(self, service, gestor, tipo_licencia):
        vo = _create(service, gestor, tipo_licencia, codigo="A-1")

        updated = service.update(vo.id, ExpedienteUpdate(codigo="A-1", asunto="nuevo"), gestor)

        assert updated.asunto == "nuevo"

    def test_explicit_null_on_required_field_is_ignored(self, service, gestor, tipo_licencia):
        vo = _create(service, gestor, tipo_licencia)

        updated = service.update(vo.id, ExpedienteUpdate(asunto=None), gestor)

        assert updated.asunto == vo.asunto

    def test_responsible_can_be_cleared(self, service, gestor, tipo_licencia):
        vo = _create(service, gestor, tipo_licencia)

        updated = service.update(vo.id, ExpedienteUpdate(usuario_responsable_id=None), gestor)

        assert updated.usuario_responsable_id is None
        assert updated.usuario_responsable_nombre is None

    def test_moving_to_another_tipo_refreshes_display_name(self, service, db, gestor, tipo_licencia):
        recurso = models.TipoExpediente(codigo="REC", nombre="Recurso")
        db.add(recurso)
        db.commit()
        vo = _create(service, gestor, tipo_licencia)

        updated = service.update(vo.id, ExpedienteUpdate(tipo_expediente_id=recurso.id), gestor)

        assert updated.tipo_expediente_nombre == "Recurso"

    def test_archived_is_read_only(self, service, gestor, tipo_licencia):
        vo = _create(service, gestor, tipo_licencia, cod_estado=models.EstadoExpediente.ARCHIVADO)

        with pytest.raises(ArchivedExpedienteError):
            service.update(vo.id, ExpedienteUpdate(asunto="x"), gestor)


class TestDelete:

    def test_delete_then_find_raises(self, service, admin, tipo_licencia):
        vo = _create(service, admin, tipo_licencia)

        service.delete(vo.id, admin)

        with pytest.raises(ExpedienteNotFoundError):
            service.find_by_id(vo.id)

    def test_delete_missing_raises(self, service, admin):
        with pytest.raises(ExpedienteNotFoundError):
            service.delete(7, admin)


class TestCommitTimeConflicts:

    def test_unique_violation_at_commit_is_a_duplicate(self, service, gestor, tipo_licencia, monkeypatch):
        _create(service, gestor, tipo_licencia, codigo="A-1")
        # A concurrent insert the pre-check cannot see.
        monkeypatch.setattr(service._expedientes, "find_by_codigo", lambda *args, **kwargs: None)

        with pytest.raises(DuplicateExpedienteError):
            _create(service, gestor, tipo_licencia, codigo="A-1")

        _, total = service.find_all()
        assert total == 1


class TestUnchangedReferences:

    def test_same_deactivated_tipo_is_accepted(self, service, db, gestor, tipo_licencia):
        vo = _create(service, gestor, tipo_licencia)
        tipo_licencia.activo = False
        db.commit()

        updated = service.update(
            vo.id,
            ExpedienteUpdate(tipo_expediente_id=tipo_licencia.id, asunto="nuevo"),
            gestor,
        )

        assert updated.asunto == "nuevo"

    def test_same_deactivated_responsible_is_accepted(self, service, db, gestor, admin, tipo_licencia):
        vo = _create(service, admin, tipo_licencia, usuario_responsable_id=gestor.id)
        gestor.activo = False
        db.commit()

        updated = service.update(
            vo.id,
            ExpedienteUpdate(usuario_responsable_id=gestor.id, asunto="nuevo"),
            admin,
        )

        assert updated.usuario_responsable_id == gestor.id

    def test_switching_to_a_deactivated_tipo_is_rejected(self, service, gestor, tipo_licencia, tipo_inactivo):
        vo = _create(service, gestor, tipo_licencia)

        with pytest.raises(TipoExpedienteNotFoundError):
            service.update(vo.id, ExpedienteUpdate(tipo_expediente_id=tipo_inactivo.id), gestor)
