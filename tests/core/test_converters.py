# tests/core/test_converters.py
from datetime import datetime, timedelta, timezone

from expedientes_api.converters import (
    ExpedienteConverter,
    TipoExpedienteConverter,
    UsuarioConverter,
)
from expedientes_api.db import models
from expedientes_api.schemas.expedientes import ExpedienteCreate, ExpedienteUpdate

CREATED = datetime(2024, 3, 1, 9, 30, tzinfo=timezone.utc)


def _entity(**overrides) -> models.Expediente:
    tipo = models.TipoExpediente(id=2, codigo="LIC", nombre="Licencia", activo=True)
    responsable = models.Usuario(
        id=7,
        username="marta",
        nombre_completo="Marta Ruiz",
        password_hash="x",
        rol=models.RolUsuario.GESTOR,
    )
    fields = dict(
        id=11,
        tipo_expediente_id=2,
        tipo_expediente=tipo,
        anio=2024,
        codigo="LIC-2024-00011",
        fecha_creacion=CREATED,
        cod_estado=models.EstadoExpediente.EN_TRAMITE,
        usuario_responsable_id=7,
        usuario_responsable=responsable,
        asunto="Licencia de apertura",
    )
    fields.update(overrides)
    return models.Expediente(**fields)


class TestExpedienteConverter:

    def test_to_vo_copies_every_field_and_resolves_names(self):
        vo = ExpedienteConverter().to_vo(_entity())

        assert vo.id == 11
        assert vo.tipo_expediente_id == 2
        assert vo.tipo_expediente_nombre == "Licencia"
        assert vo.anio == 2024
        assert vo.codigo == "LIC-2024-00011"
        assert vo.fecha_creacion == CREATED
        assert vo.cod_estado == models.EstadoExpediente.EN_TRAMITE
        assert vo.usuario_responsable_id == 7
        assert vo.usuario_responsable_nombre == "Marta Ruiz"
        assert vo.asunto == "Licencia de apertura"

    def test_to_vo_without_responsible_user(self):
        vo = ExpedienteConverter().to_vo(
            _entity(usuario_responsable=None, usuario_responsable_id=None)
        )

        assert vo.usuario_responsable_id is None
        assert vo.usuario_responsable_nombre is None

    def test_vo_serializes_with_camel_case_keys(self):
        data = ExpedienteConverter().to_vo(_entity()).model_dump(by_alias=True)

        assert data["tipoExpedienteId"] == 2
        assert data["codEstado"] == models.EstadoExpediente.EN_TRAMITE
        assert "tipo_expediente_id" not in data

    def test_to_vos_preserves_order(self):
        entities = [_entity(id=3), _entity(id=1), _entity(id=2)]

        assert [vo.id for vo in ExpedienteConverter().to_vos(entities)] == [3, 1, 2]

    def test_to_entity_defaults_status_and_keeps_code_unset(self):
        payload = ExpedienteCreate(tipoExpedienteId=2, anio=2024, asunto="  Obra menor  ")

        entity = ExpedienteConverter().to_entity(payload)

        assert entity.id is None
        assert entity.codigo is None
        assert entity.cod_estado == models.EstadoExpediente.ABIERTO
        assert entity.asunto == "Obra menor"

    def test_apply_update_only_touches_sent_fields(self):
        entity = _entity()
        payload = ExpedienteUpdate(codEstado="CERRADO", usuarioResponsableId=None)

        ExpedienteConverter().apply_update(entity, payload)

        assert entity.cod_estado == models.EstadoExpediente.CERRADO
        assert entity.usuario_responsable_id is None
        assert entity.asunto == "Licencia de apertura"
        assert entity.codigo == "LIC-2024-00011"


class TestCatalogConverters:

    def test_tipo_round_trip_from_create_payload(self):
        from expedientes_api.schemas.tipos_expediente import TipoExpedienteCreate

        entity = TipoExpedienteConverter().to_entity(
            TipoExpedienteCreate(codigo="rec", nombre=" Recurso ")
        )

        assert entity.codigo == "REC"
        assert entity.nombre == "Recurso"

    def test_usuario_vo_has_no_password_hash(self):
        usuario = models.Usuario(
            id=1,
            username="ana",
            nombre_completo="Ana",
            password_hash="secret-hash",
            rol=models.RolUsuario.ADMIN,
            activo=True,
        )

        data = UsuarioConverter().to_vo(usuario).model_dump()

        assert data["username"] == "ana"
        assert "password_hash" not in data


def test_naive_creation_date_is_reported_as_utc():
    vo = ExpedienteConverter().to_vo(_entity(fecha_creacion=datetime(2024, 3, 1, 9, 30)))

    assert vo.fecha_creacion == CREATED
    assert vo.fecha_creacion.utcoffset() == timedelta(0)
