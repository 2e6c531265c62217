from __future__ import annotations

import sqlite3
from datetime import date, datetime, time

import pytest

from sislim.app.domain.actores import Administrador, Cliente
from sislim.app.domain.enums import EstadoTurno, TipoNotificacion
from sislim.app.domain.exceptions import ConflictoError, PersistenciaError
from sislim.app.domain.modelos import Disponibilidad, Notificacion, Turno
from sislim.app.infrastructure.sqlite.db import apply_schema, bootstrap
from sislim.app.infrastructure.sqlite.repos_clientes import ClientesRepository
from sislim.app.infrastructure.sqlite.repos_turnos import TurnosRepository
from sislim.app.infrastructure.sqlite.sql_helpers import transaccion


def _cliente_y_franja(container) -> tuple[int, int]:
    cliente_id = container.clientes_repo.create(Cliente(nombre="Juan Pérez", email="juanperez@email.com"))
    admin_id = container.administradores_repo.create(Administrador(nombre="Admin1", email="admin1@sislim.com"))
    franja_id = container.disponibilidades_repo.create(
        Disponibilidad(
            fecha=date(2025, 10, 1),
            hora_inicio=time(9, 0),
            hora_fin=time(11, 0),
            zona="Zona Norte",
            servicio="Limpieza básica",
            admin_id=admin_id,
        )
    )
    return cliente_id, franja_id


def _turno(cliente_id: int, franja_id: int, **overrides) -> Turno:
    datos = dict(
        fecha=date(2025, 10, 1),
        hora=time(9, 0),
        duracion=120,
        tipo_servicio="Limpieza básica",
        cliente_id=cliente_id,
        disponibilidad_id=franja_id,
    )
    datos.update(overrides)
    return Turno(**datos)


def test_turno_round_trip(container) -> None:
    cliente_id, franja_id = _cliente_y_franja(container)
    repo = container.turnos_repo

    turno_id = repo.create(_turno(cliente_id, franja_id, observaciones="Llaves en portería"))
    guardado = repo.get_by_id(turno_id)

    assert guardado.fecha == date(2025, 10, 1)
    assert guardado.hora == time(9, 0)
    assert guardado.estado == EstadoTurno.PENDIENTE
    assert guardado.observaciones == "Llaves en portería"
    assert repo.find_activo(date(2025, 10, 1), time(9, 0)).id == turno_id
    assert repo.list_by_fecha(date(2025, 10, 1))[0].id == turno_id


def test_indice_unico_rechaza_dos_turnos_activos(container) -> None:
    cliente_id, franja_id = _cliente_y_franja(container)
    repo = container.turnos_repo
    repo.create(_turno(cliente_id, franja_id))

    with pytest.raises(ConflictoError):
        repo.create(_turno(cliente_id, franja_id, duracion=60))

    assert len(repo.list_all()) == 1


def test_turno_cancelado_libera_fecha_y_hora(container) -> None:
    cliente_id, franja_id = _cliente_y_franja(container)
    repo = container.turnos_repo
    primero = repo.get_by_id(repo.create(_turno(cliente_id, franja_id)))
    primero.cambiar_estado(EstadoTurno.CANCELADO)
    repo.update(primero)

    segundo_id = repo.create(_turno(cliente_id, franja_id))

    assert repo.find_activo(date(2025, 10, 1), time(9, 0)).id == segundo_id
    assert [t.id for t in repo.list_by_estado(EstadoTurno.CANCELADO)] == [primero.id]


def test_email_de_cliente_unico_y_sin_distinguir_mayusculas(container) -> None:
    container.clientes_repo.create(Cliente(nombre="Juan", email="juan@email.com"))

    assert container.clientes_repo.get_by_email("JUAN@email.com") is not None
    with pytest.raises(PersistenciaError):
        container.clientes_repo.create(Cliente(nombre="Otro", email="juan@email.com"))


def test_notificaciones_pendientes_y_purga(container) -> None:
    cliente_id, franja_id = _cliente_y_franja(container)
    turno_id = container.turnos_repo.create(_turno(cliente_id, franja_id))
    repo = container.notificaciones_repo

    vieja = Notificacion(
        mensaje="Antigua", fecha_envio=datetime(2025, 8, 1, 10, 0), turno_id=turno_id, enviada=True
    )
    pendiente = Notificacion.crear_aviso(turno_id, "Sin enviar")
    pendiente.fecha_envio = datetime(2025, 8, 1, 10, 0)
    vieja_id = repo.create(vieja)
    pendiente_id = repo.create(pendiente)

    assert [n.id for n in repo.list_pendientes()] == [pendiente_id]
    assert [n.id for n in repo.list_enviadas_antes_de(datetime(2025, 9, 1))] == [vieja_id]
    assert [n.id for n in repo.list_by_tipo(TipoNotificacion.AVISO)] == [pendiente_id]
    assert repo.get_by_id(vieja_id).fecha_envio == datetime(2025, 8, 1, 10, 0)
    assert repo.delete_by_turno(turno_id) == 2
    assert repo.list_all() == []


def test_lectura_con_conexion_cerrada_lanza_persistencia_error(db_connection: sqlite3.Connection) -> None:
    repo = ClientesRepository(db_connection)
    db_connection.close()

    with pytest.raises(PersistenciaError):
        repo.list_all()


def test_escritura_fallida_lanza_persistencia_error(container) -> None:
    repo = TurnosRepository(container.connection)

    with pytest.raises(PersistenciaError):
        repo.create(_turno(cliente_id=999, franja_id=999))


def test_transaccion_deshace_todas_las_escrituras_si_falla(container) -> None:
    cliente_id, franja_id = _cliente_y_franja(container)

    with pytest.raises(PersistenciaError):
        with transaccion(container.connection):
            container.turnos_repo.create(_turno(cliente_id, franja_id))
            container.notificaciones_repo.create(Notificacion.crear_aviso(999, "Turno inexistente"))

    assert container.turnos_repo.list_all() == []
    assert container.notificaciones_repo.list_all() == []


def test_transaccion_anidada_se_une_a_la_exterior(container) -> None:
    cliente_id, franja_id = _cliente_y_franja(container)

    with pytest.raises(RuntimeError):
        with transaccion(container.connection):
            with transaccion(container.connection):
                container.turnos_repo.create(_turno(cliente_id, franja_id))
            raise RuntimeError("fallo posterior")

    assert container.turnos_repo.list_all() == []

    with transaccion(container.connection):
        turno_id = container.turnos_repo.create(_turno(cliente_id, franja_id))
    assert container.turnos_repo.get_by_id(turno_id) is not None


def test_schema_idempotente_y_migra_columnas(tmp_path) -> None:
    db_path = tmp_path / "antigua.db"
    con = sqlite3.connect(db_path.as_posix())
    con.execute(
        "CREATE TABLE notificaciones (id INTEGER PRIMARY KEY AUTOINCREMENT, mensaje TEXT NOT NULL, "
        "fecha_envio TEXT NOT NULL, tipo TEXT NOT NULL, turno_id INTEGER NOT NULL)"
    )
    con.commit()
    con.close()

    con = bootstrap(db_path)
    try:
        apply_schema(con)
        columnas = {row["name"] for row in con.execute("PRAGMA table_info(notificaciones)")}
        indices = {row["name"] for row in con.execute("PRAGMA index_list(turnos)")}
    finally:
        con.close()

    assert "enviada" in columnas
    assert "ux_turnos_activos_fecha_hora" in indices
