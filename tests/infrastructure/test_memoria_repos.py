from __future__ import annotations

from datetime import date, time

import pytest

from sislim.app.domain.enums import EstadoTurno
from sislim.app.domain.exceptions import ConflictoError, PersistenciaError, ValidationError
from sislim.app.domain.modelos import Disponibilidad, Notificacion, Turno
from sislim.app.infrastructure.memoria.repos import (
    DisponibilidadesMemoriaRepository,
    NotificacionesMemoriaRepository,
    TurnosMemoriaRepository,
    transaccion_memoria,
)


def _franja(**overrides) -> Disponibilidad:
    datos = dict(
        fecha=date(2025, 10, 1), hora_inicio=time(9, 0), hora_fin=time(11, 0), zona="Zona", servicio="S"
    )
    datos.update(overrides)
    return Disponibilidad(**datos)


def _turno(**overrides) -> Turno:
    datos = dict(
        fecha=date(2025, 10, 1),
        hora=time(9, 0),
        duracion=60,
        tipo_servicio="Limpieza",
        cliente_id=1,
        disponibilidad_id=1,
    )
    datos.update(overrides)
    return Turno(**datos)


def test_devuelve_copias_independientes_del_almacen() -> None:
    repo = DisponibilidadesMemoriaRepository()
    franja_id = repo.create(_franja())

    leida = repo.get_by_id(franja_id)
    leida.bloquear()

    assert repo.get_by_id(franja_id).disponible is True
    repo.update(leida)
    assert repo.get_by_id(franja_id).disponible is False
    assert repo.list_libres() == []


def test_create_no_modifica_el_objeto_recibido() -> None:
    repo = DisponibilidadesMemoriaRepository()
    franja = _franja()

    franja_id = repo.create(franja)

    assert franja.id is None
    assert franja_id == 1


def test_listados_ordenados_por_fecha_y_hora() -> None:
    repo = DisponibilidadesMemoriaRepository()
    repo.create(_franja(fecha=date(2025, 10, 2)))
    repo.create(_franja(hora_inicio=time(10, 0)))
    repo.create(_franja(hora_inicio=time(8, 0)))

    assert [(f.fecha.day, f.hora_inicio.hour) for f in repo.list_all()] == [(1, 8), (1, 10), (2, 9)]


def test_turno_activo_duplicado_es_conflicto() -> None:
    repo = TurnosMemoriaRepository()
    repo.create(_turno())

    with pytest.raises(ConflictoError):
        repo.create(_turno(cliente_id=2))

    repo.create(_turno(estado=EstadoTurno.CANCELADO))
    assert len(repo.list_all()) == 2


def test_update_sin_id_o_inexistente() -> None:
    repo = TurnosMemoriaRepository()

    with pytest.raises(ValidationError):
        repo.update(_turno())
    with pytest.raises(PersistenciaError):
        repo.update(_turno(id=42))


def test_transaccion_memoria_restaura_los_repositorios_si_falla() -> None:
    turnos = TurnosMemoriaRepository()
    notificaciones = NotificacionesMemoriaRepository()
    existente = turnos.get_by_id(turnos.create(_turno()))

    with pytest.raises(PersistenciaError):
        with transaccion_memoria(turnos, notificaciones):
            turnos.create(_turno(hora=time(10, 0)))
            existente.cambiar_estado(EstadoTurno.CONFIRMADO)
            turnos.update(existente)
            notificaciones.create(Notificacion.crear_aviso(existente.id, "Confirmado"))
            raise PersistenciaError("disco lleno")

    assert [t.estado for t in turnos.list_all()] == [EstadoTurno.PENDIENTE]
    assert notificaciones.list_all() == []


def test_transaccion_memoria_conserva_los_cambios_si_no_falla() -> None:
    turnos = TurnosMemoriaRepository()

    with transaccion_memoria(turnos):
        turnos.create(_turno())

    assert len(turnos.list_all()) == 1
