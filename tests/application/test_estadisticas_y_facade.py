from __future__ import annotations

from datetime import date, time

from sislim.app.application.services.estadisticas import EstadisticasTurnos


OCT_1 = date(2025, 10, 1)
OCT_2 = date(2025, 10, 2)


def test_facade_solicitar_devuelve_exito_y_mensaje(app, seed_data) -> None:
    resultado = app.turnos_facade.solicitar_turno(
        seed_data["cliente"].id, OCT_1, time(9, 0), 120, "Limpieza básica"
    )

    assert resultado.exito is True
    assert resultado.mensaje == "Su turno ha sido reservado exitosamente para el 2025-10-01 a las 09:00"
    assert resultado.turno is not None


def test_facade_convierte_errores_en_resultado_fallido(app, seed_data) -> None:
    facade = app.turnos_facade
    facade.solicitar_turno(seed_data["cliente"].id, OCT_1, time(9, 0), 120, "Limpieza básica")

    duplicado = facade.solicitar_turno(seed_data["otro_cliente"].id, OCT_1, time(9, 0), 60, "Limpieza básica")
    inexistente = facade.confirmar_turno(seed_data["admin"].id, 999)
    sin_cliente = facade.solicitar_turno(999, OCT_2, time(15, 0), 60, "Limpieza profunda")

    assert duplicado.exito is False
    assert "Ya existe un turno" in duplicado.mensaje
    assert inexistente.exito is False
    assert inexistente.mensaje == "No se encontró el turno con ID: 999"
    assert sin_cliente.exito is False
    assert sin_cliente.mensaje


def test_facade_confirmar_y_cancelar(app, seed_data, assert_expected_actual) -> None:
    facade = app.turnos_facade
    cliente_id = seed_data["cliente"].id
    turno = facade.solicitar_turno(cliente_id, OCT_1, time(9, 0), 120, "Limpieza básica").turno

    confirmado = facade.confirmar_turno(seed_data["admin"].id, turno.id)
    cancelado = facade.cancelar_turno(cliente_id, turno.id)
    repetido = facade.cancelar_turno(cliente_id, turno.id)

    assert_expected_actual(
        [
            (True, "Su turno ha sido confirmado por el administrador"),
            (True, "Su turno ha sido cancelado exitosamente"),
            (False, "El turno ya está cancelado."),
        ],
        [(r.exito, r.mensaje) for r in (confirmado, cancelado, repetido)],
        message="Resultados de la secuencia confirmar/cancelar",
    )


def test_facade_listar_turnos(app, seed_data) -> None:
    facade = app.turnos_facade
    assert facade.listar_turnos().mensaje == "No hay turnos registrados."

    facade.solicitar_turno(seed_data["cliente"].id, OCT_1, time(9, 0), 120, "Limpieza básica")
    facade.solicitar_turno(seed_data["otro_cliente"].id, OCT_2, time(15, 0), 120, "Limpieza profunda")

    assert len(facade.listar_turnos().turnos) == 2
    assert len(facade.listar_turnos(seed_data["otro_cliente"].id).turnos) == 1


def test_estadisticas_cuentan_por_estado_y_tipo(app, seed_data) -> None:
    facade = app.turnos_facade
    cliente_id = seed_data["cliente"].id
    t1 = facade.solicitar_turno(cliente_id, OCT_1, time(9, 0), 120, "Limpieza básica").turno
    t2 = facade.solicitar_turno(cliente_id, OCT_2, time(15, 0), 120, "Limpieza profunda").turno
    facade.confirmar_turno(seed_data["admin"].id, t1.id)
    facade.cancelar_turno(cliente_id, t2.id)

    stats = app.estadisticas_service.obtener_estadisticas_turnos()
    notif = app.estadisticas_service.obtener_estadisticas_notificaciones()

    assert stats == EstadisticasTurnos(total=2, pendientes=0, confirmados=1, cancelados=1)
    assert (notif.total, notif.enviadas, notif.pendientes) == (4, 4, 0)
    assert (notif.confirmaciones, notif.avisos, notif.recordatorios) == (3, 1, 0)

    resumen = facade.estadisticas().mensaje
    assert "=== ESTADÍSTICAS DEL SISTEMA ===" in resumen
    assert "Turnos confirmados: 1" in resumen
    assert "Avisos: 1" in resumen
