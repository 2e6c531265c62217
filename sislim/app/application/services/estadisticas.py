"""Resumen de turnos y notificaciones para la UI."""

from __future__ import annotations

from dataclasses import dataclass

from sislim.app.domain.enums import EstadoTurno, TipoNotificacion
from sislim.app.domain.repositorios import RepositorioNotificaciones, RepositorioTurnos


@dataclass(frozen=True, slots=True)
class EstadisticasTurnos:
    total: int
    pendientes: int
    confirmados: int
    cancelados: int


@dataclass(frozen=True, slots=True)
class EstadisticasNotificaciones:
    total: int
    enviadas: int
    pendientes: int
    confirmaciones: int
    avisos: int
    recordatorios: int


class EstadisticasService:
    def __init__(self, turnos: RepositorioTurnos, notificaciones: RepositorioNotificaciones) -> None:
        self._turnos = turnos
        self._notificaciones = notificaciones

    def obtener_estadisticas_turnos(self) -> EstadisticasTurnos:
        turnos = self._turnos.list_all()
        por_estado = {estado: 0 for estado in EstadoTurno}
        for turno in turnos:
            por_estado[turno.estado] += 1
        return EstadisticasTurnos(
            total=len(turnos),
            pendientes=por_estado[EstadoTurno.PENDIENTE],
            confirmados=por_estado[EstadoTurno.CONFIRMADO],
            cancelados=por_estado[EstadoTurno.CANCELADO],
        )

    def obtener_estadisticas_notificaciones(self) -> EstadisticasNotificaciones:
        notificaciones = self._notificaciones.list_all()
        enviadas = sum(1 for n in notificaciones if n.enviada)
        por_tipo = {tipo: 0 for tipo in TipoNotificacion}
        for notificacion in notificaciones:
            por_tipo[notificacion.tipo] += 1
        return EstadisticasNotificaciones(
            total=len(notificaciones),
            enviadas=enviadas,
            pendientes=len(notificaciones) - enviadas,
            confirmaciones=por_tipo[TipoNotificacion.CONFIRMACION],
            avisos=por_tipo[TipoNotificacion.AVISO],
            recordatorios=por_tipo[TipoNotificacion.RECORDATORIO],
        )

    def resumen(self) -> str:
        return "\n".join(
            (
                formatear_estadisticas_turnos(self.obtener_estadisticas_turnos()),
                formatear_estadisticas_notificaciones(self.obtener_estadisticas_notificaciones()),
            )
        )


def formatear_estadisticas_turnos(stats: EstadisticasTurnos) -> str:
    return (
        "=== ESTADÍSTICAS DEL SISTEMA ===\n"
        f"Total de turnos: {stats.total}\n"
        f"Turnos pendientes: {stats.pendientes}\n"
        f"Turnos confirmados: {stats.confirmados}\n"
        f"Turnos cancelados: {stats.cancelados}\n"
        "================================"
    )


def formatear_estadisticas_notificaciones(stats: EstadisticasNotificaciones) -> str:
    return (
        "=== ESTADÍSTICAS DE NOTIFICACIONES ===\n"
        f"Total de notificaciones: {stats.total}\n"
        f"Notificaciones enviadas: {stats.enviadas}\n"
        f"Notificaciones pendientes: {stats.pendientes}\n"
        f"Confirmaciones: {stats.confirmaciones}\n"
        f"Avisos: {stats.avisos}\n"
        f"Recordatorios: {stats.recordatorios}\n"
        "====================================="
    )
