# application/services/turnos_facade.py
"""
Fachada de turnos para la UI.

Traduce las operaciones de TurnoService a ResultadoOperacion: la UI siempre
recibe un indicador de éxito y un mensaje legible, nunca una excepción de dominio.
Los errores de almacenamiento se registran en crash_soft.log.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, time
from typing import Callable, List, Optional

from sislim.app.application.services.estadisticas import EstadisticasService
from sislim.app.application.services.turno_service import TurnoService
from sislim.app.bootstrap_logging import get_logger, log_soft_exception
from sislim.app.domain.actores import Administrador, Cliente
from sislim.app.domain.exceptions import DomainError, PersistenciaError
from sislim.app.domain.modelos import Turno
from sislim.app.domain.repositorios import RepositorioAdministradores, RepositorioClientes


LOGGER = get_logger(__name__)


@dataclass(slots=True)
class ResultadoOperacion:
    exito: bool
    mensaje: str
    turno: Optional[Turno] = None
    turnos: List[Turno] = field(default_factory=list)


@dataclass(slots=True)
class TurnosFacade:
    turno_service: TurnoService
    estadisticas_service: EstadisticasService
    clientes: RepositorioClientes
    administradores: RepositorioAdministradores

    # --------------------------------------------------------------
    # Operaciones
    # --------------------------------------------------------------

    def solicitar_turno(
        self,
        cliente_id: int,
        fecha: date,
        hora: time,
        duracion: int,
        tipo_servicio: str,
        observaciones: Optional[str] = None,
    ) -> ResultadoOperacion:
        def _operacion() -> ResultadoOperacion:
            cliente = self._cliente(cliente_id)
            turno = self.turno_service.solicitar_turno(
                cliente, fecha, hora, duracion, tipo_servicio, observaciones
            )
            return ResultadoOperacion(
                exito=True,
                mensaje=(
                    "Su turno ha sido reservado exitosamente para el "
                    f"{turno.fecha.isoformat()} a las {turno.hora.strftime('%H:%M')}"
                ),
                turno=turno,
            )

        return self._ejecutar("turno_solicitar", _operacion)

    def confirmar_turno(self, admin_id: int, turno_id: int) -> ResultadoOperacion:
        def _operacion() -> ResultadoOperacion:
            turno = self.turno_service.confirmar_turno(self._admin(admin_id), turno_id)
            return ResultadoOperacion(True, "Su turno ha sido confirmado por el administrador", turno)

        return self._ejecutar("turno_confirmar", _operacion)

    def cancelar_turno(self, cliente_id: int, turno_id: int) -> ResultadoOperacion:
        def _operacion() -> ResultadoOperacion:
            turno = self.turno_service.cancelar_turno(self._cliente(cliente_id), turno_id)
            return ResultadoOperacion(True, "Su turno ha sido cancelado exitosamente", turno)

        return self._ejecutar("turno_cancelar", _operacion)

    def cancelar_turno_como_admin(self, admin_id: int, turno_id: int) -> ResultadoOperacion:
        def _operacion() -> ResultadoOperacion:
            turno = self.turno_service.cancelar_turno_como_admin(self._admin(admin_id), turno_id)
            return ResultadoOperacion(True, "El turno ha sido cancelado por el administrador", turno)

        return self._ejecutar("turno_cancelar_admin", _operacion)

    def listar_turnos(self, cliente_id: Optional[int] = None) -> ResultadoOperacion:
        def _operacion() -> ResultadoOperacion:
            if cliente_id is None:
                turnos = self.turno_service.listar_turnos()
            else:
                turnos = self.turno_service.listar_por_cliente(cliente_id)
            if not turnos:
                return ResultadoOperacion(True, "No hay turnos registrados.")
            return ResultadoOperacion(True, f"{len(turnos)} turno(s) encontrados.", turnos=turnos)

        return self._ejecutar("turno_listar", _operacion)

    def estadisticas(self) -> ResultadoOperacion:
        return self._ejecutar(
            "estadisticas",
            lambda: ResultadoOperacion(True, self.estadisticas_service.resumen()),
        )

    # --------------------------------------------------------------
    # Internos
    # --------------------------------------------------------------

    def _cliente(self, cliente_id: int) -> Optional[Cliente]:
        return self.clientes.get_by_id(cliente_id) if cliente_id else None

    def _admin(self, admin_id: int) -> Optional[Administrador]:
        return self.administradores.get_by_id(admin_id) if admin_id else None

    def _ejecutar(self, accion: str, operacion: Callable[[], ResultadoOperacion]) -> ResultadoOperacion:
        try:
            return operacion()
        except DomainError as exc:
            LOGGER.warning("operacion_rechazada", extra={"action": accion, "context": {"motivo": type(exc).__name__}})
            return ResultadoOperacion(False, str(exc))
        except PersistenciaError as exc:
            log_soft_exception(LOGGER, exc, {"action": accion})
            return ResultadoOperacion(False, f"Error de almacenamiento: {exc}")
