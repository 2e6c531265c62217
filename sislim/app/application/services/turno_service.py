# application/services/turno_service.py
"""
Servicio de turnos: única autoridad sobre el ciclo de vida de un turno.

Reglas principales:
- Un solo turno activo (no cancelado) por fecha y hora, sea cual sea el cliente.
- La franja se elige con buscar_disponibilidad: estricta por fecha salvo que
  se active el modo legacy (permitir_otra_fecha).
- Reservar y cancelar no cambian el estado de la franja: bloquearla es una acción
  del administrador. Varias reservas pueden compartir franja a horas distintas.
- Transiciones según domain/estados.py.
- Cada cambio de estado emite una notificación.

Transacciones:
- Cada operación guarda el turno y su notificación dentro de `transaccion()`:
  si cualquier escritura falla no queda nada a medias.
- La comprobación de conflicto y el alta no están aisladas de otros procesos.
  En SQLite el índice único parcial sobre turnos(fecha, hora) rechaza el segundo alta.
"""

from __future__ import annotations

from contextlib import nullcontext
from datetime import date, time, timedelta
from typing import Callable, ContextManager, List, Optional

from sislim.app.application.services.notificacion_service import NotificacionService
from sislim.app.bootstrap_logging import get_logger
from sislim.app.domain.actores import Administrador, Cliente
from sislim.app.domain.disponibilidad import buscar_disponibilidad
from sislim.app.domain.enums import EstadoTurno
from sislim.app.domain.exceptions import (
    ConflictoError,
    SinDisponibilidadError,
    TurnoNoEncontradoError,
    ValidationError,
)
from sislim.app.domain.modelos import Turno
from sislim.app.domain.repositorios import (
    RepositorioAdministradores,
    RepositorioClientes,
    RepositorioDisponibilidades,
    RepositorioTurnos,
)


LOGGER = get_logger(__name__)


class TurnoService:
    def __init__(
        self,
        turnos: RepositorioTurnos,
        disponibilidades: RepositorioDisponibilidades,
        clientes: RepositorioClientes,
        administradores: RepositorioAdministradores,
        notificaciones: NotificacionService,
        *,
        permitir_otra_fecha: bool = False,
        transaccion: Callable[[], ContextManager[None]] = nullcontext,
    ) -> None:
        self._turnos = turnos
        self._disponibilidades = disponibilidades
        self._clientes = clientes
        self._administradores = administradores
        self._notificaciones = notificaciones
        self._permitir_otra_fecha = permitir_otra_fecha
        self._transaccion = transaccion

    # -----------------------------------------------------------------
    # Operaciones de cliente
    # -----------------------------------------------------------------

    def solicitar_turno(
        self,
        cliente: Optional[Cliente],
        fecha: Optional[date],
        hora: Optional[time],
        duracion: int,
        tipo_servicio: str,
        observaciones: Optional[str] = None,
    ) -> Turno:
        """Crea un turno Pendiente en la primera franja libre y devuelve el turno guardado."""
        self._validar_cliente(cliente)
        self._validar_solicitud(fecha, hora, duracion, tipo_servicio)
        hora = hora.replace(microsecond=0)

        if self._turnos.find_activo(fecha, hora) is not None:
            raise ConflictoError("Ya existe un turno para la fecha y hora especificadas.")

        franja = buscar_disponibilidad(
            fecha,
            self._disponibilidades.list_libres(),
            permitir_otra_fecha=self._permitir_otra_fecha,
        )
        if franja is None:
            raise SinDisponibilidadError("No hay disponibilidad para la fecha solicitada.")

        turno = Turno(
            fecha=fecha,
            hora=hora,
            duracion=duracion,
            tipo_servicio=tipo_servicio,
            estado=EstadoTurno.PENDIENTE,
            observaciones=observaciones,
            cliente_id=cliente.id,
            disponibilidad_id=franja.id,
        )
        with self._transaccion():
            turno.id = self._turnos.create(turno)
            self._notificaciones.enviar_reserva_turno(turno)
        LOGGER.info(
            "turno_solicitado",
            extra={"action": "turno_solicitar", "turno_id": turno.id, "disponibilidad_id": franja.id},
        )
        return self._turnos.get_by_id(turno.id) or turno

    def cancelar_turno(self, cliente: Optional[Cliente], turno_id: int) -> Turno:
        self._validar_cliente(cliente)
        turno = self._obtener_o_fallar(turno_id)
        if turno.cliente_id != cliente.id:
            raise ValidationError("El turno no pertenece al cliente.")
        return self._cancelar(turno, origen="cliente")

    # -----------------------------------------------------------------
    # Operaciones de administrador
    # -----------------------------------------------------------------

    def confirmar_turno(self, admin: Optional[Administrador], turno_id: int) -> Turno:
        self._validar_admin(admin)
        turno = self._obtener_o_fallar(turno_id)
        turno.cambiar_estado(EstadoTurno.CONFIRMADO)
        turno.admin_id = admin.id
        with self._transaccion():
            self._turnos.update(turno)
            self._notificaciones.enviar_confirmacion_turno(turno)
        LOGGER.info("turno_confirmado", extra={"action": "turno_confirmar", "turno_id": turno.id})
        return turno

    def cancelar_turno_como_admin(self, admin: Optional[Administrador], turno_id: int) -> Turno:
        self._validar_admin(admin)
        turno = self._obtener_o_fallar(turno_id)
        if turno.admin_id is None:
            turno.admin_id = admin.id
        return self._cancelar(turno, origen="administrador")

    def purgar_cancelados_antiguos(self, dias: int, hoy: Optional[date] = None) -> int:
        """
        Elimina turnos Cancelados con fecha anterior a `hoy - dias`.

        Sus notificaciones se eliminan antes que el turno. Devuelve cuántos turnos se borraron.
        """
        if dias is None or dias < 0:
            raise ValidationError("Los días de antigüedad no pueden ser negativos.")
        limite = (hoy or date.today()) - timedelta(days=dias)

        eliminados = 0
        for turno in self._turnos.list_by_estado(EstadoTurno.CANCELADO):
            if turno.fecha >= limite:
                continue
            with self._transaccion():
                self._notificaciones.eliminar_por_turno(turno.id)
                self._turnos.delete(turno.id)
            eliminados += 1

        LOGGER.info("turnos_purgados", extra={"action": "turno_purgar", "count": eliminados})
        return eliminados

    # -----------------------------------------------------------------
    # Consultas
    # -----------------------------------------------------------------

    def obtener_turno(self, turno_id: int) -> Turno:
        return self._obtener_o_fallar(turno_id)

    def listar_turnos(self) -> List[Turno]:
        return self._turnos.list_all()

    def listar_por_cliente(self, cliente_id: int) -> List[Turno]:
        return self._turnos.list_by_cliente(cliente_id)

    def listar_por_admin(self, admin_id: int) -> List[Turno]:
        return self._turnos.list_by_admin(admin_id)

    def listar_por_fecha(self, fecha: date) -> List[Turno]:
        return self._turnos.list_by_fecha(fecha)

    def listar_por_estado(self, estado: EstadoTurno) -> List[Turno]:
        return self._turnos.list_by_estado(estado)

    # -----------------------------------------------------------------
    # Internos
    # -----------------------------------------------------------------

    def _cancelar(self, turno: Turno, *, origen: str) -> Turno:
        turno.cambiar_estado(EstadoTurno.CANCELADO)
        with self._transaccion():
            self._turnos.update(turno)
            self._notificaciones.enviar_cancelacion_turno(turno)
        LOGGER.info(
            "turno_cancelado",
            extra={"action": "turno_cancelar", "turno_id": turno.id, "context": {"origen": origen}},
        )
        return turno

    def _obtener_o_fallar(self, turno_id: int) -> Turno:
        turno = self._turnos.get_by_id(turno_id) if turno_id else None
        if turno is None:
            raise TurnoNoEncontradoError(turno_id)
        return turno

    def _validar_cliente(self, cliente: Optional[Cliente]) -> None:
        if cliente is None:
            raise ValidationError("El cliente no puede ser nulo.")
        if not cliente.id or self._clientes.get_by_id(cliente.id) is None:
            raise ValidationError("El cliente no está registrado.")

    def _validar_admin(self, admin: Optional[Administrador]) -> None:
        if admin is None:
            raise ValidationError("El administrador no puede ser nulo.")
        if not admin.id or self._administradores.get_by_id(admin.id) is None:
            raise ValidationError("El administrador no está registrado.")

    @staticmethod
    def _validar_solicitud(
        fecha: Optional[date],
        hora: Optional[time],
        duracion: int,
        tipo_servicio: str,
    ) -> None:
        if fecha is None:
            raise ValidationError("La fecha no puede ser nula.")
        if hora is None:
            raise ValidationError("La hora no puede ser nula.")
        if duracion is None or duracion <= 0:
            raise ValidationError("La duración debe ser mayor a 0.")
        if tipo_servicio is None or not tipo_servicio.strip():
            raise ValidationError("El tipo de servicio no puede estar vacío.")
