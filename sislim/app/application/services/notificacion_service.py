# application/services/notificacion_service.py
"""
Servicio de notificaciones de turnos.

Responsabilidades:
- Validar y "transmitir" notificaciones por un canal (por defecto, una línea de log).
- Marcar como enviadas y persistir (las fallidas quedan pendientes para reenvío).
- Construir los mensajes de reserva, confirmación, cancelación y recordatorio.
- Envío masivo best-effort: cuenta los éxitos y no deshace los envíos hechos.

No contiene:
- Transiciones de estado de turnos (ver TurnoService)
"""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Callable, List, Optional, Protocol, Sequence

from sislim.app.bootstrap_logging import get_logger, log_soft_exception
from sislim.app.domain.enums import TipoNotificacion
from sislim.app.domain.exceptions import DomainError, PersistenciaError, ValidationError
from sislim.app.domain.modelos import Notificacion, Turno
from sislim.app.domain.repositorios import RepositorioNotificaciones


LOGGER = get_logger(__name__)


class CanalNotificacionError(Exception):
    """El canal no pudo transmitir la notificación; queda pendiente de reenvío."""


class CanalNotificacion(Protocol):
    def transmitir(self, notificacion: Notificacion) -> None:
        ...


class CanalLog:
    """Canal por defecto: deja constancia del envío en el log estructurado."""

    def transmitir(self, notificacion: Notificacion) -> None:
        LOGGER.info(
            "notificacion_transmitida",
            extra={
                "action": "notificacion_enviar",
                "turno_id": notificacion.turno_id,
                "notificacion_id": notificacion.id,
                "context": {"tipo": notificacion.tipo.value},
            },
        )


def _fecha_hora(turno: Turno) -> tuple[str, str]:
    return turno.fecha.isoformat(), turno.hora.strftime("%H:%M")


def _requerir_turno(turno: Optional[Turno]) -> Turno:
    if turno is None:
        raise ValidationError("El turno no puede ser nulo.")
    return turno


# ---------------------------------------------------------------------
# Servicio
# ---------------------------------------------------------------------


class NotificacionService:
    def __init__(
        self,
        repositorio: RepositorioNotificaciones,
        canal: Optional[CanalNotificacion] = None,
        *,
        reloj: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._repo = repositorio
        self._canal = canal or CanalLog()
        self._reloj = reloj

    # --------------------------------------------------------------
    # Envío
    # --------------------------------------------------------------

    def enviar(self, notificacion: Notificacion) -> bool:
        """
        Envía una notificación.

        - Ya enviada: devuelve True sin volver a transmitir.
        - Fallo del canal: se guarda como pendiente y devuelve False.
        - Datos inválidos: ValidationError.
        """
        if notificacion is None:
            raise ValidationError("La notificación no puede ser nula.")
        notificacion.validar()

        if notificacion.enviada:
            LOGGER.info(
                "notificacion_ya_enviada",
                extra={"action": "notificacion_enviar", "notificacion_id": notificacion.id},
            )
            return True

        try:
            self._canal.transmitir(notificacion)
        except CanalNotificacionError as exc:
            log_soft_exception(
                LOGGER,
                exc,
                {"action": "notificacion_enviar", "turno_id": notificacion.turno_id},
            )
            self._guardar(notificacion)
            return False

        notificacion.enviada = True
        notificacion.fecha_envio = self._reloj()
        self._guardar(notificacion)
        LOGGER.info(
            "notificacion_enviada",
            extra={
                "action": "notificacion_enviar",
                "notificacion_id": notificacion.id,
                "turno_id": notificacion.turno_id,
            },
        )
        return True

    def enviar_reserva_turno(self, turno: Turno) -> bool:
        turno = _requerir_turno(turno)
        fecha, hora = _fecha_hora(turno)
        mensaje = f"Su turno ha sido reservado exitosamente para el {fecha} a las {hora}"
        return self.enviar(Notificacion.crear_confirmacion(turno.id or 0, mensaje))

    def enviar_confirmacion_turno(self, turno: Turno) -> bool:
        turno = _requerir_turno(turno)
        fecha, hora = _fecha_hora(turno)
        mensaje = (
            f"Su turno para el {fecha} a las {hora} ha sido confirmado. "
            f"Tipo de servicio: {turno.tipo_servicio}. Duración: {turno.duracion} minutos."
        )
        return self.enviar(Notificacion.crear_confirmacion(turno.id or 0, mensaje))

    def enviar_cancelacion_turno(self, turno: Turno) -> bool:
        turno = _requerir_turno(turno)
        fecha, hora = _fecha_hora(turno)
        mensaje = (
            f"Su turno para el {fecha} a las {hora} ha sido cancelado. "
            "Si necesita reagendar, por favor contacte al administrador."
        )
        return self.enviar(Notificacion.crear_aviso(turno.id or 0, mensaje))

    def enviar_recordatorio_turno(self, turno: Turno, horas_antes: int) -> bool:
        turno = _requerir_turno(turno)
        if horas_antes is None or horas_antes <= 0:
            raise ValidationError("Las horas antes deben ser mayor a 0.")
        fecha, hora = _fecha_hora(turno)
        mensaje = (
            f"Recordatorio: Su turno de limpieza está programado para el {fecha} a las {hora}. "
            f"Tipo de servicio: {turno.tipo_servicio}. Por favor confirme su asistencia."
        )
        return self.enviar(Notificacion.crear_recordatorio(turno.id or 0, mensaje))

    def enviar_masivas(
        self,
        turnos: Sequence[Turno],
        tipo: TipoNotificacion | str,
        mensaje: str,
    ) -> int:
        """
        Envía el mismo mensaje a cada turno y devuelve cuántos envíos tuvieron éxito.

        Los errores de un turno concreto se registran y no detienen el lote.
        """
        if not turnos:
            raise ValidationError("La lista de turnos no puede estar vacía.")
        if mensaje is None or not mensaje.strip():
            raise ValidationError("El mensaje no puede estar vacío.")
        tipo_normalizado = _normalizar_tipo(tipo)

        enviadas = 0
        for turno in turnos:
            notificacion = Notificacion(mensaje=mensaje, tipo=tipo_normalizado, turno_id=turno.id or 0)
            try:
                if self.enviar(notificacion):
                    enviadas += 1
            except (DomainError, PersistenciaError) as exc:
                log_soft_exception(
                    LOGGER,
                    exc,
                    {"action": "notificacion_masiva", "turno_id": turno.id},
                )

        LOGGER.info(
            "notificaciones_masivas",
            extra={"action": "notificacion_masiva", "count": enviadas, "context": {"total": len(turnos)}},
        )
        return enviadas

    def reenviar_fallidas(self) -> int:
        """Reintenta las notificaciones pendientes y devuelve cuántas se enviaron."""
        reenviadas = 0
        for notificacion in self._repo.list_pendientes():
            if self.enviar(notificacion):
                reenviadas += 1
        LOGGER.info("notificaciones_reenviadas", extra={"action": "notificacion_reenviar", "count": reenviadas})
        return reenviadas

    # --------------------------------------------------------------
    # Consultas
    # --------------------------------------------------------------

    def buscar_por_turno(self, turno_id: int) -> List[Notificacion]:
        return self._repo.list_by_turno(turno_id)

    def buscar_por_tipo(self, tipo: TipoNotificacion | str) -> List[Notificacion]:
        return self._repo.list_by_tipo(_normalizar_tipo(tipo))

    def buscar_pendientes(self) -> List[Notificacion]:
        return self._repo.list_pendientes()

    def listar_todas(self) -> List[Notificacion]:
        return self._repo.list_all()

    # --------------------------------------------------------------
    # Limpieza
    # --------------------------------------------------------------

    def purgar_antiguas(self, dias: int, ahora: Optional[datetime] = None) -> int:
        """Elimina notificaciones enviadas antes de `ahora - dias`. Devuelve cuántas."""
        if dias is None or dias < 0:
            raise ValidationError("Los días de antigüedad no pueden ser negativos.")
        limite = (ahora or self._reloj()) - timedelta(days=dias)
        antiguas = self._repo.list_enviadas_antes_de(limite)
        for notificacion in antiguas:
            self._repo.delete(notificacion.id)
        LOGGER.info("notificaciones_purgadas", extra={"action": "notificacion_purgar", "count": len(antiguas)})
        return len(antiguas)

    def eliminar_por_turno(self, turno_id: int) -> int:
        return self._repo.delete_by_turno(turno_id)

    def _guardar(self, notificacion: Notificacion) -> None:
        if notificacion.id:
            self._repo.update(notificacion)
        else:
            notificacion.id = self._repo.create(notificacion)


def _normalizar_tipo(tipo: TipoNotificacion | str) -> TipoNotificacion:
    if isinstance(tipo, TipoNotificacion):
        return tipo
    try:
        return TipoNotificacion.desde_texto(str(tipo or ""))
    except ValueError as exc:
        raise ValidationError(str(exc)) from exc
