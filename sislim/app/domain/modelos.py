# domain/modelos.py
"""
Modelos de dominio (entidades ricas).

Características:
- Datos + invariantes (validaciones) + helpers con significado de dominio.
- Sin dependencia de SQLite/SQL ni de UI.
- Preparados para serialización (dict) sin mezclar infraestructura.

Relaciones:
- Un turno referencia por id a su cliente, a su disponibilidad y (opcional) al administrador.
- Las notificaciones referencian al turno por id; el turno no las contiene por valor.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field, replace
from datetime import date, datetime, time, timedelta
from typing import Any, Dict, Optional

from sislim.app.domain.enums import EstadoTurno, TipoNotificacion
from sislim.app.domain.estados import validar_transicion
from sislim.app.domain.exceptions import EstadoInvalidoError, ValidationError
from sislim.app.domain.value_objects import (
    _ensure_positive,
    _ensure_positive_id,
    _require_non_empty,
    _strip_or_none,
)


# ---------------------------------------------------------------------
# Turnos
# ---------------------------------------------------------------------


@dataclass(slots=True)
class Turno:
    """
    Turno de limpieza domiciliaria (tabla SQL: turnos).

    Reglas:
    - duracion > 0 (minutos)
    - tipo_servicio no vacío
    - cliente_id y disponibilidad_id válidos (ids > 0)
    - estado solo cambia según la máquina de estados (ver domain/estados.py)
    """

    id: Optional[int] = None
    fecha: date = field(default_factory=date.today)
    hora: time = time(9, 0)
    duracion: int = 120
    tipo_servicio: str = ""
    estado: EstadoTurno = EstadoTurno.PENDIENTE
    observaciones: Optional[str] = None
    cliente_id: int = 0
    disponibilidad_id: int = 0
    admin_id: Optional[int] = None

    def validar(self) -> None:
        if self.fecha is None:
            raise ValidationError("La fecha no puede ser nula.")
        if self.hora is None:
            raise ValidationError("La hora no puede ser nula.")
        self.hora = self.hora.replace(microsecond=0)
        _ensure_positive(self.duracion, "La duración")
        self.tipo_servicio = _require_non_empty(self.tipo_servicio, "tipo_servicio")
        if not isinstance(self.estado, EstadoTurno):
            raise ValidationError(f"Estado no válido: {self.estado}.")
        _ensure_positive_id(self.cliente_id, "cliente_id")
        _ensure_positive_id(self.disponibilidad_id, "disponibilidad_id")
        if self.admin_id is not None:
            _ensure_positive_id(self.admin_id, "admin_id")
        self.observaciones = _strip_or_none(self.observaciones)

    def cambiar_estado(self, nuevo: EstadoTurno) -> EstadoTurno:
        """Aplica la transición y devuelve el estado anterior."""
        validar_transicion(self.estado, nuevo)
        anterior = self.estado
        self.estado = nuevo
        return anterior

    def esta_activo(self) -> bool:
        return self.estado != EstadoTurno.CANCELADO

    def inicio(self) -> datetime:
        return datetime.combine(self.fecha, self.hora)

    def fin(self) -> datetime:
        return self.inicio() + timedelta(minutes=self.duracion)

    def copia(self) -> "Turno":
        return replace(self)

    def mostrar(self) -> str:
        """Ficha legible del turno para la UI."""
        return (
            "=== INFORMACIÓN DEL TURNO ===\n"
            f"ID: {self.id}\n"
            f"Fecha: {self.fecha.isoformat()}\n"
            f"Hora: {self.hora.strftime('%H:%M')}\n"
            f"Duración: {self.duracion} minutos\n"
            f"Tipo de Servicio: {self.tipo_servicio}\n"
            f"Estado: {self.estado.value}\n"
            f"Observaciones: {self.observaciones or ''}\n"
            f"ID Cliente: {self.cliente_id}\n"
            f"ID Disponibilidad: {self.disponibilidad_id}\n"
            f"ID Administrador: {self.admin_id or '-'}\n"
        )

    def to_dict(self) -> Dict[str, Any]:
        d = asdict(self)
        d["fecha"] = self.fecha.isoformat()
        d["hora"] = self.hora.isoformat(timespec="minutes")
        d["estado"] = self.estado.value
        return d


# ---------------------------------------------------------------------
# Disponibilidades
# ---------------------------------------------------------------------


@dataclass(slots=True)
class Disponibilidad:
    """
    Franja horaria reservable (tabla SQL: disponibilidades).

    Reglas:
    - hora_inicio <= hora_fin
    - zona y servicio no vacíos
    - una franja ocupada (disponible=False) no se elimina
    """

    id: Optional[int] = None
    fecha: date = field(default_factory=date.today)
    hora_inicio: time = time(9, 0)
    hora_fin: time = time(17, 0)
    zona: str = ""
    servicio: str = ""
    disponible: bool = True
    admin_id: Optional[int] = None

    def validar(self) -> None:
        if self.fecha is None:
            raise ValidationError("La fecha no puede ser nula.")
        if self.hora_inicio is None:
            raise ValidationError("La hora de inicio no puede ser nula.")
        if self.hora_fin is None:
            raise ValidationError("La hora de fin no puede ser nula.")
        if self.hora_inicio > self.hora_fin:
            raise ValidationError("La hora de inicio no puede ser posterior a la hora de fin.")
        self.zona = _require_non_empty(self.zona, "zona")
        self.servicio = _require_non_empty(self.servicio, "servicio")
        if self.admin_id is not None:
            _ensure_positive_id(self.admin_id, "admin_id")

    def editar(
        self,
        *,
        fecha: date,
        hora_inicio: time,
        hora_fin: time,
        zona: str,
        servicio: str,
    ) -> None:
        """Reemplaza los datos de la franja; valida antes de modificar nada."""
        candidata = replace(
            self,
            fecha=fecha,
            hora_inicio=hora_inicio,
            hora_fin=hora_fin,
            zona=zona,
            servicio=servicio,
        )
        candidata.validar()
        self.fecha = candidata.fecha
        self.hora_inicio = candidata.hora_inicio
        self.hora_fin = candidata.hora_fin
        self.zona = candidata.zona
        self.servicio = candidata.servicio

    def bloquear(self) -> None:
        if not self.disponible:
            raise EstadoInvalidoError("La disponibilidad ya está bloqueada.")
        self.disponible = False

    def desbloquear(self) -> None:
        if self.disponible:
            raise EstadoInvalidoError("La disponibilidad ya está desbloqueada.")
        self.disponible = True

    def duracion_minutos(self) -> int:
        inicio = self.hora_inicio.hour * 60 + self.hora_inicio.minute
        fin = self.hora_fin.hour * 60 + self.hora_fin.minute
        return fin - inicio

    def copia(self) -> "Disponibilidad":
        return replace(self)

    def to_dict(self) -> Dict[str, Any]:
        d = asdict(self)
        d["fecha"] = self.fecha.isoformat()
        d["hora_inicio"] = self.hora_inicio.isoformat(timespec="minutes")
        d["hora_fin"] = self.hora_fin.isoformat(timespec="minutes")
        return d


# ---------------------------------------------------------------------
# Notificaciones
# ---------------------------------------------------------------------


@dataclass(slots=True)
class Notificacion:
    """
    Mensaje asociado a un evento de un turno (tabla SQL: notificaciones).

    Tipos: Recordatorio, Confirmacion, Aviso.
    `enviada` se marca al emitir; reenviar una notificación enviada no la emite de nuevo.
    """

    id: Optional[int] = None
    mensaje: str = ""
    fecha_envio: datetime = field(default_factory=datetime.now)
    tipo: TipoNotificacion = TipoNotificacion.CONFIRMACION
    turno_id: int = 0
    enviada: bool = False

    def validar(self) -> None:
        self.mensaje = _require_non_empty(self.mensaje, "mensaje")
        if not isinstance(self.tipo, TipoNotificacion):
            try:
                self.tipo = TipoNotificacion.desde_texto(str(self.tipo or ""))
            except ValueError as exc:
                raise ValidationError(
                    f"{exc}. Tipos válidos: Recordatorio, Confirmacion, Aviso."
                ) from exc
        if self.turno_id is None or self.turno_id <= 0:
            raise ValidationError("El ID del turno debe ser mayor a 0.")

    @classmethod
    def crear_recordatorio(cls, turno_id: int, mensaje: str) -> "Notificacion":
        return cls(mensaje=mensaje, tipo=TipoNotificacion.RECORDATORIO, turno_id=turno_id)

    @classmethod
    def crear_confirmacion(cls, turno_id: int, mensaje: str) -> "Notificacion":
        return cls(mensaje=mensaje, tipo=TipoNotificacion.CONFIRMACION, turno_id=turno_id)

    @classmethod
    def crear_aviso(cls, turno_id: int, mensaje: str) -> "Notificacion":
        return cls(mensaje=mensaje, tipo=TipoNotificacion.AVISO, turno_id=turno_id)

    def estado_texto(self) -> str:
        return "Enviada" if self.enviada else "Pendiente"

    def es_urgente(self) -> bool:
        return self.tipo == TipoNotificacion.AVISO

    def tiempo_transcurrido(self, ahora: Optional[datetime] = None) -> str:
        if not self.enviada:
            return "No enviada"
        ahora = ahora or datetime.now()
        minutos = int((ahora - self.fecha_envio).total_seconds() // 60)
        if minutos < 60:
            return f"{minutos} minutos"
        if minutos < 1440:
            return f"{minutos // 60} horas"
        return f"{minutos // 1440} días"

    def copia(self) -> "Notificacion":
        return replace(self)

    def to_dict(self) -> Dict[str, Any]:
        d = asdict(self)
        d["tipo"] = self.tipo.value
        d["fecha_envio"] = self.fecha_envio.isoformat(sep=" ", timespec="seconds")
        return d
