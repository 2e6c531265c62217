# infrastructure/sqlite/repos_turnos.py
"""
Repositorio SQLite para Turnos.

Responsabilidades:
- CRUD de turnos
- Consultas por cliente, administrador, fecha y estado
- Detección de turno activo en una fecha/hora
- Conversión fila <-> modelo de dominio

No contiene:
- Máquina de estados (ver domain/estados.py)
- Emisión de notificaciones
- Código de UI

Notas:
- El índice único parcial ux_turnos_activos_fecha_hora impide dos turnos
  no cancelados con la misma fecha y hora; la violación se traduce a ConflictoError.
"""

from __future__ import annotations

import logging
import sqlite3
from datetime import date, time
from typing import List, Optional

from sislim.app.domain.enums import EstadoTurno
from sislim.app.domain.exceptions import ValidationError
from sislim.app.domain.modelos import Turno
from sislim.app.domain.repositorios import RepositorioTurnos
from sislim.app.infrastructure.sqlite.date_utils import (
    format_iso_date,
    format_iso_time,
    parse_iso_date,
    parse_iso_time,
)
from sislim.app.infrastructure.sqlite.sql_helpers import execute_write, fetch_all, fetch_one


logger = logging.getLogger(__name__)

_ORDEN = " ORDER BY fecha, hora, id"
_MENSAJE_OCUPADO = "Ya existe un turno activo para esa fecha y hora."


# ---------------------------------------------------------------------
# Repositorio
# ---------------------------------------------------------------------


class TurnosRepository(RepositorioTurnos):
    """
    Repositorio de acceso a datos para turnos.
    """

    def __init__(self, connection: sqlite3.Connection) -> None:
        self._con = connection

    # --------------------------------------------------------------
    # CRUD
    # --------------------------------------------------------------

    def create(self, turno: Turno) -> int:
        """
        Inserta un turno y devuelve su id.
        """
        turno.validar()
        cur = execute_write(
            self._con,
            """
            INSERT INTO turnos (
                fecha,
                hora,
                duracion,
                tipo_servicio,
                estado,
                observaciones,
                cliente_id,
                disponibilidad_id,
                admin_id
            )
            VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
            """,
            (
                format_iso_date(turno.fecha),
                format_iso_time(turno.hora),
                turno.duracion,
                turno.tipo_servicio,
                turno.estado.value,
                turno.observaciones,
                turno.cliente_id,
                turno.disponibilidad_id,
                turno.admin_id,
            ),
            operacion="TurnosRepository.create",
            mensaje_conflicto=_MENSAJE_OCUPADO,
        )
        return int(cur.lastrowid)

    def update(self, turno: Turno) -> None:
        if not turno.id:
            raise ValidationError("No se puede actualizar un turno sin id.")
        turno.validar()
        execute_write(
            self._con,
            """
            UPDATE turnos SET
                fecha = ?,
                hora = ?,
                duracion = ?,
                tipo_servicio = ?,
                estado = ?,
                observaciones = ?,
                cliente_id = ?,
                disponibilidad_id = ?,
                admin_id = ?
            WHERE id = ?
            """,
            (
                format_iso_date(turno.fecha),
                format_iso_time(turno.hora),
                turno.duracion,
                turno.tipo_servicio,
                turno.estado.value,
                turno.observaciones,
                turno.cliente_id,
                turno.disponibilidad_id,
                turno.admin_id,
                turno.id,
            ),
            operacion="TurnosRepository.update",
            mensaje_conflicto=_MENSAJE_OCUPADO,
        )

    def delete(self, turno_id: int) -> None:
        """
        Borrado físico. Las notificaciones del turno deben eliminarse antes (FK).
        """
        execute_write(
            self._con,
            "DELETE FROM turnos WHERE id = ?",
            (turno_id,),
            operacion="TurnosRepository.delete",
        )

    def get_by_id(self, turno_id: int) -> Optional[Turno]:
        row = fetch_one(
            self._con,
            "SELECT * FROM turnos WHERE id = ?",
            (turno_id,),
            operacion="TurnosRepository.get_by_id",
        )
        return self._row_to_model(row) if row else None

    # --------------------------------------------------------------
    # Consultas
    # --------------------------------------------------------------

    def list_all(self) -> List[Turno]:
        return self._list("SELECT * FROM turnos" + _ORDEN, (), "list_all")

    def list_by_cliente(self, cliente_id: int) -> List[Turno]:
        return self._list(
            "SELECT * FROM turnos WHERE cliente_id = ?" + _ORDEN, (cliente_id,), "list_by_cliente"
        )

    def list_by_admin(self, admin_id: int) -> List[Turno]:
        return self._list(
            "SELECT * FROM turnos WHERE admin_id = ?" + _ORDEN, (admin_id,), "list_by_admin"
        )

    def list_by_fecha(self, fecha: date) -> List[Turno]:
        return self._list(
            "SELECT * FROM turnos WHERE fecha = ?" + _ORDEN, (format_iso_date(fecha),), "list_by_fecha"
        )

    def list_by_estado(self, estado: EstadoTurno) -> List[Turno]:
        return self._list(
            "SELECT * FROM turnos WHERE estado = ?" + _ORDEN, (estado.value,), "list_by_estado"
        )

    def find_activo(self, fecha: date, hora: time) -> Optional[Turno]:
        row = fetch_one(
            self._con,
            """
            SELECT * FROM turnos
            WHERE fecha = ? AND hora = ? AND estado != ?
            LIMIT 1
            """,
            (
                format_iso_date(fecha),
                format_iso_time(hora.replace(microsecond=0)),
                EstadoTurno.CANCELADO.value,
            ),
            operacion="TurnosRepository.find_activo",
        )
        return self._row_to_model(row) if row else None

    def _list(self, sql: str, params: tuple, nombre: str) -> List[Turno]:
        rows = fetch_all(self._con, sql, params, operacion=f"TurnosRepository.{nombre}")
        return [self._row_to_model(r) for r in rows]

    # --------------------------------------------------------------
    # Mapping
    # --------------------------------------------------------------

    @staticmethod
    def _row_to_model(row: sqlite3.Row) -> Turno:
        return Turno(
            id=row["id"],
            fecha=parse_iso_date(row["fecha"]),
            hora=parse_iso_time(row["hora"]),
            duracion=row["duracion"],
            tipo_servicio=row["tipo_servicio"],
            estado=EstadoTurno(row["estado"]),
            observaciones=row["observaciones"],
            cliente_id=row["cliente_id"],
            disponibilidad_id=row["disponibilidad_id"],
            admin_id=row["admin_id"],
        )
