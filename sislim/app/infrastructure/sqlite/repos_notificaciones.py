# infrastructure/sqlite/repos_notificaciones.py
"""
Repositorio SQLite para Notificaciones.

Responsabilidades:
- CRUD de notificaciones
- Consultas por turno, tipo y estado de envío
- Borrado en bloque por turno (purga de turnos cancelados)
"""

from __future__ import annotations

import logging
import sqlite3
from datetime import datetime
from typing import List, Optional

from sislim.app.domain.enums import TipoNotificacion
from sislim.app.domain.exceptions import ValidationError
from sislim.app.domain.modelos import Notificacion
from sislim.app.domain.repositorios import RepositorioNotificaciones
from sislim.app.infrastructure.sqlite.date_utils import format_iso_datetime, parse_iso_datetime
from sislim.app.infrastructure.sqlite.sql_helpers import execute_write, fetch_all, fetch_one


logger = logging.getLogger(__name__)

_ORDEN = " ORDER BY fecha_envio, id"


class NotificacionesRepository(RepositorioNotificaciones):
    def __init__(self, connection: sqlite3.Connection) -> None:
        self._con = connection

    # --------------------------------------------------------------
    # CRUD
    # --------------------------------------------------------------

    def create(self, notificacion: Notificacion) -> int:
        notificacion.validar()
        cur = execute_write(
            self._con,
            """
            INSERT INTO notificaciones (mensaje, fecha_envio, tipo, turno_id, enviada)
            VALUES (?, ?, ?, ?, ?)
            """,
            (
                notificacion.mensaje,
                format_iso_datetime(notificacion.fecha_envio),
                notificacion.tipo.value,
                notificacion.turno_id,
                int(notificacion.enviada),
            ),
            operacion="NotificacionesRepository.create",
        )
        return int(cur.lastrowid)

    def update(self, notificacion: Notificacion) -> None:
        if not notificacion.id:
            raise ValidationError("No se puede actualizar una notificación sin id.")
        notificacion.validar()
        execute_write(
            self._con,
            """
            UPDATE notificaciones SET
                mensaje = ?,
                fecha_envio = ?,
                tipo = ?,
                turno_id = ?,
                enviada = ?
            WHERE id = ?
            """,
            (
                notificacion.mensaje,
                format_iso_datetime(notificacion.fecha_envio),
                notificacion.tipo.value,
                notificacion.turno_id,
                int(notificacion.enviada),
                notificacion.id,
            ),
            operacion="NotificacionesRepository.update",
        )

    def delete(self, notificacion_id: int) -> None:
        execute_write(
            self._con,
            "DELETE FROM notificaciones WHERE id = ?",
            (notificacion_id,),
            operacion="NotificacionesRepository.delete",
        )

    def delete_by_turno(self, turno_id: int) -> int:
        cur = execute_write(
            self._con,
            "DELETE FROM notificaciones WHERE turno_id = ?",
            (turno_id,),
            operacion="NotificacionesRepository.delete_by_turno",
        )
        return int(cur.rowcount or 0)

    def get_by_id(self, notificacion_id: int) -> Optional[Notificacion]:
        row = fetch_one(
            self._con,
            "SELECT * FROM notificaciones WHERE id = ?",
            (notificacion_id,),
            operacion="NotificacionesRepository.get_by_id",
        )
        return self._row_to_model(row) if row else None

    # --------------------------------------------------------------
    # Consultas
    # --------------------------------------------------------------

    def list_all(self) -> List[Notificacion]:
        return self._list("SELECT * FROM notificaciones" + _ORDEN, (), "list_all")

    def list_by_turno(self, turno_id: int) -> List[Notificacion]:
        return self._list(
            "SELECT * FROM notificaciones WHERE turno_id = ?" + _ORDEN, (turno_id,), "list_by_turno"
        )

    def list_by_tipo(self, tipo: TipoNotificacion) -> List[Notificacion]:
        return self._list(
            "SELECT * FROM notificaciones WHERE tipo = ?" + _ORDEN, (tipo.value,), "list_by_tipo"
        )

    def list_pendientes(self) -> List[Notificacion]:
        return self._list(
            "SELECT * FROM notificaciones WHERE enviada = 0" + _ORDEN, (), "list_pendientes"
        )

    def list_enviadas_antes_de(self, limite: datetime) -> List[Notificacion]:
        return self._list(
            "SELECT * FROM notificaciones WHERE enviada = 1 AND fecha_envio < ?" + _ORDEN,
            (format_iso_datetime(limite),),
            "list_enviadas_antes_de",
        )

    def _list(self, sql: str, params: tuple, nombre: str) -> List[Notificacion]:
        rows = fetch_all(self._con, sql, params, operacion=f"NotificacionesRepository.{nombre}")
        return [self._row_to_model(r) for r in rows]

    @staticmethod
    def _row_to_model(row: sqlite3.Row) -> Notificacion:
        return Notificacion(
            id=row["id"],
            mensaje=row["mensaje"],
            fecha_envio=parse_iso_datetime(row["fecha_envio"]),
            tipo=TipoNotificacion(row["tipo"]),
            turno_id=row["turno_id"],
            enviada=bool(row["enviada"]),
        )
