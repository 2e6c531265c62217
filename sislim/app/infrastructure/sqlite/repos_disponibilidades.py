# infrastructure/sqlite/repos_disponibilidades.py
"""
Repositorio SQLite para Disponibilidades (franjas reservables).

Responsabilidades:
- CRUD de franjas
- Listados ordenados por fecha y hora de inicio (libres, por administrador)
- Conversión fila <-> modelo de dominio

No contiene:
- Selección de franja para un turno (ver domain/disponibilidad.py)
- Reglas de bloqueo (ver DisponibilidadService)
"""

from __future__ import annotations

import logging
import sqlite3
from typing import List, Optional

from sislim.app.domain.exceptions import ValidationError
from sislim.app.domain.modelos import Disponibilidad
from sislim.app.domain.repositorios import RepositorioDisponibilidades
from sislim.app.infrastructure.sqlite.date_utils import (
    format_iso_date,
    format_iso_time,
    parse_iso_date,
    parse_iso_time,
)
from sislim.app.infrastructure.sqlite.sql_helpers import execute_write, fetch_all, fetch_one


logger = logging.getLogger(__name__)

_ORDEN = " ORDER BY fecha, hora_inicio, id"


class DisponibilidadesRepository(RepositorioDisponibilidades):
    """
    Repositorio de acceso a datos para franjas de disponibilidad.
    """

    def __init__(self, connection: sqlite3.Connection) -> None:
        self._con = connection

    # --------------------------------------------------------------
    # CRUD
    # --------------------------------------------------------------

    def create(self, disponibilidad: Disponibilidad) -> int:
        disponibilidad.validar()
        cur = execute_write(
            self._con,
            """
            INSERT INTO disponibilidades (
                fecha, hora_inicio, hora_fin, zona, servicio, disponible, admin_id
            )
            VALUES (?, ?, ?, ?, ?, ?, ?)
            """,
            (
                format_iso_date(disponibilidad.fecha),
                format_iso_time(disponibilidad.hora_inicio),
                format_iso_time(disponibilidad.hora_fin),
                disponibilidad.zona,
                disponibilidad.servicio,
                int(disponibilidad.disponible),
                disponibilidad.admin_id,
            ),
            operacion="DisponibilidadesRepository.create",
        )
        return int(cur.lastrowid)

    def update(self, disponibilidad: Disponibilidad) -> None:
        if not disponibilidad.id:
            raise ValidationError("No se puede actualizar una disponibilidad sin id.")
        disponibilidad.validar()
        execute_write(
            self._con,
            """
            UPDATE disponibilidades SET
                fecha = ?,
                hora_inicio = ?,
                hora_fin = ?,
                zona = ?,
                servicio = ?,
                disponible = ?,
                admin_id = ?
            WHERE id = ?
            """,
            (
                format_iso_date(disponibilidad.fecha),
                format_iso_time(disponibilidad.hora_inicio),
                format_iso_time(disponibilidad.hora_fin),
                disponibilidad.zona,
                disponibilidad.servicio,
                int(disponibilidad.disponible),
                disponibilidad.admin_id,
                disponibilidad.id,
            ),
            operacion="DisponibilidadesRepository.update",
        )

    def delete(self, disponibilidad_id: int) -> None:
        """
        Borrado físico. La regla "no eliminar franjas ocupadas" la aplica el servicio.
        """
        execute_write(
            self._con,
            "DELETE FROM disponibilidades WHERE id = ?",
            (disponibilidad_id,),
            operacion="DisponibilidadesRepository.delete",
        )

    def get_by_id(self, disponibilidad_id: int) -> Optional[Disponibilidad]:
        row = fetch_one(
            self._con,
            "SELECT * FROM disponibilidades WHERE id = ?",
            (disponibilidad_id,),
            operacion="DisponibilidadesRepository.get_by_id",
        )
        return self._row_to_model(row) if row else None

    # --------------------------------------------------------------
    # Listados
    # --------------------------------------------------------------

    def list_all(self) -> List[Disponibilidad]:
        rows = fetch_all(
            self._con,
            "SELECT * FROM disponibilidades" + _ORDEN,
            operacion="DisponibilidadesRepository.list_all",
        )
        return [self._row_to_model(r) for r in rows]

    def list_libres(self) -> List[Disponibilidad]:
        rows = fetch_all(
            self._con,
            "SELECT * FROM disponibilidades WHERE disponible = 1" + _ORDEN,
            operacion="DisponibilidadesRepository.list_libres",
        )
        return [self._row_to_model(r) for r in rows]

    def list_by_admin(self, admin_id: int) -> List[Disponibilidad]:
        rows = fetch_all(
            self._con,
            "SELECT * FROM disponibilidades WHERE admin_id = ?" + _ORDEN,
            (admin_id,),
            operacion="DisponibilidadesRepository.list_by_admin",
        )
        return [self._row_to_model(r) for r in rows]

    # --------------------------------------------------------------
    # Mapping
    # --------------------------------------------------------------

    @staticmethod
    def _row_to_model(row: sqlite3.Row) -> Disponibilidad:
        return Disponibilidad(
            id=row["id"],
            fecha=parse_iso_date(row["fecha"]),
            hora_inicio=parse_iso_time(row["hora_inicio"]),
            hora_fin=parse_iso_time(row["hora_fin"]),
            zona=row["zona"],
            servicio=row["servicio"],
            disponible=bool(row["disponible"]),
            admin_id=row["admin_id"],
        )
