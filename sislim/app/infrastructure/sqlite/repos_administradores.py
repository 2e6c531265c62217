# infrastructure/sqlite/repos_administradores.py
"""
Repositorio SQLite para Administradores.

Responsabilidades:
- CRUD de administradores
- Búsqueda por email
- Conversión fila <-> modelo de dominio
"""

from __future__ import annotations

import logging
import sqlite3
from typing import List, Optional

from sislim.app.domain.actores import Administrador
from sislim.app.domain.exceptions import ValidationError
from sislim.app.domain.repositorios import RepositorioAdministradores
from sislim.app.infrastructure.sqlite.sql_helpers import execute_write, fetch_all, fetch_one


logger = logging.getLogger(__name__)


class AdministradoresRepository(RepositorioAdministradores):
    def __init__(self, connection: sqlite3.Connection) -> None:
        self._con = connection

    # --------------------------------------------------------------
    # CRUD
    # --------------------------------------------------------------

    def create(self, admin: Administrador) -> int:
        admin.validar()
        cur = execute_write(
            self._con,
            "INSERT INTO administradores (nombre, email, telefono) VALUES (?, ?, ?)",
            (admin.nombre, admin.email, admin.telefono),
            operacion="AdministradoresRepository.create",
        )
        return int(cur.lastrowid)

    def update(self, admin: Administrador) -> None:
        if not admin.id:
            raise ValidationError("No se puede actualizar un administrador sin id.")
        admin.validar()
        execute_write(
            self._con,
            "UPDATE administradores SET nombre = ?, email = ?, telefono = ? WHERE id = ?",
            (admin.nombre, admin.email, admin.telefono, admin.id),
            operacion="AdministradoresRepository.update",
        )

    def delete(self, admin_id: int) -> None:
        execute_write(
            self._con,
            "DELETE FROM administradores WHERE id = ?",
            (admin_id,),
            operacion="AdministradoresRepository.delete",
        )

    def get_by_id(self, admin_id: int) -> Optional[Administrador]:
        row = fetch_one(
            self._con,
            "SELECT * FROM administradores WHERE id = ?",
            (admin_id,),
            operacion="AdministradoresRepository.get_by_id",
        )
        return self._row_to_model(row) if row else None

    def get_by_email(self, email: str) -> Optional[Administrador]:
        row = fetch_one(
            self._con,
            "SELECT * FROM administradores WHERE lower(email) = lower(?)",
            ((email or "").strip(),),
            operacion="AdministradoresRepository.get_by_email",
        )
        return self._row_to_model(row) if row else None

    def list_all(self) -> List[Administrador]:
        rows = fetch_all(
            self._con,
            "SELECT * FROM administradores ORDER BY nombre",
            operacion="AdministradoresRepository.list_all",
        )
        return [self._row_to_model(r) for r in rows]

    @staticmethod
    def _row_to_model(row: sqlite3.Row) -> Administrador:
        return Administrador(
            id=row["id"],
            nombre=row["nombre"],
            email=row["email"],
            telefono=row["telefono"],
        )
