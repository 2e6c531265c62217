# infrastructure/sqlite/repos_clientes.py
"""
Repositorio SQLite para Clientes.

Responsabilidades:
- CRUD de clientes
- Búsqueda por email (identificación en el acceso)
- Conversión fila <-> modelo de dominio

No contiene:
- Lógica de turnos
- Código de UI
"""

from __future__ import annotations

import logging
import sqlite3
from typing import List, Optional

from sislim.app.domain.actores import Cliente
from sislim.app.domain.exceptions import ValidationError
from sislim.app.domain.repositorios import RepositorioClientes
from sislim.app.infrastructure.sqlite.sql_helpers import execute_write, fetch_all, fetch_one


logger = logging.getLogger(__name__)


class ClientesRepository(RepositorioClientes):
    """
    Repositorio de acceso a datos para clientes.
    """

    def __init__(self, connection: sqlite3.Connection) -> None:
        self._con = connection

    # --------------------------------------------------------------
    # CRUD
    # --------------------------------------------------------------

    def create(self, cliente: Cliente) -> int:
        """
        Inserta un cliente y devuelve su id.
        """
        cliente.validar()
        cur = execute_write(
            self._con,
            """
            INSERT INTO clientes (nombre, email, telefono, direccion)
            VALUES (?, ?, ?, ?)
            """,
            (cliente.nombre, cliente.email, cliente.telefono, cliente.direccion),
            operacion="ClientesRepository.create",
        )
        return int(cur.lastrowid)

    def update(self, cliente: Cliente) -> None:
        if not cliente.id:
            raise ValidationError("No se puede actualizar un cliente sin id.")
        cliente.validar()
        execute_write(
            self._con,
            """
            UPDATE clientes SET
                nombre = ?,
                email = ?,
                telefono = ?,
                direccion = ?
            WHERE id = ?
            """,
            (cliente.nombre, cliente.email, cliente.telefono, cliente.direccion, cliente.id),
            operacion="ClientesRepository.update",
        )

    def delete(self, cliente_id: int) -> None:
        execute_write(
            self._con,
            "DELETE FROM clientes WHERE id = ?",
            (cliente_id,),
            operacion="ClientesRepository.delete",
        )

    def get_by_id(self, cliente_id: int) -> Optional[Cliente]:
        row = fetch_one(
            self._con,
            "SELECT * FROM clientes WHERE id = ?",
            (cliente_id,),
            operacion="ClientesRepository.get_by_id",
        )
        return self._row_to_model(row) if row else None

    # --------------------------------------------------------------
    # Búsqueda
    # --------------------------------------------------------------

    def get_by_email(self, email: str) -> Optional[Cliente]:
        """
        Busca por email sin distinguir mayúsculas.
        """
        row = fetch_one(
            self._con,
            "SELECT * FROM clientes WHERE lower(email) = lower(?)",
            ((email or "").strip(),),
            operacion="ClientesRepository.get_by_email",
        )
        return self._row_to_model(row) if row else None

    def list_all(self) -> List[Cliente]:
        rows = fetch_all(
            self._con,
            "SELECT * FROM clientes ORDER BY nombre",
            operacion="ClientesRepository.list_all",
        )
        return [self._row_to_model(r) for r in rows]

    # --------------------------------------------------------------
    # Mapping
    # --------------------------------------------------------------

    @staticmethod
    def _row_to_model(row: sqlite3.Row) -> Cliente:
        return Cliente(
            id=row["id"],
            nombre=row["nombre"],
            email=row["email"],
            telefono=row["telefono"],
            direccion=row["direccion"],
        )
