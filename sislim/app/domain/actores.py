"""
Actores del sistema: clientes y administradores.

No existe una tabla "usuario" ni una jerarquía de clases: son dos tipos
independientes que comparten los datos de contacto y sus validaciones.
Los turnos y franjas de cada actor se relacionan por id (ver Turno.cliente_id,
Turno.admin_id y Disponibilidad.admin_id).
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional

from sislim.app.domain.value_objects import (
    _require_non_empty,
    _strip_or_none,
    _validate_email_basic,
    _validate_phone_basic,
)


def _validar_contacto(nombre: str, email: str, telefono: Optional[str]) -> tuple[str, str, Optional[str]]:
    nombre = _require_non_empty(nombre, "nombre")
    email = _require_non_empty(email, "email")
    _validate_email_basic(email)
    telefono = _strip_or_none(telefono)
    _validate_phone_basic(telefono)
    return nombre, email, telefono


@dataclass(slots=True)
class Cliente:
    """Cliente (tabla SQL: clientes)."""

    id: Optional[int] = None
    nombre: str = ""
    email: str = ""
    telefono: Optional[str] = None
    direccion: Optional[str] = None

    def validar(self) -> None:
        self.nombre, self.email, self.telefono = _validar_contacto(self.nombre, self.email, self.telefono)
        self.direccion = _strip_or_none(self.direccion)

    def informacion_basica(self) -> str:
        return f"ID: {self.id}, Nombre: {self.nombre}, Email: {self.email}"

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(slots=True)
class Administrador:
    """Administrador (tabla SQL: administradores)."""

    id: Optional[int] = None
    nombre: str = ""
    email: str = ""
    telefono: Optional[str] = None

    def validar(self) -> None:
        self.nombre, self.email, self.telefono = _validar_contacto(self.nombre, self.email, self.telefono)

    def informacion_basica(self) -> str:
        return f"ID: {self.id}, Nombre: {self.nombre}, Email: {self.email}"

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
