"""
Máquina de estados de turnos.

Transiciones válidas:
- Pendiente -> Confirmado (solo administrador)
- Pendiente -> Cancelado (cliente o administrador)
- Confirmado -> Cancelado

Ningún turno vuelve a Pendiente ni sale de Cancelado.
"""

from __future__ import annotations

from typing import Dict, FrozenSet

from sislim.app.domain.enums import EstadoTurno
from sislim.app.domain.exceptions import EstadoInvalidoError


TRANSICIONES: Dict[EstadoTurno, FrozenSet[EstadoTurno]] = {
    EstadoTurno.PENDIENTE: frozenset({EstadoTurno.CONFIRMADO, EstadoTurno.CANCELADO}),
    EstadoTurno.CONFIRMADO: frozenset({EstadoTurno.CANCELADO}),
    EstadoTurno.CANCELADO: frozenset(),
}

_MENSAJES: Dict[EstadoTurno, str] = {
    EstadoTurno.CONFIRMADO: "Solo se pueden confirmar turnos en estado 'Pendiente'.",
    EstadoTurno.CANCELADO: "El turno ya está cancelado.",
}


def es_transicion_valida(actual: EstadoTurno, nuevo: EstadoTurno) -> bool:
    return nuevo in TRANSICIONES.get(actual, frozenset())


def validar_transicion(actual: EstadoTurno, nuevo: EstadoTurno) -> None:
    """Lanza EstadoInvalidoError si la transición actual -> nuevo no está permitida."""
    if es_transicion_valida(actual, nuevo):
        return
    mensaje = _MENSAJES.get(nuevo)
    raise EstadoInvalidoError(
        mensaje or f"Transición no permitida: '{actual.value}' -> '{nuevo.value}'."
    )


def es_activo(estado: EstadoTurno) -> bool:
    """Un turno activo ocupa su fecha/hora: cualquier estado salvo Cancelado."""
    return estado != EstadoTurno.CANCELADO
