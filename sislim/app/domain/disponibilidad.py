"""Selección de franja para un turno (función pura, sin acceso a datos)."""

from __future__ import annotations

from datetime import date
from typing import Iterable, Optional

from sislim.app.domain.modelos import Disponibilidad


def buscar_disponibilidad(
    fecha: date,
    franjas: Iterable[Disponibilidad],
    *,
    permitir_otra_fecha: bool = False,
) -> Optional[Disponibilidad]:
    """
    Devuelve la primera franja libre con la misma fecha.

    Si no hay ninguna y `permitir_otra_fecha` es True, devuelve la primera franja
    libre de cualquier fecha. Si no hay franjas libres devuelve None.
    """
    primera_libre: Optional[Disponibilidad] = None
    for franja in franjas:
        if not franja.disponible:
            continue
        if franja.fecha == fecha:
            return franja
        if primera_libre is None:
            primera_libre = franja
    return primera_libre if permitir_otra_fecha else None
