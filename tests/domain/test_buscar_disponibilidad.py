from __future__ import annotations

from datetime import date, time

from sislim.app.domain.disponibilidad import buscar_disponibilidad
from sislim.app.domain.modelos import Disponibilidad


def _franja(franja_id: int, fecha: date, disponible: bool = True) -> Disponibilidad:
    return Disponibilidad(
        id=franja_id,
        fecha=fecha,
        hora_inicio=time(9, 0),
        hora_fin=time(11, 0),
        zona="Zona",
        servicio="Limpieza",
        disponible=disponible,
    )


FRANJAS = [
    _franja(1, date(2025, 10, 1), disponible=False),
    _franja(2, date(2025, 10, 2)),
    _franja(3, date(2025, 10, 3)),
    _franja(4, date(2025, 10, 3)),
]


def test_devuelve_primera_libre_de_la_fecha() -> None:
    assert buscar_disponibilidad(date(2025, 10, 3), FRANJAS).id == 3


def test_ignora_franjas_ocupadas() -> None:
    assert buscar_disponibilidad(date(2025, 10, 1), FRANJAS) is None


def test_modo_legacy_devuelve_primera_libre_de_cualquier_fecha() -> None:
    elegida = buscar_disponibilidad(date(2025, 10, 1), FRANJAS, permitir_otra_fecha=True)

    assert elegida.id == 2


def test_sin_franjas_libres() -> None:
    ocupadas = [_franja(1, date(2025, 10, 1), disponible=False)]

    assert buscar_disponibilidad(date(2025, 10, 1), ocupadas, permitir_otra_fecha=True) is None
    assert buscar_disponibilidad(date(2025, 10, 1), []) is None
