# infrastructure/demo_seed.py
"""
Datos de demostración: dos clientes, un administrador y dos franjas.

La siembra es idempotente: los actores se buscan por email y las franjas
solo se crean si el administrador aún no tiene ninguna.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, time
from typing import TYPE_CHECKING

from sislim.app.bootstrap_logging import get_logger
from sislim.app.domain.actores import Administrador, Cliente

if TYPE_CHECKING:
    from sislim.app.container import AppContainer


LOGGER = get_logger(__name__)

CLIENTES_DEMO = (
    Cliente(nombre="Juan Pérez", email="juanperez@email.com", telefono="111-222-333", direccion="Av. Siempre Viva 123"),
    Cliente(nombre="María Gómez", email="mariagomez@email.com", telefono="444-555-666", direccion="Calle Falsa 456"),
)

ADMIN_DEMO = Administrador(nombre="Admin1", email="admin1@sislim.com", telefono="999-888-777")

FRANJAS_DEMO = (
    (date(2025, 10, 1), time(9, 0), time(11, 0), "Zona Norte", "Limpieza básica"),
    (date(2025, 10, 2), time(15, 0), time(17, 0), "Zona Sur", "Limpieza profunda"),
)


@dataclass(frozen=True, slots=True)
class ResumenSiembra:
    clientes: int
    administradores: int
    disponibilidades: int


def sembrar_datos_demo(container: "AppContainer") -> ResumenSiembra:
    acceso = container.acceso_service
    clientes_creados = 0
    for plantilla in CLIENTES_DEMO:
        if container.clientes_repo.get_by_email(plantilla.email) is None:
            acceso.registrar_cliente(Cliente(**plantilla.to_dict()))
            clientes_creados += 1

    admin = container.administradores_repo.get_by_email(ADMIN_DEMO.email)
    admins_creados = 0
    if admin is None:
        admin = acceso.registrar_administrador(Administrador(**ADMIN_DEMO.to_dict()))
        admins_creados = 1

    franjas_creadas = 0
    if not container.disponibilidad_service.listar_por_admin(admin.id):
        for fecha, inicio, fin, zona, servicio in FRANJAS_DEMO:
            container.disponibilidad_service.crear(admin, fecha, inicio, fin, zona, servicio)
            franjas_creadas += 1

    resumen = ResumenSiembra(clientes_creados, admins_creados, franjas_creadas)
    LOGGER.info(
        "demo_sembrada",
        extra={"action": "seed_demo", "context": {"clientes": clientes_creados, "franjas": franjas_creadas}},
    )
    return resumen
