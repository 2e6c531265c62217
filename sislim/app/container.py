from __future__ import annotations

import sqlite3
from dataclasses import dataclass
from functools import partial
from typing import Callable, ContextManager, Optional

from sislim.app.application.services.acceso_service import AccesoService
from sislim.app.application.services.disponibilidad_service import DisponibilidadService
from sislim.app.application.services.estadisticas import EstadisticasService
from sislim.app.application.services.notificacion_service import CanalNotificacion, NotificacionService
from sislim.app.application.services.turno_service import TurnoService
from sislim.app.application.services.turnos_facade import TurnosFacade
from sislim.app.bootstrap_logging import get_logger
from sislim.app.config import SislimConfig, load_config
from sislim.app.domain.repositorios import (
    RepositorioAdministradores,
    RepositorioClientes,
    RepositorioDisponibilidades,
    RepositorioNotificaciones,
    RepositorioTurnos,
)
from sislim.app.infrastructure.memoria.repos import (
    AdministradoresMemoriaRepository,
    ClientesMemoriaRepository,
    DisponibilidadesMemoriaRepository,
    NotificacionesMemoriaRepository,
    TurnosMemoriaRepository,
    transaccion_memoria,
)
from sislim.app.infrastructure.sqlite.repos_administradores import AdministradoresRepository
from sislim.app.infrastructure.sqlite.repos_clientes import ClientesRepository
from sislim.app.infrastructure.sqlite.repos_disponibilidades import DisponibilidadesRepository
from sislim.app.infrastructure.sqlite.repos_notificaciones import NotificacionesRepository
from sislim.app.infrastructure.sqlite.repos_turnos import TurnosRepository
from sislim.app.infrastructure.sqlite.sql_helpers import transaccion


LOGGER = get_logger(__name__)


@dataclass(slots=True)
class AppContainer:
    connection: Optional[sqlite3.Connection]
    config: SislimConfig

    clientes_repo: RepositorioClientes
    administradores_repo: RepositorioAdministradores
    disponibilidades_repo: RepositorioDisponibilidades
    turnos_repo: RepositorioTurnos
    notificaciones_repo: RepositorioNotificaciones

    notificacion_service: NotificacionService
    turno_service: TurnoService
    disponibilidad_service: DisponibilidadService
    acceso_service: AccesoService
    estadisticas_service: EstadisticasService
    turnos_facade: TurnosFacade

    def close(self) -> None:
        if self.connection is None:
            return
        try:
            self.connection.close()
        except sqlite3.Error as exc:
            LOGGER.warning("db_close_failed", extra={"context": {"error": str(exc)}})


def build_container(
    connection: sqlite3.Connection,
    config: Optional[SislimConfig] = None,
    *,
    canal: Optional[CanalNotificacion] = None,
) -> AppContainer:
    connection.row_factory = sqlite3.Row
    return _assemble(
        connection=connection,
        config=config or load_config(),
        canal=canal,
        clientes_repo=ClientesRepository(connection),
        administradores_repo=AdministradoresRepository(connection),
        disponibilidades_repo=DisponibilidadesRepository(connection),
        turnos_repo=TurnosRepository(connection),
        notificaciones_repo=NotificacionesRepository(connection),
        transaccion_factory=partial(transaccion, connection),
    )


def build_container_memoria(
    config: Optional[SislimConfig] = None,
    *,
    canal: Optional[CanalNotificacion] = None,
) -> AppContainer:
    turnos_repo = TurnosMemoriaRepository()
    notificaciones_repo = NotificacionesMemoriaRepository()
    return _assemble(
        connection=None,
        config=config or load_config(),
        canal=canal,
        clientes_repo=ClientesMemoriaRepository(),
        administradores_repo=AdministradoresMemoriaRepository(),
        disponibilidades_repo=DisponibilidadesMemoriaRepository(),
        turnos_repo=turnos_repo,
        notificaciones_repo=notificaciones_repo,
        transaccion_factory=partial(transaccion_memoria, turnos_repo, notificaciones_repo),
    )


def _assemble(
    *,
    connection: Optional[sqlite3.Connection],
    config: SislimConfig,
    canal: Optional[CanalNotificacion],
    clientes_repo: RepositorioClientes,
    administradores_repo: RepositorioAdministradores,
    disponibilidades_repo: RepositorioDisponibilidades,
    turnos_repo: RepositorioTurnos,
    notificaciones_repo: RepositorioNotificaciones,
    transaccion_factory: Callable[[], ContextManager[None]],
) -> AppContainer:
    notificacion_service = NotificacionService(notificaciones_repo, canal)
    turno_service = TurnoService(
        turnos_repo,
        disponibilidades_repo,
        clientes_repo,
        administradores_repo,
        notificacion_service,
        permitir_otra_fecha=config.fallback_disponibilidad,
        transaccion=transaccion_factory,
    )
    estadisticas_service = EstadisticasService(turnos_repo, notificaciones_repo)
    return AppContainer(
        connection=connection,
        config=config,
        clientes_repo=clientes_repo,
        administradores_repo=administradores_repo,
        disponibilidades_repo=disponibilidades_repo,
        turnos_repo=turnos_repo,
        notificaciones_repo=notificaciones_repo,
        notificacion_service=notificacion_service,
        turno_service=turno_service,
        disponibilidad_service=DisponibilidadService(disponibilidades_repo, administradores_repo, turnos_repo),
        acceso_service=AccesoService(clientes_repo, administradores_repo, dominio_admin=config.dominio_admin),
        estadisticas_service=estadisticas_service,
        turnos_facade=TurnosFacade(turno_service, estadisticas_service, clientes_repo, administradores_repo),
    )
