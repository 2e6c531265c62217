# application/services/disponibilidad_service.py
"""
Gestión de franjas de disponibilidad por parte de los administradores.

Reglas:
- Al editar se revalida la franja (hora_inicio <= hora_fin, zona y servicio no vacíos).
- No se elimina una franja ocupada ni una con turnos asociados.
- Bloquear una franja ya ocupada, o desbloquear una libre, es un error de estado.
"""

from __future__ import annotations

from datetime import date, time
from typing import List, Optional

from sislim.app.bootstrap_logging import get_logger
from sislim.app.domain.actores import Administrador
from sislim.app.domain.exceptions import (
    DisponibilidadNoEncontradaError,
    EstadoInvalidoError,
    ValidationError,
)
from sislim.app.domain.modelos import Disponibilidad
from sislim.app.domain.repositorios import (
    RepositorioAdministradores,
    RepositorioDisponibilidades,
    RepositorioTurnos,
)


LOGGER = get_logger(__name__)


class DisponibilidadService:
    def __init__(
        self,
        disponibilidades: RepositorioDisponibilidades,
        administradores: RepositorioAdministradores,
        turnos: RepositorioTurnos,
    ) -> None:
        self._disponibilidades = disponibilidades
        self._administradores = administradores
        self._turnos = turnos

    def crear(
        self,
        admin: Optional[Administrador],
        fecha: date,
        hora_inicio: time,
        hora_fin: time,
        zona: str,
        servicio: str,
    ) -> Disponibilidad:
        self._validar_admin(admin)
        franja = Disponibilidad(
            fecha=fecha,
            hora_inicio=hora_inicio,
            hora_fin=hora_fin,
            zona=zona,
            servicio=servicio,
            disponible=True,
            admin_id=admin.id,
        )
        franja.id = self._disponibilidades.create(franja)
        LOGGER.info("disponibilidad_creada", extra={"action": "disponibilidad_crear", "disponibilidad_id": franja.id})
        return franja

    def editar(
        self,
        admin: Optional[Administrador],
        disponibilidad_id: int,
        *,
        fecha: date,
        hora_inicio: time,
        hora_fin: time,
        zona: str,
        servicio: str,
    ) -> Disponibilidad:
        self._validar_admin(admin)
        franja = self._obtener_o_fallar(disponibilidad_id)
        franja.editar(fecha=fecha, hora_inicio=hora_inicio, hora_fin=hora_fin, zona=zona, servicio=servicio)
        self._disponibilidades.update(franja)
        LOGGER.info("disponibilidad_editada", extra={"action": "disponibilidad_editar", "disponibilidad_id": franja.id})
        return franja

    def eliminar(self, admin: Optional[Administrador], disponibilidad_id: int) -> None:
        self._validar_admin(admin)
        franja = self._obtener_o_fallar(disponibilidad_id)
        if not franja.disponible:
            raise EstadoInvalidoError("No se puede eliminar una disponibilidad ocupada.")
        if any(t.disponibilidad_id == franja.id for t in self._turnos.list_all()):
            raise EstadoInvalidoError("La disponibilidad tiene turnos asociados y no puede eliminarse.")
        self._disponibilidades.delete(franja.id)
        LOGGER.info("disponibilidad_eliminada", extra={"action": "disponibilidad_eliminar", "disponibilidad_id": franja.id})

    def bloquear(self, admin: Optional[Administrador], disponibilidad_id: int) -> Disponibilidad:
        self._validar_admin(admin)
        franja = self._obtener_o_fallar(disponibilidad_id)
        franja.bloquear()
        self._disponibilidades.update(franja)
        return franja

    def desbloquear(self, admin: Optional[Administrador], disponibilidad_id: int) -> Disponibilidad:
        self._validar_admin(admin)
        franja = self._obtener_o_fallar(disponibilidad_id)
        franja.desbloquear()
        self._disponibilidades.update(franja)
        return franja

    def obtener(self, disponibilidad_id: int) -> Disponibilidad:
        return self._obtener_o_fallar(disponibilidad_id)

    def listar_todas(self) -> List[Disponibilidad]:
        return self._disponibilidades.list_all()

    def listar_libres(self) -> List[Disponibilidad]:
        return self._disponibilidades.list_libres()

    def listar_por_admin(self, admin_id: int) -> List[Disponibilidad]:
        return self._disponibilidades.list_by_admin(admin_id)

    def _obtener_o_fallar(self, disponibilidad_id: int) -> Disponibilidad:
        franja = self._disponibilidades.get_by_id(disponibilidad_id) if disponibilidad_id else None
        if franja is None:
            raise DisponibilidadNoEncontradaError(disponibilidad_id)
        return franja

    def _validar_admin(self, admin: Optional[Administrador]) -> None:
        if admin is None:
            raise ValidationError("El administrador no puede ser nulo.")
        if not admin.id or self._administradores.get_by_id(admin.id) is None:
            raise ValidationError("El administrador no está registrado.")
