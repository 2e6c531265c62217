# application/services/acceso_service.py
"""
Acceso de clientes y administradores.

Reglas:
- Un cliente puede iniciar sesión si tiene email.
- Un administrador solo si su email pertenece al dominio configurado
  (SISLIM_DOMINIO_ADMIN, por defecto "@sislim.com").
- El alta comprueba que el email no esté ya registrado.
"""

from __future__ import annotations

from typing import Union

from sislim.app.bootstrap_logging import get_logger
from sislim.app.domain.actores import Administrador, Cliente
from sislim.app.domain.exceptions import ValidationError
from sislim.app.domain.repositorios import RepositorioAdministradores, RepositorioClientes


LOGGER = get_logger(__name__)

Actor = Union[Cliente, Administrador]


class AccesoService:
    def __init__(
        self,
        clientes: RepositorioClientes,
        administradores: RepositorioAdministradores,
        *,
        dominio_admin: str = "@sislim.com",
    ) -> None:
        self._clientes = clientes
        self._administradores = administradores
        self._dominio_admin = dominio_admin.strip().lower()

    # --------------------------------------------------------------
    # Reglas de acceso
    # --------------------------------------------------------------

    def puede_iniciar_sesion(self, actor: Actor) -> bool:
        email = (actor.email or "").strip().lower()
        if not email:
            return False
        if isinstance(actor, Administrador):
            return email.endswith(self._dominio_admin)
        return True

    def iniciar_sesion_cliente(self, email: str) -> Cliente:
        if not (email or "").strip():
            raise ValidationError("Debe indicar un email.")
        cliente = self._clientes.get_by_email(email)
        if cliente is None:
            raise ValidationError("No existe un cliente con ese email.")
        LOGGER.info("sesion_iniciada", extra={"action": "login_cliente"})
        return cliente

    def iniciar_sesion_admin(self, email: str) -> Administrador:
        if not (email or "").strip():
            raise ValidationError("Debe indicar un email.")
        self._validar_dominio(email)
        admin = self._administradores.get_by_email(email)
        if admin is None:
            raise ValidationError("No existe un administrador con ese email.")
        LOGGER.info("sesion_iniciada", extra={"action": "login_admin"})
        return admin

    # --------------------------------------------------------------
    # Altas
    # --------------------------------------------------------------

    def registrar_cliente(self, cliente: Cliente) -> Cliente:
        cliente.validar()
        if self._clientes.get_by_email(cliente.email) is not None:
            raise ValidationError("Ya existe un cliente con ese email.")
        cliente.id = self._clientes.create(cliente)
        LOGGER.info("cliente_registrado", extra={"action": "cliente_registrar"})
        return cliente

    def registrar_administrador(self, admin: Administrador) -> Administrador:
        admin.validar()
        self._validar_dominio(admin.email)
        if self._administradores.get_by_email(admin.email) is not None:
            raise ValidationError("Ya existe un administrador con ese email.")
        admin.id = self._administradores.create(admin)
        LOGGER.info("administrador_registrado", extra={"action": "administrador_registrar"})
        return admin

    def _validar_dominio(self, email: str) -> None:
        if not email.strip().lower().endswith(self._dominio_admin):
            raise ValidationError(
                f"El email del administrador debe pertenecer al dominio {self._dominio_admin}."
            )
