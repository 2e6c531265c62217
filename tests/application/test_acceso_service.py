from __future__ import annotations

import pytest

from sislim.app.config import SislimConfig
from sislim.app.container import build_container_memoria
from sislim.app.domain.actores import Administrador, Cliente
from sislim.app.domain.exceptions import ValidationError


def test_cliente_con_email_puede_iniciar_sesion(app, seed_data) -> None:
    cliente = app.acceso_service.iniciar_sesion_cliente("JuanPerez@email.com")

    assert cliente.id == seed_data["cliente"].id
    assert app.acceso_service.puede_iniciar_sesion(cliente) is True
    assert app.acceso_service.puede_iniciar_sesion(Cliente(nombre="Sin email")) is False


def test_admin_fuera_del_dominio_no_puede_iniciar_sesion(app, seed_data) -> None:
    assert app.acceso_service.puede_iniciar_sesion(seed_data["admin"]) is True
    assert app.acceso_service.puede_iniciar_sesion(Administrador(nombre="X", email="x@gmail.com")) is False

    with pytest.raises(ValidationError):
        app.acceso_service.iniciar_sesion_admin("x@gmail.com")


def test_iniciar_sesion_con_email_desconocido_falla(app, seed_data) -> None:
    with pytest.raises(ValidationError):
        app.acceso_service.iniciar_sesion_cliente("nadie@email.com")
    with pytest.raises(ValidationError):
        app.acceso_service.iniciar_sesion_admin("nadie@sislim.com")
    with pytest.raises(ValidationError):
        app.acceso_service.iniciar_sesion_cliente("")


def test_registrar_cliente_rechaza_email_duplicado(app, seed_data) -> None:
    with pytest.raises(ValidationError):
        app.acceso_service.registrar_cliente(
            Cliente(nombre="Otro Juan", email="juanperez@email.com", telefono="123-456-789")
        )


def test_registrar_administrador_valida_dominio(app) -> None:
    with pytest.raises(ValidationError):
        app.acceso_service.registrar_administrador(Administrador(nombre="Ana", email="ana@gmail.com"))

    admin = app.acceso_service.registrar_administrador(Administrador(nombre="Ana", email="ana@sislim.com"))
    assert admin.id is not None


def test_dominio_admin_configurable(canal) -> None:
    app = build_container_memoria(SislimConfig(dominio_admin="@limpiezas.test"), canal=canal)

    admin = app.acceso_service.registrar_administrador(Administrador(nombre="Ana", email="ana@limpiezas.test"))

    assert app.acceso_service.iniciar_sesion_admin("ana@limpiezas.test").id == admin.id
