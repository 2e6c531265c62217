from __future__ import annotations

import difflib
import pprint
import sqlite3
from pathlib import Path
from typing import Any, Dict, Iterator, List

import pytest

from sislim.app.config import SislimConfig
from sislim.app.container import AppContainer, build_container, build_container_memoria
from sislim.app.domain.modelos import Notificacion
from sislim.app.infrastructure.demo_seed import sembrar_datos_demo
from sislim.app.infrastructure.sqlite.db import apply_schema


SCHEMA_PATH = Path(__file__).resolve().parents[1] / "sislim" / "app" / "infrastructure" / "sqlite" / "schema.sql"


def _apply_pragmas(con: sqlite3.Connection) -> None:
    con.execute("PRAGMA foreign_keys = ON;")
    con.execute("PRAGMA journal_mode = WAL;")
    con.execute("PRAGMA synchronous = NORMAL;")
    con.execute("PRAGMA temp_store = MEMORY;")
    con.execute("PRAGMA busy_timeout = 5000;")


class CanalRegistro:
    """Canal de pruebas: guarda lo transmitido en lugar de emitirlo."""

    def __init__(self) -> None:
        self.enviadas: List[Notificacion] = []

    def transmitir(self, notificacion: Notificacion) -> None:
        self.enviadas.append(notificacion.copia())


@pytest.fixture()
def config() -> SislimConfig:
    return SislimConfig()


@pytest.fixture()
def canal() -> CanalRegistro:
    return CanalRegistro()


@pytest.fixture()
def db_connection(tmp_path: Path) -> Iterator[sqlite3.Connection]:
    con = sqlite3.connect((tmp_path / "sislim_test.sqlite").as_posix())
    con.row_factory = sqlite3.Row
    _apply_pragmas(con)
    apply_schema(con, SCHEMA_PATH)
    try:
        yield con
    finally:
        con.close()


@pytest.fixture()
def container(db_connection: sqlite3.Connection, config: SislimConfig, canal: CanalRegistro) -> AppContainer:
    return build_container(db_connection, config, canal=canal)


@pytest.fixture()
def container_memoria(config: SislimConfig, canal: CanalRegistro) -> AppContainer:
    return build_container_memoria(config, canal=canal)


@pytest.fixture(params=["sqlite", "memoria"])
def app(request: pytest.FixtureRequest) -> AppContainer:
    """Contenedor de cada backend; los tests de servicios corren contra ambos."""
    fixture_name = "container" if request.param == "sqlite" else "container_memoria"
    return request.getfixturevalue(fixture_name)


@pytest.fixture()
def assert_expected_actual():
    def _assert(expected: Any, actual: Any, *, message: str) -> None:
        expected_str = pprint.pformat(expected, width=120)
        actual_str = pprint.pformat(actual, width=120)
        diff = "\n".join(
            difflib.unified_diff(
                expected_str.splitlines(),
                actual_str.splitlines(),
                fromfile="expected",
                tofile="actual",
                lineterm="",
            )
        )
        assert expected == actual, (
            f"{message}\nExpected:\n{expected_str}\nActual:\n{actual_str}\nDiff:\n{diff}"
        )

    return _assert


@pytest.fixture()
def seed_data(app: AppContainer) -> Dict[str, Any]:
    """Datos demo: Juan Pérez, María Gómez, Admin1 y franjas del 1 y 2 de octubre de 2025."""
    sembrar_datos_demo(app)
    clientes = {c.email: c for c in app.clientes_repo.list_all()}
    admin = app.administradores_repo.get_by_email("admin1@sislim.com")
    franjas = app.disponibilidades_repo.list_all()
    return {
        "cliente": clientes["juanperez@email.com"],
        "otro_cliente": clientes["mariagomez@email.com"],
        "admin": admin,
        "franja_1_oct": franjas[0],
        "franja_2_oct": franjas[1],
    }
