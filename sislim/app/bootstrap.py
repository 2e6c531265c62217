# bootstrap.py
"""
Bootstrap de la aplicación SISLIM.

Responsabilidades:
- Resolver rutas del proyecto
- Inicializar SQLite
- Aplicar schema.sql
- Devolver la conexión lista para usar

Este archivo es infraestructura pura.
No contiene lógica de dominio ni de aplicación.
"""

from __future__ import annotations

import sqlite3
from os import getenv
from pathlib import Path

from sislim.app.bootstrap_logging import get_logger
from sislim.app.infrastructure.sqlite import db


LOGGER = get_logger(__name__)


def _is_special_sqlite_path(raw_path: str) -> bool:
    return raw_path == ":memory:" or raw_path.startswith("file:")


def _to_path(raw_path: str) -> Path:
    if _is_special_sqlite_path(raw_path):
        return Path(raw_path)
    return Path(raw_path).expanduser().resolve()


# ---------------------------------------------------------------------
# Rutas del proyecto
# ---------------------------------------------------------------------


def project_root() -> Path:
    """Devuelve la raíz del paquete de la aplicación."""
    return Path(__file__).resolve().parent


def data_dir() -> Path:
    """Directorio donde se guarda la base de datos."""
    return Path("./data")


def schema_path() -> Path:
    """Ruta al archivo schema.sql."""
    return project_root() / "infrastructure" / "sqlite" / "schema.sql"


def resolve_db_path(sqlite_path_arg: str | None = None, *, emit_log: bool = True) -> Path:
    """Resuelve la ruta SQLite desde arg/env/default con trazabilidad en logs."""
    if sqlite_path_arg:
        resolved = _to_path(sqlite_path_arg)
        source = "arg"
    else:
        configured = getenv("SISLIM_DB_PATH")
        if configured:
            resolved = _to_path(configured)
            source = "env"
        else:
            resolved = (data_dir() / "sislim.db").expanduser().resolve()
            source = "default"
    if emit_log:
        LOGGER.info("db_path_resolved path=%s source=%s", resolved, source)
    return resolved


# ---------------------------------------------------------------------
# Bootstrap principal
# ---------------------------------------------------------------------


def bootstrap_database(apply_schema: bool = True, sqlite_path: str | None = None) -> sqlite3.Connection:
    """
    Inicializa la base de datos de la aplicación.

    Flujo:
    - Resuelve la ruta (arg > SISLIM_DB_PATH > ./data/sislim.db)
    - Abre conexión SQLite con PRAGMAs (crea la carpeta si no existe)
    - Aplica schema.sql
    - Devuelve la conexión
    """
    target_path = resolve_db_path(sqlite_path)
    con = db.connect(db.SqliteConfig(db_path=target_path, schema_path=schema_path()))
    LOGGER.info("db_opened path=%s", target_path)

    if apply_schema:
        db.apply_schema(con, schema_path())

    return con
