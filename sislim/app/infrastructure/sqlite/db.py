# infrastructure/sqlite/db.py
"""
Conexión y bootstrap de SQLite.

Responsabilidades:
- Abrir conexión con SQLite con PRAGMAs recomendados.
- Aplicar el schema desde un archivo .sql (idempotente: CREATE IF NOT EXISTS).
- Centralizar el acceso para que el resto de capas no repitan lógica.

Notas:
- foreign_keys debe activarse por conexión en SQLite.
- La conexión se abre una vez al arrancar y se inyecta en el contenedor;
  no hay gestor global ni pool.
"""

from __future__ import annotations

import sqlite3
from dataclasses import dataclass
from pathlib import Path


SCHEMA_PATH = Path(__file__).resolve().parent / "schema.sql"


@dataclass(frozen=True)
class SqliteConfig:
    """
    Configuración para SQLite.
    - db_path: ruta al archivo .sqlite/.db (o ":memory:")
    - schema_path: ruta al schema.sql
    """
    db_path: Path
    schema_path: Path = SCHEMA_PATH


def _is_special_sqlite_path(raw_path: str) -> bool:
    return raw_path == ":memory:" or raw_path.startswith("file:")


def connect(config: SqliteConfig) -> sqlite3.Connection:
    """
    Abre conexión SQLite y aplica PRAGMAs recomendados.
    """
    raw = str(config.db_path)
    if not _is_special_sqlite_path(raw):
        config.db_path.parent.mkdir(parents=True, exist_ok=True)
        raw = config.db_path.as_posix()

    con = sqlite3.connect(raw, uri=raw.startswith("file:"))
    con.row_factory = sqlite3.Row  # devuelve filas tipo dict-like
    _apply_pragmas(con)
    return con


def _apply_pragmas(con: sqlite3.Connection) -> None:
    """
    PRAGMAs por conexión.

    foreign_keys:
    - Obligatorio para que se respeten las FKs.

    journal_mode=WAL:
    - Lecturas de la UI mientras se escribe.

    synchronous=NORMAL:
    - Buen equilibrio seguridad/rendimiento para apps de escritorio.
    """
    con.execute("PRAGMA foreign_keys = ON;")
    con.execute("PRAGMA journal_mode = WAL;")
    con.execute("PRAGMA synchronous = NORMAL;")
    con.execute("PRAGMA temp_store = MEMORY;")
    con.execute("PRAGMA busy_timeout = 5000;")


def apply_schema(con: sqlite3.Connection, schema_path: Path = SCHEMA_PATH) -> None:
    """
    Aplica el schema desde un archivo .sql.

    Requisitos:
    - El schema debe ser idempotente (CREATE TABLE IF NOT EXISTS...).
    """
    if not schema_path.exists():
        raise FileNotFoundError(f"No existe schema.sql en: {schema_path}")

    sql = schema_path.read_text(encoding="utf-8")

    # executescript permite ejecutar múltiples sentencias SQL separadas por ';'
    con.executescript(sql)
    _ensure_column(con, table="disponibilidades", column="admin_id", ddl="admin_id INTEGER")
    _ensure_column(con, table="notificaciones", column="enviada", ddl="enviada INTEGER NOT NULL DEFAULT 0")
    con.commit()


def _ensure_column(con: sqlite3.Connection, *, table: str, column: str, ddl: str) -> None:
    """Añade columnas que no existían en bases creadas con versiones anteriores del schema."""
    columns = {row["name"] for row in con.execute(f"PRAGMA table_info({table})").fetchall()}
    if column in columns:
        return
    con.execute(f"ALTER TABLE {table} ADD COLUMN {ddl}")


def bootstrap(
    db_path: str | Path,
    schema_path: str | Path = SCHEMA_PATH,
    *,
    apply: bool = True,
) -> sqlite3.Connection:
    """
    Atajo para:
    - conectar
    - aplicar schema (si apply=True)
    """
    cfg = SqliteConfig(db_path=Path(db_path), schema_path=Path(schema_path))
    con = connect(cfg)
    if apply:
        apply_schema(con, cfg.schema_path)
    return con
