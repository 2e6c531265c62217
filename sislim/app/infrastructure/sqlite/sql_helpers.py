"""Ejecución de SQL con traducción de sqlite3.Error a errores de dominio/persistencia."""

from __future__ import annotations

import logging
import sqlite3
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any, Iterator, List, Optional, Sequence

from sislim.app.domain.exceptions import ConflictoError, PersistenciaError


logger = logging.getLogger(__name__)

_TRANSACCION_ACTIVA: ContextVar[Optional[sqlite3.Connection]] = ContextVar("transaccion_sqlite", default=None)


@contextmanager
def transaccion(con: sqlite3.Connection) -> Iterator[None]:
    """
    Agrupa varias escrituras en una sola transacción.

    Dentro del bloque execute_write no hace commit: al salir se confirma todo
    o, si el bloque lanza, se deshace todo. Un bloque anidado sobre la misma
    conexión se une al exterior.
    """
    if _TRANSACCION_ACTIVA.get() is con:
        yield
        return

    token = _TRANSACCION_ACTIVA.set(con)
    try:
        yield
    except BaseException:
        con.rollback()
        logger.warning("Transacción deshecha")
        raise
    else:
        try:
            con.commit()
        except sqlite3.Error as exc:
            con.rollback()
            logger.error("Error al confirmar la transacción: %s", exc)
            raise PersistenciaError(f"No se pudo confirmar la transacción: {exc}") from exc
    finally:
        _TRANSACCION_ACTIVA.reset(token)


def execute_write(
    con: sqlite3.Connection,
    sql: str,
    params: Sequence[Any] = (),
    *,
    operacion: str,
    mensaje_conflicto: Optional[str] = None,
) -> sqlite3.Cursor:
    """
    Ejecuta una escritura y hace commit (salvo dentro de `transaccion`).

    Si falla: rollback y PersistenciaError. Con `mensaje_conflicto`, una violación
    de índice UNIQUE se traduce a ConflictoError con ese mensaje.
    """
    try:
        cur = con.execute(sql, params)
        if _TRANSACCION_ACTIVA.get() is not con:
            con.commit()
        return cur
    except sqlite3.IntegrityError as exc:
        con.rollback()
        if mensaje_conflicto and "UNIQUE" in str(exc).upper():
            logger.warning("Conflicto de unicidad en %s: %s", operacion, exc)
            raise ConflictoError(mensaje_conflicto) from exc
        logger.error("Error de integridad en %s: %s", operacion, exc)
        raise PersistenciaError(f"No se pudo completar '{operacion}': {exc}") from exc
    except sqlite3.Error as exc:
        con.rollback()
        logger.error("Error SQL en %s: %s", operacion, exc)
        raise PersistenciaError(f"No se pudo completar '{operacion}': {exc}") from exc


def fetch_all(
    con: sqlite3.Connection,
    sql: str,
    params: Sequence[Any] = (),
    *,
    operacion: str,
) -> List[sqlite3.Row]:
    try:
        return con.execute(sql, params).fetchall()
    except sqlite3.Error as exc:
        logger.error("Error SQL en %s: %s", operacion, exc)
        raise PersistenciaError(f"No se pudo completar '{operacion}': {exc}") from exc


def fetch_one(
    con: sqlite3.Connection,
    sql: str,
    params: Sequence[Any] = (),
    *,
    operacion: str,
) -> Optional[sqlite3.Row]:
    try:
        return con.execute(sql, params).fetchone()
    except sqlite3.Error as exc:
        logger.error("Error SQL en %s: %s", operacion, exc)
        raise PersistenciaError(f"No se pudo completar '{operacion}': {exc}") from exc
