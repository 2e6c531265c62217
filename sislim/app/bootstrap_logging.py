"""
Logging de SISLIM.

Tres ficheros rotativos en `log_dir` más la consola:
- app.log: log operativo (todo salvo los crashes).
- crash_soft.log: excepciones recuperables registradas con log_soft_exception.
- crash_fatal.log: excepciones no capturadas (crash_handler) y nivel CRITICAL.

Cada línea lleva el run_id de la ejecución. Mensajes y extras pasan por log_redaction.
"""

from __future__ import annotations

import contextvars
import json
import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Callable, NamedTuple

from sislim.app.common.log_redaction import redact_text, redact_value

_RUN_ID: contextvars.ContextVar[str] = contextvars.ContextVar("run_id", default="-")
_SOFT_KEY = "is_soft_crash"
_FATAL_KEY = "is_fatal_crash"
_CAMPOS_EXTRA = ("action", "turno_id", "disponibilidad_id", "notificacion_id", "count", "context", "app_name")

Selector = Callable[[logging.LogRecord], bool]


def _es_soft(record: logging.LogRecord) -> bool:
    return bool(getattr(record, _SOFT_KEY, False))


def _es_fatal(record: logging.LogRecord) -> bool:
    return bool(getattr(record, _FATAL_KEY, False)) or record.levelno >= logging.CRITICAL


def _es_operativo(record: logging.LogRecord) -> bool:
    return not (_es_soft(record) or getattr(record, _FATAL_KEY, False))


class _Destino(NamedTuple):
    fichero: str
    max_bytes: int
    backups: int
    selector: Selector


_DESTINOS = (
    _Destino("app.log", 2_000_000, 5, _es_operativo),
    _Destino("crash_soft.log", 1_000_000, 3, _es_soft),
    _Destino("crash_fatal.log", 1_000_000, 3, _es_fatal),
)


class _SelectorFilter(logging.Filter):
    """Añade el run_id al registro y deja pasar solo lo que acepta el selector."""

    def __init__(self, selector: Selector) -> None:
        super().__init__()
        self._selector = selector

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "run_id"):
            record.run_id = _RUN_ID.get()
        return self._selector(record)


class _SislimFormatter(logging.Formatter):
    def __init__(self, *, json_mode: bool) -> None:
        super().__init__()
        self._json_mode = json_mode

    def format(self, record: logging.LogRecord) -> str:
        datos: dict[str, Any] = {
            "timestamp": self.formatTime(record, "%Y-%m-%dT%H:%M:%S"),
            "level": record.levelname,
            "logger": record.name,
            "message": redact_text(record.getMessage()),
            "run_id": getattr(record, "run_id", "-"),
        }
        datos.update({campo: getattr(record, campo) for campo in _CAMPOS_EXTRA if hasattr(record, campo)})
        if record.exc_info:
            datos["traceback"] = redact_text(self.formatException(record.exc_info))
        if self._json_mode:
            return json.dumps(datos, ensure_ascii=False, default=str)
        return " ".join(f"{clave}={valor}" for clave, valor in datos.items())


class ContextLoggerAdapter(logging.LoggerAdapter):
    """Adapter que fija el run_id actual y redacta mensaje y extras."""

    def process(self, msg: Any, kwargs: dict[str, Any]) -> tuple[Any, dict[str, Any]]:
        extra = {"run_id": _RUN_ID.get(), **kwargs.get("extra", {})}
        kwargs["extra"] = redact_value(extra)
        return redact_value(msg), kwargs


def _handler(handler: logging.Handler, formatter: logging.Formatter, selector: Selector) -> logging.Handler:
    handler.setFormatter(formatter)
    handler.addFilter(_SelectorFilter(selector))
    return handler


def configure_logging(app_name: str, log_dir: Path, level: str = "INFO", json: bool = True) -> None:
    log_dir.mkdir(parents=True, exist_ok=True)
    root_logger = logging.getLogger()
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
        handler.close()
    root_logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    formatter = _SislimFormatter(json_mode=json)
    root_logger.addHandler(_handler(logging.StreamHandler(stream=sys.__stderr__), formatter, _es_operativo))
    for destino in _DESTINOS:
        fichero = RotatingFileHandler(
            log_dir / destino.fichero,
            maxBytes=destino.max_bytes,
            backupCount=destino.backups,
            encoding="utf-8",
        )
        root_logger.addHandler(_handler(fichero, formatter, destino.selector))

    logging.captureWarnings(True)
    get_logger(__name__).info("logging_configured", extra={"app_name": app_name})


def get_logger(name: str) -> logging.LoggerAdapter:
    return ContextLoggerAdapter(logging.getLogger(name), {})


def set_run_context(run_id: str) -> None:
    _RUN_ID.set(run_id)


def log_soft_exception(logger: logging.LoggerAdapter, exc: Exception, context: dict[str, Any]) -> None:
    """Registra una excepción recuperable en crash_soft.log y en el log operativo."""
    exc_info = (type(exc), exc, exc.__traceback__)
    logger.error("soft_exception", exc_info=exc_info, extra={_SOFT_KEY: True, "context": context})
    logger.error("soft_exception_operational", exc_info=exc_info, extra={"context": context})
