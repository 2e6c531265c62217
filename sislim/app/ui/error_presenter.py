from __future__ import annotations

from typing import Optional

from PySide6.QtWidgets import QMessageBox, QWidget

from sislim.app.bootstrap_logging import get_logger, log_soft_exception
from sislim.app.domain.exceptions import (
    ConflictoError,
    DomainError,
    EstadoInvalidoError,
    PersistenciaError,
    ValidationError,
)

_LOGGER = get_logger("sislim.ui")

_TITULOS = (
    (ValidationError, "Validación"),
    (EstadoInvalidoError, "Estado no válido"),
    (ConflictoError, "Conflicto"),
)


def _normalize_context(context: Optional[str]) -> Optional[str]:
    if not context:
        return None
    return context.strip() or None


def titulo_para(exc: Exception) -> str:
    for tipo, titulo in _TITULOS:
        if isinstance(exc, tipo):
            return titulo
    if isinstance(exc, PersistenciaError):
        return "Error de almacenamiento"
    return "Error"


def present_error(parent: QWidget, exc: Exception, context: str | None = None) -> None:
    context_text = _normalize_context(context)
    message = str(exc)
    if context_text:
        message = f"{message}\n{context_text}"

    if isinstance(exc, DomainError):
        QMessageBox.warning(parent, titulo_para(exc), message)
        return

    log_soft_exception(_LOGGER, exc, {"context": context_text or "-"})
    if isinstance(exc, PersistenciaError):
        QMessageBox.critical(parent, titulo_para(exc), message)
        return

    QMessageBox.critical(
        parent,
        "Error",
        "Ha ocurrido un error inesperado. Revisa los datos o consulta el log.",
    )
