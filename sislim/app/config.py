"""
Configuración por variables de entorno.

Variables:
- SISLIM_BACKEND: "sqlite" (por defecto) o "memoria".
- SISLIM_FALLBACK_DISPONIBILIDAD: si está activa, un turno puede tomar la
  primera franja libre de otra fecha cuando no hay ninguna en la pedida.
- SISLIM_DIAS_RETENCION: antigüedad (días) para purgar cancelados y notificaciones.
- SISLIM_DOMINIO_ADMIN: dominio de email exigido a los administradores.
- SISLIM_LOG_LEVEL: nivel del logger raíz.

La ruta de la base de datos (SISLIM_DB_PATH) la resuelve bootstrap.resolve_db_path.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

BACKENDS = ("sqlite", "memoria")


def _flag(name: str, default: str = "0") -> bool:
    value = os.getenv(name, default).strip().lower()
    return value in {"1", "true", "yes", "on"}


def _entero_positivo(name: str, default: int) -> int:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError as exc:
        raise RuntimeError(f"{name} debe ser un entero: {raw!r}.") from exc
    if value < 0:
        raise RuntimeError(f"{name} no puede ser negativo: {value}.")
    return value


@dataclass(frozen=True, slots=True)
class SislimConfig:
    backend: str = "sqlite"
    fallback_disponibilidad: bool = False
    dias_retencion: int = 30
    dominio_admin: str = "@sislim.com"
    log_level: str = "INFO"


def load_config() -> SislimConfig:
    backend = os.getenv("SISLIM_BACKEND", "sqlite").strip().lower() or "sqlite"
    if backend not in BACKENDS:
        raise RuntimeError(
            f"SISLIM_BACKEND no válido: {backend!r}. Valores permitidos: {', '.join(BACKENDS)}."
        )
    return SislimConfig(
        backend=backend,
        fallback_disponibilidad=_flag("SISLIM_FALLBACK_DISPONIBILIDAD"),
        dias_retencion=_entero_positivo("SISLIM_DIAS_RETENCION", 30),
        dominio_admin=os.getenv("SISLIM_DOMINIO_ADMIN", "@sislim.com").strip().lower() or "@sislim.com",
        log_level=os.getenv("SISLIM_LOG_LEVEL", "INFO").strip().upper() or "INFO",
    )
