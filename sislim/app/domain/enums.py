# domain/enums.py
from __future__ import annotations
from enum import Enum


class EstadoTurno(str, Enum):
    PENDIENTE = "Pendiente"
    CONFIRMADO = "Confirmado"
    CANCELADO = "Cancelado"


class TipoNotificacion(str, Enum):
    RECORDATORIO = "Recordatorio"
    CONFIRMACION = "Confirmacion"
    AVISO = "Aviso"

    @classmethod
    def desde_texto(cls, valor: str) -> "TipoNotificacion":
        """Acepta el valor o el nombre sin distinguir mayúsculas ("aviso", "AVISO", "Aviso")."""
        normalizado = (valor or "").strip().lower()
        for tipo in cls:
            if normalizado in {tipo.value.lower(), tipo.name.lower()}:
                return tipo
        raise ValueError(f"Tipo de notificación no válido: {valor}")
