from sislim.app.domain.actores import Administrador, Cliente
from sislim.app.domain.enums import EstadoTurno, TipoNotificacion
from sislim.app.domain.modelos import Disponibilidad, Notificacion, Turno

__all__ = [
    "Administrador",
    "Cliente",
    "Disponibilidad",
    "EstadoTurno",
    "Notificacion",
    "TipoNotificacion",
    "Turno",
]
