# domain/exceptions.py
"""
Excepciones del dominio.

Propósito:
- Distinguir errores de reglas de negocio (dominio) de errores técnicos (DB/UI).
- Permitir que la capa de aplicación/UI traduzca errores a mensajes para el usuario.

Taxonomía:
- ValidationError: entrada ausente o inválida.
- EstadoInvalidoError: transición de estado no permitida.
- ConflictoError: doble reserva o falta de disponibilidad.
- PersistenciaError: fallo del almacenamiento (técnico, fatal para la petición).
"""


class DomainError(Exception):
    """Error base del dominio."""


class ValidationError(DomainError):
    """Entidad en estado inválido o violación de invariantes."""


class EstadoInvalidoError(DomainError):
    """Transición de estado no permitida (p. ej., confirmar un turno cancelado)."""


class ConflictoError(DomainError):
    """Ya existe un turno activo para la misma fecha y hora."""


class SinDisponibilidadError(ConflictoError):
    """No hay ninguna franja libre para asignar al turno."""


class TurnoNoEncontradoError(DomainError):
    """El turno solicitado no existe."""

    def __init__(self, turno_id: int) -> None:
        super().__init__(f"No se encontró el turno con ID: {turno_id}")
        self.turno_id = turno_id


class PersistenciaError(Exception):
    """Fallo de conectividad o escritura en el almacenamiento."""


class DisponibilidadNoEncontradaError(DomainError):
    """La franja de disponibilidad solicitada no existe."""

    def __init__(self, disponibilidad_id: int) -> None:
        super().__init__(f"No se encontró la disponibilidad con ID: {disponibilidad_id}")
        self.disponibilidad_id = disponibilidad_id
