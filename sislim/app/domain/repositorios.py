from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date, datetime, time
from typing import List, Optional

from sislim.app.domain.actores import Administrador, Cliente
from sislim.app.domain.enums import EstadoTurno, TipoNotificacion
from sislim.app.domain.modelos import Disponibilidad, Notificacion, Turno


class RepositorioClientes(ABC):
    """
    Contrato (interfaz) para repositorios de clientes.

    ABC + abstractmethod:
    - ABC: marca la clase como base abstracta (no debe instanciarse directamente).
    - abstractmethod: obliga a implementaciones concretas (SQLite, memoria) a implementar estos métodos.
    """

    @abstractmethod
    def create(self, cliente: Cliente) -> int:
        """Crea un cliente y devuelve su ID."""
        raise NotImplementedError

    @abstractmethod
    def get_by_id(self, cliente_id: int) -> Optional[Cliente]:
        raise NotImplementedError

    @abstractmethod
    def get_by_email(self, email: str) -> Optional[Cliente]:
        raise NotImplementedError

    @abstractmethod
    def list_all(self) -> List[Cliente]:
        raise NotImplementedError

    @abstractmethod
    def update(self, cliente: Cliente) -> None:
        raise NotImplementedError

    @abstractmethod
    def delete(self, cliente_id: int) -> None:
        raise NotImplementedError


class RepositorioAdministradores(ABC):
    """Contrato para repositorios de administradores."""

    @abstractmethod
    def create(self, admin: Administrador) -> int:
        raise NotImplementedError

    @abstractmethod
    def get_by_id(self, admin_id: int) -> Optional[Administrador]:
        raise NotImplementedError

    @abstractmethod
    def get_by_email(self, email: str) -> Optional[Administrador]:
        raise NotImplementedError

    @abstractmethod
    def list_all(self) -> List[Administrador]:
        raise NotImplementedError

    @abstractmethod
    def update(self, admin: Administrador) -> None:
        raise NotImplementedError

    @abstractmethod
    def delete(self, admin_id: int) -> None:
        raise NotImplementedError


class RepositorioDisponibilidades(ABC):
    """Contrato para repositorios de franjas de disponibilidad."""

    @abstractmethod
    def create(self, disponibilidad: Disponibilidad) -> int:
        raise NotImplementedError

    @abstractmethod
    def get_by_id(self, disponibilidad_id: int) -> Optional[Disponibilidad]:
        raise NotImplementedError

    @abstractmethod
    def list_all(self) -> List[Disponibilidad]:
        """Devuelve todas las franjas ordenadas por fecha y hora de inicio."""
        raise NotImplementedError

    @abstractmethod
    def list_libres(self) -> List[Disponibilidad]:
        raise NotImplementedError

    @abstractmethod
    def list_by_admin(self, admin_id: int) -> List[Disponibilidad]:
        raise NotImplementedError

    @abstractmethod
    def update(self, disponibilidad: Disponibilidad) -> None:
        raise NotImplementedError

    @abstractmethod
    def delete(self, disponibilidad_id: int) -> None:
        raise NotImplementedError


class RepositorioTurnos(ABC):
    """Contrato para repositorios de turnos."""

    @abstractmethod
    def create(self, turno: Turno) -> int:
        """Crea un turno y devuelve su ID."""
        raise NotImplementedError

    @abstractmethod
    def get_by_id(self, turno_id: int) -> Optional[Turno]:
        raise NotImplementedError

    @abstractmethod
    def list_all(self) -> List[Turno]:
        """Devuelve todos los turnos ordenados por fecha y hora."""
        raise NotImplementedError

    @abstractmethod
    def list_by_cliente(self, cliente_id: int) -> List[Turno]:
        raise NotImplementedError

    @abstractmethod
    def list_by_admin(self, admin_id: int) -> List[Turno]:
        raise NotImplementedError

    @abstractmethod
    def list_by_fecha(self, fecha: date) -> List[Turno]:
        raise NotImplementedError

    @abstractmethod
    def list_by_estado(self, estado: EstadoTurno) -> List[Turno]:
        raise NotImplementedError

    @abstractmethod
    def find_activo(self, fecha: date, hora: time) -> Optional[Turno]:
        """Devuelve un turno no cancelado con esa fecha y hora, si existe."""
        raise NotImplementedError

    @abstractmethod
    def update(self, turno: Turno) -> None:
        raise NotImplementedError

    @abstractmethod
    def delete(self, turno_id: int) -> None:
        """Borrado físico (solo lo usa la purga de cancelados)."""
        raise NotImplementedError


class RepositorioNotificaciones(ABC):
    """Contrato para repositorios de notificaciones."""

    @abstractmethod
    def create(self, notificacion: Notificacion) -> int:
        raise NotImplementedError

    @abstractmethod
    def get_by_id(self, notificacion_id: int) -> Optional[Notificacion]:
        raise NotImplementedError

    @abstractmethod
    def list_all(self) -> List[Notificacion]:
        raise NotImplementedError

    @abstractmethod
    def list_by_turno(self, turno_id: int) -> List[Notificacion]:
        raise NotImplementedError

    @abstractmethod
    def list_by_tipo(self, tipo: TipoNotificacion) -> List[Notificacion]:
        raise NotImplementedError

    @abstractmethod
    def list_pendientes(self) -> List[Notificacion]:
        raise NotImplementedError

    @abstractmethod
    def list_enviadas_antes_de(self, limite: datetime) -> List[Notificacion]:
        raise NotImplementedError

    @abstractmethod
    def update(self, notificacion: Notificacion) -> None:
        raise NotImplementedError

    @abstractmethod
    def delete(self, notificacion_id: int) -> None:
        raise NotImplementedError

    @abstractmethod
    def delete_by_turno(self, turno_id: int) -> int:
        """Elimina las notificaciones de un turno y devuelve cuántas había."""
        raise NotImplementedError
