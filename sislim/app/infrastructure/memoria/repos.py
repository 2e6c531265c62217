# infrastructure/memoria/repos.py
"""
Repositorios en memoria (diccionarios por id).

Responsabilidades:
- Implementar los mismos contratos que los repositorios SQLite.
- Guardar y devolver copias: modificar un objeto devuelto no altera el almacén
  hasta que se llame a update().
- Mismas reglas de unicidad que el schema (email de actores, turno activo por fecha/hora).
- `transaccion_memoria` deshace los cambios de varios repositorios si una operación falla.

Uso:
- Backend "memoria" (SISLIM_BACKEND=memoria) y tests.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from datetime import date, datetime, time
from itertools import count
from typing import Callable, Dict, Generic, Iterable, Iterator, List, Optional, TypeVar

from sislim.app.domain.actores import Administrador, Cliente
from sislim.app.domain.enums import EstadoTurno, TipoNotificacion
from sislim.app.domain.exceptions import ConflictoError, PersistenciaError, ValidationError
from sislim.app.domain.modelos import Disponibilidad, Notificacion, Turno
from sislim.app.domain.repositorios import (
    RepositorioAdministradores,
    RepositorioClientes,
    RepositorioDisponibilidades,
    RepositorioNotificaciones,
    RepositorioTurnos,
)


logger = logging.getLogger(__name__)

T = TypeVar("T")


# ---------------------------------------------------------------------
# Almacén genérico
# ---------------------------------------------------------------------


class _Tabla(Generic[T]):
    """Diccionario id -> entidad con autoincremento y copias en ambas direcciones."""

    def __init__(self, nombre: str, copiar: Callable[[T], T]) -> None:
        self._nombre = nombre
        self._copiar = copiar
        self._filas: Dict[int, T] = {}
        self._ids = count(1)

    def insertar(self, entidad: T) -> int:
        nuevo_id = next(self._ids)
        copia = self._copiar(entidad)
        copia.id = nuevo_id
        self._filas[nuevo_id] = copia
        return nuevo_id

    def reemplazar(self, entidad: T) -> None:
        entidad_id = getattr(entidad, "id", None)
        if not entidad_id:
            raise ValidationError(f"No se puede actualizar en {self._nombre} sin id.")
        if entidad_id not in self._filas:
            raise PersistenciaError(f"No existe el registro {entidad_id} en {self._nombre}.")
        self._filas[entidad_id] = self._copiar(entidad)

    def borrar(self, entidad_id: int) -> bool:
        return self._filas.pop(entidad_id, None) is not None

    def obtener(self, entidad_id: int) -> Optional[T]:
        fila = self._filas.get(entidad_id)
        return self._copiar(fila) if fila is not None else None

    def filtrar(self, predicado: Callable[[T], bool] = lambda _: True) -> List[T]:
        return [self._copiar(f) for f in self._filas.values() if predicado(f)]

    def valores(self) -> Iterable[T]:
        return self._filas.values()

    def instantanea(self) -> Dict[int, T]:
        return dict(self._filas)

    def restaurar(self, filas: Dict[int, T]) -> None:
        self._filas = dict(filas)


def _orden_turno(t: Turno) -> tuple:
    return (t.fecha, t.hora, t.id or 0)


def _orden_disponibilidad(d: Disponibilidad) -> tuple:
    return (d.fecha, d.hora_inicio, d.id or 0)


def _orden_notificacion(n: Notificacion) -> tuple:
    return (n.fecha_envio, n.id or 0)


def _mismo_email(a: str, b: str) -> bool:
    return (a or "").strip().lower() == (b or "").strip().lower()


# ---------------------------------------------------------------------
# Actores
# ---------------------------------------------------------------------


class ClientesMemoriaRepository(RepositorioClientes):
    def __init__(self) -> None:
        self._tabla: _Tabla[Cliente] = _Tabla("clientes", lambda c: Cliente(**c.to_dict()))

    def create(self, cliente: Cliente) -> int:
        cliente.validar()
        if self.get_by_email(cliente.email):
            raise PersistenciaError(f"Ya existe un cliente con email {cliente.email}.")
        return self._tabla.insertar(cliente)

    def update(self, cliente: Cliente) -> None:
        cliente.validar()
        self._tabla.reemplazar(cliente)

    def delete(self, cliente_id: int) -> None:
        self._tabla.borrar(cliente_id)

    def get_by_id(self, cliente_id: int) -> Optional[Cliente]:
        return self._tabla.obtener(cliente_id)

    def get_by_email(self, email: str) -> Optional[Cliente]:
        encontrados = self._tabla.filtrar(lambda c: _mismo_email(c.email, email))
        return encontrados[0] if encontrados else None

    def list_all(self) -> List[Cliente]:
        return sorted(self._tabla.filtrar(), key=lambda c: c.nombre)


class AdministradoresMemoriaRepository(RepositorioAdministradores):
    def __init__(self) -> None:
        self._tabla: _Tabla[Administrador] = _Tabla(
            "administradores", lambda a: Administrador(**a.to_dict())
        )

    def create(self, admin: Administrador) -> int:
        admin.validar()
        if self.get_by_email(admin.email):
            raise PersistenciaError(f"Ya existe un administrador con email {admin.email}.")
        return self._tabla.insertar(admin)

    def update(self, admin: Administrador) -> None:
        admin.validar()
        self._tabla.reemplazar(admin)

    def delete(self, admin_id: int) -> None:
        self._tabla.borrar(admin_id)

    def get_by_id(self, admin_id: int) -> Optional[Administrador]:
        return self._tabla.obtener(admin_id)

    def get_by_email(self, email: str) -> Optional[Administrador]:
        encontrados = self._tabla.filtrar(lambda a: _mismo_email(a.email, email))
        return encontrados[0] if encontrados else None

    def list_all(self) -> List[Administrador]:
        return sorted(self._tabla.filtrar(), key=lambda a: a.nombre)


# ---------------------------------------------------------------------
# Disponibilidades
# ---------------------------------------------------------------------


class DisponibilidadesMemoriaRepository(RepositorioDisponibilidades):
    def __init__(self) -> None:
        self._tabla: _Tabla[Disponibilidad] = _Tabla("disponibilidades", lambda d: d.copia())

    def create(self, disponibilidad: Disponibilidad) -> int:
        disponibilidad.validar()
        return self._tabla.insertar(disponibilidad)

    def update(self, disponibilidad: Disponibilidad) -> None:
        disponibilidad.validar()
        self._tabla.reemplazar(disponibilidad)

    def delete(self, disponibilidad_id: int) -> None:
        self._tabla.borrar(disponibilidad_id)

    def get_by_id(self, disponibilidad_id: int) -> Optional[Disponibilidad]:
        return self._tabla.obtener(disponibilidad_id)

    def list_all(self) -> List[Disponibilidad]:
        return sorted(self._tabla.filtrar(), key=_orden_disponibilidad)

    def list_libres(self) -> List[Disponibilidad]:
        return sorted(self._tabla.filtrar(lambda d: d.disponible), key=_orden_disponibilidad)

    def list_by_admin(self, admin_id: int) -> List[Disponibilidad]:
        return sorted(self._tabla.filtrar(lambda d: d.admin_id == admin_id), key=_orden_disponibilidad)


# ---------------------------------------------------------------------
# Turnos
# ---------------------------------------------------------------------


class TurnosMemoriaRepository(RepositorioTurnos):
    def __init__(self) -> None:
        self._tabla: _Tabla[Turno] = _Tabla("turnos", lambda t: t.copia())

    def create(self, turno: Turno) -> int:
        turno.validar()
        if turno.esta_activo():
            self._verificar_hueco(turno.fecha, turno.hora, excluir_id=None)
        return self._tabla.insertar(turno)

    def update(self, turno: Turno) -> None:
        turno.validar()
        if turno.esta_activo():
            self._verificar_hueco(turno.fecha, turno.hora, excluir_id=turno.id)
        self._tabla.reemplazar(turno)

    def delete(self, turno_id: int) -> None:
        self._tabla.borrar(turno_id)

    def get_by_id(self, turno_id: int) -> Optional[Turno]:
        return self._tabla.obtener(turno_id)

    def list_all(self) -> List[Turno]:
        return self._ordenados()

    def list_by_cliente(self, cliente_id: int) -> List[Turno]:
        return self._ordenados(lambda t: t.cliente_id == cliente_id)

    def list_by_admin(self, admin_id: int) -> List[Turno]:
        return self._ordenados(lambda t: t.admin_id == admin_id)

    def list_by_fecha(self, fecha: date) -> List[Turno]:
        return self._ordenados(lambda t: t.fecha == fecha)

    def list_by_estado(self, estado: EstadoTurno) -> List[Turno]:
        return self._ordenados(lambda t: t.estado == estado)

    def find_activo(self, fecha: date, hora: time) -> Optional[Turno]:
        hora = hora.replace(microsecond=0)
        encontrados = self._ordenados(
            lambda t: t.fecha == fecha and t.hora == hora and t.esta_activo()
        )
        return encontrados[0] if encontrados else None

    def _ordenados(self, predicado: Callable[[Turno], bool] = lambda _: True) -> List[Turno]:
        return sorted(self._tabla.filtrar(predicado), key=_orden_turno)

    def _verificar_hueco(self, fecha: date, hora: time, *, excluir_id: Optional[int]) -> None:
        for existente in self._tabla.valores():
            if existente.id == excluir_id or not existente.esta_activo():
                continue
            if existente.fecha == fecha and existente.hora == hora:
                logger.warning("Conflicto de unicidad en turnos: %s %s", fecha, hora)
                raise ConflictoError("Ya existe un turno activo para esa fecha y hora.")


# ---------------------------------------------------------------------
# Notificaciones
# ---------------------------------------------------------------------


class NotificacionesMemoriaRepository(RepositorioNotificaciones):
    def __init__(self) -> None:
        self._tabla: _Tabla[Notificacion] = _Tabla("notificaciones", lambda n: n.copia())

    def create(self, notificacion: Notificacion) -> int:
        notificacion.validar()
        return self._tabla.insertar(notificacion)

    def update(self, notificacion: Notificacion) -> None:
        notificacion.validar()
        self._tabla.reemplazar(notificacion)

    def delete(self, notificacion_id: int) -> None:
        self._tabla.borrar(notificacion_id)

    def delete_by_turno(self, turno_id: int) -> int:
        ids = [n.id for n in self._tabla.valores() if n.turno_id == turno_id]
        for notificacion_id in ids:
            self._tabla.borrar(notificacion_id)
        return len(ids)

    def get_by_id(self, notificacion_id: int) -> Optional[Notificacion]:
        return self._tabla.obtener(notificacion_id)

    def list_all(self) -> List[Notificacion]:
        return self._ordenadas()

    def list_by_turno(self, turno_id: int) -> List[Notificacion]:
        return self._ordenadas(lambda n: n.turno_id == turno_id)

    def list_by_tipo(self, tipo: TipoNotificacion) -> List[Notificacion]:
        return self._ordenadas(lambda n: n.tipo == tipo)

    def list_pendientes(self) -> List[Notificacion]:
        return self._ordenadas(lambda n: not n.enviada)

    def list_enviadas_antes_de(self, limite: datetime) -> List[Notificacion]:
        return self._ordenadas(lambda n: n.enviada and n.fecha_envio < limite)

    def _ordenadas(self, predicado: Callable[[Notificacion], bool] = lambda _: True) -> List[Notificacion]:
        return sorted(self._tabla.filtrar(predicado), key=_orden_notificacion)


# ---------------------------------------------------------------------
# Transacciones
# ---------------------------------------------------------------------


@contextmanager
def transaccion_memoria(*repos: object) -> Iterator[None]:
    """Si el bloque lanza, devuelve cada repositorio al estado que tenía al entrar."""
    instantaneas = [(repo._tabla, repo._tabla.instantanea()) for repo in repos]
    try:
        yield
    except BaseException:
        for tabla, filas in instantaneas:
            tabla.restaurar(filas)
        logger.warning("Transacción en memoria deshecha")
        raise
