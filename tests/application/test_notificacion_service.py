from __future__ import annotations

from datetime import date, datetime, time, timedelta

import pytest

from sislim.app.application.services.notificacion_service import (
    CanalNotificacionError,
    NotificacionService,
)
from sislim.app.domain.enums import TipoNotificacion
from sislim.app.domain.exceptions import ValidationError
from sislim.app.domain.modelos import Notificacion, Turno
from sislim.app.infrastructure.memoria.repos import NotificacionesMemoriaRepository


class _CanalQueFalla:
    def __init__(self, fallos: int) -> None:
        self.fallos = fallos
        self.transmitidas = 0

    def transmitir(self, notificacion: Notificacion) -> None:
        if self.fallos > 0:
            self.fallos -= 1
            raise CanalNotificacionError("canal caído")
        self.transmitidas += 1


def _turno(turno_id: int = 7) -> Turno:
    return Turno(
        id=turno_id,
        fecha=date(2025, 10, 1),
        hora=time(9, 0),
        duracion=120,
        tipo_servicio="Limpieza básica",
        cliente_id=1,
        disponibilidad_id=1,
    )


@pytest.fixture()
def servicio(canal) -> NotificacionService:
    ahora = datetime(2025, 10, 1, 8, 0, 0)
    return NotificacionService(NotificacionesMemoriaRepository(), canal, reloj=lambda: ahora)


def test_enviar_marca_enviada_y_persiste(servicio, canal) -> None:
    notificacion = Notificacion.crear_aviso(7, "Aviso importante")

    assert servicio.enviar(notificacion) is True

    assert notificacion.id is not None
    assert notificacion.enviada is True
    assert notificacion.fecha_envio == datetime(2025, 10, 1, 8, 0, 0)
    assert len(canal.enviadas) == 1
    assert servicio.buscar_pendientes() == []


def test_enviar_notificacion_ya_enviada_no_reemite(servicio, canal) -> None:
    notificacion = Notificacion.crear_aviso(7, "Aviso importante")
    servicio.enviar(notificacion)

    assert servicio.enviar(notificacion) is True

    assert len(canal.enviadas) == 1
    assert len(servicio.buscar_por_turno(7)) == 1


@pytest.mark.parametrize(
    "notificacion",
    [
        Notificacion(mensaje="", tipo=TipoNotificacion.AVISO, turno_id=7),
        Notificacion(mensaje="Hola", tipo="Urgente", turno_id=7),  # type: ignore[arg-type]
        Notificacion(mensaje="Hola", tipo=TipoNotificacion.AVISO, turno_id=0),
    ],
)
def test_enviar_rechaza_notificaciones_invalidas(servicio, canal, notificacion) -> None:
    with pytest.raises(ValidationError):
        servicio.enviar(notificacion)

    assert canal.enviadas == []


def test_enviar_acepta_tipo_en_texto(servicio) -> None:
    notificacion = Notificacion(mensaje="Hola", tipo="recordatorio", turno_id=7)  # type: ignore[arg-type]

    assert servicio.enviar(notificacion) is True
    assert notificacion.tipo == TipoNotificacion.RECORDATORIO


def test_mensajes_de_plantilla(servicio, canal) -> None:
    turno = _turno()

    servicio.enviar_confirmacion_turno(turno)
    servicio.enviar_cancelacion_turno(turno)
    servicio.enviar_recordatorio_turno(turno, horas_antes=24)

    mensajes = [n.mensaje for n in canal.enviadas]
    assert mensajes == [
        "Su turno para el 2025-10-01 a las 09:00 ha sido confirmado. "
        "Tipo de servicio: Limpieza básica. Duración: 120 minutos.",
        "Su turno para el 2025-10-01 a las 09:00 ha sido cancelado. "
        "Si necesita reagendar, por favor contacte al administrador.",
        "Recordatorio: Su turno de limpieza está programado para el 2025-10-01 a las 09:00. "
        "Tipo de servicio: Limpieza básica. Por favor confirme su asistencia.",
    ]
    assert [n.tipo for n in canal.enviadas] == [
        TipoNotificacion.CONFIRMACION,
        TipoNotificacion.AVISO,
        TipoNotificacion.RECORDATORIO,
    ]


def test_recordatorio_exige_horas_positivas(servicio) -> None:
    with pytest.raises(ValidationError):
        servicio.enviar_recordatorio_turno(_turno(), horas_antes=0)


def test_enviar_masivas_cuenta_exitos_y_sigue_tras_errores(servicio, canal) -> None:
    turnos = [_turno(1), Turno(id=None), _turno(3)]

    enviadas = servicio.enviar_masivas(turnos, "aviso", "Corte de agua en la zona")

    assert enviadas == 2
    assert {n.turno_id for n in canal.enviadas} == {1, 3}
    assert all(n.tipo == TipoNotificacion.AVISO for n in canal.enviadas)


@pytest.mark.parametrize(
    ("turnos", "tipo", "mensaje"),
    [
        ([], "aviso", "Hola"),
        ([_turno()], "aviso", "  "),
        ([_turno()], "urgente", "Hola"),
    ],
)
def test_enviar_masivas_valida_lote(servicio, turnos, tipo, mensaje) -> None:
    with pytest.raises(ValidationError):
        servicio.enviar_masivas(turnos, tipo, mensaje)


def test_fallo_del_canal_deja_pendiente_y_se_reenvia() -> None:
    canal = _CanalQueFalla(fallos=1)
    servicio = NotificacionService(NotificacionesMemoriaRepository(), canal)

    assert servicio.enviar_confirmacion_turno(_turno()) is False
    pendientes = servicio.buscar_pendientes()
    assert len(pendientes) == 1

    assert servicio.reenviar_fallidas() == 1
    assert servicio.buscar_pendientes() == []
    assert canal.transmitidas == 1


def test_buscar_por_tipo(servicio) -> None:
    turno = _turno()
    servicio.enviar_confirmacion_turno(turno)
    servicio.enviar_cancelacion_turno(turno)

    assert len(servicio.buscar_por_tipo(TipoNotificacion.AVISO)) == 1
    assert len(servicio.buscar_por_tipo("Confirmacion")) == 1
    assert servicio.buscar_por_tipo("recordatorio") == []


def test_purgar_antiguas_elimina_solo_enviadas_anteriores_al_corte(canal) -> None:
    repo = NotificacionesMemoriaRepository()
    ahora = datetime(2025, 12, 31, 12, 0, 0)
    servicio = NotificacionService(repo, canal, reloj=lambda: ahora)
    repo.create(Notificacion(mensaje="vieja", turno_id=1, enviada=True, fecha_envio=ahora - timedelta(days=45)))
    repo.create(Notificacion(mensaje="nueva", turno_id=1, enviada=True, fecha_envio=ahora - timedelta(days=2)))
    repo.create(Notificacion(mensaje="pendiente", turno_id=1, enviada=False, fecha_envio=ahora - timedelta(days=90)))

    assert servicio.purgar_antiguas(30) == 1

    assert sorted(n.mensaje for n in repo.list_all()) == ["nueva", "pendiente"]
