from __future__ import annotations

import os
from collections.abc import Iterator

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
try:
    from PySide6.QtCore import QDate, QTime
    from PySide6.QtWidgets import QApplication
except ImportError as exc:  # pragma: no cover - depende del sistema
    pytest.skip(f"PySide6 no disponible: {exc}", allow_module_level=True)

from sislim.app.infrastructure.demo_seed import sembrar_datos_demo
from sislim.app.pages.disponibilidades.page import PageDisponibilidades
from sislim.app.pages.estadisticas.page import PageEstadisticas
from sislim.app.pages.turnos.page import PageTurnos
from sislim.app.ui.main_window import MainWindow


@pytest.fixture(scope="session")
def qapp() -> Iterator[QApplication]:
    app = QApplication.instance() or QApplication([])
    yield app


@pytest.fixture()
def container_demo(container_memoria):
    sembrar_datos_demo(container_memoria)
    return container_memoria


def test_page_turnos_solicita_turno_desde_el_formulario(qapp: QApplication, container_demo) -> None:
    del qapp
    page = PageTurnos(container_demo)
    page.date_fecha.setDate(QDate(2025, 10, 1))
    page.time_hora.setTime(QTime(9, 0))

    page.btn_solicitar.click()

    assert page.lbl_resultado.text().startswith("✔")
    assert page.table.rowCount() == 1
    assert page.table.item(0, 5).text() == "Pendiente"


def test_page_turnos_muestra_error_sin_disponibilidad(qapp: QApplication, container_demo) -> None:
    del qapp
    page = PageTurnos(container_demo)
    page.date_fecha.setDate(QDate(2025, 12, 25))

    page.btn_solicitar.click()

    assert page.lbl_resultado.text() == "✘ No hay disponibilidad para la fecha solicitada."
    assert page.table.rowCount() == 0


def test_page_disponibilidades_lista_franjas(qapp: QApplication, container_demo) -> None:
    del qapp
    page = PageDisponibilidades(container_demo)

    assert page.table.rowCount() == 2
    assert page.cbo_admin.count() == 1


def test_page_estadisticas_muestra_resumen(qapp: QApplication, container_demo) -> None:
    del qapp
    page = PageEstadisticas(container_demo)

    assert "Total de turnos: 0" in page.txt_resumen.toPlainText()


def test_main_window_registra_paginas(qapp: QApplication, container_demo) -> None:
    del qapp
    window = MainWindow(container_demo)

    assert window.sidebar.count() == 3
    assert isinstance(window.stack.currentWidget(), PageTurnos)

    window.navigate("estadisticas")
    assert isinstance(window.stack.currentWidget(), PageEstadisticas)
    window.close()
