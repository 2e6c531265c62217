from __future__ import annotations

from typing import Callable, Dict, Optional

from PySide6.QtCore import Qt
from PySide6.QtGui import QAction
from PySide6.QtWidgets import (
    QHBoxLayout,
    QListWidget,
    QListWidgetItem,
    QMainWindow,
    QSizePolicy,
    QStackedWidget,
    QWidget,
)

from sislim.app.container import AppContainer
from sislim.app.pages.pages_registry import get_pages


class MainWindow(QMainWindow):
    def __init__(self, container: AppContainer) -> None:
        super().__init__()
        self.container = container

        self.setWindowTitle("SISLIM - Turnos de limpieza")
        self.resize(1100, 750)

        root = QWidget()
        self.setCentralWidget(root)

        self._build_menu()

        layout = QHBoxLayout(root)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(0)

        self.sidebar = QListWidget()
        self.sidebar.setFixedWidth(200)
        self.sidebar.setSelectionMode(QListWidget.SingleSelection)

        self.stack = QStackedWidget()
        self.stack.setSizePolicy(QSizePolicy.Expanding, QSizePolicy.Expanding)

        layout.addWidget(self.sidebar)
        layout.addWidget(self.stack, 1)

        self._page_index_by_key: Dict[str, int] = {}
        self._factory_by_key: Dict[str, Callable[[], QWidget]] = {}

        for p in get_pages(container):
            self._factory_by_key[p.key] = p.factory
            item = QListWidgetItem(p.title)
            item.setData(Qt.UserRole, p.key)
            self.sidebar.addItem(item)

        self.sidebar.currentRowChanged.connect(self._on_sidebar_changed)

        self.navigate("turnos")

    def _build_menu(self) -> None:
        menu_archivo = self.menuBar().addMenu("Archivo")

        action_reenviar = QAction("Reenviar notificaciones pendientes", self)
        action_reenviar.triggered.connect(self._reenviar)

        action_purgar = QAction("Purgar turnos cancelados antiguos", self)
        action_purgar.triggered.connect(self._purgar)

        action_exit = QAction("Salir", self)
        action_exit.triggered.connect(self.close)

        menu_archivo.addAction(action_reenviar)
        menu_archivo.addAction(action_purgar)
        menu_archivo.addSeparator()
        menu_archivo.addAction(action_exit)

    def _reenviar(self) -> None:
        self.container.notificacion_service.reenviar_fallidas()
        self._refresh_current()

    def _purgar(self) -> None:
        dias = self.container.config.dias_retencion
        self.container.turno_service.purgar_cancelados_antiguos(dias)
        self.container.notificacion_service.purgar_antiguas(dias)
        self._refresh_current()

    def _ensure_page_created(self, key: str) -> Optional[int]:
        if key in self._page_index_by_key:
            return self._page_index_by_key[key]

        factory = self._factory_by_key.get(key)
        if factory is None:
            return None

        widget = factory()
        index = self.stack.addWidget(widget)
        self._page_index_by_key[key] = index
        return index

    def _refresh_current(self) -> None:
        w = self.stack.currentWidget()
        if w is not None and hasattr(w, "on_show"):
            w.on_show()

    def navigate(self, key: str) -> None:
        self.sidebar.blockSignals(True)
        try:
            index = self._ensure_page_created(key)
            if index is None:
                return

            self.stack.setCurrentIndex(index)
            self._refresh_current()

            for row in range(self.sidebar.count()):
                it = self.sidebar.item(row)
                if it.data(Qt.UserRole) == key:
                    self.sidebar.setCurrentRow(row)
                    break
        finally:
            self.sidebar.blockSignals(False)

    def _on_sidebar_changed(self, row: int) -> None:
        if row < 0:
            return
        key = self.sidebar.item(row).data(Qt.UserRole)
        self.navigate(key)

    def closeEvent(self, event):
        """Evento Qt que se dispara al cerrar la ventana. Cerramos la BD."""
        self.container.close()
        event.accept()
