from __future__ import annotations

from typing import Optional

from PySide6.QtGui import QFontDatabase
from PySide6.QtWidgets import QHBoxLayout, QPlainTextEdit, QPushButton, QVBoxLayout, QWidget

from sislim.app.container import AppContainer


class PageEstadisticas(QWidget):
    """Resumen de solo lectura de turnos y notificaciones."""

    def __init__(self, container: AppContainer, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self._facade = container.turnos_facade

        root = QVBoxLayout(self)
        actions = QHBoxLayout()
        self.btn_actualizar = QPushButton("Actualizar")
        actions.addWidget(self.btn_actualizar)
        actions.addStretch(1)

        self.txt_resumen = QPlainTextEdit()
        self.txt_resumen.setReadOnly(True)
        self.txt_resumen.setFont(QFontDatabase.systemFont(QFontDatabase.FixedFont))

        root.addLayout(actions)
        root.addWidget(self.txt_resumen, 1)

        self.btn_actualizar.clicked.connect(self._refresh)
        self._refresh()

    def on_show(self) -> None:
        self._refresh()

    def _refresh(self) -> None:
        self.txt_resumen.setPlainText(self._facade.estadisticas().mensaje)
