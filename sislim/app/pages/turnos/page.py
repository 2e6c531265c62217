from __future__ import annotations

from typing import Optional

from PySide6.QtCore import QDate, QTime
from PySide6.QtWidgets import (
    QComboBox,
    QDateEdit,
    QFormLayout,
    QGroupBox,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QPushButton,
    QSpinBox,
    QTableWidget,
    QTimeEdit,
    QVBoxLayout,
    QWidget,
)

from sislim.app.application.services.turnos_facade import ResultadoOperacion
from sislim.app.container import AppContainer
from sislim.app.domain.enums import EstadoTurno
from sislim.app.domain.modelos import Turno
from sislim.app.pages.shared.table_utils import apply_row_style, selected_id, set_item


class PageTurnos(QWidget):
    """Solicitud, confirmación, cancelación y listado de turnos."""

    def __init__(self, container: AppContainer, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self._container = container
        self._facade = container.turnos_facade

        self._build_ui()
        self._connect_signals()
        self._load_actores()
        self._refresh()

    def _build_ui(self) -> None:
        root = QVBoxLayout(self)

        solicitud = QGroupBox("Solicitar turno")
        form = QFormLayout(solicitud)
        self.cbo_cliente = QComboBox()
        self.date_fecha = QDateEdit(QDate.currentDate())
        self.date_fecha.setCalendarPopup(True)
        self.date_fecha.setDisplayFormat("yyyy-MM-dd")
        self.time_hora = QTimeEdit(QTime(9, 0))
        self.time_hora.setDisplayFormat("HH:mm")
        self.spin_duracion = QSpinBox()
        self.spin_duracion.setRange(1, 24 * 60)
        self.spin_duracion.setValue(120)
        self.spin_duracion.setSuffix(" min")
        self.txt_tipo = QLineEdit("Limpieza básica")
        self.txt_observaciones = QLineEdit()
        self.btn_solicitar = QPushButton("Solicitar")
        form.addRow("Cliente", self.cbo_cliente)
        form.addRow("Fecha", self.date_fecha)
        form.addRow("Hora", self.time_hora)
        form.addRow("Duración", self.spin_duracion)
        form.addRow("Tipo de servicio", self.txt_tipo)
        form.addRow("Observaciones", self.txt_observaciones)
        form.addRow(self.btn_solicitar)

        actions = QHBoxLayout()
        self.cbo_admin = QComboBox()
        self.btn_confirmar = QPushButton("Confirmar")
        self.btn_cancelar = QPushButton("Cancelar (cliente)")
        self.btn_cancelar_admin = QPushButton("Cancelar (administrador)")
        self.cbo_filtro = QComboBox()
        self.cbo_filtro.addItems(["Todos", "Del cliente"])
        for btn in (self.btn_confirmar, self.btn_cancelar, self.btn_cancelar_admin):
            btn.setEnabled(False)
        actions.addWidget(QLabel("Administrador"))
        actions.addWidget(self.cbo_admin)
        actions.addWidget(self.btn_confirmar)
        actions.addWidget(self.btn_cancelar)
        actions.addWidget(self.btn_cancelar_admin)
        actions.addStretch(1)
        actions.addWidget(QLabel("Mostrar"))
        actions.addWidget(self.cbo_filtro)

        self.table = QTableWidget(0, 7)
        self.table.setHorizontalHeaderLabels(
            ["ID", "Fecha", "Hora", "Duración", "Servicio", "Estado", "Cliente"]
        )
        self.table.setSelectionBehavior(QTableWidget.SelectRows)
        self.table.setEditTriggers(QTableWidget.NoEditTriggers)
        self.table.horizontalHeader().setStretchLastSection(True)

        self.lbl_resultado = QLabel("")
        self.lbl_resultado.setWordWrap(True)

        root.addWidget(solicitud)
        root.addLayout(actions)
        root.addWidget(self.table, 1)
        root.addWidget(self.lbl_resultado)

    def _connect_signals(self) -> None:
        self.btn_solicitar.clicked.connect(self._on_solicitar)
        self.btn_confirmar.clicked.connect(self._on_confirmar)
        self.btn_cancelar.clicked.connect(self._on_cancelar)
        self.btn_cancelar_admin.clicked.connect(self._on_cancelar_admin)
        self.cbo_filtro.currentIndexChanged.connect(self._refresh)
        self.cbo_cliente.currentIndexChanged.connect(self._refresh)
        self.table.itemSelectionChanged.connect(self._on_selection_changed)

    def on_show(self) -> None:
        self._load_actores()
        self._refresh()

    # --------------------------------------------------------------
    # Datos
    # --------------------------------------------------------------

    def _load_actores(self) -> None:
        cliente_actual = self.cbo_cliente.currentData()
        admin_actual = self.cbo_admin.currentData()
        self.cbo_cliente.blockSignals(True)
        self.cbo_cliente.clear()
        for cliente in self._container.clientes_repo.list_all():
            self.cbo_cliente.addItem(cliente.nombre, cliente.id)
        self._restore_selection(self.cbo_cliente, cliente_actual)
        self.cbo_cliente.blockSignals(False)

        self.cbo_admin.clear()
        for admin in self._container.administradores_repo.list_all():
            self.cbo_admin.addItem(admin.nombre, admin.id)
        self._restore_selection(self.cbo_admin, admin_actual)

    @staticmethod
    def _restore_selection(combo: QComboBox, value: Optional[int]) -> None:
        if value is None:
            return
        index = combo.findData(value)
        if index >= 0:
            combo.setCurrentIndex(index)

    def _refresh(self) -> None:
        cliente_id = self.cbo_cliente.currentData() if self.cbo_filtro.currentIndex() == 1 else None
        resultado = self._facade.listar_turnos(cliente_id)
        self._render(resultado.turnos)
        self._on_selection_changed()

    def _render(self, turnos: list[Turno]) -> None:
        self.table.setRowCount(0)
        for t in turnos:
            row = self.table.rowCount()
            self.table.insertRow(row)
            set_item(self.table, row, 0, str(t.id))
            set_item(self.table, row, 1, t.fecha.isoformat())
            set_item(self.table, row, 2, t.hora.strftime("%H:%M"))
            set_item(self.table, row, 3, f"{t.duracion} min")
            set_item(self.table, row, 4, t.tipo_servicio)
            set_item(self.table, row, 5, t.estado.value)
            set_item(self.table, row, 6, str(t.cliente_id))
            apply_row_style(
                self.table,
                row,
                inactive=t.estado == EstadoTurno.CANCELADO,
                tooltip=t.mostrar(),
            )

    # --------------------------------------------------------------
    # Acciones
    # --------------------------------------------------------------

    def _on_solicitar(self) -> None:
        resultado = self._facade.solicitar_turno(
            self.cbo_cliente.currentData() or 0,
            self.date_fecha.date().toPython(),
            self.time_hora.time().toPython(),
            self.spin_duracion.value(),
            self.txt_tipo.text(),
            self.txt_observaciones.text() or None,
        )
        self._show_resultado(resultado)

    def _on_confirmar(self) -> None:
        turno_id = selected_id(self.table)
        if turno_id is None:
            return
        self._show_resultado(self._facade.confirmar_turno(self.cbo_admin.currentData() or 0, turno_id))

    def _on_cancelar(self) -> None:
        turno_id = selected_id(self.table)
        if turno_id is None:
            return
        self._show_resultado(self._facade.cancelar_turno(self.cbo_cliente.currentData() or 0, turno_id))

    def _on_cancelar_admin(self) -> None:
        turno_id = selected_id(self.table)
        if turno_id is None:
            return
        self._show_resultado(
            self._facade.cancelar_turno_como_admin(self.cbo_admin.currentData() or 0, turno_id)
        )

    def _on_selection_changed(self) -> None:
        has_selection = selected_id(self.table) is not None
        self.btn_confirmar.setEnabled(has_selection)
        self.btn_cancelar.setEnabled(has_selection)
        self.btn_cancelar_admin.setEnabled(has_selection)

    def _show_resultado(self, resultado: ResultadoOperacion) -> None:
        prefijo = "✔" if resultado.exito else "✘"
        self.lbl_resultado.setText(f"{prefijo} {resultado.mensaje}")
        self.lbl_resultado.setProperty("exito", resultado.exito)
        self._refresh()
