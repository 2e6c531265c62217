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
    QMessageBox,
    QPushButton,
    QTableWidget,
    QTimeEdit,
    QVBoxLayout,
    QWidget,
)

from sislim.app.container import AppContainer
from sislim.app.domain.actores import Administrador
from sislim.app.domain.exceptions import DomainError, PersistenciaError
from sislim.app.domain.modelos import Disponibilidad
from sislim.app.pages.shared.table_utils import apply_row_style, selected_id, set_item
from sislim.app.ui.error_presenter import present_error


class PageDisponibilidades(QWidget):
    """Alta, edición, bloqueo y baja de franjas por parte del administrador."""

    def __init__(self, container: AppContainer, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self._container = container
        self._service = container.disponibilidad_service

        self._build_ui()
        self._connect_signals()
        self._load_admins()
        self._refresh()

    def _build_ui(self) -> None:
        root = QVBoxLayout(self)

        filters = QHBoxLayout()
        self.cbo_admin = QComboBox()
        self.cbo_vista = QComboBox()
        self.cbo_vista.addItems(["Todas", "Libres", "Del administrador"])
        filters.addWidget(QLabel("Administrador"))
        filters.addWidget(self.cbo_admin)
        filters.addWidget(QLabel("Mostrar"))
        filters.addWidget(self.cbo_vista)
        filters.addStretch(1)

        form_box = QGroupBox("Franja")
        form = QFormLayout(form_box)
        self.date_fecha = QDateEdit(QDate.currentDate())
        self.date_fecha.setCalendarPopup(True)
        self.date_fecha.setDisplayFormat("yyyy-MM-dd")
        self.time_inicio = QTimeEdit(QTime(9, 0))
        self.time_inicio.setDisplayFormat("HH:mm")
        self.time_fin = QTimeEdit(QTime(11, 0))
        self.time_fin.setDisplayFormat("HH:mm")
        self.txt_zona = QLineEdit()
        self.txt_servicio = QLineEdit()
        form.addRow("Fecha", self.date_fecha)
        form.addRow("Inicio", self.time_inicio)
        form.addRow("Fin", self.time_fin)
        form.addRow("Zona", self.txt_zona)
        form.addRow("Servicio", self.txt_servicio)

        actions = QHBoxLayout()
        self.btn_nueva = QPushButton("Nueva")
        self.btn_editar = QPushButton("Guardar cambios")
        self.btn_bloquear = QPushButton("Bloquear")
        self.btn_desbloquear = QPushButton("Desbloquear")
        self.btn_eliminar = QPushButton("Eliminar")
        for btn in (self.btn_editar, self.btn_bloquear, self.btn_desbloquear, self.btn_eliminar):
            btn.setEnabled(False)
            actions.addWidget(btn)
        actions.insertWidget(0, self.btn_nueva)
        actions.addStretch(1)

        self.table = QTableWidget(0, 6)
        self.table.setHorizontalHeaderLabels(["ID", "Fecha", "Horario", "Zona", "Servicio", "Estado"])
        self.table.setSelectionBehavior(QTableWidget.SelectRows)
        self.table.setEditTriggers(QTableWidget.NoEditTriggers)
        self.table.horizontalHeader().setStretchLastSection(True)

        root.addLayout(filters)
        root.addWidget(form_box)
        root.addLayout(actions)
        root.addWidget(self.table, 1)

    def _connect_signals(self) -> None:
        self.cbo_vista.currentIndexChanged.connect(self._refresh)
        self.cbo_admin.currentIndexChanged.connect(self._refresh)
        self.table.itemSelectionChanged.connect(self._on_selection_changed)
        self.btn_nueva.clicked.connect(self._on_nueva)
        self.btn_editar.clicked.connect(self._on_editar)
        self.btn_bloquear.clicked.connect(self._on_bloquear)
        self.btn_desbloquear.clicked.connect(self._on_desbloquear)
        self.btn_eliminar.clicked.connect(self._on_eliminar)

    def on_show(self) -> None:
        self._refresh()

    def _load_admins(self) -> None:
        self.cbo_admin.blockSignals(True)
        self.cbo_admin.clear()
        for admin in self._container.administradores_repo.list_all():
            self.cbo_admin.addItem(admin.nombre, admin.id)
        self.cbo_admin.blockSignals(False)

    def _admin(self) -> Optional[Administrador]:
        admin_id = self.cbo_admin.currentData()
        return self._container.administradores_repo.get_by_id(admin_id) if admin_id else None

    def _refresh(self) -> None:
        vista = self.cbo_vista.currentIndex()
        if vista == 1:
            franjas = self._service.listar_libres()
        elif vista == 2:
            franjas = self._service.listar_por_admin(self.cbo_admin.currentData() or 0)
        else:
            franjas = self._service.listar_todas()
        self._render(franjas)
        self._on_selection_changed()

    def _render(self, franjas: list[Disponibilidad]) -> None:
        self.table.setRowCount(0)
        for d in franjas:
            row = self.table.rowCount()
            self.table.insertRow(row)
            set_item(self.table, row, 0, str(d.id))
            set_item(self.table, row, 1, d.fecha.isoformat())
            set_item(
                self.table,
                row,
                2,
                f"{d.hora_inicio.strftime('%H:%M')} - {d.hora_fin.strftime('%H:%M')}",
            )
            set_item(self.table, row, 3, d.zona)
            set_item(self.table, row, 4, d.servicio)
            set_item(self.table, row, 5, "Libre" if d.disponible else "Ocupada")
            apply_row_style(
                self.table,
                row,
                inactive=not d.disponible,
                tooltip=f"Duración: {d.duracion_minutos()} minutos",
            )

    def _on_selection_changed(self) -> None:
        disponibilidad_id = selected_id(self.table)
        for btn in (self.btn_editar, self.btn_bloquear, self.btn_desbloquear, self.btn_eliminar):
            btn.setEnabled(disponibilidad_id is not None)
        if disponibilidad_id is None:
            return
        franja = self._container.disponibilidades_repo.get_by_id(disponibilidad_id)
        if franja is None:
            return
        self.date_fecha.setDate(QDate(franja.fecha.year, franja.fecha.month, franja.fecha.day))
        self.time_inicio.setTime(QTime(franja.hora_inicio.hour, franja.hora_inicio.minute))
        self.time_fin.setTime(QTime(franja.hora_fin.hour, franja.hora_fin.minute))
        self.txt_zona.setText(franja.zona)
        self.txt_servicio.setText(franja.servicio)

    def _form_values(self) -> dict:
        return {
            "fecha": self.date_fecha.date().toPython(),
            "hora_inicio": self.time_inicio.time().toPython(),
            "hora_fin": self.time_fin.time().toPython(),
            "zona": self.txt_zona.text(),
            "servicio": self.txt_servicio.text(),
        }

    # --------------------------------------------------------------
    # Acciones
    # --------------------------------------------------------------

    def _on_nueva(self) -> None:
        values = self._form_values()
        self._run(
            lambda: self._service.crear(
                self._admin(),
                values["fecha"],
                values["hora_inicio"],
                values["hora_fin"],
                values["zona"],
                values["servicio"],
            )
        )

    def _on_editar(self) -> None:
        disponibilidad_id = selected_id(self.table)
        if disponibilidad_id is None:
            return
        values = self._form_values()
        self._run(lambda: self._service.editar(self._admin(), disponibilidad_id, **values))

    def _on_bloquear(self) -> None:
        disponibilidad_id = selected_id(self.table)
        if disponibilidad_id is not None:
            self._run(lambda: self._service.bloquear(self._admin(), disponibilidad_id))

    def _on_desbloquear(self) -> None:
        disponibilidad_id = selected_id(self.table)
        if disponibilidad_id is not None:
            self._run(lambda: self._service.desbloquear(self._admin(), disponibilidad_id))

    def _on_eliminar(self) -> None:
        disponibilidad_id = selected_id(self.table)
        if disponibilidad_id is None:
            return
        if QMessageBox.question(self, "Disponibilidades", "¿Eliminar franja?") != QMessageBox.Yes:
            return
        self._run(lambda: self._service.eliminar(self._admin(), disponibilidad_id))

    def _run(self, action) -> None:
        try:
            action()
        except (DomainError, PersistenciaError) as exc:
            present_error(self, exc)
            return
        self._refresh()
