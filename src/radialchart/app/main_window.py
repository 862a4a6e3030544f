"""
Main window: input panel on the left, live chart on the right.
"""
from __future__ import annotations

import asyncio
import logging

from PySide6.QtCore import Qt, Slot
from PySide6.QtWidgets import (
    QMainWindow, QSplitter, QWidget, QVBoxLayout, QGridLayout, QGroupBox, QLabel, QDoubleSpinBox,
    QCheckBox, QLineEdit, QPushButton, QFileDialog, QMessageBox, QScrollArea, QSizePolicy, QFormLayout
)

from radialchart.app.application import VISIBLE_APP_NAME
from radialchart.app.chart_view import ChartView
from radialchart.app.state import ChartStore, Section
from radialchart.config import CANVAS_SIZE, DEFAULT_CONFIG, EXPORT_SCALE
from radialchart.model.dataset import CATEGORY_COUNT, CategoryDataset, VisibilityConfig, label_tunable, \
    overlay_offset
from radialchart.render.export import DEFAULT_BASE_NAME, ExportError, export_all
from radialchart.render.renderer import ChartRenderer

logger = logging.getLogger(__name__)

SECTION_TITLES = {
    Section.SCORES: "Scores",
    Section.BENCHMARKS: "Benchmarks",
    Section.AVERAGES: "Averages",
}


def _spin(
    parent: QWidget,
    *,
    min_value: float,
    max_value: float,
    step: float,
    default: float,
    decimals: int = 1,
    suffix: str = "",
) -> QDoubleSpinBox:
    w = QDoubleSpinBox(parent)
    w.setRange(min_value, max_value)
    w.setSingleStep(step)
    w.setDecimals(decimals)
    w.setValue(default)
    w.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Fixed)
    if suffix:
        w.setSuffix(f" {suffix}")
    return w


class InputPanel(QWidget):
    """Spin boxes for the three value rows, visibility toggles and export controls."""
    def __init__(self, store: ChartStore, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.store = store
        self.spins: dict[Section, list[QDoubleSpinBox]] = {}

        layout = QVBoxLayout(self)

        for section in Section:
            box = QGroupBox(self.tr(SECTION_TITLES[section]), self)
            grid = QGridLayout(box)
            row: list[QDoubleSpinBox] = []
            for i in range(CATEGORY_COUNT):
                w = _spin(box, min_value=0.0, max_value=DEFAULT_CONFIG.max_value, step=0.1, default=0.0)
                w.setToolTip(f"{i + 1}")
                w.valueChanged.connect(lambda v, s=section, idx=i: self.store.set_value(s, idx, v))
                grid.addWidget(w, i // 3, i % 3)
                row.append(w)
            self.spins[section] = row
            layout.addWidget(box)

        # ---- visibility ----
        vis = self.store.visibility
        toggles = QGroupBox(self.tr("Show"), self)
        tl = QVBoxLayout(toggles)
        self.cb_benchmark = QCheckBox(self.tr("Benchmark"), toggles)
        self.cb_benchmark.setChecked(vis.show_benchmark)
        self.cb_average = QCheckBox(self.tr("Average"), toggles)
        self.cb_average.setChecked(vis.show_average)
        self.cb_values = QCheckBox(self.tr("Values"), toggles)
        self.cb_values.setChecked(vis.show_values)
        for cb, flag in (
            (self.cb_benchmark, "show_benchmark"),
            (self.cb_average, "show_average"),
            (self.cb_values, "show_values"),
        ):
            cb.toggled.connect(lambda checked, f=flag: self.store.set_visibility(**{f: checked}))
            tl.addWidget(cb)
        layout.addWidget(toggles)

        # ---- value label controls, only while values are shown ----
        self.value_controls = QGroupBox(self.tr("Value labels"), self)
        form = QFormLayout(self.value_controls)
        self.sp_angle = _spin(self.value_controls, min_value=-180, max_value=180, step=1,
                              default=vis.value_angle_offset_degrees, decimals=0, suffix="°")
        self.sp_font = _spin(self.value_controls, min_value=1, max_value=400, step=2,
                             default=vis.value_font_size_px, decimals=0, suffix="px")
        self.sp_distance = _spin(self.value_controls, min_value=1, max_value=300, step=1,
                                 default=vis.value_distance_percent, decimals=0, suffix="%")
        self.sp_angle.valueChanged.connect(self._on_label_controls_changed)
        self.sp_font.valueChanged.connect(self._on_label_controls_changed)
        self.sp_distance.valueChanged.connect(self._on_label_controls_changed)
        form.addRow(self.tr("Angle offset"), self.sp_angle)
        form.addRow(self.tr("Font size"), self.sp_font)
        form.addRow(self.tr("Distance"), self.sp_distance)
        self.value_controls.setVisible(vis.show_values)
        self.cb_values.toggled.connect(self.value_controls.setVisible)
        layout.addWidget(self.value_controls)

        # ---- overlay position ----
        overlay_box = QGroupBox(self.tr("Overlay"), self)
        of = QFormLayout(overlay_box)
        self.sp_offset = _spin(overlay_box, min_value=-500, max_value=500, step=5,
                               default=vis.overlay_vertical_offset, decimals=0, suffix="px")
        self.sp_offset.valueChanged.connect(
            lambda v: self.store.set_visibility(overlay_vertical_offset=overlay_offset(v))
        )
        of.addRow(self.tr("Vertical offset"), self.sp_offset)
        layout.addWidget(overlay_box)

        # ---- export ----
        export_box = QGroupBox(self.tr("Export"), self)
        ef = QFormLayout(export_box)
        self.le_filename = QLineEdit(export_box)
        self.le_filename.setPlaceholderText(DEFAULT_BASE_NAME)
        self.btn_export = QPushButton(self.tr("Export PNG"), export_box)
        ef.addRow(self.tr("File name"), self.le_filename)
        ef.addRow(self.btn_export)
        layout.addWidget(export_box)

        layout.addStretch()

    @Slot()
    def _on_label_controls_changed(self, *_) -> None:
        self.store.set_visibility(
            value_angle_offset_degrees=label_tunable(self.sp_angle.value(), 0.0),
            value_font_size_px=label_tunable(self.sp_font.value(), 60.0),
            value_distance_percent=label_tunable(self.sp_distance.value(), 100.0),
        )

    def base_name(self) -> str:
        return self.le_filename.text().strip() or DEFAULT_BASE_NAME


class MainWindow(QMainWindow):
    def __init__(self, renderer: ChartRenderer | None = None) -> None:
        super().__init__()
        self.setWindowTitle(VISIBLE_APP_NAME)
        self.resize(1100, 700)

        self.store = ChartStore()
        self.renderer = renderer or ChartRenderer()

        split = QSplitter(Qt.Orientation.Horizontal, self)
        split.setChildrenCollapsible(False)

        self.panel = InputPanel(self.store, split)
        scroller = QScrollArea(split)
        scroller.setWidget(self.panel)
        scroller.setWidgetResizable(True)

        self.chart_view = ChartView(split)

        split.addWidget(scroller)
        split.addWidget(self.chart_view)
        split.setStretchFactor(0, 0)
        split.setStretchFactor(1, 1)
        self.setCentralWidget(split)

        self.store.changed.connect(self._redraw)
        self.panel.btn_export.clicked.connect(self._on_export)

        self._redraw(self.store.dataset(), self.store.visibility)

    @Slot(object, object)
    def _redraw(self, dataset: CategoryDataset, visibility: VisibilityConfig) -> None:
        image = asyncio.run(self.renderer.render_image(CANVAS_SIZE, CANVAS_SIZE, dataset, visibility))
        self.chart_view.set_image(image)

    @Slot()
    def _on_export(self) -> None:
        directory = QFileDialog.getExistingDirectory(self, self.tr("Export to folder"))
        if not directory:
            return

        try:
            results = asyncio.run(export_all(
                self.renderer,
                self.store.dataset(),
                base_name=self.panel.base_name(),
                visibility=self.store.visibility,
                base_size=CANVAS_SIZE,
                export_scale=EXPORT_SCALE,
                output_dir=directory,
            ))
        except ExportError as e:
            logger.error(f"Export failed: {e}")
            QMessageBox.critical(self, self.tr("Export failed"), str(e))
            return

        names = ", ".join(r.filename for r in results)
        self.statusBar().showMessage(self.tr("Exported: ") + names, 5000)
