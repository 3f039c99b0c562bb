"""Application bootstrap for Sketchboard."""
from __future__ import annotations

import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import Optional

from PySide6.QtCore import Qt
from PySide6.QtGui import QAction, QActionGroup, QColor, QKeySequence
from PySide6.QtWidgets import (
    QApplication,
    QColorDialog,
    QDoubleSpinBox,
    QFileDialog,
    QFontComboBox,
    QLabel,
    QMainWindow,
    QMessageBox,
    QStatusBar,
    QToolBar,
)

from sketchboard.config import CanvasConfig, load_config
from sketchboard.elements import Tool
from sketchboard.errors import ConfigError, InterchangeError
from sketchboard.interchange import dumps, loads
from sketchboard.logger import setup_logger
from sketchboard.qt.canvas import CanvasWidget

logger = logging.getLogger(__name__)

SHORTCUTS = (
    ("Ctrl+Z", "Undo"),
    ("Ctrl+Shift+Z / Ctrl+Y", "Redo"),
    ("Ctrl+S", "Export JSON"),
    ("Delete", "Delete selected element"),
    ("Ctrl++ / Ctrl+-", "Zoom in / out"),
)


class MainWindow(QMainWindow):
    """Top-level window wiring together the canvas, tools, and chrome."""

    def __init__(self, config: Optional[CanvasConfig] = None):
        super().__init__()
        self.setWindowTitle("Sketchboard")
        self._config = config or CanvasConfig()

        self.canvas = CanvasWidget(self._config)
        self.setCentralWidget(self.canvas)

        self._tool_actions: dict[Tool, QAction] = {}
        self._undo_action: QAction | None = None
        self._redo_action: QAction | None = None

        self._setup_status_bar()
        self._make_toolbar()
        self._make_style_bar()
        self._make_menu()

        self.canvas.changed.connect(self._sync_history_actions)
        self.canvas.zoom_changed.connect(self._on_zoom_changed)
        self.canvas.export_requested.connect(self.export_json)

        self.resize(1200, 800)
        self._activate_tool(Tool.LINE, True)
        self._sync_history_actions()

    # ------------------------------------------------------------------
    # UI scaffolding
    def _setup_status_bar(self) -> None:
        bar = QStatusBar()
        bar.setSizeGripEnabled(False)
        self.setStatusBar(bar)
        self._mode_label = QLabel("Tool: Line")
        self._zoom_label = QLabel("Zoom: 100%")
        bar.addPermanentWidget(self._mode_label)
        bar.addPermanentWidget(self._zoom_label)

    def _make_toolbar(self) -> None:
        toolbar = QToolBar("Tools")
        toolbar.setMovable(False)
        self.addToolBar(Qt.LeftToolBarArea, toolbar)

        action_group = QActionGroup(self)
        action_group.setExclusive(True)

        definitions = (
            (Tool.SELECTION, "Select", "Select, move and resize elements."),
            (Tool.LINE, "Line", "Line: drag from start to end."),
            (Tool.RECTANGLE, "Rectangle", "Rectangle: drag from corner to corner."),
            (Tool.CIRCLE, "Circle", "Circle: press at the center, drag out the radius."),
            (Tool.DIAMOND, "Diamond", "Diamond: drag its bounding box."),
            (Tool.ARROW, "Arrow", "Arrow: drag from tail to tip."),
            (Tool.PENCIL, "Pencil", "Pencil: freehand stroke."),
            (Tool.TEXT, "Text", "Text: click to place a label."),
        )
        for tool, text, tip in definitions:
            action = QAction(text, self)
            action.setCheckable(True)
            action.setActionGroup(action_group)
            action.triggered.connect(lambda checked, t=tool: self._activate_tool(t, checked))
            action.setToolTip(tip)
            action.setStatusTip(tip)
            toolbar.addAction(action)
            self._tool_actions[tool] = action

        toolbar.addSeparator()
        clear_action = toolbar.addAction("Clear")
        clear_action.setToolTip("Clear the canvas (undoable).")
        clear_action.triggered.connect(self.canvas.clear)

    def _make_style_bar(self) -> None:
        bar = QToolBar("Style")
        bar.setMovable(False)
        self.addToolBar(Qt.TopToolBarArea, bar)

        stroke_action = bar.addAction("Stroke Color")
        stroke_action.triggered.connect(lambda: self._pick_color("stroke_color"))
        fill_action = bar.addAction("Fill Color")
        fill_action.triggered.connect(lambda: self._pick_color("background_color"))

        style = self.canvas.drawing_style()
        bar.addWidget(QLabel(" Width "))
        self._width_box = QDoubleSpinBox()
        self._width_box.setRange(0.5, 50.0)
        self._width_box.setSingleStep(0.5)
        self._width_box.setValue(style.stroke_width)
        self._width_box.valueChanged.connect(lambda value: self._update_style(stroke_width=float(value)))
        bar.addWidget(self._width_box)

        bar.addWidget(QLabel(" Font "))
        self._font_box = QFontComboBox()
        self._font_box.setCurrentText(style.font_family)
        self._font_box.currentFontChanged.connect(lambda font: self._update_style(font_family=font.family()))
        bar.addWidget(self._font_box)

        self._font_size_box = QDoubleSpinBox()
        self._font_size_box.setRange(6.0, 200.0)
        self._font_size_box.setValue(style.font_size)
        self._font_size_box.valueChanged.connect(lambda value: self._update_style(font_size=float(value)))
        bar.addWidget(self._font_size_box)

    def _make_menu(self) -> None:
        menu_bar = self.menuBar()
        file_menu = menu_bar.addMenu("&File")

        import_action = file_menu.addAction("Import JSON")
        import_action.setShortcut("Ctrl+O")
        import_action.triggered.connect(self.import_json)
        import_action.setStatusTip("Replace the drawing with one loaded from a JSON file.")

        export_action = file_menu.addAction("Export JSON")
        export_action.setShortcut("Ctrl+S")
        export_action.triggered.connect(self.export_json)
        export_action.setStatusTip("Save the drawing as a JSON file.")

        edit_menu = menu_bar.addMenu("&Edit")
        self._undo_action = edit_menu.addAction("Undo")
        self._undo_action.setShortcut("Ctrl+Z")
        self._undo_action.triggered.connect(self.canvas.undo)
        self._redo_action = edit_menu.addAction("Redo")
        self._redo_action.setShortcuts([QKeySequence("Ctrl+Y"), QKeySequence("Ctrl+Shift+Z")])
        self._redo_action.triggered.connect(self.canvas.redo)
        delete_action = edit_menu.addAction("Delete")
        delete_action.setShortcut(QKeySequence.Delete)
        delete_action.triggered.connect(self.canvas.delete_selected)

        view_menu = menu_bar.addMenu("&View")
        zoom_in_action = view_menu.addAction("Zoom In")
        zoom_in_action.setShortcut(QKeySequence.ZoomIn)
        zoom_in_action.triggered.connect(self.canvas.zoom_in)
        zoom_out_action = view_menu.addAction("Zoom Out")
        zoom_out_action.setShortcut(QKeySequence.ZoomOut)
        zoom_out_action.triggered.connect(self.canvas.zoom_out)
        zoom_reset_action = view_menu.addAction("Reset Zoom")
        zoom_reset_action.setShortcut("Ctrl+0")
        zoom_reset_action.triggered.connect(self.canvas.zoom_reset)

        help_menu = menu_bar.addMenu("&Help")
        shortcuts_action = help_menu.addAction("Keyboard Shortcuts")
        shortcuts_action.triggered.connect(self._show_shortcuts)

    # ------------------------------------------------------------------
    # Event handlers
    def _activate_tool(self, tool: Tool, checked: bool) -> None:
        if not checked:
            return
        self.canvas.set_tool(tool)
        self._mode_label.setText(f"Tool: {tool.value.title()}")
        action = self._tool_actions.get(tool)
        if action:
            blocked = action.blockSignals(True)
            action.setChecked(True)
            action.blockSignals(blocked)

    def _update_style(self, **changes) -> None:
        self.canvas.set_drawing_style(replace(self.canvas.drawing_style(), **changes))

    def _pick_color(self, attribute: str) -> None:
        current = QColor(getattr(self.canvas.drawing_style(), attribute))
        color = QColorDialog.getColor(current, self, "Choose color")
        if color.isValid():
            self._update_style(**{attribute: color.name()})

    def _on_zoom_changed(self, percent: int) -> None:
        self._zoom_label.setText(f"Zoom: {percent}%")

    def _sync_history_actions(self) -> None:
        history = self.canvas.machine.history
        if self._undo_action is not None:
            self._undo_action.setEnabled(history.can_undo())
        if self._redo_action is not None:
            self._redo_action.setEnabled(history.can_redo())

    def _show_shortcuts(self) -> None:
        lines = [f"{keys}\t{label}" for keys, label in SHORTCUTS]
        QMessageBox.information(self, "Keyboard Shortcuts", "\n".join(lines))

    # ------------------------------------------------------------------
    # Import / export
    def export_json(self) -> None:
        path, _ = QFileDialog.getSaveFileName(self, "Export JSON", "sketchboard.json", "JSON Files (*.json)")
        if not path:
            return
        Path(path).write_text(dumps(self.canvas.elements()), encoding="utf-8")
        logger.info("Exported %d elements to %s", len(self.canvas.elements()), path)
        self.statusBar().showMessage(f"Saved {path}", 4000)

    def import_json(self) -> None:
        path, _ = QFileDialog.getOpenFileName(self, "Import JSON", "", "JSON Files (*.json)")
        if not path:
            return
        try:
            snapshot = loads(Path(path).read_text(encoding="utf-8"), style=self.canvas.drawing_style())
        except (OSError, InterchangeError) as exc:
            QMessageBox.warning(self, "Import failed", str(exc))
            return
        self.canvas.load(snapshot)
        logger.info("Imported %d elements from %s", len(snapshot), path)


def main() -> int:  # pragma: no cover - GUI entry point
    try:
        config = load_config()
    except ConfigError as exc:
        setup_logger()
        logger.error("%s; falling back to defaults", exc)
        config = CanvasConfig()
    setup_logger(config.log_level)
    app = QApplication.instance() or QApplication(sys.argv)
    window = MainWindow(config)
    window.show()
    return app.exec()


if __name__ == "__main__":  # pragma: no cover - GUI entry point
    sys.exit(main())
