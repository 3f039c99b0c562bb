"""Drawing surface widget."""
from __future__ import annotations

import logging
from typing import Optional

from PySide6.QtCore import Qt, Signal
from PySide6.QtGui import QColor, QPainter
from PySide6.QtWidgets import QInputDialog, QWidget

from sketchboard.config import CanvasConfig
from sketchboard.elements import Style, Tool
from sketchboard.history import History
from sketchboard.interaction import InteractionStateMachine
from sketchboard.payload import Point
from sketchboard.qt.painter import QtPainter
from sketchboard.render import draw_scene
from sketchboard.store import Snapshot

logger = logging.getLogger(__name__)

_CURSORS = {
    "nwse-resize": Qt.SizeFDiagCursor,
    "nesw-resize": Qt.SizeBDiagCursor,
    "move": Qt.SizeAllCursor,
    "default": Qt.ArrowCursor,
}

_KEY_NAMES = {
    Qt.Key_Z: "z",
    Qt.Key_Y: "y",
    Qt.Key_S: "s",
    Qt.Key_Delete: "delete",
}


class CanvasWidget(QWidget):
    """Forwards pointer and key events to an ``InteractionStateMachine``.

    Pointer positions are divided by the zoom factor before they reach the
    machine, so elements are always stored in unzoomed canvas coordinates.
    """

    changed = Signal()
    zoom_changed = Signal(int)
    export_requested = Signal()

    def __init__(self, config: Optional[CanvasConfig] = None, parent: Optional[QWidget] = None):
        super().__init__(parent)
        self._config = config or CanvasConfig()
        self.machine = InteractionStateMachine(
            History(limit=self._config.history_limit),
            style=self._config.default_style,
            text_provider=self._ask_text,
            export_handler=lambda _snapshot: self.export_requested.emit(),
        )
        self._zoom = 100
        self.setMouseTracking(True)
        self.setFocusPolicy(Qt.StrongFocus)
        self.setAutoFillBackground(True)
        palette = self.palette()
        palette.setColor(self.backgroundRole(), QColor(255, 255, 255))
        self.setPalette(palette)

    # ------------------------------------------------------------------
    # Tool & style
    def set_tool(self, tool: Tool | str) -> None:
        self.machine.set_tool(tool)
        self.setCursor(Qt.CrossCursor if self.machine.tool is not Tool.SELECTION else Qt.ArrowCursor)

    def drawing_style(self) -> Style:
        return self.machine.style

    def set_drawing_style(self, style: Style) -> None:
        self.machine.style = style

    def elements(self) -> Snapshot:
        return self.machine.elements

    # ------------------------------------------------------------------
    # Commands
    def undo(self) -> None:
        if self.machine.undo():
            self._refresh()

    def redo(self) -> None:
        if self.machine.redo():
            self._refresh()

    def clear(self) -> None:
        if self.machine.clear():
            self._refresh()

    def delete_selected(self) -> None:
        if self.machine.delete_selected():
            self._refresh()

    def load(self, snapshot: Snapshot) -> None:
        self.machine.load(snapshot)
        self._refresh()

    def _refresh(self) -> None:
        self.update()
        self.changed.emit()

    # ------------------------------------------------------------------
    # Zoom
    def zoom(self) -> int:
        return self._zoom

    def set_zoom(self, percent: int) -> None:
        percent = max(self._config.zoom_min, min(self._config.zoom_max, int(percent)))
        if percent == self._zoom:
            return
        self._zoom = percent
        logger.debug("Zoom %d%%", percent)
        self.update()
        self.zoom_changed.emit(percent)

    def zoom_in(self) -> None:
        self.set_zoom(self._zoom + self._config.zoom_step)

    def zoom_out(self) -> None:
        self.set_zoom(self._zoom - self._config.zoom_step)

    def zoom_reset(self) -> None:
        self.set_zoom(100)

    def canvas_point(self, event) -> Point:
        scale = self._zoom / 100.0
        pos = event.position()
        return (pos.x() / scale, pos.y() / scale)

    # ------------------------------------------------------------------
    # Text entry
    def _ask_text(self) -> Optional[str]:  # pragma: no cover - GUI entry point
        text, ok = QInputDialog.getText(self, "Text", "Enter text:")
        return text if ok else None

    # ------------------------------------------------------------------
    # Qt events
    def paintEvent(self, event):  # pragma: no cover - GUI entry point
        painter = QPainter(self)
        painter.setRenderHint(QPainter.Antialiasing, True)
        scale = self._zoom / 100.0
        painter.scale(scale, scale)
        draw_scene(QtPainter(painter), self.machine.elements)
        painter.end()

    def mousePressEvent(self, event):  # pragma: no cover - GUI entry point
        if event.button() != Qt.LeftButton:
            return super().mousePressEvent(event)
        x, y = self.canvas_point(event)
        self.machine.pointer_down(x, y)
        self._refresh()

    def mouseMoveEvent(self, event):  # pragma: no cover - GUI entry point
        x, y = self.canvas_point(event)
        if self.machine.tool is Tool.SELECTION:
            self.setCursor(_CURSORS.get(self.machine.cursor_at(x, y), Qt.ArrowCursor))
        if event.buttons() & Qt.LeftButton:
            self.machine.pointer_move(x, y)
            self.update()

    def mouseReleaseEvent(self, event):  # pragma: no cover - GUI entry point
        if event.button() != Qt.LeftButton:
            return super().mouseReleaseEvent(event)
        self.machine.pointer_up()
        self._refresh()

    def keyPressEvent(self, event):  # pragma: no cover - GUI entry point
        name = _KEY_NAMES.get(event.key())
        if name is None:
            return super().keyPressEvent(event)
        modifiers = event.modifiers()
        handled = self.machine.handle_key(
            name,
            ctrl=bool(modifiers & Qt.ControlModifier),
            shift=bool(modifiers & Qt.ShiftModifier),
        )
        if handled:
            self._refresh()
            event.accept()
        else:
            super().keyPressEvent(event)


__all__ = ["CanvasWidget"]
