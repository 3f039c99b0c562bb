"""QPainter adapter for ``sketchboard.render``."""
from __future__ import annotations

from typing import List, Optional

from PySide6.QtCore import QPointF, QRectF, Qt
from PySide6.QtGui import QBrush, QColor, QFont, QPainter, QPainterPath, QPen, QPolygonF

from sketchboard.payload import Point


class QtPainter:
    """Adapter exposing the primitive drawing hooks expected by render."""

    def __init__(self, painter: QPainter):
        self._painter = painter

    def _color(self, value: Optional[str]) -> QColor:
        return QColor(value) if value else QColor(0, 0, 0)

    def _apply(self, color: str, width: float, fill: Optional[str]) -> None:
        pen = QPen(self._color(color))
        pen.setWidthF(float(width))
        self._painter.setPen(pen)
        if fill:
            self._painter.setBrush(QBrush(self._color(fill)))
        else:
            self._painter.setBrush(Qt.NoBrush)

    def line(self, x1: float, y1: float, x2: float, y2: float, color: str, width: float) -> None:
        self._painter.save()
        self._apply(color, width, None)
        self._painter.drawLine(QPointF(float(x1), float(y1)), QPointF(float(x2), float(y2)))
        self._painter.restore()

    def rectangle(
        self, x: float, y: float, width: float, height: float, color: str, stroke_width: float, fill: Optional[str]
    ) -> None:
        self._painter.save()
        self._apply(color, stroke_width, fill)
        # Qt wants a non-negative extent; the stored corners may be flipped mid-drag
        self._painter.drawRect(QRectF(float(x), float(y), float(width), float(height)).normalized())
        self._painter.restore()

    def ellipse(
        self, cx: float, cy: float, rx: float, ry: float, color: str, stroke_width: float, fill: Optional[str]
    ) -> None:
        self._painter.save()
        self._apply(color, stroke_width, fill)
        self._painter.drawEllipse(QPointF(float(cx), float(cy)), float(rx), float(ry))
        self._painter.restore()

    def polygon(self, points: List[Point], color: str, stroke_width: float, fill: Optional[str]) -> None:
        if not points:
            return
        self._painter.save()
        self._apply(color, stroke_width, fill)
        self._painter.drawPolygon(QPolygonF([QPointF(float(x), float(y)) for x, y in points]))
        self._painter.restore()

    def fill_path(self, points: List[Point], color: str) -> None:
        if len(points) < 3:
            return
        path = QPainterPath(QPointF(*points[0]))
        for x, y in points[1:]:
            path.lineTo(float(x), float(y))
        path.closeSubpath()
        self._painter.save()
        self._painter.setPen(Qt.NoPen)
        self._painter.fillPath(path, QBrush(self._color(color)))
        self._painter.restore()

    def text(self, label: str, x: float, y: float, px_height: float, color: str, family: str) -> None:
        if not label:
            return
        self._painter.save()
        font = QFont(family)
        font.setPixelSize(max(1, int(px_height)))
        self._painter.setFont(font)
        self._painter.setPen(QPen(self._color(color)))
        # (x, y) is the baseline anchor
        self._painter.drawText(QPointF(float(x), float(y)), label)
        self._painter.restore()


__all__ = ["QtPainter"]
