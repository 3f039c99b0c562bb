"""
Qt-agnostic rendering of sketchboard elements.

You provide a "Painter" shim with:
- line(x1, y1, x2, y2, color, width)
- rectangle(x, y, width, height, color, stroke_width, fill)
- ellipse(cx, cy, rx, ry, color, stroke_width, fill)
- polygon([(x, y), ...], color, stroke_width, fill)
- fill_path([(x, y), ...], color)
- text(label, x, y, px_height, color, family)

``sketchboard.qt.painter.QtPainter`` implements it on QPainter; tests use a
recording shim.
"""

from __future__ import annotations

import math
from typing import Callable, Iterable, List, Optional, Protocol, Sequence

import numpy as np

from sketchboard.config import PENCIL_OUTLINE_SCALE
from sketchboard.elements import SHAPE_TYPES, Element, PencilElement, TextElement
from sketchboard.errors import MalformedElementError, UnrecognisedTypeError
from sketchboard.payload import (
    CirclePrimitive,
    LinePrimitive,
    Point,
    PolygonPrimitive,
    Primitive,
    RectanglePrimitive,
)

Outliner = Callable[[Sequence[Point], float], Sequence[Sequence[float]]]


class Painter(Protocol):
    def line(self, x1: float, y1: float, x2: float, y2: float, color: str, width: float) -> None: ...

    def rectangle(
        self, x: float, y: float, width: float, height: float, color: str, stroke_width: float, fill: Optional[str]
    ) -> None: ...

    def ellipse(
        self, cx: float, cy: float, rx: float, ry: float, color: str, stroke_width: float, fill: Optional[str]
    ) -> None: ...

    def polygon(self, points: List[Point], color: str, stroke_width: float, fill: Optional[str]) -> None: ...

    def fill_path(self, points: List[Point], color: str) -> None: ...

    def text(self, label: str, x: float, y: float, px_height: float, color: str, family: str) -> None: ...


# ---- Freehand outlines ---------------------------------------------------

_CAP_SEGMENTS = 16


def _dot(center: np.ndarray, radius: float) -> List[Point]:
    angles = np.linspace(0.0, 2.0 * math.pi, _CAP_SEGMENTS, endpoint=False)
    xs = center[0] + radius * np.cos(angles)
    ys = center[1] + radius * np.sin(angles)
    return [(float(x), float(y)) for x, y in zip(xs, ys)]


def stroke_outline(points: Sequence[Point], size: float) -> List[Point]:
    """Return a closed polygon surrounding the polyline ``points``.

    Each sample is offset by ``size / 2`` along its normal on both sides; the
    left side runs forward and the right side back. A stroke that never moved
    becomes a small round dot.
    """
    pts = np.asarray(points, dtype=float).reshape(-1, 2)
    if pts.shape[0] == 0:
        return []
    radius = max(float(size), 1.0) / 2.0
    # drop repeated samples, they have no direction
    keep = np.ones(pts.shape[0], dtype=bool)
    keep[1:] = np.any(np.diff(pts, axis=0) != 0.0, axis=1)
    pts = pts[keep]
    if pts.shape[0] == 1:
        return _dot(pts[0], radius)

    tangents = np.gradient(pts, axis=0)
    lengths = np.hypot(tangents[:, 0], tangents[:, 1])
    lengths[lengths == 0.0] = 1.0
    normals = np.column_stack((-tangents[:, 1], tangents[:, 0])) / lengths[:, None]
    left = pts + normals * radius
    right = pts - normals * radius
    outline = np.vstack((left, right[::-1]))
    return [(float(x), float(y)) for x, y in outline]


def _fmt(value: float) -> str:
    value = float(value)
    return str(int(value)) if value.is_integer() else repr(value)


def svg_path_from_stroke(outline: Sequence[Sequence[float]]) -> str:
    """Build a closed SVG path through ``outline`` using quadratic midpoints.

    Every outline point becomes a control point whose curve ends halfway to
    the next point, wrapping around to the first.
    """
    if not len(outline):
        return ""
    parts = ["M", _fmt(outline[0][0]), _fmt(outline[0][1]), "Q"]
    count = len(outline)
    for i, (x0, y0) in enumerate(outline):
        x1, y1 = outline[(i + 1) % count]
        parts.extend((_fmt(x0), _fmt(y0), _fmt((x0 + x1) / 2.0), _fmt((y0 + y1) / 2.0)))
    parts.append("Z")
    return " ".join(parts)


# ---- Drawing -------------------------------------------------------------


def draw_primitive(painter: Painter, primitive: Primitive) -> None:
    style = primitive.style
    if isinstance(primitive, LinePrimitive):
        painter.line(primitive.x1, primitive.y1, primitive.x2, primitive.y2, style.stroke, style.stroke_width)
    elif isinstance(primitive, RectanglePrimitive):
        painter.rectangle(
            primitive.x, primitive.y, primitive.width, primitive.height, style.stroke, style.stroke_width, style.fill
        )
    elif isinstance(primitive, CirclePrimitive):
        radius = primitive.diameter / 2.0
        painter.ellipse(primitive.cx, primitive.cy, radius, radius, style.stroke, style.stroke_width, style.fill)
    elif isinstance(primitive, PolygonPrimitive):
        painter.polygon(list(primitive.points), style.stroke, style.stroke_width, style.fill)
    else:
        raise UnrecognisedTypeError(type(primitive).__name__)


def draw_element(painter: Painter, element: Element, outliner: Outliner = stroke_outline) -> None:
    if isinstance(element, SHAPE_TYPES):
        for primitive in element.payload:
            draw_primitive(painter, primitive)
        return
    if isinstance(element, TextElement):
        if element.text:
            painter.text(element.text, element.x1, element.y1, element.font_size, element.stroke_color, element.font_family)
        return
    if isinstance(element, PencilElement):
        if not element.points:
            raise MalformedElementError(f"Pencil element {element.id} has no points")
        outline: List[Point] = []
        for point in outliner(element.points, element.stroke_width * PENCIL_OUTLINE_SCALE):
            if len(point) != 2:
                raise MalformedElementError(f"Expected outline point to have exactly 2 values, got {len(point)}")
            outline.append((float(point[0]), float(point[1])))
        painter.fill_path(outline, element.stroke_color)
        return
    raise UnrecognisedTypeError(type(element).__name__)


def draw_scene(painter: Painter, elements: Iterable[Element], outliner: Outliner = stroke_outline) -> None:
    for element in elements:
        draw_element(painter, element, outliner)


__all__ = [
    "Painter",
    "Outliner",
    "stroke_outline",
    "svg_path_from_stroke",
    "draw_primitive",
    "draw_element",
    "draw_scene",
]
