"""Geometry helpers for the sketchboard canvas.

Everything here is a pure function over elements and points: hit-testing,
coordinate normalization, resize-handle mapping and the derivation of render
payloads. Nothing in this module holds state.
"""
from __future__ import annotations

import math
from dataclasses import dataclass, replace
from typing import Iterable, Optional, Sequence, Tuple

import numpy as np

from sketchboard.config import (
    ARROW_HEAD_ANGLE,
    ARROW_HEAD_LENGTH,
    HANDLE_TOLERANCE,
    LINE_TOLERANCE,
    PENCIL_TOLERANCE,
    TEXT_WIDTH_FACTOR,
)
from sketchboard.elements import (
    ELEMENT_CLASSES,
    FILLED_TYPES,
    SHAPE_TYPES,
    ArrowElement,
    CircleElement,
    DiamondElement,
    Element,
    LineElement,
    PencilElement,
    RectangleElement,
    Style,
    TextElement,
    Tool,
    element_style,
)
from sketchboard.errors import MalformedElementError, UnrecognisedTypeError
from sketchboard.payload import (
    EMPTY_PAYLOAD,
    CirclePrimitive,
    LinePrimitive,
    Payload,
    Point,
    PolygonPrimitive,
    PrimitiveStyle,
    RectanglePrimitive,
)

Box = Tuple[float, float, float, float]

# Hit classifications
START = "start"
END = "end"
TOP_LEFT = "topLeft"
TOP_RIGHT = "topRight"
BOTTOM_LEFT = "bottomLeft"
BOTTOM_RIGHT = "bottomRight"
INSIDE = "inside"


@dataclass(frozen=True)
class Hit:
    """An element found under the pointer and where on it the pointer is."""

    element: Element
    position: str


# ---------------------------------------------------------------------------
# Distance primitives


def distance(a: Point, b: Point) -> float:
    """Return the Euclidean distance between two points."""
    return float(math.hypot(float(b[0]) - float(a[0]), float(b[1]) - float(a[1])))


def near_point(x: float, y: float, x1: float, y1: float, name: str) -> Optional[str]:
    """Return ``name`` when the point lies within the handle tolerance of (x1, y1)."""
    return name if abs(x - x1) < HANDLE_TOLERANCE and abs(y - y1) < HANDLE_TOLERANCE else None


def on_line(
    x1: float,
    y1: float,
    x2: float,
    y2: float,
    x: float,
    y: float,
    max_distance: float = LINE_TOLERANCE,
) -> Optional[str]:
    """Return ``"inside"`` when (x, y) lies on the segment within ``max_distance``.

    The test compares the segment length with the detour through the query
    point, so it is cheap but grows looser towards the segment middle.
    """
    a = (x1, y1)
    b = (x2, y2)
    c = (x, y)
    offset = distance(a, b) - (distance(a, c) + distance(b, c))
    return INSIDE if abs(offset) < max_distance else None


def on_polyline(points: Sequence[Point], x: float, y: float, max_distance: float = PENCIL_TOLERANCE) -> bool:
    """Vectorised ``on_line`` over every consecutive pair of ``points``."""
    pts = np.asarray(points, dtype=float)
    if pts.ndim != 2 or pts.shape[0] < 2:
        return False
    a = pts[:-1]
    b = pts[1:]
    ab = np.hypot(b[:, 0] - a[:, 0], b[:, 1] - a[:, 1])
    ac = np.hypot(x - a[:, 0], y - a[:, 1])
    bc = np.hypot(x - b[:, 0], y - b[:, 1])
    return bool(np.any(np.abs(ab - (ac + bc)) < max_distance))


# ---------------------------------------------------------------------------
# Hit-testing


def _corner_hit(x: float, y: float, box: Box) -> Optional[str]:
    x1, y1, x2, y2 = box
    return (
        near_point(x, y, x1, y1, TOP_LEFT)
        or near_point(x, y, x2, y1, TOP_RIGHT)
        or near_point(x, y, x1, y2, BOTTOM_LEFT)
        or near_point(x, y, x2, y2, BOTTOM_RIGHT)
    )


def _contains(x: float, y: float, box: Box) -> bool:
    x1, y1, x2, y2 = box
    return min(x1, x2) <= x <= max(x1, x2) and min(y1, y2) <= y <= max(y1, y2)


def classify_hit(point: Point, element: Element) -> Optional[str]:
    """Classify where ``point`` falls on a line, rectangle or pencil element."""
    x, y = float(point[0]), float(point[1])
    if isinstance(element, LineElement):
        start = near_point(x, y, element.x1, element.y1, START)
        end = near_point(x, y, element.x2, element.y2, END)
        on = on_line(element.x1, element.y1, element.x2, element.y2, x, y)
        return start or end or on
    if isinstance(element, RectangleElement):
        x1, y1, x2, y2 = element.x1, element.y1, element.x2, element.y2
        inside = INSIDE if x1 <= x <= x2 and y1 <= y <= y2 else None
        return _corner_hit(x, y, (x1, y1, x2, y2)) or inside
    if isinstance(element, PencilElement):
        if not element.points:
            raise MalformedElementError(f"Pencil element {element.id} has no points")
        return INSIDE if on_polyline(element.points, x, y) else None
    raise UnrecognisedTypeError(type(element).__name__)


def text_box(element: TextElement) -> Box:
    """Approximate glyph box of a text element; the anchor sits on the baseline."""
    size = float(element.font_size)
    width = max(len(element.text) * size * TEXT_WIDTH_FACTOR, size * 0.5)
    return (element.x1, element.y1 - size, element.x1 + width, element.y1)


def bounding_box_hit(point: Point, element: Element) -> Optional[str]:
    """Rectangle rule for elements ``classify_hit`` does not handle.

    Diamonds and arrows name their corners after the stored coordinates, so a
    handle always maps back onto the coordinate ``resize_corner`` will move.
    Circles expose their outline point as ``"end"``. Text is move-only.
    """
    x, y = float(point[0]), float(point[1])
    if isinstance(element, (DiamondElement, ArrowElement)):
        box = (element.x1, element.y1, element.x2, element.y2)
        return _corner_hit(x, y, box) or (INSIDE if _contains(x, y, box) else None)
    if isinstance(element, CircleElement):
        radius = distance((element.x1, element.y1), (element.x2, element.y2))
        box = (element.x1 - radius, element.y1 - radius, element.x1 + radius, element.y1 + radius)
        end = near_point(x, y, element.x2, element.y2, END)
        return end or (INSIDE if _contains(x, y, box) else None)
    if isinstance(element, TextElement):
        return INSIDE if _contains(x, y, text_box(element)) else None
    raise UnrecognisedTypeError(type(element).__name__)


def position_within_element(point: Point, element: Element) -> Optional[str]:
    """Hit position of ``point`` on any element kind, or None."""
    if isinstance(element, (LineElement, RectangleElement, PencilElement)):
        return classify_hit(point, element)
    return bounding_box_hit(point, element)


def element_at(point: Point, elements: Iterable[Element]) -> Optional[Hit]:
    """Return the first element in list order under ``point``.

    Elements drawn later do not win over earlier ones.
    """
    for element in elements:
        position = position_within_element(point, element)
        if position is not None:
            return Hit(element=element, position=position)
    return None


def cursor_for_position(position: Optional[str]) -> str:
    """Map a hit position to a CSS-style cursor name."""
    if position in (TOP_LEFT, BOTTOM_RIGHT):
        return "nwse-resize"
    if position in (TOP_RIGHT, BOTTOM_LEFT):
        return "nesw-resize"
    if position in (START, END, INSIDE):
        return "move"
    return "default"


# ---------------------------------------------------------------------------
# Resize & normalization


def element_box(element: Element) -> Box:
    """Stored (x1, y1, x2, y2) of a non-pencil element."""
    if isinstance(element, PencilElement):
        raise MalformedElementError("Pencil elements have no stored box")
    return (element.x1, element.y1, element.x2, element.y2)


def resize_corner(point: Point, handle: Optional[str], box: Box) -> Box:
    """Move the box coordinate(s) owned by ``handle`` to ``point``."""
    x, y = float(point[0]), float(point[1])
    x1, y1, x2, y2 = box
    if handle in (START, TOP_LEFT):
        return (x, y, x2, y2)
    if handle == TOP_RIGHT:
        return (x1, y, x, y2)
    if handle == BOTTOM_LEFT:
        return (x, y1, x2, y)
    if handle in (END, BOTTOM_RIGHT):
        return (x1, y1, x, y)
    return box


def adjustment_required(tool: Tool) -> bool:
    """Whether elements drawn with ``tool`` are normalized on release."""
    return tool in (Tool.LINE, Tool.RECTANGLE)


def normalize(element: Element) -> Element:
    """Return ``element`` with canonical corner ordering.

    Rectangles get min/max corners on both axes. Lines and arrows are reordered
    so the start point precedes the end point by x, then by y. Everything else
    is returned unchanged.
    """
    if isinstance(element, RectangleElement):
        x1, y1, x2, y2 = element_box(element)
        box = (min(x1, x2), min(y1, y2), max(x1, x2), max(y1, y2))
        if box == (x1, y1, x2, y2):
            return element
        return update_geometry(element, *box)
    if isinstance(element, (LineElement, ArrowElement)):
        x1, y1, x2, y2 = element_box(element)
        if x1 < x2 or (x1 == x2 and y1 <= y2):
            return element
        return update_geometry(element, x2, y2, x1, y1)
    if isinstance(element, (CircleElement, DiamondElement, PencilElement, TextElement)):
        return element
    raise UnrecognisedTypeError(type(element).__name__)


# ---------------------------------------------------------------------------
# Shape derivation


def arrow_wings(x1: float, y1: float, x2: float, y2: float) -> Tuple[Point, Point]:
    """Return the far ends of the two head wings drawn back from the tip (x2, y2)."""
    angle = math.atan2(y2 - y1, x2 - x1)
    wing_a = (
        x2 - ARROW_HEAD_LENGTH * math.cos(angle - ARROW_HEAD_ANGLE),
        y2 - ARROW_HEAD_LENGTH * math.sin(angle - ARROW_HEAD_ANGLE),
    )
    wing_b = (
        x2 - ARROW_HEAD_LENGTH * math.cos(angle + ARROW_HEAD_ANGLE),
        y2 - ARROW_HEAD_LENGTH * math.sin(angle + ARROW_HEAD_ANGLE),
    )
    return wing_a, wing_b


def diamond_vertices(x1: float, y1: float, x2: float, y2: float) -> Tuple[Point, ...]:
    mid_x = (x1 + x2) / 2.0
    mid_y = (y1 + y2) / 2.0
    return ((mid_x, y1), (x2, mid_y), (mid_x, y2), (x1, mid_y))


def derive_shape(tool: Tool, x1: float, y1: float, x2: float, y2: float, style: Style) -> Payload:
    """Map two corner points and a style to the tool's render payload."""
    tool = Tool.coerce(tool)
    stroke = PrimitiveStyle(stroke=style.stroke_color, stroke_width=style.stroke_width)
    filled = PrimitiveStyle(
        stroke=style.stroke_color,
        stroke_width=style.stroke_width,
        fill=style.background_color,
    )
    if tool is Tool.LINE:
        return (LinePrimitive(x1, y1, x2, y2, stroke),)
    if tool is Tool.RECTANGLE:
        return (RectanglePrimitive(x1, y1, x2 - x1, y2 - y1, filled),)
    if tool is Tool.CIRCLE:
        radius = distance((x1, y1), (x2, y2))
        return (CirclePrimitive(x1, y1, radius * 2.0, filled),)
    if tool is Tool.DIAMOND:
        return (PolygonPrimitive(diamond_vertices(x1, y1, x2, y2), filled),)
    if tool is Tool.ARROW:
        (ax1, ay1), (ax2, ay2) = arrow_wings(x1, y1, x2, y2)
        return (
            LinePrimitive(x1, y1, x2, y2, stroke),
            LinePrimitive(x2, y2, ax1, ay1, stroke),
            LinePrimitive(x2, y2, ax2, ay2, stroke),
        )
    if tool in (Tool.PENCIL, Tool.TEXT):
        return EMPTY_PAYLOAD
    raise UnrecognisedTypeError(tool)


# ---------------------------------------------------------------------------
# Construction & updates


def create_element(
    element_id: int,
    x1: float,
    y1: float,
    x2: float,
    y2: float,
    tool: Tool | str,
    style: Optional[Style] = None,
) -> Element:
    """Build a new element of ``tool`` spanning (x1, y1)-(x2, y2)."""
    tool = Tool.coerce(tool)
    style = style or Style()
    x1, y1, x2, y2 = float(x1), float(y1), float(x2), float(y2)
    if tool is Tool.PENCIL:
        return PencilElement(
            id=element_id,
            points=((x1, y1),),
            stroke_color=style.stroke_color,
            stroke_width=style.stroke_width,
        )
    if tool is Tool.TEXT:
        return TextElement(
            id=element_id,
            x1=x1,
            y1=y1,
            x2=x2,
            y2=y2,
            text="",
            stroke_color=style.stroke_color,
            font_size=style.font_size,
            font_family=style.font_family,
        )
    if tool is Tool.SELECTION or tool not in ELEMENT_CLASSES:
        raise UnrecognisedTypeError(tool)
    cls = ELEMENT_CLASSES[tool]
    payload = derive_shape(tool, x1, y1, x2, y2, style)
    kwargs = dict(
        id=element_id,
        x1=x1,
        y1=y1,
        x2=x2,
        y2=y2,
        stroke_color=style.stroke_color,
        stroke_width=style.stroke_width,
        payload=payload,
    )
    if cls in FILLED_TYPES:
        kwargs["background_color"] = style.background_color
    return cls(**kwargs)


def update_geometry(element: Element, x1: float, y1: float, x2: float, y2: float) -> Element:
    """Return ``element`` moved to the new coordinates.

    Shapes are rebuilt so their payload is derived afresh. Pencils append
    (x2, y2) to their points; text moves its anchor.
    """
    if isinstance(element, SHAPE_TYPES):
        return create_element(element.id, x1, y1, x2, y2, element.tool, element_style(element))
    if isinstance(element, PencilElement):
        return replace(element, points=element.points + ((float(x2), float(y2)),))
    if isinstance(element, TextElement):
        return replace(element, x1=float(x1), y1=float(y1), x2=float(x2), y2=float(y2))
    raise UnrecognisedTypeError(type(element).__name__)


def drag_far_corner(element: Element, point: Point) -> Element:
    """Extend an element being drawn so its far corner follows ``point``."""
    if isinstance(element, PencilElement):
        return update_geometry(element, 0.0, 0.0, point[0], point[1])
    x1, y1, _x2, _y2 = element_box(element)
    return update_geometry(element, x1, y1, point[0], point[1])


def translate_points(point: Point, offsets: Sequence[Point]) -> Tuple[Point, ...]:
    """Place each point at ``point`` minus its captured offset."""
    x, y = float(point[0]), float(point[1])
    return tuple((x - ox, y - oy) for ox, oy in offsets)


__all__ = [
    "Box",
    "Hit",
    "START",
    "END",
    "TOP_LEFT",
    "TOP_RIGHT",
    "BOTTOM_LEFT",
    "BOTTOM_RIGHT",
    "INSIDE",
    "distance",
    "near_point",
    "on_line",
    "on_polyline",
    "classify_hit",
    "bounding_box_hit",
    "position_within_element",
    "element_at",
    "cursor_for_position",
    "text_box",
    "element_box",
    "resize_corner",
    "adjustment_required",
    "normalize",
    "arrow_wings",
    "diamond_vertices",
    "derive_shape",
    "create_element",
    "update_geometry",
    "drag_far_corner",
    "translate_points",
]
