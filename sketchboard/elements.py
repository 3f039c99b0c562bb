"""Element data model for the sketchboard canvas.

Every drawable element is one of seven frozen dataclasses. Each variant only
carries the fields that mean something for it, and a ``tool`` class attribute
tags which drawing tool produced it. Elements are never edited in place:
changes go through ``dataclasses.replace`` or are rebuilt by
``sketchboard.geometry.create_element``.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, ClassVar, Dict, Tuple, Union

from sketchboard.errors import UnrecognisedTypeError
from sketchboard.payload import EMPTY_PAYLOAD, Payload, Point


class Tool(str, Enum):
    SELECTION = "selection"
    LINE = "line"
    RECTANGLE = "rectangle"
    CIRCLE = "circle"
    DIAMOND = "diamond"
    ARROW = "arrow"
    PENCIL = "pencil"
    TEXT = "text"

    @classmethod
    def coerce(cls, value: "Tool | str") -> "Tool":
        if isinstance(value, Tool):
            return value
        try:
            return cls(str(value).lower())
        except ValueError as exc:
            raise UnrecognisedTypeError(value) from exc


# ---- Style ---------------------------------------------------------------


@dataclass(frozen=True)
class Style:
    """Style attributes the UI hands over when an element is created."""

    stroke_color: str = "#000000"
    background_color: str = "#ffffff"
    stroke_width: float = 2.0
    font_size: float = 20.0
    font_family: str = "Arial"

    def asdict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Style":
        return cls(**data)


# ---- Element variants ----------------------------------------------------


@dataclass(frozen=True)
class _ShapeElement:
    id: int
    x1: float
    y1: float
    x2: float
    y2: float
    stroke_color: str = "#000000"
    stroke_width: float = 2.0
    payload: Payload = field(default=EMPTY_PAYLOAD, compare=False, repr=False)


@dataclass(frozen=True)
class _FilledShapeElement(_ShapeElement):
    background_color: str = "#ffffff"


@dataclass(frozen=True)
class LineElement(_ShapeElement):
    tool: ClassVar[Tool] = Tool.LINE


@dataclass(frozen=True)
class ArrowElement(_ShapeElement):
    """A line from (x1, y1) to the tip at (x2, y2) with two head wings."""

    tool: ClassVar[Tool] = Tool.ARROW


@dataclass(frozen=True)
class RectangleElement(_FilledShapeElement):
    tool: ClassVar[Tool] = Tool.RECTANGLE


@dataclass(frozen=True)
class CircleElement(_FilledShapeElement):
    """Circle centred on (x1, y1); (x2, y2) lies on its outline."""

    tool: ClassVar[Tool] = Tool.CIRCLE


@dataclass(frozen=True)
class DiamondElement(_FilledShapeElement):
    """Diamond inscribed in the box spanned by (x1, y1) and (x2, y2)."""

    tool: ClassVar[Tool] = Tool.DIAMOND


@dataclass(frozen=True)
class PencilElement:
    id: int
    points: Tuple[Point, ...]
    stroke_color: str = "#000000"
    stroke_width: float = 2.0

    tool: ClassVar[Tool] = Tool.PENCIL


@dataclass(frozen=True)
class TextElement:
    """Glyph run anchored at (x1, y1); (x2, y2) mirrors the anchor."""

    id: int
    x1: float
    y1: float
    x2: float
    y2: float
    text: str = ""
    stroke_color: str = "#000000"
    font_size: float = 20.0
    font_family: str = "Arial"

    tool: ClassVar[Tool] = Tool.TEXT


Element = Union[
    LineElement,
    RectangleElement,
    CircleElement,
    DiamondElement,
    ArrowElement,
    PencilElement,
    TextElement,
]

SHAPE_TYPES = (LineElement, RectangleElement, CircleElement, DiamondElement, ArrowElement)
FILLED_TYPES = (RectangleElement, CircleElement, DiamondElement)
ELEMENT_TYPES = SHAPE_TYPES + (PencilElement, TextElement)

ELEMENT_CLASSES: Dict[Tool, type] = {cls.tool: cls for cls in ELEMENT_TYPES}


def element_style(element: Element) -> Style:
    """Recover the creation style carried by ``element``."""
    defaults = Style()
    if isinstance(element, FILLED_TYPES):
        return Style(
            stroke_color=element.stroke_color,
            background_color=element.background_color,
            stroke_width=element.stroke_width,
        )
    if isinstance(element, (LineElement, ArrowElement, PencilElement)):
        return Style(stroke_color=element.stroke_color, stroke_width=element.stroke_width)
    if isinstance(element, TextElement):
        return Style(
            stroke_color=element.stroke_color,
            stroke_width=defaults.stroke_width,
            font_size=element.font_size,
            font_family=element.font_family,
        )
    raise UnrecognisedTypeError(type(element).__name__)


__all__ = [
    "Tool",
    "Style",
    "Point",
    "LineElement",
    "RectangleElement",
    "CircleElement",
    "DiamondElement",
    "ArrowElement",
    "PencilElement",
    "TextElement",
    "Element",
    "SHAPE_TYPES",
    "FILLED_TYPES",
    "ELEMENT_TYPES",
    "ELEMENT_CLASSES",
    "element_style",
]
