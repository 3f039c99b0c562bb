"""Render payload primitives.

A payload is the renderer-facing description of a shape element: a tuple of
simple primitives with their stroke/fill attached. Payloads are derived from
an element's geometry and style and are never persisted.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple, Union

Point = Tuple[float, float]


@dataclass(frozen=True)
class PrimitiveStyle:
    stroke: str
    stroke_width: float
    fill: Optional[str] = None


@dataclass(frozen=True)
class LinePrimitive:
    x1: float
    y1: float
    x2: float
    y2: float
    style: PrimitiveStyle


@dataclass(frozen=True)
class RectanglePrimitive:
    """Axis-aligned rectangle; ``width``/``height`` may be negative while dragging."""

    x: float
    y: float
    width: float
    height: float
    style: PrimitiveStyle


@dataclass(frozen=True)
class CirclePrimitive:
    cx: float
    cy: float
    diameter: float
    style: PrimitiveStyle


@dataclass(frozen=True)
class PolygonPrimitive:
    points: Tuple[Point, ...]
    style: PrimitiveStyle


Primitive = Union[LinePrimitive, RectanglePrimitive, CirclePrimitive, PolygonPrimitive]
Payload = Tuple[Primitive, ...]

EMPTY_PAYLOAD: Payload = ()


__all__ = [
    "Point",
    "PrimitiveStyle",
    "LinePrimitive",
    "RectanglePrimitive",
    "CirclePrimitive",
    "PolygonPrimitive",
    "Primitive",
    "Payload",
    "EMPTY_PAYLOAD",
]
