"""JSON interchange format for drawings.

A drawing is an ordered list of element records. Render payloads are never
written; they are derived again when a drawing is loaded.
"""
from __future__ import annotations

import json
import logging
from dataclasses import replace
from typing import Any, Iterable, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from sketchboard.elements import (
    FILLED_TYPES,
    Element,
    PencilElement,
    Style,
    TextElement,
    Tool,
    element_style,
)
from sketchboard.errors import InterchangeError
from sketchboard.geometry import create_element
from sketchboard.store import Snapshot

logger = logging.getLogger(__name__)

ElementTypeLiteral = Literal["line", "rectangle", "circle", "diamond", "arrow", "pencil", "text"]


class PointRecord(BaseModel):
    x: float
    y: float


class ElementRecord(BaseModel):
    """One element as it appears on the wire (camelCase keys)."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: int = Field(..., ge=0, description="Identifier, unique within a drawing.")
    type: ElementTypeLiteral = Field(..., description="Element kind.")
    x1: float
    y1: float
    x2: float
    y2: float
    points: Optional[List[PointRecord]] = Field(None, description="Freehand samples, pencil only.")
    text: Optional[str] = None
    stroke_color: Optional[str] = Field(None, alias="strokeColor")
    background_color: Optional[str] = Field(None, alias="backgroundColor")
    stroke_width: Optional[float] = Field(None, alias="strokeWidth", gt=0.0)
    font_size: Optional[float] = Field(None, alias="fontSize", gt=0.0)
    font_family: Optional[str] = Field(None, alias="fontFamily")

    @field_validator("type", mode="before")
    @classmethod
    def _lower_type(cls, value: Any) -> Any:
        return value.lower() if isinstance(value, str) else value


# ---- Export --------------------------------------------------------------


def _record_for(element: Element) -> ElementRecord:
    style = element_style(element)
    if isinstance(element, PencilElement):
        # Freehand strokes carry their geometry in points only.
        return ElementRecord(
            id=element.id,
            type=element.tool.value,
            x1=0.0,
            y1=0.0,
            x2=0.0,
            y2=0.0,
            points=[PointRecord(x=x, y=y) for x, y in element.points],
            stroke_color=style.stroke_color,
            stroke_width=style.stroke_width,
        )
    record = ElementRecord(
        id=element.id,
        type=element.tool.value,
        x1=element.x1,
        y1=element.y1,
        x2=element.x2,
        y2=element.y2,
        stroke_color=style.stroke_color,
    )
    if isinstance(element, TextElement):
        record.text = element.text
        record.font_size = element.font_size
        record.font_family = element.font_family
    else:
        record.stroke_width = style.stroke_width
        if isinstance(element, FILLED_TYPES):
            record.background_color = style.background_color
    return record


def to_records(snapshot: Iterable[Element]) -> List[dict]:
    return [_record_for(element).model_dump(by_alias=True, exclude_none=True) for element in snapshot]


def dumps(snapshot: Iterable[Element], indent: Optional[int] = 2) -> str:
    return json.dumps(to_records(snapshot), indent=indent)


# ---- Import --------------------------------------------------------------


def _element_from_record(record: ElementRecord, style: Style) -> Element:
    tool = Tool.coerce(record.type)
    resolved = Style(
        stroke_color=record.stroke_color or style.stroke_color,
        background_color=record.background_color or style.background_color,
        stroke_width=record.stroke_width if record.stroke_width is not None else style.stroke_width,
        font_size=record.font_size if record.font_size is not None else style.font_size,
        font_family=record.font_family or style.font_family,
    )
    if tool is Tool.PENCIL:
        if not record.points:
            logger.warning("Rejected drawing: pencil %d has no points", record.id)
            raise InterchangeError(f"Pencil element {record.id} has no points")
        return PencilElement(
            id=record.id,
            points=tuple((p.x, p.y) for p in record.points),
            stroke_color=resolved.stroke_color,
            stroke_width=resolved.stroke_width,
        )
    element = create_element(record.id, record.x1, record.y1, record.x2, record.y2, tool, resolved)
    if isinstance(element, TextElement) and record.text:
        element = replace(element, text=record.text)
    return element


def from_records(records: Any, style: Optional[Style] = None) -> Snapshot:
    """Validate ``records`` and build a snapshot from them.

    Either every record is accepted or ``InterchangeError`` is raised and
    nothing is returned.
    """
    if not isinstance(records, list):
        logger.warning("Rejected drawing: expected a list of elements, got %s", type(records).__name__)
        raise InterchangeError("A drawing must be a JSON list of elements")
    style = style or Style()
    elements: List[Element] = []
    seen = set()
    for position, raw in enumerate(records):
        try:
            record = ElementRecord.model_validate(raw)
        except ValidationError as exc:
            logger.warning("Rejected drawing: element %d is invalid", position)
            raise InterchangeError(f"Element {position} is invalid: {exc}") from exc
        if record.id in seen:
            logger.warning("Rejected drawing: duplicate id %d", record.id)
            raise InterchangeError(f"Duplicate element id {record.id}")
        seen.add(record.id)
        elements.append(_element_from_record(record, style))
    return tuple(elements)


def loads(text: str, style: Optional[Style] = None) -> Snapshot:
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        logger.warning("Rejected drawing: not valid JSON (%s)", exc)
        raise InterchangeError(f"Could not parse drawing: {exc}") from exc
    return from_records(data, style=style)


__all__ = [
    "PointRecord",
    "ElementRecord",
    "to_records",
    "dumps",
    "from_records",
    "loads",
]
