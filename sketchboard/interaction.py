"""Pointer and keyboard interaction for the sketchboard canvas.

``InteractionStateMachine`` turns pointer/keyboard events into history
commits. It never mutates elements: every change is a new snapshot pushed to
``History``, either as a new entry (a commit) or over the current entry while
a drag is in progress.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Callable, Optional, Tuple

from sketchboard import store
from sketchboard.elements import Element, PencilElement, Style, TextElement, Tool
from sketchboard.geometry import (
    INSIDE,
    adjustment_required,
    create_element,
    cursor_for_position,
    drag_far_corner,
    element_at,
    element_box,
    normalize,
    resize_corner,
    translate_points,
    update_geometry,
)
from sketchboard.history import History
from sketchboard.payload import Point
from sketchboard.store import IdAllocator, Snapshot

logger = logging.getLogger(__name__)

TextProvider = Callable[[], Optional[str]]
ExportHandler = Callable[[Snapshot], None]


class Action(str, Enum):
    IDLE = "idle"
    DRAWING = "drawing"
    MOVING = "moving"
    RESIZING = "resizing"


@dataclass(frozen=True)
class SelectionContext:
    """Selected element as captured at pointer-down.

    Pencils keep one offset per point; every other element keeps a single
    offset from its (x1, y1) corner.
    """

    element: Element
    position: Optional[str] = None
    offset: Point = (0.0, 0.0)
    offsets: Tuple[Point, ...] = ()

    @property
    def element_id(self) -> int:
        return self.element.id


class InteractionStateMachine:
    """Idle/Drawing/Moving/Resizing state machine driving element edits."""

    def __init__(
        self,
        history: Optional[History] = None,
        *,
        tool: Tool | str = Tool.LINE,
        style: Optional[Style] = None,
        text_provider: Optional[TextProvider] = None,
        export_handler: Optional[ExportHandler] = None,
    ):
        self.history = history if history is not None else History()
        self.style = style or Style()
        self.text_provider = text_provider
        self.export_handler = export_handler
        self.action = Action.IDLE
        self.selection: Optional[SelectionContext] = None
        self.pending_text: Optional[int] = None
        self._tool = Tool.coerce(tool)
        self._ids = IdAllocator()
        self._ids.observe(self.history.current)
        self._entry_open = False
        self._pending_text_index: Optional[int] = None

    # ------------------------------------------------------------------
    # Accessors
    @property
    def elements(self) -> Snapshot:
        return self.history.current

    @property
    def tool(self) -> Tool:
        return self._tool

    def set_tool(self, tool: Tool | str) -> None:
        self._tool = Tool.coerce(tool)

    def selected_element(self) -> Optional[Element]:
        if self.selection is None:
            return None
        return store.find(self.elements, self.selection.element_id)

    def cursor_at(self, x: float, y: float) -> str:
        """Cursor name to show while hovering with the selection tool."""
        if self._tool is not Tool.SELECTION:
            return "default"
        hit = element_at((float(x), float(y)), self.elements)
        return cursor_for_position(hit.position if hit else None)

    # ------------------------------------------------------------------
    # Pointer events
    def pointer_down(self, x: float, y: float) -> None:
        point = (float(x), float(y))
        if self._tool is Tool.SELECTION:
            self._begin_selection(point)
        elif self._tool is Tool.TEXT:
            self._begin_text(point)
        else:
            self._begin_drawing(point)

    def pointer_move(self, x: float, y: float) -> None:
        point = (float(x), float(y))
        if self.action is Action.DRAWING:
            self._draw_to(point)
        elif self.action is Action.MOVING:
            self._move_to(point)
        elif self.action is Action.RESIZING:
            self._resize_to(point)

    def pointer_up(self) -> None:
        if self.selection is not None and self.action in (Action.DRAWING, Action.RESIZING):
            current = self.selected_element()
            if current is not None and adjustment_required(current.tool):
                adjusted = normalize(current)
                if adjusted != current:
                    self._write(adjusted)
        if self.action is not Action.IDLE:
            logger.debug("%s -> idle", self.action.value)
        self.action = Action.IDLE
        self._entry_open = False

    def _begin_selection(self, point: Point) -> None:
        hit = element_at(point, self.elements)
        if hit is None:
            self.selection = None
            self.action = Action.IDLE
            return
        element = hit.element
        x, y = point
        if isinstance(element, PencilElement):
            offsets = tuple((x - px, y - py) for px, py in element.points)
            self.selection = SelectionContext(element=element, position=hit.position, offsets=offsets)
        else:
            offset = (x - element.x1, y - element.y1)
            self.selection = SelectionContext(element=element, position=hit.position, offset=offset)
        self.action = Action.MOVING if hit.position == INSIDE else Action.RESIZING
        # The history entry is opened lazily by the first move.
        self._entry_open = False
        logger.debug("Selected element %d at %s -> %s", element.id, hit.position, self.action.value)

    def _begin_drawing(self, point: Point) -> None:
        x, y = point
        element = create_element(self._ids.allocate(), x, y, x, y, self._tool, self.style)
        self.history.push(store.append(self.elements, element))
        self.selection = SelectionContext(element=element)
        self.action = Action.DRAWING
        self._entry_open = True
        logger.debug("Drawing %s element %d", self._tool.value, element.id)

    def _begin_text(self, point: Point) -> None:
        x, y = point
        element = create_element(self._ids.allocate(), x, y, x, y, Tool.TEXT, self.style)
        self.history.push(store.append(self.elements, element))
        self.selection = SelectionContext(element=element)
        self.action = Action.IDLE
        self.pending_text = element.id
        self._pending_text_index = self.history.index
        if self.text_provider is not None:
            self.commit_text(self.text_provider())

    def _draw_to(self, point: Point) -> None:
        current = self.selected_element()
        if current is None:
            return
        self._write(drag_far_corner(current, point))

    def _move_to(self, point: Point) -> None:
        ctx = self.selection
        current = self.selected_element()
        if ctx is None or current is None:
            return
        if isinstance(current, PencilElement):
            moved = replace(current, points=translate_points(point, ctx.offsets))
        else:
            origin = ctx.element
            nx1 = point[0] - ctx.offset[0]
            ny1 = point[1] - ctx.offset[1]
            moved = update_geometry(
                current,
                nx1,
                ny1,
                nx1 + (origin.x2 - origin.x1),
                ny1 + (origin.y2 - origin.y1),
            )
        self._write(moved)

    def _resize_to(self, point: Point) -> None:
        ctx = self.selection
        current = self.selected_element()
        if ctx is None or current is None:
            return
        box = resize_corner(point, ctx.position, element_box(ctx.element))
        self._write(update_geometry(current, *box))

    def _write(self, element: Element) -> None:
        snapshot = store.replace(self.elements, element)
        if self._entry_open:
            self.history.push(snapshot, overwrite=True)
        else:
            self.history.push(snapshot)
            self._entry_open = True

    # ------------------------------------------------------------------
    # Text entry
    def commit_text(self, text: Optional[str]) -> bool:
        """Fill the pending text placeholder with ``text``.

        An empty answer leaves the empty placeholder in place.
        """
        element_id = self.pending_text
        index = self._pending_text_index
        self.pending_text = None
        self._pending_text_index = None
        if element_id is None or not text:
            return False
        current = store.find(self.elements, element_id)
        if not isinstance(current, TextElement):
            logger.debug("Text placeholder %s is gone, dropping entry", element_id)
            return False
        filled = replace(current, text=text)
        snapshot = store.replace(self.elements, filled)
        # Only fold into the placeholder's entry if nothing was committed since.
        self.history.push(snapshot, overwrite=self.history.index == index)
        if self.selection is not None and self.selection.element_id == element_id:
            self.selection = SelectionContext(element=filled)
        return True

    # ------------------------------------------------------------------
    # Commands
    def delete_selected(self) -> bool:
        if self.selection is None:
            return False
        element_id = self.selection.element_id
        snapshot = store.remove(self.elements, element_id)
        self.selection = None
        if len(snapshot) == len(self.elements):
            return False
        self.history.push(snapshot)
        logger.debug("Deleted element %d", element_id)
        return True

    def undo(self) -> bool:
        return self.history.undo()

    def redo(self) -> bool:
        return self.history.redo()

    def clear(self) -> bool:
        if not self.elements:
            return False
        self.history.push(())
        self.selection = None
        return True

    def load(self, snapshot: Snapshot) -> None:
        """Replace the drawing with ``snapshot`` as a single undoable step."""
        snapshot = tuple(snapshot)
        self.history.push(snapshot)
        self._ids.observe(snapshot)
        self.selection = None
        self.pending_text = None
        self.action = Action.IDLE
        logger.debug("Loaded %d elements", len(snapshot))

    def handle_key(self, key: str, ctrl: bool = False, shift: bool = False) -> bool:
        """Apply a keyboard shortcut; return True when the key triggered something.

        Ctrl+Z undoes, Ctrl+Shift+Z and Ctrl+Y redo, Ctrl+S exports and Delete
        removes the selected element.
        """
        name = key.lower()
        if ctrl:
            if name == "z":
                if shift:
                    self.redo()
                else:
                    self.undo()
                return True
            if name == "y":
                self.redo()
                return True
            if name == "s" and self.export_handler is not None:
                self.export_handler(self.elements)
                return True
            return False
        if name == "delete":
            return self.delete_selected()
        return False


__all__ = ["Action", "SelectionContext", "InteractionStateMachine"]
