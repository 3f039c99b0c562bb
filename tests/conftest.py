"""Shared test fixtures."""

from __future__ import annotations

from typing import Iterable, List, Tuple

import pytest

from sketchboard.elements import Style
from sketchboard.interaction import InteractionStateMachine


class RecordingPainter:
    """Painter shim that remembers every call instead of drawing."""

    def __init__(self) -> None:
        self.calls: List[Tuple[str, tuple]] = []

    def line(self, *args) -> None:
        self.calls.append(("line", args))

    def rectangle(self, *args) -> None:
        self.calls.append(("rectangle", args))

    def ellipse(self, *args) -> None:
        self.calls.append(("ellipse", args))

    def polygon(self, *args) -> None:
        self.calls.append(("polygon", args))

    def fill_path(self, *args) -> None:
        self.calls.append(("fill_path", args))

    def text(self, *args) -> None:
        self.calls.append(("text", args))

    def names(self) -> List[str]:
        return [name for name, _ in self.calls]


def drag(machine: InteractionStateMachine, *points: Iterable[float]) -> None:
    """Press at the first point, move through the rest, release."""
    first, *rest = points
    machine.pointer_down(*first)
    for point in rest:
        machine.pointer_move(*point)
    machine.pointer_up()


@pytest.fixture
def style() -> Style:
    return Style(stroke_color="#112233", background_color="#ddeeff", stroke_width=3.0)


@pytest.fixture
def machine() -> InteractionStateMachine:
    return InteractionStateMachine()


@pytest.fixture
def painter() -> RecordingPainter:
    return RecordingPainter()
