"""Sketchboard: a small hand-drawn style whiteboard.

The core (elements, geometry, history, interaction, interchange, render) has
no Qt dependency; the desktop front-end lives in ``sketchboard.qt``.
"""
from sketchboard.elements import (
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
)
from sketchboard.errors import (
    ConfigError,
    InterchangeError,
    MalformedElementError,
    SketchboardError,
    UnrecognisedTypeError,
)
from sketchboard.geometry import create_element, element_at, normalize
from sketchboard.history import History
from sketchboard.interaction import Action, InteractionStateMachine

__version__ = "0.1.0"

__all__ = [
    "ArrowElement",
    "CircleElement",
    "DiamondElement",
    "Element",
    "LineElement",
    "PencilElement",
    "RectangleElement",
    "Style",
    "TextElement",
    "Tool",
    "ConfigError",
    "InterchangeError",
    "MalformedElementError",
    "SketchboardError",
    "UnrecognisedTypeError",
    "create_element",
    "element_at",
    "normalize",
    "History",
    "Action",
    "InteractionStateMachine",
]
