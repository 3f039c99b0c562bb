"""Tests for the Qt-agnostic renderer."""

import pytest

from sketchboard.elements import PencilElement, TextElement, Tool
from sketchboard.errors import MalformedElementError, UnrecognisedTypeError
from sketchboard.geometry import create_element
from sketchboard.render import draw_element, draw_scene, stroke_outline, svg_path_from_stroke


def test_line_draws_one_segment(painter, style):
    draw_element(painter, create_element(0, 0, 0, 10, 10, Tool.LINE, style))
    assert painter.calls == [("line", (0, 0, 10, 10, "#112233", 3.0))]


def test_arrow_draws_shaft_and_two_wings(painter):
    draw_element(painter, create_element(0, 0, 0, 100, 0, Tool.ARROW))
    assert painter.names() == ["line", "line", "line"]


def test_rectangle_is_filled(painter, style):
    draw_element(painter, create_element(0, 0, 0, 40, 30, Tool.RECTANGLE, style))
    ((name, args),) = painter.calls
    assert name == "rectangle"
    assert args == (0, 0, 40, 30, "#112233", 3.0, "#ddeeff")


def test_circle_becomes_ellipse_with_equal_radii(painter):
    draw_element(painter, create_element(0, 0, 0, 3, 4, Tool.CIRCLE))
    ((name, (cx, cy, rx, ry, *_rest)),) = painter.calls
    assert name == "ellipse"
    assert (cx, cy) == (0, 0)
    assert rx == ry == pytest.approx(5.0)


def test_diamond_is_a_polygon(painter):
    draw_element(painter, create_element(0, 0, 0, 10, 20, Tool.DIAMOND))
    ((name, args),) = painter.calls
    assert name == "polygon"
    assert len(args[0]) == 4


def test_text_uses_font_attributes(painter):
    text = TextElement(id=0, x1=10.0, y1=30.0, x2=10.0, y2=30.0, text="hi", font_size=16.0, font_family="Mono")
    draw_element(painter, text)
    assert painter.calls == [("text", ("hi", 10.0, 30.0, 16.0, "#000000", "Mono"))]


def test_empty_text_draws_nothing(painter):
    draw_element(painter, create_element(0, 10, 30, 10, 30, Tool.TEXT))
    assert painter.calls == []


def test_pencil_fills_outline_from_outliner(painter):
    pencil = PencilElement(id=0, points=((0.0, 0.0), (10.0, 0.0)), stroke_color="#ff0000", stroke_width=1.0)
    seen = []

    def outliner(points, size):
        seen.append((tuple(points), size))
        return [(0, 0), (1, 0), (1, 1)]

    draw_element(painter, pencil, outliner=outliner)
    assert seen == [(((0.0, 0.0), (10.0, 0.0)), 4.0)]
    assert painter.calls == [("fill_path", ([(0.0, 0.0), (1.0, 0.0), (1.0, 1.0)], "#ff0000"))]


def test_pencil_outline_points_must_be_pairs(painter):
    pencil = PencilElement(id=0, points=((0.0, 0.0), (10.0, 0.0)))
    with pytest.raises(MalformedElementError):
        draw_element(painter, pencil, outliner=lambda points, size: [(0, 0, 0)])


def test_pencil_without_points_is_malformed(painter):
    with pytest.raises(MalformedElementError):
        draw_element(painter, PencilElement(id=0, points=()))


def test_unknown_element_is_rejected(painter):
    with pytest.raises(UnrecognisedTypeError):
        draw_element(painter, object())


def test_draw_scene_keeps_list_order(painter):
    scene = (
        create_element(0, 0, 0, 10, 10, Tool.RECTANGLE),
        create_element(1, 0, 0, 10, 10, Tool.LINE),
    )
    draw_scene(painter, scene)
    assert painter.names() == ["rectangle", "line"]


def test_stroke_outline_offsets_both_sides():
    outline = stroke_outline([(0.0, 0.0), (10.0, 0.0)], 4.0)
    assert outline == [(0.0, 2.0), (10.0, 2.0), (10.0, -2.0), (0.0, -2.0)]


def test_stroke_outline_of_a_dot_is_round():
    outline = stroke_outline([(5.0, 5.0), (5.0, 5.0)], 4.0)
    assert len(outline) == 16
    for x, y in outline:
        assert ((x - 5.0) ** 2 + (y - 5.0) ** 2) ** 0.5 == pytest.approx(2.0)


def test_svg_path_from_stroke():
    assert svg_path_from_stroke([(0, 0), (10, 0), (10, 10)]) == "M 0 0 Q 0 0 5 0 10 0 10 5 10 10 5 5 Z"
    assert svg_path_from_stroke([(0.5, 0), (1, 0)]) == "M 0.5 0 Q 0.5 0 0.75 0 1 0 0.75 0 Z"
    assert svg_path_from_stroke([]) == ""
