"""Tests for hit-testing, normalization and shape derivation."""

import math

import pytest

from sketchboard.elements import (
    CircleElement,
    LineElement,
    PencilElement,
    RectangleElement,
    Style,
    TextElement,
    Tool,
)
from sketchboard.errors import MalformedElementError, UnrecognisedTypeError
from sketchboard.geometry import (
    BOTTOM_RIGHT,
    END,
    INSIDE,
    START,
    TOP_LEFT,
    TOP_RIGHT,
    arrow_wings,
    bounding_box_hit,
    classify_hit,
    create_element,
    cursor_for_position,
    derive_shape,
    diamond_vertices,
    element_at,
    normalize,
    resize_corner,
    update_geometry,
)
from sketchboard.payload import CirclePrimitive, LinePrimitive, PolygonPrimitive, RectanglePrimitive

DRAWN_TOOLS = [Tool.LINE, Tool.RECTANGLE, Tool.CIRCLE, Tool.DIAMOND, Tool.ARROW, Tool.PENCIL, Tool.TEXT]


@pytest.mark.parametrize("tool", DRAWN_TOOLS)
def test_normalize_is_idempotent(tool):
    element = create_element(0, 50, 80, 10, 20, tool)
    once = normalize(element)
    assert normalize(once) == once


def test_rectangle_normalization_orders_corners():
    rect = create_element(0, 50, 80, 10, 20, Tool.RECTANGLE)
    out = normalize(rect)
    assert (out.x1, out.y1, out.x2, out.y2) == (10, 20, 50, 80)
    (primitive,) = out.payload
    assert isinstance(primitive, RectanglePrimitive)
    assert (primitive.width, primitive.height) == (40, 60)


def test_line_normalization_orders_by_x_then_y():
    line = normalize(create_element(0, 10, 0, 0, 0, Tool.LINE))
    assert (line.x1, line.y1, line.x2, line.y2) == (0, 0, 10, 0)

    vertical = normalize(create_element(1, 5, 10, 5, 0, Tool.LINE))
    assert (vertical.x1, vertical.y1, vertical.x2, vertical.y2) == (5, 0, 5, 10)


def test_normalize_leaves_ordered_line_untouched():
    line = create_element(0, 0, 0, 10, 10, Tool.LINE)
    assert normalize(line) is line


def test_line_hit_test():
    line = create_element(0, 0, 0, 10, 10, Tool.LINE)
    assert classify_hit((5, 5), line) == INSIDE
    assert classify_hit((100, 100), line) is None


def test_line_endpoints_are_handles():
    line = create_element(0, 0, 0, 10, 10, Tool.LINE)
    assert classify_hit((1, 1), line) == START
    assert classify_hit((9, 11), line) == END


def test_rectangle_corners_and_inside():
    rect = create_element(0, 0, 0, 100, 50, Tool.RECTANGLE)
    assert classify_hit((2, 2), rect) == TOP_LEFT
    assert classify_hit((98, 2), rect) == TOP_RIGHT
    assert classify_hit((99, 49), rect) == BOTTOM_RIGHT
    assert classify_hit((50, 25), rect) == INSIDE
    assert classify_hit((150, 25), rect) is None


def test_pencil_hit_follows_segments():
    pencil = PencilElement(id=0, points=((0.0, 0.0), (10.0, 0.0), (20.0, 0.0)))
    assert classify_hit((15, 1), pencil) == INSIDE
    assert classify_hit((50, 50), pencil) is None


def test_pencil_without_points_is_malformed():
    with pytest.raises(MalformedElementError):
        classify_hit((0, 0), PencilElement(id=0, points=()))


def test_classify_hit_rejects_unhandled_variants():
    circle = create_element(0, 0, 0, 3, 4, Tool.CIRCLE)
    with pytest.raises(UnrecognisedTypeError):
        classify_hit((0, 0), circle)


def test_element_at_returns_first_created_match():
    below = create_element(0, 0, 0, 100, 100, Tool.RECTANGLE)
    above = create_element(1, 10, 10, 50, 50, Tool.RECTANGLE)
    hit = element_at((20, 20), (below, above))
    assert hit is not None
    assert hit.element.id == 0
    assert hit.position == INSIDE


def test_element_at_misses():
    rect = create_element(0, 0, 0, 10, 10, Tool.RECTANGLE)
    assert element_at((500, 500), (rect,)) is None


def test_circle_bounding_box_hit():
    circle = create_element(0, 0, 0, 10, 0, Tool.CIRCLE)
    assert bounding_box_hit((10, 0), circle) == END
    assert bounding_box_hit((3, 3), circle) == INSIDE
    assert bounding_box_hit((20, 20), circle) is None


def test_diamond_corners_follow_stored_coordinates():
    diamond = create_element(0, 40, 40, 0, 0, Tool.DIAMOND)
    # (x1, y1) is the "topLeft" handle even when it is the lower right corner
    assert bounding_box_hit((40, 40), diamond) == TOP_LEFT
    assert bounding_box_hit((20, 20), diamond) == INSIDE


def test_text_is_hit_inside_its_glyph_box():
    text = TextElement(id=0, x1=0.0, y1=20.0, x2=0.0, y2=20.0, text="hi", font_size=20.0)
    assert bounding_box_hit((5, 10), text) == INSIDE
    assert bounding_box_hit((5, 30), text) is None


def test_resize_bottom_right():
    assert resize_corner((20, 20), BOTTOM_RIGHT, (0, 0, 10, 10)) == (0, 0, 20, 20)


def test_resize_top_left():
    assert resize_corner((-5, -5), TOP_LEFT, (0, 0, 10, 10)) == (-5, -5, 10, 10)


def test_resize_unknown_handle_is_noop():
    assert resize_corner((99, 99), "middle", (0, 0, 10, 10)) == (0, 0, 10, 10)
    assert resize_corner((99, 99), None, (0, 0, 10, 10)) == (0, 0, 10, 10)


def test_circle_derivation_uses_distance_as_radius():
    (primitive,) = derive_shape(Tool.CIRCLE, 0, 0, 3, 4, Style())
    assert isinstance(primitive, CirclePrimitive)
    assert primitive.diameter == pytest.approx(10.0)


def test_arrow_derivation_draws_shaft_and_wings():
    payload = derive_shape(Tool.ARROW, 0, 0, 100, 0, Style())
    assert len(payload) == 3
    assert all(isinstance(p, LinePrimitive) for p in payload)
    shaft = payload[0]
    assert (shaft.x1, shaft.y1, shaft.x2, shaft.y2) == (0, 0, 100, 0)
    (ax, ay), (bx, by) = arrow_wings(0, 0, 100, 0)
    assert ax == pytest.approx(100 - 20 * math.cos(math.pi / 6))
    assert ay == pytest.approx(10.0)
    assert by == pytest.approx(-10.0)


def test_diamond_derivation():
    (primitive,) = derive_shape(Tool.DIAMOND, 0, 0, 10, 20, Style())
    assert isinstance(primitive, PolygonPrimitive)
    assert primitive.points == diamond_vertices(0, 0, 10, 20) == ((5, 0), (10, 10), (5, 20), (0, 10))


def test_derive_shape_rejects_unknown_tool():
    with pytest.raises(UnrecognisedTypeError):
        derive_shape("hexagon", 0, 0, 1, 1, Style())


def test_create_element_carries_style(style):
    rect = create_element(3, 0, 0, 10, 10, Tool.RECTANGLE, style)
    assert isinstance(rect, RectangleElement)
    assert rect.id == 3
    assert rect.stroke_color == "#112233"
    assert rect.background_color == "#ddeeff"
    assert rect.payload[0].style.fill == "#ddeeff"


def test_create_element_rejects_selection_tool():
    with pytest.raises(UnrecognisedTypeError):
        create_element(0, 0, 0, 1, 1, Tool.SELECTION)


def test_update_geometry_rebuilds_payload(style):
    line = create_element(0, 0, 0, 10, 10, Tool.LINE, style)
    moved = update_geometry(line, 5, 5, 15, 15)
    assert isinstance(moved, LineElement)
    assert moved.stroke_color == style.stroke_color
    assert moved.payload[0].x2 == 15


def test_update_geometry_appends_pencil_point():
    pencil = create_element(0, 1, 2, 1, 2, Tool.PENCIL)
    grown = update_geometry(pencil, 0, 0, 3, 4)
    assert grown.points == ((1, 2), (3, 4))


def test_circle_keeps_its_class_after_update():
    circle = create_element(0, 0, 0, 1, 0, Tool.CIRCLE)
    assert isinstance(update_geometry(circle, 0, 0, 2, 0), CircleElement)


def test_cursor_for_position():
    assert cursor_for_position(TOP_LEFT) == "nwse-resize"
    assert cursor_for_position(TOP_RIGHT) == "nesw-resize"
    assert cursor_for_position(INSIDE) == "move"
    assert cursor_for_position(None) == "default"
