"""Tests for SVG path builders and coordinate transforms."""
import pytest

from htmlbom.pcb.paths import (
    arc_path, circle_from_three_points, circle_path, line_path, pad_shape_path,
    polygon_path, rect_path
)
from htmlbom.pcb.transform import bounding_box, footprint_to_board, rotate_point


def test_line_path():
    assert line_path((0.0, 0.0), (1.5, 2.25)) == "M 0 0 L 1.5 2.25"


def test_polygon_path():
    assert polygon_path([(0, 0), (1, 0), (1, 1)]) == "M 0 0 L 1 0 L 1 1 Z"
    assert polygon_path([(0, 0), (1, 0)], closed=False) == "M 0 0 L 1 0"
    assert polygon_path([]) == ""


def test_rect_path():
    assert rect_path((-1, -0.5), (1, 0.5)) == "M -1 -0.5 L 1 -0.5 L 1 0.5 L -1 0.5 Z"


def test_circle_path():
    assert circle_path((0.0, 0.0), 1.0) == "M -1 0 A 1 1 0 1 0 1 0 A 1 1 0 1 0 -1 0 Z"


def test_circle_from_three_points():
    cx, cy, r = circle_from_three_points((-1.0, 0.0), (0.0, 1.0), (1.0, 0.0))
    assert cx == pytest.approx(0.0)
    assert cy == pytest.approx(0.0)
    assert r == pytest.approx(1.0)
    assert circle_from_three_points((0, 0), (1, 1), (2, 2)) is None


def test_arc_path_direction():
    """Arcs bulging up (negative y) are clockwise on screen."""
    assert arc_path((0.0, 0.0), (1.0, -1.0), (2.0, 0.0)) == "M 0 0 A 1 1 0 0 1 2 0"
    assert arc_path((0.0, 0.0), (1.0, 1.0), (2.0, 0.0)) == "M 0 0 A 1 1 0 0 0 2 0"


def test_arc_path_large_arc():
    """An arc passing beyond the center spans more than half a circle."""
    path = arc_path((0.0, 0.0), (0.3, -1.9), (0.6, 0.0))
    assert " 0 1 1 " in path


def test_collinear_arc_is_a_line():
    assert arc_path((0, 0), (1, 0), (2, 0)) == "M 0 0 L 2 0"


def test_pad_shapes():
    assert pad_shape_path("rect", 2.0, 1.0) == rect_path((-1.0, -0.5), (1.0, 0.5))
    assert pad_shape_path("circle", 1.0, 1.0) == circle_path((0.0, 0.0), 0.5)
    assert pad_shape_path("trapezoid", 2.0, 1.0) == pad_shape_path("rect", 2.0, 1.0)
    assert "A 0.5 0.5 0 0 1" in pad_shape_path("oval", 2.0, 1.0)
    assert "A 0.25 0.25 0 0 1" in pad_shape_path("roundrect", 2.0, 1.0, 0.25)
    assert pad_shape_path("roundrect", 2.0, 1.0, 0.0) == pad_shape_path("rect", 2.0, 1.0)


def test_rotate_point():
    x, y = rotate_point(1.0, 0.0, 90.0)
    assert x == pytest.approx(0.0, abs=1e-9)
    assert y == pytest.approx(1.0)
    assert rotate_point(3.0, 4.0, 0) == (3.0, 4.0)


def test_footprint_to_board():
    """Footprint rotation is clockwise in board coordinates."""
    x, y = footprint_to_board(1.0, 0.0, (10.0, 20.0), 90.0)
    assert x == pytest.approx(10.0, abs=1e-9)
    assert y == pytest.approx(19.0)


def test_bounding_box():
    assert bounding_box([(1, 5), (-2, 3), (4, -1)]) == ((-2, -1), (4, 5))
    assert bounding_box([]) is None
