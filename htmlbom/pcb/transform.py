"""Coordinate transformation utilities."""
import math
from typing import Iterable

from .models import Point


def rotate_point(x: float, y: float, angle_deg: float) -> tuple[float, float]:
    """
    Rotate a point around the origin by the given angle.

    Args:
        x: X coordinate
        y: Y coordinate
        angle_deg: Rotation angle in degrees (counterclockwise positive)

    Returns:
        Tuple of (rotated_x, rotated_y)
    """
    if angle_deg == 0:
        return x, y

    angle_rad = math.radians(angle_deg)
    cos_a = math.cos(angle_rad)
    sin_a = math.sin(angle_rad)

    return x * cos_a - y * sin_a, x * sin_a + y * cos_a


def footprint_to_board(x: float, y: float, fp_pos: Point, fp_angle: float) -> Point:
    """
    Transform a footprint-relative point to board coordinates.

    KiCad rotates footprints clockwise in board (y-down) coordinates, so the
    offset is rotated by the negated footprint angle.
    """
    rx, ry = rotate_point(x, y, -fp_angle)
    return fp_pos[0] + rx, fp_pos[1] + ry


def bounding_box(points: Iterable[Point]) -> tuple[Point, Point] | None:
    """(min corner, max corner) of the points, or None when there are none."""
    xs: list[float] = []
    ys: list[float] = []
    for x, y in points:
        xs.append(x)
        ys.append(y)
    if not xs:
        return None
    return (min(xs), min(ys)), (max(xs), max(ys))
