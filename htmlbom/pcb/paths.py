"""SVG path builders for board graphics and pad shapes."""
import math
from typing import Sequence

from .models import Point


def _fmt(value: float) -> str:
    # Trim trailing zeros to keep the payload small
    text = f"{value:.4f}".rstrip("0").rstrip(".")
    return "0" if text == "-0" else text


def _pt(point: Point) -> str:
    return f"{_fmt(point[0])} {_fmt(point[1])}"


def circle_from_three_points(
    start: Point, mid: Point, end: Point
) -> tuple[float, float, float] | None:
    """
    Calculate circle center and radius from three points.

    Returns (center_x, center_y, radius) or None if points are collinear.
    """
    (ax, ay), (bx, by), (cx, cy) = start, mid, end

    d = 2 * (ax * (by - cy) + bx * (cy - ay) + cx * (ay - by))
    if abs(d) < 1e-10:
        return None  # Points are collinear

    ux = ((ax*ax + ay*ay) * (by - cy) + (bx*bx + by*by) * (cy - ay) + (cx*cx + cy*cy) * (ay - by)) / d
    uy = ((ax*ax + ay*ay) * (cx - bx) + (bx*bx + by*by) * (ax - cx) + (cx*cx + cy*cy) * (bx - ax)) / d

    radius = math.hypot(ax - ux, ay - uy)
    return ux, uy, radius


def _side_of_chord(start: Point, end: Point, point: Point) -> float:
    return (point[0] - start[0]) * (end[1] - start[1]) - (point[1] - start[1]) * (end[0] - start[0])


def line_path(start: Point, end: Point) -> str:
    return f"M {_pt(start)} L {_pt(end)}"


def polygon_path(points: Sequence[Point], closed: bool = True) -> str:
    """Path through the points, closed with Z unless closed=False."""
    if not points:
        return ""
    parts = [f"M {_pt(points[0])}"]
    parts.extend(f"L {_pt(p)}" for p in points[1:])
    if closed:
        parts.append("Z")
    return " ".join(parts)


def arc_path(start: Point, mid: Point, end: Point) -> str:
    """
    Arc through start, mid and end.

    Falls back to a straight line when the points are collinear.
    """
    circle = circle_from_three_points(start, mid, end)
    if circle is None:
        return line_path(start, end)
    cx, cy, radius = circle

    # SVG y points down, so mid on the positive side of the chord means clockwise
    mid_side = _side_of_chord(start, end, mid)
    sweep = 1 if mid_side > 0 else 0

    # The arc spans more than half a circle when it bulges past the center
    center_side = _side_of_chord(start, end, (cx, cy))
    large_arc = 1 if center_side * mid_side > 0 else 0

    r = _fmt(radius)
    return f"M {_pt(start)} A {r} {r} 0 {large_arc} {sweep} {_pt(end)}"


def circle_path(center: Point, radius: float) -> str:
    """Full circle as two half arcs."""
    cx, cy = center
    r = _fmt(radius)
    left = (cx - radius, cy)
    right = (cx + radius, cy)
    return f"M {_pt(left)} A {r} {r} 0 1 0 {_pt(right)} A {r} {r} 0 1 0 {_pt(left)} Z"


def rect_path(start: Point, end: Point) -> str:
    """Axis-aligned rectangle spanned by two corners."""
    (x1, y1), (x2, y2) = start, end
    return polygon_path([(x1, y1), (x2, y1), (x2, y2), (x1, y2)])


def roundrect_path(width: float, height: float, radius: float) -> str:
    """Rectangle centered at the origin with rounded corners."""
    w2, h2 = width / 2, height / 2
    r = min(radius, w2, h2)
    if r <= 0:
        return rect_path((-w2, -h2), (w2, h2))
    rs = _fmt(r)
    corner = f"A {rs} {rs} 0 0 1"
    return " ".join([
        f"M {_pt((-w2 + r, -h2))}",
        f"L {_pt((w2 - r, -h2))}",
        f"{corner} {_pt((w2, -h2 + r))}",
        f"L {_pt((w2, h2 - r))}",
        f"{corner} {_pt((w2 - r, h2))}",
        f"L {_pt((-w2 + r, h2))}",
        f"{corner} {_pt((-w2, h2 - r))}",
        f"L {_pt((-w2, -h2 + r))}",
        f"{corner} {_pt((-w2 + r, -h2))}",
        "Z",
    ])


def pad_shape_path(
    shape: str, width: float, height: float, roundrect_ratio: float = 0.0
) -> str:
    """
    Outline of a pad centered at the origin, unrotated.

    Args:
        shape: KiCad pad shape (circle, oval, roundrect, rect, ...)
        width: Pad width (mm)
        height: Pad height (mm)
        roundrect_ratio: Corner radius ratio for roundrect

    Returns:
        SVG path; unknown shapes are drawn as rectangles
    """
    if shape == "circle":
        return circle_path((0.0, 0.0), min(width, height) / 2)
    if shape == "oval":
        return roundrect_path(width, height, min(width, height) / 2)
    if shape == "roundrect":
        return roundrect_path(width, height, roundrect_ratio * min(width, height))
    return rect_path((-width / 2, -height / 2), (width / 2, height / 2))
