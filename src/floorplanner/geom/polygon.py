"""Polygon geometry utilities for room calculations.

This module provides the pure geometric functions behind the editor:
distances, room areas (shoelace formula for polygon rooms), L-shape
generation, rotation normalization and the placement of doors and
windows along room walls.
"""

from __future__ import annotations

import logging
import math
from typing import Iterable, Sequence

from shapely.geometry import LinearRing, Polygon

from ..config import DEFAULT_L_CUT_PCT, WALL_MARGIN
from ..core.model import Door, LShapeCorner, Point, Room, WallSide, Window

LOGGER = logging.getLogger(__name__)


def distance(p1: Point, p2: Point) -> float:
    """Calculate Euclidean distance between two points."""
    return math.sqrt((p2.x - p1.x) ** 2 + (p2.y - p1.y) ** 2)


def shoelace_area(points: Sequence[Point]) -> float:
    """Calculate the area enclosed by a closed point loop.

    Uses the shoelace formula over the loop (indices wrap around). The
    result is only meaningful for simple polygons; fewer than three points
    yield 0.

    Args:
        points: Ordered polygon vertices.

    Returns:
        Absolute enclosed area.
    """
    n = len(points)
    if n < 3:
        return 0.0

    total = 0.0
    for i in range(n):
        j = (i + 1) % n
        total += points[i].x * points[j].y
        total -= points[j].x * points[i].y
    return abs(total) / 2


def calculate_room_area(room: Room) -> float:
    """Calculate room area in square feet.

    Rectangle rooms use ``width * height``; polygon rooms use the shoelace
    formula over their points.
    """
    if room.is_rectangle:
        return room.size.width * room.size.height
    return shoelace_area(room.points or ())


def get_total_area(rooms: Iterable[Room]) -> float:
    """Sum of the areas of the given rooms."""
    return sum(calculate_room_area(room) for room in rooms)


def generate_l_shape_points(
    width: float,
    height: float,
    corner: LShapeCorner | str = LShapeCorner.BOTTOM_RIGHT,
    cut_width_pct: float = DEFAULT_L_CUT_PCT,
    cut_height_pct: float = DEFAULT_L_CUT_PCT,
) -> tuple[Point, ...]:
    """Generate a 6-vertex L-shaped polygon relative to (0, 0).

    The polygon is the ``width x height`` rectangle with a rectangular notch
    of ``(width * cut_width_pct / 100, height * cut_height_pct / 100)``
    removed from ``corner``. Unrecognized corners fall back to bottom-right.

    Args:
        width: Bounding width of the room.
        height: Bounding height of the room.
        corner: Which corner to cut away.
        cut_width_pct: Notch width as a percentage of ``width``.
        cut_height_pct: Notch height as a percentage of ``height``.

    Returns:
        Tuple of six points.
    """
    try:
        corner = LShapeCorner(corner)
    except ValueError:
        LOGGER.debug("Unknown L-shape corner %r, using bottom-right", corner)
        corner = LShapeCorner.BOTTOM_RIGHT

    cut_w = width * (cut_width_pct / 100)
    cut_h = height * (cut_height_pct / 100)

    if corner is LShapeCorner.BOTTOM_LEFT:
        coords = [
            (0, 0),
            (width, 0),
            (width, height),
            (cut_w, height),
            (cut_w, height - cut_h),
            (0, height - cut_h),
        ]
    elif corner is LShapeCorner.TOP_RIGHT:
        coords = [
            (0, 0),
            (width - cut_w, 0),
            (width - cut_w, cut_h),
            (width, cut_h),
            (width, height),
            (0, height),
        ]
    elif corner is LShapeCorner.TOP_LEFT:
        coords = [
            (cut_w, 0),
            (width, 0),
            (width, height),
            (0, height),
            (0, cut_h),
            (cut_w, cut_h),
        ]
    else:
        coords = [
            (0, 0),
            (width, 0),
            (width, height - cut_h),
            (width - cut_w, height - cut_h),
            (width - cut_w, height),
            (0, height),
        ]

    return tuple(Point(x, y) for x, y in coords)


def rectangle_points(width: float, height: float) -> tuple[Point, ...]:
    """Outline of a ``width x height`` rectangle relative to (0, 0), clockwise."""
    return (Point(0, 0), Point(width, 0), Point(width, height), Point(0, height))


def normalize_rotation(rotation: float) -> float:
    """Reduce an angle in degrees into ``[0, 360)``.

    Raises:
        ValueError: If the angle is infinite or NaN.
    """
    if not math.isfinite(rotation):
        raise ValueError(f"Rotation must be finite, got {rotation}")
    normalized = rotation % 360
    # A tiny negative input can round up to exactly 360.0
    if normalized >= 360:
        return 0.0
    return normalized


def opening_position(opening: Door | Window, room: Room) -> Point:
    """Get the world position of a door or window on its room's wall.

    The fractional ``position`` is linearly interpolated along the wall;
    values outside [0, 1] extrapolate past the wall corners.
    """
    x, y = room.position.x, room.position.y
    width, height = room.size.width, room.size.height
    t = opening.position

    if opening.wall is WallSide.TOP:
        return Point(x + width * t, y)
    if opening.wall is WallSide.BOTTOM:
        return Point(x + width * t, y + height)
    if opening.wall is WallSide.LEFT:
        return Point(x, y + height * t)
    return Point(x + width, y + height * t)


def wall_fraction(
    room: Room, wall: WallSide, point: Point, margin: float = WALL_MARGIN
) -> float:
    """Fraction of ``point`` along ``wall``, clamped to ``[margin, 1 - margin]``.

    Horizontal walls measure along x, vertical walls along y.
    """
    if wall.is_horizontal:
        raw = (point.x - room.position.x) / room.size.width
    else:
        raw = (point.y - room.position.y) / room.size.height
    return max(margin, min(1 - margin, raw))


def room_outline(room: Room) -> Polygon | None:
    """Build the world-space outline of a room as a Shapely polygon.

    Returns:
        Shapely Polygon, or None for polygon rooms with fewer than three points.
    """
    ox, oy = room.position.x, room.position.y
    if room.is_rectangle:
        local = rectangle_points(room.size.width, room.size.height)
    else:
        local = room.points or ()
        if len(local) < 3:
            return None
    return Polygon([(ox + p.x, oy + p.y) for p in local])


def is_simple_polygon(points: Sequence[Point]) -> bool:
    """Check that points form a simple (non-self-intersecting) closed loop."""
    if len(points) < 3:
        return False
    ring = LinearRing([(p.x, p.y) for p in points])
    return ring.is_simple and Polygon(ring).area > 0
