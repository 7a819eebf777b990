"""Edge-to-edge and grid snapping for rooms being dragged.

A dragged room snaps one of its edges onto a parallel edge of another
room on the same floor when the two lines are within a threshold and the
edges are near each other along their length. Only rectangular rooms take
part in edge snapping. Grid snapping is a separate pass applied by the
caller on top of the edge-snap result.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, replace
from typing import Iterable, List, Optional

from shapely.geometry import LineString
from shapely.geometry import Point as ShapelyPoint

from ..config import GRID_SIZE, SNAP_THRESHOLD, WALL_MARGIN
from ..core.model import Edge, Point, Room, WallSide
from .polygon import wall_fraction

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class SnapCandidate:
    """A corrected room position and the perpendicular distance it closes."""

    position: Point
    distance: float


@dataclass(frozen=True)
class WallHit:
    """The room wall nearest to a pointer position."""

    room: Room
    wall: WallSide
    fraction: float
    distance: float


def get_room_edges(room: Room) -> List[Edge]:
    """Get the four world-space edges of a rectangular room.

    Edges are returned as top, right, bottom, left. Polygon rooms are not
    decomposed and yield no edges.
    """
    if not room.is_rectangle:
        return []

    x, y = room.position.x, room.position.y
    w, h = room.size.width, room.size.height
    return [
        Edge(Point(x, y), Point(x + w, y), WallSide.TOP),
        Edge(Point(x + w, y), Point(x + w, y + h), WallSide.RIGHT),
        Edge(Point(x, y + h), Point(x + w, y + h), WallSide.BOTTOM),
        Edge(Point(x, y), Point(x, y + h), WallSide.LEFT),
    ]


def _span_gap(a_min: float, a_max: float, b_min: float, b_max: float) -> float:
    """Gap between two 1D spans, 0 when they overlap."""
    return max(0.0, a_min - b_max, b_min - a_max)


def check_edge_snap(
    room: Room, moving_edge: Edge, target_edge: Edge, threshold: float
) -> Optional[SnapCandidate]:
    """Test whether one edge of a moving room can snap onto a target edge.

    Args:
        room: The moving room at its candidate position.
        moving_edge: An edge of ``room``.
        target_edge: An edge of another room.
        threshold: Maximum perpendicular distance for a snap.

    Returns:
        The corrected room position, or None when the pair does not snap.
        Pairs that are already aligned (distance 0) need no correction and
        are not candidates.
    """
    horizontal = moving_edge.side.is_horizontal
    if horizontal != target_edge.side.is_horizontal:
        return None

    if horizontal:
        perp_delta = abs(moving_edge.start.y - target_edge.start.y)
        gap = _span_gap(
            moving_edge.start.x, moving_edge.end.x, target_edge.start.x, target_edge.end.x
        )
    else:
        perp_delta = abs(moving_edge.start.x - target_edge.start.x)
        gap = _span_gap(
            moving_edge.start.y, moving_edge.end.y, target_edge.start.y, target_edge.end.y
        )

    if perp_delta == 0 or perp_delta >= threshold or gap >= 2 * threshold:
        return None

    if horizontal:
        offset = room.size.height if moving_edge.side is WallSide.BOTTOM else 0
        position = Point(room.position.x, target_edge.start.y - offset)
    else:
        offset = room.size.width if moving_edge.side is WallSide.RIGHT else 0
        position = Point(target_edge.start.x - offset, room.position.y)

    return SnapCandidate(position=position, distance=perp_delta)


def find_snap_position(
    moving_room: Room, other_rooms: Iterable[Room], threshold: float = SNAP_THRESHOLD
) -> Optional[Point]:
    """Find the snapped position for a room being dragged.

    Every edge of the moving room is tested against every parallel edge of
    every other room; the candidate closing the smallest perpendicular
    distance wins, the first one found on exact ties.

    Args:
        moving_room: The room at its candidate (unsnapped) position.
        other_rooms: Rooms on the same floor; the moving room itself is skipped.
        threshold: Snap distance in feet.

    Returns:
        The corrected top-left position, or None when nothing is close enough.
    """
    moving_edges = get_room_edges(moving_room)
    if not moving_edges:
        return None

    best: Optional[SnapCandidate] = None
    for other in other_rooms:
        if other.id == moving_room.id:
            continue
        for moving_edge in moving_edges:
            for target_edge in get_room_edges(other):
                snap = check_edge_snap(moving_room, moving_edge, target_edge, threshold)
                if snap is not None and (best is None or snap.distance < best.distance):
                    best = snap

    if best is None:
        return None
    LOGGER.debug(
        "Room %s snaps to (%s, %s), delta %.3f",
        moving_room.id,
        best.position.x,
        best.position.y,
        best.distance,
    )
    return best.position


def snap_room(room: Room, position: Point, others: Iterable[Room], threshold: float) -> Point:
    """Edge-snap ``room`` as if it were dragged to ``position``."""
    candidate = replace(room, position=position)
    return find_snap_position(candidate, others, threshold) or position


def snap_to_grid(point: Point, grid_size: float = GRID_SIZE) -> Point:
    """Round both coordinates to the nearest multiple of ``grid_size``.

    Halves round up, so 12.5 on a 5 ft grid becomes 15.
    """
    return Point(
        math.floor(point.x / grid_size + 0.5) * grid_size,
        math.floor(point.y / grid_size + 0.5) * grid_size,
    )


def nearest_wall(
    rooms: Iterable[Room], point: Point, tolerance: float, margin: float = WALL_MARGIN
) -> Optional[WallHit]:
    """Find the rectangular room wall closest to ``point`` within ``tolerance``.

    Args:
        rooms: Candidate rooms.
        point: Pointer position in feet.
        tolerance: Maximum distance from the wall.
        margin: Margin used to clamp the fraction along the wall.

    Returns:
        WallHit for the closest wall, or None if none is within tolerance.
    """
    target = ShapelyPoint(point.x, point.y)
    best: Optional[WallHit] = None

    for room in rooms:
        for edge in get_room_edges(room):
            line = LineString([(edge.start.x, edge.start.y), (edge.end.x, edge.end.y)])
            dist = line.distance(target)
            if dist > tolerance or (best is not None and dist >= best.distance):
                continue
            best = WallHit(
                room=room,
                wall=edge.side,
                fraction=wall_fraction(room, edge.side, point, margin),
                distance=dist,
            )

    return best
