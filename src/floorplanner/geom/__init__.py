"""Geometry utilities for floor plans.

This module provides area calculations, L-shape generation and the
edge/grid snapping used while dragging rooms.
"""

from .polygon import (
    calculate_room_area,
    distance,
    generate_l_shape_points,
    get_total_area,
    normalize_rotation,
    opening_position,
)
from .snap import find_snap_position, get_room_edges, snap_to_grid

__all__ = [
    "distance",
    "calculate_room_area",
    "get_total_area",
    "generate_l_shape_points",
    "normalize_rotation",
    "opening_position",
    "get_room_edges",
    "find_snap_position",
    "snap_to_grid",
]
