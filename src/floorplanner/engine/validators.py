"""Structural validation of plans.

These checks verify the invariants every store operation must preserve:
the plan has floors, the current floor exists, entity ids are unique and
every door and window references a room on its own floor. Polygon
validity is reported separately because degenerate polygons are allowed.
"""

from __future__ import annotations

import logging
from typing import List, Set

from ..core.model import Floor, Plan, Room
from ..geom.polygon import is_simple_polygon

LOGGER = logging.getLogger(__name__)


class InvalidPlan(Exception):
    """Raised when a plan violates a structural invariant."""

    pass


def validate_floors(plan: Plan) -> bool:
    """Validate that the plan has floors and that the current floor is one of them."""
    if not plan.floors:
        return False
    return any(floor.id == plan.current_floor_id for floor in plan.floors)


def validate_unique_ids(plan: Plan) -> bool:
    """Validate that floor and entity ids are unique across the whole plan."""
    seen: Set[str] = set()
    for floor in plan.floors:
        ids = [floor.id]
        for collection in (
            floor.rooms,
            floor.doors,
            floor.windows,
            floor.furniture,
            floor.annotations,
            floor.measurements,
        ):
            ids.extend(entity.id for entity in collection)
        for entity_id in ids:
            if entity_id in seen:
                return False
            seen.add(entity_id)
    return True


def validate_openings(floor: Floor) -> bool:
    """Validate that every door and window references a room on the same floor."""
    room_ids = {room.id for room in floor.rooms}
    return all(opening.room_id in room_ids for opening in (*floor.doors, *floor.windows))


def find_degenerate_rooms(plan: Plan) -> List[Room]:
    """List polygon rooms whose points do not form a simple polygon.

    Such rooms are allowed but their area is meaningless (0 or a wrong
    shoelace result).
    """
    degenerate = []
    for floor in plan.floors:
        for room in floor.rooms:
            if not room.is_rectangle and not is_simple_polygon(room.points or ()):
                degenerate.append(room)
    return degenerate


def validate_all(plan: Plan) -> bool:
    """Run all structural validators on the plan.

    Returns:
        True if all validations pass.

    Raises:
        InvalidPlan: If any validation fails, with details about the failure.
    """
    if not validate_floors(plan):
        raise InvalidPlan(
            f"Floor validation failed: current floor '{plan.current_floor_id}' not in plan"
        )

    if not validate_unique_ids(plan):
        raise InvalidPlan("Id validation failed: duplicate ids in plan")

    for floor in plan.floors:
        if not validate_openings(floor):
            raise InvalidPlan(
                f"Opening validation failed: floor '{floor.name}' has doors or "
                "windows referencing missing rooms"
            )

    for room in find_degenerate_rooms(plan):
        LOGGER.warning("Room '%s' (%s) has a degenerate polygon", room.label, room.id)

    return True
